"""CLI for loading a draft collection (or a single draft)."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace

from draftshelf.application.dto.load_dto import LoadCollectionRequest
from draftshelf.config.composition import (
    build_load_collection_use_case,
    build_load_document_use_case,
)
from draftshelf.config.logging import configure_logging
from draftshelf.config.settings import AppSettings
from draftshelf.domain.errors import DocumentError
from draftshelf.domain.models import Document
from draftshelf.domain.services.front_matter import render_document

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_INVALID = 2


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser("draftshelf-load")
    ap.add_argument("--root", default=settings.content_dir, help="Directory with drafts")
    ap.add_argument("--pattern", default=settings.pattern, help="Glob below --root")
    ap.add_argument("--path", help="Load a single file instead of a directory")
    ap.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=settings.strict,
        help="Fail files that have no front matter (--no-strict overrides DRAFTSHELF_STRICT)",
    )
    ap.add_argument("--default-layout", default=settings.default_layout)
    ap.add_argument("--workers", type=int, default=settings.workers)
    ap.add_argument("--json", action="store_true", help="Print documents as JSON lines")
    ap.add_argument(
        "--render", action="store_true", help="With --path: print the normalized file text"
    )
    return ap


def _print_document(doc: Document, as_json: bool) -> None:
    if as_json:
        print(json.dumps(doc.to_dict(), ensure_ascii=False))
    else:
        print(f"{doc.slug}\t{doc.layout}\t{doc.title}")


def _print_error(err: BaseException) -> None:
    print(f"[ERROR] {type(err).__name__}: {err}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    settings = AppSettings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings.log_level)

    settings = replace(settings, strict=args.strict, default_layout=args.default_layout)

    if args.path:
        uc_single = build_load_document_use_case(settings)
        try:
            doc = uc_single.execute(args.path)
        except (DocumentError, OSError, UnicodeDecodeError) as err:
            _print_error(err)
            return EXIT_FAILURES
        if args.render:
            sys.stdout.write(render_document(doc))
        else:
            _print_document(doc, args.json)
        return EXIT_OK

    if args.render:
        _print_error(ValueError("--render requires --path"))
        return EXIT_INVALID

    uc = build_load_collection_use_case(settings)
    result = uc.execute(
        LoadCollectionRequest(root=args.root, pattern=args.pattern, workers=args.workers)
    )
    if not result.ok or result.value is None:
        assert result.error is not None
        _print_error(result.error)
        return EXIT_INVALID

    report = result.value
    for doc in report.documents:
        _print_document(doc, args.json)
    for failure in report.failures:
        print(f"[ERROR] {failure.path}: {failure.reason}", file=sys.stderr)

    print(
        f"Load done: {len(report.documents)} documents, {len(report.failures)} failed",
        file=sys.stderr,
    )
    return EXIT_OK if report.ok else EXIT_FAILURES


if __name__ == "__main__":
    sys.exit(main())
