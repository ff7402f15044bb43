"""Front-matter parsing and rendering.

A source file may open with a block like

    ---
    layout: post
    title: "Monads"
    categories: swift
    ---
    <body>

The block is YAML read with ``yaml.BaseLoader`` so every scalar stays a
string; the body is everything after the closing delimiter line, untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

import yaml

from ..errors import MalformedFrontMatter, MissingRequiredField
from ..models import Document
from .slugs import derive_slug

OPEN_DELIMITER = "---"
CLOSE_DELIMITERS = ("---", "...")
BOM = "\ufeff"

# Keys written first (in this order) when a document is rendered back out.
LEADING_KEYS = ("layout", "title", "categories")

# Top-level `key: value` line whose value is a plain (unquoted, non-flow) scalar.
_PLAIN_LINE = re.compile(
    r"^(?P<key>[^\s#:'\"\[\]{}\-][^:]*?):[ \t]+(?P<value>[^\s\"'\[{|>&*!%@`#].*?)[ \t]*$"
)


def split_front_matter(text: str, source_path: str | None = None) -> tuple[str | None, str]:
    """Return ``(raw_block, body)``; ``raw_block`` is None when no block opens the text.

    Raises:
        MalformedFrontMatter: the opening delimiter has no matching close.
    """
    work = text[1:] if text.startswith(BOM) else text
    lines = work.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPEN_DELIMITER:
        return None, text

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in CLOSE_DELIMITERS:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])

    raise MalformedFrontMatter(
        message="front-matter block opened but never closed",
        source_path=source_path,
        line=1,
    )


def _normalize_plain_values(block: str) -> str:
    """Make flat ``key: value`` lines YAML-safe.

    Tabs inside a plain value become spaces and values containing ``": "``
    are single-quoted, so ``categories: swift<TAB>ios`` and
    ``title: Monads: a primer`` read as plain text.
    """
    out: list[str] = []
    for line in block.splitlines(keepends=True):
        content = line.rstrip("\r\n")
        ending = line[len(content) :]
        m = _PLAIN_LINE.match(content)
        if m is not None:
            value = m.group("value").replace("\t", " ")
            if ": " in value or value.endswith(":"):
                value = "'" + value.replace("'", "''") + "'"
            content = f"{m.group('key')}: {value}"
        out.append(content + ending)
    return "".join(out)


def parse_front_matter(block: str, source_path: str | None = None) -> dict[str, str]:
    """Parse a raw block into a flat ``str -> str`` mapping.

    Lists of scalars are joined with single spaces (``[swift, ios]`` -> ``"swift ios"``).
    Nested mappings are rejected.
    """
    try:
        data = yaml.load(_normalize_plain_values(block), Loader=yaml.BaseLoader)
    except yaml.MarkedYAMLError as ex:
        mark = ex.problem_mark or ex.context_mark
        # +2: marks are 0-based and the block starts after the opening delimiter
        line = mark.line + 2 if mark is not None else None
        raise MalformedFrontMatter(
            message=ex.problem or str(ex), source_path=source_path, line=line
        ) from ex
    except yaml.YAMLError as ex:
        raise MalformedFrontMatter(message=str(ex), source_path=source_path) from ex

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFrontMatter(
            message="front matter must be a key/value mapping",
            source_path=source_path,
            line=2,
        )

    result: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise MalformedFrontMatter(
                message=f"front-matter key must be text, got {key!r}", source_path=source_path
            )
        if isinstance(value, list):
            if not all(isinstance(item, str) for item in value):
                raise MalformedFrontMatter(
                    message=f"nested values under '{key}' are not supported",
                    source_path=source_path,
                )
            result[key] = " ".join(value)
        elif isinstance(value, dict):
            raise MalformedFrontMatter(
                message=f"nested mapping under '{key}' is not supported",
                source_path=source_path,
            )
        else:
            result[key] = value
    return result


def parse_document(
    text: str,
    source_path: str | None = None,
    *,
    strict: bool = False,
    default_layout: str = "post",
) -> Document:
    """Turn raw file content into a Document.

    Without a front-matter block the whole text becomes the body and the
    metadata stays empty, unless ``strict`` is set, in which case the
    missing title is reported like any other.

    Raises:
        MalformedFrontMatter: unterminated or non-flat block.
        MissingRequiredField: ``title`` absent, or ``layout`` absent with no default.
    """
    block, body = split_front_matter(text, source_path)

    if block is None:
        if strict:
            raise MissingRequiredField(field="title", source_path=source_path)
        return Document(
            title="",
            layout="",
            category_path=(),
            body=body,
            slug=derive_slug((), source_path),
            source_path=source_path,
            has_front_matter=False,
        )

    meta = parse_front_matter(block, source_path)

    title = meta.get("title", "")
    if not title.strip():
        raise MissingRequiredField(field="title", source_path=source_path)

    layout = meta.get("layout", "").strip() or default_layout
    if not layout:
        raise MissingRequiredField(field="layout", source_path=source_path)

    raw_categories = meta["categories"] if "categories" in meta else meta.get("category", "")
    category_path = tuple(raw_categories.split())

    return Document(
        title=title,
        layout=layout,
        category_path=category_path,
        body=body,
        slug=derive_slug(category_path, source_path, title, explicit=meta.get("slug")),
        front_matter=meta,
        source_path=source_path,
        has_front_matter=True,
    )


def _render_mapping(document: Document) -> dict[str, str]:
    meta: Mapping[str, str] = document.front_matter
    if not meta:
        # hand-built document: derive the block from its fields
        meta = {
            "layout": document.layout,
            "title": document.title,
            "categories": " ".join(document.category_path),
        }
        meta = {k: v for k, v in meta.items() if v}

    ordered = {k: meta[k] for k in LEADING_KEYS if k in meta}
    ordered.update((k, v) for k, v in meta.items() if k not in ordered)
    return ordered


def render_document(document: Document) -> str:
    """Write a Document back out in the front-matter file format."""
    if not (document.has_front_matter or document.front_matter or document.title):
        return document.body

    mapping = _render_mapping(document)
    block = ""
    if mapping:
        block = yaml.safe_dump(
            mapping,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=float("inf"),
        )
    return f"{OPEN_DELIMITER}\n{block}{OPEN_DELIMITER}\n{document.body}"
