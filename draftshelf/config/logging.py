"""
Logging setup for draftshelf.

Modules log through the standard library:
    logger = logging.getLogger(__name__)

Only entrypoints (the CLI) call configure_logging().
"""

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT, stream=None):
    """Install one stream handler on the root logger; repeated calls only change the level."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
