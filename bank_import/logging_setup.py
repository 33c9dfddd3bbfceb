"""Logging for the ``bank_import`` package.

Ingest modules log through ``get_logger(__name__)``; only the Streamlit app
attaches a handler, via ``configure_logging()`` from ``state.get_config``.
"""

import logging
import os
import sys
from typing import IO

PACKAGE = "bank_import"
LEVEL_ENV = "BANK_IMPORT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_configured = False


def _parse_level(level: int | str | None) -> int:
    """Level from an int or a name such as ``"debug"``; unknown names fall back to INFO."""
    if level is None:
        level = os.getenv(LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(level: int | str | None = None, stream: IO[str] = sys.stderr) -> None:
    """Send package logs to ``stream``. Later calls are no-ops."""
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE)
    logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_parse_level(level))
    # Streamlit installs its own root handler
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
