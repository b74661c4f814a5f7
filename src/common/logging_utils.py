"""Centralized logging setup and structured-context helpers."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Iterable, Optional

from constants import Constants


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure the root logger once.

    Records go to stderr; stdout carries the registry document. The level is
    taken from the CARGO_IMPORT_LOG_LEVEL environment variable.
    """
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.LOG_LEVEL_DEFAULT).upper()
    level_value = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        root.addHandler(file_handler)

    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in fields.items() if v is not None}


def log_discovered_files(logger: logging.Logger, pattern: str, files: Iterable[str]) -> None:
    """Log the outcome of an index file scan."""
    files = list(files)
    logger.info("Discovered %d index file(s) for %s", len(files), pattern)
    if is_debug_enabled(logger):
        for path in files:
            logger.debug(
                "Index file",
                extra=extra_context(event="discovery", component="discovery", path=path),
            )
