"""Locate crates.io index files in a local registry mirror."""

from __future__ import annotations

import glob
import logging
import os
from typing import List, Optional

from common.logging_utils import log_discovered_files
from constants import Constants
from errors import DiscoveryError

logger = logging.getLogger(__name__)


def default_index_pattern() -> str:
    """Return ``~/.cargo/registry/index/*/*/*/*`` resolved against the user's home."""
    root = os.path.join(os.path.expanduser("~"), *Constants.INDEX_ROOT_PARTS)
    return os.path.join(root, *(["*"] * Constants.INDEX_GLOB_DEPTH))


def _static_root(pattern: str) -> str:
    """Longest leading directory of ``pattern`` that contains no glob magic."""
    head = os.path.dirname(pattern)
    while head and glob.has_magic(head):
        head = os.path.dirname(head)
    return head or os.curdir


def _is_index_file(path: str) -> bool:
    if not os.path.isfile(path):
        return False
    if os.path.basename(path) == Constants.INDEX_CONFIG_FILE:
        return False
    return ".git" not in path.split(os.sep)


def discover_index_files(pattern: Optional[str] = None) -> List[str]:
    """Enumerate index files matching ``pattern``.

    The result is sorted so that folding over it is deterministic.

    Args:
        pattern: Glob pattern; defaults to the local cargo registry index.

    Returns:
        Sorted list of index file paths (possibly empty).

    Raises:
        DiscoveryError: The fixed root of the pattern is not a readable directory.
    """
    pattern = os.path.expanduser(pattern or default_index_pattern())
    root = _static_root(pattern)
    if not os.path.isdir(root):
        raise DiscoveryError(f"Index location does not exist or is not a directory: {root}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise DiscoveryError(f"Index location is not readable: {root}")

    files = sorted(p for p in glob.glob(pattern) if _is_index_file(p))
    log_discovered_files(logger, pattern, files)
    if not files:
        logger.warning("No index files matched %s", pattern)
    return files
