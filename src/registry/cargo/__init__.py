"""crates.io index support: file discovery and line-record parsing."""

from .discovery import default_index_pattern, discover_index_files
from .index_parser import parse_index_file, parse_index_lines

__all__ = [
    "default_index_pattern",
    "discover_index_files",
    "parse_index_file",
    "parse_index_lines",
]
