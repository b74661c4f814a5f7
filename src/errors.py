"""Error taxonomy for the index importer.

All errors are fatal: the entry point maps them to an exit code and aborts
the batch without writing any output.
"""

from typing import Optional


class CargoImportError(Exception):
    """Base class for every failure raised by the importer."""


class DiscoveryError(CargoImportError):
    """The index location cannot be enumerated or an index file cannot be read."""


class RecordParseError(CargoImportError):
    """An index line is not a well-formed registry record."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        if path is not None and line is not None:
            message = f"{path}:{line}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class VersionGrammarError(CargoImportError):
    """A wildcard requirement is not a valid semantic version range."""

    def __init__(self, expr: str, reason: Optional[str] = None):
        self.expr = expr
        message = f"Invalid wildcard version range '{expr}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
