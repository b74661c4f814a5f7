"""Parser for crates.io index files (one JSON record per line).

Each index file lists every published version of a single crate. Parsing
produces a partial registry keyed by the normalized crate name, with the
runtime dependencies of each version translated to npm-style ranges.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterable, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import DiscoveryError, RecordParseError, VersionGrammarError
from versioning.desugar import desugar
from versioning.models import PackageVersionDeps, Registry, RegistryRecord
from versioning.normalize import normalize_name

logger = logging.getLogger(__name__)

_BUILD_METADATA = re.compile(r"\+[0-9A-Za-z.-]+")


def strip_build_metadata(version: str) -> str:
    """Drop the first ``+tag`` build suffix: ``1.0.0+sha.abc123`` -> ``1.0.0``."""
    return _BUILD_METADATA.sub("", version, count=1)


def runtime_dependencies(record: RegistryRecord) -> PackageVersionDeps:
    """Normalized name -> desugared range for the normal, non-optional deps of ``record``."""
    deps: PackageVersionDeps = {}
    for dep in record.deps:
        if dep.is_runtime:
            deps[normalize_name(dep.name)] = desugar(dep.req)
    return deps


def parse_index_lines(lines: Iterable[str], source: Optional[str] = None) -> Registry:
    """Parse index lines into a partial registry.

    Blank lines are skipped. Any malformed line aborts the whole file.

    Args:
        lines: Raw lines of one index file.
        source: Path used in diagnostics.

    Returns:
        Registry holding the package(s) described by the lines.

    Raises:
        RecordParseError: A line is not a well-formed record.
        VersionGrammarError: A dependency requirement is an invalid wildcard.
    """
    registry: Registry = {}
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = RegistryRecord.from_json(json.loads(line))
        except json.JSONDecodeError as e:
            raise RecordParseError(f"invalid JSON: {e.msg}", path=source, line=lineno) from e
        except RecordParseError as e:
            raise RecordParseError(str(e), path=source, line=lineno) from e

        try:
            deps = runtime_dependencies(record)
        except VersionGrammarError as e:
            location = f"{source}:{lineno}" if source else f"line {lineno}"
            raise VersionGrammarError(e.expr, f"{location}: {record.name} {record.vers}") from e

        package = registry.setdefault(normalize_name(record.name), {})
        package[strip_build_metadata(record.vers)] = deps

    if is_debug_enabled(logger):
        logger.debug(
            "Parsed index content",
            extra=extra_context(
                component="index_parser",
                path=source,
                count=sum(len(versions) for versions in registry.values()),
            ),
        )
    return registry


def parse_index_file(path: str) -> Registry:
    """Read and parse one index file.

    Raises:
        DiscoveryError: The file cannot be read.
        RecordParseError: A line is not a well-formed record.
        VersionGrammarError: A dependency requirement is an invalid wildcard.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DiscoveryError(f"Failed to read index file {path}: {e}") from e
    return parse_index_lines(content.split("\n"), source=path)
