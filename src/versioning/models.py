"""Data models for index records and the aggregated registry."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from constants import Constants
from errors import RecordParseError


class DependencyKind(Enum):
    """Dependency section a crate dependency was declared in."""
    NORMAL = "normal"
    DEV = "dev"
    BUILD = "build"


class MergeStrategy(Enum):
    """How partial registries sharing a package name are combined."""
    REPLACE = "replace"
    UNION = "union"


class OutputFormat(Enum):
    """Encoding used for the final registry document."""
    MSGPACK = "msgpack"
    JSON = "json"


@dataclass(frozen=True)
class RawDependency:
    """One dependency entry of one index record."""
    name: str
    req: str
    kind: DependencyKind = DependencyKind.NORMAL
    optional: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "RawDependency":
        """Build from a decoded ``deps`` entry.

        Older index lines omit ``kind`` and ``optional``; they default to a
        normal, required dependency.
        """
        if not isinstance(data, dict):
            raise RecordParseError(f"dependency entry is not an object: {data!r}")
        name = data.get("name")
        req = data.get("req")
        if not isinstance(name, str) or not isinstance(req, str):
            raise RecordParseError(f"dependency entry missing name or req: {data!r}")
        kind_raw = data.get("kind") or Constants.DEPENDENCY_KIND_DEFAULT
        try:
            kind = DependencyKind(kind_raw)
        except ValueError as e:
            raise RecordParseError(f"unknown dependency kind '{kind_raw}'") from e
        optional = data.get("optional")
        if optional is None:
            optional = False
        elif not isinstance(optional, bool):
            raise RecordParseError(f"dependency 'optional' is not a boolean: {optional!r}")
        return cls(name=name, req=req, kind=kind, optional=optional)

    @property
    def is_runtime(self) -> bool:
        """True for normal, non-optional dependencies."""
        return self.kind == DependencyKind.NORMAL and not self.optional


@dataclass(frozen=True)
class RegistryRecord:
    """One published version of one package (one index line)."""
    name: str
    vers: str
    deps: Tuple[RawDependency, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Any) -> "RegistryRecord":
        """Build from a decoded index line, ignoring fields we do not use."""
        if not isinstance(data, dict):
            raise RecordParseError("record is not a JSON object")
        name = data.get("name")
        vers = data.get("vers")
        if not isinstance(name, str) or not isinstance(vers, str):
            raise RecordParseError("record missing string 'name' or 'vers'")
        deps = data.get("deps", [])
        if not isinstance(deps, list):
            raise RecordParseError("record 'deps' is not a list")
        return cls(name=name, vers=vers, deps=tuple(RawDependency.from_json(d) for d in deps))


# Normalized dependency name -> desugared range, for one version.
PackageVersionDeps = Dict[str, str]
# Version string -> dependencies of that version, for one package.
PackageRecord = Dict[str, PackageVersionDeps]
# Normalized package name -> record.
Registry = Dict[str, PackageRecord]
