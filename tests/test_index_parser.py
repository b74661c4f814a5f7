"""Tests for the crates.io index line parser."""

import json

import pytest

from errors import DiscoveryError, RecordParseError, VersionGrammarError
from registry.cargo.index_parser import (
    parse_index_file,
    parse_index_lines,
    strip_build_metadata,
)
from versioning.models import DependencyKind, RawDependency, RegistryRecord


def dep(name, req="^1.0", kind="normal", optional=False):
    return {
        "name": name,
        "req": req,
        "features": [],
        "optional": optional,
        "default_features": True,
        "target": None,
        "kind": kind,
    }


def record(name, vers, deps=()):
    return json.dumps({
        "name": name,
        "vers": vers,
        "deps": list(deps),
        "cksum": "0" * 64,
        "features": {},
        "yanked": False,
    })


def write_index(tmp_path, filename, lines):
    path = tmp_path / filename
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


class TestParseIndexFile:
    """Test index file parsing."""

    def test_blank_line_between_records(self, tmp_path):
        path = write_index(tmp_path, "rand", [
            record("rand", "0.1.0"),
            "   ",
            record("rand", "0.2.0"),
        ])

        result = parse_index_file(path)

        assert list(result) == ["test/rand"]
        assert set(result["test/rand"]) == {"0.1.0", "0.2.0"}

    def test_build_metadata_stripped(self, tmp_path):
        path = write_index(tmp_path, "git2", [record("git2", "1.0.0+sha.abc123")])

        result = parse_index_file(path)

        assert list(result["test/git2"]) == ["1.0.0"]

    def test_only_runtime_dependencies_kept(self, tmp_path):
        path = write_index(tmp_path, "my-crate", [
            record("my-crate", "1.0.0", [
                dep("serde", "^1.0, >= 1.0.100"),
                dep("tempfile", kind="dev"),
                dep("cc", kind="build"),
                dep("log-extra", optional=True),
            ]),
        ])

        result = parse_index_file(path)

        assert result == {"test/my_crate": {"1.0.0": {"test/serde": "^1.0.100"}}}

    def test_later_duplicate_version_overwrites(self, tmp_path):
        path = write_index(tmp_path, "dup", [
            record("dup", "1.0.0", [dep("a")]),
            record("dup", "1.0.0+build1", [dep("b")]),
        ])

        result = parse_index_file(path)

        assert result["test/dup"] == {"1.0.0": {"test/b": "^1.0"}}

    def test_dependency_names_normalized(self, tmp_path):
        path = write_index(tmp_path, "x", [record("x", "0.1.0", [dep("foo-bar-baz", "= 2.0.0")])])

        result = parse_index_file(path)

        assert result["test/x"]["0.1.0"] == {"test/foo_bar-baz": "2.0.0"}

    def test_empty_file(self, tmp_path):
        path = write_index(tmp_path, "empty", [""])
        assert parse_index_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DiscoveryError):
            parse_index_file(str(tmp_path / "nonexistent"))

    def test_invalid_json_reports_line(self, tmp_path):
        path = write_index(tmp_path, "bad", [record("bad", "0.1.0"), "{not json"])

        with pytest.raises(RecordParseError) as excinfo:
            parse_index_file(path)

        assert excinfo.value.path == path
        assert excinfo.value.line == 2

    def test_record_missing_version(self, tmp_path):
        path = write_index(tmp_path, "nover", [json.dumps({"name": "nover", "deps": []})])

        with pytest.raises(RecordParseError) as excinfo:
            parse_index_file(path)
        assert excinfo.value.line == 1

    def test_optional_as_string_aborts_file(self, tmp_path):
        path = write_index(tmp_path, "a", [record("a", "1.0.0", [dep("b", optional="false")])])

        with pytest.raises(RecordParseError) as excinfo:
            parse_index_file(path)
        assert excinfo.value.line == 1

    def test_invalid_wildcard_aborts_file(self, tmp_path):
        path = write_index(tmp_path, "w", [record("w", "0.1.0", [dep("z", "1.2.3.*")])])

        with pytest.raises(VersionGrammarError) as excinfo:
            parse_index_file(path)
        assert excinfo.value.expr == "1.2.3.*"
        assert path in str(excinfo.value)


class TestParseIndexLines:
    """Test parsing of in-memory lines."""

    def test_no_source(self):
        result = parse_index_lines([record("a", "1.0.0", [dep("b", "> 0.5")])])
        assert result == {"test/a": {"1.0.0": {"test/b": "^0.5"}}}


class TestModels:
    """Test record construction from decoded JSON."""

    def test_dependency_defaults_for_old_lines(self):
        d = RawDependency.from_json({"name": "libc", "req": "^0.2"})
        assert d.kind == DependencyKind.NORMAL
        assert d.optional is False
        assert d.is_runtime

    def test_null_kind_is_normal(self):
        d = RawDependency.from_json({"name": "libc", "req": "^0.2", "kind": None})
        assert d.kind == DependencyKind.NORMAL

    def test_unknown_kind(self):
        with pytest.raises(RecordParseError):
            RawDependency.from_json({"name": "libc", "req": "^0.2", "kind": "weird"})

    def test_optional_string_rejected(self):
        with pytest.raises(RecordParseError):
            RawDependency.from_json({"name": "a", "req": "^1.0", "optional": "false"})

    def test_optional_null_is_required(self):
        d = RawDependency.from_json({"name": "a", "req": "^1.0", "optional": None})
        assert d.optional is False
        assert d.is_runtime

    def test_deps_must_be_list(self):
        with pytest.raises(RecordParseError):
            RegistryRecord.from_json({"name": "a", "vers": "1.0.0", "deps": {}})


def test_strip_build_metadata():
    assert strip_build_metadata("1.0.0+sha.abc123") == "1.0.0"
    assert strip_build_metadata("0.3.1+zstd.1.5.2") == "0.3.1"
    assert strip_build_metadata("1.0.0-alpha") == "1.0.0-alpha"
