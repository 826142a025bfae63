"""Tests for pattern parsing."""

from __future__ import annotations

import pytest

from vendor_builder.errors import ConfigError
from vendor_builder.models import KEEP_DIRECTORIES, PatternEntry, PatternKind
from vendor_builder.patterns import (
    is_url,
    parse_package,
    parse_package_table,
    parse_pattern,
    url_basename,
)


class TestParsePattern:
    """Tests for parse_pattern."""

    def test_none_is_keep_directories_marker(self) -> None:
        """Should parse None as the keep-directories marker."""
        entry = parse_pattern(None)

        assert entry is KEEP_DIRECTORIES
        assert entry.is_marker is True

    def test_local_glob(self) -> None:
        """Should parse a plain path as a local glob."""
        entry = parse_pattern("addon/fold/foldgutter.*")

        assert entry.kind is PatternKind.LOCAL_GLOB
        assert entry.source == "addon/fold/foldgutter.*"
        assert entry.destination == ""
        assert entry.raw == "addon/fold/foldgutter.*"

    def test_rename(self) -> None:
        """Should split source and destination on the arrow."""
        entry = parse_pattern("README.md -> LICENSE")

        assert entry.kind is PatternKind.RENAME
        assert entry.source == "README.md"
        assert entry.destination == "LICENSE"

    def test_rename_without_spaces(self) -> None:
        """Should accept an arrow without surrounding whitespace."""
        entry = parse_pattern("a.js->b.js")

        assert entry.kind is PatternKind.RENAME
        assert (entry.source, entry.destination) == ("a.js", "b.js")

    def test_url_defaults_destination_to_basename(self) -> None:
        """Should use the URL's file name as the destination."""
        entry = parse_pattern("https://cdn.example.com/pkg/dist/lib.min.js?v=1")

        assert entry.kind is PatternKind.REMOTE_FETCH
        assert entry.source == "https://cdn.example.com/pkg/dist/lib.min.js?v=1"
        assert entry.destination == "lib.min.js"

    def test_url_with_destination(self) -> None:
        """Should keep an explicit destination for URLs."""
        entry = parse_pattern("http://example.com/x.js -> vendor.js")

        assert entry.kind is PatternKind.REMOTE_FETCH
        assert entry.destination == "vendor.js"

    @pytest.mark.parametrize("raw", ["", "   ", "a -> b -> c", "-> b", 42])
    def test_invalid_entries(self, raw) -> None:
        """Should reject malformed entries."""
        with pytest.raises(ConfigError):
            parse_pattern(raw)


class TestPatternEntry:
    """Tests for PatternEntry helpers."""

    def test_with_version_substitutes_placeholder(self) -> None:
        """Should replace {VERSION} in source and destination."""
        entry = parse_pattern("https://unpkg.com/lib@{VERSION}/lib.js -> lib-{VERSION}.js")

        resolved = entry.with_version("2.0.1")

        assert resolved.source == "https://unpkg.com/lib@2.0.1/lib.js"
        assert resolved.destination == "lib-2.0.1.js"
        assert entry.source.endswith("{VERSION}/lib.js")

    def test_entries_are_immutable(self) -> None:
        """Should not allow mutation of parsed entries."""
        entry = PatternEntry(kind=PatternKind.LOCAL_GLOB, source="a.js")

        with pytest.raises(AttributeError):
            entry.source = "b.js"  # type: ignore[misc]


class TestParsePackage:
    """Tests for package and table parsing."""

    def test_keep_directories_flag(self) -> None:
        """Should preserve directories only when the marker is present."""
        kept = parse_package("codemirror", [None, "lib/*"])
        flat = parse_package("less", ["dist/less.min.js"])

        assert kept.keep_directories is True
        assert flat.keep_directories is False
        assert [e.source for e in kept.patterns] == ["lib/*"]

    def test_scoped_names(self) -> None:
        """Should derive simple and flattened names from scoped packages."""
        spec = parse_package("@eight04/draggable-list", ["dist/x.js"])

        assert spec.simple_name == "draggable-list"
        assert spec.flat_name == "@eight04-draggable-list"

    def test_marker_only_package_is_rejected(self) -> None:
        """Should reject a package that selects no files."""
        with pytest.raises(ConfigError):
            parse_package("empty", [None])

    def test_table_preserves_order(self) -> None:
        """Should keep table order."""
        specs = parse_package_table({"b": ["b.js"], "a": ["a.js"]})

        assert [s.name for s in specs] == ["b", "a"]

    def test_empty_table_is_rejected(self) -> None:
        """Should reject an empty table."""
        with pytest.raises(ConfigError):
            parse_package_table({})


class TestUrlHelpers:
    def test_is_url(self) -> None:
        assert is_url("https://example.com/a.js")
        assert is_url("HTTP://example.com/a.js")
        assert not is_url("dist/https.js")

    def test_url_basename(self) -> None:
        assert url_basename("https://example.com/a/b.js#frag") == "b.js"
        assert url_basename("https://example.com/a/") == "a"
