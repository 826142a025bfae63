"""Tests for the package table: output names and installed metadata."""

from __future__ import annotations

from pathlib import Path

import pytest

from vendor_builder.errors import ConfigError, PackageNotInstalledError
from vendor_builder.packages import (
    DEFAULT_PACKAGES,
    read_package_info,
    resolve_output_names,
)
from vendor_builder.patterns import parse_package_table


def _names(*packages: str) -> dict[str, str]:
    return resolve_output_names(parse_package_table({p: ["x.js"] for p in packages}))


class TestResolveOutputNames:
    """Tests for output directory naming."""

    def test_unscoped_names_are_kept(self) -> None:
        """Should use unscoped package names as-is."""
        assert _names("less", "jsonlint") == {"less": "less", "jsonlint": "jsonlint"}

    def test_scoped_name_without_collision_uses_simple_name(self) -> None:
        """Should drop the scope when nothing else shares the simple name."""
        assert _names("@eight04/draggable-list")["@eight04/draggable-list"] == "draggable-list"

    def test_colliding_scoped_names_are_flattened(self) -> None:
        """Should flatten both packages when their simple names collide."""
        names = _names("@a/util", "@b/util", "@c/other")

        assert names["@a/util"] == "@a-util"
        assert names["@b/util"] == "@b-util"
        assert names["@c/other"] == "other"

    def test_scoped_name_colliding_with_unscoped_package(self) -> None:
        """Should flatten the scoped package and keep the unscoped one."""
        names = _names("util", "@scope/util")

        assert names == {"util": "util", "@scope/util": "@scope-util"}

    def test_order_does_not_matter(self) -> None:
        """Should produce the same names regardless of table order."""
        assert _names("@a/util", "@b/util") == _names("@b/util", "@a/util")

    def test_ambiguous_table_is_rejected(self) -> None:
        """Should refuse tables where two packages share a directory."""
        with pytest.raises(ConfigError, match="same output directory"):
            _names("@a-util", "@a/util", "@b/util")

    def test_default_table(self) -> None:
        """Should resolve the built-in table without collisions."""
        names = resolve_output_names(parse_package_table(DEFAULT_PACKAGES))

        assert names["codemirror"] == "codemirror"
        assert names["@eight04/draggable-list"] == "draggable-list"
        assert len(set(names.values())) == len(DEFAULT_PACKAGES)


class TestReadPackageInfo:
    """Tests for reading package.json metadata."""

    def test_reads_name_and_version(self, make_package, project: Path) -> None:
        """Should read name and version from package.json."""
        make_package("less", version="4.1.3")

        info = read_package_info(project / "node_modules", "less")

        assert info.name == "less"
        assert info.version == "4.1.3"

    def test_scoped_package(self, make_package, project: Path) -> None:
        """Should find scoped packages in their scope directory."""
        make_package("@eight04/draggable-list", version="0.3.0")

        info = read_package_info(project / "node_modules", "@eight04/draggable-list")

        assert info.name == "@eight04/draggable-list"
        assert info.version == "0.3.0"

    def test_missing_package(self, project: Path) -> None:
        """Should raise when the package is not installed."""
        with pytest.raises(PackageNotInstalledError, match="not installed"):
            read_package_info(project / "node_modules", "missing")

    def test_malformed_package_json(self, make_package, project: Path) -> None:
        """Should report an unreadable package.json as a build error."""
        pkg_dir = make_package("broken")
        (pkg_dir / "package.json").write_text('{"name": "broken",')

        with pytest.raises(ConfigError, match="Invalid .*package.json"):
            read_package_info(project / "node_modules", "broken")
