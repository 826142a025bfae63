"""Shared pytest fixtures for vendor-builder tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from vendor_builder.config import BuilderConfig
from vendor_builder.patterns import parse_package_table

MakePackage = Callable[..., Path]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create an empty project root with a node_modules directory."""
    root = tmp_path / "project"
    (root / "node_modules").mkdir(parents=True)
    return root


@pytest.fixture
def make_package(project: Path) -> MakePackage:
    """Return a helper that installs a fake npm package into node_modules."""

    def _make(
        name: str,
        files: dict[str, str | bytes] | None = None,
        version: str = "1.0.0",
        license: str | None = "MIT License\n",
    ) -> Path:
        pkg_dir = project / "node_modules" / name
        pkg_dir.mkdir(parents=True, exist_ok=True)
        (pkg_dir / "package.json").write_text(
            json.dumps({"name": name, "version": version})
        )
        if license is not None:
            (pkg_dir / "LICENSE").write_text(license)

        for rel, content in (files or {}).items():
            path = pkg_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content)
        return pkg_dir

    return _make


@pytest.fixture
def make_config(project: Path) -> Callable[[dict[str, list[str | None]]], BuilderConfig]:
    """Return a helper that builds a config for a small package table."""

    def _make(table: dict[str, list[str | None]]) -> BuilderConfig:
        return BuilderConfig(root=project, packages=parse_package_table(table))

    return _make



@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    root = logging.getLogger("vendor_builder")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
