"""
Configuration for the vendor builder.

The defaults reproduce the project's own vendor tree; a YAML file can
override paths or replace the package table entirely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from vendor_builder.errors import ConfigError
from vendor_builder.models import PackageSpec
from vendor_builder.packages import DEFAULT_PACKAGES
from vendor_builder.patterns import parse_package_table


def _default_packages() -> tuple[PackageSpec, ...]:
    return parse_package_table(DEFAULT_PACKAGES)


@dataclass
class BuilderConfig:
    """
    Main configuration for the vendor builder.

    Example YAML:
        root: .
        dependency_dir: node_modules
        output_dir: vendor
        theme_manifest: edit/codemirror-themes.js
        timeout: 60
        packages:
          less:
            - dist/less.min.js
          codemirror:
            - null            # keep directories
            - lib/*
    """

    # Paths (relative paths are resolved against root)
    root: Path = field(default_factory=Path.cwd)
    dependency_dir: Path = Path("node_modules")
    output_dir: Path = Path("vendor")

    # License lookup inside each package directory
    license_glob: str = "LICEN[SC]E*"

    # Theme manifest
    theme_glob: str = "codemirror/theme/*.css"  # Relative to dependency_dir
    theme_manifest: Path = Path("edit/codemirror-themes.js")
    theme_variable: str = "CODEMIRROR_THEMES"

    # Network
    timeout: float = 60.0  # HTTP timeout in seconds

    packages: tuple[PackageSpec, ...] = field(default_factory=_default_packages)

    @property
    def dependency_root(self) -> Path:
        return self.root / self.dependency_dir

    @property
    def output_root(self) -> Path:
        return self.root / self.output_dir

    @property
    def theme_manifest_path(self) -> Path:
        return self.root / self.theme_manifest

    @classmethod
    def from_dict(cls, data: dict[str, Any], root: Path | None = None) -> BuilderConfig:
        """Create config from a dictionary."""
        defaults = cls()
        base = Path(data["root"]) if data.get("root") else (root or defaults.root)

        packages = defaults.packages
        if data.get("packages") is not None:
            if not isinstance(data["packages"], dict):
                raise ConfigError("packages must be a mapping of name to patterns")
            packages = parse_package_table(data["packages"])

        return cls(
            root=base,
            dependency_dir=Path(data.get("dependency_dir", defaults.dependency_dir)),
            output_dir=Path(data.get("output_dir", defaults.output_dir)),
            license_glob=data.get("license_glob", defaults.license_glob),
            theme_glob=data.get("theme_glob", defaults.theme_glob),
            theme_manifest=Path(data.get("theme_manifest", defaults.theme_manifest)),
            theme_variable=data.get("theme_variable", defaults.theme_variable),
            timeout=float(data.get("timeout", defaults.timeout)),
            packages=packages,
        )

    @classmethod
    def from_yaml(cls, path: Path, root: Path | None = None) -> BuilderConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {}, root=root)

    @classmethod
    def from_yaml_string(cls, content: str, root: Path | None = None) -> BuilderConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {}, root=root)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "root": str(self.root),
            "dependency_dir": str(self.dependency_dir),
            "output_dir": str(self.output_dir),
            "license_glob": self.license_glob,
            "theme_glob": self.theme_glob,
            "theme_manifest": str(self.theme_manifest),
            "theme_variable": self.theme_variable,
            "timeout": self.timeout,
            "packages": {
                spec.name: [entry.raw for entry in spec.entries]
                for spec in self.packages
            },
        }
