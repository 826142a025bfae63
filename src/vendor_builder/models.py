"""
Data models for the vendor builder.

A package table is parsed once into immutable :class:`PackageSpec` values
whose entries are explicit :class:`PatternEntry` variants, so the builder
never has to re-inspect raw pattern strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

VERSION_PLACEHOLDER = "{VERSION}"


class PatternKind(str, Enum):
    """Kind of a package pattern entry."""

    KEEP_DIRECTORIES = "keep_directories"  # Preserve source directory layout
    LOCAL_GLOB = "local_glob"  # Glob over the installed package
    RENAME = "rename"  # Glob copied to an explicit destination
    REMOTE_FETCH = "remote_fetch"  # File downloaded from a URL


@dataclass(frozen=True)
class PatternEntry:
    """One instruction selecting source file(s) for a package."""

    kind: PatternKind
    source: str = ""  # Glob relative to the package dir, or a URL
    destination: str = ""  # Explicit target relative to the output dir
    raw: str | None = None  # Text as written in the package table

    @property
    def is_marker(self) -> bool:
        return self.kind is PatternKind.KEEP_DIRECTORIES

    def with_version(self, version: str) -> PatternEntry:
        """Return a copy with the version placeholder substituted."""
        return replace(
            self,
            source=self.source.replace(VERSION_PLACEHOLDER, version),
            destination=self.destination.replace(VERSION_PLACEHOLDER, version),
        )


KEEP_DIRECTORIES = PatternEntry(kind=PatternKind.KEEP_DIRECTORIES)


@dataclass(frozen=True)
class PackageSpec:
    """A package name and the ordered entries selecting its files."""

    name: str
    entries: tuple[PatternEntry, ...] = ()

    @property
    def keep_directories(self) -> bool:
        """Whether source directory structure is preserved for this package."""
        return any(entry.is_marker for entry in self.entries)

    @property
    def simple_name(self) -> str:
        """Last path segment of the package name (``@scope/pkg`` -> ``pkg``)."""
        return self.name.split("/")[-1]

    @property
    def flat_name(self) -> str:
        """Package name flattened to a single directory level."""
        return self.name.replace("/", "-")

    @property
    def patterns(self) -> tuple[PatternEntry, ...]:
        """Entries that select files (the directory marker excluded)."""
        return tuple(entry for entry in self.entries if not entry.is_marker)


@dataclass(frozen=True)
class PackageInfo:
    """Name and version declared by an installed package."""

    name: str
    version: str


@dataclass
class BuildResult:
    """Provenance log of one package build."""

    package: str
    output_dir: Path
    version: str = ""
    fetched: list[str] = field(default_factory=list)  # "* dest: url"
    copied: list[str] = field(default_factory=list)  # "* report [(removed sourceMappingURL)]"
