"""Pattern parsing for the package table."""

from __future__ import annotations

import re
from collections.abc import Iterable

from vendor_builder.errors import ConfigError
from vendor_builder.models import (
    KEEP_DIRECTORIES,
    PackageSpec,
    PatternEntry,
    PatternKind,
)

_RENAME_SEPARATOR = re.compile(r"\s*->\s*")
_URL_PREFIX = re.compile(r"^https?:", re.IGNORECASE)


def is_url(source: str) -> bool:
    """Check whether a pattern source is a remote URL."""
    return bool(_URL_PREFIX.match(source))


def url_basename(url: str) -> str:
    """File name at the end of a URL, ignoring any query or fragment."""
    path = re.split(r"[?#]", url, maxsplit=1)[0]
    return path.rstrip("/").split("/")[-1]


def parse_pattern(raw: str | None) -> PatternEntry:
    """Parse a raw pattern string into a PatternEntry.

    Supported formats:
    - ``None`` -> keep-directories marker
    - ``"dist/lib.min.js"`` / ``"lib/*"`` -> local glob
    - ``"README.md -> LICENSE"`` -> rename
    - ``"https://host/file.js"`` -> remote fetch
    - ``"https://host/file.js -> lib.js"`` -> remote fetch with destination
    """
    if raw is None:
        return KEEP_DIRECTORIES

    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(f"Invalid pattern entry: {raw!r}")

    parts = _RENAME_SEPARATOR.split(raw.strip())
    if len(parts) > 2 or not all(parts):
        raise ConfigError(f"Invalid pattern entry: {raw!r}")

    source = parts[0]
    destination = parts[1] if len(parts) == 2 else ""

    if is_url(source):
        return PatternEntry(
            kind=PatternKind.REMOTE_FETCH,
            source=source,
            destination=destination or url_basename(source),
            raw=raw,
        )

    if destination:
        return PatternEntry(
            kind=PatternKind.RENAME,
            source=source,
            destination=destination,
            raw=raw,
        )

    return PatternEntry(kind=PatternKind.LOCAL_GLOB, source=source, raw=raw)


def parse_package(name: str, patterns: Iterable[str | None]) -> PackageSpec:
    """Parse one package's pattern list."""
    if not name or name.startswith("/") or name.endswith("/"):
        raise ConfigError(f"Invalid package name: {name!r}")

    entries = tuple(parse_pattern(raw) for raw in patterns)
    if not any(not entry.is_marker for entry in entries):
        raise ConfigError(f"Package {name} selects no files")

    return PackageSpec(name=name, entries=entries)


def parse_package_table(
    table: dict[str, list[str | None]],
) -> tuple[PackageSpec, ...]:
    """Parse a package name -> patterns mapping, preserving its order."""
    if not table:
        raise ConfigError("Package table is empty")
    return tuple(parse_package(name, patterns) for name, patterns in table.items())
