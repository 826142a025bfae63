"""Theme manifest generation.

Embeds every CodeMirror theme stylesheet into one generated script that
defines a ``window.<VARIABLE>`` mapping of theme name to CSS text.
"""

from __future__ import annotations

import glob as glob_module
import json
import re
from pathlib import Path

from vendor_builder.errors import ConfigError
from vendor_builder.logging import get_logger

logger = get_logger("themes")

MANIFEST_HEADER = (
    "/* Do not edit. This file is auto-generated by vendor-builder */\n"
    "/* eslint-disable max-len, quotes */\n"
    "'use strict';\n"
)

_THEME_NAME = re.compile(r"([^/\\.]+)\.css$", re.IGNORECASE)


def collect_theme_files(dependency_root: Path, pattern: str) -> list[Path]:
    """Theme stylesheets under *dependency_root*, sorted by path."""
    full_pattern = str(Path(glob_module.escape(str(dependency_root))) / pattern)
    return sorted(Path(p) for p in glob_module.glob(full_pattern) if Path(p).is_file())


def theme_name(path: Path) -> str:
    """Base name of a theme stylesheet with single quotes escaped."""
    match = _THEME_NAME.search(path.as_posix())
    if match is None:
        raise ConfigError(f"Not a stylesheet: {path}")
    return match.group(1).replace("'", "\\'")


def render_theme_manifest(files: list[Path], variable: str) -> str:
    """Render the manifest script for the given (sorted) theme files."""
    lines = [MANIFEST_HEADER, f"window.{variable} = {{"]
    seen: set[str] = set()

    for path in files:
        name = theme_name(path)
        if name in seen:
            raise ConfigError(f"Duplicate theme name {name!r} ({path})")
        seen.add(name)

        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            contents = f.read()
        lines.append(f"  '{name}': {json.dumps(contents, ensure_ascii=False)},")

    lines.append("};")
    return "\n".join(lines) + "\n"


def write_theme_manifest(
    dependency_root: Path,
    pattern: str,
    output: Path,
    variable: str,
) -> Path:
    """Collect themes, render the manifest and write it to *output*."""
    files = collect_theme_files(dependency_root, pattern)
    logger.info("Building theme list (%d themes)...", len(files))

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8", newline="\n") as f:
        f.write(render_theme_manifest(files, variable))

    return output
