"""
The built-in package table and installed-package metadata.

A ``None`` entry is the keep-directories marker: every file selected for
that package keeps its path relative to the package directory.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path

from vendor_builder.errors import ConfigError, PackageNotInstalledError
from vendor_builder.models import PackageInfo, PackageSpec

KEEP_DIRECTORIES = None

DEFAULT_PACKAGES: dict[str, list[str | None]] = {
    "codemirror": [
        KEEP_DIRECTORIES,
        "addon/comment/comment.js",
        "addon/dialog",
        "addon/edit/closebrackets.js",
        "addon/edit/matchbrackets.js",
        "addon/fold/brace-fold.js",
        "addon/fold/comment-fold.js",
        "addon/fold/foldcode.js",
        "addon/fold/foldgutter.*",
        "addon/fold/indent-fold.js",
        "addon/hint/anyword-hint.js",
        "addon/hint/css-hint.js",
        "addon/hint/show-hint.*",
        "addon/lint/css-lint.js",
        "addon/lint/json-lint.js",
        "addon/lint/lint.*",
        "addon/scroll/annotatescrollbar.js",
        "addon/search/matchesonscrollbar.*",
        "addon/search/searchcursor.js",
        "addon/selection/active-line.js",
        "keymap/*",
        "lib/*",
        "mode/css",
        "mode/javascript",
        "mode/stylus",
    ],
    "jsonlint": [
        "lib/jsonlint.js",
        "README.md -> LICENSE",
    ],
    "less": [
        "dist/less.min.js",
    ],
    "lz-string-unsafe": [
        "lz-string-unsafe.min.js",
    ],
    "stylelint-bundle": [
        "dist/stylelint-bundle.min.js",
    ],
    "stylus-lang-bundle": [
        "dist/stylus-renderer.min.js",
    ],
    "usercss-meta": [
        "dist/usercss-meta.js",
    ],
    "db-to-cloud": [
        "dist/db-to-cloud.js",
    ],
    "webext-launch-web-auth-flow": [
        "dist/webext-launch-web-auth-flow.js",
    ],
    "@eight04/draggable-list": [
        "dist/draggable-list.iife.js",
    ],
}


def resolve_output_names(specs: tuple[PackageSpec, ...]) -> dict[str, str]:
    """Map each package name to its directory name under the output root.

    Unscoped names are used as-is. A scoped name (``@scope/pkg``) uses its
    last segment unless another package shares that segment, in which case
    the whole name is flattened (``@scope-pkg``).
    """
    simple_counts = Counter(spec.simple_name for spec in specs)

    names: dict[str, str] = {}
    for spec in specs:
        if spec.name == spec.simple_name:
            names[spec.name] = spec.name
        elif simple_counts[spec.simple_name] > 1:
            names[spec.name] = spec.flat_name
        else:
            names[spec.name] = spec.simple_name

    clashes = [d for d, count in Counter(names.values()).items() if count > 1]
    if clashes:
        owners = sorted(p for p, d in names.items() if d in clashes)
        raise ConfigError(
            f"Packages {', '.join(owners)} map to the same output directory"
        )

    return names


def read_package_info(dependency_root: Path, package: str) -> PackageInfo:
    """Read name and version from an installed package's package.json."""
    manifest = dependency_root / package / "package.json"
    if not manifest.is_file():
        raise PackageNotInstalledError(package, str(manifest))

    try:
        with open(manifest, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid {manifest}: {e}") from e

    return PackageInfo(
        name=data.get("name", package),
        version=str(data.get("version", "")),
    )
