"""
Vendor Builder - repackages third-party browser libraries into a vendor tree.

Selected files of installed npm packages are copied (or downloaded) into
``vendor/<package>/`` together with a LICENSE and a README recording their
provenance, and CodeMirror themes are embedded into one generated script.

Example:
    import asyncio
    from vendor_builder import BuilderConfig, VendorBuilder

    builder = VendorBuilder(BuilderConfig(root=Path(".")))
    results = asyncio.run(builder.build_all())
"""

from vendor_builder.builder import VendorBuilder, report_file, strip_source_map
from vendor_builder.config import BuilderConfig
from vendor_builder.errors import (
    ConfigError,
    MissingLicenseError,
    NetworkError,
    PackageNotInstalledError,
    PatternMatchError,
    VendorBuildError,
)
from vendor_builder.fetcher import RemoteFetcher
from vendor_builder.models import (
    KEEP_DIRECTORIES,
    BuildResult,
    PackageInfo,
    PackageSpec,
    PatternEntry,
    PatternKind,
)
from vendor_builder.packages import DEFAULT_PACKAGES, resolve_output_names
from vendor_builder.patterns import parse_package_table, parse_pattern
from vendor_builder.themes import render_theme_manifest, write_theme_manifest

__version__ = "0.1.0"

__all__ = [
    # Builder
    "VendorBuilder",
    "BuilderConfig",
    "RemoteFetcher",
    "strip_source_map",
    "report_file",
    # Models
    "PatternKind",
    "PatternEntry",
    "PackageSpec",
    "PackageInfo",
    "BuildResult",
    "KEEP_DIRECTORIES",
    # Package table
    "DEFAULT_PACKAGES",
    "parse_pattern",
    "parse_package_table",
    "resolve_output_names",
    # Themes
    "render_theme_manifest",
    "write_theme_manifest",
    # Errors
    "VendorBuildError",
    "ConfigError",
    "PackageNotInstalledError",
    "NetworkError",
    "PatternMatchError",
    "MissingLicenseError",
]
