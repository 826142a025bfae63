"""Errors raised while building the vendor tree.

Every error is fatal for the run: it propagates out of
:meth:`VendorBuilder.build_all` and the CLI exits with a failure status.
"""

from __future__ import annotations


class VendorBuildError(Exception):
    """Base class for all vendor build failures."""


class ConfigError(VendorBuildError):
    """The package table or builder configuration is invalid."""


class PackageNotInstalledError(VendorBuildError):
    """A package from the table is missing from the dependency tree."""

    def __init__(self, package: str, path: str) -> None:
        super().__init__(f"Package {package} is not installed (no {path})")
        self.package = package
        self.path = path


class NetworkError(VendorBuildError):
    """A remote file could not be fetched."""

    def __init__(self, url: str, status: int | None = None, reason: str = "") -> None:
        if status is not None:
            message = f"Network error {status} for {url}"
        else:
            message = f"Network error for {url}: {reason}"
        super().__init__(message)
        self.url = url
        self.status = status


class PatternMatchError(VendorBuildError):
    """A glob pattern matched no files."""

    def __init__(self, package: str, pattern: str) -> None:
        super().__init__(f"Pattern {pattern} matches no files (package {package})")
        self.package = package
        self.pattern = pattern


class MissingLicenseError(VendorBuildError):
    """No license file could be found for a package."""

    def __init__(self, package: str) -> None:
        super().__init__(f"Cannot find license file for {package}")
        self.package = package
