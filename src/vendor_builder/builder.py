"""
The vendor builder.

Copies selected files of installed packages into the vendor tree, one
asyncio task per package, and records where every file came from in a
generated README next to the package's LICENSE.
"""

from __future__ import annotations

import asyncio
import glob as glob_module
import posixpath
import re
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

from vendor_builder.config import BuilderConfig
from vendor_builder.errors import ConfigError, MissingLicenseError, PatternMatchError
from vendor_builder.fetcher import RemoteFetcher
from vendor_builder.logging import get_logger
from vendor_builder.models import (
    BuildResult,
    PackageInfo,
    PackageSpec,
    PatternEntry,
    PatternKind,
)
from vendor_builder.packages import read_package_info, resolve_output_names
from vendor_builder.themes import write_theme_manifest

logger = get_logger("builder")

SCRIPT_SUFFIXES = (".js", ".mjs", ".cjs")
SOURCE_MAP_NOTE = " (removed sourceMappingURL)"

_SOURCE_MAP_COMMENT = re.compile(r"\n//# sourceMappingURL=.*\s*$")


def strip_source_map(text: str) -> tuple[str, bool]:
    """Remove a trailing ``//# sourceMappingURL=`` comment.

    Returns:
        The (possibly) rewritten text and whether a comment was removed.
    """
    stripped = _SOURCE_MAP_COMMENT.sub("\n", text, count=1)
    return stripped, stripped != text


def report_file(source: str, destination: str | None = None) -> str:
    """Describe a copied file for the README.

    *source* is relative to the package directory and *destination* to the
    package's output directory. When both end in the same file name the
    source's name is shown as ``*``.
    """
    if not destination or destination == source:
        return source
    if "/" in source and destination.split("/")[-1] == source.split("/")[-1]:
        source = source.rsplit("/", 1)[0] + "/*"
    return f"{destination}: {source}"


def render_readme(info: PackageInfo, result: BuildResult, copied_from: str) -> str:
    """Render the provenance README of one package."""
    sections = [f"## {info.name} v{info.version}"]
    if result.fetched:
        sections.append("Files downloaded from URL:\n" + "\n".join(result.fetched))
    if result.copied:
        sections.append(f"Files copied from {copied_from}:\n" + "\n".join(result.copied))
    return "\n\n".join(sections) + "\n"


def _target(output_dir: Path, relative: str) -> Path:
    target = (output_dir / relative).resolve()
    if not target.is_relative_to(output_dir.resolve()):
        raise ConfigError(f"Destination {relative} escapes {output_dir}")
    return target


def _claim(claimed: dict[str, str], destination: str, source: str) -> None:
    """Record that *source* is written to *destination*, refusing repeats."""
    key = posixpath.normpath(destination)
    if key in claimed:
        raise ConfigError(
            f"Destination {destination} is selected twice ({claimed[key]}, {source})"
        )
    claimed[key] = source


def _copy_match(source: Path, target: Path) -> bool:
    """Copy one matched path, stripping source maps from scripts.

    Returns:
        Whether a source-map comment was removed.
    """
    target.parent.mkdir(parents=True, exist_ok=True)

    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
        return False

    if source.suffix in SCRIPT_SUFFIXES:
        with open(source, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text, stripped = strip_source_map(f.read())
        if stripped:
            with open(target, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
                f.write(text)
            return True

    shutil.copyfile(source, target)
    return False


def _write_text(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class VendorBuilder:
    """Builds the vendor tree described by a :class:`BuilderConfig`.

    Example:
        builder = VendorBuilder(BuilderConfig(root=Path(".")))
        results = asyncio.run(builder.build_all())
    """

    def __init__(
        self,
        config: BuilderConfig | None = None,
        fetcher: RemoteFetcher | None = None,
    ) -> None:
        self.config = config or BuilderConfig()
        self._fetcher = fetcher
        self._output_names = resolve_output_names(self.config.packages)

    @property
    def output_names(self) -> dict[str, str]:
        """Package name -> directory name under the output root."""
        return dict(self._output_names)

    def output_dir_for(self, package: str) -> Path:
        return self.config.output_root / self._output_names[package]

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    # ------------------------------------------------------------------
    # Whole run
    # ------------------------------------------------------------------

    def clean_output(self) -> None:
        """Remove everything under the output root."""
        output_root = self.config.output_root.resolve()
        protected = {
            self.config.root.resolve(),
            self.config.dependency_root.resolve(),
        }
        if output_root in protected or any(p.is_relative_to(output_root) for p in protected):
            raise ConfigError(f"Refusing to clear {output_root}")

        if output_root.exists():
            shutil.rmtree(output_root)
        output_root.mkdir(parents=True)

    async def build_all(self) -> list[BuildResult]:
        """Rebuild the whole vendor tree, then the theme manifest.

        The first failing package aborts the run.
        """
        self.clean_output()

        fetcher = self._fetcher or RemoteFetcher(timeout=self.config.timeout)
        async with fetcher:
            tasks = [
                asyncio.create_task(self.build_package(spec, fetcher), name=spec.name)
                for spec in self.config.packages
            ]
            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        self.build_theme_manifest()
        return list(results)

    def build_theme_manifest(self) -> Path:
        return write_theme_manifest(
            self.config.dependency_root,
            self.config.theme_glob,
            self.config.theme_manifest_path,
            self.config.theme_variable,
        )

    # ------------------------------------------------------------------
    # Per package
    # ------------------------------------------------------------------

    async def build_package(
        self,
        spec: PackageSpec,
        fetcher: RemoteFetcher,
    ) -> BuildResult:
        """Build one package: files, LICENSE and README."""
        logger.info("Building %s...", spec.name)
        info = read_package_info(self.config.dependency_root, spec.name)
        output_dir = self.output_dir_for(spec.name)

        result = BuildResult(package=spec.name, output_dir=output_dir, version=info.version)
        await self.build_files(spec, info, fetcher, result)
        await self._run(self.build_license, spec)

        copied_from = f"NPM ({self.config.dependency_dir.name})"
        await self._run(
            _write_text,
            output_dir / "README.md",
            render_readme(info, result, copied_from),
        )
        return result

    async def build_files(
        self,
        spec: PackageSpec,
        info: PackageInfo,
        fetcher: RemoteFetcher,
        result: BuildResult,
    ) -> None:
        claimed: dict[str, str] = {}  # destination -> source
        for entry in spec.patterns:
            entry = entry.with_version(info.version)
            if entry.kind is PatternKind.REMOTE_FETCH:
                await self._fetch_entry(entry, fetcher, result, claimed)
            else:
                await self._copy_entry(spec, entry, result, claimed)

    async def _fetch_entry(
        self,
        entry: PatternEntry,
        fetcher: RemoteFetcher,
        result: BuildResult,
        claimed: dict[str, str],
    ) -> None:
        _claim(claimed, entry.destination, entry.source)
        text = await fetcher.fetch_text(entry.source)
        target = _target(result.output_dir, entry.destination)
        await self._run(_write_text, target, text)
        result.fetched.append(f"* {entry.destination}: {entry.source}")

    async def _copy_entry(
        self,
        spec: PackageSpec,
        entry: PatternEntry,
        result: BuildResult,
        claimed: dict[str, str],
    ) -> None:
        package_dir = self.config.dependency_root / spec.name
        pattern = str(Path(glob_module.escape(str(package_dir))) / entry.source)
        matches = sorted(Path(p) for p in glob_module.glob(pattern))
        if not matches:
            raise PatternMatchError(spec.name, entry.source)

        for match in matches:
            source = match.relative_to(package_dir).as_posix()
            if entry.kind is PatternKind.RENAME:
                destination = entry.destination
            elif spec.keep_directories:
                destination = source
            else:
                destination = match.name

            _claim(claimed, destination, source)
            target = _target(result.output_dir, destination)
            stripped = await self._run(_copy_match, match, target)
            logger.debug("Copied %s -> %s", match, target)

            note = SOURCE_MAP_NOTE if stripped else ""
            result.copied.append(f"* {report_file(source, destination)}{note}")

    def build_license(self, spec: PackageSpec) -> Path:
        """Make sure the package's output directory contains a LICENSE."""
        target = self.output_dir_for(spec.name) / "LICENSE"
        if target.exists():
            return target

        package_dir = self.config.dependency_root / spec.name
        pattern = str(Path(glob_module.escape(str(package_dir))) / self.config.license_glob)
        candidates = sorted(Path(p) for p in glob_module.glob(pattern) if Path(p).is_file())
        if not candidates:
            raise MissingLicenseError(spec.name)

        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(candidates[0], target)
        return target
