"""
Command-line interface for the vendor builder.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vendor_builder.builder import VendorBuilder
from vendor_builder.config import BuilderConfig
from vendor_builder.errors import VendorBuildError
from vendor_builder.logging import get_logger, set_level, setup_logging
from vendor_builder.models import BuildResult

console = Console()
logger = get_logger("cli")


def make_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Copy third-party library files from node_modules into vendor/",
        prog="vendor-builder",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="YAML config file (defaults to the built-in package table)",
    )
    parser.add_argument(
        "-C",
        "--root",
        type=Path,
        help="Project root containing node_modules (defaults to cwd)",
    )
    return parser


def _load_config(args: argparse.Namespace) -> BuilderConfig:
    root = args.root.resolve() if args.root else Path.cwd()
    if args.config:
        return BuilderConfig.from_yaml(args.config, root=root)
    return BuilderConfig(root=root)


def print_summary(results: list[BuildResult], root: Path) -> None:
    table = Table(title="Vendored Packages")
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="dim")
    table.add_column("Output")
    table.add_column("Fetched", justify="right")
    table.add_column("Copied", justify="right")

    for result in results:
        try:
            output = result.output_dir.relative_to(root)
        except ValueError:
            output = result.output_dir
        table.add_row(
            result.package,
            result.version,
            str(output),
            str(len(result.fetched)),
            str(len(result.copied)),
        )

    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = make_arg_parser().parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")
    if args.quiet:
        set_level("WARNING")

    try:
        config = _load_config(args)
        results = asyncio.run(VendorBuilder(config).build_all())
    except VendorBuildError as e:
        logger.debug("Build failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    print_summary(results, config.root)


if __name__ == "__main__":
    main()
