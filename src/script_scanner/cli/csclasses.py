"""
csclasses - Script Class Lister
===============================

This module implements the command-line interface for the script class
scanner. It lists the classes declared in C# script files, with their
namespace-qualified names and direct base types, without compiling them.

Usage Examples
--------------
Single file:
    $ csclasses Player.cs

Whole project (directories are searched recursively for *.cs):
    $ csclasses Scripts/

JSON output to a file:
    $ csclasses Scripts/ --format json -o classes.json

Verbose mode (also reports ignored generic classes):
    $ csclasses -v Scripts/
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from script_scanner import __version__
from script_scanner.cli.errors import ExitCode, handle_cli_exception
from script_scanner.errors import ScanErrorCollector
from script_scanner.scanner import ScanResult, ScriptClassScanner

logger = logging.getLogger(__name__)

# Extension of script files picked up from directories
SOURCE_SUFFIX = ".cs"


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def collect_source_files(paths: tuple[Path, ...]) -> list[Path]:
    """
    Expand the command-line paths into the list of files to scan.

    Files are taken as given; directories contribute every *.cs file
    below them, sorted. Duplicates are dropped, first occurrence wins.

    Raises:
        click.BadParameter: If no script file is found
    """
    files: list[Path] = []
    seen: set[Path] = set()

    for path in paths:
        if path.is_dir():
            candidates = sorted(path.rglob(f"*{SOURCE_SUFFIX}"))
        else:
            candidates = [path]

        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)

    if not files:
        raise click.BadParameter(f"no {SOURCE_SUFFIX} files found", param_hint="PATHS")

    return files


def format_text(results: list[ScanResult], top_level: bool) -> str:
    """One line per class: 'Namespace.Name : Base1, Base2  (nested)'."""
    lines = []

    for result in results:
        for decl in result.classes:
            if top_level and decl.nested:
                continue
            line = decl.full_name
            if decl.base:
                line += " : " + ", ".join(decl.base)
            if decl.nested:
                line += "  (nested)"
            lines.append(line)

    return "\n".join(lines)


def format_json(results: list[ScanResult], top_level: bool) -> str:
    """A JSON list with one object per class, tagged with its file."""
    entries = []

    for result in results:
        for decl in result.classes:
            if top_level and decl.nested:
                continue
            entries.append({"file": result.filename, **decl.to_dict()})

    return json.dumps(entries, indent=2)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Listing format",
)
@click.option(
    "--top-level",
    is_flag=True,
    help="Omit classes nested inside other classes or structs",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the listing to a file instead of stdout",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first file that fails to scan",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (reports ignored generic classes)",
)
@click.version_option(version=__version__, prog_name="csclasses")
def main(
    paths: tuple[Path, ...],
    output_format: str,
    top_level: bool,
    output: Optional[Path],
    fail_fast: bool,
    verbose: bool,
) -> None:
    """
    List the classes declared in C# script files.

    PATHS are script files or directories (searched recursively for
    *.cs files).

    Generic classes and structs are not listed. Base types are shown as
    written, without generic arguments.

    \b
    Examples:
        csclasses Player.cs                  # One file
        csclasses Scripts/                   # Whole directory tree
        csclasses Scripts/ --format json     # Machine-readable listing
        csclasses Scripts/ --top-level       # Skip nested classes
    """
    setup_logging(verbose)

    try:
        files = collect_source_files(paths)
        logger.debug(f"Scanning {len(files)} files")

        scanner = ScriptClassScanner()
        collector = ScanErrorCollector()

        if fail_fast:
            results = []
            for path in files:
                collector.count_file()
                results.append(ScanResult(str(path), scanner.scan_file(path)))
        else:
            results = scanner.scan_files(files, collector)

        ok_results = [r for r in results if r.success]
        if output_format.lower() == "json":
            listing = format_json(ok_results, top_level)
        else:
            listing = format_text(ok_results, top_level)

        if output is not None:
            output.write_text(listing + "\n", encoding="utf-8")
            if verbose:
                click.echo(f"Wrote listing to {output}")
        elif listing:
            click.echo(listing)

        if collector.has_errors():
            click.echo(collector.report(), err=True)
            sys.exit(ExitCode.SCAN_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
