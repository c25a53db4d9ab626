"""
Script Class Scanner
====================

This module provides the high-level interface for enumerating the
classes declared in script files:

    File → Decode (UTF-8) → Lex → Scan declarations → ClassDecl list

Usage
-----
Command line:
    $ csclasses Scripts/

Programmatic:
    >>> from script_scanner import scan_classes
    >>> for decl in scan_classes('namespace Game { class Player : Node { } }'):
    ...     print(decl.full_name, decl.base)
    Game.Player ('Node',)

Error Handling
--------------
Scanning one source stops at its first error and raises it; no partial
declaration list is returned. ScriptClassScanner.scan_files() scans a
batch, keeps going past failing files and reports every file's outcome
as a ScanResult.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from script_scanner.decls import ClassDecl
from script_scanner.errors import (
    ScanErrorCollector,
    ScriptScanError,
    SourceEncodingError,
)
from script_scanner.parser import DeclarationScanner

logger = logging.getLogger(__name__)


@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        encoding: Codec used to decode source files. The default accepts
            UTF-8 with or without a byte order mark.
        on_ignored_generic: Called with the namespace-qualified name of
            every generic class that is parsed but left out of the result.
    """
    encoding: str = "utf-8-sig"
    on_ignored_generic: Optional[Callable[[str], None]] = None


@dataclass
class ScanResult:
    """
    Outcome of scanning one source.

    Exactly one of `classes` (on success) and `error` (on failure) is
    meaningful: a failed scan keeps no declarations.

    Attributes:
        filename: Source filename
        classes: Declarations found, in source order
        error: The error that stopped the scan
    """
    filename: str = ""
    classes: list[ClassDecl] = field(default_factory=list)
    error: Optional[ScriptScanError] = None

    @property
    def success(self) -> bool:
        return self.error is None


def read_source(path: str | Path, encoding: str = "utf-8-sig") -> str:
    """
    Read and decode a script file.

    Args:
        path: Path to the script file
        encoding: Codec to decode with (strict error handling)

    Returns:
        The decoded source text

    Raises:
        FileNotFoundError: If the file does not exist
        SourceEncodingError: If the file is not valid in the given encoding
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    data = path.read_bytes()
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise SourceEncodingError(str(path), e.reason) from e


class ScriptClassScanner:
    """
    Enumerates class declarations in script sources.

    Example:
        scanner = ScriptClassScanner()
        for decl in scanner.scan_file("Scripts/Player.cs"):
            print(decl.full_name)

    Attributes:
        options: Scanner configuration options
    """

    def __init__(self, options: Optional[ScannerOptions] = None):
        self.options = options or ScannerOptions()

    def scan_source(self, source: str, filename: str = "<input>") -> list[ClassDecl]:
        """
        Scan decoded source text.

        Args:
            source: Script source
            filename: Source name attached to errors

        Returns:
            Non-generic class declarations in source order

        Raises:
            ScriptScanError: If scanning fails
        """
        scanner = DeclarationScanner(
            source,
            on_ignored_generic=self.options.on_ignored_generic,
        )
        try:
            classes = scanner.parse()
        except ScriptScanError as e:
            e.filename = filename
            raise

        logger.debug(f"{filename}: {len(classes)} classes")
        return classes

    def scan_file(self, path: str | Path) -> list[ClassDecl]:
        """
        Read and scan a script file.

        Raises:
            FileNotFoundError: If the file does not exist
            ScriptScanError: If decoding or scanning fails
        """
        source = read_source(path, self.options.encoding)
        return self.scan_source(source, str(path))

    def scan_files(
        self,
        paths: Iterable[str | Path],
        collector: Optional[ScanErrorCollector] = None,
    ) -> list[ScanResult]:
        """
        Scan several files, continuing past files that fail.

        Args:
            paths: Script files to scan
            collector: Optional collector that receives every failure

        Returns:
            One ScanResult per path, in the given order
        """
        results = []

        for path in paths:
            result = ScanResult(filename=str(path))
            if collector is not None:
                collector.count_file()

            try:
                result.classes = self.scan_file(path)
            except ScriptScanError as e:
                logger.debug(f"{path}: scan failed: {e}")
                result.error = e
                if collector is not None:
                    collector.add(e)

            results.append(result)

        return results


# =============================================================================
# Convenience Functions
# =============================================================================

def scan_classes(source: str, filename: str = "<input>") -> list[ClassDecl]:
    """
    Return the non-generic class declarations in source text.

    Raises:
        ScriptScanError: If scanning fails

    Example:
        >>> [d.name for d in scan_classes('struct S { class C { } }')]
        ['S.C']
    """
    return ScriptClassScanner().scan_source(source, filename)


def scan_file(path: str | Path, options: Optional[ScannerOptions] = None) -> list[ClassDecl]:
    """
    Return the non-generic class declarations in a script file.

    Raises:
        FileNotFoundError: If the file does not exist
        ScriptScanError: If decoding or scanning fails
    """
    return ScriptClassScanner(options).scan_file(path)
