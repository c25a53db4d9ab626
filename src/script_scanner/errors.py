"""
Script Scanner Error Hierarchy
==============================

This module defines the exception hierarchy for the script class scanner.
All exceptions inherit from ScriptScanError, allowing callers to catch
every scanner-related failure with a single except clause.

Exception Hierarchy
-------------------
ScriptScanError (base)
├── ScriptSyntaxError - line-anchored lexer and parser errors
│   ├── UnterminatedCommentError - block comment without closing */
│   ├── UnterminatedStringError - string literal without closing quote
│   ├── UnexpectedCharacterError - character outside the lexical grammar
│   ├── UnexpectedTokenError - token with no accepted continuation
│   ├── ExpectedTokenError - a specific token kind was required
│   │   └── MissingIdentifierError - declaration without a name
│   ├── NestedNamespaceError - namespace opened inside a type body
│   └── UnexpectedEOFError - input ended mid-declaration
├── UnbalancedBracesError - input ended with open braces
└── SourceEncodingError - file is not valid UTF-8

Error Message Format
--------------------
Line-anchored errors render as:

    Line: 12 - Unexpected token: Symbol

Errors that are not tied to a single token (unbalanced braces, invalid
encoding) render as the bare description.

All errors are fatal: the scanner stops at the first one and never
returns a partial declaration list.
"""

from typing import Optional, List


# =============================================================================
# Base Exception Class
# =============================================================================

class ScriptScanError(Exception):
    """
    Base exception for all script scanner errors.

    Attributes:
        message: The error description
        line: 1-based line where the error was detected (optional)
        filename: Source file being scanned, set by file-level APIs (optional)
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        filename: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.filename = filename
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format as 'Line: <n> - <message>' when a line is known."""
        if self.line is not None:
            return f"Line: {self.line} - {self.message}"
        return self.message


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class ScriptSyntaxError(ScriptScanError):
    """
    Syntax error in script source code.

    Raised when the lexer or the declaration scanner meets input it
    cannot continue from. Always carries the line number at which the
    problem was detected.
    """

    def __init__(self, message: str, line: int):
        super().__init__(message, line=line)


class UnterminatedCommentError(ScriptSyntaxError):
    """
    Block comment reaches end of input without a closing */.

    The reported line is where end of input was reached, which is after
    every newline inside the comment has been counted.
    """

    def __init__(self, line: int):
        super().__init__("Unterminated comment", line)


class UnterminatedStringError(ScriptSyntaxError):
    """
    String or character literal reaches end of input without its
    closing delimiter.

    Example:
        var s = "hello
    """

    def __init__(self, line: int):
        super().__init__("Unterminated string", line)


class UnexpectedCharacterError(ScriptSyntaxError):
    """Character that cannot start any token."""

    def __init__(self, char: str, line: int):
        self.char = char
        super().__init__(
            f"Unexpected character '{char}' (U+{ord(char):04X})",
            line,
        )


class UnexpectedTokenError(ScriptSyntaxError):
    """
    Token that does not match any accepted continuation.

    Attributes:
        found: Display name of the offending token
    """

    def __init__(self, found: str, line: int):
        self.found = found
        super().__init__(f"Unexpected token: {found}", line)


class ExpectedTokenError(ScriptSyntaxError):
    """
    A specific token kind was required but another one was found.

    Attributes:
        expected: Display name of the required token
        found: Display name of the token actually read
    """

    def __init__(
        self,
        expected: str,
        found: str,
        line: int,
        context: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        where = f" {context}" if context else ""
        super().__init__(f"Expected {expected}{where}, found: {found}", line)


class MissingIdentifierError(ExpectedTokenError):
    """
    Declaration keyword not followed by the name it requires.

    Example:
        struct { }    // no struct name before the body
    """

    def __init__(self, keyword: str, found: str, line: int):
        self.keyword = keyword
        super().__init__(
            "Identifier",
            found,
            line,
            context=f"after keyword `{keyword}`",
        )


class NestedNamespaceError(ScriptSyntaxError):
    """
    Namespace declared inside a class or struct body.

    Example:
        class C { namespace N { } }
    """

    def __init__(self, line: int):
        super().__init__("Found namespace nested inside type.", line)


class UnexpectedEOFError(ScriptSyntaxError):
    """Input ended in the middle of a declaration header."""

    def __init__(self, expected: str, construct: str, line: int):
        self.expected = expected
        self.construct = construct
        super().__init__(f"Expected {expected} after {construct}, found: EOF", line)


# =============================================================================
# Structural and Input Errors
# =============================================================================

class UnbalancedBracesError(ScriptScanError):
    """
    Input ended while braces were still open.

    This is a global property of the source rather than a fault at one
    token, so no line number is attached.
    """

    def __init__(self, open_braces: int):
        self.open_braces = open_braces
        super().__init__("Reached EOF with missing close curly brackets.")


class SourceEncodingError(ScriptScanError):
    """Source file could not be decoded as UTF-8."""

    def __init__(self, filename: str, reason: str):
        self.reason = reason
        super().__init__(
            f"File '{filename}' contains invalid unicode (UTF-8), so it was "
            f"not loaded ({reason}). Please ensure that scripts are saved "
            f"in valid UTF-8 unicode.",
            filename=filename,
        )


# =============================================================================
# Error Collection (for batch scans)
# =============================================================================

class ScanErrorCollector:
    """
    Collects per-file scan failures for batch reporting.

    A single source never yields more than one error, but a batch scan
    over many files keeps going after a failing file and reports all of
    them together at the end.

    Example:
        collector = ScanErrorCollector()

        for path in paths:
            collector.count_file()
            try:
                scanner.scan_file(path)
            except ScriptScanError as e:
                collector.add(e)

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: List[ScriptScanError] = []
        self.files_scanned = 0

    def count_file(self) -> None:
        """Record that one more file was attempted."""
        self.files_scanned += 1

    def add(self, error: ScriptScanError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors, one per line, followed by a summary line."""
        lines = []

        for error in self.errors:
            if error.filename:
                lines.append(f"{error.filename}: {error}")
            else:
                lines.append(str(error))

        file_word = "file" if self.files_scanned == 1 else "files"
        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(
            f"{self.files_scanned} {file_word} scanned, "
            f"{len(self.errors)} {error_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and reset the file count."""
        self.errors.clear()
        self.files_scanned = 0
