"""
Script Lexer (Tokenizer)
========================

This module implements a pull lexer for C#-style script sources. It
hands out one token per call and keeps no token buffer: the only state
is the cursor (character offset and current line), which can be saved
and restored to look ahead without consuming input.

Token Categories
----------------
- Punctuation: [ ] { } ( ) . ? : , < > each have their own kind
- Symbol: any other punctuation character, one per token (=, ;, +, /, ...)
- Identifier: letters, digits, underscore and any code point above 127;
  a leading @ (escaped keyword) stays part of the text
- String: '...' and "..." literals, decoded; @"..." is verbatim
- Number: decimal literals, parsed as float
- EOF: returned repeatedly once the input is exhausted

Skipped Input
-------------
- Whitespace (any code point <= 32)
- Directive lines: # to end of line
- Single-line comments: // comment
- Block comments: /* comment */

String Literals
---------------
Normal strings decode \\b \\t \\n \\f \\r \\" and \\\\; any other escaped
character is kept as written without its backslash. A string whose
opening quote directly follows @ is verbatim: backslashes are literal
and a doubled quote stands for one quote.

Example Usage
-------------
>>> from script_scanner.lexer import ScriptLexer
>>> lexer = ScriptLexer('class Foo : Bar { }')
>>> for token in lexer.tokenize():
...     print(token)
Token(Identifier, 'class', line 1)
Token(Identifier, 'Foo', line 1)
Token(:, line 1)
Token(Identifier, 'Bar', line 1)
Token({, line 1)
Token(}, line 1)
Token(EOF, line 1)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence
import re
import string

from script_scanner.errors import (
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds produced by the lexer.

    The enum values double as the display names used in error messages.
    """

    # === Punctuation ===
    BRACKET_OPEN = "["
    BRACKET_CLOSE = "]"
    CURLY_BRACKET_OPEN = "{"
    CURLY_BRACKET_CLOSE = "}"
    PARENS_OPEN = "("
    PARENS_CLOSE = ")"
    PERIOD = "."
    QUESTION = "?"
    COLON = ":"
    COMMA = ","
    SYMBOL = "Symbol"           # Any other punctuation character

    # === Valued Tokens ===
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"

    # === Angle Brackets (generic argument lists) ===
    OP_LESS = "<"
    OP_GREATER = ">"

    # === Structural ===
    EOF = "EOF"

    @property
    def display_name(self) -> str:
        """Name of this token kind as shown in error messages."""
        return self.value


# =============================================================================
# Token and Cursor Data Classes
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token. Tokens are produced on demand and never stored in
    a stream.

    Attributes:
        type: The TokenType classification
        value: Scanned text for identifiers, symbols and strings, the
            parsed float for numbers, None otherwise
        line: Line on which the token starts (1-indexed)
    """
    type: TokenType
    value: str | float | None = None
    line: int = 1

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.value}, {self.value!r}, line {self.line})"
        return f"Token({self.type.value}, line {self.line})"

    def is_identifier(self, text: Optional[str] = None) -> bool:
        """Return True for an identifier token, optionally with the given text."""
        if self.type is not TokenType.IDENTIFIER:
            return False
        return text is None or self.value == text


@dataclass(frozen=True)
class ScanCursor:
    """
    Restorable lexer position.

    Attributes:
        position: Character offset into the source
        line: Current line number (1-indexed)
    """
    position: int
    line: int


# =============================================================================
# Lexer Implementation
# =============================================================================

class ScriptLexer:
    """
    Tokenizes script source one token at a time.

    Usage:
        lexer = ScriptLexer(source_text)
        token = lexer.next_token()
        if lexer.probe(TokenType.OP_LESS):
            ...

    Attributes:
        source: The source text being tokenized
    """

    # Characters that can start an identifier (besides @ and code points > 127)
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier (besides code points > 127)
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Single-character punctuation with a dedicated token kind
    PUNCTUATION = {
        "[": TokenType.BRACKET_OPEN,
        "]": TokenType.BRACKET_CLOSE,
        "{": TokenType.CURLY_BRACKET_OPEN,
        "}": TokenType.CURLY_BRACKET_CLOSE,
        "(": TokenType.PARENS_OPEN,
        ")": TokenType.PARENS_CLOSE,
        "<": TokenType.OP_LESS,
        ">": TokenType.OP_GREATER,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
        ".": TokenType.PERIOD,
        "?": TokenType.QUESTION,
    }

    # Code point ranges (inclusive) emitted as one-character SYMBOL tokens.
    # Characters in these ranges that have a dedicated meaning (quotes,
    # '#', '/', punctuation above, a '-' that starts a number) are
    # handled before this table is consulted.
    SYMBOL_RANGES = (
        (33, 39),       # ! " # $ % & '
        (42, 47),       # * + , - . /
        (58, 62),       # : ; < = >
        (91, 94),       # [ \ ] ^
        (96, 96),       # `
        (123, 127),     # { | } ~ DEL
    )

    # Escape sequences decoded in non-verbatim strings
    ESCAPE_SEQUENCES = {
        "b": "\b",
        "t": "\t",
        "n": "\n",
        "f": "\f",
        "r": "\r",
        '"': '"',
        "\\": "\\",
    }

    # Longest numeric lexeme accepted by float()
    NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?")

    # Sentinel returned past the end of the source
    END = "\0"

    def __init__(self, source: str):
        """
        Initialize the lexer with source text.

        Args:
            source: The decoded script source
        """
        self.source = source

        # Current position in source
        self._pos = 0
        self._line = 1

    @property
    def line(self) -> int:
        """Current line number (1-indexed)."""
        return self._line

    # =========================================================================
    # Cursor Save / Restore
    # =========================================================================

    def save(self) -> ScanCursor:
        """Snapshot the cursor."""
        return ScanCursor(self._pos, self._line)

    def restore(self, cursor: ScanCursor) -> None:
        """Rewind to a cursor returned by save()."""
        self._pos = cursor.position
        self._line = cursor.line

    def probe(self, expected: TokenType) -> bool:
        """
        Check whether the next token has the expected kind without
        consuming it.
        """
        return self.probe_sequence((expected,))

    def probe_sequence(self, expected: Sequence[TokenType]) -> bool:
        """
        Check whether the next tokens have the expected kinds, in order,
        without consuming them.

        The cursor is restored whatever the outcome, including when the
        lexer raises while probing.
        """
        cursor = self.save()
        try:
            for token_type in expected:
                if self.next_token().type is not token_type:
                    return False
            return True
        finally:
            self.restore(cursor)

    def peek_char(self) -> str:
        """Return the raw character at the cursor (END past the source)."""
        return self._peek()

    # =========================================================================
    # Token Production
    # =========================================================================

    def tokenize(self) -> Iterator[Token]:
        """
        Generate every token up to and including EOF.

        Raises:
            ScriptSyntaxError: On lexical errors
        """
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token, skipping whitespace, comments
        and directive lines.

        Raises:
            UnterminatedCommentError: Block comment without */
            UnterminatedStringError: String without closing delimiter
            UnexpectedCharacterError: Character that starts no token
        """
        while True:
            char = self._peek()

            if char == self.END:
                return Token(TokenType.EOF, line=self._line)

            if char in self.PUNCTUATION:
                self._pos += 1
                return Token(self.PUNCTUATION[char], line=self._line)

            # Directive: skip to end of line
            if char == "#":
                self._skip_to_end_of_line()
                continue

            if char == "/":
                next_char = self._peek(1)
                if next_char == "*":
                    self._skip_block_comment()
                    continue
                if next_char == "/":
                    self._skip_to_end_of_line()
                    continue
                self._pos += 1
                return Token(TokenType.SYMBOL, "/", self._line)

            if char in "'\"":
                return self._scan_string()

            if ord(char) <= 32:
                self._advance()
                continue

            if char in string.digits or (char == "-" and self._peek(1) in string.digits):
                return self._scan_number()

            if self._is_symbol(char):
                self._pos += 1
                return Token(TokenType.SYMBOL, char, self._line)

            if char == "@" and self._peek(1) == '"':
                # Verbatim string marker; the string scan looks back at it
                self._pos += 1
                continue

            if char == "@" or char in self.IDENT_START or ord(char) > 127:
                return self._scan_identifier()

            raise UnexpectedCharacterError(char, self._line)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        """Character at cursor + offset, or END past the source."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return self.END
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, counting newlines."""
        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
        return char

    def _is_symbol(self, char: str) -> bool:
        code = ord(char)
        return any(low <= code <= high for low, high in self.SYMBOL_RANGES)

    # =========================================================================
    # Comment Handling
    # =========================================================================

    def _skip_to_end_of_line(self) -> None:
        """Skip a // comment or # directive, leaving the newline."""
        while self._peek() not in ("\n", self.END):
            self._pos += 1

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment (/* ... */).

        Raises:
            UnterminatedCommentError: If input ends before */
        """
        self._pos += 2  # consume /*

        while True:
            char = self._peek()
            if char == self.END:
                raise UnterminatedCommentError(self._line)
            if char == "*" and self._peek(1) == "/":
                self._pos += 2
                return
            self._advance()

    # =========================================================================
    # Literal and Identifier Scanning
    # =========================================================================

    def _scan_string(self) -> Token:
        """
        Scan a string or character literal starting at its delimiter.

        Raises:
            UnterminatedStringError: If input ends before the closing delimiter
        """
        start_line = self._line
        verbatim = self._pos > 0 and self.source[self._pos - 1] == "@"
        delimiter = self._advance()

        chars = []
        while True:
            char = self._peek()

            if char == self.END:
                raise UnterminatedStringError(self._line)

            if char == delimiter:
                if verbatim and self._peek(1) == delimiter:
                    # Doubled delimiter inside a verbatim string
                    chars.append(delimiter)
                    self._pos += 2
                    continue
                self._pos += 1
                break

            if char == "\\" and not verbatim:
                self._pos += 1
                escaped = self._peek()
                if escaped == self.END:
                    raise UnterminatedStringError(self._line)
                self._advance()
                chars.append(self.ESCAPE_SEQUENCES.get(escaped, escaped))
                continue

            chars.append(self._advance())

        return Token(TokenType.STRING, "".join(chars), start_line)

    def _scan_number(self) -> Token:
        """Scan the longest numeric lexeme at the cursor."""
        match = self.NUMBER_PATTERN.match(self.source, self._pos)
        self._pos = match.end()
        return Token(TokenType.NUMBER, float(match.group()), self._line)

    def _scan_identifier(self) -> Token:
        """
        Scan an identifier. The first character (which may be the @
        escape marker) is taken as is.
        """
        start = self._pos
        self._pos += 1

        while True:
            char = self._peek()
            if char in self.IDENT_CHARS or ord(char) > 127:
                self._pos += 1
            else:
                break

        return Token(TokenType.IDENTIFIER, self.source[start:self._pos], self._line)
