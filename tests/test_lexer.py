# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the script lexer/tokenizer.
#
# Test coverage includes:
#   - Punctuation, generic symbols and identifiers (including @ escapes)
#   - Numbers, strings and verbatim strings
#   - Comments, directive lines and line counting
#   - Non-consuming lookahead (probe / probe_sequence)
#   - Error conditions
# =============================================================================

import pytest

from script_scanner.lexer import ScriptLexer, TokenType, Token, ScanCursor
from script_scanner.errors import (
    ScriptSyntaxError,
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """Tokenize source and drop the trailing EOF token."""
    tokens = list(ScriptLexer(source).tokenize())
    assert tokens[-1].type == TokenType.EOF
    return tokens[:-1]


def types(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source)]


def values(source: str) -> list:
    return [t.value for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Any code point up to 32 is skipped."""
        assert tokenize(" \t\r\n\x0b\x01  ") == []

    def test_eof_is_repeated(self):
        """EOF is returned again on every later call."""
        lexer = ScriptLexer("x")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        for _ in range(3):
            assert lexer.next_token().type == TokenType.EOF

    def test_nul_character_ends_input(self):
        """A NUL character acts as the end-of-input sentinel."""
        assert values("a\0b") == ["a"]

    def test_punctuation(self):
        """Each fixed punctuation character has its own token kind."""
        assert types("[ ] { } ( ) < > : , . ?") == [
            TokenType.BRACKET_OPEN,
            TokenType.BRACKET_CLOSE,
            TokenType.CURLY_BRACKET_OPEN,
            TokenType.CURLY_BRACKET_CLOSE,
            TokenType.PARENS_OPEN,
            TokenType.PARENS_CLOSE,
            TokenType.OP_LESS,
            TokenType.OP_GREATER,
            TokenType.COLON,
            TokenType.COMMA,
            TokenType.PERIOD,
            TokenType.QUESTION,
        ]

    def test_symbols_are_single_characters(self):
        """Other punctuation comes out one character per SYMBOL token."""
        tokens = tokenize("=+ ;!")
        assert [t.type for t in tokens] == [TokenType.SYMBOL] * 4
        assert [t.value for t in tokens] == ["=", "+", ";", "!"]

    def test_symbol_values(self):
        """Symbol tokens carry their character."""
        assert values("= ; ! % & * + ^ | ~ ` \\ $") == [
            "=", ";", "!", "%", "&", "*", "+", "^", "|", "~", "`", "\\", "$",
        ]

    def test_lone_slash_is_symbol(self):
        """A '/' that does not start a comment is a symbol."""
        tokens = tokenize("a / b")
        assert tokens[1].type == TokenType.SYMBOL
        assert tokens[1].value == "/"

    def test_display_names(self):
        """Token kinds expose the names used in error messages."""
        assert TokenType.IDENTIFIER.display_name == "Identifier"
        assert TokenType.CURLY_BRACKET_OPEN.display_name == "{"
        assert TokenType.SYMBOL.display_name == "Symbol"
        assert TokenType.EOF.display_name == "EOF"


# =============================================================================
# Identifier Tests
# =============================================================================

class TestIdentifiers:
    """Test identifier scanning."""

    def test_simple_identifiers(self):
        """Letters, digits and underscores."""
        assert values("main _bar test123 _123_abc") == [
            "main", "_bar", "test123", "_123_abc",
        ]

    def test_keywords_are_identifiers(self):
        """The lexer does not distinguish keywords."""
        tokens = tokenize("class struct namespace where")
        assert all(t.type == TokenType.IDENTIFIER for t in tokens)

    def test_non_ascii_identifier(self):
        """Code points above 127 are identifier characters."""
        assert values("Jogador_é Ñandú") == ["Jogador_é", "Ñandú"]

    def test_escaped_keyword_keeps_at(self):
        """The @ escape marker stays part of the identifier text."""
        tokens = tokenize("@class")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "@class"

    def test_is_identifier_helper(self):
        """Token.is_identifier() checks kind and optional text."""
        token = tokenize("where")[0]
        assert token.is_identifier()
        assert token.is_identifier("where")
        assert not token.is_identifier("class")
        assert not Token(TokenType.COLON).is_identifier()


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:
    """Test numeric literal scanning."""

    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 42.0

    def test_decimal_and_exponent(self):
        assert values("1.5 2e3 7.25E-2") == [1.5, 2000.0, 0.0725]

    def test_negative_number(self):
        """A '-' directly followed by a digit starts a number."""
        assert values("-3") == [-3.0]

    def test_minus_without_digit_is_symbol(self):
        tokens = tokenize("a - b")
        assert tokens[1].type == TokenType.SYMBOL
        assert tokens[1].value == "-"

    def test_cursor_stops_after_number(self):
        """Characters after the numeric lexeme are scanned separately."""
        tokens = tokenize("10f;")
        assert tokens[0].value == 10.0
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "f"
        assert tokens[2].value == ";"


# =============================================================================
# String Literal Tests
# =============================================================================

class TestStrings:
    """Test string and character literal scanning."""

    def test_simple_string(self):
        tokens = tokenize('"Hello World"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "Hello World"

    def test_char_literal(self):
        """Single quotes delimit literals too."""
        tokens = tokenize("'x'")
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "x"

    def test_empty_string(self):
        assert values('""') == [""]

    def test_recognized_escapes(self):
        assert values(r'"\b\t\n\f\r\"\\"') == ["\b\t\n\f\r\"\\"]

    def test_unknown_escape_passes_through(self):
        """Other escaped characters are kept without the backslash."""
        assert values(r'"\q\'\0"') == ["q'0"]

    def test_escaped_quote(self):
        assert values(r'"a\"b"') == ['a"b']

    def test_verbatim_doubled_quote(self):
        """In a verbatim string "" stands for one quote."""
        tokens = tokenize('@"a""b"')
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == 'a"b'

    def test_verbatim_backslash_is_literal(self):
        assert values(r'@"C:\temp\new"') == [r"C:\temp\new"]

    def test_verbatim_and_escaped_decode_alike(self):
        assert values('@"a""b"') == values(r'"a\"b"')

    def test_comment_markers_inside_string(self):
        """Comment syntax inside a string is string content."""
        assert values('"// not /* a comment"') == ["// not /* a comment"]

    def test_braces_inside_string(self):
        assert types('"{ }"') == [TokenType.STRING]

    def test_multiline_string_counts_lines(self):
        lexer = ScriptLexer('@"one\ntwo"\nx')
        string_token = lexer.next_token()
        assert string_token.line == 1
        assert lexer.next_token().line == 3


# =============================================================================
# Comment and Line Tracking Tests
# =============================================================================

class TestComments:
    """Test comment and directive skipping."""

    def test_line_comment(self):
        assert values("// comment\nx") == ["x"]

    def test_block_comment(self):
        assert values("/* a\n b */ x") == ["x"]

    def test_directive_line(self):
        """'#' lines are skipped like comments."""
        assert values("#region Stuff\nx\n#endregion") == ["x"]

    def test_comment_at_end_of_input(self):
        assert tokenize("x // trailing") == tokenize("x")

    def test_line_numbers(self):
        tokens = tokenize("a\nb\n\n/* c\n */ d // e\n# f\ng")
        assert [(t.value, t.line) for t in tokens] == [
            ("a", 1), ("b", 2), ("d", 5), ("g", 7),
        ]


# =============================================================================
# Lookahead Tests
# =============================================================================

class TestLookahead:
    """Test cursor save/restore and non-consuming probes."""

    def test_save_and_restore(self):
        lexer = ScriptLexer("a\nb c")
        lexer.next_token()
        cursor = lexer.save()
        assert cursor == ScanCursor(position=1, line=1)

        lexer.next_token()
        lexer.next_token()
        assert lexer.line == 2

        lexer.restore(cursor)
        assert lexer.line == 1
        assert lexer.next_token().value == "b"

    def test_probe_does_not_consume(self):
        lexer = ScriptLexer("< x")
        assert lexer.probe(TokenType.OP_LESS)
        assert lexer.probe(TokenType.OP_LESS)
        assert not lexer.probe(TokenType.IDENTIFIER)
        assert lexer.next_token().type == TokenType.OP_LESS

    def test_probe_restores_line(self):
        lexer = ScriptLexer("\n\n\nx")
        assert lexer.probe(TokenType.IDENTIFIER)
        assert lexer.line == 1

    def test_probe_sequence_match(self):
        lexer = ScriptLexer("T : class")
        expected = [TokenType.IDENTIFIER, TokenType.COLON, TokenType.IDENTIFIER]
        assert lexer.probe_sequence(expected)
        assert lexer.next_token().value == "T"

    def test_probe_sequence_mismatch_restores(self):
        lexer = ScriptLexer("T = 1")
        expected = [TokenType.IDENTIFIER, TokenType.COLON, TokenType.IDENTIFIER]
        assert not lexer.probe_sequence(expected)
        assert lexer.next_token().value == "T"

    def test_probe_restores_after_error(self):
        """A lexical error during a probe propagates; the cursor is restored."""
        lexer = ScriptLexer('x "open')
        lexer.next_token()
        cursor = lexer.save()
        with pytest.raises(UnterminatedStringError):
            lexer.probe(TokenType.STRING)
        assert lexer.save() == cursor

    def test_peek_char(self):
        lexer = ScriptLexer("a.b")
        lexer.next_token()
        assert lexer.peek_char() == "."
        lexer.next_token()
        lexer.next_token()
        assert lexer.peek_char() == ScriptLexer.END


# =============================================================================
# Error Tests
# =============================================================================

class TestLexerErrors:
    """Test lexical error conditions."""

    def test_unterminated_comment(self):
        with pytest.raises(UnterminatedCommentError) as exc_info:
            tokenize("/* comment")
        assert str(exc_info.value) == "Line: 1 - Unterminated comment"

    def test_unterminated_comment_reports_detection_line(self):
        """The line is where input ran out, not where the comment began."""
        with pytest.raises(UnterminatedCommentError) as exc_info:
            tokenize("x\n/* one\ntwo\nthree")
        assert exc_info.value.line == 4

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('"string')
        assert str(exc_info.value) == "Line: 1 - Unterminated string"

    def test_unterminated_string_reports_detection_line(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('"one\ntwo\n')
        assert exc_info.value.line == 3

    def test_backslash_at_end_of_input(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('"abc\\')

    def test_unterminated_verbatim_string(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('@"abc""')

    def test_unexpected_character(self):
        """Characters outside the symbol table are rejected."""

        class NarrowLexer(ScriptLexer):
            SYMBOL_RANGES = ((59, 61),)

        lexer = NarrowLexer("x\n`")
        lexer.next_token()
        with pytest.raises(UnexpectedCharacterError) as exc_info:
            lexer.next_token()
        assert exc_info.value.char == "`"
        assert exc_info.value.line == 2
        assert str(exc_info.value).startswith("Line: 2 - Unexpected character")

    def test_lexer_errors_are_syntax_errors(self):
        with pytest.raises(ScriptSyntaxError):
            tokenize("/*")
