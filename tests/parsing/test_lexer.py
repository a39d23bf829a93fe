"""
Tests for the Commander DSL lexer.

Covers token kinds, trivia skipping and the positions attached to lexing
errors.
"""

import pytest

from commander.exceptions import CommandSyntaxError
from commander.parsing.lexer import TokenKind, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [token.kind for token in tokenize(source)]


class TestTokenKinds:
    """Tests for recognising each token kind."""

    def test_empty_source_is_single_eof(self):
        """Test that empty input yields only the EOF token."""
        tokens = tokenize("")
        assert [t.kind for t in tokens] == [TokenKind.EOF]
        assert tokens[0].offset == 0

    def test_required_argument_tokens(self):
        """Test the token sequence of a typed argument."""
        assert kinds("<x:Integer>") == [
            TokenKind.LANGLE,
            TokenKind.IDENTIFIER,
            TokenKind.COLON,
            TokenKind.IDENTIFIER,
            TokenKind.RANGLE,
            TokenKind.EOF,
        ]

    def test_arrows(self):
        """Test that both action arrows lex as single tokens."""
        assert kinds("-> |>") == [TokenKind.ARROW, TokenKind.PIPE_ARROW, TokenKind.EOF]

    def test_in_keyword_only_as_whole_word(self):
        """Test that 'in' is a keyword but identifiers containing it are not."""
        assert kinds("in inner bin") == [
            TokenKind.IN,
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
            TokenKind.EOF,
        ]

    def test_import_keyword(self):
        """Test the ~import directive token."""
        tokens = tokenize("~import com.example.Foo")
        assert tokens[0].kind == TokenKind.IMPORT
        assert [t.text for t in tokens[1:-1]] == ["com", ".", "example", ".", "Foo"]

    def test_string_value_strips_quotes(self):
        """Test that quoted strings keep quotes in text but not in value."""
        token = tokenize('"hello world"')[0]
        assert token.kind == TokenKind.STRING
        assert token.text == '"hello world"'
        assert token.value == "hello world"

    def test_integer_and_decimal_parts(self):
        """Test that decimals lex as integer, dot, integer."""
        assert kinds("1.5") == [
            TokenKind.INTEGER,
            TokenKind.DOT,
            TokenKind.INTEGER,
            TokenKind.EOF,
        ]

    def test_token_offsets(self):
        """Test that offsets and ends point into the source."""
        tokens = tokenize("tp  <x")
        assert [(t.offset, t.end) for t in tokens[:-1]] == [(0, 2), (4, 5), (5, 6)]


class TestTrivia:
    """Tests for whitespace and comment skipping."""

    def test_line_comments(self):
        """Test hash and double-slash comments run to end of line."""
        source = "# heading\nping // trailing\n-> pong()"
        assert kinds(source) == [
            TokenKind.IDENTIFIER,
            TokenKind.ARROW,
            TokenKind.IDENTIFIER,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.EOF,
        ]

    def test_block_comment(self):
        """Test that block comments may span lines."""
        assert kinds("/* a\n b */ ping") == [TokenKind.IDENTIFIER, TokenKind.EOF]

    def test_newlines_are_insignificant(self):
        """Test that a definition may span several lines."""
        assert kinds("tp\n<x:Integer>\n\n-> f()") == kinds("tp <x:Integer> -> f()")


class TestLexerErrors:
    """Tests for lexing failures."""

    @pytest.mark.parametrize(
        "source",
        [
            '"unterminated',
            "/* never closed",
            "ping $",
            "ping - pong",
            "~importfoo",
        ],
    )
    def test_invalid_input_raises(self, source):
        """Test that malformed input raises a syntax error."""
        with pytest.raises(CommandSyntaxError):
            tokenize(source)

    def test_error_position(self):
        """Test that lexing errors carry line and column."""
        with pytest.raises(CommandSyntaxError) as exc_info:
            tokenize("ping -> pong()\nfoo $", source_path="main.cmds")
        context = exc_info.value.context
        assert context.line == 2
        assert context.column == 5
        assert context.source_path == "main.cmds"
        assert "line 2, column 5 of main.cmds" in str(exc_info.value)
