"""
Lexer for Commander DSL source.

Comments, newlines and horizontal whitespace are skipped; every other
character sequence becomes exactly one token carrying its source offset so
that the parser can anchor errors to a position.
"""

from dataclasses import dataclass
from enum import Enum

from commander.exceptions import CommandSyntaxError, ErrorContext


class TokenKind(Enum):
    """Token kinds, valued by how they are described in error messages."""

    EOF = "end of input"

    IDENTIFIER = "identifier"
    STRING = "quoted string"
    INTEGER = "integer"

    IN = "'in'"
    IMPORT = "'~import'"

    LANGLE = "'<'"
    RANGLE = "'>'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COLON = "':'"
    EQUALS = "'='"
    COMMA = "','"
    LPAREN = "'('"
    RPAREN = "')'"
    ARROW = "'->'"
    PIPE_ARROW = "'|>'"
    AT = "'@'"
    DOT = "'.'"


_SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "<": TokenKind.LANGLE,
    ">": TokenKind.RANGLE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ":": TokenKind.COLON,
    "=": TokenKind.EQUALS,
    ",": TokenKind.COMMA,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "@": TokenKind.AT,
    ".": TokenKind.DOT,
}

_IMPORT_KEYWORD = "~import"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token."""

    kind: TokenKind
    text: str
    offset: int

    @property
    def value(self) -> str:
        """Token text with surrounding quotes removed for quoted strings."""
        if self.kind == TokenKind.STRING:
            return self.text[1:-1]
        return self.text

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


def _is_identifier_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_identifier_char(ch: str) -> bool:
    return _is_identifier_start(ch) or ("0" <= ch <= "9")


class Lexer:
    """Tokenizer producing the non-trivia token stream for the parser."""

    def __init__(self, source: str, source_path: str | None = None) -> None:
        self._source = source
        self._source_path = source_path
        self._position = 0

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def lex(self) -> list[Token]:
        """
        Tokenize the whole source.

        Returns:
            Tokens in source order, terminated by a single EOF token

        Raises:
            CommandSyntaxError: On unterminated strings or block comments and
                on characters that start no token
        """
        tokens: list[Token] = []
        while True:
            self._skip_trivia()
            if self.is_eof:
                tokens.append(Token(TokenKind.EOF, "", len(self._source)))
                return tokens
            tokens.append(self._lex_token())

    def _skip_trivia(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch in " \t\r\n":
                self._position += 1
            elif ch == "#" or self._source.startswith("//", self._position):
                newline = self._source.find("\n", self._position)
                self._position = len(self._source) if newline == -1 else newline
            elif self._source.startswith("/*", self._position):
                close = self._source.find("*/", self._position + 2)
                if close == -1:
                    raise self._error("Unterminated block comment", self._position)
                self._position = close + 2
            else:
                return

    def _lex_token(self) -> Token:
        start = self._position
        ch = self._current_char()

        if ch == '"':
            close = self._source.find('"', start + 1)
            if close == -1:
                raise self._error("Unterminated string literal", start)
            return self._emit(TokenKind.STRING, close + 1)

        if ch.isdigit() and ch.isascii():
            end = start
            while end < len(self._source) and self._source[end].isdigit() and self._source[end].isascii():
                end += 1
            return self._emit(TokenKind.INTEGER, end)

        if _is_identifier_start(ch):
            end = start
            while end < len(self._source) and _is_identifier_char(self._source[end]):
                end += 1
            kind = TokenKind.IN if self._source[start:end] == "in" else TokenKind.IDENTIFIER
            return self._emit(kind, end)

        if self._source.startswith(_IMPORT_KEYWORD, start):
            end = start + len(_IMPORT_KEYWORD)
            if end < len(self._source) and _is_identifier_char(self._source[end]):
                raise self._error("Unexpected character '~'", start)
            return self._emit(TokenKind.IMPORT, end)

        if self._source.startswith("->", start):
            return self._emit(TokenKind.ARROW, start + 2)

        if self._source.startswith("|>", start):
            return self._emit(TokenKind.PIPE_ARROW, start + 2)

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            return self._emit(kind, start + 1)

        raise self._error(f"Unexpected character {ch!r}", start)

    def _emit(self, kind: TokenKind, end: int) -> Token:
        token = Token(kind, self._source[self._position : end], self._position)
        self._position = end
        return token

    def _current_char(self) -> str:
        return self._source[self._position]

    def _error(self, message: str, offset: int) -> CommandSyntaxError:
        return CommandSyntaxError(
            message, ErrorContext.from_offset(self._source, offset, self._source_path)
        )


def tokenize(source: str, source_path: str | None = None) -> list[Token]:
    """
    Convenience function to tokenize DSL source.

    Params:
        source: DSL source text
        source_path: Optional file path used in error locations

    Returns:
        Tokens in source order, terminated by EOF
    """
    return Lexer(source, source_path).lex()
