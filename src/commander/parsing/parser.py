"""
Parser for the Commander command-grammar DSL.

This module turns DSL source into a CommandFile. The grammar is parsed by
recursive descent over the lexer's token stream; the bracketed argument
forms share a common prefix and are tried in a fixed order, backtracking
when an alternative fails.
"""

from collections.abc import Callable
from typing import TypeVar

from commander.core.types import ArgType
from commander.exceptions import (
    CommandSyntaxError,
    ErrorContext,
    StructuralPreconditionError,
    UnknownArgTypeError,
)
from commander.parsing.lexer import Lexer, Token, TokenKind
from commander.parsing.nodes import (
    AutoCall,
    CommandAction,
    CommandDef,
    CommandFile,
    CommandToken,
    ExplicitCall,
    LiteralToken,
    OptionalArg,
    OptionalEnumArg,
    RequiredArg,
    RequiredEnumArg,
)

T = TypeVar("T")

_WORD_KINDS = (TokenKind.IDENTIFIER, TokenKind.STRING)
_TOKEN_START_KINDS = (TokenKind.LANGLE, TokenKind.LBRACKET, *_WORD_KINDS)


class CommandParser:
    """Recursive-descent parser for one DSL source text."""

    def __init__(self, source: str, source_path: str | None = None):
        self._source = source
        self._source_path = source_path
        self._tokens: list[Token] = []
        self._position = 0

    def parse(self) -> CommandFile:
        """
        Parse the complete source.

        Returns:
            CommandFile with imports and command definitions in source order

        Raises:
            CommandSyntaxError: If the source does not match the grammar
            UnknownArgTypeError: If an argument names a type outside ArgType
            StructuralPreconditionError: If a command does not start with a literal
        """
        self._tokens = Lexer(self._source, self._source_path).lex()
        self._position = 0

        imports: list[str] = []
        while self._at(TokenKind.IMPORT):
            self._advance()
            imports.append(self._parse_dotted_identifier())

        commands: list[CommandDef] = []
        while not self._at(TokenKind.EOF):
            commands.append(self._parse_command_def())

        return CommandFile(imports=tuple(imports), commands=tuple(commands))

    # ------------------------------------------------------------------
    # Command definitions
    # ------------------------------------------------------------------

    def _parse_command_def(self) -> CommandDef:
        permission_level = 0
        if self._at(TokenKind.AT):
            self._advance()
            permission_level = int(self._expect(TokenKind.INTEGER).text)

        first = self._current()
        tokens: list[CommandToken] = []
        while self._current().kind in _TOKEN_START_KINDS:
            tokens.append(self._parse_command_token())

        if not tokens:
            raise self._unexpected(["'<'", "'['", "identifier", "quoted string"])

        if not isinstance(tokens[0], LiteralToken):
            raise StructuralPreconditionError(
                f"Command must start with a literal word, got {tokens[0]}",
                self._context(first),
            )

        action = self._parse_action()
        return CommandDef(
            tokens=tuple(tokens), action=action, permission_level=permission_level
        )

    def _parse_command_token(self) -> CommandToken:
        current = self._current()
        if current.kind == TokenKind.LANGLE:
            return self._first_of(self._parse_required_enum_arg, self._parse_required_arg)
        if current.kind == TokenKind.LBRACKET:
            return self._first_of(self._parse_optional_enum_arg, self._parse_optional_typed_arg)
        return LiteralToken(self._parse_word_value())

    def _parse_required_enum_arg(self) -> RequiredEnumArg:
        self._expect(TokenKind.LANGLE)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.IN)
        values = self._parse_enum_values()
        self._expect(TokenKind.RANGLE)
        return RequiredEnumArg(name=name, values=values)

    def _parse_required_arg(self) -> RequiredArg:
        self._expect(TokenKind.LANGLE)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.COLON)
        arg_type = self._parse_arg_type()
        self._expect(TokenKind.RANGLE)
        return RequiredArg(name=name, type=arg_type)

    def _parse_optional_enum_arg(self) -> OptionalEnumArg:
        self._expect(TokenKind.LBRACKET)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.IN)
        values = self._parse_enum_values()
        default = ""
        if self._at(TokenKind.EQUALS):
            self._advance()
            default = self._parse_default_value()
        self._expect(TokenKind.RBRACKET)
        return OptionalEnumArg(name=name, values=values, default=default)

    def _parse_optional_typed_arg(self) -> OptionalArg:
        self._expect(TokenKind.LBRACKET)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.COLON)
        arg_type = self._parse_arg_type()
        self._expect(TokenKind.EQUALS)
        default = self._parse_default_value()
        self._expect(TokenKind.RBRACKET)
        return OptionalArg(name=name, type=arg_type, default=default)

    def _parse_enum_values(self) -> tuple[str, ...]:
        self._expect(TokenKind.LBRACKET)
        values = [self._parse_word_value()]
        while self._at(TokenKind.COMMA):
            self._advance()
            values.append(self._parse_word_value())
        self._expect(TokenKind.RBRACKET)
        return tuple(values)

    def _parse_arg_type(self) -> ArgType:
        token = self._expect(TokenKind.IDENTIFIER)
        arg_type = ArgType.lookup(token.text)
        if arg_type is None:
            raise UnknownArgTypeError(token.text, ArgType.names(), self._context(token))
        return arg_type

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _parse_action(self) -> CommandAction:
        if self._at(TokenKind.ARROW):
            self._advance()
            function = self._parse_dotted_identifier()
            return ExplicitCall(function=function, args=self._parse_call_args())
        if self._at(TokenKind.PIPE_ARROW):
            self._advance()
            return AutoCall(function=self._parse_dotted_identifier())
        raise self._unexpected(
            ["'<'", "'['", "identifier", "quoted string", "'->'", "'|>'"]
        )

    def _parse_call_args(self) -> tuple[str, ...]:
        self._expect(TokenKind.LPAREN)
        args: list[str] = []
        if not self._at(TokenKind.RPAREN):
            args.append(self._parse_word_value())
            while self._at(TokenKind.COMMA):
                self._advance()
                args.append(self._parse_word_value())
        self._expect(TokenKind.RPAREN)
        return tuple(args)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_word_value(self) -> str:
        current = self._current()
        if current.kind not in _WORD_KINDS:
            raise self._unexpected(["identifier", "quoted string"])
        self._advance()
        return current.value

    def _parse_default_value(self) -> str:
        """Word value, or an integer/decimal number written without quotes."""
        if not self._at(TokenKind.INTEGER):
            return self._parse_word_value()
        whole = self._advance()
        dot = self._current()
        fraction = self._peek(1)
        if (
            dot.kind == TokenKind.DOT
            and dot.offset == whole.end
            and fraction.kind == TokenKind.INTEGER
            and fraction.offset == dot.end
        ):
            self._advance()
            self._advance()
            return f"{whole.text}.{fraction.text}"
        return whole.text

    def _parse_dotted_identifier(self) -> str:
        parts = [self._expect(TokenKind.IDENTIFIER).text]
        while self._at(TokenKind.DOT):
            self._advance()
            parts.append(self._expect(TokenKind.IDENTIFIER).text)
        return ".".join(parts)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _first_of(self, *alternatives: Callable[[], T]) -> T:
        """Try alternatives in order, rewinding after each failure.

        When every alternative fails, the error that got furthest into the
        input is reported.
        """
        saved = self._position
        furthest: CommandSyntaxError | None = None
        furthest_offset = -1
        for alternative in alternatives:
            try:
                return alternative()
            except CommandSyntaxError as exc:
                offset = exc.context.offset if exc.context and exc.context.offset is not None else -1
                if offset > furthest_offset:
                    furthest, furthest_offset = exc, offset
                self._position = saved
        assert furthest is not None
        raise furthest

    def _current(self) -> Token:
        return self._tokens[self._position]

    def _peek(self, distance: int) -> Token:
        index = min(self._position + distance, len(self._tokens) - 1)
        return self._tokens[index]

    def _at(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        token = self._current()
        if token.kind != TokenKind.EOF:
            self._position += 1
        return token

    def _expect(self, kind: TokenKind) -> Token:
        if not self._at(kind):
            raise self._unexpected([kind.value])
        return self._advance()

    def _unexpected(self, expected: list[str]) -> CommandSyntaxError:
        current = self._current()
        found = current.kind.value if current.kind == TokenKind.EOF else repr(current.text)
        return CommandSyntaxError(
            f"Unexpected {found}", self._context(current), expected=expected
        )

    def _context(self, token: Token) -> ErrorContext:
        return ErrorContext.from_offset(self._source, token.offset, self._source_path)


def parse_commands(source: str, source_path: str | None = None) -> CommandFile:
    """
    Convenience function to parse DSL source.

    Params:
        source: DSL source text
        source_path: Optional file path used in error locations

    Returns:
        Parsed CommandFile

    Raises:
        CommandSyntaxError: If the source is malformed
        UnknownArgTypeError: If an argument type name is not recognised
        StructuralPreconditionError: If a command does not start with a literal
    """
    parser = CommandParser(source, source_path)
    return parser.parse()
