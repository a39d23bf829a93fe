"""
Abstract syntax tree for Commander DSL command files.

Every value here is immutable once parsed. Command tokens and actions are
small closed families of dataclasses; consumers dispatch over them with
``match`` statements.
"""

import re
from dataclasses import dataclass

from commander.core.types import ArgType
from commander.exceptions import StructuralPreconditionError

_BAREWORD = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NUMBER = re.compile(r"^[0-9]+(\.[0-9]+)?$")


def _word(value: str) -> str:
    """Render a word value, quoting it unless it lexes as a plain bareword."""
    if _BAREWORD.match(value) and value != "in":
        return value
    return f'"{value}"'


def _default(value: str) -> str:
    """Render a default value; numbers may be written unquoted."""
    if _NUMBER.match(value):
        return value
    return _word(value)


@dataclass(frozen=True)
class LiteralToken:
    """A fixed keyword that must match exactly at runtime."""

    text: str

    @property
    def binding_name(self) -> None:
        return None

    def __str__(self) -> str:
        return _word(self.text)


@dataclass(frozen=True)
class RequiredArg:
    """A mandatory typed argument (<name:Type>)."""

    name: str
    type: ArgType

    @property
    def binding_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"<{self.name}:{self.type.value}>"


@dataclass(frozen=True)
class OptionalArg:
    """A typed argument that may be omitted ([name:Type=default])."""

    name: str
    type: ArgType
    default: str

    @property
    def binding_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"[{self.name}:{self.type.value}={_default(self.default)}]"


@dataclass(frozen=True)
class RequiredEnumArg:
    """A mandatory argument restricted to an ordered set of literal values."""

    name: str
    values: tuple[str, ...]

    @property
    def binding_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"<{self.name} in [{', '.join(_word(v) for v in self.values)}]>"


@dataclass(frozen=True)
class OptionalEnumArg:
    """An omittable enumerated argument; an absent default is the empty string."""

    name: str
    values: tuple[str, ...]
    default: str = ""

    @property
    def binding_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        rendered = f"[{self.name} in [{', '.join(_word(v) for v in self.values)}]"
        if self.default:
            rendered += f"={_default(self.default)}"
        return rendered + "]"


CommandToken = LiteralToken | RequiredArg | OptionalArg | RequiredEnumArg | OptionalEnumArg


@dataclass(frozen=True)
class ExplicitCall:
    """Invoke a function with explicit argument references (-> f(a, b))."""

    function: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"-> {self.function}({', '.join(_word(a) for a in self.args)})"


@dataclass(frozen=True)
class AutoCall:
    """Invoke a function with every bound argument, in declaration order (|> f)."""

    function: str

    def __str__(self) -> str:
        return f"|> {self.function}"


CommandAction = ExplicitCall | AutoCall


@dataclass(frozen=True)
class CommandDef:
    """
    One complete command definition.

    Params:
        tokens: Token sequence; the first token is the root literal
        action: What to invoke when the sequence matches
        permission_level: Minimum permission level, 0 for ungated commands

    Raises:
        StructuralPreconditionError: If tokens is empty, does not start with a
            literal, or permission_level is negative
    """

    tokens: tuple[CommandToken, ...]
    action: CommandAction
    permission_level: int = 0

    def __post_init__(self):
        """Enforce the root-literal and permission invariants."""
        if not self.tokens:
            raise StructuralPreconditionError("Command must contain at least one token")
        if not isinstance(self.tokens[0], LiteralToken):
            raise StructuralPreconditionError(
                f"Command must start with a literal word, got {self.tokens[0]}"
            )
        if self.permission_level < 0:
            raise StructuralPreconditionError(
                f"Permission level must be non-negative, got {self.permission_level}"
            )

    @property
    def root_literal(self) -> str:
        """Text of the first token, used to group top-level dispatcher entries."""
        return self.tokens[0].text

    @property
    def branch_tokens(self) -> tuple[CommandToken, ...]:
        """Tokens after the root literal."""
        return self.tokens[1:]

    def __str__(self) -> str:
        parts = [f"@{self.permission_level}"] if self.permission_level else []
        parts.extend(str(token) for token in self.tokens)
        parts.append(str(self.action))
        return " ".join(parts)


@dataclass(frozen=True)
class CommandFile:
    """Parsed DSL source: ~import names followed by command definitions."""

    imports: tuple[str, ...] = ()
    commands: tuple[CommandDef, ...] = ()

    @property
    def root_literals(self) -> list[str]:
        """Distinct root literals in first-appearance order."""
        return list(dict.fromkeys(cmd.root_literal for cmd in self.commands))

    def __str__(self) -> str:
        lines = [f"~import {name}" for name in self.imports]
        lines.extend(str(cmd) for cmd in self.commands)
        return "\n".join(lines)
