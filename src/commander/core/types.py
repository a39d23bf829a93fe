"""
Core type definitions for the Commander DSL compiler.

This module contains the closed set of argument types understood by the DSL
and the target side selector.
"""

from enum import Enum

from commander.exceptions import InvalidSideConfigurationError


class ArgType(Enum):
    """Closed set of typed-argument kinds. Not user-extensible."""

    WORD = "Word"
    STRING = "String"
    GREEDY_STRING = "GreedyString"
    BLOCK_POS = "BlockPos"
    BOOL = "Bool"
    DOUBLE = "Double"
    FLOAT = "Float"
    INTEGER = "Integer"
    LONG = "Long"
    ENTITY = "Entity"

    @classmethod
    def lookup(cls, name: str) -> "ArgType | None":
        """
        Exact-name lookup of an argument type as written in DSL source.

        Params:
            name: Type name, case-sensitive (e.g. "Integer")

        Returns:
            The matching ArgType, or None if the name is not in the closed set
        """
        for member in cls:
            if member.value == name:
                return member
        return None

    @classmethod
    def names(cls) -> list[str]:
        """Return the DSL spelling of every argument type, in declaration order."""
        return [member.value for member in cls]

    @property
    def is_textual(self) -> bool:
        """Check if defaults of this type render as quoted strings."""
        return self in (ArgType.WORD, ArgType.STRING, ArgType.GREEDY_STRING)


class CommandSide(Enum):
    """Which dispatcher the generated code registers against."""

    CLIENT = "client"
    SERVER = "server"

    @classmethod
    def parse(cls, value: "str | CommandSide") -> "CommandSide":
        """
        Resolve a side selector, case-insensitively.

        Params:
            value: "client" or "server" in any casing, or an existing CommandSide

        Returns:
            The matching CommandSide

        Raises:
            InvalidSideConfigurationError: If the value names neither side
        """
        if isinstance(value, CommandSide):
            return value
        normalized = str(value).lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidSideConfigurationError(str(value))
