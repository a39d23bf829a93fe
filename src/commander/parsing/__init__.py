"""
Commander DSL parsing components.

This package provides the lexer, the AST model and the grammar that turns
DSL source text into a CommandFile.
"""

from commander.parsing.lexer import Lexer, Token, TokenKind, tokenize
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
from commander.parsing.parser import CommandParser, parse_commands

__all__ = [
    "AutoCall",
    "CommandAction",
    "CommandDef",
    "CommandFile",
    "CommandParser",
    "CommandToken",
    "ExplicitCall",
    "Lexer",
    "LiteralToken",
    "OptionalArg",
    "OptionalEnumArg",
    "RequiredArg",
    "RequiredEnumArg",
    "Token",
    "TokenKind",
    "parse_commands",
    "tokenize",
]
