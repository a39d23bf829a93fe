"""
Commander DSL exception classes.

This package provides all exception types used throughout the Commander
compiler for consistent error handling and reporting.
"""

from commander.exceptions.core import (
    CommanderDSLError,
    CommandsFileError,
    CommandSyntaxError,
    ConflictingTerminalError,
    ErrorContext,
    ErrorLevel,
    InvalidSideConfigurationError,
    StructuralPreconditionError,
    UnknownArgTypeError,
)

__all__ = [
    "CommanderDSLError",
    "CommandsFileError",
    "CommandSyntaxError",
    "ConflictingTerminalError",
    "ErrorContext",
    "ErrorLevel",
    "InvalidSideConfigurationError",
    "StructuralPreconditionError",
    "UnknownArgTypeError",
]
