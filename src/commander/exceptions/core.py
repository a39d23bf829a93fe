"""
Exception classes for Commander DSL compilation.

This module defines specific exception types for the error conditions that
can occur while parsing DSL source, merging command trees, and resolving the
compiler configuration.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Line/column and the offending source line
    DEVELOPER = "developer"  # Adds absolute offsets and a caret marker


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error occurred in DSL source so that syntax and
    structural errors can point at the exact position that caused them.

    Params:
        source_path: Path of the commands file, if compiling from a file
        line: 1-based line number of the offending token
        column: 1-based column number of the offending token
        offset: 0-based character offset into the source text
        line_text: Full text of the offending source line
    """

    source_path: str | None = None
    line: int | None = None
    column: int | None = None
    offset: int | None = None
    line_text: str | None = None

    @classmethod
    def from_offset(
        cls, source: str, offset: int, source_path: str | None = None
    ) -> "ErrorContext":
        """
        Build a context by locating a character offset in source text.

        Params:
            source: Complete DSL source text
            offset: 0-based character offset (clamped to the source length)
            source_path: Optional path of the file the source came from

        Returns:
            ErrorContext with line, column and line text filled in
        """
        offset = max(0, min(offset, len(source)))
        line_start = source.rfind("\n", 0, offset) + 1
        line_end = source.find("\n", offset)
        if line_end == -1:
            line_end = len(source)
        return cls(
            source_path=source_path,
            line=source.count("\n", 0, offset) + 1,
            column=offset - line_start + 1,
            offset=offset,
            line_text=source[line_start:line_end],
        )

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.line is not None:
            where = f"line {self.line}"
            if self.column is not None:
                where += f", column {self.column}"
            if self.source_path:
                where += f" of {self.source_path}"
            lines.append(f"  at {where}")
        elif self.source_path:
            lines.append(f"  in {self.source_path}")

        if error_level == ErrorLevel.DEVELOPER and self.offset is not None:
            lines.append(f"  offset {self.offset}")

        if self.line_text is not None:
            lines.append(f"  source: {self.line_text}")
            if error_level == ErrorLevel.DEVELOPER and self.column is not None:
                lines.append("  " + " " * (len("source: ") + self.column - 1) + "^")

        return "\n".join(lines)


class CommanderDSLError(Exception):
    """Base exception for all Commander DSL-related errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: ErrorContext with source location information
            error_level: Level of detail to show in error message
        """
        self.message = message
        self.context = context
        self.error_level = error_level

        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message

        super().__init__(full_message)


class CommandSyntaxError(CommanderDSLError):
    """Raised when DSL source does not match the command grammar."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        expected: list[str] | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: What was found where it was not allowed
            context: Position of the offending token
            expected: Token descriptions that would have been accepted
            error_level: Level of detail to show in error message
        """
        self.expected = list(expected or [])
        if self.expected:
            message = f"{message} (expected {', '.join(self.expected)})"
        super().__init__(message, context, error_level)


class UnknownArgTypeError(CommanderDSLError):
    """Raised when an argument type name is outside the closed set."""

    def __init__(
        self,
        type_name: str,
        valid_names: list[str],
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            type_name: The unrecognised type name as written
            valid_names: Every accepted type name
            context: Position of the type name
            error_level: Level of detail to show in error message
        """
        self.type_name = type_name
        self.valid_names = valid_names
        super().__init__(
            f"Unknown argument type: {type_name}. Valid types are: {', '.join(valid_names)}",
            context,
            error_level,
        )


class StructuralPreconditionError(CommanderDSLError):
    """Raised when a command definition violates a structural invariant."""

    def __init__(
        self,
        reason: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            reason: Which invariant was violated
            context: Position of the offending definition, if known
            error_level: Level of detail to show in error message
        """
        self.reason = reason
        super().__init__(reason, context, error_level)


class InvalidSideConfigurationError(CommanderDSLError):
    """Raised when the side selector is neither 'client' nor 'server'."""

    def __init__(self, value: str):
        """
        Initialize the exception.

        Params:
            value: The side selector as configured
        """
        self.value = value
        super().__init__(f"Invalid side '{value}'. Must be 'client' or 'server'.")


class ConflictingTerminalError(CommanderDSLError):
    """Raised in strict mode when two definitions terminate at the same path."""

    def __init__(self, path: str, existing: str, incoming: str):
        """
        Initialize the exception.

        Params:
            path: DSL rendering of the shared token path
            existing: Action and permission already recorded at the path
            incoming: Action and permission of the later definition
        """
        self.path = path
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Conflicting definitions for '{path}' (existing: {existing}, new: {incoming})"
        )


class CommandsFileError(CommanderDSLError):
    """Raised when an existing commands file cannot be read."""

    def __init__(self, path: str, reason: str):
        """
        Initialize the exception.

        Params:
            path: Path of the commands file
            reason: The underlying reason for the failure
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read commands file '{path}': {reason}")
