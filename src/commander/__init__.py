"""
Commander - A command-grammar DSL compiler for Brigadier command registration

Commander parses compact command definitions, merges them into dispatch trees
and generates the nested Java registration code for a client or server side.
"""

from importlib.metadata import version

from commander.config import CommanderConfig
from commander.core.types import ArgType, CommandSide
from commander.parsing.parser import parse_commands
from commander.pipeline import (
    CompilationResult,
    CompilationWarning,
    compile_source,
    generate_commands,
)

__version__ = version("commander-dsl")

__all__ = [
    "__version__",
    "ArgType",
    "CommandSide",
    "CommanderConfig",
    "CompilationResult",
    "CompilationWarning",
    "compile_source",
    "generate_commands",
    "parse_commands",
]
