"""
Core Commander DSL components.

This package provides the fundamental type definitions shared by the
parser, tree builder and code generator.
"""

from commander.core.types import ArgType, CommandSide

__all__ = [
    "ArgType",
    "CommandSide",
]
