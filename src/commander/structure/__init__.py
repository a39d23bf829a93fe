"""
Commander dispatch tree structure.

This package merges flat command definitions into per-root dispatch tries.
"""

from commander.structure.builder import (
    CommandTreeBuilder,
    CommandTreeNode,
    TerminalConflict,
    group_by_root,
    tokens_match,
)

__all__ = [
    "CommandTreeBuilder",
    "CommandTreeNode",
    "TerminalConflict",
    "group_by_root",
    "tokens_match",
]
