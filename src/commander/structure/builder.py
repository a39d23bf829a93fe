"""
Dispatch tree building for Commander DSL command definitions.

Command definitions are flat token sequences. Definitions that share a root
literal are merged into one trie so that structurally identical prefixes
become a single dispatcher branch; the target dispatcher rejects sibling
branches with colliding identities, so generated code is only valid when
every shared prefix is merged.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from commander.exceptions import ConflictingTerminalError, StructuralPreconditionError
from commander.parsing.nodes import (
    CommandAction,
    CommandDef,
    CommandToken,
    LiteralToken,
    OptionalArg,
    OptionalEnumArg,
    RequiredArg,
    RequiredEnumArg,
)

logger = logging.getLogger(__name__)

VisibleArgs = tuple[tuple[str, CommandToken], ...]


@dataclass
class CommandTreeNode:
    """
    Node in the merged dispatch trie.

    Params:
        token: Token this branch matches; None only for the synthetic root
        action: Callback recorded when a definition terminates here
        permission_level: Permission guard for this node's own action
        visible_args: Every name-binding token on the root-to-node path
        children: Child branches in first-insertion order
    """

    token: CommandToken | None = None
    action: CommandAction | None = None
    permission_level: int = 0
    visible_args: VisibleArgs = ()
    children: list["CommandTreeNode"] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        """Check if a complete command resolves at this node."""
        return self.action is not None

    def find_child(self, token: CommandToken) -> "CommandTreeNode | None":
        """Return the child whose token is token-equal to the given one."""
        for child in self.children:
            if child.token is not None and tokens_match(child.token, token):
                return child
        return None

    def branch_count(self) -> int:
        """Count every node below this one."""
        return sum(1 + child.branch_count() for child in self.children)


@dataclass(frozen=True)
class TerminalConflict:
    """Two definitions whose callbacks collide on one dispatcher chain.

    The omitted fields name the optional argument whose omitted case carries
    the callback, when it is not the node's own action.
    """

    root_literal: str
    path: tuple[CommandToken, ...]
    existing_action: CommandAction
    existing_permission: int
    incoming_action: CommandAction
    incoming_permission: int
    existing_omitted: CommandToken | None = None
    incoming_omitted: CommandToken | None = None

    @property
    def path_text(self) -> str:
        return " ".join([self.root_literal, *(str(token) for token in self.path)])

    @property
    def existing_text(self) -> str:
        return _outcome_text(self.existing_action, self.existing_permission, self.existing_omitted)

    @property
    def incoming_text(self) -> str:
        return _outcome_text(self.incoming_action, self.incoming_permission, self.incoming_omitted)


def _outcome_text(action: CommandAction, permission_level: int, omitted: CommandToken | None) -> str:
    text = f"{action} @{permission_level}"
    if omitted is not None:
        text += f" with {omitted} omitted"
    return text


def tokens_match(a: CommandToken, b: CommandToken) -> bool:
    """
    Decide whether two tokens occupy the same dispatcher branch.

    Literals match on text; typed arguments on name and type; enumerated
    arguments on name alone. Tokens of different variants never match.

    Params:
        a: First token
        b: Second token

    Returns:
        True if both tokens should share one trie node
    """
    match a, b:
        case LiteralToken(), LiteralToken():
            return a.text == b.text
        case RequiredArg(), RequiredArg():
            return a.name == b.name and a.type == b.type
        case OptionalArg(), OptionalArg():
            return a.name == b.name and a.type == b.type
        case RequiredEnumArg(), RequiredEnumArg():
            return a.name == b.name
        case OptionalEnumArg(), OptionalEnumArg():
            return a.name == b.name
        case _:
            return False


def group_by_root(commands: Iterable[CommandDef]) -> dict[str, list[CommandDef]]:
    """
    Group definitions by root literal, preserving first-appearance order.

    Params:
        commands: Parsed command definitions

    Returns:
        Mapping of root literal text to the definitions rooted there
    """
    grouped: dict[str, list[CommandDef]] = {}
    for command in commands:
        grouped.setdefault(command.root_literal, []).append(command)
    return grouped


class CommandTreeBuilder:
    """Merges command definitions into dispatch tries.

    Tree construction is sequential: each insert mutates the trie being
    built, so one builder must not be shared between threads.

    Params:
        strict_conflicts: Raise ConflictingTerminalError instead of letting
            the later of two conflicting definitions win
    """

    def __init__(self, strict_conflicts: bool = False):
        self.strict_conflicts = strict_conflicts
        self.conflicts: list[TerminalConflict] = []
        self._root_literal = ""

    def build(self, commands: Sequence[CommandDef]) -> CommandTreeNode:
        """
        Merge definitions sharing one root literal into a single trie.

        The root literal is stripped from every definition; the returned
        synthetic root stands for it.

        Params:
            commands: Definitions that all share the same root literal

        Returns:
            The synthetic root of the merged trie

        Raises:
            StructuralPreconditionError: If the definitions have different roots
            ConflictingTerminalError: In strict mode, on conflicting terminals
        """
        root = CommandTreeNode()
        if not commands:
            return root

        root_literal = commands[0].root_literal
        self._root_literal = root_literal
        for command in commands:
            if command.root_literal != root_literal:
                raise StructuralPreconditionError(
                    f"Cannot merge commands rooted at '{command.root_literal}' "
                    f"into the tree for '{root_literal}'"
                )
            self.insert(
                root,
                command.branch_tokens,
                command.action,
                command.permission_level,
                (),
            )
        self._check_shared_chains(root, ())

        logger.debug(
            "Built command tree for '%s': %d definition(s), %d branch(es)",
            root_literal,
            len(commands),
            root.branch_count(),
        )
        return root

    def build_forest(self, commands: Iterable[CommandDef]) -> dict[str, CommandTreeNode]:
        """
        Build one trie per distinct root literal.

        Params:
            commands: All definitions of one compilation unit

        Returns:
            Mapping of root literal to its trie, in first-appearance order
        """
        return {
            root_literal: self.build(group)
            for root_literal, group in group_by_root(commands).items()
        }

    def insert(
        self,
        parent: CommandTreeNode,
        tokens: Sequence[CommandToken],
        action: CommandAction,
        permission_level: int,
        visible_args: VisibleArgs,
        path: tuple[CommandToken, ...] = (),
    ) -> None:
        """
        Insert the remaining tokens of one definition below parent.

        Params:
            parent: Node reached by the tokens consumed so far
            tokens: Tokens still to place
            action: The definition's action, recorded at its terminal node
            permission_level: The definition's permission level
            visible_args: Name bindings accumulated on the path so far
            path: Tokens consumed so far, for conflict reporting
        """
        if not tokens:
            self._mark_terminal(parent, action, permission_level, visible_args, path)
            return

        head, rest = tokens[0], tokens[1:]
        if head.binding_name is not None:
            visible_args = (*visible_args, (head.binding_name, head))

        child = parent.find_child(head)
        if child is None:
            child = CommandTreeNode(token=head)
            parent.children.append(child)

        self.insert(child, rest, action, permission_level, visible_args, (*path, head))

    def _mark_terminal(
        self,
        node: CommandTreeNode,
        action: CommandAction,
        permission_level: int,
        visible_args: VisibleArgs,
        path: tuple[CommandToken, ...],
    ) -> None:
        if node.action is not None and (
            node.action != action or node.permission_level != permission_level
        ):
            conflict = TerminalConflict(
                root_literal=self._root_literal,
                path=path,
                existing_action=node.action,
                existing_permission=node.permission_level,
                incoming_action=action,
                incoming_permission=permission_level,
            )
            self._report(conflict)

        node.action = action
        node.permission_level = permission_level
        node.visible_args = visible_args

    def _check_shared_chains(
        self, node: CommandTreeNode, path: tuple[CommandToken, ...]
    ) -> None:
        """
        Report callbacks that land on the same builder chain.

        A node's own action and the omitted case of every terminal optional
        child are all attached to the node's chain. The dispatcher keeps only
        the last one rendered, so each earlier one is overridden.

        Params:
            node: Node whose chain is checked, then its descendants
            path: Tokens from the root to node, for conflict reporting
        """
        attached: list[tuple[CommandAction, int, CommandToken | None]] = []
        if node.action is not None:
            attached.append((node.action, node.permission_level, None))
        for child in node.children:
            if isinstance(child.token, (OptionalArg, OptionalEnumArg)) and child.is_terminal:
                attached.append((child.action, child.permission_level, child.token))

        for existing, incoming in zip(attached, attached[1:]):
            self._report(
                TerminalConflict(
                    root_literal=self._root_literal,
                    path=path,
                    existing_action=existing[0],
                    existing_permission=existing[1],
                    incoming_action=incoming[0],
                    incoming_permission=incoming[1],
                    existing_omitted=existing[2],
                    incoming_omitted=incoming[2],
                )
            )

        for child in node.children:
            self._check_shared_chains(child, (*path, child.token))

    def _report(self, conflict: TerminalConflict) -> None:
        if self.strict_conflicts:
            raise ConflictingTerminalError(
                conflict.path_text, conflict.existing_text, conflict.incoming_text
            )
        logger.warning(
            "Definition '%s' overrides an earlier one (%s -> %s)",
            conflict.path_text,
            conflict.existing_text,
            conflict.incoming_text,
        )
        self.conflicts.append(conflict)
