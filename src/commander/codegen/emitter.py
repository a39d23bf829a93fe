"""
Rendering of merged command tries as Brigadier builder chains.

Every trie node becomes one ``.then(...)`` branch. Enumerated arguments
have no native argument type in the dispatcher and are rendered as one
literal branch per value. Optional arguments are rendered twice: once as an
``.executes`` on the parent chain for the omitted case, then as the
argument branch for the provided case.

While rendering, a substitution mapping from argument name to Java
expression records which arguments are fixed on the current path (an
omitted optional's default or the literal matched by an enum branch). Call
resolution consults it before falling back to reading the argument from the
command context.
"""

from collections.abc import Mapping

from commander.codegen.sides import SideProfile
from commander.codegen.type_mapping import (
    argument_factory,
    default_literal,
    extract_expression,
    java_string,
)
from commander.parsing.nodes import (
    AutoCall,
    CommandAction,
    CommandToken,
    ExplicitCall,
    LiteralToken,
    OptionalArg,
    OptionalEnumArg,
    RequiredArg,
    RequiredEnumArg,
)
from commander.structure.builder import CommandTreeNode, VisibleArgs

INDENT = "    "
CONTEXT_HANDLE = "context"

Substitutions = Mapping[str, str]


class BranchRenderer:
    """Renders one root group's trie as nested registration code.

    Params:
        profile: Side profile supplying the command manager name, the
            feedback statement and the side used for argument extraction
    """

    def __init__(self, profile: SideProfile):
        self.profile = profile

    def render(self, root: CommandTreeNode, base_indent: int) -> str:
        """
        Render the branches below a synthetic root.

        A root that carries an action (a command consisting only of its
        root literal) has its guard and callback attached at base_indent,
        directly on the caller's outer literal.

        Params:
            root: Synthetic root returned by the tree builder
            base_indent: Indentation level of the root literal's chain

        Returns:
            Source text, one line per emitted statement
        """
        lines: list[str] = []
        if root.action is not None:
            self._append_executes(root, base_indent, {}, lines)
        for child in root.children:
            self._render_node(child, base_indent, {}, lines)
        return "".join(lines)

    def _render_node(
        self,
        node: CommandTreeNode,
        indent: int,
        substitutions: Substitutions,
        out: list[str],
    ) -> None:
        manager = self.profile.command_manager
        match node.token:
            case LiteralToken(text=text):
                self._append_branch(
                    f"{manager}.literal({java_string(text)})", node, indent, substitutions, out
                )
            case RequiredArg(name=name, type=arg_type):
                self._append_branch(
                    f"{manager}.argument({java_string(name)}, {argument_factory(arg_type)})",
                    node,
                    indent,
                    substitutions,
                    out,
                )
            case OptionalArg(name=name, type=arg_type) as token:
                if node.action is not None:
                    omitted = {**substitutions, name: default_literal(token)}
                    self._append_executes(node, indent, omitted, out)
                self._append_branch(
                    f"{manager}.argument({java_string(name)}, {argument_factory(arg_type)})",
                    node,
                    indent,
                    substitutions,
                    out,
                )
            case RequiredEnumArg(name=name, values=values):
                self._append_enum_branches(name, values, node, indent, substitutions, out)
            case OptionalEnumArg(name=name, values=values, default=default):
                if node.action is not None:
                    omitted = {**substitutions, name: java_string(default)}
                    self._append_executes(node, indent, omitted, out)
                self._append_enum_branches(name, values, node, indent, substitutions, out)
            case None:
                raise ValueError("Only the synthetic root may lack a token")

    def _append_enum_branches(
        self,
        name: str,
        values: tuple[str, ...],
        node: CommandTreeNode,
        indent: int,
        substitutions: Substitutions,
        out: list[str],
    ) -> None:
        for value in values:
            matched = {**substitutions, name: java_string(value)}
            self._append_branch(
                f"{self.profile.command_manager}.literal({java_string(value)})",
                node,
                indent,
                matched,
                out,
            )

    def _append_branch(
        self,
        head: str,
        node: CommandTreeNode,
        indent: int,
        substitutions: Substitutions,
        out: list[str],
    ) -> None:
        pad = INDENT * indent
        out.append(f"{pad}.then({head}\n")
        if node.action is not None:
            self._append_executes(node, indent + 1, substitutions, out)
        for child in node.children:
            self._render_node(child, indent + 1, substitutions, out)
        out.append(f"{pad})\n")

    def _append_executes(
        self,
        node: CommandTreeNode,
        indent: int,
        substitutions: Substitutions,
        out: list[str],
    ) -> None:
        pad = INDENT * indent
        if node.permission_level > 0:
            out.append(
                f"{pad}.requires(source -> source.hasPermissionLevel({node.permission_level}))\n"
            )
        call = self.resolve_call(node.action, node.visible_args, substitutions)
        out.append(f"{pad}.executes({CONTEXT_HANDLE} -> {{\n")
        out.append(f"{pad}{INDENT}{self.profile.feedback_statement(call)}\n")
        out.append(f"{pad}{INDENT}return 1;\n")
        out.append(f"{pad}}})\n")

    def resolve_call(
        self,
        action: CommandAction,
        visible_args: VisibleArgs,
        substitutions: Substitutions,
    ) -> str:
        """
        Resolve an action to a call expression.

        Explicit calls resolve each reference by name; auto calls pass every
        visible binding in declaration order. Both append the context handle.

        Params:
            action: The terminal node's action
            visible_args: Bindings visible at the terminal node
            substitutions: Arguments fixed on the path being rendered

        Returns:
            Java call expression
        """
        match action:
            case ExplicitCall(function=function, args=refs):
                bindings: dict[str, CommandToken] = {}
                for name, token in visible_args:
                    bindings.setdefault(name, token)
                arguments = [self.resolve_reference(ref, bindings, substitutions) for ref in refs]
            case AutoCall(function=function):
                arguments = [
                    self.resolve_binding(name, token, substitutions)
                    for name, token in visible_args
                ]
            case _:
                raise TypeError(f"Unsupported command action: {action!r}")
        return f"{function}({', '.join([*arguments, CONTEXT_HANDLE])})"

    def resolve_reference(
        self,
        ref: str,
        bindings: Mapping[str, CommandToken],
        substitutions: Substitutions,
    ) -> str:
        """Resolve one explicit-call reference; unbound names become string constants."""
        if ref in substitutions:
            return substitutions[ref]
        token = bindings.get(ref)
        if token is None:
            return java_string(ref)
        return self.resolve_binding(ref, token, substitutions)

    def resolve_binding(
        self, name: str, token: CommandToken, substitutions: Substitutions
    ) -> str:
        """Resolve a bound argument to its substitution or its extraction expression."""
        if name in substitutions:
            return substitutions[name]
        match token:
            case RequiredArg(type=arg_type) | OptionalArg(type=arg_type):
                return extract_expression(name, arg_type, self.profile.side)
            case RequiredEnumArg():
                return java_string("")
            case OptionalEnumArg(default=default):
                return java_string(default)
            case LiteralToken(text=text):
                return java_string(text)
