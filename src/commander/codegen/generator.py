"""
Java source generation for a complete command registration unit.

The generated unit holds one class with a static ``register()`` method that
hooks the side's registration event and registers one dispatcher entry per
root literal. Client units also carry a helper resolving block positions
against the invoking player's own command source.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from commander.codegen.emitter import INDENT, BranchRenderer
from commander.codegen.sides import SideProfile, profile_for
from commander.codegen.type_mapping import (
    CLIENT_BLOCK_POS_HELPER,
    argument_type_imports,
    java_string,
)
from commander.core.types import CommandSide
from commander.parsing.nodes import CommandFile
from commander.structure.builder import CommandTreeBuilder, CommandTreeNode, TerminalConflict

# Indentation levels inside the generated class
_MEMBER_INDENT = 1
_METHOD_BODY_INDENT = 2
_CALLBACK_BODY_INDENT = 3
_ROOT_LITERAL_INDENT = 4
_BRANCH_INDENT = 5


@dataclass
class GeneratedUnit:
    """One generated Java compilation unit."""

    package_name: str
    class_name: str
    side: CommandSide
    source: str
    root_literals: list[str] = field(default_factory=list)
    conflicts: list[TerminalConflict] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        if not self.package_name:
            return self.class_name
        return f"{self.package_name}.{self.class_name}"

    @property
    def relative_path(self) -> PurePosixPath:
        """Location below a source root, following Java's package directory layout."""
        parts = [part for part in self.package_name.split(".") if part]
        return PurePosixPath(*parts, f"{self.class_name}.java")


class JavaUnitGenerator:
    """Generates the registration class for one side.

    Params:
        side: Target side, as a CommandSide or its name in any casing
        strict_conflicts: Forwarded to the tree builder
    """

    def __init__(self, side: CommandSide | str, strict_conflicts: bool = False):
        self.profile: SideProfile = profile_for(side)
        self.strict_conflicts = strict_conflicts

    @property
    def side(self) -> CommandSide:
        return self.profile.side

    def generate(
        self, command_file: CommandFile, package_name: str, class_name: str
    ) -> GeneratedUnit:
        """
        Generate the complete unit for a parsed command file.

        Params:
            command_file: Parsed DSL source
            package_name: Java package of the generated class, passed through verbatim
            class_name: Simple name of the generated class, passed through verbatim

        Returns:
            GeneratedUnit holding the source text and merge diagnostics
        """
        builder = CommandTreeBuilder(strict_conflicts=self.strict_conflicts)
        forest = builder.build_forest(command_file.commands)
        renderer = BranchRenderer(self.profile)

        lines: list[str] = []
        if package_name:
            lines.append(f"package {package_name};\n")
            lines.append("\n")

        imports = self.collect_imports(command_file)
        if imports:
            lines.extend(f"import {name};\n" for name in imports)
            lines.append("\n")

        lines.append(f"public final class {class_name} {{\n")
        if self.side == CommandSide.CLIENT:
            lines.extend(self._client_block_pos_helper())
            lines.append("\n")
        lines.extend(self._register_method(forest, renderer))
        lines.append("}\n")

        return GeneratedUnit(
            package_name=package_name,
            class_name=class_name,
            side=self.side,
            source="".join(lines),
            root_literals=list(forest),
            conflicts=list(builder.conflicts),
        )

    def collect_imports(self, command_file: CommandFile) -> list[str]:
        """
        Import block contents: framework classes, argument types, then ~import names.

        Params:
            command_file: Parsed DSL source

        Returns:
            Distinct qualified names in first-occurrence order
        """
        names = [
            *self.profile.framework_imports,
            *argument_type_imports(command_file.commands),
            *command_file.imports,
        ]
        return list(dict.fromkeys(names))

    def _client_block_pos_helper(self) -> list[str]:
        member = INDENT * _MEMBER_INDENT
        body = INDENT * _METHOD_BODY_INDENT
        return [
            f"{member}private static BlockPos {CLIENT_BLOCK_POS_HELPER}("
            "CommandContext<FabricClientCommandSource> context, String name) {\n",
            f"{body}PosArgument arg = context.getArgument(name, PosArgument.class);\n",
            f"{body}return arg.toAbsoluteBlockPos(context.getSource().getPlayer().getCommandSource());\n",
            f"{member}}}\n",
        ]

    def _register_method(
        self, forest: dict[str, CommandTreeNode], renderer: BranchRenderer
    ) -> list[str]:
        member = INDENT * _MEMBER_INDENT
        body = INDENT * _METHOD_BODY_INDENT
        callback_body = INDENT * _CALLBACK_BODY_INDENT
        root_pad = INDENT * _ROOT_LITERAL_INDENT

        lines = [
            f"{member}public static void register() {{\n",
            f"{body}{self.profile.callback}.EVENT.register({self.profile.callback_signature} -> {{\n",
        ]
        for root_literal, root in forest.items():
            lines.append(f"{callback_body}dispatcher.register(\n")
            lines.append(
                f"{root_pad}{self.profile.command_manager}.literal({java_string(root_literal)})\n"
            )
            lines.append(renderer.render(root, _BRANCH_INDENT))
            lines.append(f"{callback_body});\n")
        lines.append(f"{body}}});\n")
        lines.append(f"{member}}}\n")
        return lines


def generate_java_source(
    command_file: CommandFile,
    package_name: str,
    class_name: str,
    side: CommandSide | str,
) -> str:
    """
    Convenience function to generate Java source text.

    Params:
        command_file: Parsed DSL source
        package_name: Java package of the generated class
        class_name: Simple name of the generated class
        side: "client" or "server"

    Returns:
        Complete Java compilation unit
    """
    return JavaUnitGenerator(side).generate(command_file, package_name, class_name).source
