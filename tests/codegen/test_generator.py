"""
Tests for complete Java unit generation.
"""

from pathlib import PurePosixPath

import pytest

from commander.codegen.generator import JavaUnitGenerator, generate_java_source
from commander.codegen.sides import CLIENT_PROFILE, SERVER_PROFILE, profile_for
from commander.core.types import CommandSide
from commander.exceptions import InvalidSideConfigurationError
from commander.parsing.parser import parse_commands


@pytest.fixture
def sample_file(sample_source):
    return parse_commands(sample_source)


class TestSideProfiles:
    """Tests for per-side naming conventions."""

    def test_profile_lookup_is_case_insensitive(self):
        """Test resolving profiles from side names."""
        assert profile_for("SERVER") is SERVER_PROFILE
        assert profile_for(CommandSide.CLIENT) is CLIENT_PROFILE

    def test_invalid_side(self):
        """Test that unknown sides are rejected."""
        with pytest.raises(InvalidSideConfigurationError):
            profile_for("both")

    def test_callback_signatures(self):
        """Test the registration callback parameters of each side."""
        assert CLIENT_PROFILE.callback_signature == "(dispatcher, registryAccess)"
        assert SERVER_PROFILE.callback_signature == "(dispatcher, registryAccess, environment)"

    def test_feedback_statements(self):
        """Test the feedback form of each side."""
        assert CLIENT_PROFILE.feedback_statement("f(context)") == (
            "context.getSource().sendFeedback(Text.literal(String.valueOf(f(context))));"
        )
        assert SERVER_PROFILE.feedback_statement("f(context)") == (
            "context.getSource().sendFeedback(() -> Text.literal(String.valueOf(f(context))), true);"
        )


class TestUnitLayout:
    """Tests for the overall structure of the generated class."""

    def test_package_and_class(self, sample_file):
        """Test the package line and class declaration."""
        source = generate_java_source(sample_file, "com.example.mod", "ModCommands", "client")
        assert source.startswith("package com.example.mod;\n\n")
        assert "public final class ModCommands {\n" in source
        assert source.endswith("}\n")

    def test_one_dispatcher_entry_per_root(self, sample_file):
        """Test that roots are registered once each, in first-appearance order."""
        source = generate_java_source(sample_file, "p", "C", "server")
        assert source.count("dispatcher.register(\n") == 3
        positions = [
            source.index(f'CommandManager.literal("{root}")\n') for root in ("tp", "home", "mode")
        ]
        assert positions == sorted(positions)

    def test_register_method_server(self, sample_file):
        """Test the server registration callback."""
        source = generate_java_source(sample_file, "p", "C", "server")
        assert "    public static void register() {\n" in source
        assert (
            "        CommandRegistrationCallback.EVENT.register("
            "(dispatcher, registryAccess, environment) -> {\n"
        ) in source
        assert "getClientBlockPos" not in source

    def test_client_helper(self, sample_file):
        """Test that client units carry the block position helper."""
        source = generate_java_source(sample_file, "p", "C", "client")
        assert (
            "    private static BlockPos getClientBlockPos("
            "CommandContext<FabricClientCommandSource> context, String name) {\n"
        ) in source
        assert "ClientCommandRegistrationCallback.EVENT.register((dispatcher, registryAccess) -> {\n" in source

    def test_root_literal_indentation(self):
        """Test the fixed indentation of root literals and their branches."""
        command_file = parse_commands("tp <x:Integer> -> teleport(x)")
        source = generate_java_source(command_file, "p", "C", "server")
        assert "            dispatcher.register(\n" in source
        assert '                CommandManager.literal("tp")\n' in source
        assert (
            '                    .then(CommandManager.argument("x", IntegerArgumentType.integer())\n'
        ) in source
        assert "            );\n" in source

    def test_empty_package_omits_package_line(self):
        """Test generating into the default package."""
        command_file = parse_commands("ping -> pong()")
        source = generate_java_source(command_file, "", "C", "client")
        assert not source.startswith("package")


class TestImports:
    """Tests for the import block."""

    def test_import_order(self, sample_file):
        """Test framework, argument-type and user imports, in that order."""
        imports = JavaUnitGenerator("server").collect_imports(sample_file)
        assert imports == [
            "net.minecraft.text.Text",
            "net.minecraft.server.command.CommandManager",
            "net.fabricmc.fabric.api.command.v2.CommandRegistrationCallback",
            "com.mojang.brigadier.arguments.IntegerArgumentType",
            "com.mojang.brigadier.arguments.StringArgumentType",
            "com.example.mod.Actions",
        ]

    def test_client_helper_imports(self, sample_file):
        """Test that client units import the helper's types."""
        imports = JavaUnitGenerator("client").collect_imports(sample_file)
        assert "net.fabricmc.fabric.api.client.command.v2.FabricClientCommandSource" in imports
        assert "net.minecraft.util.math.BlockPos" in imports
        assert imports.index("net.minecraft.util.math.BlockPos") < imports.index(
            "com.example.mod.Actions"
        )

    def test_duplicate_imports_removed(self):
        """Test that a user import repeating a framework import appears once."""
        command_file = parse_commands("~import net.minecraft.text.Text\nping -> pong()")
        source = generate_java_source(command_file, "p", "C", "server")
        assert source.count("import net.minecraft.text.Text;\n") == 1


class TestGeneratedUnit:
    """Tests for the generated unit record."""

    def test_metadata(self, sample_file):
        """Test qualified name, output path and root literals."""
        unit = JavaUnitGenerator("client").generate(sample_file, "com.example.mod", "ModCommands")
        assert unit.qualified_name == "com.example.mod.ModCommands"
        assert unit.relative_path == PurePosixPath("com/example/mod/ModCommands.java")
        assert unit.root_literals == ["tp", "home", "mode"]
        assert unit.side == CommandSide.CLIENT
        assert unit.conflicts == []

    def test_conflicts_reported(self):
        """Test that merge conflicts surface on the unit."""
        command_file = parse_commands("r a -> f()\nr a -> g()")
        unit = JavaUnitGenerator("client").generate(command_file, "p", "C")
        assert len(unit.conflicts) == 1
        assert "g(context)" in unit.source
        assert "f(context)" not in unit.source
