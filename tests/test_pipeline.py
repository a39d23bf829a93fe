"""
Tests for the compilation entrypoints.

This module tests in-memory compilation with compile_source and the
file-based build task generate_commands, including their warnings.
"""

import logging
from unittest.mock import patch

import pytest

from commander.config import CommanderConfig
from commander.core.types import CommandSide
from commander.exceptions import (
    CommandsFileError,
    CommandSyntaxError,
    ConflictingTerminalError,
    InvalidSideConfigurationError,
    UnknownArgTypeError,
)
from commander.pipeline import (
    COMMANDS_FILE_MISSING,
    CONFLICTING_TERMINAL,
    NO_COMMANDS,
    compile_source,
    generate_commands,
)


class TestCompileSource:
    """Tests for compiling source text in memory."""

    def test_compiles_sample(self, sample_source):
        """Test a successful compilation."""
        result = compile_source(sample_source, package_name="com.example.mod", side="server")
        assert not result.skipped
        assert result.side == CommandSide.SERVER
        assert result.command_count == 4
        assert result.root_literals == ["tp", "home", "mode"]
        assert result.java_source.startswith("package com.example.mod;")
        assert "public final class CommanderCommands {" in result.java_source
        assert result.output_path is None
        assert result.warnings == []

    def test_empty_source_skipped(self, caplog):
        """Test that zero commands produce a warning and no unit."""
        with caplog.at_level(logging.WARNING):
            result = compile_source("# nothing\n", package_name="p")
        assert result.skipped
        assert result.java_source is None
        assert [w.code for w in result.warnings] == [NO_COMMANDS]
        assert "No commands found" in caplog.text

    def test_invalid_side_checked_before_parsing(self):
        """Test that the side is rejected even when the source is malformed."""
        with patch("commander.pipeline.parse_commands") as parse:
            with pytest.raises(InvalidSideConfigurationError):
                compile_source("not valid ->", package_name="p", side="both")
        parse.assert_not_called()

    def test_syntax_errors_propagate(self):
        """Test that compile errors are raised, not reported as warnings."""
        with pytest.raises(CommandSyntaxError):
            compile_source("ping", package_name="p", source_path="main.cmds")

    def test_conflicts_become_warnings(self):
        """Test that last-write-wins conflicts are reported."""
        result = compile_source("r a -> f()\nr a -> g()", package_name="p")
        assert [w.code for w in result.warnings] == [CONFLICTING_TERMINAL]
        assert "'r a'" in result.warnings[0].message

    def test_strict_conflicts(self):
        """Test that strict mode turns conflicts into errors."""
        with pytest.raises(ConflictingTerminalError):
            compile_source("r a -> f()\nr a -> g()", package_name="p", strict_conflicts=True)

    def test_root_action_overridden_by_omitted_optional(self):
        """Test that a root callback shadowed by an omitted optional is reported."""
        result = compile_source("home -> a()\nhome [n:Word=x] -> b(n)", package_name="p", side="server")
        assert [w.code for w in result.warnings] == [CONFLICTING_TERMINAL]
        assert "'home'" in result.warnings[0].message
        assert "[n:Word=x] omitted" in result.warnings[0].message

    def test_root_action_overridden_strict(self):
        """Test that strict mode turns the shadowed root callback into an error."""
        with pytest.raises(ConflictingTerminalError):
            compile_source(
                "home -> a()\nhome [n:Word=x] -> b(n)",
                package_name="p",
                side="server",
                strict_conflicts=True,
            )

    def test_summary(self):
        """Test the one-line summary."""
        result = compile_source("ping -> pong()", package_name="a.b", class_name="C")
        assert result.summary() == "Generated a.b.C with 1 command(s) [client]"


class TestGenerateCommands:
    """Tests for the file-based build task."""

    def test_writes_unit(self, commands_project, sample_source, caplog):
        """Test that the unit is written below the output directory."""
        root = commands_project(sample_source)
        config = CommanderConfig(package_name="com.example.mod", class_name="ModCommands")
        with caplog.at_level(logging.INFO):
            result = generate_commands(config, root)

        expected = (
            root / "build/generated/sources/commander/java/main/com/example/mod/ModCommands.java"
        )
        assert result.output_path == expected
        assert expected.read_text(encoding="utf-8") == result.java_source
        assert "Generated com.example.mod.ModCommands with 4 command(s) [client]" in caplog.text

    def test_no_write(self, commands_project, sample_source):
        """Test compiling without touching the output directory."""
        root = commands_project(sample_source)
        result = generate_commands(CommanderConfig(package_name="p"), root, write=False)
        assert result.java_source is not None
        assert result.output_path is None
        assert not (root / "build").exists()

    def test_missing_commands_file(self, tmp_path, caplog):
        """Test that an absent commands file is a warning, not an error."""
        with caplog.at_level(logging.WARNING):
            result = generate_commands(CommanderConfig(package_name="p"), tmp_path)
        assert result.skipped
        assert [w.code for w in result.warnings] == [COMMANDS_FILE_MISSING]
        assert "skipping code generation" in caplog.text
        assert not (tmp_path / "build").exists()

    def test_empty_commands_file(self, commands_project):
        """Test that an empty commands file writes nothing."""
        root = commands_project("")
        result = generate_commands(CommanderConfig(package_name="p"), root)
        assert [w.code for w in result.warnings] == [NO_COMMANDS]
        assert result.output_path is None
        assert not (root / "build").exists()

    def test_invalid_side_before_reading(self, tmp_path):
        """Test that a bad side fails even without a commands file."""
        config = CommanderConfig(package_name="p", side="both")
        with pytest.raises(InvalidSideConfigurationError):
            generate_commands(config, tmp_path)

    def test_undecodable_file(self, tmp_path):
        """Test that a non-UTF-8 commands file raises CommandsFileError."""
        commands_file = tmp_path / "main.cmds"
        commands_file.write_bytes(b"\xff\xfe\x00bad")
        config = CommanderConfig(package_name="p", commands_file=commands_file)
        with pytest.raises(CommandsFileError):
            generate_commands(config, tmp_path)

    def test_error_location_names_file(self, commands_project):
        """Test that compile errors carry the commands file path."""
        root = commands_project("ping -> pong()\ntp <x:Int> -> f(x)")
        with pytest.raises(UnknownArgTypeError) as exc_info:
            generate_commands(CommanderConfig(package_name="p"), root)
        assert exc_info.value.context.source_path.endswith("main.cmds")
        assert exc_info.value.context.line == 2
