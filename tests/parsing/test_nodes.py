"""
Tests for AST values and their DSL rendering.
"""

from commander.core.types import ArgType
from commander.parsing.nodes import (
    AutoCall,
    CommandDef,
    CommandFile,
    ExplicitCall,
    LiteralToken,
    OptionalArg,
    OptionalEnumArg,
    RequiredArg,
    RequiredEnumArg,
)
from commander.parsing.parser import parse_commands


class TestBindingNames:
    """Tests for which tokens bind argument names."""

    def test_literal_binds_nothing(self):
        """Test that literals are not visible arguments."""
        assert LiteralToken("set").binding_name is None

    def test_arguments_bind_their_name(self):
        """Test that every argument form binds its name."""
        tokens = [
            RequiredArg("a", ArgType.WORD),
            OptionalArg("b", ArgType.INTEGER, "1"),
            RequiredEnumArg("c", ("x",)),
            OptionalEnumArg("d", ("x",)),
        ]
        assert [t.binding_name for t in tokens] == ["a", "b", "c", "d"]


class TestRendering:
    """Tests for str() rendering back to DSL text."""

    def test_token_rendering(self):
        """Test each token form's DSL spelling."""
        assert str(LiteralToken("set")) == "set"
        assert str(LiteralToken("in")) == '"in"'
        assert str(LiteralToken("two words")) == '"two words"'
        assert str(RequiredArg("x", ArgType.GREEDY_STRING)) == "<x:GreedyString>"
        assert str(OptionalArg("n", ArgType.FLOAT, "1.5")) == "[n:Float=1.5]"
        assert str(OptionalArg("s", ArgType.STRING, "my base")) == '[s:String="my base"]'
        assert str(RequiredEnumArg("m", ("a", "b"))) == "<m in [a, b]>"
        assert str(OptionalEnumArg("m", ("a", "b"), "a")) == "[m in [a, b]=a]"
        assert str(OptionalEnumArg("m", ("a", "b"))) == "[m in [a, b]]"

    def test_action_rendering(self):
        """Test both action forms."""
        assert str(ExplicitCall("f", ("a", "b c"))) == '-> f(a, "b c")'
        assert str(ExplicitCall("f")) == "-> f()"
        assert str(AutoCall("Actions.run")) == "|> Actions.run"

    def test_command_rendering(self):
        """Test that permission, tokens and action render in order."""
        command = CommandDef(
            tokens=(LiteralToken("tp"), RequiredArg("x", ArgType.INTEGER)),
            action=ExplicitCall("teleport", ("x",)),
            permission_level=2,
        )
        assert str(command) == "@2 tp <x:Integer> -> teleport(x)"

    def test_rendering_reparses_to_equal_file(self, sample_source):
        """Test that a rendered file parses back to the same AST."""
        command_file = parse_commands(sample_source)
        assert parse_commands(str(command_file)) == command_file


class TestCommandFileProperties:
    """Tests for derived command file properties."""

    def test_root_and_branch_tokens(self):
        """Test splitting a definition into root literal and branch tokens."""
        command = CommandDef(
            tokens=(LiteralToken("home"), LiteralToken("set")), action=AutoCall("f")
        )
        assert command.root_literal == "home"
        assert command.branch_tokens == (LiteralToken("set"),)

    def test_empty_file_defaults(self):
        """Test that an empty file has empty tuples for imports and commands."""
        command_file = CommandFile()
        assert command_file.imports == ()
        assert command_file.commands == ()
        assert command_file == parse_commands("")

    def test_root_literals_deduplicated(self):
        """Test that repeated roots appear once, in first-appearance order."""
        command_file = CommandFile(
            commands=(
                CommandDef((LiteralToken("b"),), AutoCall("f")),
                CommandDef((LiteralToken("a"),), AutoCall("f")),
                CommandDef((LiteralToken("b"), LiteralToken("c")), AutoCall("f")),
            )
        )
        assert command_file.root_literals == ["b", "a"]
