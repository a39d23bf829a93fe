"""
Shared test fixtures for the commander test suite.
"""

import pytest

from commander.codegen.emitter import BranchRenderer
from commander.codegen.sides import profile_for
from commander.parsing.parser import parse_commands
from commander.structure.builder import CommandTreeBuilder

SAMPLE_SOURCE = """\
~import com.example.mod.Actions

# Teleport and home management
@2 tp <x:Integer> <y:Integer> -> teleport(x, y)
home [name:String="base"] -> gotoHome(name)
home set <name:Word> -> setHome(name)
mode <m in [creative, survival]> |> setMode
"""


@pytest.fixture
def sample_source():
    """DSL source exercising imports, permissions, optionals and enums."""
    return SAMPLE_SOURCE


@pytest.fixture
def render():
    """Render the branches of the first root group of some DSL source.

    Usage:
        def test_something(render):
            text = render("ping <n:Integer> -> pong(n)", side="server")
    """

    def _render(source: str, side: str = "client") -> str:
        command_file = parse_commands(source)
        forest = CommandTreeBuilder().build_forest(command_file.commands)
        root = next(iter(forest.values()))
        return BranchRenderer(profile_for(side)).render(root, 0)

    return _render


@pytest.fixture
def commands_project(tmp_path):
    """Project directory with a commands file at the default location.

    Returns a function writing the given DSL source and returning the root.
    """

    def _write(source: str):
        commands_file = tmp_path / "src" / "main" / "commands" / "main.cmds"
        commands_file.parent.mkdir(parents=True, exist_ok=True)
        commands_file.write_text(source, encoding="utf-8")
        return tmp_path

    return _write
