"""
Configuration for Commander code generation.

This module provides the settings a host integration supplies: where the
commands file lives, where generated sources go, and the package, class
and side of the generated unit. Defaults follow the conventions of the
Commander build plugin.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from commander.core.types import CommandSide

DEFAULT_CLASS_NAME = "CommanderCommands"
DEFAULT_SIDE = "client"
DEFAULT_COMMANDS_FILE = Path("src/main/commands/main.cmds")
DEFAULT_OUTPUT_DIR = Path("build/generated/sources/commander/java/main")


class CommanderConfig(BaseModel):
    """Settings for one code generation run.

    Can be created directly, from a dict, or from YAML with partial
    overrides. Only specified values override defaults.

    Examples:
        config = CommanderConfig(package_name="com.example.mod")

        config = CommanderConfig.from_yaml("commander.yaml")

    Example YAML:
        package_name: com.example.mod
        class_name: ModCommands
        side: server
    """

    package_name: str = Field(min_length=1, description="Java package of the generated class")
    class_name: str = Field(
        default=DEFAULT_CLASS_NAME,
        min_length=1,
        description="Simple name of the generated class",
    )
    side: str = Field(
        default=DEFAULT_SIDE,
        description="Dispatcher side, 'client' or 'server' in any casing",
    )
    commands_file: Path = Field(
        default=DEFAULT_COMMANDS_FILE,
        description="DSL source, relative to the project root",
    )
    output_dir: Path = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Generated sources root, relative to the project root",
    )
    strict_conflicts: bool = Field(
        default=False,
        description="Fail instead of keeping the later of two conflicting definitions",
    )

    def resolved_side(self) -> CommandSide:
        """
        Validate and resolve the side selector.

        Raises:
            InvalidSideConfigurationError: If side is neither client nor server
        """
        return CommandSide.parse(self.side)

    def commands_path(self, project_root: str | Path = ".") -> Path:
        return Path(project_root) / self.commands_file

    def output_path(self, project_root: str | Path = ".") -> Path:
        return Path(project_root) / self.output_dir

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> CommanderConfig:
        """
        Create from a dict, ignoring keys that are not settings.

        Params:
            config: Settings keyed by field name

        Returns:
            CommanderConfig with the given overrides
        """
        valid_fields = set(cls.model_fields)
        return cls(**{k: v for k, v in config.items() if k in valid_fields})

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> CommanderConfig:
        """
        Create from a YAML file with partial overrides.

        Params:
            yaml_path: Path to YAML file containing the settings

        Returns:
            CommanderConfig instance with YAML overrides
        """
        return cls.from_dict(_read_yaml(yaml_path))

    @classmethod
    def load(
        cls, yaml_path: str | Path | None = None, **overrides: Any
    ) -> CommanderConfig:
        """
        Create from an optional YAML file, then apply explicit overrides.

        Overrides whose value is None are ignored, so unset command-line
        options fall back to the file and then to the defaults.

        Params:
            yaml_path: Optional path to a YAML settings file
            overrides: Settings that take precedence over the file

        Returns:
            CommanderConfig with file values and overrides applied
        """
        config = _read_yaml(yaml_path) if yaml_path is not None else {}
        config.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(config)


def _read_yaml(yaml_path: str | Path) -> dict[str, Any]:
    import yaml

    path = Path(yaml_path)
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
