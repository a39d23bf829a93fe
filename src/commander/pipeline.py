"""
Compilation entrypoints orchestrating parse, merge and generation.

``compile_source`` works on text in memory; ``generate_commands`` is the
build-task counterpart that reads the configured commands file and writes
the generated unit below the configured output directory. Missing input and
empty input are not errors: they are reported as warnings and produce no
output.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from commander.codegen.generator import GeneratedUnit, JavaUnitGenerator
from commander.config import DEFAULT_CLASS_NAME, CommanderConfig
from commander.core.types import CommandSide
from commander.exceptions import CommandsFileError
from commander.parsing.parser import parse_commands

logger = logging.getLogger(__name__)

COMMANDS_FILE_MISSING = "COMMANDS_FILE_MISSING"
NO_COMMANDS = "NO_COMMANDS"
CONFLICTING_TERMINAL = "CONFLICTING_TERMINAL"


@dataclass(frozen=True)
class CompilationWarning:
    """Non-fatal condition reported by a compilation."""

    code: str
    message: str
    source_path: str | None = None


@dataclass
class CompilationResult:
    """
    Outcome of one compilation.

    Params:
        side: Resolved target side
        command_count: Number of parsed command definitions
        root_literals: Distinct root literals, in first-appearance order
        unit: Generated unit, None when compilation was skipped
        output_path: Where the unit was written, None unless written
        warnings: Non-fatal conditions encountered
    """

    side: CommandSide
    command_count: int = 0
    root_literals: list[str] = field(default_factory=list)
    unit: GeneratedUnit | None = None
    output_path: Path | None = None
    warnings: list[CompilationWarning] = field(default_factory=list)

    @property
    def java_source(self) -> str | None:
        return self.unit.source if self.unit is not None else None

    @property
    def skipped(self) -> bool:
        """Check if no unit was produced."""
        return self.unit is None

    def summary(self) -> str:
        """One-line description for logs and command-line output."""
        if self.unit is None:
            return f"No output generated [{self.side.value}]"
        return (
            f"Generated {self.unit.qualified_name} with {self.command_count} command(s) "
            f"[{self.side.value}]"
        )


def compile_source(
    source: str,
    *,
    package_name: str,
    class_name: str = DEFAULT_CLASS_NAME,
    side: CommandSide | str = CommandSide.CLIENT,
    source_path: str | None = None,
    strict_conflicts: bool = False,
) -> CompilationResult:
    """
    Compile DSL source text into a generated unit held in memory.

    The side selector is validated before any parsing work is done.

    Params:
        source: DSL source text
        package_name: Java package of the generated class
        class_name: Simple name of the generated class
        side: "client" or "server", case-insensitive
        source_path: Optional file path used in error locations and warnings
        strict_conflicts: Fail on conflicting terminal definitions

    Returns:
        CompilationResult; its unit is None when the source has no commands

    Raises:
        InvalidSideConfigurationError: If side is neither client nor server
        CommandSyntaxError: If the source is malformed
        UnknownArgTypeError: If an argument type name is not recognised
        StructuralPreconditionError: If a command does not start with a literal
        ConflictingTerminalError: In strict mode, on conflicting definitions
    """
    generator = JavaUnitGenerator(side, strict_conflicts=strict_conflicts)
    result = CompilationResult(side=generator.side)

    command_file = parse_commands(source, source_path)
    result.command_count = len(command_file.commands)
    result.root_literals = command_file.root_literals

    if not command_file.commands:
        where = source_path or "source"
        logger.warning("No commands found in %s", where)
        result.warnings.append(
            CompilationWarning(NO_COMMANDS, f"No commands found in {where}", source_path)
        )
        return result

    unit = generator.generate(command_file, package_name, class_name)
    for conflict in unit.conflicts:
        result.warnings.append(
            CompilationWarning(
                CONFLICTING_TERMINAL,
                f"Definition '{conflict.path_text}' overrides an earlier one "
                f"({conflict.existing_text} -> {conflict.incoming_text})",
                source_path,
            )
        )
    result.unit = unit
    return result


def generate_commands(
    config: CommanderConfig,
    project_root: str | Path = ".",
    write: bool = True,
) -> CompilationResult:
    """
    Run code generation for a project, as a build task would.

    Params:
        config: Generation settings
        project_root: Directory that relative settings paths are resolved against
        write: Write the unit below the output directory; False keeps it in memory

    Returns:
        CompilationResult; output_path is set when a file was written

    Raises:
        InvalidSideConfigurationError: If the configured side is invalid
        CommandsFileError: If the commands file exists but cannot be read
        CommanderDSLError: Any compilation error from compile_source
    """
    side = config.resolved_side()
    commands_path = config.commands_path(project_root)

    if not commands_path.exists():
        logger.warning(
            "No commands file found at %s, skipping code generation", commands_path.absolute()
        )
        return CompilationResult(
            side=side,
            warnings=[
                CompilationWarning(
                    COMMANDS_FILE_MISSING,
                    f"Commands file not found: {commands_path}",
                    str(commands_path),
                )
            ],
        )

    try:
        source = commands_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CommandsFileError(str(commands_path), str(e)) from e

    result = compile_source(
        source,
        package_name=config.package_name,
        class_name=config.class_name,
        side=side,
        source_path=str(commands_path),
        strict_conflicts=config.strict_conflicts,
    )
    if result.unit is None or not write:
        return result

    output_path = config.output_path(project_root) / result.unit.relative_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.unit.source, encoding="utf-8")
    result.output_path = output_path
    logger.info(result.summary())
    return result
