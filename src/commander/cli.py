"""
Command-line interface for the Commander DSL compiler.

Usage:
    commander generate --package com.example.mod [--side server] [--stdout]
    commander generate --config commander.yaml --project-root path/to/mod
    commander check src/main/commands/main.cmds
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from commander.config import CommanderConfig
from commander.exceptions import CommanderDSLError, CommandsFileError
from commander.parsing.parser import parse_commands
from commander.pipeline import generate_commands

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commander",
        description="Generate Brigadier command registration code from Commander DSL files.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log tree statistics and other details."
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Compile the project's commands file into a Java class."
    )
    generate.add_argument("--config", type=Path, help="YAML file with generation settings.")
    generate.add_argument(
        "--project-root",
        type=Path,
        default=Path("."),
        help="Directory that relative paths are resolved against (default: current directory).",
    )
    generate.add_argument("--package", dest="package_name", help="Java package of the generated class.")
    generate.add_argument("--class-name", help="Simple name of the generated class.")
    generate.add_argument("--side", help="Target side: client or server.")
    generate.add_argument("--commands-file", type=Path, help="DSL source file.")
    generate.add_argument("--output-dir", type=Path, help="Root directory for generated sources.")
    generate.add_argument(
        "--strict-conflicts",
        action="store_true",
        default=None,
        help="Fail when two definitions end at the same path with different actions.",
    )
    generate.add_argument(
        "--stdout", action="store_true", help="Print the generated source instead of writing it."
    )

    check = subparsers.add_parser("check", help="Parse a commands file and summarise it.")
    check.add_argument("file", type=Path, help="DSL source file to check.")

    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_generate(args: argparse.Namespace) -> int:
    try:
        config = CommanderConfig.load(
            args.config,
            package_name=args.package_name,
            class_name=args.class_name,
            side=args.side,
            commands_file=args.commands_file,
            output_dir=args.output_dir,
            strict_conflicts=args.strict_conflicts,
        )
    except (OSError, ValidationError) as e:
        print(f"commander: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    result = generate_commands(config, args.project_root, write=not args.stdout)
    if args.stdout and result.java_source is not None:
        sys.stdout.write(result.java_source)
    return EXIT_OK


def run_check(args: argparse.Namespace) -> int:
    path: Path = args.file
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CommandsFileError(str(path), str(e)) from e

    command_file = parse_commands(source, str(path))
    print(f"{path}: {len(command_file.commands)} command(s)")
    for root_literal in command_file.root_literals:
        print(f"  {root_literal}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command-line interface.

    Params:
        argv: Arguments without the program name; defaults to sys.argv[1:]

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    handlers = {"generate": run_generate, "check": run_check}
    try:
        return handlers[args.command](args)
    except CommanderDSLError as e:
        logger.error("%s", e)
        return EXIT_COMPILE_ERROR
