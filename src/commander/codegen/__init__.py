"""
Commander code generation.

This package renders merged command tries as Brigadier registration code
and assembles them into a complete Java compilation unit.
"""

from commander.codegen.emitter import BranchRenderer
from commander.codegen.generator import (
    GeneratedUnit,
    JavaUnitGenerator,
    generate_java_source,
)
from commander.codegen.sides import CLIENT_PROFILE, SERVER_PROFILE, SideProfile, profile_for
from commander.codegen.type_mapping import (
    argument_factory,
    default_literal,
    extract_expression,
    java_string,
)

__all__ = [
    "BranchRenderer",
    "CLIENT_PROFILE",
    "GeneratedUnit",
    "JavaUnitGenerator",
    "SERVER_PROFILE",
    "SideProfile",
    "argument_factory",
    "default_literal",
    "extract_expression",
    "generate_java_source",
    "java_string",
    "profile_for",
]
