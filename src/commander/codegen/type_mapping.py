"""
Argument type mapping for generated Brigadier code.

Each ArgType maps to one argument-type factory, one value accessor keyed by
the argument name, and the class that must be imported for both. Default
values are rendered as Java literals according to the same types.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from commander.core.types import ArgType, CommandSide
from commander.parsing.nodes import CommandDef, OptionalArg, RequiredArg

BRIGADIER_ARGUMENTS = "com.mojang.brigadier.arguments"
MINECRAFT_ARGUMENTS = "net.minecraft.command.argument"

CLIENT_BLOCK_POS_HELPER = "getClientBlockPos"


@dataclass(frozen=True)
class ArgTypeMapping:
    """Generated-code vocabulary for one argument type."""

    type_class: str
    package: str
    factory: str
    getter: str

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.type_class}"


ARG_TYPE_MAPPINGS: dict[ArgType, ArgTypeMapping] = {
    ArgType.WORD: ArgTypeMapping("StringArgumentType", BRIGADIER_ARGUMENTS, "word", "getString"),
    ArgType.STRING: ArgTypeMapping("StringArgumentType", BRIGADIER_ARGUMENTS, "string", "getString"),
    ArgType.GREEDY_STRING: ArgTypeMapping(
        "StringArgumentType", BRIGADIER_ARGUMENTS, "greedyString", "getString"
    ),
    ArgType.BOOL: ArgTypeMapping("BoolArgumentType", BRIGADIER_ARGUMENTS, "bool", "getBool"),
    ArgType.DOUBLE: ArgTypeMapping("DoubleArgumentType", BRIGADIER_ARGUMENTS, "doubleArg", "getDouble"),
    ArgType.FLOAT: ArgTypeMapping("FloatArgumentType", BRIGADIER_ARGUMENTS, "floatArg", "getFloat"),
    ArgType.INTEGER: ArgTypeMapping("IntegerArgumentType", BRIGADIER_ARGUMENTS, "integer", "getInteger"),
    ArgType.LONG: ArgTypeMapping("LongArgumentType", BRIGADIER_ARGUMENTS, "longArg", "getLong"),
    ArgType.BLOCK_POS: ArgTypeMapping(
        "BlockPosArgumentType", MINECRAFT_ARGUMENTS, "blockPos", "getBlockPos"
    ),
    ArgType.ENTITY: ArgTypeMapping("EntityArgumentType", MINECRAFT_ARGUMENTS, "entity", "getEntity"),
}

_JAVA_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def java_string(value: str) -> str:
    """Render text as a double-quoted Java string literal."""
    return '"' + "".join(_JAVA_ESCAPES.get(ch, ch) for ch in value) + '"'


def argument_factory(arg_type: ArgType) -> str:
    """Expression constructing the Brigadier argument type, e.g. IntegerArgumentType.integer()."""
    mapping = ARG_TYPE_MAPPINGS[arg_type]
    return f"{mapping.type_class}.{mapping.factory}()"


def extract_expression(name: str, arg_type: ArgType, side: CommandSide) -> str:
    """
    Expression reading a provided argument value out of the command context.

    Params:
        name: Argument name as registered with the dispatcher
        arg_type: Declared type of the argument
        side: Target side; block positions are resolved differently on the client

    Returns:
        Java expression evaluating to the argument value
    """
    if arg_type == ArgType.BLOCK_POS and side == CommandSide.CLIENT:
        return f"{CLIENT_BLOCK_POS_HELPER}(context, {java_string(name)})"
    mapping = ARG_TYPE_MAPPINGS[arg_type]
    return f"{mapping.type_class}.{mapping.getter}(context, {java_string(name)})"


def default_literal(arg: OptionalArg) -> str:
    """
    Java literal substituted for an omitted optional argument.

    Textual types are quoted, Float gains an ``f`` suffix, numeric and
    boolean defaults are emitted as written, and types without a literal
    form (BlockPos, Entity) become ``null``.

    Params:
        arg: The optional argument whose default is rendered

    Returns:
        Java literal text
    """
    if arg.type.is_textual:
        return java_string(arg.default)
    match arg.type:
        case ArgType.FLOAT:
            return f"{arg.default}f"
        case ArgType.BOOL | ArgType.DOUBLE | ArgType.INTEGER | ArgType.LONG:
            return arg.default
        case ArgType.BLOCK_POS | ArgType.ENTITY:
            return "null"


def argument_type_imports(commands: Iterable[CommandDef]) -> list[str]:
    """
    Qualified argument-type classes referenced by typed arguments.

    Params:
        commands: Definitions of one compilation unit

    Returns:
        Distinct class names in first-use order
    """
    imports: dict[str, None] = {}
    for command in commands:
        for token in command.tokens:
            if isinstance(token, (RequiredArg, OptionalArg)):
                imports[ARG_TYPE_MAPPINGS[token.type].qualified_name] = None
    return list(imports)
