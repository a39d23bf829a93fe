from attrs import frozen

from commander.core.types import CommandSide

TEXT_CLASS = "net.minecraft.text.Text"


@frozen
class SideProfile:
    """Names and calling conventions of one dispatcher side.

    The generated code only needs the framework's class names and call
    shapes; nothing here depends on the framework's runtime behaviour.
    """

    side: CommandSide
    command_manager: str
    command_manager_package: str
    callback: str
    callback_package: str
    callback_parameters: tuple[str, ...]
    helper_imports: tuple[str, ...] = ()

    @property
    def framework_imports(self) -> list[str]:
        return [
            TEXT_CLASS,
            f"{self.command_manager_package}.{self.command_manager}",
            f"{self.callback_package}.{self.callback}",
            *self.helper_imports,
        ]

    @property
    def callback_signature(self) -> str:
        return f"({', '.join(self.callback_parameters)})"

    def feedback_statement(self, call: str) -> str:
        """Statement reporting a callback result to the invoking source."""
        message = f"Text.literal(String.valueOf({call}))"
        if self.side == CommandSide.SERVER:
            return f"context.getSource().sendFeedback(() -> {message}, true);"
        return f"context.getSource().sendFeedback({message});"


CLIENT_PROFILE = SideProfile(
    side=CommandSide.CLIENT,
    command_manager="ClientCommandManager",
    command_manager_package="net.fabricmc.fabric.api.client.command.v2",
    callback="ClientCommandRegistrationCallback",
    callback_package="net.fabricmc.fabric.api.client.command.v2",
    callback_parameters=("dispatcher", "registryAccess"),
    helper_imports=(
        "net.fabricmc.fabric.api.client.command.v2.FabricClientCommandSource",
        "com.mojang.brigadier.context.CommandContext",
        "net.minecraft.command.argument.PosArgument",
        "net.minecraft.util.math.BlockPos",
    ),
)

SERVER_PROFILE = SideProfile(
    side=CommandSide.SERVER,
    command_manager="CommandManager",
    command_manager_package="net.minecraft.server.command",
    callback="CommandRegistrationCallback",
    callback_package="net.fabricmc.fabric.api.command.v2",
    callback_parameters=("dispatcher", "registryAccess", "environment"),
)

side_profiles = {CommandSide.CLIENT: CLIENT_PROFILE, CommandSide.SERVER: SERVER_PROFILE}


def profile_for(side: CommandSide | str) -> SideProfile:
    """Return the profile for a side, accepting the side's name in any casing."""
    return side_profiles[CommandSide.parse(side)]
