"""Built-in command implementations for tiny-bash."""

from .cat.cat import CatCommand
from .echo.echo import EchoCommand
from .env.env import EnvCommand, PrintenvCommand
from .misc.misc import FalseCommand, TrueCommand
from .registry import CommandRegistry, FunctionCommand
from .shell.shell import AliasCommand, ClearCommand
from .tac.tac import TacCommand
from .whoami.whoami import WhoamiCommand

BUILTIN_COMMANDS = (
    AliasCommand,
    CatCommand,
    ClearCommand,
    EchoCommand,
    EnvCommand,
    FalseCommand,
    PrintenvCommand,
    TacCommand,
    TrueCommand,
    WhoamiCommand,
)


def create_command_registry() -> CommandRegistry:
    """Create a registry holding every built-in command."""
    registry = CommandRegistry()
    for command_class in BUILTIN_COMMANDS:
        command = command_class()
        registry.register(command.name, command)
    return registry


__all__ = [
    "BUILTIN_COMMANDS",
    "CommandRegistry",
    "FunctionCommand",
    "create_command_registry",
]
