"""Command registry: maps command names to handlers."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Optional

from ..types import Command, CommandContext


@dataclass
class FunctionCommand:
    """Wrap a coroutine function ``(args, ctx) -> str`` as a Command."""

    name: str
    fn: Callable[[list[str], CommandContext], Awaitable[str]]

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        return await self.fn(args, ctx)


class CommandRegistry:
    """Lookup table from command name to handler."""

    def __init__(self, commands: Optional[dict[str, Command]] = None):
        self._commands: dict[str, Command] = dict(commands or {})

    def register(self, name: str, command: Command) -> None:
        """Register ``command`` under ``name``, replacing any previous one."""
        self._commands[name] = command

    def lookup(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def copy(self) -> "CommandRegistry":
        return CommandRegistry(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
