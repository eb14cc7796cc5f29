"""Core types for tiny-bash."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from .ast.types import ParameterExpansionUnit, ScriptNode
    from .commands.registry import CommandRegistry
    from .interpreter.types import SessionState


@dataclass
class ErrorResult:
    """Returned by ``Shell.exec`` instead of output when evaluation faults."""

    error: str


@dataclass
class ExecutionLimits:
    """Execution limits for runaway scripts."""

    max_command_count: int = 10000
    """Command dispatches allowed per top-level execution."""

    max_recursion_depth: int = 100
    """Nesting allowed for command substitution and alias re-evaluation."""


@dataclass
class CommandContext:
    """Context handed to command handlers."""

    state: "SessionState"
    """Session state. Handlers may read and mutate it."""

    commands: "CommandRegistry"
    """Registry the handler was dispatched from."""

    @property
    def env(self) -> dict[str, str]:
        return self.state.env

    @property
    def stdin(self) -> str:
        """Output of the previous pipeline stage, if any."""
        return self.state.stage_buffer


class Command(Protocol):
    """Protocol for command implementations."""

    name: str

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the command with already-expanded arguments."""
        ...


@dataclass(frozen=True)
class ParserCallbacks:
    """Resolvers the interpreter offers to the parser."""

    resolve_environment: Callable[[str], Optional[str]]
    """Parse-time environment lookup. ``None`` keeps the reference lazy."""

    resolve_parameter: Callable[["ParameterExpansionUnit"], str]
    """Evaluation-time parameter resolver, for parsers that expand eagerly.
    ``BashlexParser`` leaves parameters lazy and never calls it."""

    resolve_alias: Callable[[str], str]
    """Alias target for a leading word, or the word itself."""


class Parser(Protocol):
    """Port for the grammar parser that turns source text into an AST."""

    def parse(self, source: str, callbacks: ParserCallbacks) -> "ScriptNode":
        """Parse ``source``. Raises ParseException on invalid syntax."""
        ...
