"""Interpreter types for tiny-bash."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Union

if TYPE_CHECKING:
    from ..ast.types import CommandExpansionUnit, ScriptNode
    from ..commands.registry import CommandRegistry
    from ..types import ExecutionLimits


@dataclass
class SessionState:
    """Mutable state shared by everything evaluated in one session.

    Nothing here is locked: at most one evaluation may run against a session
    at a time (``Shell`` enforces this for its own entry point).
    """

    env: dict[str, str] = field(default_factory=dict)
    """Environment variables. Unset names read as empty strings."""

    aliases: dict[str, str] = field(default_factory=dict)
    """Alias table (word -> replacement command string)."""

    return_code: int = 0
    """Last return code: 0 (success) or 1 (failure)."""

    stage_buffer: str = ""
    """Output of the most recent pipeline stage."""

    active_aliases: set[str] = field(default_factory=set)
    """Aliases currently being re-evaluated (recursion guard)."""

    def succeed(self) -> None:
        self.return_code = 0

    def fail(self) -> None:
        self.return_code = 1


@dataclass
class InterpreterContext:
    """Context provided to the expansion functions."""

    state: SessionState
    """Mutable session state."""

    commands: "CommandRegistry"
    """Command registry."""

    limits: "ExecutionLimits"
    """Execution limits."""

    run: Callable[[Union["ScriptNode", "CommandExpansionUnit"]], Awaitable[str]]
    """Top-level evaluation entry point, for nested evaluation."""
