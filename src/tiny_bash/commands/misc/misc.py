"""Miscellaneous commands: true, false.

These are simple commands that don't need their own files.
"""

from ...types import CommandContext


class TrueCommand:
    """The true command - always succeeds."""

    name = "true"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        return ""


class FalseCommand:
    """The false command - always fails."""

    name = "false"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        ctx.state.fail()
        return ""
