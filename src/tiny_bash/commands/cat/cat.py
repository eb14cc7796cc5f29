"""Cat command implementation.

Usage: cat [-]

Copy the previous pipeline stage's output. There is no filesystem, so any
file operand is reported as missing.
"""

from ...types import CommandContext


class CatCommand:
    """The cat command."""

    name = "cat"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the cat command."""
        output = ""
        for arg in args:
            if arg == "-":
                continue
            ctx.state.fail()
            output += f"cat: {arg}: No such file or directory\n"
        return ctx.stdin + output
