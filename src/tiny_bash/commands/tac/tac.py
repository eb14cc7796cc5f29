"""Tac command implementation."""

from ...types import CommandContext


class TacCommand:
    """The tac command - reverse the lines of the previous stage's output."""

    name = "tac"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the tac command."""
        if "--help" in args:
            return "Usage: tac\n"

        content = ctx.stdin
        if not content:
            return ""

        # Reverse lines
        lines = content.splitlines()
        output = "\n".join(reversed(lines))
        if content.endswith("\n"):
            output += "\n"
        return output
