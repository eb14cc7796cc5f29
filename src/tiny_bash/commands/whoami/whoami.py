"""Whoami command implementation.

Usage: whoami

Print the effective username ($USER).
"""

from ...types import CommandContext


class WhoamiCommand:
    """The whoami command."""

    name = "whoami"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the whoami command."""
        return f"{ctx.env.get('USER', 'user')}\n"
