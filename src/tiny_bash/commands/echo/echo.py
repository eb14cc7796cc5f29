"""Echo command implementation.

Usage: echo [-n] [STRING]...

Display a line of text.

Options:
  -n    Do not output the trailing newline
"""

from ...types import CommandContext


class EchoCommand:
    """The echo command."""

    name = "echo"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the echo command."""
        newline = True
        while args and args[0] == "-n":
            newline = False
            args = args[1:]

        output = " ".join(args)
        return output + "\n" if newline else output
