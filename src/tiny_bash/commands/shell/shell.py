"""Shell utility command implementations (clear, alias)."""

from ...types import CommandContext


class ClearCommand:
    """The clear command - clear the terminal screen."""

    name = "clear"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the clear command."""
        if "--help" in args or "-h" in args:
            return "Usage: clear\nClear the terminal screen.\n"

        # ESC[2J clears the screen, ESC[H moves cursor to home
        return "\033[2J\033[H"


class AliasCommand:
    """The alias command - display aliases.

    The alias table is fixed for the lifetime of a session, so definitions
    (``alias name=value``) are refused.
    """

    name = "alias"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the alias command."""
        if "--help" in args:
            return "Usage: alias [name ...]\nDisplay aliases.\n"

        aliases = ctx.state.aliases
        if not args:
            lines = [f"alias {name}='{value}'" for name, value in sorted(aliases.items())]
            return "\n".join(lines) + "\n" if lines else ""

        output_lines = []
        for arg in args:
            if "=" in arg:
                ctx.state.fail()
                output_lines.append(f"alias: {arg.split('=', 1)[0]}: aliases are read-only")
            elif arg in aliases:
                output_lines.append(f"alias {arg}='{aliases[arg]}'")
            else:
                ctx.state.fail()
                output_lines.append(f"alias: {arg}: not found")

        return "\n".join(output_lines) + "\n"
