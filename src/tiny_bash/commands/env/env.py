"""Env and printenv command implementations."""

from ...types import CommandContext


class EnvCommand:
    """The env command - print environment."""

    name = "env"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the env command."""
        if "--help" in args:
            return "Usage: env\n"

        lines = [f"{k}={v}" for k, v in sorted(ctx.env.items())]
        return "\n".join(lines) + "\n" if lines else ""


class PrintenvCommand:
    """The printenv command - print environment variables."""

    name = "printenv"

    async def execute(self, args: list[str], ctx: CommandContext) -> str:
        """Execute the printenv command."""
        var_names: list[str] = []

        for arg in args:
            if arg == "--help":
                return "Usage: printenv [VARIABLE]...\n"
            elif arg.startswith("-"):
                pass  # Ignore options
            else:
                var_names.append(arg)

        if not var_names:
            lines = [f"{k}={v}" for k, v in sorted(ctx.env.items())]
            return "\n".join(lines) + "\n" if lines else ""

        # A missing variable makes the command fail
        output_lines = []
        for name in var_names:
            if name in ctx.env:
                output_lines.append(ctx.env[name])
            else:
                ctx.state.fail()

        output = "\n".join(output_lines)
        if output:
            output += "\n"
        return output
