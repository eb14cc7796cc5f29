"""Main Shell class - the primary API for tiny-bash.

Example usage:
    from tiny_bash import Shell

    # Synchronous usage (for REPL, scripts)
    shell = Shell()
    output = shell.run("echo hello world")
    print(output)  # "hello world\n"

    # Async usage (for async applications)
    shell = Shell()
    output = await shell.exec("echo hello world")

    # Faults come back as an ErrorResult instead of raising
    result = shell.run("sleep 1 &")
    print(result.error)  # "background execution is not supported\n"
"""

import asyncio
import logging
from typing import Optional, Union

import nest_asyncio  # type: ignore[import-untyped]

from .commands import CommandRegistry, create_command_registry
from .interpreter import Interpreter, SessionState, ShellError
from .parser import BashlexParser
from .types import ErrorResult, ExecutionLimits, Parser

logger = logging.getLogger(__name__)

DEFAULT_ENV = {
    "SHELL": "tiny-bash",
    "USER": "definitelynotroot",
}

DEFAULT_ALIASES = {
    "nvim": "vim",
    "ff": "find -type f .",
}


class Shell:
    """Main tiny-bash interpreter class.

    Owns one session (environment, aliases, return code) and evaluates
    scripts against it, one at a time.
    """

    def __init__(
        self,
        *,
        env: Optional[dict[str, str]] = None,
        aliases: Optional[dict[str, str]] = None,
        commands: Optional[CommandRegistry] = None,
        parser: Optional[Parser] = None,
        limits: Optional[ExecutionLimits] = None,
    ):
        """Initialize the shell.

        Args:
            env: Additional environment variables.
            aliases: Alias table. Replaces the default aliases when given.
            commands: Custom command registry. If not provided, uses built-in commands.
            parser: Parser to turn source text into an AST. Defaults to bashlex.
            limits: Execution limits for runaway scripts.
        """
        self._commands = commands if commands is not None else create_command_registry()
        self._parser = parser or BashlexParser()
        self._limits = limits or ExecutionLimits()

        self._initial_env = {**DEFAULT_ENV, **(env or {})}
        self._initial_aliases = dict(DEFAULT_ALIASES if aliases is None else aliases)

        self._lock = asyncio.Lock()
        self._interpreter = self._create_interpreter()

    def _create_interpreter(self) -> Interpreter:
        state = SessionState(
            env=dict(self._initial_env),
            aliases=dict(self._initial_aliases),
        )
        return Interpreter(
            state=state,
            commands=self._commands,
            parser=self._parser,
            limits=self._limits,
        )

    @property
    def state(self) -> SessionState:
        """Get the session state."""
        return self._interpreter.state

    @property
    def env(self) -> dict[str, str]:
        """Get the environment variables."""
        return self._interpreter.state.env

    @property
    def aliases(self) -> dict[str, str]:
        """Get the alias table."""
        return self._interpreter.state.aliases

    @property
    def return_code(self) -> int:
        """Return code of the last command (0 or 1)."""
        return self._interpreter.state.return_code

    @property
    def commands(self) -> CommandRegistry:
        """Get the command registry."""
        return self._commands

    async def exec(self, script: str) -> Union[str, ErrorResult]:
        """Execute a script.

        Never raises: a parse failure or any fault during evaluation comes back
        as an ErrorResult, and output produced before the fault is dropped.

        Args:
            script: The script to execute.

        Returns:
            The concatenated output of every top-level command, or an ErrorResult.
        """
        async with self._lock:
            interpreter = self._interpreter
            interpreter.reset_limits()
            try:
                ast = interpreter.parse(script)
                return await interpreter.run(ast)
            except ShellError as error:
                logger.debug("evaluation of %r failed: %s", script, error.message.rstrip())
                return self._fail(error.message)
            except Exception as error:
                logger.exception("command handler raised while evaluating %r", script)
                return self._fail(f"{error}\n")

    def _fail(self, message: str) -> ErrorResult:
        state = self._interpreter.state
        state.fail()
        state.stage_buffer = ""
        return ErrorResult(error=message)

    def run(self, script: str) -> Union[str, ErrorResult]:
        """Execute a script synchronously.

        This is a convenience wrapper around exec() that works in any context,
        including Jupyter notebooks and async frameworks.

        Example:
            >>> shell = Shell()
            >>> print(shell.run('echo "Hello, World!"'), end="")
            Hello, World!
        """
        try:
            asyncio.get_running_loop()
            # We're in an existing event loop (Jupyter, async framework, etc.)
            # Apply nest_asyncio to allow nested event loops
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(self.exec(script))

    def reset(self) -> None:
        """Reset the session to its initial environment and aliases."""
        self._interpreter = self._create_interpreter()
