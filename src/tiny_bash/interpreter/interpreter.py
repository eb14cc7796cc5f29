"""Interpreter - AST Execution Engine.

Main interpreter class that evaluates tiny-bash AST nodes against a session.
Delegates to specialized modules for:
- Word expansion (expansion.py)
- Parameter and alias resolution (resolver.py)

Everything runs on a single flow of control: each node is awaited before the
next one starts, so later commands observe the environment and return code
left behind by earlier ones.
"""

import logging
import shlex
from typing import Optional, Union

from ..ast.types import (
    AssignmentWordNode,
    CommandExpansionUnit,
    CommandNode,
    LogicalExpressionNode,
    Node,
    PipelineNode,
    RedirectNode,
    ScriptNode,
    SubshellNode,
)
from ..commands.registry import CommandRegistry
from ..parser import ParseException
from ..types import CommandContext, ExecutionLimits, Parser, ParserCallbacks
from .errors import (
    CommandNotFoundError,
    ExecutionLimitError,
    InvalidAssignmentError,
    ParseFailureError,
    ProtocolViolationError,
    UnsupportedFeatureError,
)
from .expansion import expand, strip_control_sequences
from .resolver import make_parser_callbacks
from .types import InterpreterContext, SessionState

logger = logging.getLogger(__name__)


class Interpreter:
    """AST interpreter for tiny-bash scripts."""

    def __init__(
        self,
        state: SessionState,
        commands: CommandRegistry,
        parser: Parser,
        limits: Optional[ExecutionLimits] = None,
    ):
        """Initialize the interpreter.

        Args:
            state: Session state, mutated in place by evaluation
            commands: Command registry
            parser: Parser used to re-parse alias replacements
            limits: Execution limits
        """
        self._state = state
        self._commands = commands
        self._parser = parser
        self._limits = limits or ExecutionLimits()
        self._callbacks = make_parser_callbacks(state)
        self._depth = 0
        self._command_count = 0

        self._ctx = InterpreterContext(
            state=state,
            commands=commands,
            limits=self._limits,
            run=self.run,
        )

    @property
    def state(self) -> SessionState:
        """Get the session state."""
        return self._state

    @property
    def callbacks(self) -> ParserCallbacks:
        """Resolver callbacks to hand to the parser."""
        return self._callbacks

    def parse(self, source: str) -> ScriptNode:
        """Parse source text with the session's resolver callbacks."""
        try:
            ast = self._parser.parse(source, self._callbacks)
        except ParseException as error:
            logger.debug("parse failed for %r: %s", source, error)
            raise ParseFailureError() from error
        logger.debug("parsed %r into %d top-level node(s)", source, len(ast.commands))
        return ast

    def reset_limits(self) -> None:
        """Start counting commands from zero (once per top-level execution)."""
        self._command_count = 0

    async def run(self, ast: Union[ScriptNode, CommandExpansionUnit]) -> str:
        """Evaluate a script, or the script embedded in a command substitution."""
        if isinstance(ast, CommandExpansionUnit):
            return await self.run(ast.command_ast)
        if not isinstance(ast, ScriptNode):
            raise ProtocolViolationError(getattr(ast, "type", type(ast).__name__))

        if self._depth >= self._limits.max_recursion_depth:
            raise ExecutionLimitError(
                f"maximum nesting depth ({self._limits.max_recursion_depth}) exceeded, "
                "increase execution_limits.max_recursion_depth",
                "recursion",
            )

        self._depth += 1
        try:
            stdout = ""
            for node in ast.commands:
                stdout += await self.walk(node)
            return stdout
        finally:
            self._depth -= 1

    async def walk(self, node: Node) -> str:
        """Evaluate a single node."""
        if isinstance(node, CommandNode):
            return await self.execute_command(node)
        elif isinstance(node, SubshellNode):
            return await self.execute_subshell(node)
        elif isinstance(node, PipelineNode):
            return await self.execute_pipeline(node)
        elif isinstance(node, LogicalExpressionNode):
            return await self.execute_logical_expression(node)
        elif isinstance(node, RedirectNode):
            raise UnsupportedFeatureError("redirection")
        else:
            raise UnsupportedFeatureError(getattr(node, "type", type(node).__name__))

    async def execute_subshell(self, node: SubshellNode) -> str:
        """Execute a subshell: independent commands, no piping between them."""
        stdout = ""
        for child in node.body:
            stdout += await self.walk(child)
        return stdout

    async def execute_pipeline(self, node: PipelineNode) -> str:
        """Execute a pipeline AST node.

        Each stage's output lands in the stage buffer where the next stage's
        handler can read it. Control sequences are stripped from every stage
        but the last.
        """
        state = self._state
        last = len(node.stages) - 1
        try:
            for i, stage in enumerate(node.stages):
                state.stage_buffer = await self.walk(stage)
                if i < last:
                    state.stage_buffer = strip_control_sequences(state.stage_buffer)
            return state.stage_buffer
        finally:
            state.stage_buffer = ""

    async def execute_logical_expression(self, node: LogicalExpressionNode) -> str:
        """Execute && / ||. The right side only runs when it has to."""
        state = self._state
        stdout = await self.walk(node.left)

        if (node.operator == "or" and state.return_code != 0) or (
            node.operator == "and" and state.return_code == 0
        ):
            state.succeed()
            stdout += await self.walk(node.right)
        return stdout

    async def execute_command(self, node: CommandNode) -> str:
        """Execute a simple command AST node."""
        state = self._state

        if node.is_background:
            state.fail()
            raise UnsupportedFeatureError("background execution")

        self._count_command()

        # Assignment-only statement: FOO=bar
        if node.name is None:
            await self._execute_assignments(node)
            return ""

        name = (await expand(self._ctx, node.name)).strip()
        command = self._commands.lookup(name)

        if command is None:
            try:
                return await self._execute_alias(name, node)
            except CommandNotFoundError as error:
                logger.info("command not found: %s", name)
                state.fail()
                return error.message

        # Arguments are expanded first so $? still sees the previous command
        args: list[str] = []
        for word in node.suffix:
            args.append(await expand(self._ctx, word))

        # Handlers can still report failure by setting state.return_code
        state.succeed()
        logger.debug("dispatching %s with %r", name, args)
        stdout = await command.execute(
            args, CommandContext(state=state, commands=self._commands)
        )
        state.stage_buffer = ""
        return stdout

    async def _execute_assignments(self, node: CommandNode) -> None:
        """Apply prefix assignments in declaration order."""
        for word in node.prefix:
            if isinstance(word, RedirectNode):
                self._state.fail()
                raise UnsupportedFeatureError("redirection")
            if not isinstance(word, AssignmentWordNode):
                self._state.fail()
                raise UnsupportedFeatureError(getattr(word, "type", type(word).__name__))
            try:
                await self._assign(word)
            except InvalidAssignmentError as error:
                # Remaining assignments in the same statement still apply
                logger.warning("%s", error.message.rstrip())
                self._state.fail()

    async def _assign(self, word: AssignmentWordNode) -> None:
        if "=" not in word.text:
            raise InvalidAssignmentError(word.text)
        name, _, value = (await expand(self._ctx, word)).partition("=")
        self._state.env[name] = value

    async def _execute_alias(self, name: str, node: CommandNode) -> str:
        """Re-parse and evaluate an alias replacement for an unknown command.

        Raises CommandNotFoundError when there is no alias, when the alias is
        already being expanded, or when anything in the re-evaluation faults.
        """
        state = self._state
        target = state.aliases.get(name)
        if target is None or name in state.active_aliases:
            raise CommandNotFoundError(name)

        state.active_aliases.add(name)
        try:
            args: list[str] = []
            for word in node.suffix:
                args.append(await expand(self._ctx, word))
            source = " ".join([target, *(shlex.quote(arg) for arg in args)])
            logger.debug("alias %s -> %r", name, source)
            return await self.run(self.parse(source))
        except ExecutionLimitError:
            raise
        except Exception as error:
            logger.debug("alias %s failed: %s", name, error)
            raise CommandNotFoundError(name) from error
        finally:
            state.active_aliases.discard(name)

    def _count_command(self) -> None:
        self._command_count += 1
        if self._command_count > self._limits.max_command_count:
            raise ExecutionLimitError(
                f"too many commands executed (>{self._limits.max_command_count}), "
                "increase execution_limits.max_command_count",
                "commands",
            )
