"""tiny-bash: a miniature async shell interpreter.

Evaluates parsed bash syntax trees against an in-memory session:
sequencing, pipelines, subshells, && / ||, parameter expansion, command
substitution and alias fallback.
"""

from .commands import CommandRegistry, FunctionCommand, create_command_registry
from .interpreter import Interpreter, SessionState
from .parser import BashlexParser, ParseException, parse
from .shell import Shell
from .types import (
    Command,
    CommandContext,
    ErrorResult,
    ExecutionLimits,
    Parser,
    ParserCallbacks,
)

__version__ = "0.1.0"

__all__ = [
    "BashlexParser",
    "Command",
    "CommandContext",
    "CommandRegistry",
    "ErrorResult",
    "ExecutionLimits",
    "FunctionCommand",
    "Interpreter",
    "ParseException",
    "Parser",
    "ParserCallbacks",
    "SessionState",
    "Shell",
    "create_command_registry",
    "parse",
]
