"""Interpreter module for tiny-bash."""

from .errors import (
    CommandNotFoundError,
    ExecutionLimitError,
    InvalidAssignmentError,
    ParseFailureError,
    ProtocolViolationError,
    ShellError,
    UnknownExpansionTypeError,
    UnsupportedFeatureError,
)
from .expansion import expand, resolve_expansion_unit, strip_control_sequences
from .interpreter import Interpreter
from .resolver import resolve_alias, resolve_environment, resolve_parameter
from .types import InterpreterContext, SessionState

__all__ = [
    "CommandNotFoundError",
    "ExecutionLimitError",
    "Interpreter",
    "InterpreterContext",
    "InvalidAssignmentError",
    "ParseFailureError",
    "ProtocolViolationError",
    "SessionState",
    "ShellError",
    "UnknownExpansionTypeError",
    "UnsupportedFeatureError",
    "expand",
    "resolve_alias",
    "resolve_environment",
    "resolve_expansion_unit",
    "resolve_parameter",
    "strip_control_sequences",
]
