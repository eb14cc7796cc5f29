"""Interpreter errors.

Every message is newline-terminated plain text so it can be shown to the user
as-is. ``InvalidAssignmentError`` and ``CommandNotFoundError`` are handled
inside command dispatch; everything else aborts the evaluation and surfaces
from ``Shell.exec`` as an ``ErrorResult``.
"""


class ShellError(Exception):
    """Base class for interpreter errors."""

    def __init__(self, message: str):
        if not message.endswith("\n"):
            message += "\n"
        super().__init__(message)
        self.message = message


class UnsupportedFeatureError(ShellError):
    """Background execution, redirection, or an unsupported node kind."""

    def __init__(self, feature: str):
        super().__init__(f"{feature} is not supported")
        self.feature = feature


class InvalidAssignmentError(ShellError):
    """Assignment prefix without '='."""

    def __init__(self, word: str):
        super().__init__(f"invalid assignment: {word}")
        self.word = word


class CommandNotFoundError(ShellError):
    """No handler and no usable alias for a command name."""

    def __init__(self, name: str):
        super().__init__(f"command not found: {name}")
        self.name = name


class UnknownExpansionTypeError(ShellError):
    """Expansion unit of a kind the resolver does not handle."""

    def __init__(self, kind: str):
        super().__init__(f"Unknown expansion type {kind}")
        self.kind = kind


class ParseFailureError(ShellError):
    """The parser rejected the source."""

    def __init__(self, message: str = "invalid/unsupported syntax"):
        super().__init__(message)


class ProtocolViolationError(ShellError):
    """The parser handed back a root the interpreter cannot run."""

    def __init__(self, kind: str):
        super().__init__(f"unexpected syntax tree root: {kind}")
        self.kind = kind


class ExecutionLimitError(ShellError):
    """Error thrown when execution limits are exceeded."""

    def __init__(self, message: str, limit_type: str):
        super().__init__(message)
        self.limit_type = limit_type
