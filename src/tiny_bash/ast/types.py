"""AST node types for tiny-bash.

The parser produces these nodes and the interpreter treats them as an
immutable tagged union. Every construct the parser does not map onto a known
node becomes an ``UnknownNode`` carrying the original tag, so the interpreter
can report it by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Union


# =============================================================================
# Expansion units
# =============================================================================


@dataclass(frozen=True)
class LiteralUnit:
    """Plain text between expansions inside a word."""

    text: str
    type: str = field(default="Literal", init=False)


@dataclass(frozen=True)
class ParameterExpansionUnit:
    """$NAME, ${NAME} or $?."""

    parameter: str
    kind: Literal["parameter", "last-exit-status"] = "parameter"
    type: str = field(default="ParameterExpansion", init=False)


@dataclass(frozen=True)
class CommandExpansionUnit:
    """$(...) or `...` - a nested script evaluated for its output."""

    command_ast: ScriptNode
    type: str = field(default="CommandExpansion", init=False)


@dataclass(frozen=True)
class UnknownExpansionUnit:
    """An expansion the interpreter has no resolver for (tilde, $((...)), ...)."""

    kind: str

    @property
    def type(self) -> str:
        return self.kind


ExpansionUnit = Union[
    LiteralUnit,
    ParameterExpansionUnit,
    CommandExpansionUnit,
    UnknownExpansionUnit,
]


# =============================================================================
# Words
# =============================================================================


@dataclass(frozen=True)
class WordNode:
    """A word.

    ``expansion`` is set when the word carries expansion units; the units then
    cover the whole word, literal stretches included.
    """

    text: str
    expansion: Optional[tuple[ExpansionUnit, ...]] = None
    type: str = field(default="Word", init=False)


@dataclass(frozen=True)
class AssignmentWordNode:
    """NAME=value in command prefix position."""

    text: str
    expansion: Optional[tuple[ExpansionUnit, ...]] = None
    type: str = field(default="AssignmentWord", init=False)


@dataclass(frozen=True)
class RedirectNode:
    """A redirection such as ``> file``. Always rejected at evaluation."""

    text: str
    type: str = field(default="Redirect", init=False)


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class CommandNode:
    """A simple command: ``[prefix...] [name [suffix...]]``."""

    name: Optional[WordNode] = None
    prefix: tuple[Union[AssignmentWordNode, RedirectNode], ...] = ()
    suffix: tuple[Union[WordNode, RedirectNode], ...] = ()
    is_background: bool = False
    type: str = field(default="Command", init=False)


@dataclass(frozen=True)
class PipelineNode:
    """cmd1 | cmd2 | cmd3"""

    stages: tuple[Node, ...]
    type: str = field(default="Pipeline", init=False)


@dataclass(frozen=True)
class SubshellNode:
    """( body )"""

    body: tuple[Node, ...]
    type: str = field(default="Subshell", init=False)


@dataclass(frozen=True)
class LogicalExpressionNode:
    """left && right, left || right"""

    left: Node
    right: Node
    operator: Literal["and", "or"]
    type: str = field(default="LogicalExpression", init=False)


@dataclass(frozen=True)
class UnknownNode:
    """A construct the interpreter does not support, tagged with its kind."""

    kind: str

    @property
    def type(self) -> str:
        return self.kind


Node = Union[
    CommandNode,
    PipelineNode,
    SubshellNode,
    LogicalExpressionNode,
    RedirectNode,
    UnknownNode,
]


@dataclass(frozen=True)
class ScriptNode:
    """Root node: the top-level commands of a script, in source order."""

    commands: tuple[Node, ...] = ()
    type: str = field(default="Script", init=False)
