"""AST module for tiny-bash."""

from .types import (
    AssignmentWordNode,
    CommandExpansionUnit,
    CommandNode,
    ExpansionUnit,
    LiteralUnit,
    LogicalExpressionNode,
    Node,
    ParameterExpansionUnit,
    PipelineNode,
    RedirectNode,
    ScriptNode,
    SubshellNode,
    UnknownExpansionUnit,
    UnknownNode,
    WordNode,
)

__all__ = [
    "AssignmentWordNode",
    "CommandExpansionUnit",
    "CommandNode",
    "ExpansionUnit",
    "LiteralUnit",
    "LogicalExpressionNode",
    "Node",
    "ParameterExpansionUnit",
    "PipelineNode",
    "RedirectNode",
    "ScriptNode",
    "SubshellNode",
    "UnknownExpansionUnit",
    "UnknownNode",
    "WordNode",
]
