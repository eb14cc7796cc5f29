"""Word Expansion.

Resolves words that may carry expansion units into literal strings:
- Literal text between expansions
- Parameter expansion ($VAR, ${VAR}, $?)
- Command substitution $(...)

Units are resolved one after another, never concurrently: command
substitutions have side effects that later units must observe.
"""

import re
from typing import TYPE_CHECKING, Union

from ..ast.types import (
    AssignmentWordNode,
    CommandExpansionUnit,
    ExpansionUnit,
    LiteralUnit,
    ParameterExpansionUnit,
    RedirectNode,
    WordNode,
)
from .errors import UnknownExpansionTypeError, UnsupportedFeatureError
from .resolver import resolve_parameter

if TYPE_CHECKING:
    from .types import InterpreterContext


CONTROL_SEQUENCE_PATTERN = re.compile(
    r"[\x1b\x9b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
)


def strip_control_sequences(text: str) -> str:
    """Remove terminal escape/control sequences (colors, cursor moves)."""
    return CONTROL_SEQUENCE_PATTERN.sub("", text)


async def expand(
    ctx: "InterpreterContext",
    node: Union[WordNode, AssignmentWordNode, RedirectNode],
) -> str:
    """Expand a word node to a literal string."""
    if isinstance(node, RedirectNode):
        raise UnsupportedFeatureError("redirection")
    if node.expansion is not None:
        result = []
        for unit in node.expansion:
            result.append(await resolve_expansion_unit(ctx, unit))
        return "".join(result)
    return node.text


async def resolve_expansion_unit(ctx: "InterpreterContext", unit: ExpansionUnit) -> str:
    """Resolve a single expansion unit."""
    if isinstance(unit, LiteralUnit):
        return unit.text
    elif isinstance(unit, ParameterExpansionUnit):
        return resolve_parameter(ctx.state, unit)
    elif isinstance(unit, CommandExpansionUnit):
        output = await ctx.run(unit)
        # Like $(...) in bash: trailing newlines go away
        return strip_control_sequences(output).strip()
    else:
        raise UnknownExpansionTypeError(getattr(unit, "type", type(unit).__name__))
