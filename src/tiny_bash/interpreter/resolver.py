"""Parameter and alias resolution.

These answer "what does this reference evaluate to" against session state.
The parser gets them through ``ParserCallbacks``; the expander calls
``resolve_parameter`` while evaluating.
"""

from typing import Optional

from ..ast.types import ParameterExpansionUnit
from ..types import ParserCallbacks
from .types import SessionState


def resolve_parameter(state: SessionState, unit: ParameterExpansionUnit) -> str:
    """Resolve $NAME or $? against the session."""
    if unit.kind == "last-exit-status":
        return str(state.return_code)
    return state.env.get(unit.parameter, "")


def resolve_alias(state: SessionState, word: str) -> str:
    """Return the alias target for ``word``, or ``word`` if it is not aliased."""
    return state.aliases.get(word) or word


def resolve_environment(state: SessionState, name: str) -> Optional[str]:
    """Parse-time environment lookup.

    Always unresolved: variables are read when the expansion is evaluated, so
    assignments earlier in the same script are visible to later commands.
    """
    return None


def make_parser_callbacks(state: SessionState) -> ParserCallbacks:
    """Bind the resolvers to a session for the parser."""
    return ParserCallbacks(
        resolve_environment=lambda name: resolve_environment(state, name),
        resolve_parameter=lambda unit: resolve_parameter(state, unit),
        resolve_alias=lambda word: resolve_alias(state, word),
    )
