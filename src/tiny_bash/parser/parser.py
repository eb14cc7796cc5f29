"""Parser adapter for tiny-bash.

Builds the tiny-bash AST from the trees produced by ``bashlex``. bashlex uses
a single ``node`` class whose attributes depend on ``kind``:

    list        parts: nodes separated by operator nodes (; & && || newline)
    pipeline    parts: commands separated by pipe nodes
    command     parts: assignment, word and redirect nodes in source order
    compound    list: reservedword '(' ... reservedword ')', redirects
    word        word: quote-removed text, parts: parameter/commandsubstitution/...
    parameter   value: the parameter name ('?' for $?)

Positions (``node.pos``) are offsets into the parsed source, including the
nodes of nested command substitutions.

bashlex's own quote removal (``node.word``) and its parameter parts are not
reliable for words mixing quote styles, so words are re-scanned from the
source. Only the command substitutions and other nested parts bashlex found
are taken from its tree.
"""

import dataclasses
import logging
import re
from typing import Optional, Union

import bashlex  # type: ignore[import-untyped]

from ..ast.types import (
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
from ..types import ParserCallbacks

logger = logging.getLogger(__name__)

LOGICAL_OPERATORS = {"&&": "and", "||": "or"}


class ParseException(Exception):
    """Raised when source text cannot be parsed."""


PARAMETER_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
BRACED_PARAMETER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|[0-9]+|[?#@*$!-]")
SPECIAL_PARAMETERS = "?#@*$!-0123456789"

# Characters a backslash escapes inside double quotes
DQUOTE_ESCAPABLE = '$`"\\'


def _mark_background(node: Node) -> Node:
    """Flag every command under ``node`` as requested in the background."""
    if isinstance(node, CommandNode):
        return dataclasses.replace(node, is_background=True)
    if isinstance(node, PipelineNode):
        return PipelineNode(stages=tuple(_mark_background(s) for s in node.stages))
    if isinstance(node, SubshellNode):
        return SubshellNode(body=tuple(_mark_background(n) for n in node.body))
    if isinstance(node, LogicalExpressionNode):
        return LogicalExpressionNode(
            left=_mark_background(node.left),
            right=_mark_background(node.right),
            operator=node.operator,
        )
    return node


class _Translator:
    """Translate the bashlex trees of one source string."""

    def __init__(
        self,
        source: str,
        callbacks: ParserCallbacks,
        expanding_aliases: frozenset[str] = frozenset(),
    ):
        self._source = source
        self._callbacks = callbacks
        self._expanding_aliases = expanding_aliases

    def script(self) -> ScriptNode:
        if not self._source.strip():
            return ScriptNode()
        try:
            trees = bashlex.parse(self._source)
        except Exception as error:
            raise ParseException(str(error) or type(error).__name__) from error

        commands: list[Node] = []
        for tree in trees:
            commands.extend(self._sequence(tree))
        return ScriptNode(commands=tuple(commands))

    def _sequence(self, node) -> list[Node]:
        if node.kind == "list":
            return self._list(node.parts)
        return [self._node(node)]

    def _list(self, parts) -> list[Node]:
        """Fold ``a && b || c ; d &`` into sequenced logical expressions."""
        sequence: list[Node] = []
        current: Optional[Node] = None
        pending: Optional[str] = None

        for part in parts:
            if part.kind == "operator":
                if part.op in LOGICAL_OPERATORS:
                    pending = LOGICAL_OPERATORS[part.op]
                elif current is not None:
                    if part.op == "&":
                        current = _mark_background(current)
                    sequence.append(current)
                    current = None
                continue

            if part.kind == "list":
                if current is not None:
                    sequence.append(current)
                    current = None
                sequence.extend(self._list(part.parts))
                continue

            node = self._node(part)
            if pending is not None and current is not None:
                current = LogicalExpressionNode(left=current, right=node, operator=pending)
            else:
                if current is not None:
                    sequence.append(current)
                current = node
            pending = None

        if current is not None:
            sequence.append(current)
        return sequence

    def _node(self, node) -> Node:
        if node.kind == "command":
            return self._command(node)
        elif node.kind == "pipeline":
            return self._pipeline(node)
        elif node.kind == "compound":
            return self._compound(node)
        elif node.kind == "list":
            body = self._list(node.parts)
            return body[0] if len(body) == 1 else SubshellNode(body=tuple(body))
        return UnknownNode(kind=node.kind)

    def _pipeline(self, node) -> Node:
        stages: list[Node] = []
        for part in node.parts:
            if part.kind == "pipe":
                if part.pipe != "|":
                    return RedirectNode(text=part.pipe)
            elif part.kind == "reservedword":
                return UnknownNode(kind="negation" if part.word == "!" else part.word)
            else:
                stages.append(self._node(part))
        return PipelineNode(stages=tuple(stages))

    def _compound(self, node) -> Node:
        redirects = getattr(node, "redirects", None) or []
        if redirects:
            return RedirectNode(text=self._text(redirects[0]))

        items = node.list
        opener = items[0] if items else None
        if opener is None or opener.kind != "reservedword":
            return UnknownNode(kind=opener.kind if opener is not None else "compound")
        if opener.word == "{":
            return UnknownNode(kind="group")
        if opener.word != "(":
            return UnknownNode(kind=opener.word)

        body: list[Node] = []
        for item in items[1:]:
            if item.kind == "reservedword":
                continue
            body.extend(self._sequence(item))
        return SubshellNode(body=tuple(body))

    def _command(self, node) -> CommandNode:
        name: Optional[WordNode] = None
        prefix: list[Union[AssignmentWordNode, RedirectNode]] = []
        suffix: list[Union[WordNode, RedirectNode]] = []
        redirects: list[RedirectNode] = []

        for part in node.parts:
            if part.kind == "assignment" and name is None:
                prefix.append(self._word(part, AssignmentWordNode))
            elif part.kind in ("word", "assignment"):
                word = self._word(part, WordNode)
                if name is None:
                    name = word
                else:
                    suffix.append(word)
            else:
                redirects.append(RedirectNode(text=self._text(part)))

        # Redirections are rejected wherever they are evaluated; keep them on
        # the side that gets evaluated.
        if name is None:
            prefix.extend(redirects)
        else:
            suffix.extend(redirects)

        command = CommandNode(name=name, prefix=tuple(prefix), suffix=tuple(suffix))
        return self._expand_alias(command)

    def _expand_alias(self, command: CommandNode) -> CommandNode:
        """Splice in an alias whose replacement is one simple command."""
        if command.name is None or command.name.expansion is not None:
            return command
        word = command.name.text
        if word in self._expanding_aliases:
            return command
        target = self._callbacks.resolve_alias(word)
        if target == word:
            return command

        translator = _Translator(
            target, self._callbacks, self._expanding_aliases | {word}
        )
        try:
            replacement = translator.script()
        except ParseException:
            logger.debug("alias %s -> %r does not parse, left for evaluation", word, target)
            return command

        if len(replacement.commands) != 1:
            return command
        aliased = replacement.commands[0]
        if not isinstance(aliased, CommandNode) or aliased.name is None:
            return command
        return CommandNode(
            name=aliased.name,
            prefix=command.prefix + aliased.prefix,
            suffix=aliased.suffix + command.suffix,
        )

    def _word(self, node, cls):
        """Build a word from its source text.

        Quotes are removed here; literal stretches and expansions become
        units. A word without expansions keeps only its unquoted text.
        """
        source = self._source
        start, end = node.pos
        nested = {
            part.pos[0]: part
            for part in getattr(node, "parts", None) or []
            if part.kind != "parameter"
        }

        units: list[ExpansionUnit] = []
        literal: list[str] = []
        expanded = False

        def push(unit: ExpansionUnit) -> None:
            nonlocal expanded
            if literal:
                units.append(LiteralUnit(text="".join(literal)))
                literal.clear()
            units.append(unit)
            expanded = True

        quote: Optional[str] = None
        i = start
        while i < end:
            ch = source[i]
            if quote == "'":
                if ch == "'":
                    quote = None
                else:
                    literal.append(ch)
                i += 1
                continue

            part = nested.get(i)
            if part is not None:
                push(self._expansion_unit(part))
                i = part.pos[1]
                continue

            if ch == "$":
                unit, i = self._dollar(i, end, quote)
                if isinstance(unit, str):
                    literal.append(unit)
                else:
                    push(unit)
                continue
            if ch == "`":
                raise ParseException(f"unsupported command substitution at {i}")

            if quote == '"':
                if ch == '"':
                    quote = None
                elif ch == "\\" and i + 1 < end and source[i + 1] in DQUOTE_ESCAPABLE:
                    i += 1
                    literal.append(source[i])
                elif ch == "\\" and i + 1 < end and source[i + 1] == "\n":
                    i += 1
                else:
                    literal.append(ch)
            elif ch in ("'", '"'):
                quote = ch
            elif ch == "\\" and i + 1 < end:
                i += 1
                if source[i] != "\n":
                    literal.append(source[i])
            else:
                literal.append(ch)
            i += 1

        if not expanded:
            return cls(text="".join(literal))
        if literal:
            units.append(LiteralUnit(text="".join(literal)))
        return cls(text=source[start:end], expansion=tuple(units))

    def _dollar(
        self, i: int, end: int, quote: Optional[str]
    ) -> tuple[Union[ExpansionUnit, str], int]:
        """Scan the ``$`` at ``i``; returns the unit (or literal text) and the next index."""
        source = self._source
        following = source[i + 1] if i + 1 < end else ""

        if following == "{":
            close = self._closing_brace(i + 2, end)
            body = source[i + 2:close]
            if BRACED_PARAMETER.fullmatch(body):
                return self._parameter_unit(body), close + 1
            if not body:
                raise ParseException("bad substitution: ${}")
            # ${X:-d}, ${#X}, ${X%v}, ...
            return UnknownExpansionUnit(kind="parameter operator"), close + 1
        if following in ("(", "["):
            raise ParseException(f"unsupported expansion at {i}")
        if following == "'" and quote is None:
            return UnknownExpansionUnit(kind="ansi-c quoting"), i + 1
        if following == '"' and quote is None:
            # $"..." is a translatable string; without a catalog it is "..."
            return "", i + 1

        match = PARAMETER_NAME.match(source, i + 1, end)
        if match:
            return self._parameter_unit(match.group()), match.end()
        if following and following in SPECIAL_PARAMETERS:
            return self._parameter_unit(following), i + 2
        return "$", i + 1

    def _closing_brace(self, i: int, end: int) -> int:
        depth = 1
        while i < end:
            if self._source[i] == "{":
                depth += 1
            elif self._source[i] == "}":
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        raise ParseException("unterminated parameter expansion")

    def _parameter_unit(self, name: str) -> ExpansionUnit:
        if name == "?":
            return ParameterExpansionUnit(parameter="?", kind="last-exit-status")
        value = self._callbacks.resolve_environment(name)
        if value is not None:
            return LiteralUnit(text=value)
        return ParameterExpansionUnit(parameter=name)

    def _expansion_unit(self, part) -> ExpansionUnit:
        if part.kind == "commandsubstitution":
            body = self._sequence(part.command)
            return CommandExpansionUnit(command_ast=ScriptNode(commands=tuple(body)))
        return UnknownExpansionUnit(kind=part.kind)

    def _text(self, node) -> str:
        start, end = node.pos
        return self._source[start:end]


class BashlexParser:
    """Parser port implementation backed by bashlex.

    Only ``resolve_alias`` and ``resolve_environment`` are consulted. Parameters
    are resolved by the interpreter, so ``resolve_parameter`` goes unused and a
    ``$NAME`` the environment callback does not answer stays a
    ``ParameterExpansionUnit``.
    """

    def parse(self, source: str, callbacks: ParserCallbacks) -> ScriptNode:
        return _Translator(source, callbacks).script()


def _no_environment(name: str) -> Optional[str]:
    return None


def _no_parameter(unit: ParameterExpansionUnit) -> str:
    return ""


def _no_alias(word: str) -> str:
    return word


def parse(source: str, callbacks: Optional[ParserCallbacks] = None) -> ScriptNode:
    """Parse a script without a session (no aliases, everything lazy)."""
    if callbacks is None:
        callbacks = ParserCallbacks(
            resolve_environment=_no_environment,
            resolve_parameter=_no_parameter,
            resolve_alias=_no_alias,
        )
    return BashlexParser().parse(source, callbacks)
