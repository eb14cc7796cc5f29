"""Tests for the bashlex parser adapter."""

import pytest

from tiny_bash import ParseException, ParserCallbacks, parse
from tiny_bash.ast import (
    AssignmentWordNode,
    CommandExpansionUnit,
    CommandNode,
    LiteralUnit,
    LogicalExpressionNode,
    ParameterExpansionUnit,
    PipelineNode,
    RedirectNode,
    ScriptNode,
    SubshellNode,
    UnknownExpansionUnit,
    UnknownNode,
    WordNode,
)


def callbacks(aliases=None, env=None):
    aliases = aliases or {}
    env = env or {}
    return ParserCallbacks(
        resolve_environment=lambda name: env.get(name),
        resolve_parameter=lambda unit: "",
        resolve_alias=lambda word: aliases.get(word, word),
    )


def only(script: ScriptNode):
    assert len(script.commands) == 1
    return script.commands[0]


class TestSimpleCommands:
    """Test simple command translation."""

    def test_command_with_args(self):
        node = only(parse("echo hello world"))
        assert node == CommandNode(
            name=WordNode(text="echo"),
            suffix=(WordNode(text="hello"), WordNode(text="world")),
        )

    def test_quotes_removed(self):
        node = only(parse("echo 'a  b'"))
        assert node.suffix == (WordNode(text="a  b"),)

    def test_assignment_only(self):
        node = only(parse("FOO=bar"))
        assert node.name is None
        assert node.prefix == (AssignmentWordNode(text="FOO=bar"),)

    def test_sequence(self):
        script = parse("echo a; echo b")
        assert [c.name.text for c in script.commands] == ["echo", "echo"]
        assert [c.suffix[0].text for c in script.commands] == ["a", "b"]

    def test_blank_source(self):
        assert parse("  \n ") == ScriptNode()


class TestCompoundCommands:
    """Test operators, pipelines and subshells."""

    def test_and(self):
        node = only(parse("true && echo hi"))
        assert isinstance(node, LogicalExpressionNode)
        assert node.operator == "and"
        assert node.left.name.text == "true"
        assert node.right.name.text == "echo"

    def test_chain_folds_left(self):
        node = only(parse("a && b || c"))
        assert node.operator == "or"
        assert node.left.operator == "and"
        assert node.right.name.text == "c"

    def test_pipeline(self):
        node = only(parse("echo hi | cat"))
        assert isinstance(node, PipelineNode)
        assert [stage.name.text for stage in node.stages] == ["echo", "cat"]

    def test_subshell(self):
        node = only(parse("(echo a; echo b)"))
        assert isinstance(node, SubshellNode)
        assert [c.suffix[0].text for c in node.body] == ["a", "b"]

    def test_background(self):
        node = only(parse("echo hi &"))
        assert node.is_background

    def test_redirect(self):
        node = only(parse("echo hi > out.txt"))
        assert isinstance(node.suffix[-1], RedirectNode)

    def test_if_is_unknown(self):
        node = only(parse("if true; then echo yes; fi"))
        assert isinstance(node, UnknownNode)


class TestExpansions:
    """Test expansion units inside words."""

    def test_parameter(self):
        node = only(parse('echo "x$FOO"'))
        assert node.suffix[0].expansion == (
            LiteralUnit("x"),
            ParameterExpansionUnit("FOO"),
        )

    def test_last_exit_status(self):
        node = only(parse("echo $?"))
        assert node.suffix[0].expansion == (
            ParameterExpansionUnit("?", kind="last-exit-status"),
        )

    def test_command_substitution(self):
        node = only(parse("echo $(echo hi)"))
        (unit,) = node.suffix[0].expansion
        assert isinstance(unit, CommandExpansionUnit)
        inner = only(unit.command_ast)
        assert inner.name.text == "echo"
        assert inner.suffix == (WordNode(text="hi"),)

    def test_assignment_value(self):
        node = only(parse("B=$A-two"))
        assert node.prefix[0].expansion == (
            LiteralUnit("B="),
            ParameterExpansionUnit("A"),
            LiteralUnit("-two"),
        )

    def test_single_quotes_stay_literal(self):
        node = only(parse("echo '$HOME'"))
        assert node.suffix == (WordNode(text="$HOME"),)

    def test_environment_callback_consulted(self):
        node = only(parse("echo $HOME", callbacks(env={"HOME": "/root"})))
        assert node.suffix[0].expansion == (LiteralUnit("/root"),)


class TestAliases:
    """Test parse-time alias expansion."""

    def test_alias_spliced(self):
        node = only(parse("ll /tmp", callbacks(aliases={"ll": "ls -l"})))
        assert node.name.text == "ls"
        assert [w.text for w in node.suffix] == ["-l", "/tmp"]

    def test_self_reference_stops(self):
        node = only(parse("ls", callbacks(aliases={"ls": "ls -a"})))
        assert node.name.text == "ls"
        assert [w.text for w in node.suffix] == ["-a"]

    def test_unparseable_alias_left_alone(self):
        node = only(parse("bad", callbacks(aliases={"bad": "echo 'oops"})))
        assert node.name.text == "bad"


class TestErrors:
    """Test parse failures."""

    def test_unterminated_quote(self):
        with pytest.raises(ParseException):
            parse('echo "unterminated')

    def test_dangling_operator(self):
        with pytest.raises(ParseException):
            parse("echo hi &&")


class TestQuoting:
    """Test quote removal and expansions inside quoted words."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("echo 'it''s'", "its"),
            ("echo \"a\"'b'", "ab"),
            ("echo a\\ b", "a b"),
            ("echo \"it's\"", "it's"),
            ("echo \"\\$x\"", "$x"),
            ("echo \"$\"", "$"),
            ("echo '$'", "$"),
        ],
    )
    def test_literal_words(self, source, expected):
        node = only(parse(source))
        assert node.suffix == (WordNode(text=expected),)

    def test_parameter_between_quoted_stretches(self):
        node = only(parse("echo 'a'\"$USER\"'b'"))
        assert node.suffix[0].expansion == (
            LiteralUnit("a"),
            ParameterExpansionUnit("USER"),
            LiteralUnit("b"),
        )

    def test_literal_dollar_before_parameter(self):
        node = only(parse("echo '$'\"$USER\""))
        assert node.suffix[0].expansion == (
            LiteralUnit("$"),
            ParameterExpansionUnit("USER"),
        )

    def test_braced_parameter(self):
        node = only(parse("echo ${X}y"))
        assert node.suffix[0].expansion == (
            ParameterExpansionUnit("X"),
            LiteralUnit("y"),
        )

    @pytest.mark.parametrize("word", ["${X:-d}", "${#X}", "${X%v}"])
    def test_parameter_operators_are_unknown(self, word):
        node = only(parse(f"echo {word}"))
        assert node.suffix[0].expansion == (
            UnknownExpansionUnit(kind="parameter operator"),
        )
