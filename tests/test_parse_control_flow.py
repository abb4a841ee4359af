"""Tests for if, for, match, break and continue."""

import pytest

from trellis import ErrorCode, parse
from trellis.nodes import (
    Break,
    Cond,
    CondTest,
    Continue,
    If,
    Lit,
    Loop,
    Match,
    Output,
    When,
    Whitespace,
    Ws,
)
from trellis.nodes import expressions as e
from trellis.nodes import targets as t

from .helpers import parse_error, parse_one

NO_WS = Ws(None, None)


class TestIf:
    def test_simple_if(self):
        node = parse_one("{% if user %}hi{% endif %}")
        assert node == If(
            (Cond(NO_WS, CondTest(None, e.Var("user")), (Lit("", "hi", ""),)),),
            NO_WS,
        )

    def test_else_if_chain(self):
        node = parse_one("{% if a %}1{% else if b %}2{% else %}3{% endif %}")
        assert isinstance(node, If)
        tests = [branch.test for branch in node.branches]
        assert tests == [CondTest(None, e.Var("a")), CondTest(None, e.Var("b")), None]
        assert [branch.body for branch in node.branches] == [
            (Lit("", "1", ""),),
            (Lit("", "2", ""),),
            (Lit("", "3", ""),),
        ]

    def test_if_let(self):
        node = parse_one("{% if let Some(x) = item %}{{ x }}{% endif %}")
        test = node.branches[0].test
        assert test == CondTest(t.Tuple(("Some",), (t.Name("x"),)), e.Var("item"))

    def test_set_is_accepted_in_if_let(self):
        node = parse_one("{% if set x = y %}{% endif %}")
        assert node.branches[0].test == CondTest(t.Name("x"), e.Var("y"))

    def test_let_without_binding_is_a_plain_name(self):
        node = parse_one("{% if let %}{% endif %}")
        assert node.branches[0].test == CondTest(None, e.Var("let"))

    def test_markers(self):
        node = parse_one("{%- if a +%}{%~ else -%}{%+ endif ~%}")
        assert node.branches[0].ws == Ws(Whitespace.SUPPRESS, Whitespace.PRESERVE)
        assert node.branches[1].ws == Ws(Whitespace.MINIMIZE, Whitespace.SUPPRESS)
        assert node.ws == Ws(Whitespace.PRESERVE, Whitespace.MINIMIZE)

    def test_empty_bodies(self):
        node = parse_one("{% if a %}{% else %}{% endif %}")
        assert [branch.body for branch in node.branches] == [(), ()]

    def test_missing_condition_is_fatal(self):
        err = parse_error("{% if %}x{% endif %}")
        assert err.code is ErrorCode.INVALID_EXPRESSION
        assert err.offset == 6

    def test_missing_endif_is_fatal(self):
        err = parse_error("{% if a %}never closed")
        assert err.code is ErrorCode.UNCLOSED_TAG
        assert err.offset == 0

    def test_else_after_else_is_fatal(self):
        err = parse_error("{% if a %}{% else %}{% else %}{% endif %}")
        assert err.offset == 20

    def test_wrong_end_tag_is_fatal(self):
        err = parse_error("{% if a %}x{% endfor %}")
        assert err.code is ErrorCode.UNCLOSED_TAG
        assert "endfor" in err.message


class TestFor:
    def test_simple_loop(self):
        node = parse_one("{% for x in items %}{{ x }}{% endfor %}")
        assert node == Loop(
            ws1=NO_WS,
            target=t.Name("x"),
            iter=e.Var("items"),
            test=None,
            body=(Output(NO_WS, e.Var("x")),),
            ws2=NO_WS,
            else_=(),
            ws3=NO_WS,
        )

    def test_tuple_target_and_guard(self):
        node = parse_one("{% for (k, v) in map.items() if v %}{% endfor %}")
        assert node.target == t.Tuple((), (t.Name("k"), t.Name("v")))
        assert node.iter == e.FuncCall(e.Getattr(e.Var("map"), "items"))
        assert node.test == e.Var("v")

    def test_range_iterable(self):
        node = parse_one("{% for i in 0..10 %}{% endfor %}")
        assert node.iter == e.Range("..", e.Const("0", "num"), e.Const("10", "num"))

    def test_else_block(self):
        node = parse_one("{% for x in xs %}a{% else %}none{% endfor %}")
        assert node.body == (Lit("", "a", ""),)
        assert node.else_ == (Lit("", "none", ""),)

    def test_whitespace_records_with_else(self):
        node = parse_one("{%- for x in xs +%}{%~ else -%}{%+ endfor ~%}")
        assert node.ws1 == Ws(Whitespace.SUPPRESS, Whitespace.PRESERVE)
        assert node.ws2 == Ws(Whitespace.MINIMIZE, Whitespace.SUPPRESS)
        assert node.ws3 == Ws(Whitespace.PRESERVE, Whitespace.MINIMIZE)

    def test_whitespace_records_without_else(self):
        node = parse_one("{% for x in xs %}{%- endfor +%}")
        assert node.ws2 == Ws(Whitespace.SUPPRESS, None)
        assert node.ws3 == Ws(None, Whitespace.PRESERVE)

    def test_missing_in_is_fatal(self):
        err = parse_error("{% for x of xs %}{% endfor %}")
        assert "'in'" in err.message
        assert err.offset == 9

    def test_missing_target_is_fatal(self):
        err = parse_error("{% for in xs %}{% endfor %}")
        assert err.code in (ErrorCode.INVALID_PATTERN, ErrorCode.UNEXPECTED_INPUT)

    def test_missing_endfor_is_fatal(self):
        err = parse_error("{% for x in xs %}body")
        assert err.code is ErrorCode.UNCLOSED_TAG
        assert err.offset == 0


class TestLoopControl:
    def test_break_and_continue_inside_loop(self):
        node = parse_one("{% for x in xs %}{% break %}{% continue %}{% endfor %}")
        assert node.body == (Break(NO_WS), Continue(NO_WS))

    def test_nested_inside_if_inside_loop(self):
        node = parse_one("{% for x in xs %}{% if x %}{% break %}{% endif %}{% endfor %}")
        assert node.body[0].branches[0].body == (Break(NO_WS),)

    def test_markers(self):
        node = parse_one("{% for x in xs %}{%- break ~%}{% endfor %}")
        assert node.body == (Break(Ws(Whitespace.SUPPRESS, Whitespace.MINIMIZE)),)

    @pytest.mark.parametrize("keyword", ["break", "continue"])
    def test_outside_loop_is_fatal(self, keyword):
        err = parse_error(f"text {{% {keyword} %}}")
        assert err.code is ErrorCode.LOOP_CONTROL_OUTSIDE_LOOP
        assert err.offset == 5

    def test_in_for_else_is_fatal(self):
        err = parse_error("{% for x in xs %}{% else %}{% break %}{% endfor %}")
        assert err.code is ErrorCode.LOOP_CONTROL_OUTSIDE_LOOP

    def test_in_macro_inside_loop_is_allowed(self):
        # Macro bodies share the loop counter of the surrounding construct.
        node = parse_one(
            "{% for x in xs %}{% macro m() %}{% break %}{% endmacro %}{% endfor %}"
        )
        assert node.body[0].body == (Break(NO_WS),)

    def test_after_loop_is_fatal(self):
        err = parse_error("{% for x in xs %}{% endfor %}{% break %}")
        assert err.code is ErrorCode.LOOP_CONTROL_OUTSIDE_LOOP


class TestMatch:
    def test_arms(self):
        node = parse_one(
            "{% match item %}"
            "{% when Some with (x) %}{{ x }}"
            "{% when None %}none"
            "{% endmatch %}"
        )
        assert isinstance(node, Match)
        assert node.subject == e.Var("item")
        assert node.arms == (
            When(NO_WS, t.Tuple(("Some",), (t.Name("x"),)), (Output(NO_WS, e.Var("x")),)),
            When(NO_WS, t.Path(("None",)), (Lit("", "none", ""),)),
        )

    def test_whitespace_and_comments_before_first_arm_are_dropped(self):
        node = parse_one("{% match x %}\n  {# c #}\n{% when 1 %}a{% endmatch %}")
        assert len(node.arms) == 1
        assert node.arms[0].target == t.NumLit("1")

    def test_else_arm_is_moved_last(self):
        node = parse_one(
            "{% match v %}{% when A %}a{% else %}z{% when B %}b{% when C %}c{% endmatch %}"
        )
        bodies = [arm.body[0].value for arm in node.arms]
        assert bodies == ["a", "b", "c", "z"]
        assert node.arms[-1].target == t.Name("_")

    def test_else_between_later_arms(self):
        node = parse_one(
            "{% match v %}{% when A %}{% when B %}{% else %}{% when C %}{% endmatch %}"
        )
        assert [arm.target for arm in node.arms] == [
            t.Path(("A",)),
            t.Path(("B",)),
            t.Path(("C",)),
            t.Name("_"),
        ]

    def test_markers(self):
        node = parse_one("{%- match v +%}{%~ when x -%}{%+ endmatch ~%}")
        assert node.ws1 == Ws(Whitespace.SUPPRESS, Whitespace.PRESERVE)
        assert node.arms[0].ws == Ws(Whitespace.MINIMIZE, Whitespace.SUPPRESS)
        assert node.ws2 == Ws(Whitespace.PRESERVE, Whitespace.MINIMIZE)

    def test_struct_pattern(self):
        node = parse_one("{% match p %}{% when Point { x, y: 0 } %}{% endmatch %}")
        assert node.arms[0].target == t.Struct(
            ("Point",), (("x", t.Name("x")), ("y", t.NumLit("0")))
        )

    def test_no_arms_is_fatal(self):
        err = parse_error("{% match x %}{% endmatch %}")
        assert err.offset == 13

    def test_text_before_first_arm_is_fatal(self):
        parse_error("{% match x %}oops{% when 1 %}{% endmatch %}")

    def test_second_else_is_fatal(self):
        parse_error("{% match x %}{% when 1 %}{% else %}{% else %}{% endmatch %}")

    def test_missing_endmatch_is_fatal(self):
        err = parse_error("{% match x %}{% when 1 %}a")
        assert err.code is ErrorCode.UNCLOSED_TAG


class TestUnconsumedInput:
    @pytest.mark.parametrize("keyword", ["endif", "endfor", "else", "endmatch", "when"])
    def test_stray_tag_is_fatal(self, keyword):
        err = parse_error(f"text {{% {keyword} %}}")
        assert err.offset == 5
        assert keyword in err.message

    def test_unknown_tag_is_fatal(self):
        err = parse_error("{% frobnicate %}")
        assert "frobnicate" in err.message
        assert err.suggestion

    def test_unterminated_tag_is_fatal(self):
        parse_error("{% if x")

    def test_parse_returns_template(self):
        template = parse("{% if a %}{% endif %}", name="page.html")
        assert template.name == "page.html"
        assert template.extends is None
