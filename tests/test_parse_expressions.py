"""Tests for the expression grammar used inside tags."""

import pytest

from trellis.nodes import expressions as e

from .helpers import parse_error, parse_one


def expr(source: str) -> e.Expr:
    """Parse ``{{ source }}`` and return the expression."""
    return parse_one(f"{{{{ {source} }}}}").expr


class TestPrimaries:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("true", e.Const("true", "bool")),
            ("false", e.Const("false", "bool")),
            ("42", e.Const("42", "num")),
            ("1.5", e.Const("1.5", "num")),
            ('"hi"', e.Const("hi", "str")),
            ("'c'", e.Const("c", "char")),
            ("name", e.Var("name")),
            ("None", e.Path(("None",))),
            ("Color::Red", e.Path(("Color", "Red"))),
            ("::std::MAX", e.Path(("", "std", "MAX"))),
        ],
    )
    def test_literal_and_names(self, source, expected):
        assert expr(source) == expected

    def test_truthy_is_a_name(self):
        assert expr("trueish") == e.Var("trueish")

    def test_list(self):
        assert expr("[1, x,]") == e.List((e.Const("1", "num"), e.Var("x")))
        assert expr("[]") == e.List(())

    def test_group_and_tuples(self):
        assert expr("(x)") == e.Group(e.Var("x"))
        assert expr("()") == e.Tuple(())
        assert expr("(x,)") == e.Tuple((e.Var("x"),))
        assert expr("(x, y)") == e.Tuple((e.Var("x"), e.Var("y")))


class TestPostfix:
    def test_attribute_index_call(self):
        assert expr("a.b[0](c)?") == e.Try(
            e.FuncCall(
                e.Getitem(e.Getattr(e.Var("a"), "b"), e.Const("0", "num")),
                (e.Var("c"),),
            )
        )

    def test_method_call(self):
        assert expr("user.name()") == e.FuncCall(e.Getattr(e.Var("user"), "name"), ())

    def test_filters(self):
        assert expr("name | upper | truncate(10)") == e.Filter(
            e.Filter(e.Var("name"), "upper"),
            "truncate",
            (e.Const("10", "num"),),
        )


class TestOperators:
    def test_precedence(self):
        assert expr("a + b * c") == e.BinOp(
            "+", e.Var("a"), e.BinOp("*", e.Var("b"), e.Var("c"))
        )

    def test_left_associative(self):
        assert expr("a - b - c") == e.BinOp(
            "-", e.BinOp("-", e.Var("a"), e.Var("b")), e.Var("c")
        )

    def test_logic_and_comparison(self):
        assert expr("a == 1 || !b && c < 2") == e.BinOp(
            "||",
            e.BinOp("==", e.Var("a"), e.Const("1", "num")),
            e.BinOp(
                "&&",
                e.UnaryOp("!", e.Var("b")),
                e.BinOp("<", e.Var("c"), e.Const("2", "num")),
            ),
        )

    def test_keyword_bit_operators(self):
        assert expr("a bitor b xor c") == e.BinOp(
            "bitor", e.Var("a"), e.BinOp("xor", e.Var("b"), e.Var("c"))
        )

    def test_or_is_not_a_filter(self):
        assert expr("a || b") == e.BinOp("||", e.Var("a"), e.Var("b"))

    def test_unary_minus(self):
        assert expr("-x") == e.UnaryOp("-", e.Var("x"))

    @pytest.mark.parametrize("op", ["..", "..="])
    def test_ranges(self, op):
        assert expr(f"1{op}n") == e.Range(op, e.Const("1", "num"), e.Var("n"))

    def test_open_ranges(self):
        assert expr("..n") == e.Range("..", None, e.Var("n"))
        assert expr("a..") == e.Range("..", e.Var("a"), None)


class TestRecovery:
    def test_dangling_operator_is_left_for_trim_marker(self):
        node = parse_one("{{ a + b -}}")
        assert node.expr == e.BinOp("+", e.Var("a"), e.Var("b"))

    def test_unbalanced_parenthesis_is_fatal(self):
        parse_error("{{ (a }}")

    def test_deeply_nested_expression_fails_cleanly(self):
        err = parse_error("{{ " + "(" * 5000 + "x" + ")" * 5000 + " }}")
        assert err.code.value == "T-PAR-007"
