"""Tests for tree traversal and dependency analysis."""

from trellis import parse
from trellis.analysis import (
    DependencyWalker,
    NodeVisitor,
    block_names,
    iter_child_nodes,
    template_dependencies,
    walk,
)
from trellis.nodes import BlockDef, Cond, If, Lit, Loop, Output
from trellis.nodes import expressions as e
from trellis.nodes import targets as t


class TestIterChildNodes:
    def test_statement_children_in_field_order(self):
        loop = parse("{% for x in xs if x %}a{% else %}b{% endfor %}").body[0]
        children = list(iter_child_nodes(loop))
        assert children == [
            t.Name("x"),
            e.Var("xs"),
            e.Var("x"),
            Lit("", "a", ""),
            Lit("", "b", ""),
        ]

    def test_struct_field_patterns_are_children(self):
        pattern = t.Struct(("P",), (("x", t.Name("x")), ("y", t.NumLit("1"))))
        assert list(iter_child_nodes(pattern)) == [t.Name("x"), t.NumLit("1")]

    def test_extends_is_not_visited_twice(self):
        template = parse('{% extends "base.html" %}')
        assert len(list(iter_child_nodes(template))) == 1

    def test_leaf_has_no_children(self):
        assert list(iter_child_nodes(Lit("", "x", ""))) == []


class TestWalk:
    def test_depth_first_preorder(self):
        template = parse("{% if a %}{{ b }}{% endif %}")
        kinds = [type(node).__name__ for node in walk(template)]
        assert kinds == ["Template", "If", "Cond", "CondTest", "Var", "Output", "Var"]

    def test_finds_nested_outputs(self):
        template = parse(
            "{% for x in xs %}{% match x %}{% when 1 %}{{ x }}{% endmatch %}{% endfor %}"
        )
        outputs = [node for node in walk(template) if isinstance(node, Output)]
        assert outputs == [Output(outputs[0].ws, e.Var("x"))]


class TestNodeVisitor:
    def test_dispatch_and_generic_visit(self):
        class Counter(NodeVisitor):
            def __init__(self):
                self.loops = 0
                self.conds = 0

            def visit_Loop(self, node: Loop) -> None:
                self.loops += 1
                self.generic_visit(node)

            def visit_Cond(self, node: Cond) -> None:
                self.conds += 1
                self.generic_visit(node)

        counter = Counter()
        counter.visit(
            parse("{% for x in xs %}{% if x %}{% else %}{% endif %}{% endfor %}{% if y %}{% endif %}")
        )
        assert (counter.loops, counter.conds) == (1, 3)

    def test_handler_can_stop_descent(self):
        class Blocks(NodeVisitor):
            def __init__(self):
                self.seen = []

            def visit_BlockDef(self, node: BlockDef) -> None:
                self.seen.append(node.name)

        visitor = Blocks()
        visitor.visit(parse("{% block a %}{% block b %}{% endblock %}{% endblock %}"))
        assert visitor.seen == ["a"]

    def test_visit_returns_handler_result(self):
        class Name(NodeVisitor):
            def visit_If(self, node: If) -> str:
                return "if"

        assert Name().visit(parse("{% if a %}{% endif %}").body[0]) == "if"


class TestDependencies:
    def test_template_dependencies(self):
        template = parse(
            '{% extends "base.html" %}'
            '{% block body %}{% include "nav.html" %}{% include "nav.html" %}{% endblock %}'
            '{% import "forms.html" as forms %}'
        )
        assert template_dependencies(template) == ("base.html", "nav.html", "forms.html")

    def test_no_dependencies(self):
        assert template_dependencies(parse("plain")) == ()

    def test_walker_is_reusable(self):
        walker = DependencyWalker()
        assert walker.analyze(parse('{% include "a" %}')) == ("a",)
        assert walker.analyze(parse('{% include "b" %}')) == ("b",)

    def test_block_names(self):
        template = parse(
            "{% block head %}{% endblock %}"
            "{% block body %}{% block content %}{% endblock %}{% endblock %}"
        )
        assert block_names(template) == ("head", "body", "content")
