"""Property-based tests for the Trellis parser.

Uses hypothesis to verify structural invariants that must hold for
*all* inputs, not just hand-picked examples:

- Plain text parses to a single literal that keeps every character
- Trim markers are recorded on exactly the edge they were written on
- Arbitrary input either parses or raises ParseError, nothing else
- Loop control is valid exactly inside loop bodies
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from trellis import parse
from trellis.nodes import Break, Lit, Ws
from trellis.parser import ParseError

from .strategies import (
    arbitrary_template_source,
    identifier,
    if_tag,
    output_tag,
    plain_text,
    syntaxish_source,
)


class TestTextProperties:
    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_is_one_lit(self, source: str) -> None:
        body = parse(source).body
        assert len(body) == 1
        lit = body[0]
        assert isinstance(lit, Lit)
        assert lit.lws + lit.value + lit.rws == source

    @given(source=plain_text)
    def test_lit_core_has_no_edge_whitespace(self, source: str) -> None:
        lit = parse(source).body[0]
        if lit.value:
            assert lit.value[0] not in " \t\r\n"
            assert lit.value[-1] not in " \t\r\n"
        else:
            assert lit.rws == ""


class TestWhitespaceProperties:
    @given(tag=output_tag())
    @settings(max_examples=200)
    def test_output_markers_reflected(self, tag) -> None:
        source, left, right, name = tag
        node = parse(source).body[0]
        assert node.ws == Ws(left, right)
        assert node.expr.name == name

    @given(tag=if_tag())
    @settings(max_examples=200)
    def test_if_markers_reflected(self, tag) -> None:
        source, (a, b, c, d) = tag
        node = parse(source).body[0]
        assert node.branches[0].ws == Ws(a, b)
        assert node.ws == Ws(c, d)


class TestRobustness:
    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_no_unhandled_crash(self, source: str) -> None:
        """The parser never raises anything but ParseError."""
        try:
            parse(source)
        except ParseError:
            pass

    @given(source=syntaxish_source)
    @settings(max_examples=500)
    def test_no_unhandled_crash_on_syntax_soup(self, source: str) -> None:
        try:
            parse(source)
        except ParseError as exc:
            assert 0 <= exc.offset <= len(source)


class TestLoopControlProperties:
    @given(depth=st.integers(min_value=0, max_value=5), name=identifier)
    def test_break_valid_only_inside_loop(self, depth: int, name: str) -> None:
        inner = "{% break %}"
        for _ in range(depth):
            inner = f"{{% if {name} %}}{inner}{{% endif %}}"
        loop = parse(f"{{% for {name} in items %}}{inner}{{% endfor %}}").body[0]
        node = loop.body[0]
        for _ in range(depth):
            node = node.branches[0].body[0]
        assert isinstance(node, Break)

        try:
            parse(inner)
        except ParseError:
            pass
        else:
            raise AssertionError("break outside a loop must be rejected")
