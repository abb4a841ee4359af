"""Small helpers shared by the Trellis test modules."""

from __future__ import annotations

from trellis import parse
from trellis.nodes import Node
from trellis.parser import ParseError


def parse_one(source: str, **kwargs) -> Node:
    """Parse source and return its only top-level node."""
    body = parse(source, **kwargs).body
    assert len(body) == 1, f"expected one node, got {body!r}"
    return body[0]


def body_of(source: str, **kwargs) -> tuple[Node, ...]:
    """Parse source and return the top-level node sequence."""
    return tuple(parse(source, **kwargs).body)


def parse_error(source: str, **kwargs) -> ParseError:
    """Parse source that must fail and return the raised error."""
    try:
        parse(source, **kwargs)
    except ParseError as exc:
        return exc
    raise AssertionError(f"expected ParseError for {source!r}")
