"""Output and text nodes for Trellis trees."""

from __future__ import annotations

from dataclasses import dataclass

from trellis.nodes.base import Node, Ws
from trellis.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class Lit(Node):
    """Literal text between template constructs.

    The text is split at whitespace boundaries so that trim directives on
    neighbouring tags can be applied downstream: ``lws + value + rws`` is the
    original text. Whitespace-only text has an empty ``value``.
    """

    lws: str
    value: str
    rws: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment: {# ... #}. The body is discarded."""

    ws: Ws


@dataclass(frozen=True, slots=True)
class Output(Node):
    """Output expression: {{ expr }}"""

    ws: Ws
    expr: Expr


@dataclass(frozen=True, slots=True)
class Raw(Node):
    """Raw block (no template processing): {% raw %}...{% endraw %}

    ``ws1`` belongs to the raw tag and ``ws2`` to the endraw tag. The content is
    split like :class:`Lit`.
    """

    ws1: Ws
    lws: str
    value: str
    rws: str
    ws2: Ws
