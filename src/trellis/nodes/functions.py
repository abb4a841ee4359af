"""Macro definition and call nodes for Trellis trees."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from trellis.nodes.base import Node, Ws
from trellis.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class Macro(Node):
    """Macro definition: {% macro name(a, b) %}...{% endmacro [name] %}"""

    name: str
    ws1: Ws
    params: Sequence[str]
    body: Sequence[Node]
    ws2: Ws


@dataclass(frozen=True, slots=True)
class Call(Node):
    """Macro call: {% call name(args) %} or {% call scope::name(args) %}"""

    ws: Ws
    scope: str | None
    name: str
    args: Sequence[Expr] = ()
