"""Variable binding nodes for Trellis trees."""

from __future__ import annotations

from dataclasses import dataclass

from trellis.nodes.base import Node, Ws
from trellis.nodes.expressions import Expr
from trellis.nodes.targets import Target


@dataclass(frozen=True, slots=True)
class LetDecl(Node):
    """Declaration without initializer: {% let x %}"""

    ws: Ws
    target: Target


@dataclass(frozen=True, slots=True)
class Let(Node):
    """Binding: {% let (a, b) = expr %} or {% set x = expr %}"""

    ws: Ws
    target: Target
    value: Expr
