"""Control flow nodes for Trellis trees."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from trellis.nodes.base import Node, Ws
from trellis.nodes.expressions import Expr
from trellis.nodes.targets import Target


@dataclass(frozen=True, slots=True)
class CondTest(Node):
    """Branch condition: ``expr`` or ``let PATTERN = expr``."""

    target: Target | None
    expr: Expr


@dataclass(frozen=True, slots=True)
class Cond(Node):
    """One branch of an if chain. ``test`` is None only for a final else."""

    ws: Ws
    test: CondTest | None
    body: Sequence[Node]


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional: {% if cond %}...{% else if cond %}...{% else %}...{% endif %}

    ``branches[0]`` is the if branch itself; ``ws`` belongs to the endif tag.
    """

    branches: Sequence[Cond]
    ws: Ws


@dataclass(frozen=True, slots=True)
class Loop(Node):
    """For loop: {% for x in items if guard %}...{% else %}...{% endfor %}

    ``ws1`` belongs to the for tag. With an else block, ``ws2`` belongs to the
    else tag and ``ws3`` to the endfor tag. Without one, ``ws2.left`` and
    ``ws3.right`` hold the endfor tag's directives.
    """

    ws1: Ws
    target: Target
    iter: Expr
    test: Expr | None
    body: Sequence[Node]
    ws2: Ws
    else_: Sequence[Node]
    ws3: Ws


@dataclass(frozen=True, slots=True)
class When(Node):
    """Match arm: {% when pattern %}. An else arm has the pattern ``_``."""

    ws: Ws
    target: Target
    body: Sequence[Node]


@dataclass(frozen=True, slots=True)
class Match(Node):
    """Pattern matching: {% match expr %}{% when pattern %}...{% endmatch %}

    An else arm, if any, is always last in ``arms``.
    """

    ws1: Ws
    subject: Expr
    arms: Sequence[When]
    ws2: Ws


@dataclass(frozen=True, slots=True)
class Break(Node):
    """Break out of loop: {% break %}"""

    ws: Ws


@dataclass(frozen=True, slots=True)
class Continue(Node):
    """Skip to next iteration: {% continue %}"""

    ws: Ws
