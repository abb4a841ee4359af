"""Expression nodes for Trellis trees.

Values are kept as the source text they were parsed from: the parser does
not evaluate or validate expressions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from trellis.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Const(Expr):
    """Literal: true, 42, 1.5, "text", 'c'. Strings hold their unquoted body."""

    value: str
    kind: Literal["bool", "num", "str", "char"]


@dataclass(frozen=True, slots=True)
class Var(Expr):
    """Variable reference: {{ user }}"""

    name: str


@dataclass(frozen=True, slots=True)
class Path(Expr):
    """Qualified name: Some, std::u32::MAX, ::root::item"""

    segments: Sequence[str]


@dataclass(frozen=True, slots=True)
class List(Expr):
    """Array expression: [a, b, c]"""

    items: Sequence[Expr]


@dataclass(frozen=True, slots=True)
class Tuple(Expr):
    """Tuple expression: (), (a,), (a, b)"""

    items: Sequence[Expr]


@dataclass(frozen=True, slots=True)
class Group(Expr):
    """Parenthesized expression: (a + b)"""

    value: Expr


@dataclass(frozen=True, slots=True)
class Getattr(Expr):
    """Attribute access: obj.attr"""

    obj: Expr
    attr: str


@dataclass(frozen=True, slots=True)
class Getitem(Expr):
    """Subscript access: obj[key]"""

    obj: Expr
    key: Expr


@dataclass(frozen=True, slots=True)
class FuncCall(Expr):
    """Function call: func(args)"""

    func: Expr
    args: Sequence[Expr] = ()


@dataclass(frozen=True, slots=True)
class Try(Expr):
    """Error propagation: expr?"""

    value: Expr


@dataclass(frozen=True, slots=True)
class Filter(Expr):
    """Filter application: expr|filter(args)"""

    value: Expr
    name: str
    args: Sequence[Expr] = ()


@dataclass(frozen=True, slots=True)
class UnaryOp(Expr):
    """Unary operation: !x, -x"""

    op: str
    operand: Expr


@dataclass(frozen=True, slots=True)
class BinOp(Expr):
    """Binary operation: left op right"""

    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Range(Expr):
    """Range literal: start..end, start..=end, ..end, start.."""

    op: Literal["..", "..="]
    start: Expr | None
    end: Expr | None


AnyExpr = (
    Const
    | Var
    | Path
    | List
    | Tuple
    | Group
    | Getattr
    | Getitem
    | FuncCall
    | Try
    | Filter
    | UnaryOp
    | BinOp
    | Range
)
