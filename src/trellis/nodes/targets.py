"""Destructuring pattern nodes, used by let, for, if let and match arms."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from trellis.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Target(Node):
    """Base class for patterns."""


@dataclass(frozen=True, slots=True)
class Name(Target):
    """Binding name: x. The synthetic name ``_`` is the wildcard."""

    name: str


@dataclass(frozen=True, slots=True)
class Path(Target):
    """Qualified name with no payload: None, Color::Red"""

    segments: Sequence[str]


@dataclass(frozen=True, slots=True)
class Tuple(Target):
    """Positional pattern: (a, b) or Some(x).

    ``path`` is empty for a bare tuple.
    """

    path: Sequence[str]
    items: Sequence[Target]


@dataclass(frozen=True, slots=True)
class Struct(Target):
    """Named-field pattern: Point { x, y: (a, b) }"""

    path: Sequence[str]
    fields: Sequence[tuple[str, Target]]


@dataclass(frozen=True, slots=True)
class NumLit(Target):
    value: str


@dataclass(frozen=True, slots=True)
class StrLit(Target):
    value: str


@dataclass(frozen=True, slots=True)
class CharLit(Target):
    value: str


@dataclass(frozen=True, slots=True)
class BoolLit(Target):
    value: str
