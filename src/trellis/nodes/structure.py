"""Template structure nodes for Trellis trees."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from trellis.nodes.base import Node, Ws


@dataclass(frozen=True, slots=True)
class Extends(Node):
    """Template inheritance: {% extends "base.html" %}"""

    template: str


@dataclass(frozen=True, slots=True)
class BlockDef(Node):
    """Named block for inheritance: {% block name %}...{% endblock [name] %}"""

    ws1: Ws
    name: str
    body: Sequence[Node]
    ws2: Ws


@dataclass(frozen=True, slots=True)
class Include(Node):
    """Include another template: {% include "partial.html" %}"""

    ws: Ws
    template: str


@dataclass(frozen=True, slots=True)
class Import(Node):
    """Import macros from a template: {% import "macros.html" as m %}"""

    ws: Ws
    template: str
    scope: str


@dataclass(frozen=True, slots=True)
class Template(Node):
    """Root node representing a complete template."""

    body: Sequence[Node]
    name: str | None = None
    extends: Extends | None = None
