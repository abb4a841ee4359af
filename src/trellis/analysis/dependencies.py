"""Template dependency analysis.

Collects the names of other templates a parsed template refers to through
``extends``, ``include`` and ``import``, and the blocks it defines.
"""

from __future__ import annotations

from trellis.analysis.visitor import NodeVisitor, walk
from trellis.nodes import BlockDef, Extends, Import, Include, Node


class DependencyWalker(NodeVisitor):
    """Collect referenced template names in source order, without duplicates."""

    def __init__(self) -> None:
        self._seen: dict[str, None] = {}

    def analyze(self, node: Node) -> tuple[str, ...]:
        self._seen = {}
        self.visit(node)
        return tuple(self._seen)

    def _add(self, name: str) -> None:
        self._seen.setdefault(name, None)

    def visit_Extends(self, node: Extends) -> None:
        self._add(node.template)

    def visit_Include(self, node: Include) -> None:
        self._add(node.template)

    def visit_Import(self, node: Import) -> None:
        self._add(node.template)


def template_dependencies(node: Node) -> tuple[str, ...]:
    """Return every template name referenced below ``node``."""
    return DependencyWalker().analyze(node)


def block_names(node: Node) -> tuple[str, ...]:
    """Return the names of all blocks defined below ``node``, outermost first."""
    return tuple(n.name for n in walk(node) if isinstance(n, BlockDef))
