"""Generic traversal over Trellis trees.

Nodes are frozen dataclasses, so children are found by walking dataclass
fields: a field holding a Node is a child, and sequences are searched for
Nodes one level down (including the ``(target, expr)`` style tuples).

Provides:
    iter_child_nodes: Direct children of a node, in field order
    walk: Every node of a tree, depth first, parents before children
    NodeVisitor: Dispatch to ``visit_<ClassName>`` methods
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import fields
from typing import Any

from trellis.nodes import Node

# Template.extends repeats a node already present in Template.body
_DERIVED_FIELDS = frozenset({"extends"})


def _nodes_in(value: Any) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _nodes_in(item)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in field order."""
    for f in fields(node):
        if f.name in _DERIVED_FIELDS:
            continue
        yield from _nodes_in(getattr(node, f.name))


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


class NodeVisitor:
    """Base class for tree visitors.

    ``visit(node)`` calls ``visit_<ClassName>`` when defined and
    ``generic_visit`` otherwise, which recurses into the children.

    Example:
        >>> class Outputs(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_Output(self, node):
        ...         self.count += 1
        ...         self.generic_visit(node)
    """

    def visit(self, node: Node) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: Node) -> None:
        for child in iter_child_nodes(node):
            self.visit(child)
