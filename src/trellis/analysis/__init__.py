"""Read-only analysis over parsed Trellis trees."""

from trellis.analysis.dependencies import DependencyWalker, block_names, template_dependencies
from trellis.analysis.visitor import NodeVisitor, iter_child_nodes, walk

__all__ = [
    "DependencyWalker",
    "NodeVisitor",
    "block_names",
    "iter_child_nodes",
    "template_dependencies",
    "walk",
]
