"""Trellis tree nodes.

Statement nodes are exported here directly. Expressions and patterns share
short names (``Path``, ``Tuple``), so they are reached through their modules::

    from trellis.nodes import expressions, targets

    targets.Tuple((), (targets.Name("x"),))
"""

from trellis.nodes import expressions, targets
from trellis.nodes.base import Node, Whitespace, Ws
from trellis.nodes.control_flow import (
    Break,
    Cond,
    CondTest,
    Continue,
    If,
    Loop,
    Match,
    When,
)
from trellis.nodes.expressions import Expr
from trellis.nodes.functions import Call, Macro
from trellis.nodes.output import Comment, Lit, Output, Raw
from trellis.nodes.structure import BlockDef, Extends, Import, Include, Template
from trellis.nodes.targets import Target
from trellis.nodes.variables import Let, LetDecl

__all__ = [
    "BlockDef",
    "Break",
    "Call",
    "Comment",
    "Cond",
    "CondTest",
    "Continue",
    "Expr",
    "Extends",
    "If",
    "Import",
    "Include",
    "Let",
    "LetDecl",
    "Lit",
    "Loop",
    "Macro",
    "Match",
    "Node",
    "Output",
    "Raw",
    "Target",
    "Template",
    "When",
    "Whitespace",
    "Ws",
    "expressions",
    "targets",
]
