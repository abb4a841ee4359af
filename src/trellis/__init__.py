"""Trellis: a parser for Jinja-like template syntax.

Turns template source into an immutable tree of nodes: literal text with its
surrounding whitespace split off, comments, ``{{ expr }}`` output and the
``{% ... %}`` statements (if, for, match, block, macro, call, let, include,
import, extends, raw, break, continue). Rendering is left to the caller.

Quickstart:
    >>> from trellis import parse
    >>> parse("Hello, {{ name }}!").body
    (Lit(lws='', value='Hello,', rws=' '), Output(...), Lit(...))

Custom delimiters:
    >>> from trellis import Environment, Syntax
    >>> env = Environment({"erb": Syntax(block_start="<%", block_end="%>")})
    >>> env.parse("<% if a %>x<% endif %>", syntax="erb")

Architecture:
Template Source → Parser (cursor over the string) → Trellis tree

There is no token stream: the parser works directly on the source with small
primitive recognizers, backtracking by restoring the cursor. Grammar
functions either return a node, return None when the input does not match
(cursor untouched), or raise ParseError when the input is malformed beyond
recovery.

Whitespace control:
Every tag records the ``+``, ``-`` or ``~`` markers written just inside its
delimiters as a ``Ws`` pair. Text nodes keep their leading and trailing
whitespace separately so a later stage can apply the trimming.

"""

from trellis.environment import (
    ConfigError,
    DictLoader,
    Environment,
    ErrorCode,
    FunctionLoader,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from trellis.syntax import DEFAULT_SYNTAX, Syntax
from trellis.parser import ParseError, Parser, parse
from trellis.analysis import NodeVisitor, iter_child_nodes, template_dependencies, walk
from trellis import nodes

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SYNTAX",
    "ConfigError",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FunctionLoader",
    "NodeVisitor",
    "ParseError",
    "Parser",
    "Syntax",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
    "__version__",
    "iter_child_nodes",
    "nodes",
    "parse",
    "template_dependencies",
    "walk",
]
