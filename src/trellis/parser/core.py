"""The Trellis parser: template source to an immutable node tree.

The parser is a recursive-descent walk over the source string, assembled
from mixins that each own one part of the grammar. Every grammar method has
three outcomes:

- a value: the construct matched and the cursor moved past it
- ``None``: no match here, cursor untouched, the caller tries the next
  alternative
- :class:`ParseError` raised: the construct committed and then found
  malformed input; the whole parse stops

Example:
    >>> Parser("Hello {{ name }}!").parse().body
    (Lit(lws='', value='Hello', rws=' '), Output(...), Lit(lws='', value='!', rws=''))
"""

from __future__ import annotations

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import Extends, Template
from trellis.parser.blocks import (
    ControlFlowBlockParsingMixin,
    FunctionBlockParsingMixin,
    SpecialBlockParsingMixin,
    TemplateStructureBlockParsingMixin,
    VariableBlockParsingMixin,
)
from trellis.parser.expressions import ExpressionParsingMixin
from trellis.parser.navigation import SourceNavigationMixin
from trellis.parser.state import ParseState
from trellis.parser.statements import StatementParsingMixin
from trellis.parser.targets import TargetParsingMixin
from trellis.syntax import DEFAULT_SYNTAX, Syntax


class Parser(
    StatementParsingMixin,
    ControlFlowBlockParsingMixin,
    TemplateStructureBlockParsingMixin,
    FunctionBlockParsingMixin,
    VariableBlockParsingMixin,
    SpecialBlockParsingMixin,
    TargetParsingMixin,
    ExpressionParsingMixin,
    SourceNavigationMixin,
):
    """Parse one template.

    A parser instance is single-use: it owns the cursor and the
    :class:`ParseState` (loop and nesting counters) for exactly one
    :meth:`parse` call.

    Args:
        source: Template source text
        syntax: Delimiter configuration (default ``{% %}``, ``{{ }}``, ``{# #}``)
        name: Template name for error messages
        filename: Source file path for error messages
    """

    def __init__(
        self,
        source: str,
        syntax: Syntax | None = None,
        name: str | None = None,
        filename: str | None = None,
    ):
        self._source = source
        self._pos = 0
        self._state = ParseState(syntax or DEFAULT_SYNTAX)
        self._name = name
        self._filename = filename
        self._line_starts = [0]
        self._line_starts.extend(i + 1 for i, c in enumerate(source) if c == "\n")

    def parse(self) -> Template:
        """Parse the whole source.

        Raises:
            ParseError: On the first malformed construct, or if input remains
                that no construct accepts (e.g. a stray ``{% endif %}``).
        """
        try:
            body = tuple(self._parse_nodes())
        except RecursionError:
            raise self._error(
                "Template is nested too deeply to parse",
                code=ErrorCode.NESTING_TOO_DEEP,
            ) from None

        if not self._at_end():
            raise self._unexpected_input()

        extends = next((node for node in body if isinstance(node, Extends)), None)
        return Template(body, name=self._name, extends=extends, lineno=1, col_offset=0)


def parse(
    source: str,
    *,
    syntax: Syntax | None = None,
    name: str | None = None,
    filename: str | None = None,
) -> Template:
    """Parse template source into a :class:`~trellis.nodes.Template`."""
    return Parser(source, syntax=syntax, name=name, filename=filename).parse()
