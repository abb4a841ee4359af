"""Variable block parsing for Trellis parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import Let, LetDecl, Ws
from trellis.parser.blocks.core import BlockTagMixin

if TYPE_CHECKING:
    from trellis.nodes import Whitespace
    from trellis.nodes.expressions import Expr
    from trellis.nodes.targets import Target


class VariableBlockParsingMixin(BlockTagMixin):
    """Mixin for parsing {% let %} and its alias {% set %}."""

    if TYPE_CHECKING:

        def _parse_expression(self) -> Expr | None: ...
        def _expect_target(self, what: str = "a pattern") -> Target: ...
        def _eat_ws(self, text: str) -> bool: ...
        def _loc(self, offset: int) -> dict: ...

    def _parse_let(self, pws: Whitespace | None, start: int) -> Let | LetDecl:
        """Parse {% let pattern = expr %} or the declaration {% let name %}."""
        target = self._expect_target("a variable name or pattern")
        if not self._eat_ws("="):
            return LetDecl(Ws(pws, self._parse_ws_marker()), target, **self._loc(start))

        value = self._parse_expression()
        if value is None:
            raise self._error("Expected an expression after '='", code=ErrorCode.INVALID_EXPRESSION)
        return Let(Ws(pws, self._parse_ws_marker()), target, value, **self._loc(start))
