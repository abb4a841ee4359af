"""Macro block parsing for Trellis parser.

Provides mixin for parsing macro definitions and macro calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import Call, Macro, Ws
from trellis.parser.blocks.core import BlockTagMixin

if TYPE_CHECKING:
    from trellis.nodes import Whitespace
    from trellis.nodes.expressions import Expr

# Names a macro may not take
_RESERVED_MACRO_NAMES = frozenset({"super"})


class FunctionBlockParsingMixin(BlockTagMixin):
    """Mixin for parsing macro blocks.

    Required Host Attributes:
        - All from BlockTagMixin
        - _parse_arguments: method
        - _expect_identifier: method
        - _eat_identifier: method
    """

    if TYPE_CHECKING:

        def _parse_arguments(self) -> list[Expr] | None: ...
        def _expect_identifier(self, what: str) -> str: ...
        def _eat_identifier(self) -> str | None: ...
        def _eat_ws(self, text: str) -> bool: ...
        def _loc(self, offset: int) -> dict: ...

    def _parse_macro(self, pws: Whitespace | None, start: int) -> Macro:
        """Parse {% macro name(a, b) %}...{% endmacro [name] %}.

        The parameter list is optional. As with blocks, a name after
        ``endmacro`` is accepted without comparing it to the macro name.

        Example:
            {% macro heading(level, text) %}
                <h{{ level }}>{{ text }}</h{{ level }}>
            {% endmacro %}

            {% call heading(1, title) %}
        """
        self._skip_ws()
        name_offset = self._pos
        name = self._expect_identifier("macro name")
        if name in _RESERVED_MACRO_NAMES:
            raise self._error(
                f"Invalid macro name '{name}'",
                offset=name_offset,
                suggestion=f"'{name}' is reserved; pick another name",
                code=ErrorCode.RESERVED_NAME,
            )

        params: list[str] = []
        if self._eat_ws("("):
            if not self._eat_ws(")"):
                while True:
                    params.append(self._expect_identifier("parameter name"))
                    if self._eat_ws(")"):
                        break
                    if not self._eat_ws(","):
                        raise self._error(
                            "Expected ',' or ')' in macro parameters",
                            suggestion="Macro syntax: {% macro name(a, b) %}",
                        )

        nws1 = self._parse_ws_marker()
        self._expect_block_end()
        body = self._parse_body()

        end_pws = self._expect_end_tag("endmacro", "macro", start)
        self._eat_identifier()
        end_nws = self._parse_ws_marker()
        return Macro(
            name,
            Ws(pws, nws1),
            tuple(params),
            body,
            Ws(end_pws, end_nws),
            **self._loc(start),
        )

    def _parse_call(self, pws: Whitespace | None, start: int) -> Call:
        """Parse {% call name(args) %} or {% call scope::name(args) %}."""
        first = self._expect_identifier("macro name after 'call'")
        scope = None
        name = first
        if self._eat_ws("::"):
            scope = first
            name = self._expect_identifier("macro name after '::'")

        args: list[Expr] = []
        if self._source.startswith("(", self._pos):
            parsed = self._parse_arguments()
            if parsed is None:
                raise self._error(
                    "Malformed macro call arguments",
                    code=ErrorCode.INVALID_EXPRESSION,
                )
            args = parsed

        return Call(Ws(pws, self._parse_ws_marker()), scope, name, tuple(args), **self._loc(start))
