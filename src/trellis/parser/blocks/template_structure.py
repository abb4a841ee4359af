"""Template structure block parsing for Trellis parser.

Provides mixin for parsing template structure statements (block, extends,
include, import).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.nodes import BlockDef, Extends, Import, Include, Ws
from trellis.parser.blocks.core import BlockTagMixin

if TYPE_CHECKING:
    from trellis.nodes import Whitespace


class TemplateStructureBlockParsingMixin(BlockTagMixin):
    """Mixin for parsing template structure blocks.

    Required Host Attributes:
        - All from BlockTagMixin
        - _expect_str_lit: method
        - _expect_identifier: method
        - _expect_keyword: method
        - _eat_identifier: method
    """

    if TYPE_CHECKING:

        def _expect_str_lit(self, what: str) -> str: ...
        def _expect_identifier(self, what: str) -> str: ...
        def _expect_keyword(self, word: str) -> None: ...
        def _eat_identifier(self) -> str | None: ...
        def _loc(self, offset: int) -> dict: ...

    def _parse_block(self, pws: Whitespace | None, start: int) -> BlockDef:
        """Parse {% block name %}...{% endblock [name] %}.

        The name after ``endblock`` is optional and is not compared with the
        opening name.
        """
        name = self._expect_identifier("block name")
        nws1 = self._parse_ws_marker()
        self._expect_block_end()
        body = self._parse_body()

        end_pws = self._expect_end_tag("endblock", "block", start)
        self._eat_identifier()
        end_nws = self._parse_ws_marker()
        return BlockDef(Ws(pws, nws1), name, body, Ws(end_pws, end_nws), **self._loc(start))

    def _parse_extends(self, pws: Whitespace | None, start: int) -> Extends:
        """Parse {% extends "base.html" %}."""
        if pws is not None:
            raise self._error(
                "Whitespace control is not supported on 'extends'",
                offset=start,
                suggestion='Write {% extends "base.html" %} without trim markers',
            )
        template = self._expect_str_lit("parent template name")
        return Extends(template, **self._loc(start))

    def _parse_include(self, pws: Whitespace | None, start: int) -> Include:
        """Parse {% include "partial.html" %}."""
        template = self._expect_str_lit("template name")
        return Include(Ws(pws, self._parse_ws_marker()), template, **self._loc(start))

    def _parse_import(self, pws: Whitespace | None, start: int) -> Import:
        """Parse {% import "macros.html" as scope %}."""
        template = self._expect_str_lit("template name")
        self._expect_keyword("as")
        scope = self._expect_identifier("alias name after 'as'")
        return Import(Ws(pws, self._parse_ws_marker()), template, scope, **self._loc(start))
