"""Special block parsing for Trellis parser (raw)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import Raw, Whitespace, Ws
from trellis.parser import primitives
from trellis.parser.blocks.core import BlockTagMixin


class SpecialBlockParsingMixin(BlockTagMixin):
    """Mixin for blocks whose content is not parsed."""

    if TYPE_CHECKING:

        def _loc(self, offset: int) -> dict: ...

    def _parse_raw(self, pws: Whitespace | None, start: int) -> Raw:
        """Parse {% raw %}...{% endraw %}.

        Everything up to the first real endraw tag is kept verbatim, including
        text that looks like other tags, expressions or comments. The cursor
        is left on the endraw tag's closing delimiter.
        """
        nws1 = self._parse_ws_marker()
        self._expect_block_end()

        content_start = self._pos
        search = content_start
        while True:
            candidate = self._source.find(self._syntax.block_start, search)
            if candidate == -1:
                raise self._error(
                    "Unclosed 'raw' block: expected 'endraw' before end of template",
                    offset=start,
                    code=ErrorCode.UNCLOSED_TAG,
                )
            matched = self._match_endraw(candidate)
            if matched is not None:
                break
            search = candidate + 1

        pws2, nws2, end = matched
        content = primitives.split_ws_parts(self._source[content_start:candidate])
        self._pos = end
        return Raw(
            Ws(pws, nws1),
            content.lws,
            content.value,
            content.rws,
            Ws(pws2, nws2),
            **self._loc(start),
        )

    def _match_endraw(
        self, offset: int
    ) -> tuple[Whitespace | None, Whitespace | None, int] | None:
        """Match ``{%[m] endraw [m]%}`` at offset; returns markers and the %} offset."""
        source = self._source
        cur = offset + len(self._syntax.block_start)
        pws = primitives.whitespace_marker(source, cur)
        if pws is not None:
            cur += 1
        end = primitives.keyword(source, primitives.skip_ws(source, cur), "endraw")
        if end is None:
            return None
        cur = primitives.skip_ws(source, end)
        nws = primitives.whitespace_marker(source, cur)
        if nws is not None:
            cur += 1
        if not source.startswith(self._syntax.block_end, cur):
            return None
        return (
            Whitespace.from_char(pws) if pws else None,
            Whitespace.from_char(nws) if nws else None,
            cur,
        )
