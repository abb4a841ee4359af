"""Shared tag helpers for block parsing mixins."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from trellis.environment.exceptions import ErrorCode
from trellis.parser import primitives

if TYPE_CHECKING:
    from trellis.nodes import Node, Whitespace
    from trellis.parser.errors import ParseError
    from trellis.parser.state import ParseState
    from trellis.syntax import Syntax


class OpenedTag(NamedTuple):
    """A tag matched up to and including its keyword."""

    keyword: str
    ws: Whitespace | None
    offset: int


class BlockTagMixin:
    """Helpers for constructs that span several tags.

    Required Host Attributes:
        - All from SourceNavigationMixin
        - _parse_nodes: method
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int
        _state: ParseState

        @property
        def _syntax(self) -> Syntax: ...
        def _skip_ws(self) -> None: ...
        def _eat(self, text: str) -> bool: ...
        def _parse_ws_marker(self) -> Whitespace | None: ...
        def _expect_block_end(self) -> None: ...
        def _parse_nodes(self) -> list[Node]: ...
        def _error(
            self,
            message: str,
            offset: int | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def _try_tag(self, *keywords: str) -> OpenedTag | None:
        """Match ``{%[marker] keyword`` for one of ``keywords``.

        On success the cursor sits after the keyword and any whitespace
        following it. Otherwise the cursor is left untouched.
        """
        start = self._pos
        if not self._eat(self._syntax.block_start):
            return None
        pws = self._parse_ws_marker()
        keyword_start = primitives.skip_ws(self._source, self._pos)
        for keyword in keywords:
            end = primitives.keyword(self._source, keyword_start, keyword)
            if end is not None:
                self._pos = primitives.skip_ws(self._source, end)
                return OpenedTag(keyword, pws, start)
        self._pos = start
        return None

    def _expect_end_tag(self, keyword: str, opener: str, opened_at: int) -> Whitespace | None:
        """Consume ``{%[marker] keyword`` closing the construct opened at ``opened_at``.

        Returns the tag's left trim marker.
        """
        tag = self._try_tag(keyword)
        if tag is None:
            raise self._missing_end_tag(keyword, opener, opened_at)
        return tag.ws

    def _missing_end_tag(self, keyword: str, opener: str, opened_at: int) -> ParseError:
        if self._pos >= len(self._source):
            return self._error(
                f"Unclosed '{opener}' block: expected '{keyword}' before end of template",
                offset=opened_at,
                code=ErrorCode.UNCLOSED_TAG,
            )
        found = self._describe_tag()
        return self._error(
            f"Expected '{keyword}' to close '{opener}', found {found}",
            code=ErrorCode.UNCLOSED_TAG,
        )

    def _parse_body(self) -> tuple[Node, ...]:
        return tuple(self._parse_nodes())

    def _describe_tag(self) -> str:
        """Name what sits at the cursor, for error messages."""
        block_start = self._syntax.block_start
        if not self._source.startswith(block_start, self._pos):
            return "text"
        cur = self._pos + len(block_start)
        if primitives.whitespace_marker(self._source, cur):
            cur += 1
        cur = primitives.skip_ws(self._source, cur)
        end = primitives.identifier(self._source, cur)
        if end is None:
            return "a malformed tag"
        return f"'{self._source[cur:end]}'"
