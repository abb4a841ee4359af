"""Source navigation for the Trellis parser.

Wraps the pure functions in :mod:`trellis.parser.primitives` around the
parser's cursor. Methods named ``_eat_*`` and ``_try_*`` are recoverable:
they return a falsy value and leave the cursor untouched when nothing
matches. Methods named ``_expect_*`` raise :class:`ParseError`.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING, Any

from trellis.environment.exceptions import ErrorCode
from trellis.nodes.base import Whitespace
from trellis.parser import primitives
from trellis.parser.errors import ParseError

if TYPE_CHECKING:
    from trellis.parser.state import ParseState
    from trellis.syntax import Syntax


class SourceNavigationMixin:
    """Cursor movement, location tracking and error construction.

    Required Host Attributes:
        - _source: str
        - _pos: int
        - _state: ParseState
        - _name: str | None
        - _filename: str | None
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int
        _state: ParseState
        _name: str | None
        _filename: str | None
        _line_starts: list[int]

    @property
    def _syntax(self) -> Syntax:
        return self._state.syntax

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _skip_ws(self) -> None:
        self._pos = primitives.skip_ws(self._source, self._pos)

    def _eat(self, text: str) -> bool:
        """Consume ``text`` exactly at the cursor."""
        end = primitives.tag(self._source, self._pos, text)
        if end is None:
            return False
        self._pos = end
        return True

    def _eat_ws(self, text: str) -> bool:
        """Consume ``text`` with optional whitespace on both sides."""
        end = primitives.tag(self._source, primitives.skip_ws(self._source, self._pos), text)
        if end is None:
            return False
        self._pos = primitives.skip_ws(self._source, end)
        return True

    def _eat_keyword(self, word: str) -> bool:
        """Consume the keyword ``word`` with optional surrounding whitespace."""
        end = primitives.keyword(self._source, primitives.skip_ws(self._source, self._pos), word)
        if end is None:
            return False
        self._pos = primitives.skip_ws(self._source, end)
        return True

    def _eat_identifier(self) -> str | None:
        """Consume an identifier with optional surrounding whitespace."""
        start = primitives.skip_ws(self._source, self._pos)
        end = primitives.identifier(self._source, start)
        if end is None:
            return None
        self._pos = primitives.skip_ws(self._source, end)
        return self._source[start:end]

    def _eat_str_lit(self) -> str | None:
        start = primitives.skip_ws(self._source, self._pos)
        matched = primitives.str_lit(self._source, start)
        if matched is None:
            return None
        end, value = matched
        self._pos = primitives.skip_ws(self._source, end)
        return value

    def _parse_ws_marker(self) -> Whitespace | None:
        """Consume an optional trim marker directly at the cursor."""
        marker = primitives.whitespace_marker(self._source, self._pos)
        if marker is None:
            return None
        self._pos += 1
        return Whitespace.from_char(marker)

    def _expect(self, text: str, what: str | None = None) -> None:
        if not self._eat_ws(text):
            raise self._error(f"Expected {what or repr(text)}")

    def _expect_keyword(self, word: str) -> None:
        if not self._eat_keyword(word):
            raise self._error(f"Expected '{word}'")

    def _expect_identifier(self, what: str) -> str:
        name = self._eat_identifier()
        if name is None:
            raise self._error(f"Expected {what}")
        return name

    def _expect_str_lit(self, what: str) -> str:
        value = self._eat_str_lit()
        if value is None:
            raise self._error(
                f"Expected {what} as a double-quoted string",
                suggestion='Template paths are string literals, e.g. "base.html"',
            )
        return value

    def _expect_block_end(self) -> None:
        """Consume the statement-closing delimiter directly at the cursor."""
        if not self._eat(self._syntax.block_end):
            raise self._error(
                f"Expected '{self._syntax.block_end}' to close the tag",
                code=ErrorCode.UNCLOSED_TAG,
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Locations and errors
    # ─────────────────────────────────────────────────────────────────────────

    def _location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based line and 0-based column of ``offset``."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1]

    def _loc(self, offset: int) -> dict[str, Any]:
        """Location keyword arguments for a node starting at ``offset``."""
        lineno, col_offset = self._location(offset)
        return {"lineno": lineno, "col_offset": col_offset}

    def _error(
        self,
        message: str,
        offset: int | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ) -> ParseError:
        """Build a ParseError at ``offset`` (default: the cursor)."""
        if offset is None:
            offset = primitives.skip_ws(self._source, self._pos)
        lineno, col_offset = self._location(offset)
        return ParseError(
            message,
            offset,
            lineno=lineno,
            col_offset=col_offset,
            source=self._source,
            name=self._name,
            filename=self._filename,
            suggestion=suggestion,
            code=code or ErrorCode.UNEXPECTED_INPUT,
        )
