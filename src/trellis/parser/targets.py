"""Destructuring pattern parsing for Trellis.

Patterns bind names in ``let``, ``for``, ``if let`` and match arms. First
match wins:

1. a literal (string, char, number, bool)
2. a parenthesized group: ``()`` is the empty tuple, ``(x)`` is just ``x``,
   ``(x,)`` and ``(x, y)`` are tuples
3. a path, optionally followed by ``with`` and a positional ``(...)`` or
   named ``{...}`` payload; without a payload it stands alone as a path
4. a bare name

Once a tuple continues past its first element, or a payload opens, a
malformed pattern is fatal.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from trellis.environment.exceptions import ErrorCode
from trellis.nodes.targets import (
    BoolLit,
    CharLit,
    Name,
    NumLit,
    Path,
    StrLit,
    Struct,
    Target,
    Tuple,
)
from trellis.parser import primitives

if TYPE_CHECKING:
    from trellis.parser.errors import ParseError

_T = TypeVar("_T")


class TargetParsingMixin:
    """Mixin for parsing destructuring patterns.

    Required Host Attributes:
        - All from SourceNavigationMixin
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int

        def _skip_ws(self) -> None: ...
        def _eat_ws(self, text: str) -> bool: ...
        def _eat_keyword(self, word: str) -> bool: ...
        def _eat_identifier(self) -> str | None: ...
        def _loc(self, offset: int) -> dict: ...
        def _error(self, message: str, offset: int | None = None, **kwargs) -> ParseError: ...

    def _parse_target(self) -> Target | None:
        """Parse one pattern, including surrounding whitespace."""
        start = self._pos
        self._skip_ws()
        target = (
            self._parse_target_lit()
            or self._parse_target_group()
            or self._parse_target_path()
            or self._parse_target_name()
        )
        if target is None:
            self._pos = start
            return None
        self._skip_ws()
        return target

    def _expect_target(self, what: str = "a pattern") -> Target:
        target = self._parse_target()
        if target is None:
            raise self._error(f"Expected {what}", code=ErrorCode.INVALID_PATTERN)
        return target

    def _parse_target_lit(self) -> Target | None:
        source, start = self._source, self._pos
        loc = self._loc(start)

        matched = primitives.str_lit(source, start)
        if matched is not None:
            self._pos, value = matched
            return StrLit(value, **loc)

        matched = primitives.char_lit(source, start)
        if matched is not None:
            self._pos, value = matched
            return CharLit(value, **loc)

        end = primitives.num_lit(source, start)
        if end is not None:
            self._pos = end
            return NumLit(source[start:end], **loc)

        end = primitives.bool_lit(source, start)
        if end is not None:
            self._pos = end
            return BoolLit(source[start:end], **loc)

        return None

    def _parse_target_group(self) -> Target | None:
        start = self._pos
        if not self._eat_ws("("):
            return None
        if self._eat_ws(")"):
            return Tuple((), (), **self._loc(start))

        first = self._parse_target()
        if first is None:
            self._pos = start
            return None
        if self._eat_ws(")"):
            # Parentheses around a single pattern are transparent.
            return first

        items = [first]
        while True:
            mark = self._pos
            if not self._eat_ws(","):
                break
            item = self._parse_target()
            if item is None:
                self._pos = mark
                break
            items.append(item)
        self._eat_ws(",")
        if not self._eat_ws(")"):
            raise self._error(
                "Expected ',' or ')' in tuple pattern",
                code=ErrorCode.INVALID_PATTERN,
            )
        return Tuple((), tuple(items), **self._loc(start))

    def _parse_target_path(self) -> Target | None:
        start = self._pos
        matched = primitives.path(self._source, start)
        if matched is None:
            return None
        self._pos, segments = matched
        before_with = self._pos
        self._eat_keyword("with")

        if self._eat_ws("("):
            items = self._parse_target_list(")", self._parse_target)
            return Tuple(segments, tuple(items), **self._loc(start))

        if self._eat_ws("{"):
            fields = self._parse_target_list("}", self._parse_target_field)
            return Struct(segments, tuple(fields), **self._loc(start))

        self._pos = before_with
        return Path(segments, **self._loc(start))

    def _parse_target_list(self, close: str, parse_item: Callable[[], _T | None]) -> list[_T]:
        """Parse the items of an opened payload up to ``close`` (fatal)."""
        if self._eat_ws(close):
            return []
        items: list[_T] = []
        while True:
            item = parse_item()
            if item is None:
                raise self._error(
                    f"Expected a pattern or '{close}'",
                    code=ErrorCode.INVALID_PATTERN,
                )
            items.append(item)
            if not self._eat_ws(","):
                break
            if self._eat_ws(close):
                return items
        if not self._eat_ws(close):
            raise self._error(
                f"Expected ',' or '{close}' in pattern",
                code=ErrorCode.INVALID_PATTERN,
            )
        return items

    def _parse_target_field(self) -> tuple[str, Target] | None:
        """Parse ``field: pattern`` or the shorthand ``field``."""
        start = self._pos
        self._skip_ws()
        name_start = self._pos
        name = self._eat_identifier()
        if name is None:
            self._pos = start
            return None
        if self._eat_ws(":"):
            return name, self._expect_target(f"a pattern for field '{name}'")
        return name, Name(name, **self._loc(name_start))

    def _parse_target_name(self) -> Target | None:
        start = self._pos
        end = primitives.identifier(self._source, start)
        if end is None:
            return None
        self._pos = end
        return Name(self._source[start:end], **self._loc(start))
