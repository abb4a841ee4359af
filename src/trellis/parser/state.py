"""Per-parse mutable state for the Trellis grammar."""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

from trellis.syntax import Syntax


class ParseState:
    """Delimiters plus the counters one parse needs.

    ``loop_depth`` validates ``break``/``continue`` placement and ``depth``
    bounds construct nesting. Both are changed only through the context
    managers below, which restore them on every exit path, fatal errors
    included. A state belongs to exactly one parse and is discarded after.

    Example:
        >>> state = ParseState(Syntax())
        >>> with state.loop():
        ...     state.is_in_loop()
        True
        >>> state.is_in_loop()
        False
    """

    __slots__ = ("syntax", "loop_depth", "depth", "content_end")

    def __init__(self, syntax: Syntax):
        self.syntax = syntax
        # First start delimiter of any kind; ends a run of literal text.
        self.content_end = re.compile(
            "|".join(
                map(re.escape, (syntax.block_start, syntax.comment_start, syntax.expr_start))
            )
        )
        self.loop_depth = 0
        self.depth = 0

    def enter_loop(self) -> None:
        self.loop_depth += 1

    def leave_loop(self) -> None:
        self.loop_depth -= 1

    def is_in_loop(self) -> bool:
        return self.loop_depth > 0

    @contextmanager
    def loop(self) -> Iterator[None]:
        """Mark the body parsed inside the ``with`` block as a loop body."""
        self.enter_loop()
        try:
            yield
        finally:
            self.leave_loop()

    @contextmanager
    def nested(self) -> Iterator[int]:
        """Track one level of body nesting; yields the new depth."""
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    @property
    def too_deep(self) -> bool:
        return self.depth > self.syntax.max_depth
