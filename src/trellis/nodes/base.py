"""Base node class and whitespace-control records for Trellis trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    All nodes track the source location they were parsed from, for error
    reporting downstream. Locations are excluded from equality so trees can
    be compared structurally.

    Nodes are immutable: the parser builds a tree in one pass and never
    touches it again.

    """

    lineno: int = field(default=0, kw_only=True, compare=False)
    col_offset: int = field(default=0, kw_only=True, compare=False)


class Whitespace(Enum):
    """Trim directive requested by a marker just inside a delimiter."""

    PRESERVE = "+"
    SUPPRESS = "-"
    MINIMIZE = "~"

    @classmethod
    def from_char(cls, char: str) -> Whitespace:
        """Map a marker character to its directive.

        Raises:
            ValueError: If ``char`` is not one of ``+``, ``-``, ``~``.
        """
        try:
            return cls(char)
        except ValueError:
            raise ValueError(f"unsupported whitespace marker {char!r}") from None


@dataclass(frozen=True, slots=True)
class Ws:
    """Left/right trim directives of one tag.

    ``left`` comes from a marker right after the opening delimiter and governs
    the trailing whitespace of the preceding text. ``right`` comes from a
    marker right before the closing delimiter and governs the leading
    whitespace of the following text. ``None`` means the ambient default.
    """

    left: Whitespace | None = None
    right: Whitespace | None = None
