"""Delimiter configuration for the Trellis grammar.

A :class:`Syntax` names the six delimiter strings the parser recognizes.
The defaults are the familiar ``{% %}``, ``{{ }}`` and ``{# #}``; any other
set can be configured as long as it stays unambiguous::

    >>> Syntax(block_start="<%", block_end="%>")
    Syntax(block_start='<%', block_end='%>', ...)

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from itertools import combinations
from typing import Any

from trellis.environment.exceptions import ConfigError, ErrorCode

# Deep enough for any hand-written template, shallow enough to stay well
# clear of the interpreter recursion limit.
DEFAULT_MAX_DEPTH = 64

_DELIMITERS = (
    "block_start",
    "block_end",
    "expr_start",
    "expr_end",
    "comment_start",
    "comment_end",
)


@dataclass(frozen=True, slots=True)
class Syntax:
    """Delimiter strings and parse limits for one template dialect.

    Attributes:
        block_start: Opens a statement tag (default ``{%``)
        block_end: Closes a statement tag (default ``%}``)
        expr_start: Opens an inline expression (default ``{{``)
        expr_end: Closes an inline expression (default ``}}``)
        comment_start: Opens a comment (default ``{#``)
        comment_end: Closes a comment (default ``#}``)
        max_depth: Maximum nesting of construct bodies in one template

    Raises:
        ConfigError: If a delimiter is shorter than two characters, contains
            whitespace, or one start delimiter is a prefix of another.
    """

    block_start: str = "{%"
    block_end: str = "%}"
    expr_start: str = "{{"
    expr_end: str = "}}"
    comment_start: str = "{#"
    comment_end: str = "#}"
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        for attr in _DELIMITERS:
            value = getattr(self, attr)
            if not isinstance(value, str) or len(value) < 2:
                raise ConfigError(
                    f"delimiter {attr} must be at least two characters long, got {value!r}",
                    ErrorCode.INVALID_DELIMITER,
                )
            if any(c.isspace() for c in value):
                raise ConfigError(
                    f"delimiter {attr} may not contain whitespace, got {value!r}",
                    ErrorCode.INVALID_DELIMITER,
                )

        starts = ("block_start", "expr_start", "comment_start")
        for first, second in combinations(starts, 2):
            a, b = getattr(self, first), getattr(self, second)
            if a.startswith(b) or b.startswith(a):
                raise ConfigError(
                    f"delimiters {first} ({a!r}) and {second} ({b!r}) are ambiguous: "
                    "one is a prefix of the other",
                    ErrorCode.INVALID_DELIMITER,
                )

        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise ConfigError(
                f"max_depth must be an integer, got {self.max_depth!r}",
                ErrorCode.INVALID_CONFIG,
            )
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Syntax:
        """Build a syntax from a plain mapping, e.g. a parsed TOML table.

        Keys not given keep their default. A ``name`` key is ignored here; it
        is consumed by :meth:`Environment.from_mapping`.

        Raises:
            ConfigError: On unknown keys or invalid delimiters.
        """
        known = {f.name for f in fields(cls)}
        options = {key: value for key, value in mapping.items() if key != "name"}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigError(f"unknown syntax option(s): {', '.join(unknown)}")
        return cls(**options)


DEFAULT_SYNTAX = Syntax()
