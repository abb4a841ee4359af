"""Parser error handling for Trellis.

Provides ParseError, the fatal outcome of the grammar, with source context
and an optional suggestion.
"""

from __future__ import annotations

from trellis.environment import terminal
from trellis.environment.exceptions import ErrorCode, TemplateSyntaxError


class ParseError(TemplateSyntaxError):
    """Fatal parse failure at a known offset.

    Raised once a construct has committed (its keyword matched) and the
    input that follows is malformed. ``offset`` is the absolute position in
    the source where the offending input starts.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        *,
        lineno: int,
        col_offset: int,
        source: str | None = None,
        name: str | None = None,
        filename: str | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.offset = offset
        self.suggestion = suggestion
        if code is not None:
            self.code = code
        super().__init__(
            message,
            lineno=lineno,
            name=name,
            filename=filename,
            source=source,
            col_offset=col_offset,
        )

    def _format_message(self) -> str:
        msg = super()._format_message()
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg

    def format_compact(self) -> str:
        compact = super().format_compact()
        if self.suggestion:
            compact += f"\n{terminal.hint('Suggestion:')} {self.suggestion}"
        return compact
