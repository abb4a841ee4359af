"""Exceptions for the Trellis template front end.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Template not found by loader
├── TemplateSyntaxError       # Parse-time syntax error
│   └── ParseError            # Raised by the grammar (trellis.parser.errors)
└── ConfigError               # Invalid delimiter/syntax configuration

Error Messages:
Syntax errors carry the template name, line and column of the offending
input and render a source snippet with a caret::

    Syntax Error: 'break' outside of a loop
      --> page.html:3:3
       |
      3 | {% break %}
       |    ^

"""

from __future__ import annotations

from enum import Enum

from trellis.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for Trellis errors.

    Format: T-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), CFG (configuration), TPL (template loading)
    """

    # Parser errors (T-PAR-xxx)
    UNEXPECTED_INPUT = "T-PAR-001"
    UNCLOSED_TAG = "T-PAR-002"
    INVALID_EXPRESSION = "T-PAR-003"
    INVALID_PATTERN = "T-PAR-004"
    LOOP_CONTROL_OUTSIDE_LOOP = "T-PAR-005"
    RESERVED_NAME = "T-PAR-006"
    NESTING_TOO_DEEP = "T-PAR-007"
    UNCLOSED_COMMENT = "T-PAR-008"

    # Configuration errors (T-CFG-xxx)
    INVALID_DELIMITER = "T-CFG-001"
    UNKNOWN_SYNTAX = "T-CFG-002"
    DUPLICATE_SYNTAX = "T-CFG-003"
    INVALID_CONFIG = "T-CFG-004"

    # Template loading errors (T-TPL-xxx)
    TEMPLATE_NOT_FOUND = "T-TPL-001"
    SYNTAX_ERROR = "T-TPL-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'config', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "CFG": "config",
            "TPL": "template",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all Trellis errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line summary prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """Template not found by the environment's loader."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class ConfigError(TemplateError):
    """Invalid syntax or environment configuration."""

    code: ErrorCode | None = ErrorCode.INVALID_CONFIG

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line.  If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.filename = filename
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _location(self) -> str:
        location = self.filename or self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _error_line(self) -> str | None:
        if self.source and self.lineno:
            lines = self.source.split("\n")
            if 0 < self.lineno <= len(lines):
                return lines[self.lineno - 1]
        return None

    def _format_message(self) -> str:
        header = f"Syntax Error: {self.message}\n  --> {self._location()}"

        error_line = self._error_line()
        if error_line is None:
            return header

        snippet = f"\n   |\n{self.lineno:>3} | {error_line}"
        if self.col_offset is not None:
            snippet += f"\n   | {' ' * self.col_offset}^"
        return header + snippet

    def format_compact(self) -> str:
        """Format syntax error as a colored terminal diagnostic."""
        parts: list[str] = []

        code_prefix = terminal.error_code(f"{self.code.value}:") + " " if self.code else ""
        parts.append(f"{code_prefix}{self.message}")
        parts.append(f"  --> {terminal.location(self._location())}")

        error_line = self._error_line()
        if error_line is not None:
            parts.append(terminal.dim_text("   |"))
            parts.append(f"{terminal.line_number(f'{self.lineno:>3}')} | {error_line}")
            if self.col_offset is not None:
                caret = " " * self.col_offset + "^"
                parts.append(f"{terminal.dim_text('   |')} {terminal.error_line(caret)}")
            parts.append(terminal.dim_text("   |"))

        return "\n".join(parts)
