"""Trellis template parser.

See :mod:`trellis.parser.core` for the grammar's structure.
"""

from trellis.parser.core import Parser, parse
from trellis.parser.errors import ParseError
from trellis.parser.state import ParseState

__all__ = ["ParseError", "ParseState", "Parser", "parse"]
