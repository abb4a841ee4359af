"""Statement dispatch for the Trellis parser.

A template body is a sequence of nodes. At each position the parser tries,
in order: literal text, a comment, an inline expression, a statement tag.
The sequence ends when none of them match, which is either the end of the
input or a tag the enclosing construct is waiting for (``endif``,
``else``, ``when``, ...).

Statement tags dispatch on their keyword through ``_BLOCK_PARSERS``. Once
the keyword is recognized the construct is committed and any malformed
input after it raises :class:`ParseError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import Comment, Lit, Node, Output, Whitespace, Ws
from trellis.parser import primitives

if TYPE_CHECKING:
    from collections.abc import Callable

    from trellis.nodes.expressions import Expr
    from trellis.parser.errors import ParseError
    from trellis.parser.state import ParseState
    from trellis.syntax import Syntax


# Keyword -> handler method name, in the order constructs are documented.
# Each handler is called with the tag's left trim marker and the offset of
# its opening delimiter, with the cursor just past the keyword.
_BLOCK_PARSERS: dict[str, str] = {
    "call": "_parse_call",
    "let": "_parse_let",
    "set": "_parse_let",
    "if": "_parse_if",
    "for": "_parse_for",
    "match": "_parse_match",
    "extends": "_parse_extends",
    "include": "_parse_include",
    "import": "_parse_import",
    "block": "_parse_block",
    "macro": "_parse_macro",
    "raw": "_parse_raw",
    "break": "_parse_break",
    "continue": "_parse_continue",
}

# Tags that continue an open construct
_CONTINUATION_KEYWORDS: frozenset[str] = frozenset({"else", "when"})

# Tags that close an open construct
_END_KEYWORDS: frozenset[str] = frozenset(
    {"endif", "endfor", "endmatch", "endblock", "endmacro", "endraw"}
)

_VALID_KEYWORDS: frozenset[str] = frozenset(_BLOCK_PARSERS)


class StatementParsingMixin:
    """Mixin for the node sequence and the leaf constructs around it.

    Required Host Attributes:
        - All from SourceNavigationMixin
        - _parse_expression: method
        - one handler per ``_BLOCK_PARSERS`` entry
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int
        _state: ParseState

        @property
        def _syntax(self) -> Syntax: ...
        def _at_end(self) -> bool: ...
        def _skip_ws(self) -> None: ...
        def _eat(self, text: str) -> bool: ...
        def _parse_ws_marker(self) -> Whitespace | None: ...
        def _expect_block_end(self) -> None: ...
        def _loc(self, offset: int) -> dict: ...
        def _error(
            self,
            message: str,
            offset: int | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...
        def _parse_expression(self) -> Expr | None: ...

    def _parse_nodes(self) -> list[Node]:
        """Parse nodes until nothing else matches."""
        with self._state.nested():
            if self._state.too_deep:
                raise self._error(
                    f"Template nesting exceeds the limit of {self._syntax.max_depth}",
                    code=ErrorCode.NESTING_TOO_DEEP,
                )

            alternatives: tuple[Callable[[], Node | None], ...] = (
                self._parse_content,
                self._parse_comment,
                self._parse_output,
                self._parse_statement,
            )
            nodes: list[Node] = []
            while True:
                for parse in alternatives:
                    node = parse()
                    if node is not None:
                        nodes.append(node)
                        break
                else:
                    return nodes

    def _parse_content(self) -> Lit | None:
        """Scan literal text up to the next start delimiter or end of input."""
        if self._at_end():
            return None

        start = self._pos
        match = self._state.content_end.search(self._source, start)
        end = match.start() if match else len(self._source)
        if end == start:
            return None

        self._pos = end
        return primitives.split_ws_parts(self._source[start:end], **self._loc(start))

    def _parse_comment(self) -> Comment | None:
        """Parse a comment. Nested comment delimiters must balance."""
        syntax = self._syntax
        start = self._pos
        if not self._eat(syntax.comment_start):
            return None

        pws = self._parse_ws_marker()
        open_, close = syntax.comment_start, syntax.comment_end
        cur, level = self._pos, 0
        while True:
            end = self._source.find(close, cur)
            if end == -1:
                raise self._error(
                    "Unclosed comment",
                    offset=start,
                    suggestion=f"Close the comment with '{close}'",
                    code=ErrorCode.UNCLOSED_COMMENT,
                )
            nested = self._source.find(open_, cur, end)
            if nested != -1:
                level += 1
                cur = nested + len(open_)
            elif level > 0:
                level -= 1
                cur = end + len(close)
            else:
                break

        tail = self._source[cur:end]
        nws = None
        if tail and tail[-1] in primitives.WHITESPACE_MARKERS:
            nws = Whitespace.from_char(tail[-1])
        self._pos = end + len(close)
        return Comment(Ws(pws, nws), **self._loc(start))

    def _parse_output(self) -> Output | None:
        """Parse an inline expression: {{ expr }}"""
        syntax = self._syntax
        start = self._pos
        if not self._eat(syntax.expr_start):
            return None

        pws = self._parse_ws_marker()
        expr = self._parse_expression()
        if expr is None:
            raise self._error(
                f"Expected an expression after '{syntax.expr_start}'",
                code=ErrorCode.INVALID_EXPRESSION,
            )
        nws = self._parse_ws_marker()
        if not self._eat(syntax.expr_end):
            raise self._error(
                f"Expected '{syntax.expr_end}' to close the expression",
                code=ErrorCode.UNCLOSED_TAG,
            )
        return Output(Ws(pws, nws), expr, **self._loc(start))

    def _parse_statement(self) -> Node | None:
        """Parse a statement tag, or return None if its keyword is not ours."""
        start = self._pos
        if not self._eat(self._syntax.block_start):
            return None

        pws = self._parse_ws_marker()
        self._skip_ws()
        keyword_end = primitives.identifier(self._source, self._pos)
        keyword = self._source[self._pos : keyword_end] if keyword_end is not None else None
        method_name = _BLOCK_PARSERS.get(keyword) if keyword is not None else None
        if method_name is None:
            self._pos = start
            return None

        self._pos = keyword_end
        self._skip_ws()
        node = getattr(self, method_name)(pws, start)
        self._expect_block_end()
        return node

    def _unexpected_input(self) -> ParseError:
        """Describe whatever stopped the top-level sequence."""
        block_start = self._syntax.block_start
        if not self._source.startswith(block_start, self._pos):
            return self._error("Unexpected input")

        cur = self._pos + len(block_start)
        if primitives.whitespace_marker(self._source, cur):
            cur += 1
        cur = primitives.skip_ws(self._source, cur)
        end = primitives.identifier(self._source, cur)
        keyword = self._source[cur:end] if end is not None else None

        if keyword in _END_KEYWORDS or keyword in _CONTINUATION_KEYWORDS:
            return self._error(
                f"Unexpected '{keyword}' with no open construct",
                offset=self._pos,
            )
        if keyword is None:
            return self._error(
                f"Expected a statement keyword after '{block_start}'",
                offset=cur,
            )
        return self._error(
            f"Unknown tag '{keyword}'",
            offset=cur,
            suggestion=f"Valid tags: {', '.join(sorted(_VALID_KEYWORDS))}",
        )
