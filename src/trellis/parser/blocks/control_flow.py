"""Control flow block parsing for Trellis parser.

Provides mixin for parsing control flow statements (if, for, match, break,
continue).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.environment.exceptions import ErrorCode
from trellis.nodes import (
    Break,
    Cond,
    CondTest,
    Continue,
    If,
    Loop,
    Match,
    When,
    Ws,
)
from trellis.nodes.targets import Name
from trellis.parser.blocks.core import BlockTagMixin

if TYPE_CHECKING:
    from trellis.nodes import Whitespace
    from trellis.nodes.expressions import Expr
    from trellis.nodes.targets import Target


class ControlFlowBlockParsingMixin(BlockTagMixin):
    """Mixin for parsing control flow blocks.

    Required Host Attributes:
        - All from BlockTagMixin
        - _parse_expression: method
        - _parse_target: method
        - _expect_target: method
        - _parse_comment: method
    """

    if TYPE_CHECKING:

        def _parse_expression(self) -> Expr | None: ...
        def _parse_target(self) -> Target | None: ...
        def _expect_target(self, what: str = "a pattern") -> Target: ...
        def _parse_comment(self): ...
        def _eat_ws(self, text: str) -> bool: ...
        def _eat_keyword(self, word: str) -> bool: ...
        def _expect_keyword(self, word: str) -> None: ...
        def _loc(self, offset: int) -> dict: ...

    def _expect_expression(self, what: str) -> Expr:
        expr = self._parse_expression()
        if expr is None:
            raise self._error(f"Expected {what}", code=ErrorCode.INVALID_EXPRESSION)
        return expr

    def _parse_cond_test(self) -> CondTest:
        """Parse what follows ``if``: an expression, or ``let PATTERN = expr``."""
        start = self._pos
        target = None
        if self._eat_keyword("let") or self._eat_keyword("set"):
            target = self._parse_target()
            if target is None or not self._eat_ws("="):
                # Not a binding after all: ``let`` is read as a plain name.
                target = None
                self._pos = start
        expr = self._expect_expression("a condition after 'if'")
        return CondTest(target, expr, **self._loc(start))

    def _parse_if(self, pws: Whitespace | None, start: int) -> If:
        """Parse {% if cond %}...{% else if cond %}...{% else %}...{% endif %}."""
        test = self._parse_cond_test()
        nws = self._parse_ws_marker()
        self._expect_block_end()
        branches = [Cond(Ws(pws, nws), test, self._parse_body(), **self._loc(start))]

        while True:
            tag = self._try_tag("else")
            if tag is None:
                break
            if branches[-1].test is None:
                raise self._error(
                    "'else' must be the last branch of an 'if'",
                    offset=tag.offset,
                    suggestion="Use '{% else if cond %}' before the final '{% else %}'",
                )
            test = self._parse_cond_test() if self._eat_keyword("if") else None
            nws = self._parse_ws_marker()
            self._expect_block_end()
            branches.append(
                Cond(Ws(tag.ws, nws), test, self._parse_body(), **self._loc(tag.offset))
            )

        end_pws = self._expect_end_tag("endif", "if", start)
        end_nws = self._parse_ws_marker()
        return If(tuple(branches), Ws(end_pws, end_nws), **self._loc(start))

    def _parse_for(self, pws: Whitespace | None, start: int) -> Loop:
        """Parse {% for x in items [if guard] %}...[{% else %}...]{% endfor %}.

        ``break`` and ``continue`` are valid in the body but not in the else
        block.
        """
        target = self._expect_target("a loop variable after 'for'")
        self._expect_keyword("in")
        iterable = self._expect_expression("an iterable after 'in'")
        guard = None
        if self._eat_keyword("if"):
            guard = self._expect_expression("a condition after 'if'")
        nws1 = self._parse_ws_marker()
        self._expect_block_end()

        with self._state.loop():
            body = self._parse_body()

        tag = self._try_tag("else", "endfor")
        if tag is None:
            raise self._missing_end_tag("endfor", "for", start)
        if tag.keyword == "else":
            else_nws = self._parse_ws_marker()
            self._expect_block_end()
            else_ = self._parse_body()
            end_pws = self._expect_end_tag("endfor", "for", start)
            end_nws = self._parse_ws_marker()
            ws2 = Ws(tag.ws, else_nws)
            ws3 = Ws(end_pws, end_nws)
        else:
            else_ = ()
            ws2 = Ws(tag.ws, None)
            ws3 = Ws(None, self._parse_ws_marker())

        return Loop(
            ws1=Ws(pws, nws1),
            target=target,
            iter=iterable,
            test=guard,
            body=body,
            ws2=ws2,
            else_=else_,
            ws3=ws3,
            **self._loc(start),
        )

    def _parse_match(self, pws: Whitespace | None, start: int) -> Match:
        """Parse {% match expr %}{% when pattern %}...{% else %}...{% endmatch %}.

        Whitespace and comments before the first arm are dropped. An else arm
        may appear anywhere among the arms but always ends up last.
        """
        subject = self._expect_expression("an expression after 'match'")
        nws1 = self._parse_ws_marker()
        self._expect_block_end()

        while True:
            self._skip_ws()
            if self._parse_comment() is None:
                break

        arms: list[When] = []
        else_arm: When | None = None
        while True:
            tag = self._try_tag("when", "else")
            if tag is None:
                break
            if tag.keyword == "when":
                target = self._expect_target("a pattern after 'when'")
            elif else_arm is not None:
                raise self._error(
                    "A 'match' may have only one 'else' arm",
                    offset=tag.offset,
                )
            else:
                target = Name("_", **self._loc(tag.offset))
            nws = self._parse_ws_marker()
            self._expect_block_end()
            arm = When(Ws(tag.ws, nws), target, self._parse_body(), **self._loc(tag.offset))
            if tag.keyword == "when":
                arms.append(arm)
            else:
                else_arm = arm

        if not arms:
            raise self._error(
                "Expected at least one '{% when %}' arm in 'match'",
                suggestion="{% match value %}{% when Some(x) %}...{% endmatch %}",
            )
        if else_arm is not None:
            arms.append(else_arm)

        end_pws = self._expect_end_tag("endmatch", "match", start)
        end_nws = self._parse_ws_marker()
        return Match(Ws(pws, nws1), subject, tuple(arms), Ws(end_pws, end_nws), **self._loc(start))

    def _parse_break(self, pws: Whitespace | None, start: int) -> Break:
        """Parse {% break %}; fatal outside a loop body."""
        self._check_in_loop("break", start)
        return Break(Ws(pws, self._parse_ws_marker()), **self._loc(start))

    def _parse_continue(self, pws: Whitespace | None, start: int) -> Continue:
        """Parse {% continue %}; fatal outside a loop body."""
        self._check_in_loop("continue", start)
        return Continue(Ws(pws, self._parse_ws_marker()), **self._loc(start))

    def _check_in_loop(self, keyword: str, start: int) -> None:
        if not self._state.is_in_loop():
            raise self._error(
                f"'{keyword}' outside of a loop",
                offset=start,
                suggestion=f"'{keyword}' is only valid inside a for loop body, not its else block",
                code=ErrorCode.LOOP_CONTROL_OUTSIDE_LOOP,
            )
