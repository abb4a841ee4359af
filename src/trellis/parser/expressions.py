"""Expression parsing for Trellis.

A compact precedence-climbing grammar, lowest binding first:

    range      :=  [or] ('..' | '..=') [or]  |  or
    or         :=  and ('||' and)*
    and        :=  compare ('&&' compare)*
    compare    :=  bitor (('==' | '!=' | '>=' | '>' | '<=' | '<') bitor)*
    bitor      :=  xor ('bitor' xor)*
    xor        :=  bitand ('xor' bitand)*
    bitand     :=  shift ('bitand' shift)*
    shift      :=  addsub (('>>' | '<<') addsub)*
    addsub     :=  muldiv (('+' | '-') muldiv)*
    muldiv     :=  unary (('*' | '/' | '%') unary)*
    unary      :=  ('!' | '-')? filtered
    filtered   :=  postfix ('|' NAME [args])*
    postfix    :=  primary ('.' NAME | '[' range ']' | args | '?')*
    primary    :=  bool | num | str | char | path | '[' list ']' | NAME | '(' group ')'

Expressions never fail fatally: every method returns None and restores the
cursor when nothing matches, so a dangling operator such as the ``-`` in
``{{ x -}}`` is left for the caller to read as a trim marker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trellis.nodes.expressions import (
    BinOp,
    Const,
    Expr,
    Filter,
    FuncCall,
    Getattr,
    Getitem,
    Group,
    List,
    Path,
    Range,
    Try,
    Tuple,
    UnaryOp,
    Var,
)
from trellis.parser import primitives

if TYPE_CHECKING:
    from trellis.parser.errors import ParseError


# Binary operator layers, lowest precedence first: (operators, are_keywords)
_BINARY_LAYERS: tuple[tuple[tuple[str, ...], bool], ...] = (
    (("||",), False),
    (("&&",), False),
    (("==", "!=", ">=", ">", "<=", "<"), False),
    (("bitor",), True),
    (("xor",), True),
    (("bitand",), True),
    ((">>", "<<"), False),
    (("+", "-"), False),
    (("*", "/", "%"), False),
)


class ExpressionParsingMixin:
    """Mixin for parsing expressions.

    Required Host Attributes:
        - All from SourceNavigationMixin
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int

        def _skip_ws(self) -> None: ...
        def _eat(self, text: str) -> bool: ...
        def _eat_ws(self, text: str) -> bool: ...
        def _eat_keyword(self, word: str) -> bool: ...
        def _eat_identifier(self) -> str | None: ...
        def _loc(self, offset: int) -> dict: ...
        def _error(self, message: str, offset: int | None = None, **kwargs) -> ParseError: ...

    def _parse_expression(self) -> Expr | None:
        """Parse one expression, including surrounding whitespace."""
        start = self._pos
        self._skip_ws()
        expr_start = self._pos
        left = self._parse_binary(0)

        op = None
        if self._eat_ws("..="):
            op = "..="
        elif self._eat_ws(".."):
            op = ".."

        if op is not None:
            right = self._parse_binary(0)
            self._skip_ws()
            return Range(op, left, right, **self._loc(expr_start))

        if left is None:
            self._pos = start
            return None
        self._skip_ws()
        return left

    def _parse_arguments(self) -> list[Expr] | None:
        """Parse ``(expr, ...)``; returns None if the list is malformed."""
        start = self._pos
        if not self._eat_ws("("):
            return None
        args: list[Expr] = []
        if self._eat_ws(")"):
            return args
        while True:
            arg = self._parse_expression()
            if arg is None:
                self._pos = start
                return None
            args.append(arg)
            if self._eat_ws(","):
                continue
            if self._eat_ws(")"):
                return args
            self._pos = start
            return None

    def _parse_binary(self, level: int) -> Expr | None:
        if level == len(_BINARY_LAYERS):
            return self._parse_unary()

        ops, are_keywords = _BINARY_LAYERS[level]
        start = primitives.skip_ws(self._source, self._pos)
        left = self._parse_binary(level + 1)
        if left is None:
            return None

        while True:
            mark = self._pos
            op = self._eat_operator(ops, are_keywords)
            if op is None:
                break
            right = self._parse_binary(level + 1)
            if right is None:
                self._pos = mark
                break
            left = BinOp(op, left, right, **self._loc(start))
        return left

    def _eat_operator(self, ops: tuple[str, ...], are_keywords: bool) -> str | None:
        for op in ops:
            if are_keywords:
                if self._eat_keyword(op):
                    return op
            elif self._eat_ws(op):
                return op
        return None

    def _parse_unary(self) -> Expr | None:
        start = self._pos
        self._skip_ws()
        op_start = self._pos
        op = None
        if self._eat("!"):
            op = "!"
        elif self._eat("-"):
            op = "-"

        operand = self._parse_filtered()
        if operand is None:
            self._pos = start
            return None
        if op is None:
            return operand
        return UnaryOp(op, operand, **self._loc(op_start))

    def _parse_filtered(self) -> Expr | None:
        start = primitives.skip_ws(self._source, self._pos)
        value = self._parse_postfix()
        if value is None:
            return None

        while True:
            mark = self._pos
            if not self._eat_ws("|") or self._source.startswith("|", self._pos):
                self._pos = mark
                break
            name = self._eat_identifier()
            if name is None:
                self._pos = mark
                break
            args = self._parse_arguments() or []
            value = Filter(value, name, tuple(args), **self._loc(start))
        return value

    def _parse_postfix(self) -> Expr | None:
        self._skip_ws()
        start = self._pos
        value = self._parse_primary()
        if value is None:
            return None

        while True:
            mark = self._pos
            if self._eat_ws("."):
                attr = self._eat_identifier()
                if attr is None:
                    self._pos = mark
                    break
                value = Getattr(value, attr, **self._loc(start))
            elif self._eat_ws("["):
                key = self._parse_expression()
                if key is None or not self._eat_ws("]"):
                    self._pos = mark
                    break
                value = Getitem(value, key, **self._loc(start))
            elif self._source.startswith("(", primitives.skip_ws(self._source, self._pos)):
                args = self._parse_arguments()
                if args is None:
                    break
                value = FuncCall(value, tuple(args), **self._loc(start))
            elif self._eat_ws("?"):
                value = Try(value, **self._loc(start))
            else:
                break
        return value

    def _parse_primary(self) -> Expr | None:
        source, start = self._source, self._pos
        loc = self._loc(start)

        end = primitives.bool_lit(source, start)
        if end is not None:
            self._pos = end
            return Const(source[start:end], "bool", **loc)

        end = primitives.num_lit(source, start)
        if end is not None:
            self._pos = end
            return Const(source[start:end], "num", **loc)

        matched = primitives.str_lit(source, start)
        if matched is not None:
            self._pos, value = matched
            return Const(value, "str", **loc)

        matched = primitives.char_lit(source, start)
        if matched is not None:
            self._pos, value = matched
            return Const(value, "char", **loc)

        matched = primitives.path(source, start)
        if matched is not None:
            self._pos, segments = matched
            return Path(segments, **loc)

        if source.startswith("[", start):
            return self._parse_list()

        end = primitives.identifier(source, start)
        if end is not None:
            self._pos = end
            return Var(source[start:end], **loc)

        if source.startswith("(", start):
            return self._parse_group()

        return None

    def _parse_list(self) -> Expr | None:
        start = self._pos
        self._eat("[")
        items: list[Expr] = []
        if not self._eat_ws("]"):
            while True:
                item = self._parse_expression()
                if item is None:
                    self._pos = start
                    return None
                items.append(item)
                if self._eat_ws(","):
                    if self._eat_ws("]"):
                        break
                    continue
                if self._eat_ws("]"):
                    break
                self._pos = start
                return None
        return List(tuple(items), **self._loc(start))

    def _parse_group(self) -> Expr | None:
        """Parse ``()``, ``(expr)`` or a tuple ``(a,)`` / ``(a, b)``."""
        start = self._pos
        self._eat("(")
        if self._eat_ws(")"):
            return Tuple((), **self._loc(start))

        first = self._parse_expression()
        if first is None:
            self._pos = start
            return None
        if self._eat_ws(")"):
            return Group(first, **self._loc(start))

        items = [first]
        while self._eat_ws(","):
            if self._eat_ws(")"):
                return Tuple(tuple(items), **self._loc(start))
            item = self._parse_expression()
            if item is None:
                break
            items.append(item)
        if len(items) > 1 and self._eat_ws(")"):
            return Tuple(tuple(items), **self._loc(start))
        self._pos = start
        return None
