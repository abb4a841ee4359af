"""Lexical primitives for the Trellis grammar.

Pure functions over ``(source, pos)``. Each returns the offset just past the
match, or ``None`` if nothing matches at ``pos``; none of them raise. The
literal scanners return ``(end, body)`` so callers get the unquoted text.
"""

from __future__ import annotations

import re

from trellis.nodes.output import Lit

# Identifier characters: ASCII letters, digits, underscore and anything
# outside ASCII. Digits may not start an identifier.
_IDENTIFIER_RE = re.compile(r"[A-Za-z_\u0080-\U0010ffff][A-Za-z0-9_\u0080-\U0010ffff]*")
_IDENTIFIER_TAIL_RE = re.compile(r"[A-Za-z0-9_\u0080-\U0010ffff]")
_NUM_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_WS_RE = re.compile(r"[ \t\r\n]*")
_STR_RE = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_CHAR_RE = re.compile(r"'((?:[^'\\]|\\.)*)'", re.DOTALL)

WHITESPACE_CHARS = " \t\r\n"
WHITESPACE_MARKERS = "-+~"


def skip_ws(source: str, pos: int) -> int:
    """Return the offset of the first non-whitespace character at or after pos."""
    return _WS_RE.match(source, pos).end()


def tag(source: str, pos: int, text: str) -> int | None:
    """Match ``text`` literally."""
    if source.startswith(text, pos):
        return pos + len(text)
    return None


def identifier(source: str, pos: int) -> int | None:
    m = _IDENTIFIER_RE.match(source, pos)
    return m.end() if m else None


def keyword(source: str, pos: int, word: str) -> int | None:
    """Match ``word`` when it is not the prefix of a longer identifier."""
    if not source.startswith(word, pos):
        return None
    end = pos + len(word)
    if _IDENTIFIER_TAIL_RE.match(source, end):
        return None
    return end


def num_lit(source: str, pos: int) -> int | None:
    m = _NUM_RE.match(source, pos)
    return m.end() if m else None


def bool_lit(source: str, pos: int) -> int | None:
    return keyword(source, pos, "true") or keyword(source, pos, "false")


def str_lit(source: str, pos: int) -> tuple[int, str] | None:
    """Match a double-quoted string; backslash escapes any character."""
    m = _STR_RE.match(source, pos)
    return (m.end(), m.group(1)) if m else None


def char_lit(source: str, pos: int) -> tuple[int, str] | None:
    """Match a single-quoted literal; the body is not length-checked."""
    m = _CHAR_RE.match(source, pos)
    return (m.end(), m.group(1)) if m else None


def path(source: str, pos: int) -> tuple[int, tuple[str, ...]] | None:
    """Match a qualified name.

    Either two or more ``::``-separated identifiers, optionally rooted with a
    leading ``::`` (recorded as an empty first segment), or a single
    identifier containing an uppercase letter such as ``None`` or ``MAX``.
    Whitespace is allowed around ``::``.
    """
    segments: list[str] = []
    cur = pos
    rooted = tag(source, skip_ws(source, cur), "::")
    if rooted is not None:
        segments.append("")
        cur = skip_ws(source, rooted)

    end = identifier(source, cur)
    if end is None:
        return None
    segments.append(source[cur:end])
    cur = end

    while True:
        sep = tag(source, skip_ws(source, cur), "::")
        if sep is None:
            break
        start = skip_ws(source, sep)
        end = identifier(source, start)
        if end is None:
            break
        segments.append(source[start:end])
        cur = end

    if len(segments) > 1:
        return cur, tuple(segments)
    if any(c.isupper() for c in segments[0]):
        return cur, tuple(segments)
    return None


def whitespace_marker(source: str, pos: int) -> str | None:
    """Return the trim marker character at pos, if any."""
    if pos < len(source) and source[pos] in WHITESPACE_MARKERS:
        return source[pos]
    return None


def split_ws_parts(text: str, *, lineno: int = 0, col_offset: int = 0) -> Lit:
    """Split text into leading whitespace, core text and trailing whitespace.

    Whitespace-only text yields an empty core with everything in ``lws``.
    """
    core_start = text.lstrip(WHITESPACE_CHARS)
    lws = text[: len(text) - len(core_start)]
    core = core_start.rstrip(WHITESPACE_CHARS)
    rws = core_start[len(core) :]
    return Lit(lws, core, rws, lineno=lineno, col_offset=col_offset)
