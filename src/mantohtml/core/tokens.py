"""Token parser for macro arguments."""

from __future__ import annotations

from collections.abc import Iterator
import re


WHITESPACE = " \t\n\r\f\v"

# Backslash pairs are kept intact so escapes survive until inline rendering.
_QUOTED_RE = re.compile(r'"((?:\\.|[^"])*)"?', re.DOTALL)
_UNQUOTED_RE = re.compile(r"(?:\\.|[^ \t\n\r\f\v])+", re.DOTALL)


def parse_value(text: str) -> tuple[str | None, str]:
    """Split the next argument off ``text``.

    Returns ``(value, remainder)``. ``value`` is ``None`` when only whitespace
    is left, which callers must distinguish from an empty quoted argument
    (``""``). An unterminated quote consumes the rest of the line.
    """
    stripped = text.lstrip(WHITESPACE)
    if not stripped:
        return None, ""

    if stripped[0] == '"':
        match = _QUOTED_RE.match(stripped)
        assert match is not None
        value = match.group(1)
    else:
        match = _UNQUOTED_RE.match(stripped)
        assert match is not None
        value = match.group(0)

    return value, stripped[match.end() :].lstrip(WHITESPACE)


def iter_values(text: str) -> Iterator[str]:
    """Yield every argument of ``text`` in order."""
    value, remainder = parse_value(text)
    while value is not None:
        yield value
        value, remainder = parse_value(remainder)


__all__ = ["WHITESPACE", "iter_values", "parse_value"]
