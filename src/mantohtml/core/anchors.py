"""Heading anchors and heading capitalisation."""

from __future__ import annotations

import re

from slugify import slugify


STOP_WORDS = frozenset({"a", "and", "or", "the"})

# Dots survive so hierarchical anchors such as ``ls-1.name`` stay readable.
_DISALLOWED_RE = re.compile(r"[^-a-z0-9.]+")
_WORD_RE = re.compile(r"\\(?:\*\(..|\*.|\(..|\[[^\]]*\]|f.|.)|[A-Za-z]+", re.DOTALL)


def html_anchor(text: str) -> str:
    """Derive an element identifier from heading text.

    Letters are lower-cased, runs of other characters collapse into a single
    hyphen, and separators at either end are dropped.
    """
    return slugify(text, regex_pattern=_DISALLOWED_RE).strip("-.")


def join_anchor(*parts: str) -> str:
    """Join hierarchical anchor components with dots."""
    return ".".join(parts)


def _recase(match: re.Match[str]) -> str:
    word = match.group(0)
    if word.startswith("\\"):
        return word
    if match.start() > 0 and word.lower() in STOP_WORDS:
        return word.lower()
    return word[0].upper() + word[1:].lower()


def capitalize_heading(text: str) -> str:
    """Title-case section headings such as ``SEE ALSO`` into ``See Also``.

    Escape sequences are left untouched and the stop words ``a``, ``and``,
    ``or`` and ``the`` stay lower case unless they open the heading.
    """
    return _WORD_RE.sub(_recase, text)


__all__ = ["STOP_WORDS", "capitalize_heading", "html_anchor", "join_anchor"]
