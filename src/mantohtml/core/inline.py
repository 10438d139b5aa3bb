"""Inline text rendering: escapes, glyphs, font changes and bare URLs.

Text is copied through in runs. At every trigger position (a backslash, the
start of an ``http://``/``https://`` URL, or an HTML-sensitive character)
the registered recognisers are tried in priority order; the first one that
accepts consumes input and writes its replacement.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from .state import Font
from .tokens import WHITESPACE
from .writer import HTML_ENTITIES, escape_html


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .document import HtmlDocument


FONT_ESCAPES: dict[str, Font] = {
    "R": Font.REGULAR,
    "P": Font.REGULAR,
    "B": Font.BOLD,
    "b": Font.BOLD,
    "I": Font.ITALIC,
    "i": Font.ITALIC,
    "C": Font.MONOSPACE,
}

# ``\*X`` and ``\*(XX`` predefined strings.
STRINGS: dict[str, str] = {
    "R": "&reg;",
    "(aq": "'",
    "(dq": "&quot;",
    "(lq": "&ldquo;",
    "(rq": "&rdquo;",
    "(Tm": "<sup>TM</sup>",
}

# ``\(XX`` special characters.
GLYPHS: dict[str, str] = {
    "bu": "&middot;",
    "em": "&mdash;",
    "en": "&ndash;",
    "ga": "`",
    "ha": "^",
    "ti": "~",
}

# ``\[XX]`` special characters.
BRACKET_GLYPHS: dict[str, str] = {
    "aq": "'",
    "co": "&copy;",
    "cq": "&rsquo;",
    "de": "&deg;",
    "dq": "&quot;",
    "lq": "&ldquo;",
    "mc": "&mu;",
    "oq": "&lsquo;",
    "rg": "&reg;",
    "rq": "&rdquo;",
    "tm": "<sup>TM</sup>",
}

# Escapes written without their backslash; ``\e`` prints a backslash.
PASSTHROUGH_ESCAPES = frozenset('\\"\'-e ')

URL_PREFIXES = ("http://", "https://")
_URL_STOP = ",.)"
_URL_STOP_FOLLOWERS = ",. \n\r\t"

_TRIGGER_RE = re.compile(r'\\|https?://|[&<"]')
_OCTAL_RE = re.compile(r"\\([0-7]{3})")

Recogniser = Callable[["InlineRenderer", str, int], "int | None"]


@dataclass(frozen=True, slots=True)
class InlineRule:
    """Recogniser registered for a trigger position."""

    priority: int
    name: str
    handler: Recogniser


INLINE_RULES: list[InlineRule] = []


def recognises(priority: int) -> Callable[[Recogniser], Recogniser]:
    """Register a recogniser; lower priorities are tried first."""

    def decorator(handler: Recogniser) -> Recogniser:
        INLINE_RULES.append(InlineRule(priority=priority, name=handler.__name__, handler=handler))
        INLINE_RULES.sort(key=lambda rule: (rule.priority, rule.name))
        return handler

    return decorator


class InlineRenderer:
    """Render one span of man page text into the document stream."""

    def __init__(self, document: HtmlDocument) -> None:
        self.document = document
        self.in_heading = False

    def warn(self, message: str) -> None:
        self.document.warn(message, self.document.locate())

    def set_font(self, font: Font) -> None:
        self.document.set_font(font, open_block=not self.in_heading)

    def write(self, markup: str) -> None:
        self.document.writer.write(markup)

    def render(self, text: str, *, in_heading: bool = False) -> None:
        """Write ``text`` with escapes interpreted and HTML quoted."""
        previous = self.in_heading
        self.in_heading = in_heading
        try:
            self._render(text)
        finally:
            self.in_heading = previous

    def _render(self, text: str) -> None:
        writer = self.document.writer
        start = 0
        position = 0
        length = len(text)
        while position < length:
            match = _TRIGGER_RE.search(text, position)
            if match is None:
                break
            trigger = match.start()
            writer.write(text[start:trigger])
            for rule in INLINE_RULES:
                consumed = rule.handler(self, text, trigger)
                if consumed is not None:
                    break
            else:
                writer.write(text[trigger])
                consumed = trigger + 1
            start = position = consumed
        writer.write(text[start:])


@recognises(priority=10)
def font_change(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """``\\fX`` switches the current font."""
    if not text.startswith("\\f", position) or position + 2 >= len(text):
        return None
    code = text[position + 2]
    font = FONT_ESCAPES.get(code)
    if font is None:
        renderer.warn(f"Unknown font '\\f{code}' ignored")
    else:
        renderer.set_font(font)
    return position + 3


@recognises(priority=20)
def predefined_string(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """``\\*R`` and ``\\*(XX`` predefined strings."""
    if not text.startswith("\\*", position) or position + 2 >= len(text):
        return None
    if text[position + 2] != "(":
        key = text[position + 2]
        end = position + 3
    else:
        key = text[position + 2 : position + 5]
        end = position + 5 if len(key) == 3 else position + 3
    replacement = STRINGS.get(key)
    if replacement is None:
        renderer.warn(f"Unknown macro '\\*{key}' ignored")
        return end
    renderer.write(replacement)
    return end


@recognises(priority=30)
def special_glyph(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """``\\(XX`` special characters."""
    if not text.startswith("\\(", position):
        return None
    replacement = GLYPHS.get(text[position + 2 : position + 4])
    if replacement is None:
        return None
    renderer.write(replacement)
    return position + 4


@recognises(priority=40)
def bracket_glyph(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """``\\[XX]`` special characters."""
    if not text.startswith("\\[", position) or text[position + 4 : position + 5] != "]":
        return None
    replacement = BRACKET_GLYPHS.get(text[position + 2 : position + 4])
    if replacement is None:
        return None
    renderer.write(replacement)
    return position + 5


@recognises(priority=50)
def octal_character(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """``\\NNN`` octal character codes become numeric references."""
    match = _OCTAL_RE.match(text, position)
    if match is None:
        return None
    renderer.write(f"&#{int(match.group(1), 8)};")
    return match.end()


@recognises(priority=60)
def escaped_character(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """Any other ``\\X``; unknown escapes keep their backslash."""
    if text[position] != "\\" or position + 1 >= len(text):
        return None
    character = text[position + 1]
    if character not in PASSTHROUGH_ESCAPES:
        renderer.warn(f"Unrecognized escape '\\{character}' ignored")
        renderer.write("\\")
    if character == "e":
        renderer.write("\\")
    else:
        renderer.write(escape_html(character))
    return position + 2


@recognises(priority=70)
def bare_url(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """Wrap ``http://`` and ``https://`` URLs in a link to themselves.

    Inside an open link the URL stays plain text.
    """
    if not text.startswith(URL_PREFIXES, position) or renderer.document.state.open_link:
        return None
    characters: list[str] = []
    length = len(text)
    index = position
    while index < length and text[index] not in WHITESPACE:
        character = text[index]
        following = text[index + 1] if index + 1 < length else ""
        if character in _URL_STOP and (not following or following in _URL_STOP_FOLLOWERS):
            break
        if character == "\\" and following:
            index += 1
            character = following
        characters.append(character)
        index += 1
    url = "".join(characters)
    renderer.document.writer.format('<a href="%s">%s</a>', url, url)
    return index


@recognises(priority=80)
def html_entity(renderer: InlineRenderer, text: str, position: int) -> int | None:
    """Quote ``&``, ``<`` and ``"``."""
    replacement = HTML_ENTITIES.get(text[position])
    if replacement is None:
        return None
    renderer.write(replacement)
    return position + 1


__all__ = [
    "BRACKET_GLYPHS",
    "FONT_ESCAPES",
    "GLYPHS",
    "INLINE_RULES",
    "STRINGS",
    "InlineRenderer",
    "InlineRule",
    "recognises",
]
