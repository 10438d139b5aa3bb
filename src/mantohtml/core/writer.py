"""Output stream helpers that quote HTML-sensitive characters."""

from __future__ import annotations

import re
from typing import TextIO

from .exceptions import FormatSequenceError


# Only these three characters are quoted; ``>`` and ``'`` pass through.
HTML_ENTITIES = {"&": "&amp;", "<": "&lt;", '"': "&quot;"}
_SENSITIVE_RE = re.compile(r'[&<"]')
_FORMAT_RE = re.compile(r"%(.?)", re.DOTALL)


def escape_html(text: str) -> str:
    """Return ``text`` with ``&``, ``<`` and ``"`` replaced by entities."""
    return _SENSITIVE_RE.sub(lambda match: HTML_ENTITIES[match.group(0)], text)


class HtmlWriter:
    """Append-only HTML stream shared by every file of a run."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write(self, raw: str) -> None:
        """Write markup verbatim."""
        if raw:
            self._stream.write(raw)

    def line(self, raw: str = "") -> None:
        """Write markup verbatim followed by a newline."""
        self._stream.write(raw + "\n")

    def escaped(self, text: str) -> None:
        """Write literal text, quoting HTML-sensitive characters."""
        self.write(escape_html(text))

    def format(self, template: str, *values: str | int | None) -> None:
        """Write ``template`` with ``%s``/``%d`` insertions escaped.

        Only ``%s``, ``%d`` and ``%%`` are understood. Any other sequence is an
        internal error and aborts the conversion.
        """
        pieces: list[str] = []
        remaining = iter(values)
        start = 0
        for match in _FORMAT_RE.finditer(template):
            pieces.append(template[start : match.start()])
            start = match.end()
            code = match.group(1)
            if code == "s":
                value = next(remaining, None)
                if value is not None:
                    pieces.append(escape_html(str(value)))
            elif code == "d":
                pieces.append(str(int(next(remaining, None) or 0)))
            elif code == "%":
                pieces.append("%")
            else:
                msg = f"Fatal error - unsupported format sequence '%{code}' used."
                raise FormatSequenceError(msg)
        pieces.append(template[start:])
        self.write("".join(pieces))


__all__ = ["HTML_ENTITIES", "HtmlWriter", "escape_html"]
