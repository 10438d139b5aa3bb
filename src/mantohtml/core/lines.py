"""Logical line reader resolving continuations and comments."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TextIO


MAX_LINE_LENGTH = 65535


class LineReader:
    """Yield logical source lines from a text stream.

    A backslash before a newline joins the next physical line, and a
    backslash before a double quote starts a comment that runs to the end of
    the physical line. Every other backslash pair is kept verbatim for the
    inline renderer. ``line_number`` is the 1-based number of the last
    physical line consumed.
    """

    def __init__(self, stream: TextIO, *, max_length: int = MAX_LINE_LENGTH) -> None:
        self._stream = stream
        self._max_length = max_length
        self.line_number = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self.read()
        if line is None:
            raise StopIteration
        return line

    def read(self) -> str | None:
        """Return the next logical line, or ``None`` once the stream is exhausted."""
        pieces: list[str] = []
        started = False
        while True:
            physical = self._stream.readline()
            if not physical:
                return self._finish(pieces) if started else None
            started = True
            if self._scan(physical, pieces):
                return self._finish(pieces)

    def _scan(self, physical: str, pieces: list[str]) -> bool:
        """Append the content of ``physical`` and report whether the line ended."""
        pos = 0
        while True:
            index = physical.find("\\", pos)
            if index < 0:
                pieces.append(physical[pos:].removesuffix("\n"))
                self.line_number += 1
                return True
            pieces.append(physical[pos:index])
            escaped = physical[index + 1 : index + 2]
            if escaped == "\n":
                self.line_number += 1
                return False
            if escaped in ('"', ""):
                # Comment, or a dangling backslash on an unterminated last line.
                self.line_number += 1
                return True
            pieces.append("\\" + escaped)
            pos = index + 2

    def _finish(self, pieces: list[str]) -> str:
        return "".join(pieces)[: self._max_length]


__all__ = ["MAX_LINE_LENGTH", "LineReader"]
