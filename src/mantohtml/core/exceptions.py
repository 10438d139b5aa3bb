"""Exception hierarchy for the man page conversion pipeline."""

from __future__ import annotations

from .diagnostics import SourceLocation


class ManToHtmlError(RuntimeError):
    """Base exception for fatal conversion failures."""


class StylesheetError(ManToHtmlError):
    """Raised when the stylesheet file to inline cannot be read."""


class TopicHeadingError(ManToHtmlError):
    """Raised when a ``.TH`` macro lacks its title or numeric section."""

    def __init__(self, what: str, location: SourceLocation) -> None:
        self.what = what
        self.location = location
        super().__init__(f"Missing {what} in '.TH' {location.describe()}.")


class FormatSequenceError(ManToHtmlError):
    """Raised when the escaping formatter meets an unsupported insertion."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "FormatSequenceError",
    "ManToHtmlError",
    "StylesheetError",
    "TopicHeadingError",
    "exception_hint",
    "exception_messages",
]
