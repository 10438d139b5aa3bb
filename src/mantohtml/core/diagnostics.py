"""Warnings and progress events raised while converting man pages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a logical line inside a man page."""

    path: str
    line: int

    def describe(self) -> str:
        return f"on line {self.line} of '{self.path}'"


def format_diagnostic(message: str, location: SourceLocation | None = None) -> str:
    """Attach ``location`` to ``message`` the way every warning reads.

    >>> format_diagnostic("Unbalanced '.RE'", SourceLocation("ls.1", 12))
    "Unbalanced '.RE' on line 12 of 'ls.1'."
    """
    if location is None:
        return message
    return f"{message} {location.describe()}."


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver for conversion warnings, fatal errors and progress events."""

    def warning(self, message: str, location: SourceLocation | None = None) -> None: ...

    def error(self, message: str, location: SourceLocation | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Drop every diagnostic."""

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        return

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Route diagnostics through :mod:`logging`.

    The source position travels in the record as ``source_path`` and
    ``source_line`` so handlers can filter or reformat it.
    """

    def __init__(self, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def _log(self, level: int, message: str, location: SourceLocation | None) -> None:
        extra = {
            "source_path": location.path if location else None,
            "source_line": location.line if location else None,
        }
        self._logger.log(level, "%s", format_diagnostic(message, location), extra=extra)

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        self._log(logging.WARNING, message, location)

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        self._log(logging.ERROR, message, location)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
        else:
            self._logger.debug("event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary for the converter's progress events."""
    data = dict(payload)

    if name == "file_converted":
        path = data.get("path") or "<unknown>"
        lines = data.get("lines")
        suffix = f" ({lines} lines)" if lines is not None else ""
        return f"Converted: {path}{suffix}"

    if name == "document_finished":
        files = data.get("files")
        if files is None:
            return "Document finished"
        noun = "file" if files == 1 else "files"
        return f"Document finished ({files} {noun})"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "SourceLocation",
    "format_diagnostic",
    "format_event_message",
]
