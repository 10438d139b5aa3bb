"""Console reporting of conversion diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mantohtml.core.diagnostics import SourceLocation, format_diagnostic, format_event_message

from .state import emit_error, emit_warning, render_message


class CliEmitter:
    """Print warnings and errors as ``mantohtml: ...`` lines on stderr.

    Warnings are counted, and the count is added to the end-of-document
    summary shown with ``--verbose``.
    """

    def __init__(self) -> None:
        self.warning_count = 0

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        self.warning_count += 1
        emit_warning(format_diagnostic(message, location))

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        emit_error(format_diagnostic(message, location))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            return
        if name == "document_finished" and self.warning_count:
            noun = "warning" if self.warning_count == 1 else "warnings"
            message = f"{message}, {self.warning_count} {noun}"
        render_message("info", message)


__all__ = ["CliEmitter"]
