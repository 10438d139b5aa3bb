"""Public CLI exports for mantohtml."""

from __future__ import annotations

from .app import app, main
from .commands import convert
from .state import emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "convert",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
]
