from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

import pytest

from mantohtml.core.config import DocumentConfig
from mantohtml.core.converter import convert_string
from mantohtml.core.diagnostics import SourceLocation, format_diagnostic
from mantohtml.ui.cli import state as cli_state


class RecordingEmitter:
    """Emitter collecting diagnostics for assertions."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.locations: list[SourceLocation | None] = []
        self.errors: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        self.warnings.append(format_diagnostic(message, location))
        self.locations.append(location)

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        self.errors.append(format_diagnostic(message, location))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


@pytest.fixture(autouse=True)
def fresh_cli_state() -> Iterator[None]:
    """Give every test its own CLI state."""
    token = cli_state._STATE_VAR.set(None)
    yield
    cli_state._STATE_VAR.reset(token)


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def convert(emitter: RecordingEmitter) -> Callable[..., str]:
    """Convert man source held in memory, recording diagnostics."""

    def _convert(source: str, *, name: str = "page.1", **options: Any) -> str:
        return convert_string(source, DocumentConfig(**options), name=name, emitter=emitter)

    return _convert


@pytest.fixture
def body() -> Callable[[str], str]:
    """Return the markup between ``<body>`` and ``</body>``."""

    def _body(html: str) -> str:
        start = html.index("  <body>\n") + len("  <body>\n")
        end = html.rindex("  </body>\n")
        return html[start:end]

    return _body
