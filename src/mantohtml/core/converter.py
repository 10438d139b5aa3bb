"""Per-page macro dispatch and the multi-file conversion session."""

from __future__ import annotations

from collections.abc import Iterable
import io
import logging
from pathlib import Path
import sys
from typing import TextIO

from .config import DocumentConfig
from .diagnostics import DiagnosticEmitter, NullEmitter, SourceLocation
from .document import HtmlDocument
from .lines import LineReader
from .rules import MacroRegistry, default_registry
from .state import SessionState
from .tokens import parse_value
from .writer import HtmlWriter


logger = logging.getLogger(__name__)

# Macro names are significant up to three characters (".TH", ".SH", ...).
MACRO_NAME_LENGTH = 3


class PageConverter:
    """Convert one man page source into the shared document."""

    def __init__(
        self,
        document: HtmlDocument,
        path: Path | str,
        stream: TextIO,
        *,
        registry: MacroRegistry | None = None,
    ) -> None:
        self.document = document
        self.path = str(path)
        self.reader = LineReader(stream)
        self.registry = registry or default_registry()
        self.topic_seen = False
        self.break_text = ""
        self._warned = False

    @property
    def line_number(self) -> int:
        return self.reader.line_number

    def location(self) -> SourceLocation:
        return SourceLocation(self.path, self.line_number)

    def warn(self, message: str) -> None:
        """Report ``message`` against the line being converted."""
        self.document.warn(message, self.location())

    def warn_once(self, message: str) -> None:
        """Emit the once-per-file warning about content before ``.TH``."""
        if self._warned:
            return
        self._warned = True
        self.warn(message)

    def next_line(self) -> str:
        """Consume the next logical line; an exhausted source yields ``""``."""
        line = self.reader.read()
        return line if line is not None else ""

    def argument_line(self, args: str) -> str:
        """Return ``args``, or the following line when no arguments were given."""
        if args.strip():
            return args
        return self.next_line()

    def emit_break(self) -> None:
        """End the current output line with any pending break markup."""
        self.document.writer.line(self.break_text)
        self.break_text = ""

    def run(self) -> int:
        """Convert every line of the source; return the physical line count."""
        self.document.locate = self.location
        try:
            for line in self.reader:
                self.process(line)
        finally:
            self.document.locate = _nowhere
        return self.line_number

    def process(self, line: str) -> None:
        if line.startswith("."):
            self._process_macro(line)
        else:
            self._process_text(line)

    def _process_macro(self, line: str) -> None:
        token, args = parse_value(line)
        name = (token or ".")[:MACRO_NAME_LENGTH]
        if name == ".":
            return

        rule = self.registry.lookup(name)
        if (rule is None or rule.requires_topic) and not self.topic_seen:
            self.warn_once(f"Need '.TH' before '{name}' macro")
            return
        if rule is None:
            self.warn(f"Unsupported command/macro '{name}'")
            return

        logger.debug("%s:%d: %s %s", self.path, self.line_number, name, args.strip())
        rule.handler(self, name, args)

    def _process_text(self, line: str) -> None:
        if self.topic_seen:
            self.document.ensure_paragraph()
            self.document.inline.render(line)
            self.emit_break()
        elif line:
            self.warn_once("Ignoring text before '.TH'")


def _nowhere() -> SourceLocation | None:
    return None


def decode_source(data: bytes, path: Path | str = "<bytes>") -> str:
    """Decode a man page as UTF-8, falling back to Latin-1.

    Latin-1 maps every byte, so legacy pages keep their accented characters
    instead of turning into replacement marks.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("%s is not valid UTF-8, decoding as Latin-1", path)
        return data.decode("latin-1")


class ConversionSession:
    """Convert a sequence of man pages into one HTML document."""

    def __init__(
        self,
        config: DocumentConfig | None = None,
        stream: TextIO | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
        registry: MacroRegistry | None = None,
    ) -> None:
        self.config = config or DocumentConfig()
        self.emitter: DiagnosticEmitter = emitter or NullEmitter()
        self.registry = registry or default_registry()
        self.state = SessionState()
        self.writer = HtmlWriter(stream if stream is not None else sys.stdout)
        self.document = HtmlDocument(
            self.config, self.writer, state=self.state, emitter=self.emitter
        )
        self.files_converted = 0

    @property
    def header_written(self) -> bool:
        return self.state.header_written

    def convert_stream(self, stream: TextIO, path: Path | str) -> int:
        """Convert an already opened source; ``path`` names it in diagnostics."""
        self.state.reset_for_file(Path(path))
        page = PageConverter(self.document, path, stream, registry=self.registry)
        lines = page.run()
        self.files_converted += 1
        self.emitter.event("file_converted", {"path": str(path), "lines": lines})
        return lines

    def convert_file(self, path: Path | str) -> bool:
        """Convert one file; an unreadable file is reported and skipped."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            self.emitter.error(f"{path}: {exc.strerror or exc}")
            return False
        self.convert_stream(io.StringIO(decode_source(data, path), newline=""), path)
        return True

    def convert_text(self, text: str, name: str = "<string>") -> int:
        return self.convert_stream(io.StringIO(text), name)

    def finish(self) -> bool:
        """Write the footer; return False when no page ever started a document."""
        finished = self.document.write_footer()
        if finished:
            self.emitter.event("document_finished", {"files": self.files_converted})
        return finished


def convert_documents(
    paths: Iterable[Path | str],
    config: DocumentConfig | None = None,
    stream: TextIO | None = None,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> bool:
    """Convert ``paths`` in order; return whether a complete document was written."""
    session = ConversionSession(config, stream, emitter=emitter)
    for path in paths:
        session.convert_file(path)
    return session.finish()


def convert_string(
    source: str,
    config: DocumentConfig | None = None,
    *,
    name: str = "<string>",
    emitter: DiagnosticEmitter | None = None,
) -> str:
    """Convert a single man page held in memory and return the HTML."""
    buffer = io.StringIO()
    session = ConversionSession(config, buffer, emitter=emitter)
    session.convert_text(source, name)
    session.finish()
    return buffer.getvalue()


__all__ = [
    "MACRO_NAME_LENGTH",
    "ConversionSession",
    "PageConverter",
    "convert_documents",
    "convert_string",
    "decode_source",
]
