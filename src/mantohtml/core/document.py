"""HTML document assembly and the block/link/font state machine."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any

from mantohtml.version import get_version

from .anchors import capitalize_heading, html_anchor, join_anchor
from .config import DEFAULT_TITLE, DocumentConfig
from .diagnostics import DiagnosticEmitter, NullEmitter, SourceLocation
from .exceptions import StylesheetError
from .inline import InlineRenderer
from .state import Block, Font, HeadingLevel, SessionState
from .writer import HtmlWriter


logger = logging.getLogger(__name__)


def _no_location() -> SourceLocation | None:
    return None


class HtmlDocument:
    """Single HTML document fed by every man page of a run.

    Fonts opened while a link is open live inside the ``<a>`` element. When a
    block-level element opens, the link closes first together with its font,
    then any font outside it, then the open block.
    """

    def __init__(
        self,
        config: DocumentConfig,
        writer: HtmlWriter,
        *,
        state: SessionState | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config
        self.writer = writer
        self.state = state or SessionState()
        self.emitter: DiagnosticEmitter = emitter or NullEmitter()
        self.inline = InlineRenderer(self)
        self.locate: Callable[[], SourceLocation | None] = _no_location

    # -- diagnostics -------------------------------------------------------

    def warn(self, message: str, location: SourceLocation | None = None) -> None:
        self.emitter.warning(message, location)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.emitter.event(name, payload)

    # -- links -------------------------------------------------------------

    def open_link(self, href: str) -> None:
        """Open an anchor element inside the current paragraph.

        The current font is closed before ``<a>`` and reopened inside it, so
        every font element inside a link also ends inside it.
        """
        font = self.state.font
        self.close_link()
        self.close_font()
        self.ensure_paragraph()
        self.writer.format('<a href="%s">', href)
        self.state.open_link = True
        self.set_font(font)

    def close_link(self, *, keep_font: bool = False) -> None:
        """Close the open anchor and the font opened inside it.

        With ``keep_font`` the font is reopened after ``</a>``.
        """
        if not self.state.open_link:
            return
        font = self.state.font
        self.close_font()
        self.writer.line("</a>")
        self.state.open_link = False
        if keep_font:
            self.set_font(font)

    # -- fonts -------------------------------------------------------------

    def set_font(self, font: Font, *, open_block: bool = True) -> None:
        """Switch the inline font, opening a paragraph when none is open.

        ``open_block=False`` is used inside headings where no paragraph may
        be started.
        """
        state = self.state
        in_block = state.open_block is not Block.NONE or not open_block
        if state.font is font and in_block:
            return

        if state.font.close_tag:
            self.writer.write(state.font.close_tag)
        if open_block:
            self.ensure_paragraph()
        if font.open_tag:
            self.writer.write(font.open_tag)
        state.font = font

    def close_font(self) -> None:
        """Close the open inline font element, if any."""
        if self.state.font.close_tag:
            self.writer.write(self.state.font.close_tag)
        self.state.font = Font.REGULAR

    # -- blocks ------------------------------------------------------------

    def ensure_paragraph(self) -> None:
        """Open a default paragraph when no block is open."""
        if self.state.open_block is Block.NONE:
            self.writer.write("<p>")
            self.state.open_block = Block.PARAGRAPH

    def close_block(self) -> None:
        """Close the open link, font and block, in that order."""
        self.close_link()
        self.close_font()
        tag = self.state.open_block.tag
        if tag:
            self.writer.line(f"</{tag}>")
        self.state.open_block = Block.NONE

    def start_block(self, block: Block, template: str, *values: str) -> None:
        """Close whatever is open and start ``block`` with the given markup."""
        self.close_block()
        self.writer.format(template, *values)
        self.state.open_block = block

    # -- indentation -------------------------------------------------------

    def push_indent(self, length: str) -> None:
        self.close_block()
        self.writer.format('    <div style="margin-left: %s;">\n', length)
        self.state.indent_depth += 1

    def pop_indent(self) -> bool:
        """Close one indentation wrapper; return False when none is open."""
        if self.state.indent_depth <= 0:
            return False
        self.close_block()
        self.writer.line("    </div>")
        self.state.indent_depth -= 1
        return True

    # -- headings ----------------------------------------------------------

    def heading_level(self, level: HeadingLevel) -> int:
        """Return the HTML heading rank, shifted down when a chapter is set."""
        return int(level) + (2 if self.config.chapter else 1)

    def heading(self, level: HeadingLevel, text: str) -> str:
        """Write a heading and return its anchor."""
        state = self.state
        rank = self.heading_level(level)
        title = text if level is HeadingLevel.TOPIC else capitalize_heading(text)

        self.close_block()

        if level is HeadingLevel.TOPIC:
            state.topic_anchor = html_anchor(text)
            anchor = state.topic_anchor
        elif level is HeadingLevel.SECTION:
            state.section_anchor = html_anchor(text)
            anchor = join_anchor(state.topic_anchor, state.section_anchor)
        else:
            anchor = join_anchor(state.topic_anchor, state.section_anchor, html_anchor(text))

        self.writer.format(f'    <h{rank} id="%s">', anchor)
        self.inline.render(title, in_heading=True)
        self.close_font()
        self.writer.line(f"</h{rank}>")
        return anchor

    # -- header and footer -------------------------------------------------

    def _read_stylesheet(self, css: str) -> str:
        """Return the stylesheet text exactly as stored, line endings included."""
        try:
            with open(css, encoding="utf-8", newline="") as handle:
                return handle.read()
        except OSError as exc:
            msg = f"{css}: {exc.strerror or exc}"
            raise StylesheetError(msg) from exc
        except UnicodeDecodeError as exc:
            msg = f"{css}: not a UTF-8 stylesheet ({exc.reason})"
            raise StylesheetError(msg) from exc

    def write_header(self, topic: str | None = None) -> None:
        """Write the document prologue once per run."""
        if self.state.header_written:
            return

        config = self.config
        writer = self.writer
        stylesheet = None
        if config.css and not config.css_is_url:
            stylesheet = self._read_stylesheet(config.css)

        self.state.header_written = True
        logger.debug("Writing HTML header for %s", topic or DEFAULT_TITLE)

        writer.line("<!DOCTYPE html>")
        writer.line("<html>")
        writer.line("  <head>")
        if config.css_is_url:
            writer.format('    <link rel="stylesheet" type="text/css" href="%s">\n', config.css)
        elif stylesheet is not None:
            writer.line("    <style><!--")
            writer.write(stylesheet)
            writer.line("--></style>")

        if config.author:
            writer.format('    <meta name="author" content="%s">\n', config.author)
        if config.copyright:
            writer.format('    <meta name="copyright" content="%s">\n', config.copyright)
        writer.format('    <meta name="creator" content="mantohtml v%s">\n', get_version())
        if config.subject:
            writer.format('    <meta name="subject" content="%s">\n', config.subject)
        writer.format("    <title>%s</title>\n", config.title or topic or DEFAULT_TITLE)
        writer.line("  </head>")
        writer.line("  <body>")
        if config.chapter:
            writer.format(
                '    <h1 id="%s">%s</h1>\n', html_anchor(config.chapter), config.chapter
            )

    def write_footer(self) -> bool:
        """Close the document; return False when no header was ever written."""
        if not self.state.header_written:
            return False

        self.close_block()
        if self.state.indent_depth:
            self.warn(
                f"Unbalanced indentation ({self.state.indent_depth} open) at end of document."
            )
        self.writer.line("  </body>")
        self.writer.line("</html>")
        self.state.header_written = False
        return True


__all__ = ["HtmlDocument"]
