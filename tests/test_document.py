from __future__ import annotations

import io
from pathlib import Path

import pytest

from mantohtml.core.config import DocumentConfig
from mantohtml.core.document import HtmlDocument
from mantohtml.core.exceptions import StylesheetError
from mantohtml.core.state import Block, Font, HeadingLevel
from mantohtml.core.writer import HtmlWriter
from mantohtml.version import get_version


def _document(**options: str) -> tuple[HtmlDocument, io.StringIO]:
    buffer = io.StringIO()
    return HtmlDocument(DocumentConfig(**options), HtmlWriter(buffer)), buffer


def test_minimal_header() -> None:
    document, buffer = _document()
    document.write_header("LS(1)")
    assert buffer.getvalue() == (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        f'    <meta name="creator" content="mantohtml v{get_version()}">\n'
        "    <title>LS(1)</title>\n"
        "  </head>\n"
        "  <body>\n"
    )
    assert document.state.header_written is True


def test_header_is_written_once() -> None:
    document, buffer = _document()
    document.write_header("A(1)")
    size = len(buffer.getvalue())
    document.write_header("B(1)")
    assert len(buffer.getvalue()) == size


def test_header_metadata_is_escaped() -> None:
    document, buffer = _document(
        author='Jane "JD" Doe',
        copyright="Copyright & Sons",
        subject="Tools",
        title="Manual <1>",
        css="https://example.com/man.css",
        chapter="User Commands",
    )
    document.write_header("LS(1)")
    html = buffer.getvalue()
    assert '<link rel="stylesheet" type="text/css" href="https://example.com/man.css">' in html
    assert '<meta name="author" content="Jane &quot;JD&quot; Doe">' in html
    assert '<meta name="copyright" content="Copyright &amp; Sons">' in html
    assert '<meta name="subject" content="Tools">' in html
    assert "<title>Manual &lt;1></title>" in html
    assert html.endswith('  <body>\n    <h1 id="user-commands">User Commands</h1>\n')


def test_header_title_falls_back_to_documentation() -> None:
    document, buffer = _document()
    document.write_header()
    assert "<title>Documentation</title>" in buffer.getvalue()


def test_stylesheet_file_is_inlined(tmp_path: Path) -> None:
    css = tmp_path / "style.css"
    css.write_text("body { color: red; }\n", encoding="utf-8")
    document, buffer = _document(css=str(css))
    document.write_header("LS(1)")
    assert "    <style><!--\nbody { color: red; }\n--></style>\n" in buffer.getvalue()


def test_stylesheet_line_endings_are_kept(tmp_path: Path) -> None:
    css = tmp_path / "dos.css"
    css.write_bytes(b"p {\r\n  margin: 0;\r\n}\r\n")
    document, buffer = _document(css=str(css))
    document.write_header("LS(1)")
    assert "<style><!--\np {\r\n  margin: 0;\r\n}\r\n--></style>" in buffer.getvalue()


def test_undecodable_stylesheet_is_fatal(tmp_path: Path) -> None:
    css = tmp_path / "latin.css"
    css.write_bytes(b"/* caf\xe9 */\n")
    document, _ = _document(css=str(css))
    with pytest.raises(StylesheetError, match="latin.css"):
        document.write_header("LS(1)")


def test_missing_stylesheet_is_fatal(tmp_path: Path) -> None:
    document, buffer = _document(css=str(tmp_path / "missing.css"))
    with pytest.raises(StylesheetError, match="missing.css"):
        document.write_header("LS(1)")
    assert buffer.getvalue() == ""
    assert document.state.header_written is False


def test_heading_levels_shift_with_chapter() -> None:
    plain, _ = _document()
    chaptered, _ = _document(chapter="Commands")
    assert [plain.heading_level(level) for level in HeadingLevel] == [1, 2, 3]
    assert [chaptered.heading_level(level) for level in HeadingLevel] == [2, 3, 4]


def test_heading_anchors_are_hierarchical() -> None:
    document, buffer = _document()
    assert document.heading(HeadingLevel.TOPIC, "LS(1)") == "ls-1"
    assert document.heading(HeadingLevel.SECTION, "SEE ALSO") == "ls-1.see-also"
    assert document.heading(HeadingLevel.SUBSECTION, "more info") == "ls-1.see-also.more-info"
    assert buffer.getvalue() == (
        '    <h1 id="ls-1">LS(1)</h1>\n'
        '    <h2 id="ls-1.see-also">See Also</h2>\n'
        '    <h3 id="ls-1.see-also.more-info">More Info</h3>\n'
    )


def test_close_block_keeps_fonts_inside_the_link() -> None:
    document, buffer = _document()
    document.ensure_paragraph()
    document.set_font(Font.BOLD)
    document.open_link("https://example.com")
    document.close_block()
    assert buffer.getvalue() == (
        '<p><strong></strong><a href="https://example.com"><strong></strong></a>\n</p>\n'
    )
    state = document.state
    assert (state.open_block, state.font, state.open_link) == (Block.NONE, Font.REGULAR, False)


def test_font_opened_inside_link_closes_before_anchor() -> None:
    document, buffer = _document()
    document.open_link("https://e.com")
    document.inline.render("link \\fBtext")
    document.close_block()
    assert buffer.getvalue() == '<p><a href="https://e.com">link <strong>text</strong></a>\n</p>\n'


def test_close_link_can_reopen_font_after_anchor() -> None:
    document, buffer = _document()
    document.open_link("x")
    document.set_font(Font.ITALIC)
    document.close_link(keep_font=True)
    assert buffer.getvalue() == '<p><a href="x"><em></em></a>\n<em>'
    assert document.state.font is Font.ITALIC


def test_indentation_wrappers() -> None:
    document, buffer = _document()
    document.ensure_paragraph()
    document.push_indent("0.5in")
    assert document.pop_indent() is True
    assert document.pop_indent() is False
    assert buffer.getvalue() == '<p></p>\n    <div style="margin-left: 0.5in;">\n    </div>\n'


def test_footer_requires_header() -> None:
    document, buffer = _document()
    assert document.write_footer() is False
    assert buffer.getvalue() == ""


def test_footer_closes_open_elements() -> None:
    document, buffer = _document()
    document.write_header("A(1)")
    document.open_link("x")
    document.write_footer()
    assert buffer.getvalue().endswith('<p><a href="x"></a>\n</p>\n  </body>\n</html>\n')
    assert document.state.header_written is False
