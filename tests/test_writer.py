from __future__ import annotations

import io

import pytest

from mantohtml.core.exceptions import FormatSequenceError
from mantohtml.core.writer import HtmlWriter, escape_html


def test_escape_html_quotes_three_characters() -> None:
    assert escape_html('a & b < c "d" > \'e\'') == "a &amp; b &lt; c &quot;d&quot; > 'e'"


def test_format_escapes_string_insertions() -> None:
    buffer = io.StringIO()
    HtmlWriter(buffer).format('<a href="%s">%d%%</a>', 'x"<y', 42)
    assert buffer.getvalue() == '<a href="x&quot;&lt;y">42%</a>'


def test_format_rejects_unknown_sequences() -> None:
    writer = HtmlWriter(io.StringIO())
    with pytest.raises(FormatSequenceError, match="unsupported format sequence '%x'"):
        writer.format("%x", 1)


def test_line_and_escaped() -> None:
    buffer = io.StringIO()
    writer = HtmlWriter(buffer)
    writer.escaped("<tag>")
    writer.line()
    writer.line("raw <br>")
    assert buffer.getvalue() == "&lt;tag>\nraw <br>\n"
