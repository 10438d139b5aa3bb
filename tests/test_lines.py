from __future__ import annotations

import io

from mantohtml.core.lines import LineReader


def _read_all(text: str, **kwargs: int) -> list[tuple[str, int]]:
    reader = LineReader(io.StringIO(text), **kwargs)
    return [(line, reader.line_number) for line in reader]


def test_plain_lines_are_returned_without_newlines() -> None:
    assert _read_all("one\ntwo\n") == [("one", 1), ("two", 2)]


def test_backslash_newline_joins_physical_lines() -> None:
    assert _read_all("first \\\nsecond\nthird\n") == [("first second", 2), ("third", 3)]


def test_comment_is_stripped_to_end_of_line() -> None:
    assert _read_all('text \\" a comment\n.\\" whole line\n') == [("text ", 1), (".", 2)]


def test_other_escapes_are_kept_verbatim() -> None:
    assert _read_all("\\fBbold\\fR \\(bu \\\\\n") == [("\\fBbold\\fR \\(bu \\\\", 1)]


def test_unterminated_last_line_is_returned() -> None:
    assert _read_all("one\ntail") == [("one", 1), ("tail", 2)]


def test_empty_lines_are_preserved() -> None:
    assert _read_all("\n\nx\n") == [("", 1), ("", 2), ("x", 3)]


def test_exhausted_stream_returns_none() -> None:
    reader = LineReader(io.StringIO(""))
    assert reader.read() is None
    assert reader.line_number == 0


def test_long_lines_are_truncated() -> None:
    assert _read_all("abcdef\n", max_length=3) == [("abc", 1)]
