from __future__ import annotations

import pytest

from mantohtml.core.tokens import iter_values, parse_value


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("word rest", ("word", "rest")),
        ("   padded   tail  ", ("padded", "tail  ")),
        ('"two words" next', ("two words", "next")),
        ('""', ("", "")),
        ('"unterminated quote', ("unterminated quote", "")),
        ("a\\ b c", ("a\\ b", "c")),
        ('"say \\"hi\\"" x', ('say \\"hi\\"', "x")),
        ("", (None, "")),
        (" \t ", (None, "")),
    ],
)
def test_parse_value(text: str, expected: tuple[str | None, str]) -> None:
    assert parse_value(text) == expected


def test_empty_quoted_value_differs_from_missing_value() -> None:
    assert parse_value('"" x')[0] == ""
    assert parse_value("   ")[0] is None


def test_iter_values_unquotes_every_argument() -> None:
    assert list(iter_values('.BR "ls" (1), and more')) == [".BR", "ls", "(1),", "and", "more"]
