from __future__ import annotations

import pytest

from mantohtml.core.anchors import capitalize_heading, html_anchor, join_anchor


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("LS(1)", "ls-1"),
        ("File Formats", "file-formats"),
        ("a,,  b", "a-b"),
        ("SEE ALSO", "see-also"),
        ("  Leading and trailing!  ", "leading-and-trailing"),
        ("a--b__c", "a-b-c"),
        ("v1.2", "v1.2"),
    ],
)
def test_html_anchor(text: str, expected: str) -> None:
    assert html_anchor(text) == expected


def test_join_anchor() -> None:
    assert join_anchor("ls-1", "options", "long-options") == "ls-1.options.long-options"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("SEE ALSO", "See Also"),
        ("EXIT STATUS AND THE END", "Exit Status and the End"),
        ("the a OR b", "The a or B"),
        ("options", "Options"),
    ],
)
def test_capitalize_heading(text: str, expected: str) -> None:
    assert capitalize_heading(text) == expected


def test_capitalize_heading_leaves_escapes_alone() -> None:
    assert capitalize_heading("\\fBBOLD\\fR WORD") == "\\fBBold\\fR Word"
