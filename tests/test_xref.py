from __future__ import annotations

from pathlib import Path

import pytest

from mantohtml.core.xref import reference_source, reference_target, resolve_reference, section_of


@pytest.mark.parametrize(
    ("token", "expected"),
    [("(1)", "1"), ("(8),", "8"), ("(3p)", "3p"), ("(x)", None), ("1", None), ("(1", None)],
)
def test_section_of(token: str, expected: str | None) -> None:
    assert section_of(token) == expected


def test_reference_paths() -> None:
    assert reference_source(Path("man"), "ls", "1") == Path("man/ls.1")
    assert reference_target("ls", "1") == "ls.1.html"


def test_resolve_reference_requires_sibling_source(tmp_path: Path) -> None:
    (tmp_path / "ls.1").write_text(".TH LS 1\n", encoding="utf-8")
    assert resolve_reference(tmp_path, "ls", "(1)") == "ls.1.html"
    assert resolve_reference(tmp_path, "cp", "(1)") is None
    assert resolve_reference(tmp_path, "ls", "(8)") is None
    assert resolve_reference(tmp_path, "ls", "text") is None
