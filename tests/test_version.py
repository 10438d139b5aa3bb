from __future__ import annotations

import mantohtml
from mantohtml.version import get_version


def test_version_is_exposed() -> None:
    version = get_version()
    assert isinstance(version, str)
    assert version
    assert mantohtml.__version__ == version
