"""Cross-references between man pages converted side by side."""

from __future__ import annotations

import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def section_of(token: str) -> str | None:
    """Return ``1`` for tokens such as ``(1)`` or ``(1),``; otherwise ``None``."""
    if len(token) < 2 or token[0] != "(" or not "0" <= token[1] <= "9":
        return None
    end = token.find(")")
    if end < 0:
        return None
    return token[1:end]


def reference_source(base_path: Path, name: str, section: str) -> Path:
    """Return the sibling source file a ``name(section)`` reference points at."""
    return base_path / f"{name}.{section}"


def reference_target(name: str, section: str) -> str:
    """Return the HTML file the link is expected to reach."""
    return f"{name}.{section}.html"


def resolve_reference(base_path: Path, name: str, token: str) -> str | None:
    """Return the link target for ``name`` followed by ``token``.

    A link is produced only when ``token`` looks like a section reference and
    ``base_path/name.section`` exists. Filesystem errors count as "not found".
    """
    section = section_of(token)
    if section is None or not name:
        return None

    source = reference_source(base_path, name, section)
    try:
        found = source.exists()
    except OSError:
        logger.debug("Cross-reference check failed for %s", source, exc_info=True)
        found = False
    if not found:
        return None
    return reference_target(name, section)


__all__ = ["reference_source", "reference_target", "resolve_reference", "section_of"]
