"""Mutable session state threaded through every conversion step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path


class Block(Enum):
    """Top-level HTML containers; at most one is open at a time."""

    NONE = None
    PARAGRAPH = "p"
    LIST = "ul"
    PREFORMATTED = "pre"

    @property
    def tag(self) -> str | None:
        """Return the element name closed when the block ends."""
        return self.value


class Font(Enum):
    """Inline fonts and the element that renders them."""

    REGULAR = (None, None)
    BOLD = ("<strong>", "</strong>")
    ITALIC = ("<em>", "</em>")
    SMALL = ("<small>", "</small>")
    SMALL_BOLD = ('<small style="font-weight: bold;">', "</small>")
    MONOSPACE = ("<code>", "</code>")

    @property
    def open_tag(self) -> str | None:
        return self.value[0]

    @property
    def close_tag(self) -> str | None:
        return self.value[1]


class HeadingLevel(IntEnum):
    """Heading hierarchy produced by ``.TH``, ``.SH``, and ``.SS``."""

    TOPIC = 0
    SECTION = 1
    SUBSECTION = 2


@dataclass(slots=True)
class SessionState:
    """State shared by all files converted in one run."""

    header_written: bool = False
    base_path: Path = Path()
    open_block: Block = Block.NONE
    open_link: bool = False
    indent_depth: int = 0
    font: Font = Font.REGULAR
    topic_anchor: str = ""
    section_anchor: str = ""

    def reset_for_file(self, path: Path) -> None:
        """Point cross-reference lookups at the directory of ``path``."""
        self.base_path = path.parent


__all__ = ["Block", "Font", "HeadingLevel", "SessionState"]
