"""Configuration record consumed by the conversion session.

DocumentConfig

`author` (`str | None`)
: Value of the ``author`` meta tag. Omitted from the header when unset.

`chapter` (`str | None`)
: Top-level heading written once after ``<body>``. When set, topic,
  section, and subsection headings shift down one level (``h2``-``h4``).

`copyright` (`str | None`)
: Value of the ``copyright`` meta tag.

`css` (`str | None`)
: Stylesheet reference. ``http://`` and ``https://`` values are linked; any
  other value is treated as a filesystem path whose contents are inlined.

`subject` (`str | None`)
: Value of the ``subject`` meta tag.

`title` (`str | None`)
: Document ``<title>``. Falls back to the first ``.TH`` topic, then to
  ``Documentation``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


DEFAULT_TITLE = "Documentation"


class DocumentConfig(BaseModel):
    """Per-run metadata supplied by the driver."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    author: str | None = None
    chapter: str | None = None
    copyright: str | None = None
    css: str | None = None
    subject: str | None = None
    title: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_as_none(cls, value: object) -> object:
        """Treat empty strings as absent values."""
        if isinstance(value, str) and not value:
            return None
        return value

    @property
    def css_is_url(self) -> bool:
        """Return True when the stylesheet must be linked rather than inlined."""
        return bool(self.css) and self.css.startswith(("http://", "https://"))


__all__ = ["DEFAULT_TITLE", "DocumentConfig"]
