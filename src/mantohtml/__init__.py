"""Primary public API for mantohtml."""

from __future__ import annotations

from mantohtml.core.config import DocumentConfig
from mantohtml.core.converter import (
    ConversionSession,
    PageConverter,
    convert_documents,
    convert_string,
)
from mantohtml.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    SourceLocation,
)
from mantohtml.core.exceptions import (
    FormatSequenceError,
    ManToHtmlError,
    StylesheetError,
    TopicHeadingError,
)
from mantohtml.core.rules import MacroKind, MacroRegistry, default_registry, macro
from mantohtml.version import get_version


__version__ = get_version()

__all__ = [
    "ConversionSession",
    "DiagnosticEmitter",
    "DocumentConfig",
    "FormatSequenceError",
    "LoggingEmitter",
    "MacroKind",
    "MacroRegistry",
    "ManToHtmlError",
    "NullEmitter",
    "PageConverter",
    "SourceLocation",
    "StylesheetError",
    "TopicHeadingError",
    "__version__",
    "convert_documents",
    "convert_string",
    "default_registry",
    "get_version",
    "macro",
]
