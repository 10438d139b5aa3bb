"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
METADATA_PANEL = "Document Metadata"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        metavar="MAN-FILE...",
        help="Man page sources, converted in order into a single HTML document.",
        dir_okay=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

AuthorOption = Annotated[
    str | None,
    typer.Option("--author", help="Value of the author meta tag.", rich_help_panel=METADATA_PANEL),
]

ChapterOption = Annotated[
    str | None,
    typer.Option(
        "--chapter",
        help="Top-level heading; page headings shift down one level.",
        rich_help_panel=METADATA_PANEL,
    ),
]

CopyrightOption = Annotated[
    str | None,
    typer.Option(
        "--copyright", help="Value of the copyright meta tag.", rich_help_panel=METADATA_PANEL
    ),
]

CssOption = Annotated[
    str | None,
    typer.Option(
        "--css",
        metavar="FILENAME-OR-URL",
        help="Stylesheet to inline (file) or link (http:// or https:// URL).",
        rich_help_panel=METADATA_PANEL,
    ),
]

SubjectOption = Annotated[
    str | None,
    typer.Option(
        "--subject", help="Value of the subject meta tag.", rich_help_panel=METADATA_PANEL
    ),
]

TitleOption = Annotated[
    str | None,
    typer.Option(
        "--title",
        help="Document title; defaults to the first page topic.",
        rich_help_panel=METADATA_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the HTML document to this file instead of standard output.",
        dir_okay=False,
        writable=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VersionOption = Annotated[
    bool,
    typer.Option("--version", help="Show the version and exit.", rich_help_panel=DIAGNOSTICS_PANEL),
]

ListMacrosOption = Annotated[
    bool,
    typer.Option(
        "--list-macros",
        help="List the supported man macros and exit.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
