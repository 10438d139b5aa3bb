"""Implementation of the ``mantohtml`` command."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import contextlib
from pathlib import Path
import sys
from typing import Any, TextIO

import click
from rich import box
from rich.table import Table
import typer

from mantohtml.core.config import DocumentConfig
from mantohtml.core.converter import ConversionSession
from mantohtml.core.exceptions import ManToHtmlError
from mantohtml.core.rules import default_registry
from mantohtml.version import get_version

from .._options import (
    AuthorOption,
    ChapterOption,
    CopyrightOption,
    CssOption,
    DebugOption,
    InputPathArgument,
    ListMacrosOption,
    OutputPathOption,
    SubjectOption,
    TitleOption,
    VerboseOption,
    VersionOption,
)
from ..diagnostics import CliEmitter
from ..state import CLIState, emit_error, set_cli_state


def present_macros(state: CLIState, macros: Sequence[Mapping[str, Any]]) -> None:
    """Render the table of supported macros."""
    table = Table(title="Supported Macros", box=box.SIMPLE)
    for column in ("Macro", "Kind", "Handler", "Needs .TH"):
        table.add_column(column)
    for entry in macros:
        table.add_row(
            str(entry["macro"]),
            str(entry["kind"]),
            str(entry["handler"]),
            "yes" if entry["requires_topic"] else "no",
        )
    state.console.print(table)


@contextlib.contextmanager
def _open_output(path: Path | None) -> Iterator[TextIO]:
    if path is None:
        yield sys.stdout
        return
    try:
        handle = path.open("w", encoding="utf-8", newline="")
    except OSError as exc:
        emit_error(f"{path}: {exc.strerror or exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    with handle:
        yield handle


def _usage_exit(ctx: click.Context | None) -> typer.Exit:
    """Print the usage line on stderr, keeping stdout for HTML."""
    if ctx is not None:
        typer.echo(ctx.get_usage(), err=True)
        typer.echo(f"Try '{ctx.command_path} --help' for help.", err=True)
    return typer.Exit(code=1)


def convert(
    inputs: InputPathArgument = None,
    author: AuthorOption = None,
    chapter: ChapterOption = None,
    copyright: CopyrightOption = None,  # noqa: A002
    css: CssOption = None,
    subject: SubjectOption = None,
    title: TitleOption = None,
    output: OutputPathOption = None,
    version: VersionOption = False,
    list_macros: ListMacrosOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Convert man pages into a single HTML document."""

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)

    if typer_ctx is not None and typer_ctx.resilient_parsing:
        return

    if version:
        typer.echo(get_version())
        raise typer.Exit()

    if list_macros:
        present_macros(state, default_registry().describe())
        raise typer.Exit()

    document_paths = list(inputs or [])
    if not document_paths:
        raise _usage_exit(ctx)

    config = DocumentConfig(
        author=author,
        chapter=chapter,
        copyright=copyright,
        css=css,
        subject=subject,
        title=title,
    )
    emitter = CliEmitter()

    with _open_output(output) as stream:
        session = ConversionSession(config, stream, emitter=emitter)
        try:
            for path in document_paths:
                session.convert_file(path)
            finished = session.finish()
        except ManToHtmlError as exc:
            if state.show_tracebacks:
                raise
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc

    if not finished:
        raise _usage_exit(ctx)


__all__ = ["convert", "present_macros"]
