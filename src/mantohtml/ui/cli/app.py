"""Typer application and console script entry point for mantohtml."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from mantohtml.core.exceptions import exception_hint
from mantohtml.ui.cli.commands.convert import convert

from .state import emit_error, get_cli_state


app = typer.Typer(
    help="Convert man pages into a single HTML document.",
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
)
app.command()(convert)


def _report_crash(exc: BaseException) -> None:
    """Describe an unexpected failure, as a rich traceback with ``--debug``."""
    state = get_cli_state()
    if not state.show_tracebacks:
        emit_error(exception_hint(exc) or type(exc).__name__, exception=exc)
        return

    from rich.traceback import Traceback

    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Run the ``mantohtml`` command; errors that escape click exit with status 1."""
    try:
        app(args=list(argv) if argv is not None else None, prog_name="mantohtml")
    except Exception as exc:  # noqa: BLE001
        _report_crash(exc)
        raise SystemExit(1) from None


__all__ = ["app", "main"]
