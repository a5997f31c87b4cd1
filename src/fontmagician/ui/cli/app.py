"""Typer application wiring for the fontmagician CLI."""

from __future__ import annotations

import logging

import typer

from fontmagician.core.exceptions import exception_hint

from ._options import DebugOption, VerboseOption
from .commands import families, process, resolve
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Generate @font-face rules for the font families a stylesheet uses.",
    context_settings={"help_option_names": ["--help", "-h"]},
    no_args_is_help=True,
)


def _configure_logging(verbosity: int) -> None:
    if verbosity < 2:
        return
    from rich.logging import RichHandler

    package_logger = logging.getLogger("fontmagician")
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=get_cli_state().err_console, show_path=False)
        )
    package_logger.setLevel(logging.DEBUG)


@app.callback()
def configure(
    ctx: typer.Context,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Generate @font-face rules for the font families a stylesheet uses."""
    set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    _configure_logging(verbose)


app.command()(process)
app.command()(resolve)
app.command()(families)


def _print_traceback(exc: BaseException) -> None:
    from rich.traceback import Traceback

    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main() -> None:
    """Console script entry point.

    Unexpected failures exit with status 1 and a one line summary, or with the
    full Rich traceback under ``--debug``. ``Ctrl+C`` is reported the same way.
    """
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.", exception=exc)
        raise typer.Exit(code=130) from exc
    except Exception as exc:  # pragma: no cover - last resort for unexpected bugs
        if debug_enabled():
            _print_traceback(exc)
        else:
            emit_error(exception_hint(exc) or type(exc).__name__, exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
