"""Verbosity and console state shared by the CLI commands."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, TextIO

import click
import typer

from fontmagician.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "current_cli_state",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "set_cli_state",
]


def _console_for(cached: Console | None, stream: TextIO, **options: object) -> Console:
    from rich.console import Console

    # CliRunner swaps the standard streams between invocations.
    if cached is not None and cached.file is stream:
        return cached
    return Console(file=stream, **options)


@dataclass(slots=True)
class CLIState:
    """Options set by the global ``-v`` and ``--debug`` flags."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        self._console = _console_for(self._console, sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        self._err_console = _console_for(self._err_console, sys.stderr, highlight=False)
        return self._err_console


_CURRENT: ContextVar[CLIState | None] = ContextVar("fontmagician_cli_state", default=None)


def current_cli_state() -> CLIState | None:
    """Return the active state, or ``None`` outside a CLI invocation."""
    return _CURRENT.get()


def get_cli_state(ctx: typer.Context | click.Context | None = None) -> CLIState:
    """Return the state attached to the click context chain, creating it if needed."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is None:
        state = _CURRENT.get()
        if state is None:
            state = CLIState()
            _CURRENT.set(state)
        return state

    root = ctx.find_root()
    if not isinstance(root.obj, CLIState):
        root.obj = CLIState()
    _CURRENT.set(root.obj)
    return root.obj


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _report(level: str, style: str, message: str, exception: BaseException | None) -> None:
    from rich.text import Text

    state = get_cli_state()
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        # First line of every message in the cause chain not already shown.
        details = [line for line in exception_messages(exception) if line not in message]
        if state.verbosity < 2:
            details = details[:1]
        for line in details:
            text.append(f"\n  {line}", style="dim")
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    _report("warning", "yellow", message, exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    _report("error", "red", message, exception)


def debug_enabled() -> bool:
    """Whether ``--debug`` asked for full tracebacks."""
    state = _CURRENT.get()
    return bool(state and state.show_tracebacks)
