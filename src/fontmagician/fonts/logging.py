"""Diagnostics sink shared by the pass, the font cache and the loader emitter.

Every message goes to the ``fontmagician`` standard logger. Under the CLI the
message is also printed on the stderr console: warnings and notices always,
debug lines only with ``-v``. Library callers see the logging records only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any


_LOGGER = logging.getLogger("fontmagician")


def _cli_state() -> Any:
    # Imported lazily: the CLI package imports the pass, which imports this module.
    from fontmagician.ui.cli.state import current_cli_state

    return current_cli_state()


@dataclass(slots=True)
class FontPipelineLogger:
    """Route pass diagnostics to ``logging`` and, under the CLI, to the console."""

    verbose: bool | None = None
    logger: logging.Logger = field(default=_LOGGER, repr=False)

    def _verbosity(self) -> int:
        if self.verbose is not None:
            return int(self.verbose)
        state = _cli_state()
        return state.verbosity if state is not None else 0

    def _echo(self, level: str, message: str, *args: Any) -> None:
        state = _cli_state()
        # From -vv on, the Rich logging handler prints the records instead.
        if state is None or state.verbosity >= 2:
            return
        text = message % args if args else message
        if level == "warning":
            from fontmagician.ui.cli.state import emit_warning

            emit_warning(text)
        else:
            state.err_console.print(text, markup=False)

    def notice(self, message: str, *args: Any) -> None:
        """User facing progress line (where an output landed, what was written)."""
        self.logger.info(message, *args)
        self._echo("notice", message, *args)

    info = notice

    def warning(self, message: str, *args: Any) -> None:
        self.logger.warning(message, *args)
        self._echo("warning", message, *args)

    def debug(self, message: str, *args: Any) -> None:
        self.logger.debug(message, *args)
        if self._verbosity() >= 1:
            self._echo("debug", message, *args)


__all__ = ["FontPipelineLogger"]
