"""CLI command implementations exposed via `fontmagician.ui.cli`."""

from __future__ import annotations

from .families import families
from .process import process
from .resolve import resolve


__all__ = ["families", "process", "resolve"]
