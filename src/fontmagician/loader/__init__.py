"""Loader artifact emitted in asynchronous extract mode."""

from __future__ import annotations

from .emitter import LOADER_TEMPLATE, TEMPLATE_DIR, LoaderEmitter


__all__ = ["LOADER_TEMPLATE", "TEMPLATE_DIR", "LoaderEmitter"]
