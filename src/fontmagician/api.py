"""Convenience entry points operating on CSS text."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fontmagician.core.config import MagicianConfig, build_config
from fontmagician.css.stylesheet import Stylesheet
from fontmagician.fonts.sources import FontSource
from fontmagician.plugin import FontMagician


def process_css(text: str, config: MagicianConfig | dict[str, Any] | None = None, **options: Any) -> str:
    """Return ``text`` with the missing ``@font-face`` rules prepended."""
    sheet = Stylesheet.parse(text)
    FontMagician(build_config(config, **options)).process(sheet)
    return sheet.serialize()


async def process_css_async(
    text: str,
    config: MagicianConfig | dict[str, Any] | None = None,
    *,
    sources: Sequence[FontSource] | None = None,
    **options: Any,
) -> str:
    """Asynchronous counterpart of :func:`process_css` racing ``sources``."""
    sheet = Stylesheet.parse(text)
    await FontMagician(build_config(config, **options), sources=sources).process_async(sheet)
    return sheet.serialize()


__all__ = ["process_css", "process_css_async"]
