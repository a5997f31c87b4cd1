"""Generate ``@font-face`` rules for the font families a stylesheet uses."""

from __future__ import annotations

from .api import process_css, process_css_async
from .core.config import MagicianConfig, build_config, load_config
from .core.exceptions import FontMagicianError
from .css.stylesheet import Stylesheet
from .plugin import FontMagician, PassReport


__version__ = "0.1.0"

__all__ = [
    "FontMagician",
    "FontMagicianError",
    "MagicianConfig",
    "PassReport",
    "Stylesheet",
    "__version__",
    "build_config",
    "load_config",
    "process_css",
    "process_css_async",
]
