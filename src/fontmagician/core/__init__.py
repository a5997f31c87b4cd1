"""Configuration and error types shared by the font pass."""

from __future__ import annotations

from .config import MagicianConfig, VariantOverride, build_config, load_config
from .exceptions import (
    CatalogError,
    ConfigurationError,
    FontMagicianError,
    FontNotFoundError,
    SourceResolutionError,
    StylesheetError,
)


__all__ = [
    "CatalogError",
    "ConfigurationError",
    "FontMagicianError",
    "FontNotFoundError",
    "MagicianConfig",
    "SourceResolutionError",
    "StylesheetError",
    "VariantOverride",
    "build_config",
    "load_config",
]
