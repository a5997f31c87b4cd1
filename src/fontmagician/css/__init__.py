"""Stylesheet access built on tinycss2."""

from __future__ import annotations

from .stylesheet import Stylesheet, declaration_value
from .values import first_font_family, safely_quoted, unquote


__all__ = [
    "Stylesheet",
    "declaration_value",
    "first_font_family",
    "safely_quoted",
    "unquote",
]
