"""Custom exception hierarchy for the font resolution pipeline."""

from __future__ import annotations

from collections.abc import Iterable


class FontMagicianError(RuntimeError):
    """Base exception for font resolution failures."""


class ConfigurationError(FontMagicianError):
    """Raised when the plugin options cannot be normalised."""


class CatalogError(FontMagicianError):
    """Raised when a font catalog payload does not have the expected shape."""


class StylesheetError(FontMagicianError):
    """Raised when a stylesheet cannot be parsed or rewritten."""


class FontNotFoundError(FontMagicianError, LookupError):
    """Raised by a font source when it does not know the requested family."""

    def __init__(self, family: str, source: str | None = None) -> None:
        self.family = family
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Font family '{family}' not found{where}.")


class SourceResolutionError(FontMagicianError):
    """Raised when every raced source failed to resolve a family."""

    def __init__(self, family: str, errors: Iterable[BaseException] = ()) -> None:
        self.family = family
        self.errors = tuple(errors)
        super().__init__(
            f"No source could resolve '{family}' ({len(self.errors)} attempt(s) failed)."
        )


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "CatalogError",
    "ConfigurationError",
    "FontMagicianError",
    "FontNotFoundError",
    "SourceResolutionError",
    "StylesheetError",
    "exception_hint",
    "exception_messages",
]
