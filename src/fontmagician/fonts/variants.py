"""Reduce a family's style x weight matrix to the variants worth emitting."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging

from fontmagician.core.config import VariantOverride
from fontmagician.fonts.catalog import FontDescriptor, SourceSet


logger = logging.getLogger(__name__)

KNOWN_STYLES = frozenset({"normal", "italic"})
DEFAULT_STYLE = "normal"


@dataclass(frozen=True, slots=True)
class VariantSpec:
    """One (style, weight) combination selected for synthesis."""

    style: str
    weight: str
    formats: tuple[str, ...]
    sources: SourceSet
    unicode_range: str | None = None
    stretch: str | None = None


def parse_variant_key(key: str) -> tuple[str, str, str | None]:
    """Split ``"weight[ style[ stretch]]"`` into ``(weight, style, stretch)``.

    The style falls back to ``normal`` unless the second token is literally
    ``normal`` or ``italic``.
    """
    tokens = key.split()
    if not tokens:
        raise ValueError("Variant key must at least contain a weight.")
    weight = tokens[0]
    style = tokens[1] if len(tokens) > 1 and tokens[1] in KNOWN_STYLES else DEFAULT_STYLE
    stretch = tokens[2] if len(tokens) > 2 else None
    return weight, style, stretch


def select_variants(
    family: str,
    descriptor: FontDescriptor,
    overrides: Mapping[str, VariantOverride] | None,
    global_formats: Sequence[str],
) -> list[VariantSpec]:
    """Return the variants to emit for ``family``, in emission order."""
    formats = tuple(global_formats)
    if not overrides:
        return [
            VariantSpec(style=style, weight=weight, formats=formats, sources=sources)
            for style, weight, sources in descriptor
        ]

    selected: list[VariantSpec] = []
    for key, override in overrides.items():
        try:
            weight, style, stretch = parse_variant_key(key)
        except ValueError:
            logger.debug("Ignoring empty variant key for %s", family)
            continue
        sources = descriptor.get(style, weight)
        if sources is None:
            logger.debug("Variant '%s' is not available for %s; skipped", key, family)
            continue
        selected.append(
            VariantSpec(
                style=style,
                weight=weight,
                formats=override.formats or formats,
                sources=sources,
                unicode_range=override.unicode_range.upper() if override.unicode_range else None,
                stretch=stretch,
            )
        )
    return selected


__all__ = ["DEFAULT_STYLE", "KNOWN_STYLES", "VariantSpec", "parse_variant_key", "select_variants"]
