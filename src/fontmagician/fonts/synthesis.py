"""Turn selected variants into face rule records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from fontmagician.core.config import MagicianConfig
from fontmagician.fonts.catalog import FontDescriptor
from fontmagician.fonts.formats import src_fragments
from fontmagician.fonts.utils import safely_quoted
from fontmagician.fonts.variants import VariantSpec, select_variants


@dataclass(frozen=True, slots=True)
class FaceRule:
    """A synthesised ``@font-face`` block. ``src`` is never empty."""

    family: str
    style: str
    weight: str
    src: tuple[str, ...]
    unicode_range: str | None = None
    stretch: str | None = None
    display: str | None = None

    def declarations(self) -> list[tuple[str, str]]:
        """Return ``(property, value)`` pairs in emission order.

        Optional descriptors are left out entirely when unset.
        """
        pairs = [
            ("font-family", safely_quoted(self.family)),
            ("font-style", self.style),
            ("font-weight", self.weight),
            ("src", ",".join(self.src)),
        ]
        if self.unicode_range:
            pairs.append(("unicode-range", self.unicode_range))
        if self.stretch:
            pairs.append(("font-stretch", self.stretch))
        if self.display:
            pairs.append(("font-display", self.display))
        return pairs

    def to_record(self) -> dict[str, str]:
        """Plain descriptor consumed by the loader artifact emitter."""
        return {
            "family": self.family,
            "weight": self.weight,
            "style": self.style,
            "src": ",".join(self.src),
        }


def synthesize(
    family: str,
    variant: VariantSpec,
    format_hints: Mapping[str, str] | None = None,
    display: str | None = None,
) -> FaceRule | None:
    """Build the face rule for one variant, or ``None`` without usable sources."""
    fragments = src_fragments(variant.sources, variant.formats, format_hints)
    if not fragments:
        return None
    return FaceRule(
        family=family,
        style=variant.style,
        weight=variant.weight,
        src=tuple(fragments),
        unicode_range=variant.unicode_range,
        stretch=variant.stretch,
        display=display or None,
    )


def build_face_rules(
    family: str,
    descriptor: FontDescriptor,
    config: MagicianConfig,
    *,
    resolved_family: str | None = None,
) -> list[FaceRule]:
    """Select the variants of ``descriptor`` and synthesise their rules.

    ``family`` is the name written into the rules; overrides are looked up
    under it first, then under ``resolved_family`` (the aliased name).
    """
    overrides = config.overrides_for(family)
    if overrides is None and resolved_family:
        overrides = config.overrides_for(resolved_family)
    rules: list[FaceRule] = []
    for variant in select_variants(family, descriptor, overrides, config.formats):
        rule = synthesize(family, variant, config.format_hints, config.display)
        if rule is not None:
            rules.append(rule)
    return rules


__all__ = ["FaceRule", "build_face_rules", "synthesize"]
