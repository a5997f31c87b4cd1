"""Resolve a family name against an ordered list of foundries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging

from fontmagician.fonts.catalog import FontDescriptor
from fontmagician.fonts.registry import FoundrySet
from fontmagician.fonts.utils import normalize_family


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Winning foundry and descriptor for a family."""

    family: str
    foundry: str
    descriptor: FontDescriptor


def resolve_family(
    family: str,
    aliases: Mapping[str, str] | None,
    foundry_order: Iterable[str],
    foundries: FoundrySet,
) -> Resolution | None:
    """Return the first foundry match for ``family`` (after one alias step).

    Foundries missing from ``foundries`` are skipped. Resolution is winner
    take all: later foundries are never consulted once a match is found.
    """
    key = normalize_family(family)
    target = (aliases or {}).get(key, key)
    for name in foundry_order:
        catalog = foundries.get(name)
        if catalog is None:
            continue
        descriptor = catalog.get(target)
        if descriptor is not None:
            logger.debug("Resolved %s via %s foundry", family, name)
            return Resolution(family=target, foundry=name, descriptor=descriptor)
    logger.debug("No foundry provides %s", family)
    return None


def resolve(
    family: str,
    aliases: Mapping[str, str] | None,
    foundry_order: Iterable[str],
    foundries: FoundrySet,
) -> FontDescriptor | None:
    """Descriptor-only variant of :func:`resolve_family`."""
    resolution = resolve_family(family, aliases, foundry_order, foundries)
    return resolution.descriptor if resolution else None


__all__ = ["Resolution", "resolve", "resolve_family"]
