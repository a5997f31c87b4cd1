"""Font catalog model shared by every foundry.

A catalog maps family names to a :class:`FontDescriptor`, which is a
style x weight matrix of :class:`SourceSet` entries. Payloads come from JSON
package data, YAML configuration, hosted directory scans and the async cache,
so parsing is tolerant about the outer shape but strict about the leaves.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from fontmagician.core.exceptions import CatalogError
from fontmagician.fonts.utils import dedupe, normalize_family


_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class SourceSet:
    """Local names and remote URLs available for one variant."""

    local: tuple[str, ...] = ()
    url: Mapping[str, str] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        object.__setattr__(self, "local", dedupe(self.local))
        object.__setattr__(self, "url", MappingProxyType(dict(self.url)))

    def __bool__(self) -> bool:
        return bool(self.local or self.url)

    @classmethod
    def from_payload(cls, payload: Any) -> SourceSet:
        if not isinstance(payload, Mapping):
            raise CatalogError(f"Source set must be a mapping, got {type(payload).__name__}.")
        local = payload.get("local") or ()
        if isinstance(local, str):
            local = (local,)
        urls = payload.get("url") or {}
        if not isinstance(urls, Mapping):
            raise CatalogError("Source set 'url' entry must map formats to URLs.")
        return cls(
            local=tuple(str(name) for name in local),
            url={str(fmt).lower(): str(value) for fmt, value in urls.items() if value},
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.local:
            payload["local"] = list(self.local)
        if self.url:
            payload["url"] = dict(self.url)
        return payload


def _is_weight(key: Any) -> bool:
    return str(key).strip().isdigit()


def _transpose(matrix: Mapping[str, Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    transposed: dict[str, dict[str, Any]] = {}
    for weight, styles in matrix.items():
        if not isinstance(styles, Mapping):
            raise CatalogError(f"Weight '{weight}' must map styles to source sets.")
        for style, sources in styles.items():
            transposed.setdefault(str(style), {})[str(weight)] = sources
    return transposed


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    """Style -> weight -> :class:`SourceSet` matrix for one family.

    Iteration order is the insertion order of the payload, which is the order
    variants are emitted in when no override is configured.
    """

    variants: Mapping[str, Mapping[str, SourceSet]] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        frozen = {
            str(style): MappingProxyType({str(weight): src for weight, src in weights.items()})
            for style, weights in self.variants.items()
        }
        object.__setattr__(self, "variants", MappingProxyType(frozen))

    def __iter__(self) -> Iterator[tuple[str, str, SourceSet]]:
        for style, weights in self.variants.items():
            for weight, sources in weights.items():
                yield style, weight, sources

    def __len__(self) -> int:
        return sum(len(weights) for weights in self.variants.values())

    def get(self, style: str, weight: str) -> SourceSet | None:
        weights = self.variants.get(style)
        if weights is None:
            return None
        return weights.get(str(weight))

    @classmethod
    def from_payload(cls, payload: Any) -> FontDescriptor:
        """Build a descriptor from ``{"variants": {...}}`` or a bare matrix.

        Weight-major matrices (``{"400": {"normal": {...}}}``) are transposed
        into the style-major layout.
        """
        if not isinstance(payload, Mapping):
            raise CatalogError(f"Font descriptor must be a mapping, got {type(payload).__name__}.")
        matrix = payload.get("variants", payload)
        if not isinstance(matrix, Mapping):
            raise CatalogError("Font descriptor 'variants' must be a mapping.")
        if matrix and all(_is_weight(key) for key in matrix):
            matrix = _transpose(matrix)

        variants: dict[str, dict[str, SourceSet]] = {}
        for style, weights in matrix.items():
            if not isinstance(weights, Mapping):
                raise CatalogError(f"Style '{style}' must map weights to source sets.")
            bucket = variants.setdefault(str(style), {})
            for weight, sources in weights.items():
                bucket[str(weight).strip()] = SourceSet.from_payload(sources)
        return cls(variants=variants)

    def to_payload(self) -> dict[str, Any]:
        return {
            "variants": {
                style: {weight: sources.to_payload() for weight, sources in weights.items()}
                for style, weights in self.variants.items()
            }
        }


@dataclass(frozen=True, slots=True)
class FontCatalog:
    """Named family -> descriptor mapping provided by one foundry."""

    name: str
    families: Mapping[str, FontDescriptor] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        normalized = {normalize_family(key): value for key, value in self.families.items()}
        object.__setattr__(self, "families", MappingProxyType(normalized))

    def __contains__(self, family: object) -> bool:
        return isinstance(family, str) and normalize_family(family) in self.families

    def __iter__(self) -> Iterator[str]:
        return iter(self.families)

    def __len__(self) -> int:
        return len(self.families)

    def get(self, family: str) -> FontDescriptor | None:
        return self.families.get(normalize_family(family))


def parse_catalog(payload: Any, *, name: str = "custom") -> FontCatalog:
    """Parse a ``{family: descriptor}`` payload into a :class:`FontCatalog`."""
    if payload is None:
        return FontCatalog(name=name)
    if not isinstance(payload, Mapping):
        raise CatalogError(f"Catalog '{name}' must be a mapping of families.")
    families: dict[str, FontDescriptor] = {}
    for family, descriptor in payload.items():
        try:
            families[str(family)] = FontDescriptor.from_payload(descriptor)
        except CatalogError as exc:
            raise CatalogError(f"Invalid entry '{family}' in catalog '{name}': {exc}") from exc
    return FontCatalog(name=name, families=families)


def load_catalog(path: Path, *, name: str | None = None) -> FontCatalog:
    """Read a JSON or YAML catalog file."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Unable to read catalog file '{path}'.") from exc
    return parse_catalog(payload, name=name or path.stem)


def descriptor_to_payload(descriptor: FontDescriptor) -> dict[str, Any]:
    """Serialise a descriptor into the JSON payload understood by the parser."""
    return descriptor.to_payload()


__all__ = [
    "FontCatalog",
    "FontDescriptor",
    "SourceSet",
    "descriptor_to_payload",
    "load_catalog",
    "parse_catalog",
]
