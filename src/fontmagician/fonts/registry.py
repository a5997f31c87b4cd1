"""Foundry registry: prepackaged catalogs and the per-pass foundry set."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from importlib import resources
import json
from pathlib import Path
from types import MappingProxyType

from fontmagician.core.config import MagicianConfig
from fontmagician.core.exceptions import CatalogError
from fontmagician.fonts.catalog import FontCatalog, load_catalog, parse_catalog
from fontmagician.fonts.hosted import scan_hosted_directory


_DATA_PACKAGE = "fontmagician.fonts.data"
PACKAGED_FOUNDRIES: tuple[str, ...] = ("bootstrap", "google")

_PACKAGED_CACHE: dict[str, FontCatalog] = {}


def _resource_text(name: str) -> str:
    resource = resources.files(_DATA_PACKAGE) / name
    return resource.read_text(encoding="utf-8")


def packaged_catalog(name: str) -> FontCatalog:
    """Return one of the catalogs shipped with the package."""
    if name not in PACKAGED_FOUNDRIES:
        raise CatalogError(f"Unknown packaged foundry '{name}'.")
    cached = _PACKAGED_CACHE.get(name)
    if cached is None:
        try:
            payload = json.loads(_resource_text(f"{name}.json"))
        except (OSError, ValueError) as exc:
            raise CatalogError(f"Packaged catalog '{name}' is unreadable.") from exc
        cached = parse_catalog(payload, name=name)
        _PACKAGED_CACHE[name] = cached
    return cached


@dataclass(frozen=True, slots=True)
class FoundrySet:
    """Immutable name -> catalog mapping consulted during one pass."""

    catalogs: Mapping[str, FontCatalog] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "catalogs", MappingProxyType(dict(self.catalogs)))

    def __contains__(self, name: object) -> bool:
        return name in self.catalogs

    def __iter__(self) -> Iterator[str]:
        return iter(self.catalogs)

    def get(self, name: str) -> FontCatalog | None:
        return self.catalogs.get(name)

    def known_families(self, names: Iterable[str] | None = None) -> list[tuple[str, str]]:
        """Return ``(foundry, family)`` pairs for the selected foundries."""
        selected = list(names) if names is not None else list(self.catalogs)
        pairs: list[tuple[str, str]] = []
        for name in selected:
            catalog = self.catalogs.get(name)
            if catalog is None:
                continue
            pairs.extend((name, family) for family in sorted(catalog))
        return pairs


def _custom_catalog(custom: Mapping | Path | None) -> FontCatalog:
    if isinstance(custom, Path):
        return load_catalog(custom, name="custom")
    return parse_catalog(custom or {}, name="custom")


def build_foundries(config: MagicianConfig) -> FoundrySet:
    """Materialise every foundry named in ``config.foundries``.

    Unknown names are ignored, which makes it possible to disable a foundry
    simply by leaving it out of the list.
    """
    catalogs: dict[str, FontCatalog] = {}
    for name in config.foundries:
        if name in catalogs:
            continue
        if name == "custom":
            catalogs[name] = _custom_catalog(config.custom)
        elif name == "hosted":
            if config.hosted is not None:
                catalogs[name] = scan_hosted_directory(
                    config.hosted.path, url_prefix=config.hosted.prefix
                )
        elif name in PACKAGED_FOUNDRIES:
            catalogs[name] = packaged_catalog(name)
    return FoundrySet(catalogs)


__all__ = ["PACKAGED_FOUNDRIES", "FoundrySet", "build_foundries", "packaged_catalog"]
