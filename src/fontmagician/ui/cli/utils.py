"""Helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import typer

from fontmagician.core.config import MagicianConfig, build_config, load_config


def parse_aliases(values: Iterable[str] | None) -> dict[str, str] | None:
    """Turn ``FROM=TO`` pairs into an alias mapping."""
    if not values:
        return None
    aliases: dict[str, str] = {}
    for item in values:
        source, sep, target = item.partition("=")
        if not sep or not source.strip() or not target.strip():
            raise typer.BadParameter(f"Expected FROM=TO, got '{item}'.", param_hint="--alias")
        aliases[source.strip()] = target.strip()
    return aliases


def resolve_config(
    config_path: Path | None,
    *,
    foundries: list[str] | None = None,
    formats: list[str] | None = None,
    aliases: list[str] | None = None,
    display: str | None = None,
    hosted: Path | None = None,
    hosted_url: str | None = None,
    async_output: Path | None = None,
    exclude: list[str] | None = None,
    cache: Path | None = None,
    remote_catalogs: list[str] | None = None,
) -> MagicianConfig:
    """Merge command line overrides over the optional configuration file."""
    overrides: dict[str, Any] = {
        "foundries": foundries or None,
        "formats": formats or None,
        "aliases": parse_aliases(aliases),
        "display": display,
        "hosted": [hosted, hosted_url] if hosted is not None else None,
        "async": async_output,
        "except": exclude or None,
        "cache": cache,
        "remoteCatalogs": remote_catalogs or None,
    }
    if config_path is not None:
        return load_config(config_path, **overrides)
    return build_config(None, **overrides)


__all__ = ["parse_aliases", "resolve_config"]
