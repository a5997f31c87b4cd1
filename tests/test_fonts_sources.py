from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest
import requests

from fontmagician.core.config import build_config
from fontmagician.core.exceptions import CatalogError, FontNotFoundError, SourceResolutionError
from fontmagician.fonts.cache import CacheStore
from fontmagician.fonts.catalog import FontDescriptor, parse_catalog
from fontmagician.fonts.registry import FoundrySet
from fontmagician.fonts.sources import (
    CatalogSource,
    MultiSourceResolver,
    RemoteCatalogSource,
    race_sources,
)


FAST = FontDescriptor.from_payload({"normal": {"400": {"local": ["Fast"]}}})
SLOW = FontDescriptor.from_payload({"normal": {"400": {"local": ["Slow"]}}})


def test_race_returns_first_success() -> None:
    cancelled: list[str] = []

    async def slow(family: str) -> FontDescriptor:
        try:
            await asyncio.sleep(1)
        except asyncio.CancelledError:
            cancelled.append(family)
            raise
        return SLOW

    async def fast(family: str) -> FontDescriptor:
        await asyncio.sleep(0.01)
        return FAST

    result = asyncio.run(race_sources("X", [slow, fast]))
    assert result is FAST
    assert cancelled == ["X"]


def test_race_ignores_failures_until_a_success() -> None:
    async def failing(family: str) -> FontDescriptor:
        raise FontNotFoundError(family, "failing")

    def returns_none(family: str) -> None:
        return None

    async def delayed(family: str) -> FontDescriptor:
        await asyncio.sleep(0.02)
        return FAST

    assert asyncio.run(race_sources("X", [failing, returns_none, delayed])) is FAST


def test_race_accepts_sync_sources_and_payloads() -> None:
    def payload_source(family: str) -> dict[str, Any]:
        return {"normal": {"700": {"local": [f"{family} Bold"]}}}

    result = asyncio.run(race_sources("Brand", [payload_source]))
    assert result.get("normal", "700").local == ("Brand Bold",)


def test_race_raises_when_every_source_fails() -> None:
    async def failing(family: str) -> FontDescriptor:
        raise RuntimeError("boom")

    with pytest.raises(SourceResolutionError) as excinfo:
        asyncio.run(race_sources("X", [failing, failing]))
    assert len(excinfo.value.errors) == 2

    with pytest.raises(SourceResolutionError):
        asyncio.run(race_sources("X", []))


def test_resolver_caches_winner_and_reuses_it(tmp_path: Path) -> None:
    calls: list[str] = []

    async def source(family: str) -> FontDescriptor:
        calls.append(family)
        return FAST

    cache = CacheStore(tmp_path / "cache.json").load()
    config = build_config()
    resolver = MultiSourceResolver([source], cache)

    first = asyncio.run(resolver.resolve("X", config))
    second = asyncio.run(resolver.resolve("X", config))
    assert calls == ["X"]
    assert [rule.src for rule in first] == [("local(Fast)",)]
    assert first == second


def test_resolver_without_sources_or_cache_entry_is_empty(tmp_path: Path) -> None:
    resolver = MultiSourceResolver([], CacheStore(tmp_path / "cache.json").load())
    assert asyncio.run(resolver.resolve("X", build_config())) == []


def test_resolver_swallows_failures(tmp_path: Path) -> None:
    async def failing(family: str) -> FontDescriptor:
        raise FontNotFoundError(family)

    cache = CacheStore(tmp_path / "cache.json").load()
    resolver = MultiSourceResolver([failing], cache)
    assert asyncio.run(resolver.resolve("X", build_config())) == []
    assert "X" not in cache


def test_resolver_writes_declared_name(tmp_path: Path) -> None:
    async def source(family: str) -> FontDescriptor:
        return FAST

    resolver = MultiSourceResolver([source], CacheStore(tmp_path / "cache.json").load())
    rules = asyncio.run(resolver.resolve("Montserrat", build_config(), declared_as="body"))
    assert [rule.family for rule in rules] == ["body"]
    assert "Montserrat" in resolver.cache


def test_catalog_source_walks_foundry_order() -> None:
    foundries = FoundrySet(
        {
            "first": parse_catalog({"Shared": {"normal": {"400": {"local": ["First"]}}}}),
            "second": parse_catalog({"Shared": {"normal": {"400": {"local": ["Second"]}}}}),
        }
    )
    source = CatalogSource(foundries, order=["second", "first"])
    result = asyncio.run(source("Shared"))
    assert result.get("normal", "400").local == ("Second",)
    with pytest.raises(FontNotFoundError):
        asyncio.run(source("Missing"))


class _Response:
    def __init__(self, payload: Any, status: int = 200) -> None:
        self._payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self) -> Any:
        return self._payload


class _Session:
    def __init__(self, response: _Response) -> None:
        self.response = response
        self.urls: list[str] = []

    def get(self, url: str, timeout: float) -> _Response:
        self.urls.append(url)
        return self.response


def test_remote_catalog_is_fetched_once() -> None:
    session = _Session(_Response({"Remote": {"normal": {"400": {"url": {"woff2": "r.woff2"}}}}}))
    source = RemoteCatalogSource("https://fonts.example/catalog.json", session=session)
    assert source("Remote").get("normal", "400").url["woff2"] == "r.woff2"
    with pytest.raises(FontNotFoundError):
        source("Other")
    assert session.urls == ["https://fonts.example/catalog.json"]


def test_remote_catalog_http_error_is_a_catalog_error() -> None:
    source = RemoteCatalogSource("https://fonts.example/x.json", session=_Session(_Response({}, 500)))
    with pytest.raises(CatalogError):
        source("Remote")
