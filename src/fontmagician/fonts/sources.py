"""Asynchronous font sources raced against each other.

A source is any callable taking a family name and returning a
:class:`FontDescriptor`: coroutine functions are awaited, plain callables run
in a worker thread. Returning ``None`` or raising counts as a failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
import inspect
import logging
from threading import Lock
from typing import TYPE_CHECKING, Any, Union

import requests

from fontmagician.core.config import MagicianConfig
from fontmagician.core.exceptions import (
    CatalogError,
    FontNotFoundError,
    SourceResolutionError,
)
from fontmagician.fonts.cache import CacheStore
from fontmagician.fonts.catalog import FontCatalog, FontDescriptor, parse_catalog
from fontmagician.fonts.registry import FoundrySet
from fontmagician.fonts.synthesis import FaceRule, build_face_rules


if TYPE_CHECKING:  # pragma: no cover - typing only
    from requests import Session


logger = logging.getLogger(__name__)

FontSource = Callable[[str], Union[Awaitable[FontDescriptor | None], FontDescriptor, None]]


def _source_name(source: FontSource) -> str:
    return getattr(source, "name", None) or getattr(source, "__name__", None) or repr(source)


async def _query(source: FontSource, family: str) -> FontDescriptor:
    call = getattr(source, "__call__", None)
    if inspect.iscoroutinefunction(source) or inspect.iscoroutinefunction(call):
        result = await source(family)  # type: ignore[misc]
    else:
        result = await asyncio.to_thread(source, family)
        if inspect.isawaitable(result):
            result = await result
    if result is None:
        raise FontNotFoundError(family, _source_name(source))
    if not isinstance(result, FontDescriptor):
        try:
            result = FontDescriptor.from_payload(result)
        except CatalogError as exc:
            raise FontNotFoundError(family, _source_name(source)) from exc
    return result


async def race_sources(family: str, sources: Sequence[FontSource]) -> FontDescriptor:
    """Query every source concurrently and return the first success.

    Stragglers are cancelled once a winner is known. When every source fails,
    :class:`SourceResolutionError` carries the individual errors.
    """
    if not sources:
        raise SourceResolutionError(family)
    tasks = [asyncio.ensure_future(_query(source, family)) for source in sources]
    errors: list[BaseException] = []
    try:
        for next_done in asyncio.as_completed(tasks):
            try:
                return await next_done
            except Exception as exc:
                logger.debug("Source failed for %s: %s", family, exc)
                errors.append(exc)
        raise SourceResolutionError(family, errors)
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        # Retrieve every outcome so no task exception goes unobserved.
        await asyncio.gather(*tasks, return_exceptions=True)


class MultiSourceResolver:
    """Resolve families from the cache first, then by racing the sources."""

    def __init__(self, sources: Sequence[FontSource], cache: CacheStore) -> None:
        self.sources = list(sources)
        self.cache = cache

    async def lookup(self, family: str) -> FontDescriptor | None:
        """Return the descriptor for ``family`` or ``None`` when unresolved."""
        cached = self.cache.get(family)
        if cached is not None:
            logger.debug("Cache hit for %s", family)
            return cached
        if not self.sources:
            return None
        try:
            descriptor = await race_sources(family, self.sources)
        except SourceResolutionError as exc:
            logger.debug("%s", exc)
            return None
        await self.cache.put(family, descriptor)
        return descriptor

    async def resolve(
        self,
        family: str,
        config: MagicianConfig,
        *,
        declared_as: str | None = None,
    ) -> list[FaceRule]:
        """Return the face rules for ``family``; empty when unresolved."""
        descriptor = await self.lookup(family)
        if descriptor is None:
            return []
        return build_face_rules(declared_as or family, descriptor, config, resolved_family=family)


class CatalogSource:
    """Expose a catalog (or an ordered foundry set) as an async source."""

    def __init__(
        self,
        catalog: FontCatalog | FoundrySet,
        *,
        order: Sequence[str] | None = None,
        name: str | None = None,
    ) -> None:
        self.catalog = catalog
        self.order = tuple(order) if order is not None else None
        self.name = name or getattr(catalog, "name", None) or "foundries"

    def _lookup(self, family: str) -> FontDescriptor | None:
        if isinstance(self.catalog, FontCatalog):
            return self.catalog.get(family)
        for foundry in self.order or tuple(self.catalog):
            catalog = self.catalog.get(foundry)
            if catalog is None:
                continue
            descriptor = catalog.get(family)
            if descriptor is not None:
                return descriptor
        return None

    async def __call__(self, family: str) -> FontDescriptor:
        descriptor = self._lookup(family)
        if descriptor is None:
            raise FontNotFoundError(family, self.name)
        return descriptor


class RemoteCatalogSource:
    """Fetch a JSON catalog over HTTP once and answer lookups from it."""

    def __init__(
        self,
        url: str,
        *,
        session: Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.url = url
        self.name = url
        self._session = session
        self._timeout = timeout
        self._lock = Lock()
        self._catalog: FontCatalog | None = None

    def _fetch(self) -> FontCatalog:
        with self._lock:
            if self._catalog is not None:
                return self._catalog
            session = self._session or requests.Session()
            try:
                response = session.get(self.url, timeout=self._timeout)
                response.raise_for_status()
                payload: Any = response.json()
            except (requests.RequestException, ValueError) as exc:
                raise CatalogError(f"Unable to fetch catalog from {self.url}.") from exc
            self._catalog = parse_catalog(payload, name=self.url)
            return self._catalog

    def __call__(self, family: str) -> FontDescriptor:
        descriptor = self._fetch().get(family)
        if descriptor is None:
            raise FontNotFoundError(family, self.url)
        return descriptor


__all__ = [
    "CatalogSource",
    "FontSource",
    "MultiSourceResolver",
    "RemoteCatalogSource",
    "race_sources",
]
