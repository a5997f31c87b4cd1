"""Persistent family -> descriptor cache shared across asynchronous passes."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
import json
import logging
from pathlib import Path

from fontmagician.core.config import DEFAULT_CACHE_FILE
from fontmagician.core.exceptions import CatalogError
from fontmagician.fonts.catalog import FontDescriptor, descriptor_to_payload
from fontmagician.fonts.logging import FontPipelineLogger
from fontmagician.fonts.utils import normalize_family


logger = logging.getLogger(__name__)


class CacheStore:
    """JSON-backed key-value store read at pass start and written at pass end.

    Reads go through :meth:`get`; writes during a pass go through :meth:`put`,
    which serialises concurrent updates with an :class:`asyncio.Lock`.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else DEFAULT_CACHE_FILE
        self.logger = logger or FontPipelineLogger()
        self._entries: dict[str, FontDescriptor] = {}
        self._lock: asyncio.Lock | None = None

    def __contains__(self, family: object) -> bool:
        return isinstance(family, str) and normalize_family(family) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> CacheStore:
        """Replace the in-memory entries with the file content.

        A missing or malformed file yields an empty cache.
        """
        self._entries = {}
        self._lock = None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return self
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable font cache %s: %s", self.path, exc)
            return self
        if not isinstance(raw, dict):
            logger.debug("Ignoring font cache %s: not a JSON object", self.path)
            return self
        for family, payload in raw.items():
            try:
                self._entries[normalize_family(family)] = FontDescriptor.from_payload(payload)
            except CatalogError as exc:
                logger.debug("Skipping cached entry %s: %s", family, exc)
        logger.debug("Loaded %d cached families from %s", len(self._entries), self.path)
        return self

    def save(self) -> bool:
        """Overwrite the cache file with the current entries."""
        # Families sorted; variant order inside each descriptor is kept.
        payload = {
            family: descriptor_to_payload(self._entries[family]) for family in sorted(self._entries)
        }
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            self.logger.warning("Unable to write the font cache %s: %s", self.path, exc)
            return False
        return True

    def get(self, family: str) -> FontDescriptor | None:
        return self._entries.get(normalize_family(family))

    async def put(self, family: str, descriptor: FontDescriptor) -> None:
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            self._entries[normalize_family(family)] = descriptor


__all__ = ["CacheStore"]
