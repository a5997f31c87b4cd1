from __future__ import annotations

import asyncio
import json
from pathlib import Path

from fontmagician.fonts.cache import CacheStore
from fontmagician.fonts.catalog import FontDescriptor


DESCRIPTOR = FontDescriptor.from_payload(
    {"variants": {"normal": {"400": {"local": ["Alice"], "url": {"woff": "alice.woff"}}}}}
)


def test_missing_cache_file_loads_empty(tmp_path: Path) -> None:
    store = CacheStore(tmp_path / "cache.json").load()
    assert len(store) == 0
    assert store.get("Alice") is None


def test_malformed_cache_file_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    assert len(CacheStore(path).load()) == 0

    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert len(CacheStore(path).load()) == 0


def test_invalid_entries_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text(
        json.dumps({"Alice": DESCRIPTOR.to_payload(), "Broken": "nope"}), encoding="utf-8"
    )
    store = CacheStore(path).load()
    assert list(store) == ["Alice"]


def test_put_then_save_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "cache.json"
    store = CacheStore(path).load()
    asyncio.run(store.put('"Alice"', DESCRIPTOR))
    assert "Alice" in store
    assert store.save() is True

    reloaded = CacheStore(path).load()
    assert reloaded.get("Alice") == DESCRIPTOR
    assert json.loads(path.read_text(encoding="utf-8"))["Alice"] == DESCRIPTOR.to_payload()


def test_save_writes_even_without_entries(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    store = CacheStore(path).load()
    assert store.save() is True
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_concurrent_puts_are_all_kept(tmp_path: Path) -> None:
    store = CacheStore(tmp_path / "cache.json").load()

    async def fill() -> None:
        await asyncio.gather(*(store.put(f"Family {index}", DESCRIPTOR) for index in range(20)))

    asyncio.run(fill())
    assert len(store) == 20


def test_save_failure_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    messages: list[str] = []

    class RecordingLogger:
        def warning(self, message: str, *args: object) -> None:
            messages.append(message % args)

    store = CacheStore(blocker / "cache.json", logger=RecordingLogger())  # type: ignore[arg-type]
    assert store.save() is False
    assert messages and "Unable to write the font cache" in messages[0]


def test_save_keeps_variant_order_and_sorts_families(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    store = CacheStore(path).load()
    ordered = FontDescriptor.from_payload(
        {"variants": {"normal": {"900": {"local": ["B"]}, "200": {"local": ["B"]}}, "italic": {}}}
    )
    asyncio.run(store.put("Zeta", ordered))
    asyncio.run(store.put("Alpha", DESCRIPTOR))
    store.save()

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert list(raw) == ["Alpha", "Zeta"]
    assert list(raw["Zeta"]["variants"]) == ["normal", "italic"]
    assert list(raw["Zeta"]["variants"]["normal"]) == ["900", "200"]

    reloaded = CacheStore(path).load().get("Zeta")
    assert reloaded is not None
    assert [(style, weight) for style, weight, _ in reloaded] == [("normal", "900"), ("normal", "200")]
