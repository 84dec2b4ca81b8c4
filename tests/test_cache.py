from __future__ import annotations

from pathlib import Path

import pytest

from pytransit.cache import FileStore, MemoryStore, TTLCache
from pytransit.models.fleet import ModelDescriptor

DAY = 24 * 3600.0


class _Clock:
    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


def _cache(store=None, clock=None) -> TTLCache[dict[str, str]]:
    return TTLCache(store or MemoryStore(), dict[str, str], DAY, clock=clock or _Clock())


def test_get_after_set_within_ttl() -> None:
    clock = _Clock()
    cache = _cache(clock=clock)

    cache.set("routes", {"505": "Dundas"})
    clock.advance(DAY - 1)

    assert cache.get("routes") == {"505": "Dundas"}
    assert cache.is_valid("routes")


def test_miss_when_absent() -> None:
    cache = _cache()

    assert cache.get("routes") is None
    assert not cache.is_valid("routes")


def test_miss_after_ttl_elapses() -> None:
    clock = _Clock()
    cache = _cache(clock=clock)

    cache.set("routes", {"505": "Dundas"})
    clock.advance(DAY + 1)

    assert cache.get("routes") is None
    assert not cache.is_valid("routes")


def test_entry_exactly_ttl_old_is_expired() -> None:
    clock = _Clock()
    cache = _cache(clock=clock)

    cache.set("routes", {"505": "Dundas"})
    clock.advance(DAY)

    assert cache.get("routes") is None


def test_set_overwrites_and_restamps() -> None:
    clock = _Clock()
    cache = _cache(clock=clock)

    cache.set("routes", {"505": "Dundas"})
    clock.advance(DAY - 10)
    cache.set("routes", {"504": "King"})
    clock.advance(20)

    assert cache.get("routes") == {"504": "King"}


@pytest.mark.parametrize("payload", ["not json", "{}", '{"value": 3, "fetched_at_ms": 1}', '{"value": {}}'])
def test_corrupt_payload_is_a_miss(payload: str) -> None:
    store = MemoryStore()
    store.set("pytransit:routes", payload)
    cache = _cache(store=store)

    assert cache.get("routes") is None
    assert not cache.is_valid("routes")


def test_invalidate_removes_entry() -> None:
    cache = _cache()
    cache.set("routes", {"505": "Dundas"})

    cache.invalidate("routes")

    assert cache.get("routes") is None


def test_model_values_round_trip_through_store() -> None:
    cache: TTLCache[ModelDescriptor] = TTLCache(MemoryStore(), ModelDescriptor, 60, clock=_Clock())

    cache.set("3301", ModelDescriptor(model="BYD K9M", charging=True))

    assert cache.get("3301") == ModelDescriptor(model="BYD K9M", charging=True)


def test_file_store_persists_across_instances(tmp_path) -> None:
    clock = _Clock()
    _cache(store=FileStore(tmp_path), clock=clock).set("routes", {"505": "Dundas"})

    reopened = _cache(store=FileStore(tmp_path), clock=clock)

    assert reopened.get("routes") == {"505": "Dundas"}


def test_file_store_remove_missing_key_is_noop(tmp_path) -> None:
    store = FileStore(tmp_path)
    store.remove("nothing")
    assert store.get("nothing") is None


def test_file_store_failed_write_leaves_no_temp_file(tmp_path, monkeypatch) -> None:
    store = FileStore(tmp_path)

    def fail_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)

    with pytest.raises(OSError):
        store.set("routes", "{}")
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_get_or_fetch_returns_value_when_store_write_fails(tmp_path) -> None:
    cache_dir = tmp_path / "cache"
    cache = _cache(store=FileStore(cache_dir))
    cache_dir.rmdir()
    cache_dir.write_text("not a directory")

    async def fetch() -> dict[str, str]:
        return {"505": "Dundas"}

    assert await cache.get_or_fetch("routes", fetch) == {"505": "Dundas"}
    assert cache.get("routes") is None


@pytest.mark.asyncio
async def test_get_or_fetch_only_fetches_on_miss() -> None:
    clock = _Clock()
    cache = _cache(clock=clock)
    calls = 0

    async def fetch() -> dict[str, str]:
        nonlocal calls
        calls += 1
        return {"505": "Dundas"}

    assert await cache.get_or_fetch("routes", fetch) == {"505": "Dundas"}
    assert await cache.get_or_fetch("routes", fetch) == {"505": "Dundas"}
    assert calls == 1

    clock.advance(DAY)
    await cache.get_or_fetch("routes", fetch)
    assert calls == 2


@pytest.mark.asyncio
async def test_get_or_fetch_does_not_cache_errors() -> None:
    cache = _cache()

    async def fetch() -> dict[str, str]:
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError):
        await cache.get_or_fetch("routes", fetch)
    assert not cache.is_valid("routes")
