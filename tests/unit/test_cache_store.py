from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import dgo.infrastructure.cache.cache_store as cache_store_module
from dgo.infrastructure.cache.cache_store import (
    InMemoryCacheStore,
    RedisCacheStore,
    build_cache_store,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class FakeRedis:
    def __init__(self) -> None:
        self.values: dict[str, bytes] = {}
        self.expiries: dict[str, int] = {}

    def get(self, key: str) -> bytes | None:
        return self.values.get(key)

    def set(self, name: str, value: str, ex: int) -> None:
        self.values[name] = value.encode("utf-8")
        self.expiries[name] = ex

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


def test_in_memory_entry_is_readable_until_ttl_elapses() -> None:
    clock = FakeClock()
    cache = InMemoryCacheStore(clock=clock)

    cache.set("menu:rst_1:version", "1", ttl_seconds=60)
    clock.now += 59.5
    assert cache.get("menu:rst_1:version") == "1"

    clock.now += 0.5
    assert cache.get("menu:rst_1:version") is None


def test_in_memory_write_sweeps_expired_entries() -> None:
    clock = FakeClock()
    cache = InMemoryCacheStore(clock=clock)
    cache.set("menu:rst_1:v1", "{}", ttl_seconds=10)
    cache.set("menu:rst_1:v2", "{}", ttl_seconds=100)

    clock.now += 11
    cache.set("menu:rst_2:version", "3", ttl_seconds=10)

    assert set(cache._entries) == {"menu:rst_1:v2", "menu:rst_2:version"}


def test_in_memory_delete_and_overwrite() -> None:
    clock = FakeClock()
    cache = InMemoryCacheStore(clock=clock)

    cache.set("menu:rst_1:version", "1", ttl_seconds=10)
    cache.set("menu:rst_1:version", "2", ttl_seconds=10)
    assert cache.get("menu:rst_1:version") == "2"

    cache.delete("menu:rst_1:version")
    cache.delete("menu:rst_1:version")
    assert cache.get("menu:rst_1:version") is None


def test_redis_store_passes_ttl_and_decodes_bytes(monkeypatch) -> None:
    fake = FakeRedis()
    monkeypatch.setattr(
        cache_store_module, "get_redis_client", lambda timeout_seconds=1.0: fake
    )
    cache = RedisCacheStore()

    cache.set("menu:rst_1:version", "4", ttl_seconds=300)

    assert fake.expiries == {"menu:rst_1:version": 300}
    assert cache.get("menu:rst_1:version") == "4"
    cache.delete("menu:rst_1:version")
    assert cache.get("menu:rst_1:version") is None


def test_build_cache_store_uses_redis_only_when_configured(monkeypatch) -> None:
    monkeypatch.delenv("REDIS_URL", raising=False)
    first = build_cache_store()
    second = build_cache_store()
    assert isinstance(first, InMemoryCacheStore)
    assert first is second

    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    assert isinstance(build_cache_store(), RedisCacheStore)
