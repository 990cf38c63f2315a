"""Unit tests for TTLCache."""

import asyncio

import pytest

from services.cache import TTLCache


class TestTTLCache:
    """Test TTLCache get/set/delete and expiry."""

    def test_get_miss(self, clock):
        cache = TTLCache(clock=clock)
        assert cache.get("nonexistent") is None
        assert len(cache) == 0

    def test_set_and_get(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("/api/episodes", b'[{"id":"ep001"}]', ttl=60)
        assert cache.get("/api/episodes") == b'[{"id":"ep001"}]'

    def test_entry_expires_after_ttl(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("key", b"value", ttl=10)

        clock.advance(10)
        assert cache.get("key") == b"value"  # age == ttl is still live

        clock.advance(0.001)
        assert cache.get("key") is None

    def test_expired_entry_not_returned_before_sweep(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("key", b"value", ttl=1)
        clock.advance(5)

        assert cache.get("key") is None
        # Still physically retained until a sweep runs
        assert len(cache) == 1

    def test_overwrite_returns_latest(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("key", b"first", ttl=60)
        cache.set("key", b"second", ttl=60)
        assert cache.get("key") == b"second"
        assert len(cache) == 1

    def test_overwrite_resets_stored_at(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("key", b"first", ttl=10)
        clock.advance(8)
        cache.set("key", b"second", ttl=10)
        clock.advance(8)
        assert cache.get("key") == b"second"

    def test_per_entry_ttl(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("short", b"s", ttl=1)
        cache.set("long", b"l", ttl=100)
        clock.advance(2)
        assert cache.get("short") is None
        assert cache.get("long") == b"l"

    def test_delete(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("to_delete", b"value", ttl=60)
        cache.delete("to_delete")
        assert cache.get("to_delete") is None

        # Deleting a missing key is a no-op
        cache.delete("nonexistent")


class TestTTLCacheSweep:
    """Test expiry sweeping."""

    def test_sweep_removes_only_expired(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("expired", b"x", ttl=1)
        cache.set("live", b"y", ttl=60)
        clock.advance(2)

        assert cache.sweep() == 1
        assert len(cache) == 1
        assert cache.get("live") == b"y"

    def test_sweep_on_empty_cache(self, clock):
        cache = TTLCache(clock=clock)
        assert cache.sweep() == 0

    def test_sweep_keeps_entry_at_exact_ttl(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("key", b"v", ttl=5)
        clock.advance(5)
        assert cache.sweep() == 0
        assert cache.get("key") == b"v"

    @pytest.mark.asyncio
    async def test_background_sweeper_evicts_expired(self, clock):
        cache = TTLCache(sweep_interval=0.01, clock=clock)
        cache.set("expired", b"x", ttl=1)
        cache.set("live", b"y", ttl=600)
        clock.advance(2)

        cache.start()
        assert cache.sweeping
        try:
            for _ in range(50):
                if len(cache) == 1:
                    break
                await asyncio.sleep(0.01)
        finally:
            await cache.stop()

        assert len(cache) == 1
        assert cache.get("live") == b"y"
        assert not cache.sweeping
