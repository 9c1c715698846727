"""Tests for the DiskCacheStore module."""

from __future__ import annotations

import time

import httpx
import pytest

from azert_http.cache import DiskCacheStore
from azert_http.client import AsyncHttpClient
from azert_http.models import CacheConfig

KEY = "https://api.test/widgets/1"


@pytest.fixture()
def store(tmp_path):
    """Create an enabled DiskCacheStore pointing at tmp_path."""
    s = DiskCacheStore(tmp_path, CacheConfig(enabled=True, ttl_seconds=300))
    yield s
    s.close()


@pytest.fixture()
def disabled_store(tmp_path):
    """Create a disabled DiskCacheStore."""
    s = DiskCacheStore(tmp_path, CacheConfig(enabled=False, ttl_seconds=300))
    yield s
    s.close()


# ------------------------------------------------------------------ #
# Callback triple
# ------------------------------------------------------------------ #


class TestCallbacks:
    def test_set_then_check(self, store: DiskCacheStore) -> None:
        store.set({"id": 1, "name": "a"}, KEY)
        assert store.check(KEY) == {"id": 1, "name": "a"}

    def test_miss_returns_none(self, store: DiskCacheStore) -> None:
        assert store.check("https://api.test/missing") is None

    def test_keys_are_distinct(self, store: DiskCacheStore) -> None:
        store.set("a", "id-1" + KEY)
        assert store.check(KEY) is None
        assert store.check("id-1" + KEY) == "a"

    def test_none_value_not_stored(self, store: DiskCacheStore) -> None:
        store.set(None, KEY)
        assert store.stats()["size"] == 0

    def test_void_removes_entry(self, store: DiskCacheStore) -> None:
        store.set({"id": 1}, KEY)
        store.void(KEY)
        assert store.check(KEY) is None

    def test_void_missing_key_is_noop(self, store: DiskCacheStore) -> None:
        store.void(KEY)
        assert store.check(KEY) is None

    def test_entries_expire(self, tmp_path) -> None:
        s = DiskCacheStore(tmp_path, CacheConfig(enabled=True, ttl_seconds=1))
        try:
            s.set({"id": 1}, KEY)
            assert s.check(KEY) is not None
            time.sleep(1.2)
            assert s.check(KEY) is None
        finally:
            s.close()


# ------------------------------------------------------------------ #
# Disabled store
# ------------------------------------------------------------------ #


class TestDisabled:
    def test_not_enabled(self, disabled_store: DiskCacheStore) -> None:
        assert disabled_store.enabled is False

    def test_operations_are_noops(self, disabled_store: DiskCacheStore) -> None:
        disabled_store.set({"id": 1}, KEY)
        disabled_store.void(KEY)
        assert disabled_store.check(KEY) is None
        assert disabled_store.clear() == 0

    def test_stats_report_disabled(self, disabled_store: DiskCacheStore) -> None:
        assert disabled_store.stats() == {"enabled": False}


# ------------------------------------------------------------------ #
# Maintenance
# ------------------------------------------------------------------ #


class TestMaintenance:
    def test_stats(self, store: DiskCacheStore, tmp_path) -> None:
        store.set("a", "k1")
        store.set("b", "k2")
        stats = store.stats()
        assert stats["enabled"] is True
        assert stats["size"] == 2
        assert stats["directory"] == str(tmp_path / "responses")
        assert stats["ttl_seconds"] == 300

    def test_clear_returns_removed_count(self, store: DiskCacheStore) -> None:
        store.set("a", "k1")
        store.set("b", "k2")
        assert store.clear() == 2
        assert store.stats()["size"] == 0

    def test_persists_across_instances(self, tmp_path) -> None:
        first = DiskCacheStore(tmp_path, CacheConfig())
        first.set({"id": 1}, KEY)
        first.close()

        second = DiskCacheStore(tmp_path, CacheConfig())
        try:
            assert second.check(KEY) == {"id": 1}
        finally:
            second.close()


# ------------------------------------------------------------------ #
# With the client
# ------------------------------------------------------------------ #


class TestWithClient:
    @pytest.mark.asyncio
    async def test_delete_drops_cached_get(self, store: DiskCacheStore) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.method)
            return httpx.Response(200, json={"id": 1})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with AsyncHttpClient(http_client=http) as client:
            await client.get("https://api.test", "/widgets/1", cache_check=store.check, set_cache=store.set)
            await client.get("https://api.test", "/widgets/1", cache_check=store.check, set_cache=store.set)
            assert calls == ["GET"]

            await client.delete("https://api.test", "/widgets/1", void_cache=store.void)
            assert store.check(KEY) is None
        await http.aclose()
