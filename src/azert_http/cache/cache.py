"""Disk-backed store exposing the cache callback triple.

:class:`DiskCacheStore` persists values with :mod:`diskcache` under a
configurable time-to-live. Its ``check``, ``set`` and ``void`` methods have
exactly the signatures :class:`~azert_http.client.AsyncHttpClient` expects
for ``cache_check``, ``set_cache`` and ``void_cache``, so the bound methods
can be passed straight through.

The client's keys are opaque strings; the store hashes them with SHA-256
before use so arbitrary URLs and identifiers map to fixed-length entries.

See Also:
    :class:`~azert_http.models.CacheConfig` -- ``enabled`` and
    ``ttl_seconds``.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Optional

import diskcache

from azert_http.models import CacheConfig


class DiskCacheStore:
    """Disk-backed cache storage for response values.

    Values must be picklable; decoded JSON and Pydantic models both are.
    ``None`` is never stored, so a cached 404 simply stays a miss.

    Args:
        cache_dir: Root directory for the cache. A ``responses/``
            subdirectory is created inside it.
        config: Cache configuration (``enabled`` flag and ``ttl_seconds``).

    Example::

        store = DiskCacheStore(get_cache_dir(), CacheConfig(ttl_seconds=60))
        async with AsyncHttpClient() as client:
            await client.get(base, "/widgets/1",
                             cache_check=store.check, set_cache=store.set)
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "responses"))

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    def check(self, key: str) -> Any:
        """Return the value stored under *key*, or ``None`` on a miss."""
        if self._cache is None:
            return None
        return self._cache.get(self._hash(key))

    def set(self, value: Any, key: str) -> None:
        """Store *value* under *key* for ``ttl_seconds``. ``None`` values are skipped."""
        if self._cache is None or value is None:
            return
        self._cache.set(self._hash(key), value, expire=self._config.ttl_seconds)

    def void(self, key: str) -> None:
        """Remove the entry stored under *key*, if any."""
        if self._cache is None:
            return
        self._cache.delete(self._hash(key))

    def clear(self) -> int:
        """Remove all entries and return how many were removed."""
        if self._cache is None:
            return 0
        return self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``enabled`` and, when enabled, ``size``, ``directory`` and ``ttl_seconds``."""
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "responses"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()

    @staticmethod
    def _hash(key: str) -> str:
        return hashlib.sha256(key.encode()).hexdigest()
