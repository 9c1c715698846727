"""Optional disk-based storage for the client's cache callbacks.

The client core never stores anything; this package provides one concrete
store, :class:`DiskCacheStore`, built on :mod:`diskcache`. The CLI uses it
unless ``--no-cache`` is passed or ``cache.enabled`` is false.
"""

from azert_http.cache.cache import DiskCacheStore

__all__ = ["DiskCacheStore"]
