"""Caching delegate -- mediates between the client and caller-owned cache storage.

The delegate never stores anything. Each operation takes an optional
callback; when the callback is ``None`` the step is skipped silently,
otherwise a cache key is derived and the callback is invoked with it.

Callbacks may be plain functions or coroutine functions::

    cache_check(key) -> value | None
    set_cache(value, key) -> None
    void_cache(key) -> None

Cache keys are ``identifier + base_address + uri``. The identifier comes
from the ``x-resource-identifier`` header: an absent header set means an
empty identifier, while a header set that lacks the key (or carries an
empty value) is rejected with
:class:`~azert_http.exceptions.MissingHeaderIdentifierError` so the cache
is never silently mis-keyed. Void keys never include an identifier.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, Callable, Optional, Union

from azert_http.exceptions import MissingHeaderIdentifierError

logger = logging.getLogger(__name__)

RESOURCE_IDENTIFIER_HEADER = "x-resource-identifier"
"""Header carrying the caller-chosen token that distinguishes resources sharing an endpoint."""

CacheCheck = Callable[[str], Union[Any, Awaitable[Any]]]
SetCache = Callable[[Any, str], Union[None, Awaitable[None]]]
VoidCache = Callable[[str], Union[None, Awaitable[None]]]


class CachingDelegate:
    """Derives cache keys and invokes the optional cache callbacks."""

    async def check_cache(
        self,
        base_address: str,
        uri: str,
        headers: Optional[Mapping[str, str]] = None,
        cache_check: Optional[CacheCheck] = None,
    ) -> Any:
        """Look up a cached value through *cache_check*.

        Args:
            base_address: Base address of the service -- part of the key.
            uri: Endpoint -- part of the key.
            headers: Headers whose ``x-resource-identifier`` prefixes the
                key. ``None`` means an empty identifier.
            cache_check: Lookup callback. When ``None`` nothing is checked
                and no header validation happens.

        Returns:
            Whatever *cache_check* returned; ``None`` is a cache miss.

        Raises:
            MissingHeaderIdentifierError: If *headers* is supplied without a
                usable identifier.
        """
        if cache_check is None:
            return None

        key = self.create_cache_key(base_address, uri, self.identifier_from_headers(headers))
        cached = await _call(cache_check, key)
        logger.debug("cache %s for %s", "miss" if cached is None else "hit", key)
        return cached

    async def add_to_cache(
        self,
        response: Any,
        base_address: str,
        uri: str,
        headers: Optional[Mapping[str, str]] = None,
        set_cache: Optional[SetCache] = None,
    ) -> None:
        """Hand *response* to *set_cache* under the derived key.

        A ``None`` response (HTTP 404) is passed on too; whether a known
        miss is worth caching is the callback's decision.
        """
        if set_cache is None:
            return

        key = self.create_cache_key(base_address, uri, self.identifier_from_headers(headers))
        logger.debug("cache set for %s", key)
        await _call(set_cache, response, key)

    async def void_cache(
        self,
        base_address: str,
        uri: str,
        void_cache: Optional[VoidCache] = None,
    ) -> None:
        """Invoke *void_cache* with the endpoint-scoped key (no identifier)."""
        if void_cache is None:
            return

        key = self.create_cache_key(base_address, uri)
        logger.debug("cache void for %s", key)
        await _call(void_cache, key)

    def identifier_from_headers(self, headers: Optional[Mapping[str, str]]) -> str:
        """Return the ``x-resource-identifier`` value, or ``""`` when *headers* is ``None``.

        Raises:
            MissingHeaderIdentifierError: If the header is missing or empty.
        """
        if headers is None:
            return ""

        if RESOURCE_IDENTIFIER_HEADER not in headers:
            raise MissingHeaderIdentifierError(
                f"In order to cache a PUT or POST, a unique identifier header "
                f"'{RESOURCE_IDENTIFIER_HEADER}' must be provided"
            )

        identifier = headers[RESOURCE_IDENTIFIER_HEADER]
        if not identifier:
            raise MissingHeaderIdentifierError(
                f"The header '{RESOURCE_IDENTIFIER_HEADER}' was provided but its value "
                f"is empty; it must be populated for caching to work"
            )
        return identifier

    @staticmethod
    def create_cache_key(base_address: str, uri: str, identifier: str = "") -> str:
        """Compose the cache key ``identifier + base_address + uri``."""
        return f"{identifier or ''}{base_address}{uri}"


async def _call(func: Callable[..., Any], *args: Any) -> Any:
    """Call *func* and await the result when it is awaitable."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
