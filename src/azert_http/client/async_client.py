"""Asynchronous HTTP client -- GET/POST/PUT/DELETE with caller-owned caching.

:class:`AsyncHttpClient` composes a
:class:`~azert_http.client.caching.CachingDelegate` and an
:class:`~azert_http.client.transport.HttpTransport`. Every call is one
linear sequence::

    check cache -> hit: return cached value
                -> miss: transport call -> cache side effect -> return

DELETE skips the check and always finishes with ``void_cache``. Failures
from either collaborator propagate unchanged; nothing is retried and no
state is kept between calls.

Cache keys:
    * GET is checked and stored with an empty identifier, so GET never
      needs the ``x-resource-identifier`` header.
    * POST and PUT are keyed by the ``x-resource-identifier`` header when
      headers are supplied. The header is validated before the network
      call whenever a cache callback is present.
    * DELETE voids the identifier-free key of the endpoint, which is the
      same key GET uses.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from azert_http.client.caching import CacheCheck, CachingDelegate, SetCache, VoidCache
from azert_http.client.transport import HttpTransport
from azert_http.models import HttpMethod, RequestConfig


class AsyncHttpClient:
    """Uniform async call surface over several downstream HTTP services.

    Must be used as an async context manager so the shared transport
    connection is opened once and closed at the end.

    Args:
        config: Request settings for the transport created when
            *transport* is not supplied.
        transport: Transport invoker to use. Defaults to a new
            :class:`~azert_http.client.transport.HttpTransport`.
        caching: Caching delegate to use. Defaults to a new
            :class:`~azert_http.client.caching.CachingDelegate`.
        http_client: Optional pre-built :class:`httpx.AsyncClient` handed to
            the default transport (ignored when *transport* is given).

    Example::

        async with AsyncHttpClient() as client:
            widget = await client.get(
                "https://api.example.com", "/widgets/1",
                cache_check=store.check, set_cache=store.set,
            )
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        transport: Optional[HttpTransport] = None,
        caching: Optional[CachingDelegate] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._transport = transport or HttpTransport(config, client=http_client)
        self._caching = caching or CachingDelegate()

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncHttpClient:
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._transport.__aexit__(*args)

    # ------------------------------------------------------------------ #
    # Public verbs
    # ------------------------------------------------------------------ #

    async def get(
        self,
        base_address: str,
        uri: str,
        headers: Optional[Mapping[str, str]] = None,
        cache_check: Optional[CacheCheck] = None,
        set_cache: Optional[SetCache] = None,
        response_type: Any = None,
    ) -> Any:
        """Perform a GET, serving from cache when *cache_check* hits.

        Args:
            base_address: Base address of the service being called.
            uri: Endpoint.
            headers: Headers sent with the request. Not used for the cache
                key.
            cache_check: Optional lookup callback.
            set_cache: Optional store callback, invoked after every
                successful transport call (including a 404).
            response_type: Type the response body is validated into.

        Returns:
            The cached or fetched value; ``None`` on 404.

        Raises:
            RequestFailedError: On a non-404 failure status.
        """
        cached = await self._caching.check_cache(base_address, uri, None, cache_check)
        if cached is not None:
            return cached

        response = await self._transport.invoke(
            HttpMethod.GET, base_address, uri, headers=headers, response_type=response_type,
        )

        await self._caching.add_to_cache(response, base_address, uri, None, set_cache)
        return response

    async def post(
        self,
        base_address: str,
        uri: str,
        request: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        cache_check: Optional[CacheCheck] = None,
        set_cache: Optional[SetCache] = None,
        response_type: Any = None,
    ) -> Any:
        """Perform a POST that is expected to add a resource.

        The cache key uses the ``x-resource-identifier`` header when
        *headers* is supplied.

        Raises:
            MissingHeaderIdentifierError: If *headers* lacks a usable
                identifier while a cache callback is supplied. Raised
                before any network I/O.
            RequestFailedError: On a non-404 failure status.
        """
        return await self._send_with_cache(
            HttpMethod.POST, base_address, uri, request, headers,
            cache_check, set_cache, response_type,
        )

    async def put(
        self,
        base_address: str,
        uri: str,
        request: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        cache_check: Optional[CacheCheck] = None,
        set_cache: Optional[SetCache] = None,
        response_type: Any = None,
    ) -> Any:
        """Perform a PUT that is expected to update a resource.

        Same cache behaviour and errors as :meth:`post`.
        """
        return await self._send_with_cache(
            HttpMethod.PUT, base_address, uri, request, headers,
            cache_check, set_cache, response_type,
        )

    async def delete(
        self,
        base_address: str,
        uri: str,
        headers: Optional[Mapping[str, str]] = None,
        void_cache: Optional[VoidCache] = None,
    ) -> None:
        """Perform a DELETE, then void the endpoint's cache entry.

        Any response body is discarded. There is no cache-check step.

        Raises:
            RequestFailedError: On a non-404 failure status.
        """
        await self._transport.invoke(HttpMethod.DELETE, base_address, uri, headers=headers)
        await self._caching.void_cache(base_address, uri, void_cache)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _send_with_cache(
        self,
        method: HttpMethod,
        base_address: str,
        uri: str,
        request: Any,
        headers: Optional[Mapping[str, str]],
        cache_check: Optional[CacheCheck],
        set_cache: Optional[SetCache],
        response_type: Any,
    ) -> Any:
        if cache_check is not None or set_cache is not None:
            self._caching.identifier_from_headers(headers)

        cached = await self._caching.check_cache(base_address, uri, headers, cache_check)
        if cached is not None:
            return cached

        response = await self._transport.invoke(
            method, base_address, uri, body=request, headers=headers,
            response_type=response_type,
        )

        await self._caching.add_to_cache(response, base_address, uri, headers, set_cache)
        return response
