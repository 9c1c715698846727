"""HTTP client module for azert_http.

Three layers, leaves first:

    :class:`HttpTransport` -- one network round trip per call over a shared
        :class:`httpx.AsyncClient`; 404 becomes ``None``.
    :class:`CachingDelegate` -- cache-key derivation, header validation, and
        invocation of the optional cache callbacks.
    :class:`AsyncHttpClient` -- GET/POST/PUT/DELETE composed from the two.

Example::

    from azert_http.client import AsyncHttpClient

    async with AsyncHttpClient() as client:
        await client.delete("https://api.example.com", "/widgets/1", void_cache=store.void)
"""

from azert_http.client.async_client import AsyncHttpClient
from azert_http.client.caching import RESOURCE_IDENTIFIER_HEADER, CachingDelegate
from azert_http.client.transport import HttpTransport

__all__ = ["AsyncHttpClient", "CachingDelegate", "HttpTransport", "RESOURCE_IDENTIFIER_HEADER"]
