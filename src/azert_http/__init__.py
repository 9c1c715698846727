"""azert_http -- an async HTTP client with caller-owned response caching.

The client wraps GET/POST/PUT/DELETE calls with an optional cache callback
triple (``cache_check``, ``set_cache``, ``void_cache``) supplied per call.
The library never stores anything itself: it derives a cache key, invokes
the callbacks in the right order around the network round trip, and leaves
storage entirely to the caller.

Typical usage::

    from azert_http import AsyncHttpClient

    async with AsyncHttpClient() as client:
        widget = await client.get(
            "https://api.example.com", "/widgets/1",
            cache_check=store.check, set_cache=store.set,
        )

Modules:
    client: Transport invoker, caching delegate, and the async client.
    cache: Optional disk-backed store exposing the callback triple.
    models: Pydantic models for configuration and HTTP verbs.
    config: XDG-aware configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes used by the CLI.
    output: stdout/stderr formatting system with Rich support.
    app: Typer CLI entry point.
"""

__version__ = "0.3.0"

from azert_http.client import AsyncHttpClient, CachingDelegate, HttpTransport  # noqa: E402
from azert_http.exceptions import (  # noqa: E402
    AzertHttpError,
    ConnectionError_,
    InvalidArgumentError,
    MissingHeaderIdentifierError,
    RequestFailedError,
)
from azert_http.models import HttpMethod  # noqa: E402

__all__ = [
    "AsyncHttpClient",
    "AzertHttpError",
    "CachingDelegate",
    "ConnectionError_",
    "HttpMethod",
    "HttpTransport",
    "InvalidArgumentError",
    "MissingHeaderIdentifierError",
    "RequestFailedError",
    "__version__",
]
