"""Request commands -- ``get``, ``post``, ``put`` and ``delete``.

Each command issues exactly one call through
:class:`~azert_http.client.AsyncHttpClient` and renders the decoded
response to stdout. When caching is enabled the
:class:`~azert_http.cache.DiskCacheStore` methods are passed as the cache
callbacks:

* ``get`` -- checks and stores under the endpoint key.
* ``post`` / ``put`` -- check and store only when an
  ``x-resource-identifier`` header is given, since their keys depend on it.
* ``delete`` -- voids the endpoint key, dropping any cached ``get``.

A 404 is not an error: nothing is written to stdout and the exit code is 0.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable
from typing import Any, Callable, Optional

import typer

from azert_http.cache import DiskCacheStore
from azert_http.client import RESOURCE_IDENTIFIER_HEADER, AsyncHttpClient
from azert_http.exceptions import AzertHttpError
from azert_http.models import GlobalConfig
from azert_http.output import error, format_response, info

_HEADER_HELP = "Request header as 'Name: value'. Repeatable."


def get_command(
    ctx: typer.Context,
    base_address: str = typer.Argument(help="Base address of the service."),
    uri: str = typer.Argument(help="Endpoint path."),
    header: Optional[list[str]] = typer.Option(None, "--header", "-H", help=_HEADER_HELP),
) -> None:
    """Send a GET request, serving from the cache when possible.

    Example::

        azert-http get https://api.example.com /widgets/1
    """
    headers = _parse_headers(header)

    async def call(client: AsyncHttpClient, store: Optional[DiskCacheStore]) -> Any:
        return await client.get(
            base_address,
            uri,
            headers=headers,
            cache_check=store.check if store else None,
            set_cache=store.set if store else None,
        )

    _render(_run(ctx, call), base_address, uri)


def post_command(
    ctx: typer.Context,
    base_address: str = typer.Argument(help="Base address of the service."),
    uri: str = typer.Argument(help="Endpoint path."),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="JSON request body."),
    header: Optional[list[str]] = typer.Option(None, "--header", "-H", help=_HEADER_HELP),
) -> None:
    """Send a POST request with a JSON body.

    Example::

        azert-http post https://api.example.com /widgets --body '{"name": "a"}' \\
            -H 'x-resource-identifier: widget-a'
    """
    _send(ctx, "post", base_address, uri, body, header)


def put_command(
    ctx: typer.Context,
    base_address: str = typer.Argument(help="Base address of the service."),
    uri: str = typer.Argument(help="Endpoint path."),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="JSON request body."),
    header: Optional[list[str]] = typer.Option(None, "--header", "-H", help=_HEADER_HELP),
) -> None:
    """Send a PUT request with a JSON body."""
    _send(ctx, "put", base_address, uri, body, header)


def delete_command(
    ctx: typer.Context,
    base_address: str = typer.Argument(help="Base address of the service."),
    uri: str = typer.Argument(help="Endpoint path."),
    header: Optional[list[str]] = typer.Option(None, "--header", "-H", help=_HEADER_HELP),
) -> None:
    """Send a DELETE request and void the cached entry for the endpoint."""
    headers = _parse_headers(header)

    async def call(client: AsyncHttpClient, store: Optional[DiskCacheStore]) -> Any:
        await client.delete(
            base_address,
            uri,
            headers=headers,
            void_cache=store.void if store else None,
        )

    _run(ctx, call)
    info(f"Deleted {base_address}{uri}")


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _send(
    ctx: typer.Context,
    verb: str,
    base_address: str,
    uri: str,
    body: Optional[str],
    header: Optional[list[str]],
) -> None:
    headers = _parse_headers(header)
    payload = _parse_body(body)
    cacheable = headers is not None and bool(headers.get(RESOURCE_IDENTIFIER_HEADER))

    async def call(client: AsyncHttpClient, store: Optional[DiskCacheStore]) -> Any:
        use_store = store if cacheable else None
        return await getattr(client, verb)(
            base_address,
            uri,
            payload,
            headers=headers,
            cache_check=use_store.check if use_store else None,
            set_cache=use_store.set if use_store else None,
        )

    _render(_run(ctx, call), base_address, uri)


def _run(
    ctx: typer.Context,
    call: Callable[[AsyncHttpClient, Optional[DiskCacheStore]], Awaitable[Any]],
) -> Any:
    """Open a client and store, run *call*, and map library errors to exit codes."""
    config: GlobalConfig = ctx.obj["config"]
    store = make_store(config)

    async def runner() -> Any:
        async with make_client(config) as client:
            return await call(client, store)

    try:
        return asyncio.run(runner())
    except AzertHttpError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    finally:
        if store is not None:
            store.close()


def make_client(config: GlobalConfig) -> AsyncHttpClient:
    """Build the client used by the request commands."""
    return AsyncHttpClient(config.request)


def make_store(config: GlobalConfig) -> Optional[DiskCacheStore]:
    """Open the disk store, or return ``None`` when caching is disabled."""
    if not config.cache.enabled:
        return None
    from azert_http.config import get_cache_dir

    return DiskCacheStore(get_cache_dir(), config.cache)


def _render(result: Any, base_address: str, uri: str) -> None:
    if result is None:
        info(f"No content for {base_address}{uri}")
        return
    format_response(result)


def _parse_headers(raw: Optional[list[str]]) -> Optional[dict[str, str]]:
    """Parse ``Name: value`` strings; ``None`` when no header was given."""
    if not raw:
        return None
    headers: dict[str, str] = {}
    for item in raw:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            error(f"Invalid header (expected 'Name: value'): {item}")
            raise typer.Exit(code=2)
        headers[name.strip()] = value.strip()
    return headers


def _parse_body(body: Optional[str]) -> Any:  # noqa: ANN401
    """Parse *body* as JSON if possible, returning the raw string on failure."""
    if body is None:
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body
