"""Cache commands -- inspect and clear the on-disk response store."""

from __future__ import annotations

import typer

from azert_http.cache import DiskCacheStore
from azert_http.models import CacheConfig
from azert_http.output import format_response, info, success


cache_app = typer.Typer(no_args_is_help=True)


def _open_store(ctx: typer.Context) -> DiskCacheStore:
    from azert_http.config import get_cache_dir

    config = ctx.obj["config"]
    # Maintenance commands always open the store, even when requests bypass it.
    return DiskCacheStore(get_cache_dir(), CacheConfig(enabled=True, ttl_seconds=config.cache.ttl_seconds))


@cache_app.command("stats")
def cache_stats(ctx: typer.Context) -> None:
    """Show entry count, location and TTL of the response cache.

    Example::

        azert-http cache stats --json
    """
    store = _open_store(ctx)
    try:
        format_response(store.stats())
    finally:
        store.close()


@cache_app.command("clear")
def cache_clear(ctx: typer.Context) -> None:
    """Remove every cached response.

    Asks for confirmation unless ``--force`` is active.
    """
    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force:
        confirmed = typer.confirm("Remove all cached responses?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    store = _open_store(ctx)
    try:
        removed = store.clear()
    finally:
        store.close()
    success(f"Removed {removed} cached response(s).")
