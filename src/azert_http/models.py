"""Canonical Pydantic models shared across azert_http modules.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig`, :class:`OutputConfig`,
    and :class:`GlobalConfig`.

**Protocol types** -- :class:`HttpMethod`, the fixed verb set the transport
dispatches on.
"""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field


class HttpMethod(str, enum.Enum):
    """HTTP verbs supported by :class:`~azert_http.client.transport.HttpTransport`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestConfig(BaseModel):
    """Settings applied to the shared :class:`httpx.AsyncClient`."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")


class CacheConfig(BaseModel):
    """Settings for the optional disk-backed store in :mod:`azert_http.cache`."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl_seconds: int = Field(default=300, description="Cache TTL in seconds")


class OutputConfig(BaseModel):
    """Default output format preferences for the CLI."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Default output format when neither --json nor --plain is given"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/azert-http/config.json``.

    Loaded and saved by :func:`~azert_http.config.load_global_config` and
    :func:`~azert_http.config.save_global_config`. See
    :func:`~azert_http.config.resolve_config` for how environment variables
    and CLI flags override these values.
    """

    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
