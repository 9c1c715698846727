"""Shared test fixtures for azert_http.

Provides config isolation, output reset, an in-memory cache recorder
implementing the callback triple, and helpers for building clients over
:class:`httpx.MockTransport`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from azert_http.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams, so a fresh manager is
    needed for each test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at subdirectories of tmp_path, forces the
    XDG code path, and clears every AZERT_HTTP_* environment variable.
    """
    monkeypatch.setattr("azert_http.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "AZERT_HTTP_TIMEOUT",
        "AZERT_HTTP_VERIFY_SSL",
        "AZERT_HTTP_CACHE_TTL",
        "AZERT_HTTP_NO_CACHE",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Cache callbacks
# ---------------------------------------------------------------------------


class CacheRecorder:
    """Dict-backed store that records every callback invocation."""

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.checked: list[str] = []
        self.set_calls: list[tuple[Any, str]] = []
        self.voided: list[str] = []

    def check(self, key: str) -> Any:
        self.checked.append(key)
        return self.store.get(key)

    def set(self, value: Any, key: str) -> None:
        self.set_calls.append((value, key))
        self.store[key] = value

    def void(self, key: str) -> None:
        self.voided.append(key)
        self.store.pop(key, None)


@pytest.fixture
def recorder() -> CacheRecorder:
    return CacheRecorder()


# ---------------------------------------------------------------------------
# Mock transport helpers
# ---------------------------------------------------------------------------


class RequestLog:
    """Collects requests seen by a MockTransport handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def count(self) -> int:
        return len(self.requests)


@pytest.fixture
def json_handler() -> Callable[..., RequestLog]:
    """Factory for a RequestLog answering every request with a fixed status and JSON body."""

    def factory(data: Any = None, status_code: int = 200) -> RequestLog:
        def handler(request: httpx.Request) -> httpx.Response:
            if data is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=data)

        return RequestLog(handler)

    return factory
