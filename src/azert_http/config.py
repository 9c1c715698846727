"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for azert_http:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.azert-http/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Global config** -- A single :class:`~azert_http.models.GlobalConfig`
  JSON file storing request, cache, and output defaults.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags and
  ``AZERT_HTTP_*`` environment variables over the config file.

The library itself never reads configuration implicitly; only the CLI and
callers that opt in through :func:`resolve_config` do.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from azert_http.exceptions import ConfigError
from azert_http.models import GlobalConfig

_APP_NAME = "azert-http"
_CONFIG_FILENAME = "config.json"

ENV_TIMEOUT = "AZERT_HTTP_TIMEOUT"
ENV_VERIFY_SSL = "AZERT_HTTP_VERIFY_SSL"
ENV_CACHE_TTL = "AZERT_HTTP_CACHE_TTL"
ENV_NO_CACHE = "AZERT_HTTP_NO_CACHE"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/azert-http/`` (default ``~/.config/azert-http/``).
    On macOS/Windows: ``~/.azert-http/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the :class:`~azert_http.cache.DiskCacheStore` data. Safe to delete
    at any time.

    On Linux/BSD: ``$XDG_CACHE_HOME/azert-http/`` (default ``~/.cache/azert-http/``).
    On macOS/Windows: ``~/.azert-http/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/azert-http/`` (default ``~/.local/share/azert-http/``).
    On macOS/Windows: ``~/.azert-http/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~azert_http.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got: {raw!r}")


def _env_number(name: str, cast: type) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(
            f"Environment variable {name} must be a number, got: {raw!r}"
        ) from exc


def resolve_config(
    cli_timeout: Optional[float] = None,
    cli_no_cache: bool = False,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``cli_no_cache``, ``cli_format``)
        2. Environment variables (``AZERT_HTTP_TIMEOUT``,
           ``AZERT_HTTP_VERIFY_SSL``, ``AZERT_HTTP_CACHE_TTL``,
           ``AZERT_HTTP_NO_CACHE``)
        3. User config (``~/.config/azert-http/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file or an environment value is invalid.
    """
    config = load_global_config()

    timeout = _env_number(ENV_TIMEOUT, float)
    if timeout is not None:
        config.request.timeout = timeout
    verify = _env_bool(ENV_VERIFY_SSL)
    if verify is not None:
        config.request.verify_ssl = verify
    ttl = _env_number(ENV_CACHE_TTL, int)
    if ttl is not None:
        config.cache.ttl_seconds = int(ttl)
    if _env_bool(ENV_NO_CACHE):
        config.cache.enabled = False

    if cli_timeout is not None:
        config.request.timeout = cli_timeout
    if cli_no_cache:
        config.cache.enabled = False
    if cli_format is not None:
        config.output.format = cli_format

    return config
