"""Exception hierarchy for azert_http.

All exceptions inherit from :class:`AzertHttpError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`azert_http.exit_codes`.
The CLI entry point in :func:`azert_http.app.main` catches
``AzertHttpError`` and exits with the appropriate code.

An HTTP 404 is deliberately absent from this hierarchy: the client maps it
to ``None`` rather than raising.

Subclass hierarchy::

    AzertHttpError (exit 1)
    +-- InvalidArgumentError          (exit 2)
    +-- MissingHeaderIdentifierError  (exit 3)
    +-- RequestFailedError            (exit 5)
    +-- ConnectionError_              (exit 6)
    +-- ConfigError                   (exit 1)
"""

from __future__ import annotations

from azert_http.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MISSING_HEADER,
    EXIT_REQUEST_FAILED,
)


class AzertHttpError(Exception):
    """Base exception for all azert_http errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidArgumentError(AzertHttpError):
    """Raised when the transport is asked to dispatch an unsupported HTTP verb."""

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, method: object):
        super().__init__(f"Unsupported HTTP method: {method!r}")
        self.method = method


class MissingHeaderIdentifierError(AzertHttpError):
    """Raised when a header set lacks a usable ``x-resource-identifier``.

    Only raised on call paths that supply both headers and a cache
    callback; the call is aborted before any network I/O.
    """

    exit_code = EXIT_MISSING_HEADER


class RequestFailedError(AzertHttpError):
    """Raised for any unsuccessful HTTP status other than 404.

    Args:
        reason: The response reason phrase (e.g. ``Internal Server Error``).
        status_code: The numeric HTTP status.
        body: The raw response body text.
    """

    exit_code = EXIT_REQUEST_FAILED

    def __init__(self, reason: str, status_code: int, body: str = ""):
        message = f"Reason: {reason}, Response Code: {status_code}"
        if body:
            message = f"{message}, Content: {body}"
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code
        self.body = body


class ConnectionError_(AzertHttpError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(AzertHttpError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
