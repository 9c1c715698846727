"""Tests for the exception hierarchy and exit-code mapping."""

from __future__ import annotations

import pytest

from azert_http.exceptions import (
    AzertHttpError,
    ConfigError,
    ConnectionError_,
    InvalidArgumentError,
    MissingHeaderIdentifierError,
    RequestFailedError,
)
from azert_http.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MISSING_HEADER,
    EXIT_REQUEST_FAILED,
)


class TestExitCodes:
    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (AzertHttpError("x"), EXIT_GENERIC_FAILURE),
            (InvalidArgumentError("PATCH"), EXIT_INVALID_USAGE),
            (MissingHeaderIdentifierError("x"), EXIT_MISSING_HEADER),
            (RequestFailedError("Bad Gateway", 502), EXIT_REQUEST_FAILED),
            (ConnectionError_("x"), EXIT_CONNECTION_ERROR),
            (ConfigError("x"), EXIT_GENERIC_FAILURE),
        ],
    )
    def test_class_exit_code(self, exc: AzertHttpError, code: int) -> None:
        assert isinstance(exc, AzertHttpError)
        assert exc.exit_code == code

    def test_override_exit_code(self) -> None:
        assert AzertHttpError("x", exit_code=9).exit_code == 9


class TestRequestFailedError:
    def test_carries_reason_status_and_body(self) -> None:
        exc = RequestFailedError("Internal Server Error", 500, '{"error": "db"}')
        assert exc.reason == "Internal Server Error"
        assert exc.status_code == 500
        assert exc.body == '{"error": "db"}'
        assert str(exc) == 'Reason: Internal Server Error, Response Code: 500, Content: {"error": "db"}'

    def test_empty_body_omitted_from_message(self) -> None:
        assert str(RequestFailedError("Conflict", 409)) == "Reason: Conflict, Response Code: 409"


class TestInvalidArgumentError:
    def test_carries_method(self) -> None:
        exc = InvalidArgumentError("TRACE")
        assert exc.method == "TRACE"
        assert "TRACE" in str(exc)
