"""Transport invoker -- one HTTP round trip per call over a shared :class:`httpx.AsyncClient`.

:class:`HttpTransport` is the leaf of the client stack. It knows nothing
about caching: it dispatches a verb, sends a JSON body for POST/PUT, and
maps the outcome onto three results:

* 2xx -- the decoded body, validated into ``response_type`` when given.
* 404 -- ``None``.
* anything else -- :class:`~azert_http.exceptions.RequestFailedError`.

There is no retry. Network failures surface as
:class:`~azert_http.exceptions.ConnectionError_`.

The underlying :class:`httpx.AsyncClient` is created once when the
transport is entered and reused for every call. A client passed in by the
caller is used as-is and left open on exit.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic_core import to_jsonable_python

from azert_http.exceptions import ConnectionError_, InvalidArgumentError, RequestFailedError
from azert_http.models import HttpMethod, RequestConfig
from azert_http.output import get_output

ACCEPT_JSON = "application/json"

_BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT)


class HttpTransport:
    """Executes single HTTP calls and maps status codes to results.

    Args:
        config: Timeout, SSL and redirect settings for the owned client.
        client: An existing :class:`httpx.AsyncClient` to use instead of
            creating one. The caller keeps ownership and must close it.

    Example::

        async with HttpTransport() as transport:
            widget = await transport.invoke(
                HttpMethod.GET, "https://api.example.com", "/widgets/1",
            )
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._client = client
        self._owns_client = client is None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> HttpTransport:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=self._config.follow_redirects,
            )
            self._owns_client = True
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def invoke(
        self,
        method: Union[HttpMethod, str],
        base_address: str,
        uri: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Any = None,
    ) -> Any:
        """Perform one HTTP call and return the decoded response.

        Args:
            method: One of the :class:`~azert_http.models.HttpMethod` verbs
                (or its name).
            base_address: Base address of the service being called.
            uri: Endpoint path, or an absolute URL which then wins over
                *base_address*.
            body: Request payload, sent as JSON for POST and PUT only.
            headers: Extra request headers. ``Accept: application/json``
                is always sent unless overridden here.
            response_type: Type to validate the JSON body into. ``None``
                returns the decoded JSON as-is.

        Returns:
            The response value, or ``None`` on HTTP 404 or an empty body.

        Raises:
            InvalidArgumentError: If *method* is not a supported verb.
            RequestFailedError: On any unsuccessful status other than 404.
            ConnectionError_: On network or timeout errors.
        """
        verb = _coerce_method(method)
        assert self._client is not None, "Transport not initialised -- use as async context manager"

        url = resolve_url(base_address, uri)
        request_headers = httpx.Headers({"Accept": ACCEPT_JSON})
        request_headers.update(headers or {})
        kwargs: dict[str, Any] = {"headers": request_headers}
        if verb in _BODY_METHODS:
            kwargs["json"] = serialize_body(body)

        output = get_output()
        output.debug(f"{verb.value} {url}")
        try:
            response = await self._client.request(verb.value, url, **kwargs)
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
            raise ConnectionError_(f"{verb.value} {url} failed: {exc}") from exc
        output.debug(f"{verb.value} {url} -> HTTP {response.status_code}")

        return self.handle_response(response, response_type)

    def handle_response(self, response: httpx.Response, response_type: Any = None) -> Any:
        """Map an :class:`httpx.Response` onto a value, ``None``, or an error."""
        if response.is_success:
            data = _decode_body(response)
            if data is None or response_type is None:
                return data
            return TypeAdapter(response_type).validate_python(data)

        if response.status_code == httpx.codes.NOT_FOUND:
            return None

        raise RequestFailedError(
            response.reason_phrase,
            response.status_code,
            response.text,
        )


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _coerce_method(method: Union[HttpMethod, str]) -> HttpMethod:
    if isinstance(method, HttpMethod):
        return method
    if isinstance(method, str):
        try:
            return HttpMethod(method.upper())
        except ValueError:
            pass
    raise InvalidArgumentError(method)


def resolve_url(base_address: str, uri: str) -> str:
    """Join *uri* onto *base_address*; an absolute *uri* is returned unchanged."""
    if httpx.URL(uri).is_absolute_url:
        return uri
    if not uri:
        return base_address
    return f"{base_address.rstrip('/')}/{uri.lstrip('/')}"


def serialize_body(body: Any) -> Any:
    """Convert a request payload into JSON-compatible data."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json")
    return to_jsonable_python(body)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
