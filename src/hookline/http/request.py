"""Outbound HTTP request builder.

A :class:`Request` is configured, executed exactly once, and closed. It
owns one :class:`httpx.Client`, opened when the request is constructed
and released by :meth:`Request.close`; the client is never shared with
another request.

Configuration happens either through the chainable setters
(:meth:`~Request.set_header`, :meth:`~Request.set_request_timeout`,
:meth:`~Request.set_follow_redirects`) or by passing a frozen
:class:`~hookline.models.RequestOptions` at construction. Once one of the
``execute*`` methods has run, the request is sealed: setters and a second
execution raise :class:`~hookline.exceptions.InvalidOperationError`.

Example::

    with Request("https://api.example.com/items", "post") as req:
        resp = req.set_request_timeout(5000).execute_with_json({"name": "x"})
        resp.assert_ok()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from hookline.codec import to_json
from hookline.config import get_config
from hookline.exceptions import InvalidOperationError, TransportError
from hookline.http.query import QueryBuilder
from hookline.http.response import Response
from hookline.models import RequestOptions
from hookline.output import get_output


class Request:
    """A single outbound HTTP call.

    Args:
        url: Absolute ``http`` or ``https`` URL.
        method: HTTP method; case-insensitive, stored upper-cased.
        options: Optional per-request configuration applied on top of the
            active :class:`~hookline.models.HttpConfig`.
        transport: Optional :mod:`httpx` transport for the underlying
            client (e.g. :class:`httpx.MockTransport` in tests).

    Raises:
        TransportError: If *url* is malformed.
    """

    def __init__(
        self,
        url: str,
        method: str = "GET",
        *,
        options: Optional[RequestOptions] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        config = get_config()
        self.url = _parse_url(url)
        self.method = method.upper()
        self.headers = httpx.Headers({"User-Agent": config.user_agent})
        self._timeout_ms = config.timeout_ms
        self._follow_redirects = config.follow_redirects
        if options is not None:
            self.headers.update(options.headers)
            if options.timeout_ms is not None:
                self._timeout_ms = options.timeout_ms
            if options.follow_redirects is not None:
                self._follow_redirects = options.follow_redirects

        self._content: Optional[bytes] = None
        self._raw: Optional[httpx.Response] = None
        self._executed = False
        self._closed = False
        self._client = httpx.Client(transport=transport)

    @classmethod
    def from_query(cls, builder: QueryBuilder, **kwargs: Any) -> Request:
        """Build a GET request for the URL produced by *builder*."""
        return cls(builder.build(), "GET", **kwargs)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def timeout_ms(self) -> int:
        """Connect/read timeout in milliseconds; 0 means no timeout."""
        return self._timeout_ms

    @property
    def follow_redirects(self) -> bool:
        """Whether redirects are followed automatically."""
        return self._follow_redirects

    @property
    def executed(self) -> bool:
        return self._executed

    @property
    def closed(self) -> bool:
        return self._closed

    def set_header(self, key: str, value: str) -> Request:
        """Set a request header, replacing any previous value.

        Returns:
            self, for chaining.
        """
        self._ensure_configurable()
        self.headers[key] = value
        return self

    def set_request_timeout(self, timeout_ms: int) -> Request:
        """Set the timeout, in milliseconds, for connecting and for reading.

        ``0`` disables the timeout.

        Returns:
            self, for chaining.
        """
        self._ensure_configurable()
        if timeout_ms < 0:
            raise InvalidOperationError(f"Timeout must not be negative, got {timeout_ms}")
        self._timeout_ms = timeout_ms
        return self

    def set_follow_redirects(self, follow: bool) -> Request:
        """Set whether redirects should be followed.

        Returns:
            self, for chaining.
        """
        self._ensure_configurable()
        self._follow_redirects = follow
        return self

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def execute(self) -> Response:
        """Execute the request.

        Returns:
            The :class:`~hookline.http.Response`. Its status has been
            received; the body is read lazily.

        Raises:
            TransportError: If the exchange fails at the network level.
            InvalidOperationError: If the request was already executed or
                closed.
        """
        self._ensure_configurable()
        self._executed = True
        return Response(self)

    def execute_with_body(self, body: str) -> Response:
        """Execute the request with *body* encoded as UTF-8. Not allowed for GET.

        Raises:
            InvalidOperationError: For a GET request; nothing is sent.
        """
        if self.method == "GET":
            raise InvalidOperationError("Body may not be specified in GET requests")
        data = body.encode("utf-8")
        self.set_header("Content-Length", str(len(data)))
        self._content = data
        return self.execute()

    def execute_with_json(self, body: Any) -> Response:
        """Execute the request with *body* serialised as JSON. Not allowed for GET."""
        if self.method == "GET":
            raise InvalidOperationError("Body may not be specified in GET requests")
        return self.set_header("Content-Type", "application/json").execute_with_body(to_json(body))

    def execute_with_url_encoded_form(self, params: Mapping[str, Any]) -> Response:
        """Execute the request with *params* as url-encoded form data. Not allowed for GET.

        Values are converted with :func:`str` before encoding; key order is
        preserved.
        """
        if self.method == "GET":
            raise InvalidOperationError("Body may not be specified in GET requests")
        form = QueryBuilder("")
        for key, value in params.items():
            form.append(key, str(value))
        return self.set_header(
            "Content-Type", "application/x-www-form-urlencoded"
        ).execute_with_body(form.query)

    def _exchange(self) -> httpx.Response:
        """Send the request unless that already happened, returning the streamed response."""
        if self._raw is None:
            request = self._client.build_request(
                self.method,
                self.url,
                headers=self.headers,
                content=self._content,
                timeout=self._timeout_ms / 1000 if self._timeout_ms else None,
            )
            try:
                self._raw = self._client.send(
                    request, stream=True, follow_redirects=self._follow_redirects
                )
            except httpx.RequestError as exc:
                raise TransportError(f"{self.method} {self.url} failed: {exc}") from exc
            get_output().debug(
                f"{self.method} {self.url} -> {self._raw.status_code} {self._raw.reason_phrase}"
            )
        return self._raw

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        """Release the connection. Safe to call more than once; never raises."""
        if self._closed:
            return
        self._closed = True
        try:
            try:
                if self._raw is not None:
                    self._raw.close()
            finally:
                self._client.close()
        except (httpx.HTTPError, OSError) as exc:
            get_output().debug(f"Ignoring error while closing {self.method} {self.url}: {exc}")

    def __enter__(self) -> Request:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"

    def _ensure_configurable(self) -> None:
        if self._closed:
            raise InvalidOperationError(f"{self!r} is closed")
        if self._executed:
            raise InvalidOperationError(f"{self!r} has already been executed")


def _parse_url(url: str) -> str:
    """Validate that *url* is an absolute http(s) URL and return it normalised."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise TransportError(f"Malformed URL {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise TransportError(f"Malformed URL {url!r}: expected an absolute http(s) URL")
    return str(parsed)
