"""Exception hierarchy for hookline.

All exceptions inherit from :class:`HooklineError` so that host code can
catch everything raised by this package with a single ``except`` clause.
Failures surface at the call that triggers them; nothing in the package
retries.

Subclass hierarchy::

    HooklineError
    +-- TransportError          (malformed URL, connect/read failure, timeout)
    +-- HttpException           (non-2xx status at assert_ok() / stream())
    +-- InvalidOperationError   (body on GET, reuse of an executed Request)
    +-- BlockingCallError       (blocking bridge on the forbidden context)
    +-- CodecError              (JSON encode / decode / validation)
    +-- ConfigError             (invalid configuration)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hookline.http.request import Request
    from hookline.http.response import Response


class HooklineError(Exception):
    """Base exception for all hookline errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(HooklineError):
    """Raised on network-level failures (bad URL, DNS, refused connection, timeout).

    The originating :mod:`httpx` exception is chained as ``__cause__``.
    """


class InvalidOperationError(HooklineError):
    """Raised when a request is used in a way it does not support.

    Sending a body with ``GET`` and touching a :class:`~hookline.http.Request`
    after it has been executed both land here, before any network I/O.
    """


class BlockingCallError(HooklineError):
    """Raised when the blocking bridge is called from a context that must never block."""


class CodecError(HooklineError):
    """Raised when a value cannot be serialised to or parsed from JSON."""


class ConfigError(HooklineError):
    """Raised for configuration problems (unreadable file, invalid JSON, bad values)."""


class HttpException(HooklineError):
    """Raised by :meth:`Response.assert_ok` for a non-2xx status.

    The exception is a snapshot of the failed exchange taken when it is
    created; callers can log it or decide to retry from its fields.

    Attributes:
        method: The HTTP method of the request (e.g. ``"GET"``).
        url: The request URL.
        status_code: The response status code.
        status_message: The response reason phrase.
        request: The :class:`~hookline.http.Request` that was sent.
        response: The :class:`~hookline.http.Response` that was received.
    """

    def __init__(self, request: Request, response: Response):
        super().__init__(f"{response.status_code}: {response.status_message}")
        self.request = request
        self.response = response
        self.status_code = response.status_code
        self.status_message = response.status_message
        self.method = request.method
        self.url = request.url
