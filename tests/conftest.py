"""Shared test fixtures for hookline.

Provides helpers for building :class:`httpx.MockTransport` handlers and
resets every piece of process-wide state (output manager, config,
forbidden-context predicate, scheduler loop) so tests stay isolated.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from hookline.config import reset_config
from hookline.output import reset_output
from hookline.rx import reset_forbidden_context, scheduler


# ---------------------------------------------------------------------------
# Global state
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_global_state() -> None:
    """Reset output, config and the forbidden-context predicate around every test."""
    reset_output()
    reset_config()
    reset_forbidden_context()
    yield
    reset_output()
    reset_config()
    reset_forbidden_context()


@pytest.fixture(scope="session", autouse=True)
def _stop_scheduler() -> None:
    """Stop the shared scheduler loop once the session is over."""
    yield
    scheduler.shutdown(timeout=2)


# ---------------------------------------------------------------------------
# HTTP transport helpers
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for :class:`RecordingTransport` instances.

    Call with a handler, or with ``status``/``content``/``headers`` for a
    canned response.
    """

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        status: int = 200,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> RecordingTransport:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, content=content, headers=headers)

        return RecordingTransport(handler)

    return _make


@pytest.fixture
def echo_transport() -> RecordingTransport:
    """Transport that answers every request with its own body and content type."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=request.content,
            headers={"content-type": request.headers.get("content-type", "text/plain")},
        )

    return RecordingTransport(handler)
