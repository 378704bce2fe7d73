"""Single-shot delayed emission."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from hookline.rx import scheduler
from hookline.rx.observable import Observable, Subscriber


class _PendingEmission:
    """One scheduled emission. The underscore methods run on the loop thread."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay: float,
        value: Any,
        subscriber: Subscriber,
    ) -> None:
        self._loop = loop
        self._delay = delay
        self._value = value
        self._subscriber = subscriber
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def start(self) -> None:
        self._loop.call_soon_threadsafe(self._schedule)

    def _schedule(self) -> None:
        if not self._cancelled:
            self._handle = self._loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._subscriber.on_next(self._value)
        self._subscriber.on_completed()

    def _cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def dispose(self) -> None:
        try:
            self._loop.call_soon_threadsafe(self._cancel)
        except RuntimeError:
            # Loop already closed; nothing left to cancel.
            pass


def timer(
    delay: float,
    value: Any = 0,
    *,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> Observable:
    """Return an :class:`Observable` that emits *value* after *delay* seconds, then completes.

    Each subscription schedules its own emission with ``loop.call_later``;
    disposing the subscription before it fires cancels it.

    Args:
        delay: Seconds to wait before emitting. Negative values count as 0.
        value: The item to emit.
        loop: Event loop to schedule on. Defaults to the shared loop from
            :func:`hookline.rx.scheduler.get_event_loop`.
    """
    delay = max(delay, 0.0)

    def on_subscribe(subscriber: Subscriber) -> Any:
        target = loop if loop is not None else scheduler.get_event_loop()
        pending = _PendingEmission(target, delay, value, subscriber)
        pending.start()
        return pending.dispose

    return Observable(on_subscribe)
