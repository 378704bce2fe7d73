"""Minimal push-based event source types.

Just enough structure for :func:`~hookline.rx.get_result_blocking` and
:func:`~hookline.rx.timer`; this is not an operator library.

* :class:`Subscriber` -- receives ``on_next`` / ``on_error`` /
  ``on_completed`` notifications. Every method is a no-op by default.
* :class:`Subscription` -- handle returned by ``subscribe``; disposing it
  runs the source's teardown once.
* :class:`Observable` -- wraps an ``on_subscribe`` function that starts
  producing events for one subscriber and optionally returns a teardown.

Events reach a subscriber through a guard that enforces the usual
grammar: any number of ``on_next`` calls, then at most one terminal event.
Anything after the terminal event, or after disposal, is dropped.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Protocol, Union

Teardown = Union[Callable[[], None], "Subscription", None]


class Subscriber:
    """Receiver of events from a source. Override the methods you need."""

    def on_next(self, value: Any) -> None:
        """Called for every emitted item."""

    def on_error(self, error: BaseException) -> None:
        """Called once if the source fails. No further events follow."""

    def on_completed(self) -> None:
        """Called once when the source finishes successfully."""


class ActionSubscriber(Subscriber):
    """Subscriber that forwards each notification to a callback."""

    def __init__(
        self,
        on_next: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed

    def on_next(self, value: Any) -> None:
        if self._on_next is not None:
            self._on_next(value)

    def on_error(self, error: BaseException) -> None:
        if self._on_error is not None:
            self._on_error(error)

    def on_completed(self) -> None:
        if self._on_completed is not None:
            self._on_completed()


def create_action_subscriber(
    on_next: Optional[Callable[[Any], None]] = None,
    on_error: Optional[Callable[[BaseException], None]] = None,
    on_completed: Optional[Callable[[], None]] = None,
) -> Subscriber:
    """Create a subscriber that forwards notifications to callbacks.

    Args:
        on_next: Called with each item the source emits.
        on_error: Called with the error if the source fails.
        on_completed: Called after the last item if the source succeeds.

    Each callback is optional; a missing one ignores its notification.
    """
    return ActionSubscriber(on_next, on_error, on_completed)


class Source(Protocol):
    """Anything that can be subscribed to."""

    def subscribe(self, subscriber: Subscriber) -> Subscription: ...


class Subscription:
    """Handle to an active subscription.

    :meth:`dispose` is idempotent and thread-safe; the teardown runs at
    most once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._disposed = False
        self._teardown: Teardown = None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            teardown, self._teardown = self._teardown, None
        _run_teardown(teardown)

    def _attach(self, teardown: Teardown) -> None:
        """Attach the source's teardown, running it now if already disposed."""
        with self._lock:
            if not self._disposed:
                self._teardown = teardown
                return
        _run_teardown(teardown)


def _run_teardown(teardown: Teardown) -> None:
    if isinstance(teardown, Subscription):
        teardown.dispose()
    elif teardown is not None:
        teardown()


class _GuardedSubscriber(Subscriber):
    """Drops events that arrive after a terminal event or after disposal."""

    def __init__(self, downstream: Subscriber, subscription: Subscription) -> None:
        self._downstream = downstream
        self._subscription = subscription
        self._lock = threading.Lock()
        self._stopped = False

    @property
    def is_stopped(self) -> bool:
        return self._stopped or self._subscription.is_disposed

    def on_next(self, value: Any) -> None:
        if not self.is_stopped:
            self._downstream.on_next(value)

    def on_error(self, error: BaseException) -> None:
        if not self._stop():
            return
        try:
            self._downstream.on_error(error)
        finally:
            self._subscription.dispose()

    def on_completed(self) -> None:
        if not self._stop():
            return
        try:
            self._downstream.on_completed()
        finally:
            self._subscription.dispose()

    def _stop(self) -> bool:
        with self._lock:
            if self.is_stopped:
                return False
            self._stopped = True
            return True


class Observable:
    """A push-based source of events.

    Args:
        on_subscribe: Called once per subscriber with that subscriber. It
            starts emitting (synchronously or from any thread) and may
            return a teardown callable or :class:`Subscription` that is
            run when the subscription is disposed.

    Example::

        def emit(subscriber):
            subscriber.on_next(1)
            subscriber.on_completed()

        Observable(emit).subscribe(print)
    """

    def __init__(self, on_subscribe: Callable[[Subscriber], Teardown]) -> None:
        self._on_subscribe = on_subscribe

    def subscribe(
        self,
        subscriber: Union[Subscriber, Callable[[Any], None], None] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
    ) -> Subscription:
        """Subscribe a :class:`Subscriber`, or callbacks for each notification.

        An exception raised by ``on_subscribe`` before a terminal event is
        delivered to the subscriber's ``on_error``.

        Returns:
            The :class:`Subscription`; dispose it to stop receiving events.
        """
        if not isinstance(subscriber, Subscriber):
            subscriber = create_action_subscriber(subscriber, on_error, on_completed)
        subscription = Subscription()
        guarded = _GuardedSubscriber(subscriber, subscription)
        try:
            teardown = self._on_subscribe(guarded)
        except Exception as exc:
            if guarded.is_stopped:
                raise
            guarded.on_error(exc)
            return subscription
        subscription._attach(teardown)
        return subscription
