"""Blocking bridge from a push-based source to a single pulled result.

:func:`get_result_blocking` subscribes to a source, waits for it to
finish, and returns a :class:`BlockingResult` holding the most recent
value and the error, if any. Errors emitted by the source are returned,
never raised, so callers must check ``result.error``.

Blocking is refused on the host's non-blockable context (its UI thread,
or any thread running an asyncio event loop). What counts as that context
is decided by a predicate:

* passed per call as ``is_forbidden_context``, or
* installed process-wide with :func:`set_forbidden_context`, or
* the default, :func:`in_event_loop_thread`.

Example::

    set_forbidden_context(is_main_thread)

    value, error = get_result_blocking(timer(0.5, "done"))
    if error is not None:
        ...
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, NamedTuple, Optional

from hookline.exceptions import BlockingCallError
from hookline.output import get_output
from hookline.rx.observable import Source, Subscriber

ContextPredicate = Callable[[], bool]


class BlockingResult(NamedTuple):
    """Outcome of :func:`get_result_blocking`.

    Attributes:
        value: The last value the source emitted, or ``None``.
        error: The error the source failed with, or ``None``.
    """

    value: Any
    error: Optional[BaseException]


def keep_most_recent(previous: Any, value: Any) -> Any:
    """Reducer that keeps the latest emission and discards earlier ones."""
    return value


# ------------------------------------------------------------------ #
# Forbidden-context predicates
# ------------------------------------------------------------------ #


def in_event_loop_thread() -> bool:
    """True when the calling thread is running an asyncio event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def is_main_thread() -> bool:
    """True when called from the interpreter's main thread."""
    return threading.current_thread() is threading.main_thread()


_forbidden_context: Optional[ContextPredicate] = None


def get_forbidden_context() -> ContextPredicate:
    """Return the installed predicate, or :func:`in_event_loop_thread`."""
    return _forbidden_context or in_event_loop_thread


def set_forbidden_context(predicate: ContextPredicate) -> None:
    """Install *predicate* as the process-wide forbidden-context check.

    Hosts with a UI thread typically install
    ``lambda: threading.current_thread() is ui_thread``.
    """
    global _forbidden_context
    _forbidden_context = predicate


def reset_forbidden_context() -> None:
    """Restore the default predicate."""
    global _forbidden_context
    _forbidden_context = None


# ------------------------------------------------------------------ #
# Bridge
# ------------------------------------------------------------------ #


class _BlockingSubscriber(Subscriber):
    """Folds emissions into the value slot and releases a one-shot gate on termination.

    Slots are written under a lock before the gate is set; the waiter reads
    them after the gate fires, so it always sees the final writes.
    """

    def __init__(self, reducer: Callable[[Any, Any], Any] = keep_most_recent) -> None:
        self._reducer = reducer
        self._lock = threading.Lock()
        self._gate = threading.Event()
        self._value: Any = None
        self._error: Optional[BaseException] = None
        self._released = False

    def on_next(self, value: Any) -> None:
        with self._lock:
            if not self._released:
                self._value = self._reducer(self._value, value)

    def on_error(self, error: BaseException) -> None:
        with self._lock:
            if self._released:
                return
            self._error = error
            self._released = True
        self._gate.set()

    def on_completed(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        self._gate.set()

    def wait(self, timeout: Optional[float]) -> bool:
        return self._gate.wait(timeout)

    def result(self) -> BlockingResult:
        with self._lock:
            return BlockingResult(self._value, self._error)


def get_result_blocking(
    source: Source,
    *,
    is_forbidden_context: Optional[ContextPredicate] = None,
    timeout: Optional[float] = None,
) -> BlockingResult:
    """Block until *source* terminates and return its last value and error.

    Args:
        source: The event source to subscribe to.
        is_forbidden_context: Predicate overriding the installed one for
            this call.
        timeout: Seconds to wait. ``None`` waits until the source
            terminates. When the timeout elapses first, the subscription is
            disposed and whatever the slots hold is returned.

    Returns:
        ``BlockingResult(value, error)``.

    Raises:
        BlockingCallError: When called from the forbidden context. The
            source is not subscribed to.
    """
    forbidden = is_forbidden_context or get_forbidden_context()
    if forbidden():
        raise BlockingCallError(
            "get_result_blocking may not be called from this thread as it would block it"
        )

    subscriber = _BlockingSubscriber()
    subscription = source.subscribe(subscriber)
    if not subscriber.wait(timeout):
        subscription.dispose()
        get_output().warning(
            f"Source did not terminate within {timeout}s; returning the partial result"
        )
    return subscriber.result()
