"""Shared asyncio runtime for timed events.

:func:`~hookline.rx.timer` schedules its emission with
:meth:`asyncio.AbstractEventLoop.call_later`. Callers that already run an
event loop pass it in; everybody else shares the loop returned by
:func:`get_event_loop`, which runs forever on a daemon thread until
:func:`shutdown` stops it.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Optional


class EventLoopThread:
    """An asyncio event loop running on its own daemon thread.

    Args:
        name: Thread name, visible in debuggers and thread dumps.
    """

    def __init__(self, name: str = "hookline-scheduler") -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the loop and wait up to *timeout* seconds for the thread to exit."""
        if not self._thread.is_alive():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)


_lock = threading.Lock()
_default: Optional[EventLoopThread] = None


def get_event_loop() -> asyncio.AbstractEventLoop:
    """Return the shared scheduler loop, starting it on first use."""
    global _default
    with _lock:
        if _default is None or not _default.is_running:
            _default = EventLoopThread()
        return _default.loop


def shutdown(timeout: Optional[float] = None) -> None:
    """Stop the shared scheduler loop. A later :func:`get_event_loop` starts a new one."""
    global _default
    with _lock:
        runner, _default = _default, None
    if runner is not None:
        runner.stop(timeout)
