"""Push-to-pull bridge and small event producers.

* :func:`get_result_blocking` -- wait for a source to terminate and get
  ``(value, error)`` back, refusing to block the host's non-blockable
  context.
* :func:`create_action_subscriber` -- build a subscriber from callbacks.
* :func:`timer` -- emit one value after a delay, then complete.

Example::

    from hookline.rx import get_result_blocking, timer

    result = get_result_blocking(timer(1.0, "tick"))
    assert result == ("tick", None)
"""

from hookline.rx.bridge import (
    BlockingResult,
    get_result_blocking,
    in_event_loop_thread,
    is_main_thread,
    keep_most_recent,
    reset_forbidden_context,
    set_forbidden_context,
)
from hookline.rx.observable import (
    Observable,
    Subscriber,
    Subscription,
    create_action_subscriber,
)
from hookline.rx.timer import timer

__all__ = [
    "BlockingResult",
    "Observable",
    "Subscriber",
    "Subscription",
    "create_action_subscriber",
    "get_result_blocking",
    "in_event_loop_thread",
    "is_main_thread",
    "keep_most_recent",
    "reset_forbidden_context",
    "set_forbidden_context",
    "timer",
]
