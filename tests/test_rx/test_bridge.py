"""Tests for the blocking push-to-pull bridge."""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Any

import pytest

from hookline.exceptions import BlockingCallError
from hookline.output import OutputManager, set_output
from hookline.rx.bridge import (
    BlockingResult,
    get_result_blocking,
    in_event_loop_thread,
    is_main_thread,
    keep_most_recent,
    set_forbidden_context,
)
from hookline.rx.observable import Observable, Subscriber


class CountingSource:
    """Observable wrapper that counts subscriptions."""

    def __init__(self, on_subscribe) -> None:
        self._observable = Observable(on_subscribe)
        self.subscriptions = 0

    def subscribe(self, subscriber: Subscriber):
        self.subscriptions += 1
        return self._observable.subscribe(subscriber)


def _emitting(*values: Any, error: BaseException | None = None) -> CountingSource:
    def on_subscribe(subscriber: Subscriber) -> None:
        for value in values:
            subscriber.on_next(value)
        if error is not None:
            subscriber.on_error(error)
        else:
            subscriber.on_completed()

    return CountingSource(on_subscribe)


def _threaded(*values: Any, error: BaseException | None = None, delay: float = 0.02) -> Observable:
    """Source that emits from a background thread after *delay* seconds."""

    def on_subscribe(subscriber: Subscriber) -> None:
        def run() -> None:
            time.sleep(delay)
            for value in values:
                subscriber.on_next(value)
            if error is not None:
                subscriber.on_error(error)
            else:
                subscriber.on_completed()

        threading.Thread(target=run, daemon=True).start()

    return Observable(on_subscribe)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class TestResults:
    def test_last_value_wins(self) -> None:
        assert get_result_blocking(_emitting("A", "B", "C")) == BlockingResult("C", None)

    def test_single_value(self) -> None:
        assert get_result_blocking(_emitting("V")) == ("V", None)

    def test_error_only(self) -> None:
        boom = RuntimeError("E")
        result = get_result_blocking(_emitting(error=boom))
        assert result.value is None
        assert result.error is boom

    def test_value_then_error_keeps_both(self) -> None:
        boom = ValueError("late failure")
        value, error = get_result_blocking(_emitting(1, 2, error=boom))
        assert value == 2
        assert error is boom

    def test_empty_completion(self) -> None:
        assert get_result_blocking(_emitting()) == (None, None)

    def test_errors_returned_not_raised(self) -> None:
        result = get_result_blocking(_emitting(error=KeyError("k")))
        assert isinstance(result.error, KeyError)

    def test_events_from_other_thread(self) -> None:
        assert get_result_blocking(_threaded(1, 2, 3)) == (3, None)

    def test_error_from_other_thread(self) -> None:
        boom = OSError("disk gone")
        assert get_result_blocking(_threaded(error=boom)) == (None, boom)

    def test_subscribes_once(self) -> None:
        source = _emitting("x")
        get_result_blocking(source)
        assert source.subscriptions == 1


class TestReducer:
    def test_keep_most_recent(self) -> None:
        assert keep_most_recent("old", "new") == "new"
        assert keep_most_recent(None, 0) == 0


# ---------------------------------------------------------------------------
# Forbidden context
# ---------------------------------------------------------------------------


class TestForbiddenContext:
    def test_argument_predicate_blocks_without_subscribing(self) -> None:
        source = _emitting("never")
        with pytest.raises(BlockingCallError):
            get_result_blocking(source, is_forbidden_context=lambda: True)
        assert source.subscriptions == 0

    def test_installed_predicate(self) -> None:
        set_forbidden_context(lambda: True)
        source = _emitting("never")
        with pytest.raises(BlockingCallError):
            get_result_blocking(source)
        assert source.subscriptions == 0

    def test_argument_overrides_installed(self) -> None:
        set_forbidden_context(lambda: True)
        assert get_result_blocking(_emitting(1), is_forbidden_context=lambda: False) == (1, None)

    def test_ui_thread_predicate(self) -> None:
        ui_thread = threading.current_thread()
        set_forbidden_context(lambda: threading.current_thread() is ui_thread)
        with pytest.raises(BlockingCallError):
            get_result_blocking(_emitting(1))

        results: list[BlockingResult] = []
        worker = threading.Thread(target=lambda: results.append(get_result_blocking(_emitting(1))))
        worker.start()
        worker.join(timeout=5)
        assert results == [(1, None)]

    def test_default_refuses_inside_event_loop(self) -> None:
        source = _emitting("never")

        async def call() -> None:
            get_result_blocking(source)

        with pytest.raises(BlockingCallError):
            asyncio.run(call())
        assert source.subscriptions == 0

    def test_default_allows_plain_thread(self) -> None:
        assert get_result_blocking(_emitting(5)) == (5, None)

    def test_in_event_loop_thread(self) -> None:
        async def probe() -> bool:
            return in_event_loop_thread()

        assert in_event_loop_thread() is False
        assert asyncio.run(probe()) is True

    def test_is_main_thread(self) -> None:
        seen: list[bool] = []
        worker = threading.Thread(target=lambda: seen.append(is_main_thread()))
        worker.start()
        worker.join(timeout=5)
        assert seen == [False]
        assert is_main_thread() is (threading.current_thread() is threading.main_thread())


# ---------------------------------------------------------------------------
# Timeout
# ---------------------------------------------------------------------------


class TestTimeout:
    def test_timeout_returns_partial_result(self, capsys) -> None:
        set_output(OutputManager(no_color=True))
        torn_down: list[bool] = []

        def on_subscribe(subscriber: Subscriber):
            subscriber.on_next("partial")
            return lambda: torn_down.append(True)

        result = get_result_blocking(Observable(on_subscribe), timeout=0.05)
        assert result == ("partial", None)
        assert torn_down == [True]
        assert "did not terminate" in capsys.readouterr().err

    def test_timeout_not_hit_when_source_finishes(self) -> None:
        assert get_result_blocking(_threaded("done"), timeout=5) == ("done", None)
