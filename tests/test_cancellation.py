"""Tests for the Context signal and run_cancellable."""

from __future__ import annotations

import threading
import time
import traceback
from collections.abc import Callable

import pytest

from roads_client.cancellation import (
    Cancelled,
    Context,
    DeadlineExceeded,
    _raise_cancelled,
    run_cancellable,
)


class TestContext:
    """Test the one-shot cancellation signal."""

    def test_new_context_is_live(self) -> None:
        ctx = Context()
        assert not ctx.done()
        assert ctx.error is None

    def test_cancel_fires_with_cancelled(self) -> None:
        ctx = Context()
        ctx.cancel()
        assert ctx.done()
        assert type(ctx.error) is Cancelled

    def test_first_reason_wins(self) -> None:
        ctx = Context()
        ctx.cancel("first")
        ctx.cancel("second")
        assert str(ctx.error) == "first"

    def test_deadline_fires_with_deadline_exceeded(self) -> None:
        ctx = Context(timeout=0.01)
        assert ctx.wait(2)
        assert isinstance(ctx.error, DeadlineExceeded)
        assert isinstance(ctx.error, Cancelled)

    def test_cancel_before_deadline_keeps_cancelled(self) -> None:
        ctx = Context(timeout=0.05)
        ctx.cancel()
        time.sleep(0.1)
        assert type(ctx.error) is Cancelled

    def test_wait_times_out_while_live(self) -> None:
        assert Context().wait(0.01) is False

    def test_background_never_fires(self) -> None:
        ctx = Context.background()
        assert ctx.wait(0.01) is False
        assert ctx.error is None

    def test_context_manager_cancels_on_exit(self) -> None:
        with Context(timeout=60) as ctx:
            assert not ctx.done()
        assert ctx.done()

    def test_callback_runs_on_fire(self) -> None:
        ctx = Context()
        calls: list[str] = []
        ctx.add_done_callback(lambda: calls.append("fired"))
        ctx.cancel()
        ctx.cancel()
        assert calls == ["fired"]

    def test_callback_added_after_fire_runs_immediately(self) -> None:
        ctx = Context()
        ctx.cancel()
        calls: list[str] = []
        ctx.add_done_callback(lambda: calls.append("fired"))
        assert calls == ["fired"]

    def test_removed_callback_does_not_run(self) -> None:
        ctx = Context()
        calls: list[str] = []

        def callback() -> None:
            calls.append("fired")

        ctx.add_done_callback(callback)
        ctx.remove_done_callback(callback)
        ctx.cancel()
        assert calls == []


class TestRunCancellable:
    """Test racing a blocking call against a Context."""

    def test_returns_result_when_call_finishes_first(self) -> None:
        assert run_cancellable(Context(), lambda: 42) == 42

    def test_reraises_call_exception_unchanged(self) -> None:
        error = KeyError("boom")

        def fail() -> None:
            raise error

        with pytest.raises(KeyError) as exc_info:
            run_cancellable(Context(), fail)
        assert exc_info.value is error

    def test_runs_on_another_thread(self) -> None:
        worker = run_cancellable(Context(), threading.get_ident)
        assert worker != threading.get_ident()

    def test_already_cancelled_context_skips_the_call(self) -> None:
        ctx = Context()
        ctx.cancel()
        called = threading.Event()

        with pytest.raises(Cancelled):
            run_cancellable(ctx, called.set)
        assert not called.wait(0.05)

    def test_repeated_raises_do_not_grow_the_stored_error(self) -> None:
        ctx = Context()
        ctx.cancel("stop")
        depths = []
        for _ in range(5):
            with pytest.raises(Cancelled) as exc_info:
                run_cancellable(ctx, lambda: None)
            assert exc_info.value is not ctx.error
            assert str(exc_info.value) == "stop"
            depths.append(len(traceback.extract_tb(exc_info.value.__traceback__)))
        assert len(set(depths)) == 1
        assert ctx.error is not None
        assert ctx.error.__traceback__ is None

    def test_raised_copy_keeps_deadline_type(self) -> None:
        ctx = Context(timeout=0.01)
        assert ctx.wait(2)
        with pytest.raises(DeadlineExceeded, match="deadline exceeded"):
            run_cancellable(ctx, lambda: None)
        assert ctx.error is not None
        assert ctx.error.__traceback__ is None

    def test_context_firing_while_registering_skips_the_call(self) -> None:
        class FiresOnRegister(Context):
            def add_done_callback(self, fn: Callable[[], object]) -> None:
                self.cancel("raced")
                super().add_done_callback(fn)

        called = threading.Event()
        with pytest.raises(Cancelled, match="raced"):
            run_cancellable(FiresOnRegister(), called.set)
        assert not called.wait(0.05)

    def test_raising_from_live_context_is_an_error(self) -> None:
        with pytest.raises(RuntimeError, match="has not fired"):
            _raise_cancelled(Context())

    def test_deadline_beats_slow_call(self) -> None:
        release = threading.Event()
        finished = threading.Event()

        def slow() -> str:
            release.wait(5)
            finished.set()
            return "late"

        try:
            with pytest.raises(DeadlineExceeded):
                run_cancellable(Context(timeout=0.05), slow)
        finally:
            release.set()
        # The abandoned worker still runs to completion without error.
        assert finished.wait(2)

    def test_explicit_cancel_beats_slow_call(self) -> None:
        ctx = Context()
        release = threading.Event()
        threading.Timer(0.05, ctx.cancel).start()
        try:
            with pytest.raises(Cancelled):
                run_cancellable(ctx, lambda: release.wait(5))
        finally:
            release.set()

    def test_cancel_then_result_still_reports_cancel(self) -> None:
        ctx = Context()

        def cancel_then_return() -> str:
            ctx.cancel()
            return "too late"

        with pytest.raises(Cancelled):
            run_cancellable(ctx, cancel_then_return)

    def test_late_failure_after_cancel_is_dropped(self) -> None:
        ctx = Context()

        def cancel_then_fail() -> None:
            ctx.cancel()
            raise RuntimeError("ignored")

        with pytest.raises(Cancelled):
            run_cancellable(ctx, cancel_then_fail)

    def test_no_callbacks_left_on_long_lived_context(self) -> None:
        ctx = Context()
        for i in range(5):
            assert run_cancellable(ctx, lambda i=i: i) == i
        assert ctx._callbacks == []

    def test_concurrent_calls_are_independent(self) -> None:
        ctx = Context()
        results: list[int] = []
        lock = threading.Lock()

        def call(n: int) -> None:
            value = run_cancellable(ctx, lambda: n * 2)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=call, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)
        assert sorted(results) == [n * 2 for n in range(8)]
