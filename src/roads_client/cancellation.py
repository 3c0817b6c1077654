"""
Cancellation signals and the cancellable-call race.

A ``Context`` is a one-shot signal that fires either when ``cancel()`` is
called or when its deadline passes. ``run_cancellable`` runs a blocking
callable on its own thread and returns whichever settles first: the
callable's outcome or the context's reason.

Usage::

    from roads_client.cancellation import Context, run_cancellable

    with Context(timeout=5) as ctx:
        value = run_cancellable(ctx, slow_call)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, NoReturn, TypeVar

T = TypeVar("T")


class Cancelled(Exception):
    """The context was cancelled before a result was available."""


class DeadlineExceeded(Cancelled):
    """The context's deadline passed before a result was available."""


class Context:
    """
    One-shot cancellation signal with an optional deadline.

    Args:
        timeout: Seconds until the context fires with ``DeadlineExceeded``.
            ``None`` means no deadline; only ``cancel()`` fires it.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._fired = threading.Event()
        self._lock = threading.Lock()
        self._error: Cancelled | None = None
        self._callbacks: list[Callable[[], object]] = []
        self._timer: threading.Timer | None = None
        if timeout is not None:
            self._timer = threading.Timer(
                timeout, self._fire, args=(DeadlineExceeded("context deadline exceeded"),)
            )
            self._timer.daemon = True
            self._timer.start()

    @classmethod
    def background(cls) -> Context:
        """A context that never fires."""
        return cls()

    def __enter__(self) -> Context:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    @property
    def error(self) -> Cancelled | None:
        """Why the context fired, or None while it is still live."""
        return self._error

    def done(self) -> bool:
        return self._fired.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the context fires. Returns False on timeout."""
        return self._fired.wait(timeout)

    def cancel(self, reason: str = "context canceled") -> None:
        """Fire with ``Cancelled``. No-op if already fired."""
        self._fire(Cancelled(reason))

    def add_done_callback(self, fn: Callable[[], object]) -> None:
        """Call ``fn()`` when the context fires (immediately if it already has)."""
        with self._lock:
            if self._error is None:
                self._callbacks.append(fn)
                return
        fn()

    def remove_done_callback(self, fn: Callable[[], object]) -> None:
        with self._lock:
            if fn in self._callbacks:
                self._callbacks.remove(fn)

    def _fire(self, error: Cancelled) -> None:
        with self._lock:
            if self._error is not None:
                return
            self._error = error
            callbacks, self._callbacks = self._callbacks, []
        if self._timer is not None:
            self._timer.cancel()
        self._fired.set()
        for fn in callbacks:
            fn()


def _run_into(future: Future[Any], fn: Callable[[], Any]) -> None:
    # Nobody may be waiting on the future any more; setting it never blocks.
    try:
        result = fn()
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


def _raise_cancelled(ctx: Context) -> NoReturn:
    # Raise a copy; ctx.error itself never collects a __traceback__.
    error = ctx.error
    if error is None:
        msg = "context has not fired"
        raise RuntimeError(msg)
    raise type(error)(*error.args)


def run_cancellable(ctx: Context, fn: Callable[[], T]) -> T:
    """
    Run ``fn`` on a new thread and race it against ``ctx``.

    Returns ``fn()``'s value or re-raises its exception unchanged if it
    settles first. If ``ctx`` fires first, raises a new exception of the same
    type and message as ``ctx.error``; the worker thread is not interrupted
    and its outcome is dropped when it finishes.

    Args:
        ctx: Cancellation signal to race against.
        fn: Zero-argument blocking callable.
    """
    if ctx.error is not None:
        _raise_cancelled(ctx)

    future: Future[T] = Future()
    settled = threading.Event()
    lock = threading.Lock()
    winner: list[str] = []

    def settle(source: str) -> None:
        with lock:
            if not winner:
                winner.append(source)
        settled.set()

    def on_cancel() -> None:
        settle("cancel")

    future.add_done_callback(lambda _f: settle("result"))
    ctx.add_done_callback(on_cancel)

    # The context may have fired since the check above; then never start the call.
    if not settled.is_set():
        worker = threading.Thread(target=_run_into, args=(future, fn), daemon=True)
        worker.start()
    try:
        settled.wait()
    finally:
        ctx.remove_done_callback(on_cancel)

    if winner[0] == "result":
        return future.result()
    _raise_cancelled(ctx)
