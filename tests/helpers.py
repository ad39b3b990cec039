"""Helpers for building futures in a known state."""

from concurrent.futures import Future
from typing import Any


def failed_future(exception: BaseException) -> Future:
    future: Future = Future()
    future.set_exception(exception)
    return future


def resolved_future(value: Any) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future


class InterruptedFuture(Future):
    """A future whose waiters receive a KeyboardInterrupt while blocked."""

    def exception(self, timeout=None):
        raise KeyboardInterrupt()
