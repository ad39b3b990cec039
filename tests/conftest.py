"""
Shared fixtures for future matcher tests.

Futures are settled from timer threads so blocking matchers observe a real
transition while they wait.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Any, Callable, Iterator, List, Optional

import pytest


SettleLater = Callable[..., Future]


@pytest.fixture
def settle_later() -> Iterator[SettleLater]:
    """
    Return a helper that settles a future after a delay.

    Usage:
        future = settle_later(0.05, value=42)
        future = settle_later(0.05, exception=OSError("gone"))
    """
    timers: List[threading.Timer] = []

    def _settle_later(
        delay: float,
        value: Any = None,
        exception: Optional[BaseException] = None,
        future: Optional[Future] = None,
    ) -> Future:
        target = future if future is not None else Future()

        def _settle() -> None:
            if exception is not None:
                target.set_exception(exception)
            else:
                target.set_result(value)

        timer = threading.Timer(delay, _settle)
        timer.daemon = True
        timers.append(timer)
        timer.start()
        return target

    yield _settle_later

    for timer in timers:
        timer.cancel()


@pytest.fixture
def pending_future() -> Iterator[Future]:
    """A future nobody will ever settle."""
    future: Future = Future()
    yield future
    future.cancel()
