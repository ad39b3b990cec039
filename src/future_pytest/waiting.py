"""Bounded observation of futures."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

AnyFuture = Union[concurrent.futures.Future, asyncio.Future]


class SettlementKind(Enum):
    """Outcome of observing a future."""

    VALUE = "value"
    ERROR = "error"
    PENDING = "pending"
    TIMED_OUT = "timed_out"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class Settlement:
    """Tagged result of a single observation."""

    kind: SettlementKind
    value: Any = None
    cause: Optional[BaseException] = None
    interrupt: Optional[BaseException] = None

    @property
    def is_settled(self) -> bool:
        return self.kind in (SettlementKind.VALUE, SettlementKind.ERROR)

    @classmethod
    def of_value(cls, value: Any) -> "Settlement":
        return cls(SettlementKind.VALUE, value=value)

    @classmethod
    def of_error(cls, cause: BaseException) -> "Settlement":
        return cls(SettlementKind.ERROR, cause=cause)


@dataclass(frozen=True)
class WaitBudget:
    """Immutable timeout for one evaluation."""

    seconds: float

    @classmethod
    def of(cls, timeout: Union[timedelta, float, int, None]) -> "WaitBudget":
        """
        Build a budget from a timedelta or a number of seconds.

        Raises:
            ValueError: If timeout is None, negative, NaN or infinite.
        """
        if timeout is None:
            raise ValueError("timeout should not be None")
        if isinstance(timeout, timedelta):
            seconds = timeout.total_seconds()
        elif isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ValueError(f"timeout must be a timedelta or seconds, got {timeout!r}")
        else:
            seconds = float(timeout)

        if not math.isfinite(seconds):
            raise ValueError(f"timeout must be finite, got {seconds}s")
        if seconds < 0:
            raise ValueError(f"timeout must not be negative, got {seconds}s")
        return cls(seconds)

    @property
    def millis(self) -> int:
        return int(self.seconds * 1000)

    def __str__(self) -> str:
        return f"{self.millis} milliseconds"


def _settled_state(future: AnyFuture) -> Settlement:
    # Caller guarantees future.done(); a cancelled future counts as failed
    try:
        cause = future.exception()
    except (asyncio.CancelledError, concurrent.futures.CancelledError) as e:
        return Settlement.of_error(e)
    if cause is not None:
        return Settlement.of_error(cause)
    return Settlement.of_value(future.result())


def inspect_settlement(future: AnyFuture) -> Settlement:
    """Read the state of a future without blocking."""
    if not future.done():
        return Settlement(SettlementKind.PENDING)
    return _settled_state(future)


def await_settlement(future: concurrent.futures.Future, budget: WaitBudget) -> Settlement:
    """
    Block the calling thread until the future settles or the budget runs out.

    A KeyboardInterrupt delivered while blocked ends the wait early and is
    reported as INTERRUPTED; the caller decides whether that is fatal.

    Args:
        future: Future to observe. It is never cancelled or mutated.
        budget: Maximum time to wait.

    Returns:
        Settlement tagged VALUE, ERROR, TIMED_OUT or INTERRUPTED.
    """
    try:
        cause = future.exception(timeout=budget.seconds)
    except concurrent.futures.TimeoutError:
        logger.debug(f"Future still pending after {budget}")
        return Settlement(SettlementKind.TIMED_OUT)
    except concurrent.futures.CancelledError as e:
        return Settlement.of_error(e)
    except KeyboardInterrupt as e:
        logger.warning("Wait for future was interrupted")
        return Settlement(SettlementKind.INTERRUPTED, interrupt=e)

    if cause is not None:
        return Settlement.of_error(cause)
    return Settlement.of_value(future.result())


async def await_settlement_async(future: AnyFuture, budget: WaitBudget) -> Settlement:
    """
    Await a future until it settles or the budget runs out.

    The observed future is never cancelled; cancellation of the awaiting
    task propagates. Concurrent futures wake the running loop through a
    done callback that outlives a timeout, since concurrent futures cannot
    drop callbacks; once the loop is closed that callback does nothing.

    Returns:
        Settlement tagged VALUE, ERROR or TIMED_OUT.
    """
    if isinstance(future, asyncio.Future):
        waiter = future
    else:
        if future.done():
            return _settled_state(future)
        waiter = _loop_waiter(future)

    done, _ = await asyncio.wait({waiter}, timeout=budget.seconds)
    if not done:
        if waiter is not future:
            waiter.cancel()
        logger.debug(f"Future still pending after {budget}")
        return Settlement(SettlementKind.TIMED_OUT)
    return _settled_state(future)


def _loop_waiter(future: concurrent.futures.Future) -> asyncio.Future:
    loop = asyncio.get_running_loop()
    waiter = loop.create_future()

    def _wake() -> None:
        if not waiter.done():
            waiter.set_result(None)

    def _on_settled(_: concurrent.futures.Future) -> None:
        if loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(_wake)
        except RuntimeError:
            # Loop closed between the check and the call
            logger.debug("Future settled after its event loop closed")

    future.add_done_callback(_on_settled)
    return waiter
