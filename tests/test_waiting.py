"""Tests for the bounded wait primitive."""

import asyncio
import concurrent.futures
import logging
from datetime import timedelta

import pytest

from future_pytest.waiting import (
    SettlementKind,
    WaitBudget,
    await_settlement,
    await_settlement_async,
    inspect_settlement,
)
from tests.helpers import InterruptedFuture, failed_future, resolved_future


# =============================================================================
# WaitBudget
# =============================================================================


def test_budget_from_seconds_and_timedelta():
    assert WaitBudget.of(2).seconds == 2.0
    assert WaitBudget.of(timedelta(milliseconds=1500)).millis == 1500
    assert str(WaitBudget.of(0.25)) == "250 milliseconds"


@pytest.mark.parametrize(
    "value",
    [None, -1, timedelta(seconds=-1), "1", False, float("nan"), float("inf"), float("-inf")],
)
def test_budget_rejects_invalid_values(value):
    with pytest.raises(ValueError):
        WaitBudget.of(value)


# =============================================================================
# Blocking Wait
# =============================================================================


def test_inspect_does_not_block(pending_future):
    assert inspect_settlement(pending_future).kind is SettlementKind.PENDING
    assert inspect_settlement(resolved_future(3)).value == 3


def test_await_value(settle_later):
    settlement = await_settlement(settle_later(0.01, value="v"), WaitBudget.of(1))

    assert settlement.kind is SettlementKind.VALUE
    assert settlement.value == "v"
    assert settlement.is_settled


def test_await_error():
    cause = LookupError("missing")

    settlement = await_settlement(failed_future(cause), WaitBudget.of(1))

    assert settlement.kind is SettlementKind.ERROR
    assert settlement.cause is cause


def test_await_timeout(pending_future):
    settlement = await_settlement(pending_future, WaitBudget.of(0.02))

    assert settlement.kind is SettlementKind.TIMED_OUT
    assert not settlement.is_settled
    assert not pending_future.done()


def test_await_interrupted():
    settlement = await_settlement(InterruptedFuture(), WaitBudget.of(1))

    assert settlement.kind is SettlementKind.INTERRUPTED
    assert isinstance(settlement.interrupt, KeyboardInterrupt)


def test_await_cancelled():
    future = concurrent.futures.Future()
    future.cancel()

    settlement = await_settlement(future, WaitBudget.of(1))

    assert settlement.kind is SettlementKind.ERROR
    assert isinstance(settlement.cause, concurrent.futures.CancelledError)


# =============================================================================
# Async Wait
# =============================================================================


async def test_async_wait_does_not_cancel_future():
    future = asyncio.get_running_loop().create_future()

    settlement = await await_settlement_async(future, WaitBudget.of(0.02))

    assert settlement.kind is SettlementKind.TIMED_OUT
    assert not future.cancelled()
    future.cancel()


async def test_async_wait_for_concurrent_future(settle_later):
    settlement = await await_settlement_async(
        settle_later(0.01, exception=OSError("io")), WaitBudget.of(1)
    )

    assert settlement.kind is SettlementKind.ERROR
    assert isinstance(settlement.cause, OSError)


async def test_async_wait_for_cancelled_concurrent_future():
    future = concurrent.futures.Future()
    asyncio.get_running_loop().call_later(0.01, future.cancel)

    settlement = await await_settlement_async(future, WaitBudget.of(1))

    assert settlement.kind is SettlementKind.ERROR
    assert isinstance(settlement.cause, concurrent.futures.CancelledError)


def test_late_settlement_after_loop_closed(caplog):
    """A concurrent future settling after the loop is gone logs no callback error."""
    future = concurrent.futures.Future()

    settlement = asyncio.run(await_settlement_async(future, WaitBudget.of(0.01)))
    assert settlement.kind is SettlementKind.TIMED_OUT

    with caplog.at_level(logging.ERROR, logger="concurrent.futures"):
        future.set_result("late")

    assert "exception calling callback" not in caplog.text
    assert not future.cancelled()
