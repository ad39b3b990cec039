"""Matchers for the eventual outcome of futures."""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Optional

from future_pytest.errors import InterruptedTestError
from future_pytest.matchers.base import BaseFutureMatcher, BlockingFutureMatcher, MatchResult
from future_pytest.matchers.validators import ExceptionType, ExceptionValidator, type_name
from future_pytest.waiting import (
    Settlement,
    SettlementKind,
    await_settlement,
    inspect_settlement,
)

if TYPE_CHECKING:
    from future_pytest.logging.evaluation_logger import EvaluationLogger
    from future_pytest.waiting import AnyFuture, WaitBudget


def render_cause(cause: Optional[BaseException]) -> str:
    """Render an exception with its message and traceback."""
    if cause is None:
        return "(None)"
    return "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))


class FutureFailedMatcher(BaseFutureMatcher):
    """
    Match a future that has already failed with a specific exception type.

    Never blocks: a pending future is a mismatch.

    Usage:
        FutureFailedMatcher(TimeoutError).check(future)
    """

    def __init__(
        self,
        expected_exception: ExceptionType,
        evaluation_logger: Optional[EvaluationLogger] = None,
    ):
        super().__init__(evaluation_logger)
        self._validator = ExceptionValidator.for_type(expected_exception)

    def _observe(self, future: AnyFuture) -> Settlement:
        return inspect_settlement(future)

    def _judge(self, settlement: Settlement) -> MatchResult:
        if settlement.kind is SettlementKind.PENDING:
            return self._mismatch("Future is not completed.")

        if settlement.kind is SettlementKind.VALUE:
            return self._mismatch(
                "Future did not complete exceptionally, but instead regularly with: "
                f"{settlement.value!r}",
                actual=repr(settlement.value),
            )

        if self._validator(settlement.cause):
            return MatchResult(passed=True, message=self.description)

        return self._mismatch(
            f"Future completed with different exception: {settlement.cause!r}",
            actual=type_name(type(settlement.cause)),
        )

    @property
    def description(self) -> str:
        return f"A future that failed with: {self._validator.description}"


class FutureWillFailMatcher(BlockingFutureMatcher):
    """
    Match a future that fails within a timeout with an accepted exception.

    Blocks the calling thread for at most the timeout. An interrupt while
    blocked aborts the test with InterruptedTestError.

    Usage:
        FutureWillFailMatcher(ExceptionValidator.for_type(OSError), WaitBudget.of(5))
    """

    def __init__(
        self,
        validator: ExceptionValidator,
        budget: WaitBudget,
        evaluation_logger: Optional[EvaluationLogger] = None,
    ):
        super().__init__(budget, evaluation_logger)
        self._validator = validator

    def _observe(self, future: AnyFuture) -> Settlement:
        return await_settlement(future, self._budget)

    def _judge(self, settlement: Settlement) -> MatchResult:
        if settlement.kind is SettlementKind.INTERRUPTED:
            raise InterruptedTestError() from settlement.interrupt

        if settlement.kind is SettlementKind.TIMED_OUT:
            return self._mismatch(f"Future did not complete within {self._budget}.")

        if settlement.kind is SettlementKind.VALUE:
            return self._mismatch(
                "Future did not complete exceptionally, but instead regularly with: "
                f"{settlement.value!r}",
                actual=repr(settlement.value),
            )

        cause = settlement.cause
        if cause is not None and self._validator(cause):
            return MatchResult(passed=True, message=self.description)

        rendered = render_cause(cause)
        return self._mismatch(
            f"Future completed with different exception: {rendered}",
            actual=repr(cause),
        )

    @property
    def description(self) -> str:
        return (
            f"A future that will have failed within {self._budget} "
            f"with: {self._validator.description}"
        )


class WillNotCompleteMatcher(BlockingFutureMatcher):
    """
    Match a future that is still pending once the timeout elapses.

    An interrupt while waiting is reported as a mismatch.
    """

    def _observe(self, future: AnyFuture) -> Settlement:
        return await_settlement(future, self._budget)

    def _judge(self, settlement: Settlement) -> MatchResult:
        if settlement.kind is SettlementKind.TIMED_OUT:
            return MatchResult(passed=True, message=self.description)

        if settlement.kind is SettlementKind.INTERRUPTED:
            return self._mismatch("The waiting thread was interrupted.")

        if settlement.kind is SettlementKind.VALUE:
            return self._mismatch(
                f"The given future completed with {settlement.value!r}",
                actual=repr(settlement.value),
            )

        return self._mismatch(
            f"The given future was completed exceptionally: {settlement.cause!r}",
            actual=repr(settlement.cause),
            details=render_cause(settlement.cause),
        )

    @property
    def description(self) -> str:
        return f"The given future should not complete within {self._budget.millis} ms."
