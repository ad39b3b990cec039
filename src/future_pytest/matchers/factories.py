"""Factory functions for future matchers."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from future_pytest.matchers.future_result import (
    FutureFailedMatcher,
    FutureWillFailMatcher,
    WillNotCompleteMatcher,
)
from future_pytest.matchers.validators import (
    ExceptionType,
    ExceptionValidator,
    is_exception_type,
)
from future_pytest.waiting import WaitBudget

if TYPE_CHECKING:
    from future_pytest.logging.evaluation_logger import EvaluationLogger

Timeout = Union[timedelta, float, int]
ExpectedFailure = Union[ExceptionType, Callable[[BaseException], bool]]


def _is_timeout(value: Any) -> bool:
    return isinstance(value, (timedelta, int, float)) and not isinstance(value, bool)


def _resolve_validator(
    expected: Optional[ExpectedFailure],
    description: Optional[str],
) -> ExceptionValidator:
    if expected is None:
        raise ValueError("exception_type should not be None")

    if is_exception_type(expected):
        if description is not None:
            return ExceptionValidator(ExceptionValidator.for_type(expected).predicate, description)
        return ExceptionValidator.for_type(expected)

    if callable(expected):
        if description is None:
            description = getattr(expected, "__name__", repr(expected))
        return ExceptionValidator(expected, description)

    raise ValueError(f"Expected an exception type or a predicate, got {expected!r}")


def future_failed_with(
    exception_type: ExceptionType,
    evaluation_logger: Optional[EvaluationLogger] = None,
) -> FutureFailedMatcher:
    """
    Check that a future has already failed with a specific exception type.

    Raises:
        ValueError: If exception_type is None or not an exception type.
    """
    if exception_type is None:
        raise ValueError("exception_type should not be None")
    return FutureFailedMatcher(exception_type, evaluation_logger)


def future_will_complete_exceptionally(
    expected: Union[ExpectedFailure, Timeout, None],
    timeout: Optional[Timeout] = None,
    description: Optional[str] = None,
    evaluation_logger: Optional[EvaluationLogger] = None,
) -> FutureWillFailMatcher:
    """
    Check that a future will fail within a timeout.

    Accepted forms:
        future_will_complete_exceptionally(OSError, timedelta(seconds=1))
        future_will_complete_exceptionally(lambda e: "boom" in str(e), 1.0, "a boom")
        future_will_complete_exceptionally(1.0)  # any exception

    Args:
        expected: Exception type (or tuple of types), a predicate over the
            cause, or the timeout itself when no other argument is given.
        timeout: Maximum wait, as a timedelta or in seconds.
        description: Describes the predicate in diagnostics.
        evaluation_logger: Optional logger recording each evaluation.

    Raises:
        ValueError: If a required argument is missing or invalid.
    """
    if timeout is None and description is None and _is_timeout(expected):
        expected, timeout = BaseException, expected

    validator = _resolve_validator(expected, description)
    return FutureWillFailMatcher(validator, WaitBudget.of(timeout), evaluation_logger)


def will_not_complete(
    timeout: Timeout,
    evaluation_logger: Optional[EvaluationLogger] = None,
) -> WillNotCompleteMatcher:
    """Check that a future won't complete within the given timeout."""
    return WillNotCompleteMatcher(WaitBudget.of(timeout), evaluation_logger)


class FutureMatchers:
    """
    Matcher factories bound to a default timeout and an evaluation logger.

    Provided to tests through the ``future_matchers`` fixture.

    Usage:
        def test_shutdown(future_matchers):
            result = future_matchers.will_not_complete().check(future)
            assert result, str(result)
    """

    def __init__(
        self,
        default_timeout: Timeout,
        evaluation_logger: Optional[EvaluationLogger] = None,
    ):
        self._default_budget = WaitBudget.of(default_timeout)
        self._evaluation_logger = evaluation_logger

    @property
    def default_timeout(self) -> float:
        """Default wait in seconds."""
        return self._default_budget.seconds

    def failed_with(self, exception_type: ExceptionType) -> FutureFailedMatcher:
        return future_failed_with(exception_type, self._evaluation_logger)

    def will_complete_exceptionally(
        self,
        expected: Union[ExpectedFailure, Timeout, None] = BaseException,
        timeout: Optional[Timeout] = None,
        description: Optional[str] = None,
    ) -> FutureWillFailMatcher:
        if timeout is None and description is None and _is_timeout(expected):
            expected, timeout = BaseException, expected
        if timeout is None:
            timeout = self._default_budget.seconds
        return future_will_complete_exceptionally(
            expected, timeout, description, self._evaluation_logger
        )

    def will_not_complete(self, timeout: Optional[Timeout] = None) -> WillNotCompleteMatcher:
        if timeout is None:
            timeout = self._default_budget.seconds
        return will_not_complete(timeout, self._evaluation_logger)
