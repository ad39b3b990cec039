"""Matchers for futures."""

from future_pytest.matchers.base import BaseFutureMatcher, BlockingFutureMatcher, MatchResult
from future_pytest.matchers.factories import (
    FutureMatchers,
    future_failed_with,
    future_will_complete_exceptionally,
    will_not_complete,
)
from future_pytest.matchers.future_result import (
    FutureFailedMatcher,
    FutureWillFailMatcher,
    WillNotCompleteMatcher,
)
from future_pytest.matchers.validators import ExceptionValidator

__all__ = [
    "BaseFutureMatcher",
    "BlockingFutureMatcher",
    "MatchResult",
    "ExceptionValidator",
    "FutureFailedMatcher",
    "FutureWillFailMatcher",
    "WillNotCompleteMatcher",
    "FutureMatchers",
    "future_failed_with",
    "future_will_complete_exceptionally",
    "will_not_complete",
]
