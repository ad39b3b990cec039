"""
future-pytest: matchers for the eventual outcome of futures.

This package provides matchers and a pytest plugin for asserting that a
future has failed, will fail, or will not complete within a timeout.
"""

from future_pytest.config.models import FutureMatcherConfig
from future_pytest.errors import InterruptedTestError
from future_pytest.logging.evaluation_logger import EvaluationLogger, MatcherEvaluation
from future_pytest.matchers.base import BaseFutureMatcher, MatchResult
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
from future_pytest.waiting import Settlement, SettlementKind, WaitBudget

__version__ = "0.1.0"

__all__ = [
    # Config
    "FutureMatcherConfig",
    # Factories
    "FutureMatchers",
    "future_failed_with",
    "future_will_complete_exceptionally",
    "will_not_complete",
    # Matchers
    "BaseFutureMatcher",
    "MatchResult",
    "ExceptionValidator",
    "FutureFailedMatcher",
    "FutureWillFailMatcher",
    "WillNotCompleteMatcher",
    # Waiting
    "Settlement",
    "SettlementKind",
    "WaitBudget",
    # Errors and logging
    "InterruptedTestError",
    "EvaluationLogger",
    "MatcherEvaluation",
]
