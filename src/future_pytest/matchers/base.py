"""Base matcher classes for future observations."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from future_pytest.waiting import Settlement, await_settlement_async

if TYPE_CHECKING:
    from future_pytest.logging.evaluation_logger import EvaluationLogger
    from future_pytest.waiting import AnyFuture, WaitBudget

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Verdict of a matcher evaluation."""

    passed: bool
    message: str
    expected: Any = None
    actual: Any = None
    details: Optional[str] = None

    def __bool__(self) -> bool:
        """Allow using MatchResult in boolean context."""
        return self.passed

    def __str__(self) -> str:
        status = "MATCHED" if self.passed else "MISMATCHED"
        s = f"[{status}] {self.message}"
        if not self.passed:
            if self.expected is not None:
                s += f"\n  Expected: {self.expected}"
            if self.actual is not None:
                s += f"\n  Actual: {self.actual}"
            if self.details:
                s += f"\n  Details: {self.details}"
        return s


class BaseFutureMatcher(ABC):
    """
    Base class for all future matchers.

    Subclasses must implement:
    - _observe(): Read or wait for the future's state
    - _judge(): Turn that state into a MatchResult
    - description: What a matching future looks like

    Matchers hold no per-evaluation state, so one instance can be applied
    to any number of futures, from any number of threads.
    """

    #: Whether _observe() blocks the calling thread.
    blocking: bool = False

    def __init__(self, evaluation_logger: Optional[EvaluationLogger] = None):
        self._evaluation_logger = evaluation_logger

    @abstractmethod
    def _observe(self, future: AnyFuture) -> Settlement:
        ...

    async def _observe_async(self, future: AnyFuture) -> Settlement:
        return self._observe(future)

    @abstractmethod
    def _judge(self, settlement: Settlement) -> MatchResult:
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of a matching future."""
        ...

    def check(self, candidate: Any) -> MatchResult:
        """
        Evaluate the matcher against a future, blocking if the matcher waits.

        Args:
            candidate: The future to observe.

        Returns:
            MatchResult with the verdict and, on mismatch, a diagnostic.
        """
        rejection = self._reject(candidate, allow_asyncio=not self.blocking)
        if rejection is not None:
            return rejection

        start = time.monotonic()
        settlement = self._observe(candidate)
        return self._finish(settlement, time.monotonic() - start)

    async def check_async(self, candidate: Any) -> MatchResult:
        """Evaluate the matcher without blocking the running event loop."""
        rejection = self._reject(candidate, allow_asyncio=True)
        if rejection is not None:
            return rejection

        start = time.monotonic()
        settlement = await self._observe_async(candidate)
        return self._finish(settlement, time.monotonic() - start)

    def matches(self, candidate: Any) -> bool:
        return self.check(candidate).passed

    def describe_mismatch(self, candidate: Any) -> str:
        """
        Evaluate the matcher again and return the mismatch diagnostic.

        Returns an empty string when the candidate matches.
        """
        result = self.check(candidate)
        return "" if result.passed else result.message

    def _finish(self, settlement: Settlement, elapsed: float) -> MatchResult:
        result = self._judge(settlement)
        logger.debug(
            f"{self.__class__.__name__} observed {settlement.kind.value} "
            f"after {elapsed * 1000:.1f}ms: {'match' if result.passed else 'mismatch'}"
        )
        if self._evaluation_logger is not None:
            self._evaluation_logger.log_evaluation(self, settlement, result, elapsed)
        return result

    def _mismatch(self, message: str, actual: Any = None, details: Optional[str] = None) -> MatchResult:
        return MatchResult(
            passed=False,
            message=message,
            expected=self.description,
            actual=actual,
            details=details,
        )

    def _reject(self, candidate: Any, allow_asyncio: bool) -> Optional[MatchResult]:
        if candidate is None:
            return self._mismatch("was None")
        if isinstance(candidate, asyncio.Future):
            if allow_asyncio:
                return None
            return self._mismatch(
                "was an asyncio future; blocking matchers must be awaited via check_async()",
                actual=repr(candidate),
            )
        if not isinstance(candidate, concurrent.futures.Future):
            return self._mismatch(
                f"was a {type(candidate).__name__} ({candidate!r})",
                actual=repr(candidate),
            )
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.description})"


class BlockingFutureMatcher(BaseFutureMatcher):
    """A matcher that waits for the future within a fixed budget."""

    blocking = True

    def __init__(self, budget: WaitBudget, evaluation_logger: Optional[EvaluationLogger] = None):
        super().__init__(evaluation_logger)
        self._budget = budget

    @property
    def timeout(self) -> WaitBudget:
        return self._budget

    async def _observe_async(self, future: AnyFuture) -> Settlement:
        return await await_settlement_async(future, self._budget)
