"""Logger recording future matcher evaluations."""

from __future__ import annotations

import json
import logging
import sys
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from future_pytest.waiting import SettlementKind

if TYPE_CHECKING:
    from future_pytest.matchers.base import BaseFutureMatcher, MatchResult
    from future_pytest.waiting import Settlement


@dataclass
class MatcherEvaluation:
    """One logged matcher evaluation."""

    timestamp: datetime
    matcher: str
    description: str
    settlement: SettlementKind
    passed: bool
    duration_ms: float
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "matcher": self.matcher,
            "description": self.description,
            "settlement": self.settlement.value,
            "passed": self.passed,
            "duration_ms": self.duration_ms,
            "message": self.message,
        }


class ColoredFormatter(logging.Formatter):
    """Formatter with color support for console output."""

    COLORS = {
        "RESET": "\033[0m",
        "GREEN": "\033[92m",
        "YELLOW": "\033[93m",
        "RED": "\033[91m",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        evaluation = getattr(record, "evaluation", None)

        if isinstance(evaluation, MatcherEvaluation):
            return self._format_evaluation(evaluation)

        return super().format(record)

    def _format_evaluation(self, ev: MatcherEvaluation) -> str:
        timestamp = ev.timestamp.strftime("%H:%M:%S.%f")[:-3]
        verdict = "✓" if ev.passed else "✗"

        parts = [
            f"[{timestamp}]",
            verdict,
            ev.matcher,
            f"<{ev.settlement.value}>",
            f"({ev.duration_ms:.1f}ms)",
        ]
        if not ev.passed and ev.message:
            first_line = ev.message.splitlines()[0]
            if len(first_line) > 100:
                first_line = first_line[:100] + "..."
            parts.append(first_line)

        text = " ".join(parts)

        if not self.use_colors:
            return text
        if ev.passed:
            color = "GREEN"
        elif ev.settlement is SettlementKind.INTERRUPTED:
            color = "YELLOW"
        else:
            color = "RED"
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"


class EvaluationLogger:
    """
    Logger for matcher evaluations.

    Constructed explicitly and injected into matchers; there is no global
    instance. Provides:
    - Console output with colors
    - Optional log file
    - Evaluation history with filtering
    - JSON export
    """

    def __init__(
        self,
        name: str = "evaluations",
        level: str = "INFO",
        log_to_console: bool = True,
        log_to_file: Optional[Path] = None,
        use_colors: bool = True,
    ):
        """
        Initialize evaluation logger.

        Args:
            name: Logger name, appended to "future_pytest.".
            level: Logging level (DEBUG, INFO, WARNING, ERROR).
            log_to_console: Whether to log to console.
            log_to_file: Optional path to log file.
            use_colors: Whether to use colors in console output.
        """
        self._logger = logging.getLogger(f"future_pytest.{name}")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._evaluations: List[MatcherEvaluation] = []
        self._lock = threading.Lock()

        # Prevent duplicate handlers
        self._logger.handlers.clear()

        if log_to_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(ColoredFormatter(use_colors=use_colors))
            self._logger.addHandler(console_handler)

        if log_to_file:
            file_handler = logging.FileHandler(log_to_file)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
            )
            self._logger.addHandler(file_handler)

    def log_evaluation(
        self,
        matcher: BaseFutureMatcher,
        settlement: Settlement,
        result: MatchResult,
        elapsed_seconds: float,
    ) -> MatcherEvaluation:
        """
        Record a finished evaluation.

        Mismatches are logged at WARNING, matches at DEBUG.
        """
        evaluation = MatcherEvaluation(
            timestamp=datetime.now(),
            matcher=matcher.__class__.__name__,
            description=matcher.description,
            settlement=settlement.kind,
            passed=result.passed,
            duration_ms=elapsed_seconds * 1000,
            message=None if result.passed else result.message,
        )

        with self._lock:
            self._evaluations.append(evaluation)

        level = logging.DEBUG if result.passed else logging.WARNING
        record = self._logger.makeRecord(
            name=self._logger.name,
            level=level,
            fn="",
            lno=0,
            msg="%s %s",
            args=(evaluation.matcher, "matched" if evaluation.passed else "mismatched"),
            exc_info=None,
        )
        record.evaluation = evaluation
        if self._logger.isEnabledFor(level):
            self._logger.handle(record)

        return evaluation

    def get_evaluations(
        self,
        passed: Optional[bool] = None,
        settlement: Optional[SettlementKind] = None,
        since: Optional[int] = None,
    ) -> List[MatcherEvaluation]:
        """
        Get logged evaluations with optional filtering.

        Args:
            passed: Filter by verdict.
            settlement: Filter by observed settlement kind.
            since: Only evaluations at or after this index in the history.

        Returns:
            List of matching evaluations.
        """
        with self._lock:
            evaluations = list(self._evaluations[since or 0:])

        if passed is not None:
            evaluations = [e for e in evaluations if e.passed == passed]

        if settlement is not None:
            evaluations = [e for e in evaluations if e.settlement is settlement]

        return evaluations

    def export_to_json(self, filepath: Path | str) -> None:
        """Export all evaluations to a JSON file."""
        data = [e.to_dict() for e in self.get_evaluations()]

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

    def clear(self) -> None:
        """Clear evaluation history."""
        with self._lock:
            self._evaluations.clear()

    @property
    def evaluation_count(self) -> int:
        """Get total number of logged evaluations."""
        with self._lock:
            return len(self._evaluations)
