"""Evaluation logging for future matchers."""

from future_pytest.logging.evaluation_logger import (
    ColoredFormatter,
    EvaluationLogger,
    MatcherEvaluation,
)

__all__ = ["ColoredFormatter", "EvaluationLogger", "MatcherEvaluation"]
