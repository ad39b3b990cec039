"""
Pytest plugin for future matchers.

This module provides fixtures and hooks that hand out matcher factories
bound to the configured timeout and evaluation logger.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from future_pytest.config.loader import ConfigLoader
from future_pytest.config.models import FutureMatcherConfig
from future_pytest.logging.evaluation_logger import EvaluationLogger
from future_pytest.matchers.factories import FutureMatchers

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser

logger = logging.getLogger(__name__)

_EVALUATION_START = pytest.StashKey[int]()


# =============================================================================
# Pytest Hooks - Configuration and Options
# =============================================================================


def pytest_addoption(parser: Parser) -> None:
    """Register pytest command-line and ini options."""
    group = parser.getgroup("future", "Future Matcher Options")

    group.addoption(
        "--future-config",
        dest="future_config",
        metavar="PATH",
        help="Path to future matcher YAML configuration file",
    )

    group.addoption(
        "--future-log-level",
        dest="future_log_level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Matcher evaluation log level",
    )

    group.addoption(
        "--future-log-file",
        dest="future_log_file",
        metavar="PATH",
        help="Path to write matcher evaluation logs",
    )

    parser.addini(
        "future_config_file",
        help="Default future matcher configuration file path",
        default=None,
    )

    parser.addini(
        "future_default_timeout",
        help="Default wait for blocking future matchers (seconds)",
        default="",
    )

    parser.addini(
        "future_log_evaluations",
        help="Log matcher evaluations to the console",
        type="bool",
        default=True,
    )


def pytest_configure(config: Config) -> None:
    """Register markers."""
    config.addinivalue_line(
        "markers",
        "future_timeout(seconds): Default wait for future matchers in this test",
    )


# =============================================================================
# Session-scoped Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def future_config(request: pytest.FixtureRequest) -> FutureMatcherConfig:
    """
    Load future matcher configuration.

    Sources, in order:
    1. --future-config command line option
    2. future_config_file ini option
    3. Default config file search, from the invocation directory up to
       the rootdir and never above it

    The future_default_timeout ini option overrides the file.
    """
    config_path = request.config.getoption("future_config")

    if config_path is None:
        config_path = request.config.getini("future_config_file") or None

    root_dir = Path(request.config.rootpath)
    start_dir = Path(request.config.invocation_params.dir)
    cfg = ConfigLoader.load(config_path, root_dir, start_dir)

    ini_timeout = request.config.getini("future_default_timeout")
    if ini_timeout:
        try:
            cfg = ConfigLoader.merge_configs(
                cfg, FutureMatcherConfig(default_timeout=float(ini_timeout))
            )
        except ValueError as e:
            raise pytest.UsageError(f"Invalid future_default_timeout {ini_timeout!r}: {e}") from e

    return cfg


@pytest.fixture(scope="session")
def future_logger(
    request: pytest.FixtureRequest, future_config: FutureMatcherConfig
) -> EvaluationLogger:
    """Create the evaluation logger shared by the session."""
    log_level = request.config.getoption("future_log_level") or future_config.log_level

    log_file = request.config.getoption("future_log_file")
    log_file_path = Path(log_file) if log_file else None

    log_to_console = bool(request.config.getini("future_log_evaluations")) and (
        future_config.log_evaluations
    )

    return EvaluationLogger(
        name="evaluations",
        level=log_level,
        log_to_console=log_to_console,
        log_to_file=log_file_path,
    )


# =============================================================================
# Function-scoped Fixtures
# =============================================================================


@pytest.fixture
def future_matchers(
    future_config: FutureMatcherConfig,
    future_logger: EvaluationLogger,
    request: pytest.FixtureRequest,
) -> FutureMatchers:
    """
    Matcher factories for this test.

    The default timeout comes from @pytest.mark.future_timeout or the
    configured default_timeout.

    Usage:
        @pytest.mark.future_timeout(0.5)
        def test_cancel(future_matchers):
            result = future_matchers.will_not_complete().check(future)
            assert result, str(result)
    """
    timeout_marker = request.node.get_closest_marker("future_timeout")
    if timeout_marker is None:
        timeout = future_config.default_timeout
    elif timeout_marker.args:
        timeout = timeout_marker.args[0]
    elif "seconds" in timeout_marker.kwargs:
        timeout = timeout_marker.kwargs["seconds"]
    else:
        raise pytest.UsageError(
            f"{request.node.nodeid}: @pytest.mark.future_timeout needs a timeout, "
            "e.g. future_timeout(0.5) or future_timeout(seconds=0.5)"
        )

    request.node.stash[_EVALUATION_START] = future_logger.evaluation_count
    return FutureMatchers(default_timeout=timeout, evaluation_logger=future_logger)


# =============================================================================
# Pytest Hooks - Reporting
# =============================================================================


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call):
    """Attach the evaluations recorded by this test to its report."""
    outcome = yield
    rep = outcome.get_result()

    start = item.stash.get(_EVALUATION_START, None)
    if start is None or rep.when != "call":
        return

    evaluation_logger = getattr(item, "funcargs", {}).get("future_logger")
    if evaluation_logger is None:
        return

    rep.future_evaluations = [
        e.to_dict() for e in evaluation_logger.get_evaluations(since=start)
    ]
    failed = [e for e in rep.future_evaluations if not e["passed"]]
    if failed:
        logger.debug(f"{item.nodeid}: {len(failed)} future matcher mismatch(es)")
