"""
Example test file demonstrating future-pytest usage.

Run with:
    pytest examples/test_example.py -v
"""

import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from future_pytest import (
    future_failed_with,
    future_will_complete_exceptionally,
    will_not_complete,
)


class QuotaExceeded(Exception):
    pass


def _call_remote_service(delay: float) -> str:
    time.sleep(delay)
    raise QuotaExceeded("quota of 100 requests exceeded")


@pytest.fixture
def executor():
    with ThreadPoolExecutor(max_workers=2) as pool:
        yield pool


# =============================================================================
# Module-level Factories
# =============================================================================


def test_service_fails_with_quota_error(executor):
    """The call fails within a second with QuotaExceeded."""
    future = executor.submit(_call_remote_service, 0.05)

    result = future_will_complete_exceptionally(QuotaExceeded, timedelta(seconds=1)).check(future)

    assert result, str(result)
    # Once settled, the non-blocking matcher agrees
    assert future_failed_with(QuotaExceeded).check(future)


def test_failure_message_mentions_quota(executor):
    future = executor.submit(_call_remote_service, 0.01)

    result = future_will_complete_exceptionally(
        lambda e: "quota" in str(e), 1.0, "an error mentioning the quota"
    ).check(future)

    assert result, str(result)


def test_slow_call_is_still_running(executor):
    future = executor.submit(time.sleep, 0.5)

    result = will_not_complete(0.1).check(future)

    assert result, str(result)


# =============================================================================
# Fixture
# =============================================================================


@pytest.mark.future_timeout(2)
def test_with_fixture(executor, future_matchers):
    """future_matchers fills in the timeout from the marker."""
    future = executor.submit(_call_remote_service, 0.01)

    assert future_matchers.will_complete_exceptionally(QuotaExceeded).check(future)
