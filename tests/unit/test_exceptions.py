r"""Unit tests for the retry exceptions."""

from __future__ import annotations

import asyncio

import pytest

from reattempt import (
    Attempt,
    AttemptTimeoutError,
    RetriesExhaustedError,
    RetryCancelledError,
    RetryError,
)
from reattempt.exceptions import is_cancellation


def test_attempt_timeout_error() -> None:
    error = AttemptTimeoutError(timeout=2.0)
    assert error.timeout == 2.0
    assert str(error) == "attempt did not complete within 2.0s"
    assert isinstance(error, TimeoutError)
    assert isinstance(error, RetryError)


def test_attempt_timeout_error_custom_message() -> None:
    assert str(AttemptTimeoutError(timeout=2.0, message="too slow")) == "too slow"


def test_retries_exhausted_error_with_failure() -> None:
    exc = OSError("disk full")
    attempt = Attempt.from_exception(exc, 3, 1.5)
    error = RetriesExhaustedError(attempt)
    assert error.attempt is attempt
    assert error.attempt_number == 3
    assert error.delay_since_first_attempt == 1.5
    assert error.last_failure is exc
    assert str(error) == (
        "retrying failed to complete successfully after 3 attempts (1.50s): OSError: disk full"
    )


def test_retries_exhausted_error_with_result() -> None:
    error = RetriesExhaustedError(Attempt.from_result(None, 2, 0.0))
    assert error.last_failure is None
    assert str(error).endswith("last result None")


def test_retry_cancelled_error_is_retry_error() -> None:
    assert isinstance(RetryCancelledError(), RetryError)


@pytest.mark.parametrize(
    "exc", [RetryCancelledError(), asyncio.CancelledError(), KeyboardInterrupt()]
)
def test_is_cancellation_true(exc: BaseException) -> None:
    assert is_cancellation(exc)


@pytest.mark.parametrize(
    "exc", [ValueError(), AttemptTimeoutError(1.0), RetriesExhaustedError(Attempt.from_result(1, 1, 0.0))]
)
def test_is_cancellation_false(exc: BaseException) -> None:
    assert not is_cancellation(exc)
