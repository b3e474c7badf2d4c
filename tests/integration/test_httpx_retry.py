r"""Integration tests retrying httpx requests against a mock
transport."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from reattempt import (
    AsyncRetryConfig,
    AsyncRetryer,
    AttemptTimeoutError,
    RetriesExhaustedError,
    RetryConfig,
    Retryer,
)
from reattempt.contrib.httpx import RetryAfterWait, RetryIfStatus, RetryIfTransportError
from reattempt.limiter import AsyncFixedAttemptTimeLimit
from reattempt.stop import StopAfterAttempt
from reattempt.wait import FixedWait

if TYPE_CHECKING:
    from unittest.mock import Mock

TEST_URL = "https://api.example.com/data"


class SequenceTransport:
    """Handler returning the queued outcomes in order."""

    def __init__(self, outcomes: list[httpx.Response | Exception]) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _config(**kwargs) -> RetryConfig:
    return RetryConfig(
        retry_predicate=RetryIfStatus() | RetryIfTransportError(),
        stop_strategy=StopAfterAttempt(4),
        **kwargs,
    )


def test_retry_transient_status_then_success(mock_sleep: Mock) -> None:
    transport = SequenceTransport(
        [httpx.Response(503), httpx.Response(502), httpx.Response(200, json={"ok": True})]
    )
    retryer = Retryer(_config(wait_strategy=FixedWait(0.5)))
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        response = retryer.call(lambda: client.get(TEST_URL))
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert len(transport.requests) == 3
    assert mock_sleep.call_count == 2


def test_retry_connect_error_then_success(mock_sleep: Mock) -> None:  # noqa: ARG001
    transport = SequenceTransport([httpx.ConnectError("refused"), httpx.Response(200)])
    retryer = Retryer(_config())
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        response = retryer.call(lambda: client.get(TEST_URL))
    assert response.status_code == 200
    assert len(transport.requests) == 2


def test_non_retryable_status_is_returned(mock_sleep: Mock) -> None:
    transport = SequenceTransport([httpx.Response(404)])
    retryer = Retryer(_config())
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        response = retryer.call(lambda: client.get(TEST_URL))
    assert response.status_code == 404
    mock_sleep.assert_not_called()


def test_raise_for_status_error_is_unwrapped(mock_sleep: Mock) -> None:  # noqa: ARG001
    transport = SequenceTransport([httpx.Response(400)])
    retryer = Retryer(_config())
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            retryer.call(lambda: client.get(TEST_URL).raise_for_status())
    assert exc_info.value.response.status_code == 400


def test_retry_after_header_is_honored(mock_sleep: Mock) -> None:
    transport = SequenceTransport(
        [httpx.Response(429, headers={"Retry-After": "3"}), httpx.Response(200)]
    )
    retryer = Retryer(_config(wait_strategy=RetryAfterWait(fallback=FixedWait(0.1))))
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        assert retryer.call(lambda: client.get(TEST_URL)).status_code == 200
    mock_sleep.assert_called_once_with(3.0)


def test_retries_exhausted_with_last_response(mock_sleep: Mock) -> None:
    transport = SequenceTransport([httpx.Response(500)] * 4)
    retryer = Retryer(_config(wait_strategy=FixedWait(0.1)))
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        with pytest.raises(RetriesExhaustedError) as exc_info:
            retryer.call(lambda: client.get(TEST_URL))
    assert exc_info.value.attempt_number == 4
    assert exc_info.value.attempt.result.status_code == 500
    assert mock_sleep.call_count == 3


@pytest.mark.asyncio
async def test_async_retry_transient_status_then_success() -> None:
    outcomes = [httpx.Response(503), httpx.Response(200, text="done")]

    async def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return outcomes.pop(0)

    retryer = AsyncRetryer(
        AsyncRetryConfig(
            retry_predicate=RetryIfStatus() | RetryIfTransportError(),
            stop_strategy=StopAfterAttempt(3),
            attempt_time_limiter=AsyncFixedAttemptTimeLimit(timeout=5.0),
        )
    )
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await retryer.call(lambda: client.get(TEST_URL))
    assert response.text == "done"
    assert outcomes == []


@pytest.mark.asyncio
async def test_async_slow_response_times_out_and_is_retried() -> None:
    delays = [10.0, 0.0]

    async def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        await asyncio.sleep(delays.pop(0))
        return httpx.Response(200)

    retryer = AsyncRetryer(
        AsyncRetryConfig(
            retry_predicate=RetryIfTransportError() | RetryIfStatus(),
            stop_strategy=StopAfterAttempt(3),
            attempt_time_limiter=AsyncFixedAttemptTimeLimit(timeout=0.05),
        )
    )
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AttemptTimeoutError):
            await retryer.call(lambda: client.get(TEST_URL))
    assert delays == [0.0]
