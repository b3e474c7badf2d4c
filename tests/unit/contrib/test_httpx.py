r"""Unit tests for the httpx retry policies."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import httpx
import pytest

from reattempt import Attempt
from reattempt.contrib.httpx import (
    DEFAULT_STATUS_FORCELIST,
    RetryAfterWait,
    RetryIfStatus,
    RetryIfTransportError,
    parse_retry_after,
)
from reattempt.wait import FixedWait, NoWait

REQUEST = httpx.Request("GET", "https://api.example.com/data")


def _response(status_code: int, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code, headers=headers, request=REQUEST)


def _status_error(response: httpx.Response) -> httpx.HTTPStatusError:
    return httpx.HTTPStatusError("error", request=REQUEST, response=response)


#######################################
#     Tests for parse_retry_after     #
#######################################


@pytest.mark.parametrize(
    ("header", "seconds"), [("1", 1.0), ("0", 0.0), ("120", 120.0), ("-5", 0.0)]
)
def test_parse_retry_after_seconds(header: str, seconds: float) -> None:
    assert parse_retry_after(header) == seconds


@pytest.mark.parametrize(
    "header", [None, "invalid", "not a number", "1.2.3", "inf", "-inf", "nan", "Infinity"]
)
def test_parse_retry_after_none(header: str | None) -> None:
    assert parse_retry_after(header) is None


def test_parse_retry_after_http_date() -> None:
    mock_datetime = Mock(
        spec=datetime,
        now=Mock(return_value=datetime(2015, 10, 21, 7, 28, 0, tzinfo=timezone.utc)),
    )
    with patch("reattempt.contrib.httpx.datetime", mock_datetime):
        assert parse_retry_after("Wed, 21 Oct 2015 07:29:00 GMT") == 60.0
        assert parse_retry_after("Wed, 21 Oct 2015 07:00:00 GMT") == 0.0


###################################
#     Tests for RetryIfStatus     #
###################################


@pytest.mark.parametrize("status_code", DEFAULT_STATUS_FORCELIST)
def test_retry_if_status_default_forcelist(status_code: int) -> None:
    assert RetryIfStatus()(Attempt.from_result(_response(status_code), 1, 0.0))


@pytest.mark.parametrize("status_code", [200, 201, 301, 400, 404])
def test_retry_if_status_not_in_forcelist(status_code: int) -> None:
    assert not RetryIfStatus()(Attempt.from_result(_response(status_code), 1, 0.0))


def test_retry_if_status_custom_forcelist() -> None:
    predicate = RetryIfStatus((404,))
    assert predicate(Attempt.from_result(_response(404), 1, 0.0))
    assert not predicate(Attempt.from_result(_response(503), 1, 0.0))


def test_retry_if_status_http_status_error() -> None:
    exc = _status_error(_response(503))
    assert RetryIfStatus()(Attempt.from_exception(exc, 1, 0.0))


def test_retry_if_status_other_values() -> None:
    assert not RetryIfStatus()(Attempt.from_result("text", 1, 0.0))
    assert not RetryIfStatus()(Attempt.from_exception(ValueError(), 1, 0.0))


###########################################
#     Tests for RetryIfTransportError     #
###########################################


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("refused", request=REQUEST),
        httpx.ReadTimeout("slow", request=REQUEST),
        httpx.RemoteProtocolError("broken", request=REQUEST),
    ],
)
def test_retry_if_transport_error(exc: Exception) -> None:
    assert RetryIfTransportError()(Attempt.from_exception(exc, 1, 0.0))


def test_retry_if_transport_error_other_failures() -> None:
    predicate = RetryIfTransportError()
    assert not predicate(Attempt.from_exception(_status_error(_response(500)), 1, 0.0))
    assert not predicate(Attempt.from_exception(ValueError(), 1, 0.0))
    assert not predicate(Attempt.from_result(_response(500), 1, 0.0))


####################################
#     Tests for RetryAfterWait     #
####################################


def test_retry_after_wait_uses_header() -> None:
    wait = RetryAfterWait(fallback=FixedWait(1.0))
    response = _response(429, headers={"Retry-After": "7"})
    assert wait.compute(Attempt.from_result(response, 1, 0.0)) == 7.0


def test_retry_after_wait_uses_header_of_status_error() -> None:
    wait = RetryAfterWait()
    exc = _status_error(_response(503, headers={"Retry-After": "3"}))
    assert wait.compute(Attempt.from_exception(exc, 1, 0.0)) == 3.0


def test_retry_after_wait_caps_header() -> None:
    wait = RetryAfterWait(max_delay=10.0)
    response = _response(429, headers={"Retry-After": "3600"})
    assert wait.compute(Attempt.from_result(response, 1, 0.0)) == 10.0


def test_retry_after_wait_fallback_without_header() -> None:
    wait = RetryAfterWait(fallback=FixedWait(1.5))
    assert wait.compute(Attempt.from_result(_response(503), 1, 0.0)) == 1.5
    assert wait.compute(Attempt.from_exception(OSError(), 1, 0.0)) == 1.5


def test_retry_after_wait_fallback_on_invalid_header() -> None:
    wait = RetryAfterWait(fallback=FixedWait(2.0))
    response = _response(503, headers={"Retry-After": "soon"})
    assert wait.compute(Attempt.from_result(response, 1, 0.0)) == 2.0


def test_retry_after_wait_default_fallback() -> None:
    assert isinstance(RetryAfterWait().fallback, NoWait)


def test_retry_after_wait_invalid_max_delay() -> None:
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        RetryAfterWait(max_delay=0)


def test_retry_after_wait_fallback_on_infinite_header() -> None:
    wait = RetryAfterWait(fallback=FixedWait(2.0))
    response = _response(503, headers={"Retry-After": "inf"})
    assert wait.compute(Attempt.from_result(response, 1, 0.0)) == 2.0
