r"""Retry policies for HTTP calls made with httpx.

This module provides predicates matching retryable responses and
transport errors, and a wait strategy honoring the ``Retry-After``
header.

Example:
    ```pycon
    >>> import httpx
    >>> from reattempt import Retryer, RetryConfig
    >>> from reattempt.contrib.httpx import RetryAfterWait, RetryIfStatus, RetryIfTransportError
    >>> from reattempt.stop import StopAfterAttempt
    >>> from reattempt.wait import ExponentialWait
    >>> retryer = Retryer(
    ...     RetryConfig(
    ...         retry_predicate=RetryIfStatus() | RetryIfTransportError(),
    ...         stop_strategy=StopAfterAttempt(4),
    ...         wait_strategy=RetryAfterWait(fallback=ExponentialWait(multiplier=0.3)),
    ...     )
    ... )
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     response = retryer.call(lambda: client.get("https://api.example.com/data"))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_STATUS_FORCELIST",
    "RetryAfterWait",
    "RetryIfStatus",
    "RetryIfTransportError",
    "parse_retry_after",
]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any

import httpx

from reattempt.predicate import RetryPredicate
from reattempt.wait.base import BaseWaitStrategy, NoWait

if TYPE_CHECKING:
    from reattempt.attempt import Attempt

logger: logging.Logger = logging.getLogger(__name__)

# Status codes signalling a transient server-side condition.
DEFAULT_STATUS_FORCELIST: tuple[int, ...] = (429, 500, 502, 503, 504)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse the value of a ``Retry-After`` header.

    The header holds either a number of seconds (e.g. ``"120"``) or an
    HTTP-date (e.g. ``"Wed, 21 Oct 2015 07:28:00 GMT"``).

    Args:
        retry_after_header: The header value, or ``None`` if absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is
        absent or cannot be parsed. Dates in the past give 0.0.

    Example:
        ```pycon
        >>> from reattempt.contrib.httpx import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None:
        return None

    with suppress(ValueError):
        seconds = float(retry_after_header)
        if not math.isfinite(seconds):
            logger.debug(f"Ignoring non-finite Retry-After header: {retry_after_header!r}")
            return None
        return max(0.0, seconds)

    try:
        retry_date = parsedate_to_datetime(retry_after_header)
        delta_seconds = (retry_date - datetime.now(timezone.utc)).total_seconds()
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
    return max(0.0, delta_seconds)


def _response_of(attempt: Attempt[Any]) -> httpx.Response | None:
    if isinstance(attempt.result, httpx.Response):
        return attempt.result
    if isinstance(attempt.exception, httpx.HTTPStatusError):
        return attempt.exception.response
    return None


class RetryIfStatus(RetryPredicate):
    """Predicate retrying responses whose status code is in a
    forcelist.

    Both returned responses and ``httpx.HTTPStatusError`` raised by
    ``Response.raise_for_status()`` are matched.

    Args:
        status_forcelist: The retryable status codes.

    Example:
        ```pycon
        >>> import httpx
        >>> from reattempt import Attempt
        >>> from reattempt.contrib.httpx import RetryIfStatus
        >>> predicate = RetryIfStatus((503,))
        >>> predicate(Attempt.from_result(httpx.Response(503), 1, 0.0))
        True
        >>> predicate(Attempt.from_result(httpx.Response(200), 1, 0.0))
        False

        ```
    """

    def __init__(self, status_forcelist: tuple[int, ...] = DEFAULT_STATUS_FORCELIST) -> None:
        self.status_forcelist = status_forcelist

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_forcelist={self.status_forcelist})"

    def __call__(self, attempt: Attempt[Any]) -> bool:
        response = _response_of(attempt)
        return response is not None and response.status_code in self.status_forcelist


class RetryIfTransportError(RetryPredicate):
    """Predicate retrying network-level failures.

    It matches ``httpx.TransportError`` and its subclasses (timeouts,
    connection errors, protocol errors).
    """

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return attempt.failure is not None and attempt.failure.is_kind(httpx.TransportError)


class RetryAfterWait(BaseWaitStrategy):
    """Wait strategy honoring the ``Retry-After`` header of the last
    response.

    When the last attempt holds a response (returned or carried by an
    ``httpx.HTTPStatusError``) with a parseable ``Retry-After`` header,
    the header value is used. Otherwise the fallback strategy is used.

    Args:
        fallback: The strategy used without a usable header. Defaults to
            no wait.
        max_delay: Optional cap applied to the header value.

    Raises:
        ValueError: If ``max_delay`` is not positive.
    """

    def __init__(
        self, fallback: BaseWaitStrategy | None = None, max_delay: float | None = None
    ) -> None:
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.fallback = fallback if fallback is not None else NoWait()
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(fallback={self.fallback!r}, "
            f"max_delay={self.max_delay})"
        )

    def compute(self, attempt: Attempt[Any]) -> float:
        response = _response_of(attempt)
        delay = None
        if response is not None:
            delay = parse_retry_after(response.headers.get("Retry-After"))
        if delay is None:
            return self.fallback.compute(attempt)
        logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
