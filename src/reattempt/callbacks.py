r"""Callback types and manager for observing the retry lifecycle.

The callback system provides four hooks:
- on_attempt: Called after each attempt completes
- on_retry: Called before each backoff wait
- on_success: Called when the loop returns a value
- on_failure: Called when the loop ends with a failure, either because
  the failure was not retried or because retries were exhausted

Callbacks receive data derived from the ``Attempt`` only. Exceptions
raised by callbacks propagate to the caller.

Example:
    ```pycon
    >>> from reattempt import CallbackConfig, Retryer, RetryConfig
    >>> from reattempt.callbacks import RetryInfo
    >>> from reattempt.predicate import RetryIfException
    >>> from reattempt.stop import StopAfterAttempt
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"attempt {info.attempt.attempt_number} failed, waiting {info.wait_time}s")
    ...
    >>> retryer = Retryer(
    ...     RetryConfig(retry_predicate=RetryIfException(), stop_strategy=StopAfterAttempt(3)),
    ...     CallbackConfig(on_retry=log_retry),
    ... )

    ```
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "CallbackManager",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.attempt import Attempt


@dataclass
class RetryInfo:
    """Information passed to the on_retry callback.

    Attributes:
        attempt: The failed attempt that triggered the retry.
        wait_time: The delay in seconds before the next attempt.
    """

    attempt: Attempt[Any]
    wait_time: float


@dataclass
class SuccessInfo:
    """Information passed to the on_success callback.

    Attributes:
        attempt: The final attempt holding the returned value.
        total_time: Total time spent on all attempts including waits.
    """

    attempt: Attempt[Any]
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to the on_failure callback.

    Attributes:
        attempt: The final attempt.
        error: The exception raised to the caller.
        exhausted: ``True`` if the stop strategy ended the loop,
            ``False`` if the failure was not retried.
        total_time: Total time spent on all attempts including waits.
    """

    attempt: Attempt[Any]
    error: BaseException
    exhausted: bool
    total_time: float


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_attempt: Optional callback invoked with each completed attempt.
        on_retry: Optional callback invoked before each backoff wait.
        on_success: Optional callback invoked when a value is returned.
        on_failure: Optional callback invoked when the loop fails.
    """

    on_attempt: Callable[[Attempt[Any]], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attributes:
        callbacks: Configuration containing the callback functions.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks or CallbackConfig()

    def on_attempt(self, attempt: Attempt[Any]) -> None:
        if self.callbacks.on_attempt is not None:
            self.callbacks.on_attempt(attempt)

    def on_retry(self, attempt: Attempt[Any], wait_time: float) -> None:
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(RetryInfo(attempt=attempt, wait_time=wait_time))

    def on_success(self, attempt: Attempt[Any], start_time: float, now: float) -> None:
        """Invoke the on_success callback.

        Args:
            attempt: The final attempt.
            start_time: Monotonic timestamp when the first attempt started.
            now: Current monotonic timestamp.
        """
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(SuccessInfo(attempt=attempt, total_time=now - start_time))

    def on_failure(
        self,
        attempt: Attempt[Any],
        error: BaseException,
        exhausted: bool,
        start_time: float,
        now: float,
    ) -> None:
        """Invoke the on_failure callback.

        Args:
            attempt: The final attempt.
            error: The exception about to be raised to the caller.
            exhausted: Whether the stop strategy ended the loop.
            start_time: Monotonic timestamp when the first attempt started.
            now: Current monotonic timestamp.
        """
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    attempt=attempt,
                    error=error,
                    exhausted=exhausted,
                    total_time=now - start_time,
                )
            )
