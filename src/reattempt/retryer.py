r"""Synchronous retry loop.

This module provides the ``Retryer`` class that repeatedly invokes an
operation according to the configured policies until it succeeds, the
stop strategy gives up, or the operation is cancelled.
"""

from __future__ import annotations

__all__ = ["Retryer"]

import functools
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.attempt import Attempt
from reattempt.callbacks import CallbackManager
from reattempt.config import RetryConfig
from reattempt.exceptions import CANCELLATION_ERRORS, RetriesExhaustedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.callbacks import CallbackConfig
    from reattempt.cancellation import CancellationToken

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class Retryer:
    """Executes an operation with automatic retry logic.

    Each call runs its own attempt sequence: the attempt number starts
    at 1 and the elapsed-time clock starts when the call begins. The
    policies are only read, so a single retryer can be shared by
    concurrent callers.

    The loop handles four outcomes of an attempt:
    - a returned value, evaluated by the retry predicate
    - an exception raised by the operation, evaluated by the retry
      predicate
    - an ``AttemptTimeoutError`` from the time limiter, treated like any
      other exception raised by the operation
    - a cancellation (``RetryCancelledError``, ``KeyboardInterrupt``),
      propagated immediately without consulting any policy

    Args:
        config: The retry policies. Defaults to ``RetryConfig()``, which
            makes a single attempt.
        callbacks: Optional lifecycle callbacks.

    Attributes:
        config: The retry policies.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from reattempt import Retryer, RetryConfig
        >>> from reattempt.predicate import RetryIfExceptionOfType
        >>> from reattempt.stop import StopAfterAttempt
        >>> calls = []
        >>> def flaky() -> str:
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unreachable")
        ...     return "done"
        ...
        >>> retryer = Retryer(
        ...     RetryConfig(
        ...         retry_predicate=RetryIfExceptionOfType(ConnectionError),
        ...         stop_strategy=StopAfterAttempt(5),
        ...     )
        ... )
        >>> retryer.call(flaky)
        'done'
        >>> len(calls)
        3

        ```
    """

    def __init__(
        self, config: RetryConfig | None = None, callbacks: CallbackConfig | None = None
    ) -> None:
        self.config = config or RetryConfig()
        self.callbacks: CallbackManager = CallbackManager(callbacks)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config})"

    def call(self, operation: Callable[[], T], token: CancellationToken | None = None) -> T:
        """Invoke the operation until it succeeds or retrying ends.

        Args:
            operation: The zero-argument operation to invoke.
            token: Optional cancellation token. Cancelling it stops the
                loop at the end of the current attempt or wait.

        Returns:
            The value returned by the last attempt.

        Raises:
            RetriesExhaustedError: If the stop strategy gave up. The last
                attempt is available as ``error.attempt`` and its
                exception, if any, is chained as the cause.
            RetryCancelledError: If the token was cancelled.
            KeyboardInterrupt: If the calling thread was interrupted.
            Exception: The exception raised by the operation, unwrapped,
                when the retry predicate declines to retry it.
        """
        config = self.config
        start_time = time.monotonic()
        attempt_number = 1
        while True:
            if token is not None:
                token.raise_if_cancelled()
            try:
                result = config.attempt_time_limiter.call(operation, token)
            except CANCELLATION_ERRORS:
                logger.debug(f"Attempt {attempt_number} cancelled, stop retrying")
                raise
            except Exception as exc:  # noqa: BLE001
                attempt: Attempt[T] = Attempt.from_exception(
                    exc, attempt_number, time.monotonic() - start_time
                )
                logger.debug(
                    f"Attempt {attempt_number} failed with {type(exc).__name__}: {exc}"
                )
            else:
                attempt = Attempt.from_result(
                    result, attempt_number, time.monotonic() - start_time
                )
            if token is not None:
                token.raise_if_cancelled()
            self.callbacks.on_attempt(attempt)

            if not config.retry_predicate(attempt):
                return self._finish(attempt, start_time)

            if config.stop_strategy.should_stop(attempt):
                logger.debug(
                    f"Giving up after {attempt_number} attempts "
                    f"({attempt.delay_since_first_attempt:.2f}s)"
                )
                error = RetriesExhaustedError(attempt)
                self.callbacks.on_failure(
                    attempt, error, exhausted=True, start_time=start_time, now=time.monotonic()
                )
                raise error from attempt.exception

            wait_time = max(0.0, config.wait_strategy.compute(attempt))
            logger.debug(f"Attempt {attempt_number}: will retry in {wait_time:.2f}s")
            self.callbacks.on_retry(attempt, wait_time)
            config.block_strategy.block(wait_time, token)
            attempt_number += 1

    def _finish(self, attempt: Attempt[T], start_time: float) -> T:
        now = time.monotonic()
        exc = attempt.exception
        if exc is not None:
            logger.debug(f"Attempt {attempt.attempt_number} failed and is not retried")
            self.callbacks.on_failure(
                attempt, exc, exhausted=False, start_time=start_time, now=now
            )
            raise exc
        self.callbacks.on_success(attempt, start_time=start_time, now=now)
        return attempt.result  # type: ignore[return-value]

    def wrap(self, func: Callable[..., T]) -> Callable[..., T]:
        """Decorate a function so that every call is retried.

        Args:
            func: The function to decorate.

        Returns:
            A function with the same signature that invokes ``func``
            through this retryer.

        Example:
            ```pycon
            >>> from reattempt import Retryer
            >>> @Retryer().wrap
            ... def add(a: int, b: int) -> int:
            ...     return a + b
            ...
            >>> add(1, 2)
            3

            ```
        """

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.call(functools.partial(func, *args, **kwargs))

        return wrapper
