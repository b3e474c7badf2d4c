r"""Asynchronous retry loop.

This module provides the ``AsyncRetryer`` class, the coroutine
counterpart of ``Retryer``. Cancelling the task running the loop raises
``asyncio.CancelledError`` out of the current attempt or wait, and the
loop ends immediately.
"""

from __future__ import annotations

__all__ = ["AsyncRetryer"]

import functools
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.attempt import Attempt
from reattempt.callbacks import CallbackManager
from reattempt.config import AsyncRetryConfig
from reattempt.exceptions import CANCELLATION_ERRORS, RetriesExhaustedError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from reattempt.callbacks import CallbackConfig
    from reattempt.cancellation import CancellationToken

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryer:
    """Executes a coroutine function with automatic retry logic.

    Args:
        config: The retry policies. Defaults to ``AsyncRetryConfig()``.
        callbacks: Optional lifecycle callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from reattempt import AsyncRetryConfig, AsyncRetryer
        >>> from reattempt.predicate import RetryIfResult
        >>> from reattempt.stop import StopAfterAttempt
        >>> values = iter([None, None, 7])
        >>> async def poll() -> int | None:
        ...     return next(values)
        ...
        >>> retryer = AsyncRetryer(
        ...     AsyncRetryConfig(
        ...         retry_predicate=RetryIfResult(lambda value: value is None),
        ...         stop_strategy=StopAfterAttempt(5),
        ...     )
        ... )
        >>> asyncio.run(retryer.call(poll))
        7

        ```
    """

    def __init__(
        self,
        config: AsyncRetryConfig | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.config = config or AsyncRetryConfig()
        self.callbacks: CallbackManager = CallbackManager(callbacks)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config})"

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        token: CancellationToken | None = None,
    ) -> T:
        """Await the operation until it succeeds or retrying ends.

        Args:
            operation: The zero-argument coroutine function to await.
            token: Optional cancellation token, observed around and
                during each attempt and wait.

        Returns:
            The value returned by the last attempt.

        Raises:
            RetriesExhaustedError: If the stop strategy gave up.
            RetryCancelledError: If the token was cancelled.
            asyncio.CancelledError: If the calling task was cancelled.
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
                result = await config.attempt_time_limiter.call(operation, token)
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
                now = time.monotonic()
                exc = attempt.exception
                if exc is not None:
                    logger.debug(f"Attempt {attempt_number} failed and is not retried")
                    self.callbacks.on_failure(
                        attempt, exc, exhausted=False, start_time=start_time, now=now
                    )
                    raise exc
                self.callbacks.on_success(attempt, start_time=start_time, now=now)
                return attempt.result  # type: ignore[return-value]

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
            await config.block_strategy.block(wait_time, token)
            attempt_number += 1

    def wrap(self, func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        """Decorate a coroutine function so that every call is retried.

        Args:
            func: The coroutine function to decorate.

        Returns:
            A coroutine function invoking ``func`` through this retryer.
        """

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await self.call(functools.partial(func, *args, **kwargs))

        return wrapper
