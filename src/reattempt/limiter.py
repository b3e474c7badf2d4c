r"""Attempt time limiters bounding the duration of a single attempt.

A fixed time limit runs the operation on a worker so the caller can stop
waiting once the limit elapses. The worker is signaled but not joined:
an abandoned operation may keep running in the background and its late
outcome is logged and discarded. Unless an executor is supplied, each
attempt gets its own daemon thread, so hung operations never delay later
attempts or interpreter exit.
"""

from __future__ import annotations

__all__ = [
    "AsyncAttemptTimeLimiter",
    "AsyncFixedAttemptTimeLimit",
    "AsyncNoAttemptTimeLimit",
    "AttemptTimeLimiter",
    "FixedAttemptTimeLimit",
    "NoAttemptTimeLimit",
]

import asyncio
import logging
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, wait
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.exceptions import AttemptTimeoutError, RetryCancelledError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from concurrent.futures import Executor

    from reattempt.cancellation import CancellationToken

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def _check_timeout(timeout: float) -> None:
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def _run_in_future(future: Future[T], operation: Callable[[], T]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = operation()
    except BaseException as exc:  # noqa: BLE001
        future.set_exception(exc)
    else:
        future.set_result(result)


def _log_late_outcome(future: Future[Any]) -> None:
    if future.cancelled():
        logger.debug("Abandoned attempt was cancelled before it started")
        return
    exc = future.exception()
    if exc is not None:
        logger.debug(f"Abandoned attempt finished late with {type(exc).__name__}: {exc}")
    else:
        logger.debug("Abandoned attempt finished late, its result is discarded")


class AttemptTimeLimiter(ABC):
    """Abstract base class for synchronous attempt time limiters."""

    @abstractmethod
    def call(self, operation: Callable[[], T], token: CancellationToken | None = None) -> T:
        """Invoke the operation within the time limit.

        Args:
            operation: The zero-argument operation to invoke.
            token: Optional cancellation token observed while the
                operation is outstanding.

        Returns:
            The value returned by the operation.

        Raises:
            AttemptTimeoutError: If the time limit elapses first.
            RetryCancelledError: If the token is cancelled while the
                operation is outstanding.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class NoAttemptTimeLimit(AttemptTimeLimiter):
    """Time limiter that invokes the operation directly in the calling
    thread.

    Example:
        ```pycon
        >>> from reattempt.limiter import NoAttemptTimeLimit
        >>> NoAttemptTimeLimit().call(lambda: 42)
        42

        ```
    """

    def call(self, operation: Callable[[], T], token: CancellationToken | None = None) -> T:  # noqa: ARG002
        return operation()


class FixedAttemptTimeLimit(AttemptTimeLimiter):
    """Time limiter that bounds each attempt to a fixed duration.

    The operation runs on a worker thread while the calling thread waits
    for its outcome. The operation's own exceptions are raised unchanged.

    Args:
        timeout: The maximum duration of an attempt in seconds.
        executor: Optional executor running the operation. By default
            each attempt runs on its own daemon thread.
        poll_interval: How often, in seconds, the cancellation token is
            checked while waiting.

    Raises:
        ValueError: If ``timeout`` or ``poll_interval`` is not positive.

    Example:
        ```pycon
        >>> import time
        >>> from reattempt.limiter import FixedAttemptTimeLimit
        >>> limiter = FixedAttemptTimeLimit(timeout=1.0)
        >>> limiter.call(lambda: "fast")
        'fast'

        ```
    """

    def __init__(
        self,
        timeout: float,
        executor: Executor | None = None,
        poll_interval: float = 0.05,
    ) -> None:
        _check_timeout(timeout)
        if poll_interval <= 0:
            msg = f"poll_interval must be > 0, got {poll_interval}"
            raise ValueError(msg)
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.executor = executor

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(timeout={self.timeout})"

    def _submit(self, operation: Callable[[], T]) -> Future[T]:
        if self.executor is not None:
            return self.executor.submit(operation)
        future: Future[T] = Future()
        threading.Thread(
            target=_run_in_future, args=(future, operation), name="reattempt-attempt", daemon=True
        ).start()
        return future

    def call(self, operation: Callable[[], T], token: CancellationToken | None = None) -> T:
        if token is not None:
            token.raise_if_cancelled()
        future = self._submit(operation)
        deadline = time.monotonic() + self.timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            if token is not None:
                remaining = min(remaining, self.poll_interval)
            done, _ = wait([future], timeout=remaining)
            if done:
                return future.result()
            if token is not None and token.is_cancelled:
                self._abandon(future)
                msg = "retry operation was cancelled while an attempt was running"
                raise RetryCancelledError(msg)
        if future.done():
            return future.result()
        self._abandon(future)
        logger.debug(f"Attempt exceeded its time limit of {self.timeout}s")
        raise AttemptTimeoutError(self.timeout)

    @staticmethod
    def _abandon(future: Future[Any]) -> None:
        future.cancel()
        future.add_done_callback(_log_late_outcome)


class AsyncAttemptTimeLimiter(ABC):
    """Abstract base class for asynchronous attempt time limiters."""

    @abstractmethod
    async def call(
        self, operation: Callable[[], Awaitable[T]], token: CancellationToken | None = None
    ) -> T:
        """Await the operation within the time limit.

        Args:
            operation: The zero-argument coroutine function to await.
            token: Optional cancellation token observed while the
                operation is outstanding.

        Returns:
            The value returned by the operation.

        Raises:
            AttemptTimeoutError: If the time limit elapses first.
            RetryCancelledError: If the token is cancelled while the
                operation is outstanding.
            asyncio.CancelledError: If the calling task is cancelled.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class AsyncNoAttemptTimeLimit(AsyncAttemptTimeLimiter):
    """Time limiter that awaits the operation directly."""

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        token: CancellationToken | None = None,  # noqa: ARG002
    ) -> T:
        return await operation()


class AsyncFixedAttemptTimeLimit(AsyncAttemptTimeLimiter):
    """Time limiter that bounds each awaited attempt to a fixed
    duration.

    The operation runs in its own task which is cancelled when the time
    limit elapses, when the token is cancelled, or when the calling task
    is cancelled.

    Args:
        timeout: The maximum duration of an attempt in seconds.
        poll_interval: How often, in seconds, the cancellation token is
            checked while waiting.

    Raises:
        ValueError: If ``timeout`` or ``poll_interval`` is not positive.
    """

    def __init__(self, timeout: float, poll_interval: float = 0.05) -> None:
        _check_timeout(timeout)
        if poll_interval <= 0:
            msg = f"poll_interval must be > 0, got {poll_interval}"
            raise ValueError(msg)
        self.timeout = timeout
        self.poll_interval = poll_interval

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(timeout={self.timeout})"

    async def call(
        self, operation: Callable[[], Awaitable[T]], token: CancellationToken | None = None
    ) -> T:
        if token is not None:
            token.raise_if_cancelled()
        task = asyncio.ensure_future(operation())
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                if token is not None:
                    remaining = min(remaining, self.poll_interval)
                done, _ = await asyncio.wait({task}, timeout=remaining)
                if done:
                    return task.result()
                if token is not None and token.is_cancelled:
                    task.cancel()
                    msg = "retry operation was cancelled while an attempt was running"
                    raise RetryCancelledError(msg)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task.done():
            return task.result()
        task.cancel()
        logger.debug(f"Attempt exceeded its time limit of {self.timeout}s")
        raise AttemptTimeoutError(self.timeout)
