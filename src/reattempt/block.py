r"""Block strategies performing the backoff wait between attempts.

The synchronous strategy waits on the cancellation token so a
cancellation requested during the wait ends it immediately. The
asynchronous strategy polls the token between short sleeps and also
ends on task cancellation.
"""

from __future__ import annotations

__all__ = [
    "AsyncBlockStrategy",
    "AsyncSleepBlockStrategy",
    "BlockStrategy",
    "SleepBlockStrategy",
]

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from reattempt.exceptions import RetryCancelledError

if TYPE_CHECKING:
    from reattempt.cancellation import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)


class BlockStrategy(ABC):
    """Abstract base class for synchronous block strategies."""

    @abstractmethod
    def block(self, seconds: float, token: CancellationToken | None = None) -> None:
        """Wait for the given duration.

        Args:
            seconds: The non-negative duration to wait in seconds.
            token: Optional cancellation token observed while waiting.

        Raises:
            RetryCancelledError: If the token is cancelled before or
                during the wait.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class SleepBlockStrategy(BlockStrategy):
    """Block strategy that suspends the calling thread.

    Without a token, it calls ``time.sleep``. With a token, it waits on
    the token and raises ``RetryCancelledError`` as soon as the token is
    cancelled.

    Example:
        ```pycon
        >>> from reattempt import CancellationToken
        >>> from reattempt.block import SleepBlockStrategy
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> SleepBlockStrategy().block(5.0, token)
        Traceback (most recent call last):
            ...
        reattempt.exceptions.RetryCancelledError: retry operation was cancelled

        ```
    """

    def block(self, seconds: float, token: CancellationToken | None = None) -> None:
        if token is None:
            time.sleep(seconds)
            return
        token.raise_if_cancelled()
        if token.wait(seconds):
            logger.debug(f"Backoff wait of {seconds:.2f}s interrupted by cancellation")
            msg = "retry operation was cancelled during backoff"
            raise RetryCancelledError(msg)


class AsyncBlockStrategy(ABC):
    """Abstract base class for asynchronous block strategies."""

    @abstractmethod
    async def block(self, seconds: float, token: CancellationToken | None = None) -> None:
        """Wait for the given duration without blocking the event loop.

        Args:
            seconds: The non-negative duration to wait in seconds.
            token: Optional cancellation token observed during the wait.

        Raises:
            asyncio.CancelledError: If the waiting task is cancelled.
            RetryCancelledError: If the token is cancelled before or
                during the wait.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class AsyncSleepBlockStrategy(AsyncBlockStrategy):
    """Block strategy that awaits ``asyncio.sleep``.

    Without a token the whole duration is awaited at once. With a token
    the wait is split into steps of at most ``poll_interval`` seconds and
    the token is checked after each step.

    Args:
        poll_interval: The longest step, in seconds, between two checks
            of the token.

    Raises:
        ValueError: If ``poll_interval`` is not positive.
    """

    def __init__(self, poll_interval: float = 0.05) -> None:
        if poll_interval <= 0:
            msg = f"poll_interval must be > 0, got {poll_interval}"
            raise ValueError(msg)
        self.poll_interval = poll_interval

    async def block(self, seconds: float, token: CancellationToken | None = None) -> None:
        if token is None:
            await asyncio.sleep(seconds)
            return
        token.raise_if_cancelled()
        remaining = seconds
        while remaining > 0:
            step = min(remaining, self.poll_interval)
            await asyncio.sleep(step)
            remaining -= step
            if token.is_cancelled:
                logger.debug(f"Backoff wait of {seconds:.2f}s interrupted by cancellation")
                msg = "retry operation was cancelled during backoff"
                raise RetryCancelledError(msg)
