r"""Cooperative cancellation of a retry operation."""

from __future__ import annotations

__all__ = ["CancellationToken"]

import logging
import threading

from reattempt.exceptions import RetryCancelledError

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe token used to cancel a retry operation from outside.

    The retry loop checks the token around each attempt and during each
    backoff wait. Once cancelled, a token stays cancelled.

    Example:
        ```pycon
        >>> from reattempt import CancellationToken
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
        >>> token.wait(10.0)
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.is_cancelled})"

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation of the retry operation."""
        if not self._event.is_set():
            logger.debug("Cancellation requested")
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``RetryCancelledError`` if cancellation was requested.

        Raises:
            RetryCancelledError: If the token is cancelled.
        """
        if self._event.is_set():
            msg = "retry operation was cancelled"
            raise RetryCancelledError(msg)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the token is cancelled or the timeout elapses.

        Args:
            timeout: The maximum time to wait in seconds. ``None`` waits
                until cancellation.

        Returns:
            ``True`` if the token was cancelled, ``False`` if the timeout
            elapsed first.
        """
        return self._event.wait(timeout)
