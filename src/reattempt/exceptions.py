r"""Exceptions raised by the retry engine.

The exception classes double as the failure-kind hierarchy used by the
retry predicates: a predicate configured with a class matches that class
and all of its subclasses.
"""

from __future__ import annotations

__all__ = [
    "AttemptTimeoutError",
    "CANCELLATION_ERRORS",
    "RetriesExhaustedError",
    "RetryCancelledError",
    "RetryError",
    "is_cancellation",
]

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class RetryError(Exception):
    """Base class for the failures synthesized by the retry engine."""


class AttemptTimeoutError(RetryError, TimeoutError):
    """Exception raised when a single attempt exceeds its time limit.

    Args:
        timeout: The time limit in seconds that was exceeded.
        message: Optional custom message.

    Example:
        ```pycon
        >>> from reattempt.exceptions import AttemptTimeoutError
        >>> error = AttemptTimeoutError(timeout=1.5)
        >>> error.timeout
        1.5
        >>> str(error)
        'attempt did not complete within 1.5s'

        ```
    """

    def __init__(self, timeout: float, message: str | None = None) -> None:
        super().__init__(message or f"attempt did not complete within {timeout}s")
        self.timeout = timeout


class RetryCancelledError(RetryError):
    """Exception raised when the retry operation is cancelled.

    It is raised when a cancellation token is cancelled while an attempt
    or a backoff wait is outstanding. It is never retried and never
    wrapped.
    """


class RetriesExhaustedError(RetryError):
    """Exception raised when the stop strategy ends the retry loop.

    Args:
        attempt: The last attempt made before giving up.

    Attributes:
        attempt: The last attempt.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.exceptions import RetriesExhaustedError
        >>> attempt = Attempt.from_exception(ValueError("boom"), 3, 1.25)
        >>> error = RetriesExhaustedError(attempt)
        >>> error.attempt_number
        3
        >>> str(error)
        'retrying failed to complete successfully after 3 attempts (1.25s): ValueError: boom'

        ```
    """

    def __init__(self, attempt: Attempt[Any]) -> None:
        self.attempt = attempt
        if attempt.has_exception:
            outcome = f"{attempt.failure.kind.__name__}: {attempt.failure.message}"
        else:
            outcome = f"last result {attempt.result!r}"
        super().__init__(
            f"retrying failed to complete successfully after {attempt.attempt_number} attempts "
            f"({attempt.delay_since_first_attempt:.2f}s): {outcome}"
        )

    @property
    def attempt_number(self) -> int:
        return self.attempt.attempt_number

    @property
    def delay_since_first_attempt(self) -> float:
        return self.attempt.delay_since_first_attempt

    @property
    def last_failure(self) -> BaseException | None:
        """The exception raised by the last attempt, or ``None`` if it
        produced a result."""
        return self.attempt.exception


# Failures that signal cancellation of the whole retry operation. They are
# propagated as-is and never evaluated by the retry predicate.
CANCELLATION_ERRORS: tuple[type[BaseException], ...] = (
    RetryCancelledError,
    asyncio.CancelledError,
    KeyboardInterrupt,
)


def is_cancellation(exc: BaseException) -> bool:
    """Indicate if an exception signals cancellation of the retry
    operation.

    Args:
        exc: The exception to check.

    Returns:
        ``True`` if the exception is a cancellation signal.

    Example:
        ```pycon
        >>> import asyncio
        >>> from reattempt.exceptions import RetryCancelledError, is_cancellation
        >>> is_cancellation(RetryCancelledError())
        True
        >>> is_cancellation(asyncio.CancelledError())
        True
        >>> is_cancellation(ValueError())
        False

        ```
    """
    return isinstance(exc, CANCELLATION_ERRORS)
