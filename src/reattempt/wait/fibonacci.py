r"""Fibonacci wait strategy."""

from __future__ import annotations

__all__ = ["FibonacciWait"]

import math
from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class FibonacciWait(BaseWaitStrategy):
    """Fibonacci wait strategy.

    Computes ``multiplier * fibonacci(attempt_number)`` with an optional
    ``max_delay`` cap. The sequence (1, 1, 2, 3, 5, 8, ...) grows more
    gently than the exponential one.

    Args:
        multiplier: The delay factor in seconds (default: 1.0).
        max_delay: Optional maximum delay in seconds.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import FibonacciWait
        >>> wait = FibonacciWait(multiplier=1.0)
        >>> [wait.compute(Attempt.from_exception(OSError(), n, 0.0)) for n in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> FibonacciWait(multiplier=1.0, max_delay=10.0).compute(
        ...     Attempt.from_exception(OSError(), 11, 0.0)
        ... )
        10.0

        ```
    """

    def __init__(self, multiplier: float = 1.0, max_delay: float | None = None) -> None:
        if multiplier < 0:
            msg = f"multiplier must be non-negative, got {multiplier}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(multiplier={self.multiplier}, "
            f"max_delay={self.max_delay})"
        )

    @staticmethod
    def _fibonacci(n: int, limit: float | None = None) -> int:
        """Return the nth Fibonacci number (1-indexed).

        The iteration stops early once the value exceeds ``limit``.
        """
        a, b = 0, 1
        for _ in range(n):
            a, b = b, a + b
            if limit is not None and a > limit:
                break
        return a

    def compute(self, attempt: Attempt[Any]) -> float:
        if self.multiplier == 0:
            return 0.0
        limit = None if self.max_delay is None else self.max_delay / self.multiplier
        try:
            delay = self.multiplier * self._fibonacci(attempt.attempt_number, limit)
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
