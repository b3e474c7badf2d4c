r"""Exponential wait strategy."""

from __future__ import annotations

__all__ = ["ExponentialWait"]

import math
from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class ExponentialWait(BaseWaitStrategy):
    """Exponential wait strategy.

    Computes ``multiplier * 2 ** attempt_number``, with an optional
    ``max_delay`` cap.

    Args:
        multiplier: The delay factor in seconds (default: 0.5).
        max_delay: Optional maximum delay in seconds.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import ExponentialWait
        >>> wait = ExponentialWait(multiplier=0.5)
        >>> [wait.compute(Attempt.from_exception(OSError(), n, 0.0)) for n in (1, 2, 3)]
        [1.0, 2.0, 4.0]
        >>> wait = ExponentialWait(multiplier=1.0, max_delay=5.0)
        >>> wait.compute(Attempt.from_exception(OSError(), 10, 0.0))
        5.0

        ```
    """

    def __init__(self, multiplier: float = 0.5, max_delay: float | None = None) -> None:
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

    def compute(self, attempt: Attempt[Any]) -> float:
        try:
            delay = math.ldexp(self.multiplier, attempt.attempt_number)
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
