r"""Incrementing (linear) wait strategy."""

from __future__ import annotations

__all__ = ["IncrementingWait"]

from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class IncrementingWait(BaseWaitStrategy):
    """Wait strategy growing by a fixed increment after each failure.

    Computes ``initial + increment * (attempt_number - 1)``. A negative
    increment shrinks the delay down to 0.

    Args:
        initial: The delay in seconds after the first failure.
        increment: The amount added after each subsequent failure.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import IncrementingWait
        >>> wait = IncrementingWait(initial=1.0, increment=0.5)
        >>> [wait.compute(Attempt.from_exception(OSError(), n, 0.0)) for n in (1, 2, 3)]
        [1.0, 1.5, 2.0]

        ```
    """

    def __init__(self, initial: float = 1.0, increment: float = 1.0) -> None:
        if initial < 0:
            msg = f"initial must be non-negative, got {initial}"
            raise ValueError(msg)
        self.initial = initial
        self.increment = increment

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial={self.initial}, increment={self.increment})"
        )

    def compute(self, attempt: Attempt[Any]) -> float:
        return max(0.0, self.initial + self.increment * (attempt.attempt_number - 1))
