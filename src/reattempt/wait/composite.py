r"""Wait strategies combining several strategies."""

from __future__ import annotations

__all__ = ["CombinedWait", "MaxWait"]

from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class _CompositeWait(BaseWaitStrategy):
    def __init__(self, *strategies: BaseWaitStrategy) -> None:
        if not strategies:
            msg = "at least one wait strategy is required"
            raise ValueError(msg)
        self.strategies = strategies

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({', '.join(map(repr, self.strategies))})"


class CombinedWait(_CompositeWait):
    """Wait strategy summing the delays of several strategies.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import CombinedWait, FixedWait, IncrementingWait
        >>> wait = CombinedWait(FixedWait(1.0), IncrementingWait(initial=0.0, increment=2.0))
        >>> wait.compute(Attempt.from_exception(OSError(), 3, 0.0))
        5.0

        ```
    """

    def compute(self, attempt: Attempt[Any]) -> float:
        return max(0.0, sum(strategy.compute(attempt) for strategy in self.strategies))


class MaxWait(_CompositeWait):
    """Wait strategy taking the largest delay of several strategies.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import ExponentialWait, FixedWait, MaxWait
        >>> wait = MaxWait(FixedWait(3.0), ExponentialWait(multiplier=1.0))
        >>> wait.compute(Attempt.from_exception(OSError(), 1, 0.0))
        3.0
        >>> wait.compute(Attempt.from_exception(OSError(), 3, 0.0))
        8.0

        ```
    """

    def compute(self, attempt: Attempt[Any]) -> float:
        return max(0.0, *(strategy.compute(attempt) for strategy in self.strategies))
