r"""Stop strategies deciding when to give up retrying.

A stop strategy is consulted only after the retry predicate decided that
another attempt is otherwise warranted. Limits are inclusive: an attempt
reaching the limit exactly stops the loop.
"""

from __future__ import annotations

__all__ = ["NeverStop", "StopAfterAttempt", "StopAfterDelay", "StopAny", "StopStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class StopStrategy(ABC):
    """Abstract base class for stop strategies."""

    @abstractmethod
    def should_stop(self, attempt: Attempt[Any]) -> bool:
        """Indicate if retrying should stop after the given failed
        attempt.

        Args:
            attempt: The last failed attempt.

        Returns:
            ``True`` to give up, ``False`` to try again.
        """

    def __or__(self, other: StopStrategy) -> StopAny:
        return StopAny(self, other)


class NeverStop(StopStrategy):
    """Stop strategy that retries forever."""

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def should_stop(self, attempt: Attempt[Any]) -> bool:  # noqa: ARG002
        return False


class StopAfterAttempt(StopStrategy):
    """Stop strategy that stops after a number of attempts.

    Args:
        max_attempts: The total number of attempts allowed, including
            the first one. ``1`` means no retry.

    Raises:
        ValueError: If ``max_attempts`` is lower than 1.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.stop import StopAfterAttempt
        >>> stop = StopAfterAttempt(3)
        >>> stop.should_stop(Attempt.from_exception(OSError(), 2, 0.0))
        False
        >>> stop.should_stop(Attempt.from_exception(OSError(), 3, 0.0))
        True

        ```
    """

    def __init__(self, max_attempts: int) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)
        self.max_attempts = max_attempts

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_attempts={self.max_attempts})"

    def should_stop(self, attempt: Attempt[Any]) -> bool:
        return attempt.attempt_number >= self.max_attempts


class StopAfterDelay(StopStrategy):
    """Stop strategy that stops once a time budget since the first
    attempt is spent.

    Args:
        max_delay: The maximum elapsed time in seconds since the first
            attempt started.

    Raises:
        ValueError: If ``max_delay`` is negative.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.stop import StopAfterDelay
        >>> stop = StopAfterDelay(1.0)
        >>> stop.should_stop(Attempt.from_exception(OSError(), 4, 0.999))
        False
        >>> stop.should_stop(Attempt.from_exception(OSError(), 4, 1.0))
        True

        ```
    """

    def __init__(self, max_delay: float) -> None:
        if max_delay < 0:
            msg = f"max_delay must be >= 0, got {max_delay}"
            raise ValueError(msg)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    def should_stop(self, attempt: Attempt[Any]) -> bool:
        return attempt.delay_since_first_attempt >= self.max_delay


class StopAny(StopStrategy):
    """Stop strategy that stops when any of its members says so.

    Args:
        *strategies: The stop strategies to combine.
    """

    def __init__(self, *strategies: StopStrategy) -> None:
        flat: list[StopStrategy] = []
        for strategy in strategies:
            if isinstance(strategy, StopAny):
                flat.extend(strategy.strategies)
            else:
                flat.append(strategy)
        self.strategies: tuple[StopStrategy, ...] = tuple(flat)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({', '.join(map(repr, self.strategies))})"

    def should_stop(self, attempt: Attempt[Any]) -> bool:
        return any(strategy.should_stop(attempt) for strategy in self.strategies)
