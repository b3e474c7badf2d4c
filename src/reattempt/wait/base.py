r"""Abstract base class for wait strategies."""

from __future__ import annotations

__all__ = ["BaseWaitStrategy", "NoWait"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class BaseWaitStrategy(ABC):
    """Abstract base class for wait strategies.

    A wait strategy determines how long to wait before the next attempt.
    The delay is computed only from the last failed attempt, so the same
    strategy instance can be shared between concurrent retry loops.
    """

    @abstractmethod
    def compute(self, attempt: Attempt[Any]) -> float:
        """Compute the delay before the next attempt.

        Args:
            attempt: The last failed attempt. ``attempt.attempt_number``
                is 1 after the first failure.

        Returns:
            The delay in seconds. ``0`` means retry immediately.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class NoWait(BaseWaitStrategy):
    """Wait strategy that retries immediately."""

    def compute(self, attempt: Attempt[Any]) -> float:  # noqa: ARG002
        return 0.0
