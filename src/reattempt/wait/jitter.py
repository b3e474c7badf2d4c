r"""Random wait strategy, used to spread retries of concurrent
callers."""

from __future__ import annotations

__all__ = ["RandomWait"]

import random
from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class RandomWait(BaseWaitStrategy):
    """Wait strategy drawing a uniformly random delay.

    Args:
        minimum: The lower bound in seconds (default: 0.0).
        maximum: The upper bound in seconds (default: 1.0).

    Raises:
        ValueError: If ``minimum`` is negative or greater than
            ``maximum``.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import RandomWait
        >>> wait = RandomWait(minimum=1.0, maximum=2.0)
        >>> 1.0 <= wait.compute(Attempt.from_exception(OSError(), 1, 0.0)) <= 2.0
        True

        ```
    """

    def __init__(self, minimum: float = 0.0, maximum: float = 1.0) -> None:
        if minimum < 0:
            msg = f"minimum must be non-negative, got {minimum}"
            raise ValueError(msg)
        if maximum < minimum:
            msg = f"maximum must be >= minimum ({minimum}), got {maximum}"
            raise ValueError(msg)
        self.minimum = minimum
        self.maximum = maximum

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(minimum={self.minimum}, maximum={self.maximum})"

    def compute(self, attempt: Attempt[Any]) -> float:  # noqa: ARG002
        return random.uniform(self.minimum, self.maximum)  # noqa: S311
