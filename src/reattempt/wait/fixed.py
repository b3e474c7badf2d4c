r"""Fixed wait strategy."""

from __future__ import annotations

__all__ = ["FixedWait"]

from typing import TYPE_CHECKING, Any

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from reattempt.attempt import Attempt


class FixedWait(BaseWaitStrategy):
    """Fixed wait strategy.

    Waits the same delay before every retry, regardless of the attempt
    number.

    Args:
        delay: The delay in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import FixedWait
        >>> wait = FixedWait(delay=2.5)
        >>> wait.compute(Attempt.from_exception(OSError(), 1, 0.0))
        2.5
        >>> wait.compute(Attempt.from_exception(OSError(), 10, 30.0))
        2.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def compute(self, attempt: Attempt[Any]) -> float:  # noqa: ARG002
        return self.delay
