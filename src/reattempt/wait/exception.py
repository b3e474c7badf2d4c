r"""Wait strategy computing the delay from the last failure."""

from __future__ import annotations

__all__ = ["ExceptionWait"]

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from reattempt.wait.base import BaseWaitStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.attempt import Attempt

E = TypeVar("E", bound=BaseException)


class ExceptionWait(BaseWaitStrategy, Generic[E]):
    """Wait strategy whose delay depends on the raised exception.

    When the last attempt failed with ``exception_type`` (or a
    subclass), the delay is ``function(exception)``. Otherwise it is 0.

    Args:
        exception_type: The failure kind handled by ``function``.
        function: Function computing the delay in seconds.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.wait import ExceptionWait
        >>> wait = ExceptionWait(TimeoutError, lambda exc: 5.0)
        >>> wait.compute(Attempt.from_exception(TimeoutError(), 1, 0.0))
        5.0
        >>> wait.compute(Attempt.from_exception(ValueError(), 1, 0.0))
        0.0

        ```
    """

    def __init__(self, exception_type: type[E], function: Callable[[E], float]) -> None:
        self.exception_type = exception_type
        self.function = function

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.exception_type.__name__})"

    def compute(self, attempt: Attempt[Any]) -> float:
        exc = attempt.exception
        if isinstance(exc, self.exception_type):
            return max(0.0, float(self.function(exc)))
        return 0.0
