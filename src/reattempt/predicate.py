r"""Retry predicates deciding whether an attempt warrants another try.

Predicates are stateless callables taking an ``Attempt``. Several
predicates can be combined with ``|``: the combination retries if any of
its members says so.
"""

from __future__ import annotations

__all__ = [
    "AnyRetryPredicate",
    "NeverRetry",
    "RetryIfException",
    "RetryIfExceptionMatching",
    "RetryIfExceptionOfType",
    "RetryIfResult",
    "RetryIfResultNot",
    "RetryPredicate",
]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.attempt import Attempt


class RetryPredicate(ABC):
    """Abstract base class for retry predicates."""

    @abstractmethod
    def __call__(self, attempt: Attempt[Any]) -> bool:
        """Indicate if the operation should be tried again.

        Args:
            attempt: The attempt to evaluate.

        Returns:
            ``True`` if another attempt is warranted.
        """

    def __or__(self, other: RetryPredicate) -> AnyRetryPredicate:
        return AnyRetryPredicate(self, other)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class NeverRetry(RetryPredicate):
    """Predicate that never retries, so the first attempt is final."""

    def __call__(self, attempt: Attempt[Any]) -> bool:  # noqa: ARG002
        return False


class RetryIfException(RetryPredicate):
    """Predicate that retries on any failure.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.predicate import RetryIfException
        >>> predicate = RetryIfException()
        >>> predicate(Attempt.from_exception(OSError(), 1, 0.0))
        True
        >>> predicate(Attempt.from_result("ok", 1, 0.0))
        False

        ```
    """

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return attempt.has_exception


class RetryIfExceptionOfType(RetryPredicate):
    """Predicate that retries when the failure is of the given kinds,
    including their descendants.

    Args:
        *exception_types: The failure kinds that trigger a retry.

    Raises:
        ValueError: If no failure kind is given.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.predicate import RetryIfExceptionOfType
        >>> predicate = RetryIfExceptionOfType(OSError)
        >>> predicate(Attempt.from_exception(ConnectionResetError(), 1, 0.0))
        True
        >>> predicate(Attempt.from_exception(ValueError(), 1, 0.0))
        False

        ```
    """

    def __init__(self, *exception_types: type[BaseException]) -> None:
        if not exception_types:
            msg = "at least one exception type is required"
            raise ValueError(msg)
        self.exception_types = exception_types

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self.exception_types)
        return f"{self.__class__.__qualname__}({names})"

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return attempt.failure is not None and attempt.failure.is_kind(*self.exception_types)


class RetryIfExceptionMatching(RetryPredicate):
    """Predicate that retries when a caller-supplied check accepts the
    raised exception.

    Args:
        predicate: Function returning ``True`` for exceptions that
            should be retried.
    """

    def __init__(self, predicate: Callable[[BaseException], bool]) -> None:
        self.predicate = predicate

    def __call__(self, attempt: Attempt[Any]) -> bool:
        exc = attempt.exception
        return exc is not None and bool(self.predicate(exc))


class RetryIfResult(RetryPredicate):
    """Predicate that retries while the returned value satisfies a
    check.

    Args:
        predicate: Function returning ``True`` for results that should
            be retried.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.predicate import RetryIfResult
        >>> predicate = RetryIfResult(lambda value: value is None)
        >>> predicate(Attempt.from_result(None, 1, 0.0))
        True
        >>> predicate(Attempt.from_result(1, 1, 0.0))
        False

        ```
    """

    def __init__(self, predicate: Callable[[Any], bool]) -> None:
        self.predicate = predicate

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return attempt.has_result and bool(self.predicate(attempt.result))


class RetryIfResultNot(RetryPredicate):
    """Predicate that retries while the returned value fails an
    acceptance check.

    Args:
        accept: Function returning ``True`` for acceptable results.
    """

    def __init__(self, accept: Callable[[Any], bool]) -> None:
        self.accept = accept

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return attempt.has_result and not self.accept(attempt.result)


class AnyRetryPredicate(RetryPredicate):
    """Predicate combining several predicates with OR semantics.

    An empty combination never retries.

    Args:
        *predicates: The predicates to combine. Nested combinations are
            flattened.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> from reattempt.predicate import RetryIfExceptionOfType, RetryIfResult
        >>> predicate = RetryIfExceptionOfType(OSError) | RetryIfResult(lambda v: v < 0)
        >>> predicate(Attempt.from_result(-1, 1, 0.0))
        True
        >>> predicate(Attempt.from_exception(OSError(), 1, 0.0))
        True
        >>> predicate(Attempt.from_result(1, 1, 0.0))
        False

        ```
    """

    def __init__(self, *predicates: RetryPredicate) -> None:
        flat: list[RetryPredicate] = []
        for predicate in predicates:
            if isinstance(predicate, AnyRetryPredicate):
                flat.extend(predicate.predicates)
            else:
                flat.append(predicate)
        self.predicates: tuple[RetryPredicate, ...] = tuple(flat)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({', '.join(map(repr, self.predicates))})"

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return any(predicate(attempt) for predicate in self.predicates)
