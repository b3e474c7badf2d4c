r"""Immutable records describing the outcome of one attempt.

An ``Attempt`` is created after each invocation of the retried
operation and handed to the retry predicate, the stop strategy and the
wait strategy of the same loop iteration.
"""

from __future__ import annotations

__all__ = ["Attempt", "FailureRecord"]

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_NO_RESULT: Any = object()


@dataclass(frozen=True)
class FailureRecord:
    """Description of the failure raised by an attempt.

    Attributes:
        exception: The raised exception.
        kind: The failure kind, i.e. the class of the exception.
        message: The exception message.

    Example:
        ```pycon
        >>> from reattempt.attempt import FailureRecord
        >>> record = FailureRecord.from_exception(KeyError("missing"))
        >>> record.kind
        <class 'KeyError'>
        >>> record.is_kind(LookupError)
        True
        >>> record.is_kind(ValueError, TypeError)
        False

        ```
    """

    exception: BaseException
    kind: type[BaseException] = field(init=False)
    message: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", type(self.exception))
        object.__setattr__(self, "message", str(self.exception))

    @classmethod
    def from_exception(cls, exc: BaseException) -> FailureRecord:
        return cls(exception=exc)

    def is_kind(self, *kinds: type[BaseException]) -> bool:
        """Indicate if the failure is one of the given kinds or a
        descendant of one of them.

        Args:
            *kinds: The failure kinds to match.

        Returns:
            ``True`` if the failure matches at least one kind.
        """
        return issubclass(self.kind, kinds)


@dataclass(frozen=True)
class Attempt(Generic[T]):
    """Outcome of a single invocation of the retried operation.

    An attempt holds exactly one outcome: either the value returned by the
    operation, or the failure it raised. ``None`` is a valid result.

    Args:
        attempt_number: The 1-indexed attempt number.
        delay_since_first_attempt: The elapsed time in seconds since the
            first attempt started.
        result: The value returned by the operation.
        failure: The failure raised by the operation.

    Raises:
        ValueError: If ``attempt_number`` is lower than 1, if the delay is
            negative, or unless exactly one of a result and a failure is
            given.

    Example:
        ```pycon
        >>> from reattempt import Attempt
        >>> attempt = Attempt.from_result(42, attempt_number=1, delay_since_first_attempt=0.0)
        >>> attempt.has_result
        True
        >>> attempt.get()
        42
        >>> attempt = Attempt.from_exception(ValueError("bad"), 2, 0.5)
        >>> attempt.has_exception
        True
        >>> attempt.exception
        ValueError('bad')

        ```
    """

    attempt_number: int
    delay_since_first_attempt: float
    result: T | None = _NO_RESULT
    failure: FailureRecord | None = None

    def __post_init__(self) -> None:
        if self.attempt_number < 1:
            msg = f"attempt_number must be >= 1, got {self.attempt_number}"
            raise ValueError(msg)
        if self.delay_since_first_attempt < 0:
            msg = (
                "delay_since_first_attempt must be non-negative, "
                f"got {self.delay_since_first_attempt}"
            )
            raise ValueError(msg)
        if (self.result is _NO_RESULT) == (self.failure is None):
            msg = "an attempt holds either a result or a failure, got both or neither"
            raise ValueError(msg)
        if self.failure is not None:
            object.__setattr__(self, "result", None)

    @classmethod
    def from_result(
        cls, result: T, attempt_number: int, delay_since_first_attempt: float
    ) -> Attempt[T]:
        return cls(
            attempt_number=attempt_number,
            delay_since_first_attempt=delay_since_first_attempt,
            result=result,
        )

    @classmethod
    def from_exception(
        cls, exc: BaseException, attempt_number: int, delay_since_first_attempt: float
    ) -> Attempt[Any]:
        return cls(
            attempt_number=attempt_number,
            delay_since_first_attempt=delay_since_first_attempt,
            failure=FailureRecord.from_exception(exc),
        )

    @property
    def has_result(self) -> bool:
        return self.failure is None

    @property
    def has_exception(self) -> bool:
        return self.failure is not None

    @property
    def exception(self) -> BaseException | None:
        """The exception raised by the operation, or ``None``."""
        if self.failure is None:
            return None
        return self.failure.exception

    def get(self) -> T | None:
        """Return the result of the attempt or raise its failure.

        Returns:
            The value returned by the operation.

        Raises:
            BaseException: The exception raised by the operation, if any.
        """
        if self.failure is not None:
            raise self.failure.exception
        return self.result
