r"""Configuration dataclasses bundling the retry policies.

This module provides the policy sets consumed by ``Retryer`` and
``AsyncRetryer``. The defaults give a single attempt with no waiting and
no time limit.
"""

from __future__ import annotations

__all__ = ["AsyncRetryConfig", "RetryConfig"]

from dataclasses import dataclass, field

from reattempt.block import (
    AsyncBlockStrategy,
    AsyncSleepBlockStrategy,
    BlockStrategy,
    SleepBlockStrategy,
)
from reattempt.limiter import (
    AsyncAttemptTimeLimiter,
    AsyncNoAttemptTimeLimit,
    AttemptTimeLimiter,
    NoAttemptTimeLimit,
)
from reattempt.predicate import NeverRetry, RetryPredicate
from reattempt.stop import NeverStop, StopStrategy
from reattempt.wait.base import BaseWaitStrategy, NoWait


@dataclass
class _PolicyConfig:
    retry_predicate: RetryPredicate = field(default_factory=NeverRetry)
    stop_strategy: StopStrategy = field(default_factory=NeverStop)
    wait_strategy: BaseWaitStrategy = field(default_factory=NoWait)


@dataclass
class RetryConfig(_PolicyConfig):
    """Policies for the synchronous retry loop.

    Attributes:
        retry_predicate: Decides whether an attempt warrants a retry.
            Defaults to never retrying.
        stop_strategy: Decides whether to give up. Defaults to never
            stopping.
        wait_strategy: Computes the delay before the next attempt.
            Defaults to no delay.
        block_strategy: Performs the delay. Defaults to sleeping.
        attempt_time_limiter: Bounds each attempt. Defaults to no limit.

    Raises:
        TypeError: If a policy does not have the expected type.

    Example:
        ```pycon
        >>> from reattempt import RetryConfig
        >>> from reattempt.predicate import RetryIfExceptionOfType
        >>> from reattempt.stop import StopAfterAttempt
        >>> from reattempt.wait import ExponentialWait
        >>> config = RetryConfig(
        ...     retry_predicate=RetryIfExceptionOfType(ConnectionError),
        ...     stop_strategy=StopAfterAttempt(5),
        ...     wait_strategy=ExponentialWait(multiplier=0.1, max_delay=2.0),
        ... )
        >>> config.stop_strategy
        StopAfterAttempt(max_attempts=5)

        ```
    """

    block_strategy: BlockStrategy = field(default_factory=SleepBlockStrategy)
    attempt_time_limiter: AttemptTimeLimiter = field(default_factory=NoAttemptTimeLimit)

    def __post_init__(self) -> None:
        _check_policies(self)
        _check_type("block_strategy", self.block_strategy, BlockStrategy)
        _check_type("attempt_time_limiter", self.attempt_time_limiter, AttemptTimeLimiter)


@dataclass
class AsyncRetryConfig(_PolicyConfig):
    """Policies for the asynchronous retry loop.

    Attributes:
        retry_predicate: Decides whether an attempt warrants a retry.
        stop_strategy: Decides whether to give up.
        wait_strategy: Computes the delay before the next attempt.
        block_strategy: Performs the delay. Defaults to
            ``asyncio.sleep``.
        attempt_time_limiter: Bounds each attempt. Defaults to no limit.
    """

    block_strategy: AsyncBlockStrategy = field(default_factory=AsyncSleepBlockStrategy)
    attempt_time_limiter: AsyncAttemptTimeLimiter = field(
        default_factory=AsyncNoAttemptTimeLimit
    )

    def __post_init__(self) -> None:
        _check_policies(self)
        _check_type("block_strategy", self.block_strategy, AsyncBlockStrategy)
        _check_type("attempt_time_limiter", self.attempt_time_limiter, AsyncAttemptTimeLimiter)


def _check_policies(config: _PolicyConfig) -> None:
    _check_type("retry_predicate", config.retry_predicate, RetryPredicate)
    _check_type("stop_strategy", config.stop_strategy, StopStrategy)
    _check_type("wait_strategy", config.wait_strategy, BaseWaitStrategy)


def _check_type(name: str, value: object, expected: type) -> None:
    if not isinstance(value, expected):
        msg = f"{name} must be a {expected.__name__}, got {type(value).__name__}"
        raise TypeError(msg)
