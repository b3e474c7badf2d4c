r"""reattempt - Retry execution engine with pluggable policies.

This package repeatedly invokes an operation until it succeeds, a stop
condition is met, or the operation is cancelled. Each concern of the
retry loop is a pluggable policy:

Key Features:
    - Retry predicates matching exceptions (including subclasses) and results
    - Stop strategies bounding the number of attempts or the elapsed time
    - Wait strategies: Fixed, Incrementing, Exponential, Fibonacci, Random, and combinations
    - Per-attempt time limits enforced on a worker thread or task
    - Cooperative cancellation that is never retried and never wrapped
    - Synchronous and asyncio retry loops
    - Callbacks for observability (logging, metrics, alerting)
    - httpx integration (status codes, transport errors, Retry-After)

Example:
    ```pycon
    >>> from reattempt import Retryer, RetryConfig
    >>> from reattempt.predicate import RetryIfExceptionOfType
    >>> from reattempt.stop import StopAfterAttempt
    >>> from reattempt.wait import FixedWait
    >>> retryer = Retryer(
    ...     RetryConfig(
    ...         retry_predicate=RetryIfExceptionOfType(OSError),
    ...         stop_strategy=StopAfterAttempt(3),
    ...         wait_strategy=FixedWait(0.0),
    ...     )
    ... )
    >>> retryer.call(lambda: "value")
    'value'

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryConfig",
    "AsyncRetryer",
    "Attempt",
    "AttemptTimeoutError",
    "CallbackConfig",
    "CancellationToken",
    "FailureRecord",
    "RetriesExhaustedError",
    "RetryCancelledError",
    "RetryConfig",
    "RetryError",
    "Retryer",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from reattempt.attempt import Attempt, FailureRecord
from reattempt.callbacks import CallbackConfig
from reattempt.cancellation import CancellationToken
from reattempt.config import AsyncRetryConfig, RetryConfig
from reattempt.exceptions import (
    AttemptTimeoutError,
    RetriesExhaustedError,
    RetryCancelledError,
    RetryError,
)
from reattempt.retryer import Retryer
from reattempt.retryer_async import AsyncRetryer

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
