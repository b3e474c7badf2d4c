r"""Wait strategies computing the delay before the next attempt.

This package provides fixed, incrementing, exponential, Fibonacci and
random delays, a delay derived from the last failure, and combinators
summing or taking the maximum of several strategies.
"""

from __future__ import annotations

__all__ = [
    "BaseWaitStrategy",
    "CombinedWait",
    "ExceptionWait",
    "ExponentialWait",
    "FibonacciWait",
    "FixedWait",
    "IncrementingWait",
    "MaxWait",
    "NoWait",
    "RandomWait",
]

from reattempt.wait.base import BaseWaitStrategy, NoWait
from reattempt.wait.composite import CombinedWait, MaxWait
from reattempt.wait.exception import ExceptionWait
from reattempt.wait.exponential import ExponentialWait
from reattempt.wait.fibonacci import FibonacciWait
from reattempt.wait.fixed import FixedWait
from reattempt.wait.incrementing import IncrementingWait
from reattempt.wait.jitter import RandomWait
