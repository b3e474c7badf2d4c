from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

from reattempt import Attempt

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", new_callable=AsyncMock, return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()


@pytest.fixture
def failed_attempt() -> Attempt:
    """Create the first failed attempt of a sequence."""
    return Attempt.from_exception(ConnectionError("unreachable"), 1, 0.0)


class Thrower:
    """Operation raising an exception until a given attempt succeeds.

    Args:
        exception_type: The type of the raised exceptions.
        success_attempt: The 1-indexed invocation that returns a value.
    """

    def __init__(self, exception_type: type[BaseException], success_attempt: int) -> None:
        self.exception_type = exception_type
        self.success_attempt = success_attempt
        self.invocations = 0

    def __call__(self) -> str:
        self.invocations += 1
        if self.invocations == self.success_attempt:
            return f"success on attempt {self.invocations}"
        raise self.exception_type(f"failure on attempt {self.invocations}")


class AsyncThrower(Thrower):
    async def __call__(self) -> str:  # type: ignore[override]
        return super().__call__()


@pytest.fixture
def thrower_factory() -> type[Thrower]:
    return Thrower


@pytest.fixture
def async_thrower_factory() -> type[AsyncThrower]:
    return AsyncThrower
