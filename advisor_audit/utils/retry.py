"""Bounded retry loop with jittered exponential backoff."""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Retry policy with configurable attempts and delay.

    PATTERN: Manager class for retry handling.
    The check is re-run until the stop predicate accepts its result or the
    attempt budget is spent; the last result is returned either way.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 2.0,
        jitter: float = 1.0,
        max_delay: float = 30.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Maximum number of times the check runs (>= 1)
            base_delay: Delay before the second attempt (seconds)
            jitter: Upper bound of the random extra delay (seconds)
            max_delay: Cap on the exponential part of the delay (seconds)
            sleep: Awaitable sleep function (asyncio.sleep by default)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.jitter = jitter
        self.max_delay = max_delay
        self._sleep = sleep or asyncio.sleep

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate the delay after a failed attempt.

        Args:
            attempt: Attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay = min(self.base_delay * (2**attempt), self.max_delay)
        if self.jitter > 0:
            delay += random.uniform(0, self.jitter)
        return delay

    async def run(
        self,
        check: Callable[[], Awaitable[T]],
        should_stop: Callable[[T], bool],
    ) -> T:
        """
        Run check until should_stop accepts its result.

        Args:
            check: Async callable producing a result
            should_stop: Predicate deciding whether the result is final

        Returns:
            The accepted result, or the last result once attempts run out
        """
        result = await check()

        for attempt in range(self.max_attempts - 1):
            if should_stop(result):
                return result

            delay = self.calculate_delay(attempt)
            logger.warning(
                f"Attempt {attempt + 1}/{self.max_attempts} not accepted. "
                f"Retrying in {delay:.2f}s..."
            )
            await self._sleep(delay)
            result = await check()

        if not should_stop(result):
            logger.error(f"All {self.max_attempts} attempts exhausted")
        return result
