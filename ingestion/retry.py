"""
Bounded retry with quadratic backoff and reconnect-on-closed-connection
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional
from core.exceptions import DatabaseConnectionError, NonRetryableError, RetriesExhaustedError
import logging

logger = logging.getLogger(__name__)


class RetryExecutor:
    """
    Run a fallible async operation with a fixed retry budget.

    Attributes:
        max_retries: Retries allowed after the first attempt (default: 3)
        reconnect: Hook awaited when the failure is a closed connection
        backoff_seconds: Base delay; attempt n waits backoff_seconds * n**2
    """

    def __init__(
        self,
        max_retries: int = 3,
        reconnect: Optional[Callable[[], Awaitable[Any]]] = None,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.max_retries = max_retries
        self.reconnect = reconnect
        self.backoff_seconds = backoff_seconds
        self.sleep = sleep

    def delay_for(self, attempt: int) -> float:
        return self.backoff_seconds * attempt ** 2

    async def run(self, operation: Callable[[], Awaitable[Any]], description: str = "operation") -> Any:
        """
        Await operation until it succeeds or the budget is spent.

        Raises:
            RetriesExhaustedError: After max_retries + 1 failed attempts, or
                immediately for a NonRetryableError. Chained from the last
                failure.
        """
        attempt = 0

        while True:
            try:
                return await operation()
            except Exception as e:
                attempt += 1

                if isinstance(e, DatabaseConnectionError) and self.reconnect is not None:
                    logger.warning(f"Connection closed during {description}, reconnecting")
                    await self._reconnect(description)

                if isinstance(e, NonRetryableError) or attempt > self.max_retries:
                    raise RetriesExhaustedError(
                        f"{description} failed after {attempt} attempt(s)",
                        context={"operation": description, "attempts": attempt},
                        original_exception=e
                    ) from e

                delay = self.delay_for(attempt)
                logger.warning(
                    f"{description} attempt {attempt}/{self.max_retries + 1} failed: {e}. "
                    f"Retrying in {delay:g}s"
                )
                await self.sleep(delay)

    async def _reconnect(self, description: str) -> None:
        try:
            await self.reconnect()
        except Exception as e:
            # The next attempt will fail again and consume budget.
            logger.warning(f"Reconnect during {description} failed: {e}")
