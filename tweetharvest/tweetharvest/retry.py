"""Bounded re-attempts around an async operation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Run an operation up to ``max_attempts`` times.

    ``backoff`` is the delay before the second attempt; each later delay is
    multiplied by ``multiplier``. When every attempt fails, the last
    exception is re-raised as-is.
    """

    max_attempts: int = 3
    backoff: float = 0.0
    multiplier: float = 2.0
    retry_on: tuple[type[Exception], ...] = (Exception,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def run(self, operation: Callable[[], Awaitable[T]], *, label: str = "operation") -> T:
        delay = self.backoff
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except self.retry_on as exc:
                if attempt == self.max_attempts:
                    raise
                logger.debug(
                    "%s failed (attempt %d/%d): %s", label, attempt, self.max_attempts, exc
                )
                if delay > 0:
                    await asyncio.sleep(delay)
                delay *= self.multiplier
        raise AssertionError("unreachable")
