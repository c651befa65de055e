"""Run independent async tasks with a capped number in flight."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

MIN_CONCURRENCY = 1
MAX_CONCURRENCY = 8


def clamp_concurrency(requested: int) -> int:
    return max(MIN_CONCURRENCY, min(MAX_CONCURRENCY, requested))


@dataclass(frozen=True)
class TaskOutcome(Generic[T]):
    """Result of one task; ``index`` is its position in the submitted batch."""

    index: int
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_bounded(
    factories: Sequence[Callable[[], Awaitable[T]]],
    limit: int,
    on_done: Callable[[TaskOutcome[T]], None] | None = None,
) -> list[TaskOutcome[T]]:
    """Run every factory, at most ``clamp_concurrency(limit)`` at a time.

    A failing task is captured in its outcome and never cancels its
    siblings. Outcomes are listed in completion order.
    """
    semaphore = asyncio.Semaphore(clamp_concurrency(limit))
    outcomes: list[TaskOutcome[T]] = []

    async def _one(index: int, factory: Callable[[], Awaitable[T]]) -> None:
        async with semaphore:
            try:
                outcome = TaskOutcome(index=index, value=await factory())
            except Exception as exc:
                outcome = TaskOutcome(index=index, error=exc)
        outcomes.append(outcome)
        if on_done is not None:
            on_done(outcome)

    await asyncio.gather(*(_one(i, f) for i, f in enumerate(factories)))
    return outcomes
