"""Tests for the bounded concurrency executor."""

from __future__ import annotations

import asyncio

import pytest

from tweetharvest.executor import clamp_concurrency, run_bounded


@pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-3, 1), (1, 1), (5, 5), (8, 8), (100, 8)])
def test_clamp_concurrency(requested: int, expected: int) -> None:
    assert clamp_concurrency(requested) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(("requested", "cap"), [(0, 1), (1, 1), (5, 5), (8, 8), (100, 8)])
async def test_never_exceeds_cap(requested: int, cap: int) -> None:
    in_flight = 0
    peak = 0

    async def task() -> int:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return 1

    outcomes = await run_bounded([task] * 20, requested)

    assert len(outcomes) == 20
    assert peak == cap


@pytest.mark.asyncio
async def test_failures_are_isolated() -> None:
    started: list[int] = []

    def make(i: int):
        async def task() -> int:
            started.append(i)
            await asyncio.sleep(0)
            if i == 1:
                raise RuntimeError("window down")
            return i * 10

        return task

    outcomes = await run_bounded([make(i) for i in range(4)], 2)

    assert sorted(started) == [0, 1, 2, 3]
    by_index = {o.index: o for o in outcomes}
    assert not by_index[1].ok
    assert isinstance(by_index[1].error, RuntimeError)
    assert {i: o.value for i, o in by_index.items() if o.ok} == {0: 0, 2: 20, 3: 30}


@pytest.mark.asyncio
async def test_on_done_sees_every_outcome() -> None:
    seen: list[int] = []

    async def task() -> None:
        return None

    await run_bounded([task] * 3, 8, on_done=lambda o: seen.append(o.index))
    assert sorted(seen) == [0, 1, 2]
