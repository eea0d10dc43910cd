# tests/core/test_concurrency.py

import asyncio

import pytest

from noderesources.core.concurrency import gather_fail_fast


async def test_returns_every_result():
    async def double(x):
        await asyncio.sleep(0.001 * (5 - x))
        return x * 2

    results = await gather_fail_fast(double, range(5))
    assert sorted(results) == [0, 2, 4, 6, 8]


async def test_results_arrive_in_completion_order():
    async def delayed(x):
        await asyncio.sleep(x)
        return x

    results = await gather_fail_fast(delayed, [0.05, 0.0, 0.02])
    assert results == [0.0, 0.02, 0.05]


async def test_empty_input():
    async def never(x):
        raise AssertionError("should not be called")

    assert await gather_fail_fast(never, []) == []


async def test_first_failure_is_raised_and_siblings_cancelled():
    cancelled = []

    async def work(x):
        if x == "boom":
            raise RuntimeError("boom")
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            cancelled.append(x)
            raise
        return x

    with pytest.raises(RuntimeError, match="boom"):
        await asyncio.wait_for(gather_fail_fast(work, ["a", "boom", "b"]), timeout=5)
    assert sorted(cancelled) == ["a", "b"]


async def test_outer_cancellation_cancels_children():
    started = asyncio.Event()
    cancelled = []

    async def work(x):
        started.set()
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            cancelled.append(x)
            raise

    task = asyncio.create_task(gather_fail_fast(work, [1, 2]))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert sorted(cancelled) == [1, 2]


async def test_limit_caps_parallelism():
    running = 0
    peak = 0

    async def work(x):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.005)
        running -= 1
        return x

    await gather_fail_fast(work, range(10), limit=3)
    assert peak == 3
