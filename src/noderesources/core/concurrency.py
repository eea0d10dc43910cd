import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_fail_fast(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    limit: int = 0,
) -> List[R]:
    """
    Run ``func`` concurrently for every item and wait for all of them.

    One task is created per item; ``limit`` > 0 caps how many run at once.
    Results are returned in completion order. If any task fails, the
    still-running siblings are cancelled and the first failure is re-raised,
    so callers never see a partial result list.
    """
    semaphore = asyncio.Semaphore(limit) if limit > 0 else contextlib.nullcontext()
    sink: asyncio.Queue = asyncio.Queue()

    async def _run(item: T) -> None:
        async with semaphore:
            result = await func(item)
        sink.put_nowait(result)

    tasks = [asyncio.create_task(_run(item)) for item in items]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _cancel_all(tasks)
        raise

    failures = [task.exception() for task in done if not task.cancelled() and task.exception() is not None]
    if failures:
        if pending:
            logger.debug("Cancelling %d in-flight task(s) after a failure.", len(pending))
            await _cancel_all(pending)
        raise failures[0]

    results: List[R] = []
    while not sink.empty():
        results.append(sink.get_nowait())
    return results


async def _cancel_all(tasks) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
