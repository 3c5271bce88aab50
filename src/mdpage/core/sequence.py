"""Run asynchronous load tasks strictly one after another"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_series(tasks: Iterable[Callable[[], Awaitable[T]]]) -> list[T]:
    """Await each task only after the previous one finished; return results in order.

    The first exception stops the run and propagates to the caller; remaining
    tasks are never started. An empty iterable completes immediately.
    """
    results: list[T] = []
    for index, task in enumerate(tasks):
        logger.debug("series step %d: %s", index, getattr(task, "__name__", task))
        results.append(await task())
    return results
