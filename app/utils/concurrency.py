"""Concurrent loading helpers."""

import asyncio
from typing import Any, Awaitable, List


async def load_all(*loads: Awaitable[Any]) -> List[Any]:
    """Run loads concurrently and return their results in argument order.

    If any load fails the others are cancelled and the first failure is
    raised; no partial results are returned.
    """
    tasks = []
    try:
        async with asyncio.TaskGroup() as group:
            for load in loads:
                tasks.append(group.create_task(load))
    except BaseExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]
