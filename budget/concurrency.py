"""budget.concurrency

Fail-fast concurrent join.

Both request building and evaluation start one coroutine per entry and need
all of them to succeed. :func:`gather_all` keeps ``asyncio.gather`` ordering
(results line up with the inputs) but cancels whatever is still running as
soon as one branch fails, then re-raises that first error unchanged.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Iterable, List, TypeVar

T = TypeVar("T")


async def gather_all(aws: Iterable[Awaitable[T]]) -> List[T]:
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled tasks unwind before the caller sees the error.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
