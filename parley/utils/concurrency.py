"""
Structured fan-out for independent storage lookups.

`gather_all` runs every awaitable concurrently and waits for all of them to
settle before reporting. If any failed, the first failure (in argument order)
is raised after the siblings have finished, so no lookup is left running in
the background.
"""

import asyncio
from typing import Any, Awaitable


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
