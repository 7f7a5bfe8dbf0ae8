"""Deadline wrapper for upstream calls"""

import asyncio
from typing import Awaitable, TypeVar

from ..models.errors import StageTimeoutError

T = TypeVar("T")


async def with_timeout(operation: Awaitable[T], seconds: float, message: str) -> T:
    """Await ``operation`` for at most ``seconds``.

    Raises StageTimeoutError(message) when the deadline passes first. The
    pending operation is cancelled; callers should still treat a timed
    out call as abandoned rather than stopped.
    """
    try:
        return await asyncio.wait_for(operation, timeout=seconds)
    except asyncio.TimeoutError:
        raise StageTimeoutError(message) from None
