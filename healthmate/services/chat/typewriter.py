"""Typewriter pacing for chat replies.

A complete reply is cut into fixed-size groups of characters and handed to
``emit`` one group per tick, followed by a single ``on_done`` call. The
returned ``asyncio.Task`` is the cancellation handle: cancelling it stops
delivery before the next tick and guarantees ``on_done`` is never reached.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from ...config import CHAT_CHUNK_INTERVAL_MS, CHAT_CHUNK_SIZE

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = CHAT_CHUNK_INTERVAL_MS / 1000.0
DEFAULT_CHUNK_SIZE = CHAT_CHUNK_SIZE

Emit = Callable[[str], Awaitable[None]]
OnDone = Callable[[], Awaitable[None]]
OnError = Callable[[Exception], Awaitable[None]]


def split_chunks(text: str, size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """Partition ``text`` into consecutive groups of ``size`` characters.

    The last group is shorter when the length is not a multiple of ``size``;
    an empty string yields no groups.
    """
    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    return [text[i : i + size] for i in range(0, len(text), size)]


async def typewrite(
    text: str,
    emit: Emit,
    on_done: OnDone,
    *,
    interval: float = DEFAULT_INTERVAL,
    size: int = DEFAULT_CHUNK_SIZE,
    on_error: Optional[OnError] = None,
) -> int:
    """Deliver ``text`` through ``emit`` and finish with ``on_done``.

    Returns the number of chunks emitted. Cancellation propagates as
    ``asyncio.CancelledError`` from whichever await is pending. Any other
    failure is handed to ``on_error`` when given, otherwise re-raised; in
    both cases ``on_done`` is not called.
    """
    emitted = 0
    try:
        if interval < 0:
            raise ValueError("Chunk interval must not be negative")
        for chunk in split_chunks(text, size):
            await asyncio.sleep(interval)
            await emit(chunk)
            emitted += 1
        await on_done()
    except Exception as exc:
        if on_error is None:
            raise
        await on_error(exc)
    return emitted


def start_typewriter(
    text: str,
    emit: Emit,
    on_done: OnDone,
    *,
    interval: float = DEFAULT_INTERVAL,
    size: int = DEFAULT_CHUNK_SIZE,
    on_error: Optional[OnError] = None,
    name: str | None = None,
) -> asyncio.Task:
    """Schedule :func:`typewrite` on the running loop and return its task."""
    logger.debug("Typewriter starting: %s chars, interval=%.3fs", len(text), interval)
    return asyncio.create_task(
        typewrite(text, emit, on_done, interval=interval, size=size, on_error=on_error),
        name=name,
    )


__all__ = ["DEFAULT_CHUNK_SIZE", "DEFAULT_INTERVAL", "split_chunks", "start_typewriter", "typewrite"]
