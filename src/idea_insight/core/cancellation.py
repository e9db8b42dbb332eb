"""Cooperative cancellation for network calls."""

import asyncio
from typing import Awaitable, Optional, TypeVar

from idea_insight.core.errors import OperationCancelledError

T = TypeVar("T")


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel_event: Optional[asyncio.Event] = None,
    timeout: Optional[float] = None,
) -> T:
    """Await `awaitable` unless the cancel event fires or the timeout expires.

    Raises:
        OperationCancelledError: if the cancel event was set first.
        asyncio.TimeoutError: if the timeout expired first.
    """
    if cancel_event is None:
        return await asyncio.wait_for(awaitable, timeout=timeout)

    if cancel_event.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise OperationCancelledError("Cancelled before the call started")

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {task, waiter}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task in done:
        return task.result()

    await asyncio.gather(task, return_exceptions=True)

    if waiter in done:
        raise OperationCancelledError("Cancelled while waiting for a network call")
    raise asyncio.TimeoutError()


class Deadline:
    """Sets a cancel event after a number of seconds."""

    def __init__(self, cancel_event: asyncio.Event, seconds: Optional[float]):
        self.cancel_event = cancel_event
        self.seconds = seconds
        self._handle: Optional[asyncio.TimerHandle] = None

    def __enter__(self) -> "Deadline":
        if self.seconds is not None:
            loop = asyncio.get_running_loop()
            self._handle = loop.call_later(self.seconds, self.cancel_event.set)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._handle is not None:
            self._handle.cancel()
