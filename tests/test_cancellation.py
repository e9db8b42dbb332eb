"""Tests for cancellable awaits."""

import asyncio

import pytest

from idea_insight.core import OperationCancelledError
from idea_insight.core.cancellation import Deadline, run_cancellable


async def slow(value: str, delay: float) -> str:
    await asyncio.sleep(delay)
    return value


@pytest.mark.asyncio
async def test_returns_result() -> None:
    assert await run_cancellable(slow("ok", 0), asyncio.Event(), 1.0) == "ok"


@pytest.mark.asyncio
async def test_timeout() -> None:
    with pytest.raises(asyncio.TimeoutError):
        await run_cancellable(slow("late", 5.0), asyncio.Event(), 0.05)


@pytest.mark.asyncio
async def test_already_cancelled() -> None:
    event = asyncio.Event()
    event.set()

    with pytest.raises(OperationCancelledError):
        await run_cancellable(slow("never", 0), event, 1.0)


@pytest.mark.asyncio
async def test_deadline_cancels_in_flight_call() -> None:
    """Test the deadline sets the event and aborts the waiting call."""
    event = asyncio.Event()

    with Deadline(event, 0.05):
        with pytest.raises(OperationCancelledError):
            await run_cancellable(slow("late", 5.0), event, 10.0)

    assert event.is_set()


@pytest.mark.asyncio
async def test_deadline_without_seconds_never_fires() -> None:
    event = asyncio.Event()

    with Deadline(event, None):
        assert await run_cancellable(slow("ok", 0.01), event, 1.0) == "ok"

    assert not event.is_set()
