"""
Deadline race: run an awaitable against a wall-clock timer.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The operation settled before the deadline."""
    value: T


@dataclass(frozen=True)
class TimedOut(Generic[T]):
    """The deadline fired first; carries the caller's fallback value."""
    fallback: T


RaceOutcome = Union[Ok[T], TimedOut[T]]


async def race_deadline(
    operation: Awaitable[T],
    timeout: float,
    fallback: T,
    cancel_on_timeout: bool = True,
) -> RaceOutcome:
    """
    Race `operation` against a `timeout`-second timer.

    Returns Ok(result) if the operation settles first. If it raises, the
    exception propagates unchanged. If the timer fires first the operation
    is cancelled (unless `cancel_on_timeout` is False, in which case it is
    left running) and TimedOut(fallback) is returned.

    Cancelling lets the operation's own `finally` blocks release what it
    holds; the race does not wait for that cleanup to finish.
    """
    task = asyncio.ensure_future(operation)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return Ok(task.result())

    logger.warning(f"Operation exceeded deadline of {timeout:.1f}s")
    task.add_done_callback(_log_abandoned_failure)
    if cancel_on_timeout:
        task.cancel()
    return TimedOut(fallback)


def _log_abandoned_failure(task: asyncio.Future) -> None:
    """Retrieve the outcome of an abandoned task so failures are logged, not lost."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning(f"Abandoned operation failed after deadline: {error}")
