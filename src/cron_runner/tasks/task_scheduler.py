# src/cron_runner/tasks/task_scheduler.py

from __future__ import annotations

"""
Scheduler loop.

Every tick of the cron schedule:
- spawn one invocation of the action as its own asyncio task (fire-and-forget),
- move straight on to waiting for the next tick.

Overlapping invocations are governed by an explicit OverlapPolicy.
Errors escaping the action are logged here and never stop the loop.

To stop the scheduler, cancel the coroutine/task. In-flight invocations are cancelled with it.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable

from .schedule import CronSchedule
from .task_models import OverlapPolicy

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any]]
Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[Any]]


async def _guarded(action: Action, tick: datetime, lock: asyncio.Lock | None) -> None:
    try:
        if lock is None:
            await action()
        else:
            async with lock:
                await action()
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("Unhandled error during task execution (tick %s)", tick.isoformat())


async def run_scheduler(
        schedule: CronSchedule,
        action: Action,
        *,
        overlap: OverlapPolicy = OverlapPolicy.ALLOW,
        clock: Clock | None = None,
        sleep: Sleep = asyncio.sleep,
) -> None:
    """
    Fire `action` once per schedule boundary until cancelled.

    clock/sleep default to the wall clock in the schedule's timezone and asyncio.sleep;
    tests inject fakes to drive ticks without waiting for real minutes.
    """
    now_fn: Clock = clock or schedule.now
    lock = asyncio.Lock() if overlap is OverlapPolicy.QUEUE else None
    in_flight: set[asyncio.Task[None]] = set()
    previous: datetime | None = None

    logger.info("Scheduler started (%s, overlap=%s).", schedule.expression, overlap.value)

    try:
        while True:
            fire_at = schedule.next_fire_time(now_fn(), previous)
            if fire_at is None:
                logger.warning("Schedule %r has no future fire times; scheduler stopping.", schedule.expression)
                return

            delay = (fire_at - now_fn()).total_seconds()
            logger.debug("Next tick at %s (in %.1fs)", fire_at.isoformat(), delay)
            await sleep(max(0.0, delay))
            previous = fire_at

            if overlap is OverlapPolicy.SKIP and in_flight:
                logger.warning(
                    "Tick %s skipped: %d invocation(s) still running.", fire_at.isoformat(), len(in_flight)
                )
                continue

            task = asyncio.create_task(_guarded(action, fire_at, lock))
            in_flight.add(task)
            task.add_done_callback(in_flight.discard)
            if len(in_flight) > 1:
                logger.debug("%d invocations in flight", len(in_flight))
    finally:
        for task in list(in_flight):
            task.cancel()
