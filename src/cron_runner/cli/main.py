# src/cron_runner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the schedule, then runs the scheduler loop as the single
long-lived asyncio task of the process. It runs until the process is killed
(or Ctrl+C); keeping it alive across crashes is the job of an external supervisor.
"""

from __future__ import annotations

import asyncio
import functools
import logging

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.schedule import CronSchedule
from ..tasks.task_runner import run_and_log
from ..tasks.task_scheduler import run_scheduler

logger = logging.getLogger(__name__)


async def serve(settings: Settings, schedule: CronSchedule) -> None:
    action = functools.partial(run_and_log, settings.command)
    scheduler = asyncio.create_task(
        run_scheduler(schedule, action, overlap=settings.overlap),
        name="cron-runner-scheduler",
    )
    await scheduler


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    try:
        schedule = CronSchedule(settings.schedule, timezone=settings.timezone)
    except (ValueError, LookupError) as e:
        # LookupError: unknown timezone name.
        logger.error("Invalid schedule %r (timezone=%s): %s", settings.schedule, settings.timezone, e)
        raise SystemExit(2) from e

    logger.info(
        "Starting %s to run %r on schedule %r...",
        settings.app_name,
        settings.command,
        schedule.expression,
    )

    try:
        asyncio.run(serve(settings, schedule))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.")


if __name__ == "__main__":
    main()
