# src/cron_runner/tasks/task_runner.py

from __future__ import annotations

"""
Task runner.

Runs one external command to completion and classifies the outcome:
- exit code 0       -> success (stderr is kept and logged, it is not an error)
- non-zero exit     -> failure, with whatever output was captured
- launch failure    -> failure, with the OS error message

No retries, no timeout. Failures are returned as RunResult values, not raised.
"""

import asyncio
import contextlib
import logging
from datetime import datetime

from .task_models import RunResult

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "node main.js"


def _now() -> datetime:
    return datetime.now().astimezone()


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def format_timestamp(ts: datetime) -> str:
    """Human-readable local date-time used in run log lines."""
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")


async def run_command(command: str) -> RunResult:
    """Execute `command` through the shell and wait for it to exit."""
    started_at = _now()

    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return RunResult(
            command=command,
            started_at=started_at,
            finished_at=_now(),
            exit_code=None,
            error=f"Failed to launch {command!r}: {e}",
        )

    try:
        out, err = await proc.communicate()
    except asyncio.CancelledError:
        # Don't leave an orphaned child behind when the scheduler is torn down.
        if proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        raise

    exit_code = proc.returncode
    error = None
    if exit_code != 0:
        error = f"Command failed with exit code {exit_code}: {command}"

    return RunResult(
        command=command,
        started_at=started_at,
        finished_at=_now(),
        exit_code=exit_code,
        stdout=_decode(out),
        stderr=_decode(err),
        error=error,
    )


def log_run_result(result: RunResult) -> None:
    ts = format_timestamp(result.started_at)
    cmd = result.command

    if result.ok:
        if result.stdout:
            logger.info("[%s stdout]:\n%s", cmd, result.stdout)
        if result.stderr:
            # Some programs print warnings to stderr and still exit 0.
            logger.warning("[%s stderr]:\n%s", cmd, result.stderr)
        logger.info("[%s] %s finished successfully in %.2fs.", ts, cmd, result.duration)
        return

    logger.error("[%s] Error running %s: %s", ts, cmd, result.error)
    if result.stdout:
        logger.info("[%s stdout on error]:\n%s", cmd, result.stdout)
    if result.stderr:
        logger.error("[%s stderr on error]:\n%s", cmd, result.stderr)


async def run_and_log(command: str) -> RunResult:
    """Scheduler action: trigger the command, log its outcome, return the result."""
    logger.info("[%s] Triggering %s...", format_timestamp(_now()), command)
    result = await run_command(command)
    log_run_result(result)
    logger.info("[%s] Scheduled task complete.", format_timestamp(result.started_at))
    return result
