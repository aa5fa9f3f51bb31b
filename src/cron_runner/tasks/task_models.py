# src/cron_runner/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class RunStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


class OverlapPolicy(StrEnum):
    """
    What a tick does when an earlier invocation is still running.

    - allow: start another invocation anyway (runs overlap)
    - skip:  log and drop the tick
    - queue: keep the tick, but run invocations one at a time in tick order
    """

    ALLOW = "allow"
    SKIP = "skip"
    QUEUE = "queue"

    @classmethod
    def from_config(cls, raw: str | None) -> OverlapPolicy:
        if not raw:
            return cls.ALLOW
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ALLOW


@dataclass(slots=True, frozen=True)
class RunResult:
    """Outcome of one command invocation. Logged, then dropped."""

    command: str
    started_at: datetime
    finished_at: datetime
    exit_code: int | None

    stdout: str = ""
    stderr: str = ""
    # Set for non-zero exits and launch failures.
    error: str | None = None

    @property
    def status(self) -> RunStatus:
        if self.error is None and self.exit_code == 0:
            return RunStatus.SUCCESS
        return RunStatus.FAILURE

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @property
    def duration(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()
