# src/cron_runner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Every value has a default, and the defaults are the runner's fixed behaviour:
run `node main.js` every two minutes. The environment only overrides them.

Variables:
- CRON_RUNNER_APP_NAME   name shown in the startup line (default: cron-runner)
- CRON_RUNNER_LOG_LEVEL  console log level (default: INFO)
- CRON_RUNNER_SCHEDULE   five-field cron expression (default: */2 * * * *)
- CRON_RUNNER_COMMAND    command run through the shell (default: node main.js)
- CRON_RUNNER_TIMEZONE   IANA zone for the schedule (default: system local zone)
- CRON_RUNNER_OVERLAP    allow / skip / queue (default: allow)
- CRON_RUNNER_LOG_DIR    write cron-runner.log here as well (default: console only)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .tasks.schedule import DEFAULT_SCHEDULE
from .tasks.task_models import OverlapPolicy
from .tasks.task_runner import DEFAULT_COMMAND

ENV_PREFIX = "CRON_RUNNER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Optional[Path]

    # ---- Job ----
    schedule: str
    command: str
    timezone: Optional[str]
    overlap: OverlapPolicy

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "cron-runner"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR")),
            schedule=_env(_k("SCHEDULE"), DEFAULT_SCHEDULE),
            command=_env(_k("COMMAND"), DEFAULT_COMMAND),
            timezone=_env(_k("TIMEZONE")) or None,
            overlap=OverlapPolicy.from_config(os.getenv(_k("OVERLAP"))),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
