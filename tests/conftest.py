# tests/conftest.py

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from cron_runner.tasks.schedule import CronSchedule

from .fakes import FakeClock


@pytest.fixture()
def start() -> datetime:
    """A Monday, half a minute past noon (UTC)."""
    return datetime(2026, 1, 5, 12, 0, 30, tzinfo=UTC)


@pytest.fixture()
def clock(start: datetime) -> FakeClock:
    return FakeClock(start)


@pytest.fixture()
def every_two_minutes() -> CronSchedule:
    return CronSchedule("*/2 * * * *", timezone="UTC")


@pytest.fixture()
def restore_root_logging():
    """
    setup_logging() replaces root handlers; put the test runner's ones back afterwards
    so later tests don't write into closed capture streams.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
