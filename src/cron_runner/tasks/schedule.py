# src/cron_runner/tasks/schedule.py

from __future__ import annotations

"""
Cron schedule expressions.

Five fields: minute, hour, day-of-month, month, day-of-week.
Evaluation is done by APScheduler's CronTrigger. The only thing we translate is
the day-of-week field: cron counts Sunday as 0 (or 7), APScheduler counts Monday
as 0, so numeric weekdays are rewritten as day names before they are handed over.
"""

from datetime import datetime, timedelta

from apscheduler.triggers.cron import CronTrigger

DEFAULT_SCHEDULE = "*/2 * * * *"

_DAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def _weekday_number(token: str) -> int:
    token = token.strip().lower()
    if token in _DAY_NAMES:
        return _DAY_NAMES.index(token)
    if not token.isdigit():
        raise ValueError(f"Invalid day-of-week value: {token!r}")
    value = int(token)
    if value > 7:
        raise ValueError(f"Day-of-week out of range (0-7): {value}")
    return value


def _expand_day_of_week(field: str) -> str:
    """
    Rewrite a cron day-of-week field as a comma list of day names.

    "1-5" -> "mon,tue,wed,thu,fri"; "0,7" -> "sun"; "*/2" -> "sun,tue,thu,sat".
    A bare "*" is passed through untouched.
    """
    if field == "*":
        return field

    days: set[int] = set()
    for part in field.split(","):
        if not part:
            raise ValueError(f"Empty item in day-of-week field: {field!r}")

        base, _, step_raw = part.partition("/")
        step = 1
        if step_raw:
            if not step_raw.isdigit() or int(step_raw) == 0:
                raise ValueError(f"Invalid step in day-of-week field: {part!r}")
            step = int(step_raw)

        if base == "*":
            first, last = 0, 6
        elif "-" in base:
            lo, _, hi = base.partition("-")
            first, last = _weekday_number(lo), _weekday_number(hi)
            if first > last:
                raise ValueError(f"Invalid day-of-week range: {base!r}")
        else:
            first = _weekday_number(base)
            # "a/n" means "from a to the end of the week, every n days".
            last = 6 if step_raw else first

        for day in range(first, last + 1, step):
            days.add(day % 7)

    return ",".join(_DAY_NAMES[d] for d in sorted(days))


class CronSchedule:
    """A parsed five-field cron expression bound to a timezone."""

    def __init__(self, expression: str = DEFAULT_SCHEDULE, *, timezone: str | None = None) -> None:
        fields = expression.split()
        if len(fields) != 5:
            raise ValueError(f"Wrong number of fields in {expression!r}; got {len(fields)}, expected 5")

        minute, hour, day, month, day_of_week = fields
        self.expression = " ".join(fields)
        self._trigger = CronTrigger(
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=_expand_day_of_week(day_of_week.lower()),
            timezone=timezone or None,
        )

    @property
    def timezone(self):
        return self._trigger.timezone

    def now(self) -> datetime:
        return datetime.now(self.timezone)

    def next_fire_time(self, now: datetime, previous: datetime | None = None) -> datetime | None:
        """
        First boundary at or after `now`, and strictly after `previous` if given.

        Returns None when the expression can never fire again.
        """
        start = now
        if previous is not None and start <= previous:
            # CronTrigger rounds up to whole seconds, so one second past the last tick
            # is the earliest moment that can produce a different boundary.
            start = previous + timedelta(seconds=1)
        return self._trigger.get_next_fire_time(None, start)

    def __repr__(self) -> str:
        return f"CronSchedule({self.expression!r})"
