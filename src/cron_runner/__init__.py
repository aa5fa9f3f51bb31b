"""Periodic command runner driven by a cron expression."""

__version__ = "0.1.0"
