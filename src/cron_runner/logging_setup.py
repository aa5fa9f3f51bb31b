# src/cron_runner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _MaxLevelFilter(logging.Filter):
    """Pass only records strictly below `level` (keeps stdout free of errors)."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console about the job:
    - allow all cron_runner logs
    - Python warnings (captured as 'py.warnings') and third-party libs only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("cron_runner.") or record.name == "__main__":
            return True
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - stdout handler: informational lines (below WARNING)
    - stderr handler: warnings, errors, failures
    - optional file handler with full logs when log_dir is given

    Call this ONCE, very early (before first logger.info).
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    noise = _ConsoleNoiseFilter()

    out = logging.StreamHandler(sys.stdout)
    out.setLevel(console_level)
    out.setFormatter(fmt)
    out.addFilter(_MaxLevelFilter(logging.WARNING))
    out.addFilter(noise)
    root.addHandler(out)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(max(console_level, logging.WARNING))
    err.setFormatter(fmt)
    err.addFilter(noise)
    root.addHandler(err)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "cron-runner.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
