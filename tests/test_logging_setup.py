# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from cron_runner.logging_setup import setup_logging


def test_info_goes_to_stdout_and_errors_to_stderr(restore_root_logging, capsys) -> None:
    setup_logging()
    log = logging.getLogger("cron_runner.tasks.task_runner")

    log.info("run ok")
    log.warning("stderr text")
    log.error("run failed")
    log.debug("hidden detail")

    out, err = capsys.readouterr()
    assert "run ok" in out and "run ok" not in err
    assert "stderr text" in err and "stderr text" not in out
    assert "run failed" in err and "run failed" not in out
    assert "hidden detail" not in out + err


def test_third_party_info_is_filtered(restore_root_logging, capsys) -> None:
    setup_logging()

    logging.getLogger("apscheduler.scheduler").info("chatty")
    logging.getLogger("apscheduler.scheduler").warning("worth seeing")

    out, err = capsys.readouterr()
    assert "chatty" not in out + err
    assert "worth seeing" in err


def test_repeated_setup_does_not_duplicate_lines(restore_root_logging, capsys) -> None:
    setup_logging()
    setup_logging()

    logging.getLogger("cron_runner.test").info("once")

    out, _ = capsys.readouterr()
    assert out.count("once") == 1


def test_log_dir_adds_file_handler(restore_root_logging, capsys, tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("cron_runner.test").debug("to file only")
    for h in logging.getLogger().handlers:
        h.flush()

    text = (tmp_path / "logs" / "cron-runner.log").read_text("utf-8")
    assert "to file only" in text
    out, err = capsys.readouterr()
    assert "to file only" not in out + err
