from __future__ import annotations

import logging
from pathlib import Path

from golive.logging import setup_logging
from golive.settings import Settings, load_settings


def test_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    s = load_settings()
    assert s.GOLIVE_PING_URL == "https://google.com"
    assert s.GOLIVE_TIMER_SECONDS == 5.0
    assert s.GOLIVE_PROGRESS_STEP == 0.25
    assert s.GOLIVE_LOG_DIR == Path("_logs")


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOLIVE_PING_URL", "http://localhost:8080")
    monkeypatch.setenv("GOLIVE_TIMER_SECONDS", "2.5")
    s = Settings()
    assert s.GOLIVE_PING_URL == "http://localhost:8080"
    assert s.GOLIVE_TIMER_SECONDS == 2.5


def test_load_settings_repairs_bad_intervals(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOLIVE_TIMER_INTERVAL", "0")
    monkeypatch.setenv("GOLIVE_PROGRESS_STEP", "3")
    s = load_settings()
    assert s.GOLIVE_TIMER_INTERVAL == 0.1
    assert s.GOLIVE_PROGRESS_STEP == 0.25


def test_setup_logging_writes_file(tmp_path):
    class _S:
        GOLIVE_LOG_DIR = tmp_path / "logs"
        GOLIVE_LOG_FILE = "nav.log"
        GOLIVE_LOG_LEVEL = "info"
        GOLIVE_LOG_BACKUP_COUNT = 2

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_file = setup_logging(_S())
        logging.getLogger("golive.test").info("hello navigator")
        for handler in root.handlers:
            handler.flush()

        assert log_file == tmp_path / "logs" / "nav.log"
        text = log_file.read_text(encoding="utf-8")
        assert "hello navigator" in text
        assert " | INFO | golive.test | " in text
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
