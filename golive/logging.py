from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _resolve_log_dir(settings: object) -> Path:
    """Resolve the log directory.

    - If GOLIVE_LOG_DIR is absolute, use it directly.
    - Otherwise, treat it as relative to the project root (the directory holding `golive/`).
    """

    raw = getattr(settings, "GOLIVE_LOG_DIR", Path("_logs"))
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    project_root = Path(__file__).resolve().parents[1]
    return project_root / p


def setup_logging(settings: object) -> Path:
    """Configure Python logging to write to a rotating diagnostic log file.

    Returns the resolved log file path.

    Rotation:
      - Daily rotation at midnight.
      - Keep the last `GOLIVE_LOG_BACKUP_COUNT` rotated files.

    Notes:
      - No console handler: the full-screen UI owns stdout.
      - This function is safe to call multiple times (it resets handlers).
    """

    log_dir = _resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / str(getattr(settings, "GOLIVE_LOG_FILE", "golive.log") or "golive.log")

    level_name = str(getattr(settings, "GOLIVE_LOG_LEVEL", "DEBUG") or "DEBUG").upper().strip()
    level = getattr(logging, level_name, logging.DEBUG)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(getattr(settings, "GOLIVE_LOG_BACKUP_COUNT", 14) or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))

    # Reset root handlers so we don't duplicate logs on repeated starts.
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers = []
    root.setLevel(level)
    root.addHandler(file_handler)

    # prompt_toolkit and asyncio are chatty at DEBUG.
    for name in ("asyncio", "prompt_toolkit"):
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).info("Logging to %s (level=%s)", log_file, level_name)
    return log_file
