from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the go-live navigator.

    Values are loaded from environment variables and `.env`.

    Notes:
    - Logs go to a file; the full-screen UI owns the terminal.
    - Ping/timer/progress values only tune the demo widgets on the Utils screen.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging (diagnostic; the terminal is taken by the UI)
    GOLIVE_LOG_DIR: Path = Field(default=Path("_logs"))
    GOLIVE_LOG_FILE: str = Field(default="golive.log")
    GOLIVE_LOG_LEVEL: str = Field(default="DEBUG")
    # Timed rotation retention count (days).
    GOLIVE_LOG_BACKUP_COUNT: int = Field(default=14)

    # Ping Google
    GOLIVE_PING_URL: str = Field(default="https://google.com")
    GOLIVE_PING_DELAY: float = Field(default=5.0)
    GOLIVE_PING_TIMEOUT: float = Field(default=5.0)

    # Countdown timer
    GOLIVE_TIMER_SECONDS: float = Field(default=5.0)
    GOLIVE_TIMER_INTERVAL: float = Field(default=0.1)

    # Progress bar
    GOLIVE_PROGRESS_STEP: float = Field(default=0.25)
    GOLIVE_PROGRESS_INTERVAL: float = Field(default=1.0)


def load_settings() -> Settings:
    s = Settings()
    # Non-positive intervals would spin the event loop.
    if s.GOLIVE_TIMER_INTERVAL <= 0:
        s.GOLIVE_TIMER_INTERVAL = 0.1
    if s.GOLIVE_PROGRESS_INTERVAL <= 0:
        s.GOLIVE_PROGRESS_INTERVAL = 1.0
    if not 0 < s.GOLIVE_PROGRESS_STEP <= 1:
        s.GOLIVE_PROGRESS_STEP = 0.25
    return s
