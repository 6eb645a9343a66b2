"""Utils screen — demo widgets driven by action entries (see actions.py)."""
from __future__ import annotations

from ..registry import Entry, ScreenKey, ScreenSpec, register_screen

BANNER = r"""
   __  ____  _ __
  / / / / /_(_) /____
 / / / / __/ / / ___/
/ /_/ / /_/ / (__  )
\____/\__/_/_/____/
"""

UTILS_MENU = register_screen(
    ScreenSpec(
        key=ScreenKey.UTILS,
        title="Utilities",
        label="Utils",
        banner=BANNER,
        entries=(
            Entry("Table", toggle=True, action="table"),
            Entry("Timer", toggle=True, action="timer"),
            Entry("Ping Google", action="ping"),
            Entry("Progress", action="progress"),
        ),
        panels=("table", "timer", "progress", "ping"),
    )
)
