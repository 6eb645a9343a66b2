"""Deploy target screen.

The targets are toggles only; nothing is deployed.
"""
from __future__ import annotations

from ..registry import Entry, ScreenKey, ScreenSpec, register_screen

BANNER = r"""
    ____             __
   / __ \___  ____  / /___  __  __
  / / / / _ \/ __ \/ / __ \/ / / /
 / /_/ /  __/ /_/ / / /_/ / /_/ /
/_____/\___/ .___/_/\____/\__, /
          /_/            /____/
"""

LIVE_MENU = register_screen(
    ScreenSpec(
        key=ScreenKey.LIVE,
        title="Where are you deploying to?",
        label="Go Live",
        banner=BANNER,
        entries=(
            Entry("To Staging", toggle=True),
            Entry("To Production", toggle=True),
        ),
    )
)
