"""Root menu — entry point for the navigator."""
from __future__ import annotations

from ..registry import Entry, ScreenKey, ScreenSpec, register_screen

BANNER = r"""
   ______      __    _
  / ____/___  / /   (_)   _____
 / / __/ __ \/ /   / / | / / _ \
/ /_/ / /_/ / /___/ /| |/ /  __/
\____/\____/_____/_/ |___/\___/
              ┓     ┓         •
              ┣┓┓┏  ┃┓┏┏┓┏┓ ┏┓┓
              ┗┛┗┫  ┗┗┛┛ ┗┫•┗┻┗
                 ┛        ┛
"""

MAIN_MENU = register_screen(
    ScreenSpec(
        key=ScreenKey.ROOT,
        title="What would you like to do?",
        label="Home",
        banner=BANNER,
        entries=(
            Entry("Go Live", target=ScreenKey.LIVE),
            Entry("Utils", target=ScreenKey.UTILS),
        ),
    )
)
