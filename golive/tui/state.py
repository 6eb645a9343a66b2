"""Navigation state and host session state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .registry import ScreenKey


@dataclass
class ScreenState:
    """Per-screen memory: survives leaving the screen and coming back."""

    cursor: int = 0
    flags: dict[int, bool] = field(default_factory=dict)

    def is_active(self, index: int) -> bool:
        return self.flags.get(index, False)


@dataclass
class NavigationState:
    """The single mutable navigation structure.

    `stack` is the path from root to the active screen and is never empty.
    `instances` maps each key on the stack to the identity it was pushed with;
    a fresh identity is handed out on every push so results of actions started
    by an earlier visit can be told apart.
    """

    stack: list[ScreenKey]
    screens: dict[ScreenKey, ScreenState]
    instances: dict[ScreenKey, int] = field(default_factory=dict)
    next_instance: int = 1

    @classmethod
    def initial(cls, keys: Iterable[ScreenKey], root: ScreenKey) -> "NavigationState":
        return cls(
            stack=[root],
            screens={key: ScreenState() for key in keys},
            instances={root: 0},
        )

    @property
    def top(self) -> ScreenKey:
        return self.stack[-1]

    def issue_instance(self, key: ScreenKey) -> int:
        instance = self.next_instance
        self.next_instance += 1
        self.instances[key] = instance
        return instance


@dataclass
class UIState:
    """Host session state - help visibility and visit history.

    This state persists across screen transitions during a single session and
    is never written to disk.
    """

    show_help: bool = False

    # Session history for debugging
    session_history: list[str] = field(default_factory=list)

    # Last status line per action tag (e.g. {"ping": "ping:ok"})
    status: dict[str, str] = field(default_factory=dict)

    def toggle_help(self) -> bool:
        self.show_help = not self.show_help
        return self.show_help

    def add_to_history(self, screen: str) -> None:
        """Record screen visit in session history.

        Args:
            screen: Screen identifier that was visited
        """
        self.session_history.append(screen)

    def remember(self, **kwargs: str) -> None:
        """Update status lines.

        Example:
            state.remember(ping="ping:ok")
        """
        self.status.update(kwargs)
