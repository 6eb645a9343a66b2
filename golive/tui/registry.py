"""Screen registry: enumerated keys and the screens registered under them."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .errors import UnknownScreenKey


class ScreenKey(str, Enum):
    ROOT = "root"
    LIVE = "live"
    UTILS = "utils"


@dataclass(frozen=True)
class Entry:
    """One selectable row.

    Exactly one role applies: `target` navigates to a child screen; otherwise the
    entry is a toggle, an action, or both (the flag flips, then the action runs).
    """

    label: str
    target: ScreenKey | None = None
    toggle: bool = False
    action: str | None = None

    @property
    def navigates(self) -> bool:
        return self.target is not None


@dataclass(frozen=True)
class ScreenSpec:
    key: ScreenKey
    title: str
    entries: tuple[Entry, ...]
    label: str = ""
    banner: str = ""
    # Widget panels rendered under the entries (see components.PANELS).
    panels: tuple[str, ...] = ()

    @property
    def breadcrumb(self) -> str:
        return self.label or self.key.value

    @property
    def has_toggles(self) -> bool:
        return any(e.toggle for e in self.entries)


# Screen registry - maps screen keys to screen data.
# Populated by the modules in `golive.tui.screens` on import.
SCREENS: dict[ScreenKey, ScreenSpec] = {}


def register_screen(spec: ScreenSpec) -> ScreenSpec:
    """Add a screen to the registry, replacing any previous spec for the key.

    Usage:
        register_screen(ScreenSpec(ScreenKey.LIVE, "Where are you deploying to?", entries=(...)))
    """
    SCREENS[spec.key] = spec
    return spec


def validate_registry(screens: Mapping[ScreenKey, ScreenSpec], root: ScreenKey) -> None:
    """Check the registry once at startup.

    Raises:
        UnknownScreenKey: missing root, dangling child target, mislabelled key,
            an entry with no role, or a screen without entries.
    """
    if root not in screens:
        raise UnknownScreenKey(f"root screen '{root.value}' is not registered")

    for key, spec in screens.items():
        if spec.key is not key:
            raise UnknownScreenKey(f"screen registered as '{key.value}' declares key '{spec.key.value}'")
        if not spec.entries:
            raise UnknownScreenKey(f"screen '{key.value}' has no entries")
        for entry in spec.entries:
            if entry.target is not None:
                if entry.target not in screens:
                    raise UnknownScreenKey(
                        f"entry '{entry.label}' on '{key.value}' targets unregistered screen '{entry.target.value}'"
                    )
                if entry.toggle or entry.action:
                    raise UnknownScreenKey(
                        f"entry '{entry.label}' on '{key.value}' mixes navigation with a toggle/action"
                    )
            elif not entry.toggle and not entry.action:
                raise UnknownScreenKey(f"entry '{entry.label}' on '{key.value}' has no target, toggle or action")
