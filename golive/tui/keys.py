"""Key map: terminal keys to abstract key events, plus help text."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from prompt_toolkit.key_binding import KeyBindings


class KeyEvent(str, Enum):
    UP = "up"
    DOWN = "down"
    SELECT = "select"
    BACK = "back"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"
    BLUR = "blur"


@dataclass(frozen=True)
class KeyBinding:
    event: KeyEvent
    keys: tuple[str, ...]
    help_key: str
    help_text: str


# prompt_toolkit key names. Order is the order shown in the full help.
KEYMAP: tuple[KeyBinding, ...] = (
    KeyBinding(KeyEvent.UP, ("up", "k"), "↑/k", "move up"),
    KeyBinding(KeyEvent.DOWN, ("down", "j"), "↓/j", "move down"),
    KeyBinding(KeyEvent.SELECT, ("enter", "space"), "⏎/⌴", "to confirm selection"),
    KeyBinding(KeyEvent.BACK, ("escape",), "esc", "to go back"),
    KeyBinding(KeyEvent.BLUR, ("backspace",), "backspace", "to focus on menu"),
    KeyBinding(KeyEvent.TOGGLE_HELP, ("?",), "?", "toggle help"),
    KeyBinding(KeyEvent.QUIT, ("q", "c-c"), "q", "quit"),
)

SHORT_HELP = "? toggle help / q to quit / esc to go back"


def binding_for(event: KeyEvent) -> KeyBinding:
    for binding in KEYMAP:
        if binding.event is event:
            return binding
    raise KeyError(event)


def full_help() -> list[tuple[str, str]]:
    """(keys, description) rows for the expanded help view."""
    return [(b.help_key, b.help_text) for b in KEYMAP]


def event_for_key(name: str) -> KeyEvent | None:
    """Translate a prompt_toolkit key name (or typed alias) to a key event."""
    lowered = name.strip().lower()
    aliases = {" ": "space", "esc": "escape", "ctrl+c": "c-c", "return": "enter"}
    lowered = aliases.get(lowered, lowered)
    for binding in KEYMAP:
        if lowered in binding.keys:
            return binding.event
    return None


def build_key_bindings(on_event: Callable[[KeyEvent], None]) -> KeyBindings:
    """Register every KEYMAP entry on a fresh KeyBindings, forwarding to on_event."""
    kb = KeyBindings()

    for binding in KEYMAP:
        for key in binding.keys:
            # Escape is a prefix of alt+ sequences; eager avoids the timeout.
            kb.add(key, eager=(key == "escape"))(_forwarder(on_event, binding.event))

    return kb


def _forwarder(on_event: Callable[[KeyEvent], None], event: KeyEvent):
    def _handler(_press) -> None:
        on_event(event)

    return _handler
