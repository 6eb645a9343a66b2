"""Navigation stack manager for the screen tree."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Union

from .errors import OutOfRange, StaleActionResult
from .keys import KeyEvent
from .registry import SCREENS, Entry, ScreenKey, ScreenSpec, validate_registry
from .state import NavigationState, ScreenState

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# EFFECTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ActionTicket:
    """Identity of a dispatched action: which entry, on which screen instance."""

    action: str
    screen: ScreenKey
    instance: int
    entry: int


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class Push:
    key: ScreenKey


@dataclass(frozen=True)
class Pop:
    pass


@dataclass(frozen=True)
class Toggle:
    index: int


@dataclass(frozen=True)
class Trigger:
    """Run an action entry; `toggle` entries flip their flag first."""

    ticket: ActionTicket
    toggle: bool = False


@dataclass(frozen=True)
class Noop:
    reason: str = ""


NavigationEffect = Union[MoveCursor, Push, Pop, Toggle, Trigger, Noop]


# ═══════════════════════════════════════════════════════════════════════════════
# SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EntryView:
    label: str
    active: bool
    selected: bool
    toggle: bool


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the active screen for a presentation layer."""

    screen: ScreenKey
    title: str
    banner: str
    entries: tuple[EntryView, ...]
    cursor: int
    depth: int
    breadcrumbs: str
    checkboxes: bool
    panels: tuple[str, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# NAVIGATOR
# ═══════════════════════════════════════════════════════════════════════════════

class Navigator:
    """Stack-based navigation over a registry of screens.

    - Select on a child entry pushes it; Back pops to the parent
    - The root is never popped
    - Cursor and toggle flags are stored per screen and survive leaving it
    - A key already on the stack is never pushed twice
    """

    def __init__(
        self,
        screens: Mapping[ScreenKey, ScreenSpec] | None = None,
        root: ScreenKey = ScreenKey.ROOT,
    ):
        """Validate the registry and start at the root screen.

        Raises:
            UnknownScreenKey: if the registry is misconfigured.
        """
        self.screens: dict[ScreenKey, ScreenSpec] = dict(SCREENS if screens is None else screens)
        validate_registry(self.screens, root)
        self.root = root
        self.state = NavigationState.initial(self.screens, root)

    # ── Queries ────────────────────────────────────────────────────

    def current(self) -> ScreenKey:
        """Get the active screen key."""
        return self.state.top

    def spec(self, key: ScreenKey | None = None) -> ScreenSpec:
        """Look up a registered screen.

        Args:
            key: Screen to look up; defaults to the active screen

        Returns:
            The screen's registered spec
        """
        return self.screens[key or self.current()]

    def screen_state(self, key: ScreenKey | None = None) -> ScreenState:
        """Get the persistent cursor and toggle flags of a screen.

        Args:
            key: Screen to look up; defaults to the active screen

        Returns:
            The screen's state, kept across pops and re-entry
        """
        return self.state.screens[key or self.current()]

    def depth(self) -> int:
        """Get the current navigation depth.

        Returns:
            Number of screens in the stack
        """
        return len(self.state.stack)

    def breadcrumbs(self) -> str:
        """Breadcrumb string like "Home > Utils"."""
        return " > ".join(self.screens[key].breadcrumb for key in self.state.stack)

    def is_active(self, index: int) -> bool:
        """Check a toggle flag on the active screen.

        Args:
            index: Entry position

        Returns:
            True if the entry's flag is set
        """
        return self.screen_state().is_active(index)

    def snapshot(self) -> Snapshot:
        """Capture what the active screen should display.

        Returns:
            Read-only view of the active screen's entries, cursor and breadcrumbs
        """
        spec = self.spec()
        st = self.screen_state()
        cursor = min(st.cursor, len(spec.entries) - 1)
        entries = tuple(
            EntryView(
                label=entry.label,
                active=st.is_active(i),
                selected=(i == cursor),
                toggle=entry.toggle,
            )
            for i, entry in enumerate(spec.entries)
        )
        return Snapshot(
            screen=spec.key,
            title=spec.title,
            banner=spec.banner,
            entries=entries,
            cursor=cursor,
            depth=self.depth(),
            breadcrumbs=self.breadcrumbs(),
            checkboxes=spec.has_toggles,
            panels=spec.panels,
        )

    # ── Input → effect ─────────────────────────────────────────────

    def handle_input(self, event: KeyEvent) -> NavigationEffect:
        """Map a key event to an effect. Does not mutate state."""
        if event is KeyEvent.UP:
            return MoveCursor(-1)
        if event is KeyEvent.DOWN:
            return MoveCursor(1)
        if event is KeyEvent.SELECT:
            return self.select(self.screen_state().cursor)
        if event is KeyEvent.BACK:
            if self.depth() > 1:
                return Pop()
            return Noop("already at root")
        return Noop(f"{event.value} is handled by the host")

    def select(self, index: int) -> NavigationEffect:
        """Resolve selecting entry `index` on the active screen."""
        try:
            entry = self._entry_at(index)
        except OutOfRange as exc:
            logger.debug("Ignoring select: %s", exc)
            return Noop(str(exc))

        if entry.target is not None:
            return Push(entry.target)
        if entry.action:
            key = self.current()
            ticket = ActionTicket(
                action=entry.action,
                screen=key,
                instance=self.state.instances[key],
                entry=index,
            )
            return Trigger(ticket, toggle=entry.toggle)
        return Toggle(index)

    def _entry_at(self, index: int) -> Entry:
        entries = self.spec().entries
        if not 0 <= index < len(entries):
            raise OutOfRange(self.current().value, index, len(entries))
        return entries[index]

    # ── Effect → state ─────────────────────────────────────────────

    def apply(self, effect: NavigationEffect) -> bool:
        """Mutate navigation state for an effect.

        Returns:
            True if state changed, False for no-ops.
        """
        if isinstance(effect, MoveCursor):
            return self._move_cursor(effect.delta)
        if isinstance(effect, Push):
            return self.push(effect.key)
        if isinstance(effect, Pop):
            return self.pop() is not None
        if isinstance(effect, Toggle):
            return self._flip(effect.index)
        if isinstance(effect, Trigger):
            if effect.toggle and self.is_current(effect.ticket):
                return self._flip(effect.ticket.entry)
            return False
        return False

    def push(self, key: ScreenKey) -> bool:
        """Navigate to a child screen.

        Unregistered keys and keys already on the stack are ignored.
        """
        if key not in self.screens:
            logger.warning("Ignoring push of unregistered screen %r", key)
            return False
        if key in self.state.stack:
            logger.debug("Ignoring push of '%s': already on the stack", key.value)
            return False
        self.state.stack.append(key)
        instance = self.state.issue_instance(key)
        logger.debug("Pushed '%s' (instance %d): %s", key.value, instance, self.breadcrumbs())
        return True

    def pop(self) -> ScreenKey | None:
        """Go back to the previous screen.

        Returns:
            The screen that was popped, or None if at root
        """
        if len(self.state.stack) <= 1:
            return None
        key = self.state.stack.pop()
        self.state.instances.pop(key, None)
        logger.debug("Popped '%s': %s", key.value, self.breadcrumbs())
        return key

    def home(self) -> None:
        """Pop everything above the root."""
        while self.pop() is not None:
            pass

    def set_flag(self, index: int, value: bool) -> bool:
        """Set a toggle flag on the active screen."""
        try:
            self._entry_at(index)
        except OutOfRange as exc:
            logger.debug("Ignoring set_flag: %s", exc)
            return False
        self.screen_state().flags[index] = value
        return True

    def _move_cursor(self, delta: int) -> bool:
        st = self.screen_state()
        last = len(self.spec().entries) - 1
        cursor = max(0, min(last, st.cursor + delta))
        changed = cursor != st.cursor
        st.cursor = cursor
        return changed

    def _flip(self, index: int) -> bool:
        try:
            self._entry_at(index)
        except OutOfRange as exc:
            logger.debug("Ignoring toggle: %s", exc)
            return False
        st = self.screen_state()
        st.flags[index] = not st.is_active(index)
        return True

    # ── Action identity ────────────────────────────────────────────

    def is_current(self, ticket: ActionTicket) -> bool:
        """True if the ticket's screen instance is the active one."""
        key = self.current()
        return ticket.screen is key and self.state.instances.get(key) == ticket.instance

    def check_ticket(self, ticket: ActionTicket) -> None:
        """Raise StaleActionResult if the ticket's screen instance is no longer on top."""
        if not self.is_current(ticket):
            raise StaleActionResult(
                f"'{ticket.action}' from {ticket.screen.value}#{ticket.instance} "
                f"arrived on {self.current().value}#{self.state.instances.get(self.current())}"
            )
