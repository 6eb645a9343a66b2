"""Full-screen host: event loop, action dispatch and stale-result filtering."""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl

from .errors import StaleActionResult
from .keys import KeyEvent, build_key_bindings
from .navigator import ActionTicket, Navigator, Pop, Push, Trigger
from .state import UIState
from .widgets import UtilsWidgets

if TYPE_CHECKING:
    from rich.console import Console

    from ..settings import Settings

logger = logging.getLogger(__name__)

ActionCoroutine = Coroutine[Any, Any, None]
ActionHandler = Callable[["Router", ActionTicket], Optional[ActionCoroutine]]
Spawner = Callable[[ActionCoroutine], Any]


class Router:
    """Main event loop with action dispatch.

    The router owns the prompt_toolkit Application, turns key presses into
    navigator effects and starts the handler registered for an action entry.
    Handlers may return a coroutine; it runs as a background task on the same
    event loop and reports back through `deliver()`.
    """

    def __init__(
        self,
        console: Console,
        settings: Settings,
        state: UIState,
        nav: Navigator,
        spawn: Spawner | None = None,
    ):
        """Initialize router with dependencies.

        Args:
            console: Rich Console used for rendering
            settings: Application settings
            state: UI session state
            nav: Navigator instance
            spawn: Schedules a coroutine; defaults to the running application's loop
        """
        self.console = console
        self.settings = settings
        self.state = state
        self.nav = nav
        self.widgets = UtilsWidgets.from_settings(settings)
        self.app: Application | None = None
        self._spawn = spawn
        self._tasks: dict[str, Any] = {}
        self.state.add_to_history(nav.current().value)

    # ── Input ──────────────────────────────────────────────────────

    def dispatch(self, event: KeyEvent) -> bool:
        """Handle one key event to completion.

        Returns:
            False when the host should exit, True otherwise.
        """
        if event is KeyEvent.QUIT:
            return False

        if event is KeyEvent.TOGGLE_HELP:
            self.state.toggle_help()
            return True

        if self.widgets.table.focused and self._dispatch_table(event):
            return True

        effect = self.nav.handle_input(event)
        changed = self.nav.apply(effect)

        if isinstance(effect, (Push, Pop)) and changed:
            self.state.add_to_history(self.nav.current().value)
        elif isinstance(effect, Trigger):
            self.start_action(effect.ticket)

        return True

    def _dispatch_table(self, event: KeyEvent) -> bool:
        """Route keys to the focused city table. Back/Blur hand focus to the menu."""
        table = self.widgets.table
        if event is KeyEvent.UP:
            table.move(-1)
        elif event is KeyEvent.DOWN:
            table.move(1)
        elif event is KeyEvent.SELECT:
            row = table.selected_row()
            if row is not None:
                logger.info("Let's go to %s!", row[1])
                self.state.remember(table=f"Let's go to {row[1]}!")
        elif event in (KeyEvent.BLUR, KeyEvent.BACK):
            ticket = table.blur()
            if ticket is not None and self.nav.is_current(ticket):
                self.nav.set_flag(ticket.entry, False)
        else:
            return False
        return True

    # ── Actions ────────────────────────────────────────────────────

    def start_action(self, ticket: ActionTicket) -> None:
        """Run the handler registered for the ticket's action tag."""
        handler = ACTIONS.get(ticket.action)
        if handler is None:
            logger.warning("No handler registered for action '%s'", ticket.action)
            return

        logger.debug("Starting action %s", ticket)
        coro = handler(self, ticket)
        if coro is not None:
            self.spawn(ticket.action, coro)

    def spawn(self, tag: str, coro: ActionCoroutine) -> None:
        """Schedule a coroutine, replacing any task this host started under the same tag."""
        self.cancel(tag)
        guarded = self._guard(tag, coro)
        if self._spawn is not None:
            task = self._spawn(guarded)
        elif self.app is not None:
            task = self.app.create_background_task(guarded)
        else:
            task = asyncio.get_running_loop().create_task(guarded)
        self._tasks[tag] = task

    def cancel(self, tag: str) -> None:
        task = self._tasks.pop(tag, None)
        if task is not None and not task.done():
            task.cancel()

    def cancel_all(self) -> None:
        for tag in list(self._tasks):
            self.cancel(tag)

    async def _guard(self, tag: str, coro: ActionCoroutine) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            logger.debug("Action '%s' cancelled", tag)
            raise
        except Exception:
            logger.exception("Action '%s' failed", tag)
            self.state.remember(**{tag: f"{tag}:err"})
            self.invalidate()

    def deliver(self, ticket: ActionTicket, update: Callable[[], Any]) -> bool:
        """Apply an action's result if its screen instance is still on top.

        Returns:
            True if `update` ran, False if the result was stale and dropped.
        """
        try:
            self.nav.check_ticket(ticket)
        except StaleActionResult as exc:
            logger.debug("Dropping stale result: %s", exc)
            return False
        update()
        self.invalidate()
        return True

    # ── Rendering / loop ───────────────────────────────────────────

    def invalidate(self) -> None:
        if self.app is not None:
            self.app.invalidate()

    def render(self, width: int | None = None) -> str:
        from .components import render_screen, to_ansi

        return to_ansi(render_screen(self.nav.snapshot(), self), width=width)

    def _formatted(self) -> ANSI:
        width = None
        if self.app is not None:
            width = self.app.output.get_size().columns
        return ANSI(self.render(width))

    def build_application(self) -> Application:
        def _on_event(event: KeyEvent) -> None:
            if not self.dispatch(event):
                self.cancel_all()
                if self.app is not None:
                    self.app.exit()

        return Application(
            layout=Layout(Window(FormattedTextControl(self._formatted, focusable=True))),
            key_bindings=build_key_bindings(_on_event),
            full_screen=True,
        )

    def run(self) -> None:
        """Run the full-screen loop until Quit."""
        self.app = self.build_application()
        logger.info("Navigator started at '%s'", self.nav.current().value)
        try:
            self.app.run()
        finally:
            self.cancel_all()
            self.app = None
            logger.info("Navigator stopped; history=%s", " > ".join(self.state.session_history))


def create_router(console: Console, settings: Settings, spawn: Spawner | None = None) -> Router:
    """Build a router over the registered screens.

    Raises:
        UnknownScreenKey: if the screen registry is misconfigured.
    """
    # Importing these modules populates SCREENS and ACTIONS.
    from . import actions, screens  # noqa: F401

    return Router(console=console, settings=settings, state=UIState(), nav=Navigator(), spawn=spawn)


# Action registry - maps action tags to handler functions
ACTIONS: dict[str, ActionHandler] = {}


def register_action(tag: str):
    """Decorator to register an action handler.

    Usage:
        @register_action("ping")
        def ping(router: Router, ticket: ActionTicket) -> ActionCoroutine | None:
            ...
    """
    def decorator(fn: ActionHandler):
        ACTIONS[tag] = fn
        return fn
    return decorator
