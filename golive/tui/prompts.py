"""Prompt mode: drive the navigator with questionary select prompts.

A line-oriented alternative to the full-screen router for terminals where an
alternate screen is unwanted. Navigation, toggles and cursor memory come from
the same Navigator; actions run synchronously with rich progress displays.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

import questionary
from questionary import Choice
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from .actions import ping_url
from .components import BRAND_STYLE, entry_title, nav_choices, render_banner
from .keys import KeyEvent
from .navigator import MoveCursor, Pop, Push, Trigger

if TYPE_CHECKING:
    from .navigator import ActionTicket
    from .router import Router

logger = logging.getLogger(__name__)


def run_prompts(router: Router) -> None:
    """Run prompt mode until Exit or Ctrl+C."""
    nav = router.nav
    while True:
        snapshot = nav.snapshot()
        router.console.print(render_banner(snapshot.banner))
        router.console.print(f"[dim]{snapshot.breadcrumbs}[/dim]\n")

        choices = [
            Choice(title=entry_title(e.label, e.active, snapshot.checkboxes), value=i)
            for i, e in enumerate(snapshot.entries)
        ]
        answer = questionary.select(
            snapshot.title,
            choices=choices + nav_choices(can_go_back=snapshot.depth > 1),
            default=choices[snapshot.cursor],
            style=BRAND_STYLE,
        ).ask()

        # None means Ctrl+C inside questionary
        if answer is None or answer == "exit":
            router.console.print("\n[dim]👋 Goodbye![/]")
            return

        if answer == "back":
            effect = nav.handle_input(KeyEvent.BACK)
        else:
            nav.apply(MoveCursor(answer - snapshot.cursor))
            effect = nav.select(answer)

        changed = nav.apply(effect)
        if isinstance(effect, (Push, Pop)) and changed:
            router.state.add_to_history(nav.current().value)
        elif isinstance(effect, Trigger):
            run_blocking_action(router, effect.ticket)


def run_blocking_action(router: Router, ticket: ActionTicket) -> None:
    handler = PROMPT_ACTIONS.get(ticket.action)
    if handler is None:
        logger.warning("No prompt-mode handler for action '%s'", ticket.action)
        return
    try:
        handler(router, ticket)
    except KeyboardInterrupt:
        router.console.print("\n[dim]Interrupted.[/]")
        if router.nav.spec().entries[ticket.entry].toggle:
            router.nav.set_flag(ticket.entry, False)


def _prompt_table(router: Router, ticket: ActionTicket) -> None:
    if not router.nav.is_active(ticket.entry):
        return
    table = router.widgets.table
    row = questionary.select(
        "Pick a city:",
        choices=[Choice(title=f"{r[1]}, {r[2]} ({r[3]})", value=i) for i, r in enumerate(table.rows)],
        default=None,
        style=BRAND_STYLE,
    ).ask()
    if row is not None:
        table.cursor = row
        city = table.rows[row][1]
        logger.info("Let's go to %s!", city)
        router.console.print(f"[green]✓[/] Let's go to {city}!\n")
    router.nav.set_flag(ticket.entry, False)


def _prompt_timer(router: Router, ticket: ActionTicket) -> None:
    timer = router.widgets.timer
    if not router.nav.is_active(ticket.entry):
        timer.stop()
        return

    timer.start()
    interval = float(router.settings.GOLIVE_TIMER_INTERVAL)
    with Progress(
        TextColumn("[bold]Timer[/]"),
        BarColumn(),
        TextColumn("{task.fields[left]}"),
        console=router.console,
        transient=True,
    ) as progress:
        task = progress.add_task("timer", total=timer.duration, left=timer.view())
        try:
            while timer.running:
                time.sleep(interval)
                timer.tick(interval)
                progress.update(task, completed=timer.duration - timer.remaining, left=timer.view())
        finally:
            timer.stop()
    router.console.print("[green]✓[/] Timer finished\n")
    router.nav.set_flag(ticket.entry, False)


def _prompt_ping(router: Router, ticket: ActionTicket) -> None:
    s = router.settings
    with router.console.status(f"[cyan]Pinging {s.GOLIVE_PING_URL}...[/]"):
        time.sleep(float(s.GOLIVE_PING_DELAY))
        ok = ping_url(s.GOLIVE_PING_URL, float(s.GOLIVE_PING_TIMEOUT))
    status = "ping:ok" if ok else "ping:err"
    router.state.remember(ping=status)
    if ok:
        router.console.print(f"[green]✓ {status}[/]\n")
    else:
        router.console.print(f"[red]✗ {status}[/]\n")


def _prompt_progress(router: Router, ticket: ActionTicket) -> None:
    meter = router.widgets.progress
    meter.reset()
    interval = float(router.settings.GOLIVE_PROGRESS_INTERVAL)
    with Progress(
        SpinnerColumn(),
        BarColumn(complete_style="#FF6E81", finished_style="#00C57A"),
        TextColumn("{task.percentage:>3.0f}%"),
        console=router.console,
    ) as progress:
        task = progress.add_task("progress", total=1.0)
        while not meter.complete:
            time.sleep(interval)
            progress.update(task, completed=meter.advance())
    router.console.print()


PROMPT_ACTIONS: dict[str, Callable[["Router", "ActionTicket"], None]] = {
    "table": _prompt_table,
    "timer": _prompt_timer,
    "ping": _prompt_ping,
    "progress": _prompt_progress,
}
