"""Reusable rendering components for the navigator."""
from __future__ import annotations

import io
from typing import TYPE_CHECKING, Callable

import questionary
from questionary import Choice, Separator
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .keys import SHORT_HELP, full_help

if TYPE_CHECKING:
    from .navigator import Snapshot
    from .router import Router


# ═══════════════════════════════════════════════════════════════════════════════
# BRAND STYLING
# ═══════════════════════════════════════════════════════════════════════════════

LOGO_STYLE = "#01FAC6"
TEXT_STYLE = "#EFEDFF"
ACTIVE_STYLE = "bold #FF6E81"
CHECKED_STYLE = "#00C57A"
GRADIENT_START = "#6A6094"

BRAND_STYLE = questionary.Style([
    ("qmark", "fg:#01FAC6 bold"),
    ("question", "bold"),
    ("answer", "fg:#00C57A bold"),
    ("highlighted", "fg:#FF6E81 bold"),  # Highlighted item
    ("pointer", "fg:#FF6E81 bold"),      # Arrow pointer
    ("selected", "fg:#00C57A"),          # Selected item
])


# ═══════════════════════════════════════════════════════════════════════════════
# NAVIGATION HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def nav_choices(can_go_back: bool, include_separator: bool = True) -> list:
    """Back/Exit choices appended to every prompt-mode menu."""
    choices: list = []
    if include_separator:
        choices.append(Separator())
    if can_go_back:
        choices.append(Choice(title="← Back", value="back"))
    choices.append(Choice(title="Exit", value="exit"))
    return choices


def entry_title(label: str, active: bool, checkboxes: bool) -> str:
    if not checkboxes:
        return label
    return f"[{'✓' if active else ' '}] {label}"


# ═══════════════════════════════════════════════════════════════════════════════
# SCREEN
# ═══════════════════════════════════════════════════════════════════════════════

def render_banner(banner: str) -> Text:
    return Text(banner.strip("\n"), style=LOGO_STYLE)


def render_entries(snapshot: Snapshot) -> Text:
    """One line per entry: `->` marks the cursor, `[✓]` marks active toggles."""
    lines = Text()
    for i, entry in enumerate(snapshot.entries):
        cursor = "->" if entry.selected else "  "
        row = f" {cursor} {entry_title(entry.label, entry.active, snapshot.checkboxes)}"
        if i:
            lines.append("\n")
        if entry.selected:
            lines.append(row, style=ACTIVE_STYLE)
        elif entry.active:
            lines.append(row, style=CHECKED_STYLE)
        else:
            lines.append(row, style=TEXT_STYLE)
    return lines


def render_help(show_all: bool) -> RenderableType:
    if not show_all:
        return Text(SHORT_HELP, style="dim")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Action", style="dim")
    for keys, text in full_help():
        table.add_row(keys, text)
    return table


def render_screen(snapshot: Snapshot, router: Router) -> RenderableType:
    parts: list[RenderableType] = [
        render_banner(snapshot.banner),
        Text(snapshot.breadcrumbs, style="dim"),
        Text(""),
        Text(snapshot.title, style="bold"),
        Text(""),
        render_entries(snapshot),
    ]

    for name in snapshot.panels:
        renderer = PANELS.get(name)
        if renderer is not None:
            parts.extend([Text(""), renderer(router)])

    parts.extend([Text(""), render_help(router.state.show_help)])
    return Group(*parts)


# ═══════════════════════════════════════════════════════════════════════════════
# WIDGET PANELS
# ═══════════════════════════════════════════════════════════════════════════════

def render_table_panel(router: Router) -> RenderableType:
    from .widgets import CITY_COLUMNS

    widget = router.widgets.table
    table = Table(
        show_header=True,
        header_style="bold",
        border_style=ACTIVE_STYLE if widget.focused else "dim",
    )
    for column in CITY_COLUMNS:
        table.add_column(column)
    for i, row in enumerate(widget.rows):
        style = ACTIVE_STYLE if (widget.focused and i == widget.cursor) else None
        table.add_row(*row, style=style)

    caption = router.state.status.get("table")
    if widget.focused:
        hint = "[dim]↑/↓ move, ⏎ pick, backspace/esc back to menu[/dim]"
        caption = f"{caption}  {hint}" if caption else hint
    if caption:
        table.caption = caption
    return table


def render_timer_panel(router: Router) -> RenderableType:
    timer = router.widgets.timer
    if timer.running:
        state = "running"
    elif timer.spent:
        state = "done"
    else:
        state = "stopped"
    return Text(f"Timer {state} {timer.view()}", style=TEXT_STYLE)


def render_progress_panel(router: Router) -> RenderableType:
    meter = router.widgets.progress
    bar = ProgressBar(
        total=100,
        completed=meter.percent * 100,
        width=40,
        style=GRADIENT_START,
        complete_style=ACTIVE_STYLE,
        finished_style=CHECKED_STYLE,
    )
    return Group(bar, Text(f"{meter.percent:.0%}", style="dim"))


def render_ping_panel(router: Router) -> RenderableType:
    status = router.state.status.get("ping")
    if status is None:
        return Text("Ping: not run", style="dim")
    style = {"ping:ok": CHECKED_STYLE, "ping:err": "bold red", "ping:stale": "dim"}.get(status, "yellow")
    return Text(f"Ping: {status}", style=style)


PANELS: dict[str, Callable[["Router"], RenderableType]] = {
    "table": render_table_panel,
    "timer": render_timer_panel,
    "progress": render_progress_panel,
    "ping": render_ping_panel,
}


# ═══════════════════════════════════════════════════════════════════════════════
# OUTPUT
# ═══════════════════════════════════════════════════════════════════════════════

def to_ansi(renderable: RenderableType, width: int | None = None) -> str:
    """Render to an ANSI string for prompt_toolkit's FormattedTextControl."""
    buf = io.StringIO()
    console = Console(
        file=buf,
        force_terminal=True,
        color_system="truecolor",
        width=width or 100,
        legacy_windows=False,
    )
    console.print(renderable)
    return buf.getvalue()


def render_error(
    console: Console,
    title: str,
    cause: str,
    action: str | None = None,
) -> None:
    """Render a friendly error panel with 3-part structure.

    Args:
        console: Rich Console for output
        title: Error title
        cause: What caused the error
        action: Suggested action to resolve
    """
    content = f"[bold red]✗ {title}[/bold red]\n\n"
    content += f"[yellow]Cause:[/yellow] {cause}\n"

    if action:
        content += f"\n[dim]→ {action}[/dim]"

    console.print(Panel.fit(content, border_style="red", title="Error"))
    console.print()
