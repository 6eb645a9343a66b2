from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

from .logging import setup_logging
from .settings import load_settings
from .tui.components import render_error
from .tui.errors import UnknownScreenKey
from .tui.registry import SCREENS, ScreenKey

app = typer.Typer(
    add_completion=False,
    help="go-live: keyboard-driven menu navigator",
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger(__name__)


def _launch(plain: bool = False) -> None:
    """Validate the screen registry and start a host."""
    from .tui.prompts import run_prompts
    from .tui.router import create_router

    s = load_settings()
    log_file = setup_logging(s)

    try:
        router = create_router(console, s)
    except UnknownScreenKey as exc:
        logger.error("Screen registry is invalid: %s", exc)
        render_error(
            console,
            "Screen registry is invalid",
            str(exc),
            action="Fix the screen definitions under golive/tui/screens",
        )
        raise typer.Exit(code=1)

    if plain:
        try:
            run_prompts(router)
        except KeyboardInterrupt:
            console.print("\n[dim]👋 Interrupted.[/]")
    else:
        router.run()

    console.print(f"[dim]Log: {log_file}[/dim]")


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context):
    """
    [bold]go-live[/bold]: drill into deploy targets and utilities from the keyboard.

    [dim]Run without arguments to launch the full-screen navigator.[/dim]

    [bold]Quick Commands:[/bold]
      golive run          Full-screen navigator
      golive run --plain  Prompt-by-prompt navigator
      golive screens      Show the screen tree
      golive ping         Ping the configured URL once
      golive status       Show configuration
    """
    if ctx.invoked_subcommand is None:
        _launch()
        raise typer.Exit(code=0)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("run", help="[bold cyan]R[/bold cyan]un the navigator")
def run(
    plain: bool = typer.Option(False, "--plain", help="Use line prompts instead of the full-screen UI"),
):
    """Start the navigator."""
    _launch(plain=plain)


@app.command("screens", help="Show the registered screen tree")
def screens():
    """Print the screen tree from the registry, starting at the root."""
    from .tui import screens as _screens  # noqa: F401
    from .tui.registry import validate_registry

    try:
        validate_registry(SCREENS, ScreenKey.ROOT)
    except UnknownScreenKey as exc:
        render_error(console, "Screen registry is invalid", str(exc))
        raise typer.Exit(code=1)

    root = SCREENS[ScreenKey.ROOT]
    tree = Tree(f"[bold]{root.breadcrumb}[/bold] [dim]({root.key.value})[/dim]")
    _add_children(tree, root.key, seen={root.key})
    console.print(tree)


def _add_children(node: Tree, key: ScreenKey, seen: set[ScreenKey]) -> None:
    for entry in SCREENS[key].entries:
        if entry.target is not None:
            child = node.add(f"[bold]{entry.label}[/bold] [dim]→ {entry.target.value}[/dim]")
            if entry.target not in seen:
                _add_children(child, entry.target, seen | {entry.target})
            continue
        tags = []
        if entry.toggle:
            tags.append("toggle")
        if entry.action:
            tags.append(f"action:{entry.action}")
        node.add(f"{entry.label} [dim]({', '.join(tags)})[/dim]")


@app.command("ping", help="[bold cyan]P[/bold cyan]ing a URL once")
def ping(
    url: Optional[str] = typer.Argument(None, help="URL to GET (defaults to GOLIVE_PING_URL)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Request timeout in seconds"),
):
    """GET a URL and report ping:ok / ping:err."""
    from .tui.actions import ping_url

    s = load_settings()
    target = url or s.GOLIVE_PING_URL
    with console.status(f"[cyan]Pinging {target}...[/]"):
        ok = ping_url(target, timeout if timeout is not None else float(s.GOLIVE_PING_TIMEOUT))

    if ok:
        console.print("[green]✓ ping:ok[/green]")
        return
    console.print("[red]✗ ping:err[/red]")
    raise typer.Exit(code=1)


@app.command("status", help="[bold cyan]S[/bold cyan]how configuration")
def status():
    """Show current configuration."""
    s = load_settings()

    console.print(Panel.fit(
        "\n".join([
            f"[bold]Log:[/bold]          {s.GOLIVE_LOG_DIR / s.GOLIVE_LOG_FILE} ({s.GOLIVE_LOG_LEVEL})",
            f"[bold]Ping:[/bold]         {s.GOLIVE_PING_URL} "
            f"(delay {s.GOLIVE_PING_DELAY}s, timeout {s.GOLIVE_PING_TIMEOUT}s)",
            f"[bold]Timer:[/bold]        {s.GOLIVE_TIMER_SECONDS}s (tick {s.GOLIVE_TIMER_INTERVAL}s)",
            f"[bold]Progress:[/bold]     +{s.GOLIVE_PROGRESS_STEP:.0%} every {s.GOLIVE_PROGRESS_INTERVAL}s",
        ]),
        title="[bold]Configuration[/bold]"
    ))


def main():
    app()
