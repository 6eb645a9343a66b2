"""Action handlers for the Utils screen: table, timer, ping, progress."""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from urllib.error import URLError
from urllib.request import urlopen

from .router import register_action

if TYPE_CHECKING:
    from .navigator import ActionTicket
    from .router import ActionCoroutine, Router

logger = logging.getLogger(__name__)


def ping_url(url: str, timeout_sec: float = 5.0) -> bool:
    """GET `url`; any HTTP response counts as reachable."""
    try:
        with urlopen(url, timeout=timeout_sec) as resp:
            logger.debug("Ping %s -> %s", url, getattr(resp, "status", "?"))
            return True
    except (URLError, OSError, ValueError) as exc:
        logger.warning("Ping %s failed: %s", url, exc)
        return False


# ═══════════════════════════════════════════════════════════════════════════════
# TABLE
# ═══════════════════════════════════════════════════════════════════════════════

@register_action("table")
def toggle_table(router: Router, ticket: ActionTicket) -> ActionCoroutine | None:
    table = router.widgets.table
    if router.nav.is_active(ticket.entry):
        table.focus(ticket)
    else:
        table.blur()
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# TIMER
# ═══════════════════════════════════════════════════════════════════════════════

@register_action("timer")
def toggle_timer(router: Router, ticket: ActionTicket) -> ActionCoroutine | None:
    timer = router.widgets.timer
    if router.nav.is_active(ticket.entry):
        timer.start()
        return run_timer(router, ticket)

    if timer.running:
        timer.stop()
        router.cancel("timer")
    return None


async def run_timer(router: Router, ticket: ActionTicket) -> None:
    timer = router.widgets.timer
    interval = float(router.settings.GOLIVE_TIMER_INTERVAL)
    loop = asyncio.get_running_loop()
    last = loop.time()

    def _tick(elapsed: float) -> None:
        if timer.tick(elapsed):
            logger.info("Timer finished")
            router.nav.set_flag(ticket.entry, False)

    while timer.running:
        await asyncio.sleep(interval)
        now = loop.time()
        elapsed, last = now - last, now
        if not router.deliver(ticket, lambda: _tick(elapsed)):
            timer.stop()
            return


# ═══════════════════════════════════════════════════════════════════════════════
# PING
# ═══════════════════════════════════════════════════════════════════════════════

@register_action("ping")
def ping(router: Router, ticket: ActionTicket) -> ActionCoroutine | None:
    router.state.remember(ping="ping:pending")
    return run_ping(router, ticket)


async def run_ping(router: Router, ticket: ActionTicket) -> None:
    s = router.settings
    await asyncio.sleep(float(s.GOLIVE_PING_DELAY))
    ok = await asyncio.to_thread(ping_url, s.GOLIVE_PING_URL, float(s.GOLIVE_PING_TIMEOUT))
    status = "ping:ok" if ok else "ping:err"
    logger.info(status)
    if not router.deliver(ticket, lambda: router.state.remember(ping=status)):
        router.state.remember(ping="ping:stale")


# ═══════════════════════════════════════════════════════════════════════════════
# PROGRESS
# ═══════════════════════════════════════════════════════════════════════════════

@register_action("progress")
def start_progress(router: Router, ticket: ActionTicket) -> ActionCoroutine | None:
    meter = router.widgets.progress
    if meter.complete:
        meter.reset()
    return run_progress(router, ticket)


async def run_progress(router: Router, ticket: ActionTicket) -> None:
    meter = router.widgets.progress
    interval = float(router.settings.GOLIVE_PROGRESS_INTERVAL)
    while not meter.complete:
        await asyncio.sleep(interval)
        if not router.deliver(ticket, meter.advance):
            return
