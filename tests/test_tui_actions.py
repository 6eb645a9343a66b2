from __future__ import annotations

import asyncio
from types import SimpleNamespace
from urllib.error import URLError

import pytest
from rich.console import Console

from golive.tui import actions
from golive.tui.keys import KeyEvent
from golive.tui.navigator import ActionTicket
from golive.tui.registry import ScreenKey
from golive.tui.router import create_router


def _settings(**overrides):
    values = dict(
        GOLIVE_PING_URL="http://example.invalid",
        GOLIVE_PING_DELAY=0,
        GOLIVE_PING_TIMEOUT=0.1,
        GOLIVE_TIMER_SECONDS=0.05,
        GOLIVE_TIMER_INTERVAL=0.01,
        GOLIVE_PROGRESS_STEP=0.5,
        GOLIVE_PROGRESS_INTERVAL=0.001,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def router():
    r = create_router(Console(), _settings(), spawn=lambda coro: coro.close())
    r.nav.push(ScreenKey.UTILS)
    return r


def _ticket(router, action: str, entry: int) -> ActionTicket:
    return ActionTicket(action, ScreenKey.UTILS, router.nav.state.instances[ScreenKey.UTILS], entry)


class _Resp:
    status = 200

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def test_ping_url_ok(monkeypatch) -> None:
    seen = {}

    def _urlopen(url, timeout):
        seen["url"], seen["timeout"] = url, timeout
        return _Resp()

    monkeypatch.setattr("golive.tui.actions.urlopen", _urlopen)

    assert actions.ping_url("https://google.com", 2.0) is True
    assert seen == {"url": "https://google.com", "timeout": 2.0}


def test_ping_url_error(monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise URLError("no route")

    monkeypatch.setattr("golive.tui.actions.urlopen", _boom)
    assert actions.ping_url("https://google.com") is False


def test_run_ping_records_status(router, monkeypatch) -> None:
    monkeypatch.setattr("golive.tui.actions.ping_url", lambda url, timeout: True)

    asyncio.run(actions.run_ping(router, _ticket(router, "ping", 2)))
    assert router.state.status["ping"] == "ping:ok"


def test_run_ping_result_dropped_after_back(router, monkeypatch) -> None:
    ticket = _ticket(router, "ping", 2)
    router.state.remember(ping="ping:pending")

    def _ping_then_leave(url, timeout):
        return False

    monkeypatch.setattr("golive.tui.actions.ping_url", _ping_then_leave)
    router.dispatch(KeyEvent.BACK)

    asyncio.run(actions.run_ping(router, ticket))
    assert router.state.status["ping"] == "ping:stale"


def test_run_timer_counts_down_and_clears_toggle(router) -> None:
    ticket = _ticket(router, "timer", 1)
    router.nav.set_flag(1, True)
    timer = router.widgets.timer
    timer.start()

    asyncio.run(actions.run_timer(router, ticket))

    assert timer.running is False
    assert timer.spent is True
    assert timer.remaining == 0
    assert router.nav.is_active(1) is False


def test_run_timer_stops_driving_when_screen_left(router) -> None:
    ticket = _ticket(router, "timer", 1)
    router.nav.set_flag(1, True)
    router.widgets.timer.start()
    router.nav.pop()

    asyncio.run(actions.run_timer(router, ticket))

    assert router.widgets.timer.remaining == pytest.approx(0.05)
    assert router.widgets.timer.running is False
    assert router.nav.screen_state(ScreenKey.UTILS).flags[1] is True


def test_toggle_timer_restarts_spent_timer(router) -> None:
    timer = router.widgets.timer
    timer.remaining, timer.spent = 0.0, True
    router.nav.set_flag(1, True)

    coro = actions.toggle_timer(router, _ticket(router, "timer", 1))
    assert coro is not None
    coro.close()
    assert timer.running is True
    assert timer.remaining == pytest.approx(0.05)


def test_run_progress_fills_bar(router) -> None:
    meter = router.widgets.progress
    actions.start_progress(router, _ticket(router, "progress", 3)).close()

    asyncio.run(actions.run_progress(router, _ticket(router, "progress", 3)))
    assert meter.percent == 1.0
    assert meter.complete is True


def test_start_progress_resets_finished_bar(router) -> None:
    meter = router.widgets.progress
    meter.percent = 1.0

    actions.start_progress(router, _ticket(router, "progress", 3)).close()
    assert meter.percent == 0.0


def test_failed_action_is_logged_and_marked(router, caplog) -> None:
    async def _fails():
        raise RuntimeError("kaboom")

    with caplog.at_level("ERROR"):
        asyncio.run(router._guard("ping", _fails()))

    assert router.state.status["ping"] == "ping:err"
    assert "Action 'ping' failed" in caplog.text
