from __future__ import annotations

from golive.tui.navigator import ActionTicket
from golive.tui.registry import ScreenKey
from golive.tui.widgets import CityTable, CountdownTimer, ProgressMeter, UtilsWidgets


def test_countdown_ticks_to_spent() -> None:
    timer = CountdownTimer(duration=1.0, remaining=1.0)
    assert timer.tick(0.5) is False  # not running yet

    timer.start()
    assert timer.tick(0.6) is False
    assert timer.view() == "400ms"
    assert timer.tick(0.6) is True
    assert (timer.running, timer.spent, timer.remaining) == (False, True, 0.0)

    timer.start()
    assert timer.remaining == 1.0
    assert timer.view() == "1.0s"


def test_progress_meter_caps_at_full() -> None:
    meter = ProgressMeter(step=0.4)
    assert meter.advance() == 0.4
    meter.advance()
    assert meter.advance() == 1.0
    assert meter.complete


def test_city_table_cursor_clamps_and_blur_returns_ticket() -> None:
    table = CityTable()
    table.move(-3)
    assert table.cursor == 0
    table.move(100)
    assert table.selected_row()[1] == "Osaka"

    ticket = ActionTicket("table", ScreenKey.UTILS, 4, 0)
    table.focus(ticket)
    assert table.blur() is ticket
    assert table.blur() is None
    assert table.focused is False


def test_empty_city_table() -> None:
    table = CityTable(rows=())
    table.move(1)
    assert table.selected_row() is None


def test_widgets_from_settings() -> None:
    class _S:
        GOLIVE_TIMER_SECONDS = 3
        GOLIVE_PROGRESS_STEP = 0.1

    widgets = UtilsWidgets.from_settings(_S())
    assert widgets.timer.duration == 3.0
    assert widgets.timer.remaining == 3.0
    assert widgets.progress.step == 0.1
