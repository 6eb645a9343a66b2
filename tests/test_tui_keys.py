from __future__ import annotations

from golive.tui.keys import KEYMAP, KeyEvent, binding_for, build_key_bindings, event_for_key, full_help


def test_every_event_has_a_binding() -> None:
    assert {b.event for b in KEYMAP} == set(KeyEvent)
    assert binding_for(KeyEvent.QUIT).keys == ("q", "c-c")


def test_event_for_key_aliases() -> None:
    assert event_for_key("k") is KeyEvent.UP
    assert event_for_key("down") is KeyEvent.DOWN
    assert event_for_key(" ") is KeyEvent.SELECT
    assert event_for_key("enter") is KeyEvent.SELECT
    assert event_for_key("esc") is KeyEvent.BACK
    assert event_for_key("ctrl+c") is KeyEvent.QUIT
    assert event_for_key("?") is KeyEvent.TOGGLE_HELP
    assert event_for_key("x") is None


def test_full_help_rows() -> None:
    rows = full_help()
    assert ("↑/k", "move up") in rows
    assert ("q", "quit") in rows


def test_build_key_bindings_forwards_events() -> None:
    seen: list[KeyEvent] = []
    kb = build_key_bindings(seen.append)

    bindings = kb.get_bindings_for_keys(("j",))
    assert len(bindings) == 1
    bindings[0].handler(None)
    assert seen == [KeyEvent.DOWN]
