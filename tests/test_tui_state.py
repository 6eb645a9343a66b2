"""Unit tests for navigation and session state."""
from __future__ import annotations

from golive.tui.registry import ScreenKey
from golive.tui.state import NavigationState, ScreenState, UIState


def test_navigation_state_initial():
    state = NavigationState.initial([ScreenKey.ROOT, ScreenKey.LIVE], ScreenKey.ROOT)

    assert state.stack == [ScreenKey.ROOT]
    assert state.top is ScreenKey.ROOT
    assert state.screens == {ScreenKey.ROOT: ScreenState(), ScreenKey.LIVE: ScreenState()}
    assert state.instances == {ScreenKey.ROOT: 0}


def test_issue_instance_is_monotonic():
    state = NavigationState.initial([ScreenKey.ROOT, ScreenKey.LIVE], ScreenKey.ROOT)

    first = state.issue_instance(ScreenKey.LIVE)
    second = state.issue_instance(ScreenKey.LIVE)
    assert second > first > 0
    assert state.instances[ScreenKey.LIVE] == second


def test_screen_state_flags_default_false():
    st = ScreenState()
    assert st.is_active(3) is False
    st.flags[3] = True
    assert st.is_active(3) is True


def test_uistate_initial_state():
    state = UIState()

    assert state.show_help is False
    assert state.session_history == []
    assert state.status == {}


def test_uistate_toggle_help():
    state = UIState()
    assert state.toggle_help() is True
    assert state.toggle_help() is False


def test_uistate_add_to_history_and_remember():
    state = UIState()

    state.add_to_history("root")
    state.add_to_history("utils")
    state.remember(ping="ping:ok")
    state.remember(ping="ping:err", table="Let's go to Tokyo!")

    assert state.session_history == ["root", "utils"]
    assert state.status == {"ping": "ping:err", "table": "Let's go to Tokyo!"}
