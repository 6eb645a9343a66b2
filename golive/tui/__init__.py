"""TUI (Terminal User Interface) module for go-live.

Provides a screen-stack navigator and the hosts that drive it.
"""
from .navigator import Navigator
from .router import Router, create_router
from .state import NavigationState, UIState

__all__ = ["Navigator", "NavigationState", "Router", "UIState", "create_router"]
