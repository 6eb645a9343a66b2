"""Navigation error taxonomy.

None of these reach the operator as a crash: OutOfRange and StaleActionResult
are recovered where they are raised, UnknownScreenKey only at startup.
"""
from __future__ import annotations


class NavigationError(Exception):
    """Base class for navigator errors."""


class OutOfRange(NavigationError):
    """An entry index outside the active screen's entries."""

    def __init__(self, screen: str, index: int, count: int):
        super().__init__(f"entry {index} out of range for screen '{screen}' ({count} entries)")
        self.screen = screen
        self.index = index
        self.count = count


class UnknownScreenKey(NavigationError):
    """Registry misconfiguration, detected by startup validation."""


class StaleActionResult(NavigationError):
    """An action completed after its originating screen instance left the top of the stack."""
