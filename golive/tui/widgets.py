"""State for the Utils screen's demo widgets.

These are plain state holders; the coroutines that drive them live in
`actions.py` and the renderers in `components.py`.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .navigator import ActionTicket


@dataclass
class CountdownTimer:
    duration: float = 5.0
    remaining: float = 5.0
    running: bool = False
    spent: bool = False

    def reset(self) -> None:
        self.remaining = self.duration
        self.running = False
        self.spent = False

    def start(self) -> None:
        if self.spent:
            self.reset()
        self.running = True

    def stop(self) -> None:
        self.running = False

    def tick(self, elapsed: float) -> bool:
        """Advance the countdown. Returns True when it just ran out."""
        if not self.running:
            return False
        self.remaining = max(0.0, self.remaining - elapsed)
        if self.remaining <= 0:
            self.running = False
            self.spent = True
            return True
        return False

    def view(self) -> str:
        seconds = self.remaining
        if seconds >= 1:
            return f"{seconds:.1f}s"
        return f"{int(round(seconds * 1000))}ms"


@dataclass
class ProgressMeter:
    percent: float = 0.0
    step: float = 0.25

    @property
    def complete(self) -> bool:
        return self.percent >= 1.0

    def advance(self) -> float:
        self.percent = min(1.0, self.percent + self.step)
        return self.percent

    def reset(self) -> None:
        self.percent = 0.0


CITY_COLUMNS = ("Rank", "City", "Country", "Population")

CITY_ROWS: tuple[tuple[str, str, str, str], ...] = (
    ("1", "Tokyo", "Japan", "37,274,000"),
    ("2", "Delhi", "India", "32,065,760"),
    ("3", "Shanghai", "China", "28,516,904"),
    ("4", "Dhaka", "Bangladesh", "22,478,116"),
    ("5", "São Paulo", "Brazil", "22,429,800"),
    ("6", "Mexico City", "Mexico", "22,085,140"),
    ("7", "Cairo", "Egypt", "21,750,020"),
    ("8", "Beijing", "China", "21,333,332"),
    ("9", "Mumbai", "India", "20,961,472"),
    ("10", "Osaka", "Japan", "19,059,856"),
)


@dataclass
class CityTable:
    rows: tuple[tuple[str, ...], ...] = CITY_ROWS
    cursor: int = 0
    focused: bool = False
    # Ticket of the Select that focused the table; used to clear its toggle on blur.
    ticket: ActionTicket | None = None

    def focus(self, ticket: ActionTicket) -> None:
        self.focused = True
        self.ticket = ticket

    def blur(self) -> ActionTicket | None:
        ticket, self.ticket = self.ticket, None
        self.focused = False
        return ticket

    def move(self, delta: int) -> None:
        if not self.rows:
            return
        self.cursor = max(0, min(len(self.rows) - 1, self.cursor + delta))

    def selected_row(self) -> tuple[str, ...] | None:
        if not self.rows:
            return None
        return self.rows[self.cursor]


@dataclass
class UtilsWidgets:
    timer: CountdownTimer = field(default_factory=CountdownTimer)
    progress: ProgressMeter = field(default_factory=ProgressMeter)
    table: CityTable = field(default_factory=CityTable)

    @classmethod
    def from_settings(cls, settings: object) -> "UtilsWidgets":
        seconds = float(getattr(settings, "GOLIVE_TIMER_SECONDS", 5.0))
        step = float(getattr(settings, "GOLIVE_PROGRESS_STEP", 0.25))
        return cls(
            timer=CountdownTimer(duration=seconds, remaining=seconds),
            progress=ProgressMeter(step=step),
        )
