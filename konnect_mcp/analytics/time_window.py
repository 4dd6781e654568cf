"""
Relative time windows for analytics queries.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any


class RelativeTimeWindow(str, Enum):
    """Symbolic span ending at "now", resolved by the backend."""

    MINUTES_15 = "15M"
    HOUR_1 = "1H"
    HOURS_6 = "6H"
    HOURS_12 = "12H"
    HOURS_24 = "24H"
    DAYS_7 = "7D"

    @property
    def duration(self) -> timedelta:
        return _DURATIONS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_DURATIONS = {
    RelativeTimeWindow.MINUTES_15: timedelta(minutes=15),
    RelativeTimeWindow.HOUR_1: timedelta(hours=1),
    RelativeTimeWindow.HOURS_6: timedelta(hours=6),
    RelativeTimeWindow.HOURS_12: timedelta(hours=12),
    RelativeTimeWindow.HOURS_24: timedelta(hours=24),
    RelativeTimeWindow.DAYS_7: timedelta(days=7),
}

_LABELS = {
    RelativeTimeWindow.MINUTES_15: "last 15 minutes",
    RelativeTimeWindow.HOUR_1: "last hour",
    RelativeTimeWindow.HOURS_6: "last 6 hours",
    RelativeTimeWindow.HOURS_12: "last 12 hours",
    RelativeTimeWindow.HOURS_24: "last 24 hours",
    RelativeTimeWindow.DAYS_7: "last 7 days",
}

DEFAULT_TIME_WINDOW = RelativeTimeWindow.HOUR_1


@dataclass(frozen=True)
class TimeWindowDescriptor:
    """Backend representation of a relative time range."""

    window: RelativeTimeWindow
    type: str = "relative"

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.type, "time_range": self.window.value}

    def describe(self) -> dict[str, Any]:
        return {
            "range": self.window.value,
            "label": self.window.label,
            "durationSeconds": int(self.window.duration.total_seconds()),
        }


def resolve(symbol: "RelativeTimeWindow | str") -> TimeWindowDescriptor:
    """Map a range symbol (e.g. '1H') to its backend descriptor.

    Raises:
        ValueError: If the symbol is not one of the six supported windows.
    """
    return TimeWindowDescriptor(window=RelativeTimeWindow(symbol))
