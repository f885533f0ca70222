"""Conversions between the 12-hour display times stored on appointments and
the 24-hour ``HH:MM`` times used by the calendar.

The string helpers never raise. Input they cannot make sense of is handed
back in a best-effort shape instead, so a single bad row cannot break a
calendar render.
"""

from dataclasses import dataclass
from datetime import time

MINUTES_PER_DAY = 24 * 60
DEFAULT_EVENT_DURATION_MINUTES = 30


def to_24_hour(time_12h: str) -> str:
    """Convert "h:mm AM"/"h:mm PM" to "HH:MM".

    >>> to_24_hour("1:05 PM")
    '13:05'
    """
    time_part, _, modifier = time_12h.strip().partition(" ")
    hours, _, minutes = time_part.partition(":")
    modifier = modifier.strip().upper()

    if hours == "12":
        hours = "00" if modifier == "AM" else "12"
    elif modifier == "PM" and hours.isdecimal():
        hours = str(int(hours) + 12)

    return f"{hours.zfill(2)}:{minutes or '00'}"


def add_minutes(time_24h: str, minutes: int) -> str:
    """Shift "HH:MM" by ``minutes``, wrapping at midnight without a day carry.

    Input that is not two numeric fields is returned unchanged.
    """
    hours, _, mins = time_24h.partition(":")
    if not (hours.isdecimal() and mins.isdecimal()):
        return time_24h

    total = int(hours) * 60 + int(mins) + minutes
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


def to_12_hour(value: time) -> str:
    """Format a clock time the way appointments display it, e.g. "9:05 AM"."""
    hour = value.hour % 12 or 12
    modifier = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {modifier}"


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Time out of range: {self.hour}:{self.minute}")

    @classmethod
    def from_24_hour(cls, value: str) -> "TimeOfDay":
        hours, _, minutes = value.strip().partition(":")
        return cls(int(hours), int(minutes or 0))

    @classmethod
    def from_12_hour(cls, value: str) -> "TimeOfDay":
        _, _, modifier = value.strip().partition(" ")
        if modifier.strip().upper() not in {"AM", "PM"}:
            raise ValueError(f"Missing AM/PM in {value!r}")
        return cls.from_24_hour(to_24_hour(value))

    def plus_minutes(self, minutes: int) -> "TimeOfDay":
        total = (self.hour * 60 + self.minute + minutes) % MINUTES_PER_DAY
        return TimeOfDay(total // 60, total % 60)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
