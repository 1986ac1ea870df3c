# nailbook/core/clock.py

from datetime import date, datetime, timedelta
from functools import total_ordering

MINUTES_PER_DAY = 24 * 60

DAY_NAMES = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]  # index matches date.weekday()


@total_ordering
class TimeOfDay:
    """Wall-clock time with minute precision, stored as minutes since midnight.

    24:00 is accepted as an end-of-day bound so an interval can close at midnight.
    """

    __slots__ = ("minutes",)

    def __init__(self, minutes: int):
        if not (0 <= minutes <= MINUTES_PER_DAY):
            raise ValueError(f"time of day out of range: {minutes} minutes")
        object.__setattr__(self, "minutes", minutes)

    def __setattr__(self, name, value):
        raise AttributeError("TimeOfDay is immutable")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        try:
            hours, minutes = value.strip().split(":")
            h, m = int(hours), int(minutes)
        except (AttributeError, ValueError):
            raise ValueError(f"expected HH:MM, got {value!r}")
        if not (0 <= m < 60) or not (0 <= h <= 24) or (h == 24 and m != 0):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return cls(h * 60 + m)

    @classmethod
    def coerce(cls, value) -> "TimeOfDay":
        if isinstance(value, TimeOfDay):
            return value
        if isinstance(value, int):
            return cls(value)
        return cls.parse(value)

    @property
    def hhmm(self) -> str:
        return f"{self.minutes // 60:02d}:{self.minutes % 60:02d}"

    def __add__(self, minutes: int) -> "TimeOfDay":
        if not isinstance(minutes, int):
            return NotImplemented
        return TimeOfDay(self.minutes + minutes)

    def __sub__(self, other: "TimeOfDay") -> int:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes - other.minutes

    def __eq__(self, other):
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes == other.minutes

    def __lt__(self, other):
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes < other.minutes

    def __hash__(self):
        return hash(self.minutes)

    def __str__(self):
        return self.hhmm

    def __repr__(self):
        return f"TimeOfDay({self.hhmm!r})"


def weekday_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]


def combine(day: date, at: TimeOfDay) -> datetime:
    # naive local time; 24:00 rolls over to the next day
    return datetime.combine(day, datetime.min.time()) + timedelta(minutes=at.minutes)
