# nailbook/core/schedule.py

from dataclasses import dataclass, field, replace
from typing import Dict, List

from .clock import DAY_NAMES, TimeOfDay, weekday_name
from .errors import ScheduleError

DEFAULT_INTERVAL = ("09:00", "17:00")  # what a freshly added interval starts as


@dataclass(frozen=True)
class TimeInterval:
    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self):
        if not self.start < self.end:
            raise ScheduleError(f"interval start {self.start} must be before end {self.end}")

    @classmethod
    def of(cls, start, end) -> "TimeInterval":
        try:
            return cls(TimeOfDay.coerce(start), TimeOfDay.coerce(end))
        except ScheduleError:
            raise
        except ValueError as exc:
            raise ScheduleError(str(exc))

    @property
    def minutes(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class DaySchedule:
    enabled: bool = False
    intervals: tuple = ()


@dataclass(frozen=True)
class WeeklySchedule:
    days: Dict[str, DaySchedule] = field(default_factory=dict)

    def __post_init__(self):
        missing = [d for d in DAY_NAMES if d not in self.days]
        unknown = [d for d in self.days if d not in DAY_NAMES]
        if missing:
            raise ScheduleError(f"weekly schedule is missing: {', '.join(missing)}")
        if unknown:
            raise ScheduleError(f"unknown day names: {', '.join(unknown)}")

    def for_date(self, day) -> DaySchedule:
        return self.days[weekday_name(day)]

    def __getitem__(self, day_name: str) -> DaySchedule:
        return self.days[day_name]

    def to_document(self) -> dict:
        return {
            name: {
                "enabled": self.days[name].enabled,
                "intervals": [
                    {"start": i.start.hhmm, "end": i.end.hhmm}
                    for i in self.days[name].intervals
                ],
            }
            for name in DAY_NAMES
        }

    @classmethod
    def from_document(cls, doc: dict) -> "WeeklySchedule":
        if not isinstance(doc, dict):
            raise ScheduleError("weekly schedule must be a mapping of day names")
        days = {}
        for name, raw in doc.items():
            raw = raw or {}
            intervals = tuple(
                TimeInterval.of(i["start"], i["end"]) for i in raw.get("intervals", [])
            )
            days[name] = DaySchedule(enabled=bool(raw.get("enabled", False)), intervals=intervals)
        return cls(days)


def default_schedule() -> WeeklySchedule:
    # Mon-Fri open, weekend closed
    workday = DaySchedule(
        enabled=True,
        intervals=(TimeInterval.of("08:00", "12:00"), TimeInterval.of("13:30", "16:00")),
    )
    days = {}
    for name in DAY_NAMES:
        if name in ("saturday", "sunday"):
            days[name] = DaySchedule(enabled=False, intervals=())
        else:
            days[name] = workday
    return WeeklySchedule(days)


def _with_day(schedule: WeeklySchedule, day_name: str, day: DaySchedule) -> WeeklySchedule:
    if day_name not in DAY_NAMES:
        raise ScheduleError(f"unknown day name: {day_name}")
    days = dict(schedule.days)
    days[day_name] = day
    return WeeklySchedule(days)


def _interval_index(day: DaySchedule, index: int):
    if not (0 <= index < len(day.intervals)):
        raise ScheduleError(f"no interval at position {index}")


def toggle_day(schedule: WeeklySchedule, day_name: str) -> WeeklySchedule:
    day = schedule[day_name]
    return _with_day(schedule, day_name, replace(day, enabled=not day.enabled))


def add_interval(schedule: WeeklySchedule, day_name: str, start=None, end=None) -> WeeklySchedule:
    start = start if start is not None else DEFAULT_INTERVAL[0]
    end = end if end is not None else DEFAULT_INTERVAL[1]
    day = schedule[day_name]
    intervals = day.intervals + (TimeInterval.of(start, end),)
    return _with_day(schedule, day_name, replace(day, intervals=intervals))


def remove_interval(schedule: WeeklySchedule, day_name: str, index: int) -> WeeklySchedule:
    day = schedule[day_name]
    _interval_index(day, index)
    intervals = day.intervals[:index] + day.intervals[index + 1:]
    return _with_day(schedule, day_name, replace(day, intervals=intervals))


def update_interval(schedule: WeeklySchedule, day_name: str, index: int, start=None, end=None) -> WeeklySchedule:
    day = schedule[day_name]
    _interval_index(day, index)
    current = day.intervals[index]
    updated = TimeInterval.of(
        start if start is not None else current.start,
        end if end is not None else current.end,
    )
    intervals: List[TimeInterval] = list(day.intervals)
    intervals[index] = updated
    return _with_day(schedule, day_name, replace(day, intervals=tuple(intervals)))
