# nailbook/core/slots.py

from typing import Iterable, List

from .cancellation import CANCELLED
from .catalog import GRANULARITY
from .clock import TimeOfDay
from .schedule import DaySchedule, WeeklySchedule


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    # half-open: back-to-back intervals do not overlap
    return a_start < b_end and b_start < a_end


def generate_slots(day: DaySchedule, duration: int, granularity: int = GRANULARITY) -> List[TimeOfDay]:
    """Candidate start times for one day, interval by interval, in the order given.

    A candidate is valid when start + duration lands on or before the interval end.
    Overlapping intervals may produce duplicates; callers de-duplicate.
    """
    if duration <= 0 or day is None or not day.enabled:
        return []

    candidates = []
    for interval in day.intervals:
        cursor = interval.start.minutes
        while cursor + duration <= interval.end.minutes:
            candidates.append(TimeOfDay(cursor))
            cursor += granularity
    return candidates


def busy_intervals(appointments: Iterable) -> list:
    busy = []
    for a in appointments:
        if a.status == CANCELLED:
            continue
        busy.append((TimeOfDay.coerce(a.start_time), TimeOfDay.coerce(a.end_time)))
    return busy


def filter_conflicts(candidates: Iterable[TimeOfDay], duration: int, appointments: Iterable) -> List[TimeOfDay]:
    busy = busy_intervals(appointments)
    free = []
    for start in candidates:
        end = start + duration
        if any(overlaps(start, end, b_start, b_end) for b_start, b_end in busy):
            continue
        free.append(start)
    return free


def available_slots(schedule: WeeklySchedule, day, duration: int, appointments: Iterable) -> List[TimeOfDay]:
    candidates = generate_slots(schedule.for_date(day), duration)
    return sorted(set(filter_conflicts(candidates, duration, appointments)))


def fits_business_hours(day: DaySchedule, start: TimeOfDay, duration: int) -> bool:
    # any start minute is fine as long as the whole visit sits in one interval
    if day is None or not day.enabled:
        return False
    end_minutes = start.minutes + duration
    return any(
        interval.start <= start and end_minutes <= interval.end.minutes
        for interval in day.intervals
    )
