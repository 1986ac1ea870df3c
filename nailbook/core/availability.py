# nailbook/core/availability.py

from datetime import date, timedelta
from typing import Collection, List

from .schedule import WeeklySchedule

HORIZON_DAYS = 60
TARGET_DATES = 30


def is_date_open(schedule: WeeklySchedule, blocked: Collection[date], day: date) -> bool:
    return schedule.for_date(day).enabled and day not in blocked


def available_dates(
    schedule: WeeklySchedule,
    blocked: Collection[date],
    today: date,
    horizon_days: int = HORIZON_DAYS,
    target: int = TARGET_DATES,
) -> List[date]:
    """Bookable dates from tomorrow up to `horizon_days` ahead, at most `target` of them."""
    blocked = set(blocked)
    dates = []
    for offset in range(1, horizon_days + 1):
        if len(dates) >= target:
            break
        day = today + timedelta(days=offset)
        if is_date_open(schedule, blocked, day):
            dates.append(day)
    return dates
