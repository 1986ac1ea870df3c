# nailbook/core/cancellation.py

from datetime import date, datetime, timedelta

from .clock import TimeOfDay, combine
from .errors import InvalidTransition

CONFIRMED = "confirmed"
COMPLETED = "completed"
CANCELLED = "cancelled"

_ALLOWED = {
    CONFIRMED: {COMPLETED, CANCELLED},
    COMPLETED: set(),
    CANCELLED: set(),
}


def can_cancel(appointment_date: date, start_time, now: datetime, lead_hours: float) -> bool:
    if lead_hours <= 0:
        return True
    starts_at = combine(appointment_date, TimeOfDay.coerce(start_time))
    return starts_at - now >= timedelta(hours=lead_hours)


def check_transition(current: str, target: str) -> None:
    if target not in _ALLOWED.get(current, set()):
        raise InvalidTransition(f"Cannot change appointment from {current} to {target}")
