# nailbook/core/__init__.py

from .allocator import AllocationRequest, Booking, BookingStore, allocate
from .availability import available_dates, is_date_open
from .cancellation import CANCELLED, COMPLETED, CONFIRMED, can_cancel, check_transition
from .catalog import GRANULARITY, Service, check_service, require_bookable
from .clock import DAY_NAMES, TimeOfDay, combine, weekday_name
from .errors import (
    BookingError,
    CancellationWindowClosed,
    DateUnavailable,
    InvalidPromo,
    InvalidService,
    InvalidTransition,
    OutsideBusinessHours,
    PersistenceFailure,
    ScheduleError,
    SlotConflict,
)
from .promos import discounted_price, is_usable, normalize_code, validate as validate_promo
from .schedule import (
    DaySchedule,
    TimeInterval,
    WeeklySchedule,
    add_interval,
    default_schedule,
    remove_interval,
    toggle_day,
    update_interval,
)
from .slots import available_slots, filter_conflicts, fits_business_hours, generate_slots, overlaps
