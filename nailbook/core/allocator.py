# nailbook/core/allocator.py

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Protocol

from .availability import is_date_open
from .cancellation import CONFIRMED
from .catalog import require_bookable
from .clock import TimeOfDay
from .errors import DateUnavailable, InvalidPromo, OutsideBusinessHours, SlotConflict
from .promos import discounted_price, is_usable
from .schedule import WeeklySchedule
from .slots import filter_conflicts, fits_business_hours

logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    def get_service(self, service_id): ...
    def load_schedule(self) -> WeeklySchedule: ...
    def blocked_dates(self) -> set: ...
    def appointments_for_date(self, day: date) -> Iterable: ...
    def find_promo(self, code: str): ...
    def redeem_promo(self, promo_id) -> bool: ...
    def add_appointment(self, booking: "Booking"): ...
    def lock_bookings(self) -> None: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


@dataclass(frozen=True)
class AllocationRequest:
    client_id: int
    service_id: int
    date: date
    start_time: TimeOfDay
    promo_code: Optional[str] = None


@dataclass(frozen=True)
class Booking:
    client_id: int
    service_id: int
    service_name: str
    date: date
    start_time: TimeOfDay
    end_time: TimeOfDay
    status: str
    price: float
    created_at: datetime
    discount_code: Optional[str] = None
    discount_percent: Optional[int] = None


def allocate(store: BookingStore, request: AllocationRequest, now: datetime):
    """Validate a booking request from scratch and persist it.

    Checks run in a fixed order and the first failure wins. Nothing is
    committed unless every check passes.
    """
    try:
        record = _allocate(store, request, now)
        store.commit()
    except Exception:
        store.rollback()
        raise
    logger.info(
        "Booked %s for client %s on %s at %s",
        record.service_name, request.client_id, request.date, request.start_time,
    )
    return record


def _allocate(store: BookingStore, request: AllocationRequest, now: datetime):
    # everything below reads and writes under the booking lock
    store.lock_bookings()

    # 1) Service
    service = require_bookable(store.get_service(request.service_id))
    duration = service.duration_minutes

    # 2) Day open and in the future
    schedule = store.load_schedule()
    if request.date <= now.date():
        raise DateUnavailable("Appointments can only be booked from tomorrow on")
    if not is_date_open(schedule, store.blocked_dates(), request.date):
        raise DateUnavailable(f"{request.date} is not open for bookings")

    # 3) Inside one open interval
    start = TimeOfDay.coerce(request.start_time)
    if start.minutes + duration > 24 * 60:
        raise OutsideBusinessHours("Appointment must end before midnight")
    if not fits_business_hours(schedule.for_date(request.date), start, duration):
        raise OutsideBusinessHours("Appointment must be within working hours")

    # 4) Fresh conflict check, never the list used for display
    existing = store.appointments_for_date(request.date)
    if not filter_conflicts([start], duration, existing):
        logger.warning("Slot %s on %s already taken", start, request.date)
        raise SlotConflict("Appointment overlaps an existing appointment")

    # 5) Promo
    price = service.price
    discount_code = None
    discount_percent = None
    if request.promo_code:
        promo = store.find_promo(request.promo_code)
        if promo is None or not is_usable(promo) or not store.redeem_promo(promo.id):
            logger.warning("Rejected promo code %r", request.promo_code)
            raise InvalidPromo("Promo code is not valid")
        price = discounted_price(service.price, promo.discount_percent)
        discount_code = promo.code
        discount_percent = promo.discount_percent

    booking = Booking(
        client_id=request.client_id,
        service_id=service.id,
        service_name=service.name,
        date=request.date,
        start_time=start,
        end_time=start + duration,
        status=CONFIRMED,
        price=price,
        created_at=now,
        discount_code=discount_code,
        discount_percent=discount_percent,
    )
    return store.add_appointment(booking)
