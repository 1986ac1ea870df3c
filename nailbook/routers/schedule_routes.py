# nailbook/routers/schedule_routes.py

import logging
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nailbook.config import get_settings
from nailbook.core import WeeklySchedule, available_dates, available_slots, require_bookable
from nailbook.deps import admin_user, get_now, get_store
from nailbook.schemas import (
    AvailabilityResponse,
    AvailableDatesResponse,
    BlockedDateCreate,
    BlockedDatePublic,
    WeeklyScheduleSchema,
)
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["schedule"],
)


@router.get("/schedule", response_model=WeeklyScheduleSchema)
def get_schedule(store: SqlStore = Depends(get_store)):
    return {"days": store.load_schedule().to_document()}


@router.put("/schedule", response_model=WeeklyScheduleSchema)
def save_schedule(
    schedule: WeeklyScheduleSchema,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    # ScheduleError (missing day, start >= end) maps to 422
    weekly = WeeklySchedule.from_document(schedule.model_dump()["days"])
    store.save_schedule(weekly)
    logger.info("Weekly schedule updated by %s", current_user["email"])
    return {"days": weekly.to_document()}


@router.get("/blocked-dates", response_model=List[BlockedDatePublic])
def list_blocked_dates(store: SqlStore = Depends(get_store)):
    return store.list_blocked_dates()


@router.post("/blocked-dates", response_model=BlockedDatePublic, status_code=201)
def add_blocked_date(
    blocked: BlockedDateCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    if blocked.date in store.blocked_dates():
        raise HTTPException(status_code=409, detail="Date already blocked")
    record = store.add_blocked_date(blocked.date, blocked.reason or None)
    logger.info("Blocked %s (%s)", record.date, record.reason or "no reason")
    return record


@router.delete("/blocked-dates/{blocked_id}", status_code=204)
def remove_blocked_date(
    blocked_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    if not store.remove_blocked_date(blocked_id):
        raise HTTPException(status_code=404, detail="Blocked date not found")


@router.get("/availability/dates", response_model=AvailableDatesResponse)
def bookable_dates(
    store: SqlStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    settings = get_settings()
    dates = available_dates(
        store.load_schedule(),
        store.blocked_dates(),
        now.date(),
        horizon_days=settings.booking_horizon_days,
        target=settings.booking_target_dates,
    )
    return {"dates": dates}


@router.get("/availability/slots", response_model=AvailabilityResponse)
def bookable_slots(
    date: date,
    service_id: int,
    store: SqlStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    # 1) Service must be bookable
    service = require_bookable(store.get_service(service_id))

    # 2) Closed, blocked or past dates have no slots
    schedule = store.load_schedule()
    starts = []
    if date > now.date() and date not in store.blocked_dates():
        # 3) Generate, then drop anything overlapping a live appointment
        existing = store.appointments_for_date(date)
        starts = available_slots(schedule, date, service.duration_minutes, existing)

    return {
        "date": date,
        "service_id": service.id,
        "duration_minutes": service.duration_minutes,
        "available_starts": [s.hhmm for s in starts],
    }
