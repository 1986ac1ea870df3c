# nailbook/routers/appointments_routes.py

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from nailbook.auth import get_current_user
from nailbook.core import (
    CANCELLED,
    COMPLETED,
    CONFIRMED,
    AllocationRequest,
    CancellationWindowClosed,
    TimeOfDay,
    allocate,
    can_cancel,
    check_transition,
    combine,
)
from nailbook.deps import admin_user, get_now, get_store
from nailbook.schemas import AppointmentCreate, AppointmentPublic, ClientAppointment
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["appointments"],
)


@router.post("/appointments", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    request = AllocationRequest(
        client_id=current_user["id"],
        service_id=appt.service_id,
        date=appt.date,
        start_time=TimeOfDay.parse(appt.start_time),
        promo_code=(appt.promo_code or "").strip() or None,
    )
    # every check is re-run against fresh data here; the slot list may be stale
    return allocate(store, request, now)


@router.get("/clients/me/appointments", response_model=List[ClientAppointment])
def list_my_appointments(
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    lead_hours = store.cancellation_hours()
    result = []
    for a in store.appointments_for_client(current_user["id"]):
        item = ClientAppointment.model_validate(a, from_attributes=True)
        upcoming = combine(a.date, TimeOfDay.parse(a.start_time)) > now
        item.can_cancel = a.status == CONFIRMED and upcoming and can_cancel(
            a.date, a.start_time, now, lead_hours
        )
        result.append(item)
    return result


@router.get("/appointments", response_model=List[AppointmentPublic])
def list_appointments(
    status: Optional[str] = "all",
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    if status not in ("confirmed", "completed", "cancelled", "all"):
        raise HTTPException(
            status_code=422,
            detail="status must be 'confirmed', 'completed', 'cancelled', or 'all'",
        )
    return store.all_appointments(None if status == "all" else status)


@router.patch("/appointments/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel_appointment(
    appt_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    # 1) Find the appointment
    target = store.get_appointment(appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    # 2) Authorization: client who booked OR admin
    is_admin = current_user["role"] == "admin"
    if not is_admin and current_user["id"] != target.client_id:
        raise HTTPException(status_code=403, detail="Forbidden")

    # 3) Only confirmed appointments move, and clients only within policy
    check_transition(target.status, CANCELLED)
    if not is_admin:
        if combine(target.date, TimeOfDay.parse(target.start_time)) <= now:
            raise CancellationWindowClosed("Past appointments cannot be cancelled")
        lead_hours = store.cancellation_hours()
        if not can_cancel(target.date, target.start_time, now, lead_hours):
            raise CancellationWindowClosed(
                f"Appointments must be cancelled at least {lead_hours} hours in advance"
            )

    # 4) Cancel and persist
    record = store.update_appointment_status(target, CANCELLED)
    logger.info("Appointment %s cancelled by %s", appt_id, current_user["email"])
    return record


@router.patch("/appointments/{appt_id}/complete", response_model=AppointmentPublic)
def complete_appointment(
    appt_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    target = store.get_appointment(appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    check_transition(target.status, COMPLETED)
    record = store.update_appointment_status(target, COMPLETED)
    logger.info("Appointment %s completed", appt_id)
    return record
