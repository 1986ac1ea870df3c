# nailbook/routers/waitlist_routes.py

import logging
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nailbook.auth import get_current_user
from nailbook.deps import admin_user, get_now, get_store
from nailbook.models import WaitlistEntry
from nailbook.schemas import WaitlistCreate, WaitlistPublic
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["waitlist"],
)


@router.post("/waitlist", response_model=WaitlistPublic, status_code=201)
def join_waitlist(
    entry: WaitlistCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    if entry.date <= now.date():
        raise HTTPException(status_code=422, detail="Waitlist is only for future dates")

    service_name = None
    if entry.service_id is not None:
        service = store.get_service(entry.service_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Service not found")
        service_name = service.name

    for existing in store.waitlist_for_client(current_user["id"]):
        if existing.date == entry.date and existing.service_id == entry.service_id:
            raise HTTPException(status_code=409, detail="Already on the waitlist for that date")

    record = store.add_waitlist_entry(WaitlistEntry(
        client_id=current_user["id"],
        client_name=current_user["display_name"],
        client_email=current_user["email"],
        date=entry.date,
        service_id=entry.service_id,
        service_name=service_name,
    ))
    logger.info("%s joined the waitlist for %s", current_user["email"], entry.date)
    return record


@router.get("/waitlist", response_model=List[WaitlistPublic])
def waitlist_for_date(
    date: date,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    return store.waitlist_for_date(date)


@router.get("/clients/me/waitlist", response_model=List[WaitlistPublic])
def my_waitlist(
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    return store.waitlist_for_client(current_user["id"])


@router.delete("/waitlist/{entry_id}", status_code=204)
def leave_waitlist(
    entry_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    entry = store.get_waitlist_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Waitlist entry not found")
    if current_user["role"] != "admin" and entry.client_id != current_user["id"]:
        raise HTTPException(status_code=403, detail="Forbidden")
    store.remove_waitlist_entry(entry_id)
