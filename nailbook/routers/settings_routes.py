# nailbook/routers/settings_routes.py

import logging

from fastapi import APIRouter, Depends

from nailbook.deps import admin_user, get_store
from nailbook.schemas import ContactSettings, PolicySettings
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


@router.get("/policies", response_model=PolicySettings)
def get_policies(store: SqlStore = Depends(get_store)):
    return {"cancellation_hours": store.cancellation_hours()}


@router.put("/policies", response_model=PolicySettings)
def save_policies(
    policies: PolicySettings,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    store.save_cancellation_hours(policies.cancellation_hours)
    logger.info("Cancellation window set to %s hours", policies.cancellation_hours)
    return policies


@router.get("/contact", response_model=ContactSettings)
def get_contact(store: SqlStore = Depends(get_store)):
    return {"whatsapp": store.contact_whatsapp()}


@router.put("/contact", response_model=ContactSettings)
def save_contact(
    contact: ContactSettings,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    store.save_contact_whatsapp(contact.whatsapp.strip())
    return {"whatsapp": store.contact_whatsapp()}
