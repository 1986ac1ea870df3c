# nailbook/routers/services_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nailbook.core import check_service
from nailbook.deps import admin_user, get_store
from nailbook.models import Service
from nailbook.schemas import ServiceCreate, ServicePublic, ServiceUpdate
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(store: SqlStore = Depends(get_store)):
    return store.list_services(active_only=True)


@router.get("/all", response_model=List[ServicePublic])
def list_all_services(
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    return store.list_services()


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    check_service(service.duration_minutes, service.price)
    record = store.add_service(Service(**service.model_dump()))
    logger.info("Service %s created (%s min)", record.name, record.duration_minutes)
    return record


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    changes: ServiceUpdate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    service = store.get_service(service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")

    updates = changes.model_dump(exclude_unset=True, exclude_none=True)
    check_service(
        updates.get("duration_minutes", service.duration_minutes),
        updates.get("price", service.price),
    )
    # booked appointments keep their own price snapshot
    return store.update_service(service, updates)


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    if not store.delete_service(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
