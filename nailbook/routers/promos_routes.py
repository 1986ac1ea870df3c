# nailbook/routers/promos_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nailbook.auth import get_current_user
from nailbook.core import InvalidPromo, discounted_price, normalize_code, validate_promo
from nailbook.core.promos import check_promo_terms
from nailbook.deps import admin_user, get_store
from nailbook.models import PromoCode
from nailbook.schemas import PromoCheck, PromoCreate, PromoPublic, PromoQuote, PromoUpdate
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/promos",
    tags=["promos"],
)


@router.get("", response_model=List[PromoPublic])
def list_promos(
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    return store.list_promos()


@router.post("", response_model=PromoPublic, status_code=201)
def create_promo(
    promo: PromoCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    code = normalize_code(promo.code)
    if not code:
        raise HTTPException(status_code=422, detail="code cannot be blank")
    if store.find_promo(code) is not None:
        raise HTTPException(status_code=409, detail="Promo code already exists")

    record = store.add_promo(PromoCode(
        code=code,
        discount_percent=promo.discount_percent,
        usage_limit=promo.usage_limit,
        usage_count=0,
        active=promo.active,
    ))
    logger.info("Promo %s created (%s%%)", record.code, record.discount_percent)
    return record


@router.patch("/{promo_id}", response_model=PromoPublic)
def update_promo(
    promo_id: int,
    changes: PromoUpdate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    promo = store.get_promo(promo_id)
    if promo is None:
        raise HTTPException(status_code=404, detail="Promo code not found")

    updates = changes.model_dump(exclude_unset=True, exclude_none=True)
    problem = check_promo_terms(
        updates.get("discount_percent", promo.discount_percent),
        updates.get("usage_limit", promo.usage_limit),
        promo.usage_count,
    )
    if problem:
        raise HTTPException(status_code=422, detail=problem)
    return store.update_promo(promo, updates)


@router.delete("/{promo_id}", status_code=204)
def delete_promo(
    promo_id: int,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
):
    if not store.delete_promo(promo_id):
        raise HTTPException(status_code=404, detail="Promo code not found")


@router.post("/validate", response_model=PromoQuote)
def quote_promo(
    check: PromoCheck,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    # read-only preview; usage is only counted when an appointment is booked
    promo = validate_promo(check.code, store.list_promos())
    if promo is None:
        raise InvalidPromo("Promo code is not valid")

    quote = {"code": promo.code, "discount_percent": promo.discount_percent}
    if check.service_id is not None:
        service = store.get_service(check.service_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Service not found")
        quote["original_price"] = service.price
        quote["discounted_price"] = discounted_price(service.price, promo.discount_percent)
    return quote
