# nailbook/routers/reviews_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError

from nailbook.auth import get_current_user
from nailbook.core import COMPLETED, PersistenceFailure
from nailbook.deps import get_store
from nailbook.models import Review
from nailbook.schemas import ReviewCreate, ReviewPublic
from nailbook.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"],
)


@router.get("", response_model=List[ReviewPublic])
def list_reviews(store: SqlStore = Depends(get_store)):
    return store.list_reviews()


@router.post("", response_model=ReviewPublic, status_code=201)
def create_review(
    review: ReviewCreate,
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(get_current_user),
):
    # 1) Only the client's own, completed appointments
    appt = store.get_appointment(review.appointment_id)
    if appt is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    if appt.client_id != current_user["id"]:
        raise HTTPException(status_code=403, detail="Forbidden")
    if appt.status != COMPLETED:
        raise HTTPException(status_code=409, detail="Only completed appointments can be reviewed")

    # 2) One review per appointment
    if store.review_for_appointment(appt.id) is not None:
        raise HTTPException(status_code=409, detail="Appointment already reviewed")

    try:
        record = store.add_review(Review(
            appointment_id=appt.id,
            client_id=current_user["id"],
            client_name=current_user["display_name"],
            rating=review.rating,
            comment=review.comment.strip(),
        ))
    except PersistenceFailure as exc:
        if isinstance(exc.__cause__, IntegrityError):
            raise HTTPException(status_code=409, detail="Appointment already reviewed")
        raise

    logger.info("Review %s stars for appointment %s", record.rating, appt.id)
    return record
