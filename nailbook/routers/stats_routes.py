# nailbook/routers/stats_routes.py

from datetime import datetime

from fastapi import APIRouter, Depends

from nailbook.deps import admin_user, get_now, get_store
from nailbook.schemas import StatsResponse
from nailbook.stats import summarize
from nailbook.store import SqlStore

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
)


@router.get("", response_model=StatsResponse)
def get_stats(
    store: SqlStore = Depends(get_store),
    current_user: dict = Depends(admin_user),
    now: datetime = Depends(get_now),
):
    return summarize(store.all_appointments(), now.date())
