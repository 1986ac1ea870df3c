# nailbook/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import get_settings
from .core import BookingError
from .db import create_db_and_tables
from .routers import (
    appointments_routes,
    auth_routes,
    promos_routes,
    reviews_routes,
    schedule_routes,
    services_routes,
    settings_routes,
    stats_routes,
    users_routes,
    waitlist_routes,
)

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="nailbook", lifespan=lifespan)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(schedule_routes.router)
app.include_router(services_routes.router)
app.include_router(appointments_routes.router)
app.include_router(promos_routes.router)
app.include_router(settings_routes.router)
app.include_router(reviews_routes.router)
app.include_router(waitlist_routes.router)
app.include_router(stats_routes.router)
