# nailbook/core/catalog.py

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidService

GRANULARITY = 30  # minutes between candidate start times


@dataclass(frozen=True)
class Service:
    id: Optional[int]
    name: str
    duration_minutes: int
    price: float
    description: str = ""
    active: bool = True


def check_service(duration_minutes: int, price: float) -> None:
    if duration_minutes <= 0:
        raise InvalidService("duration_minutes must be positive")
    if duration_minutes % GRANULARITY != 0:
        raise InvalidService(f"duration_minutes must be a multiple of {GRANULARITY}")
    if price < 0:
        raise InvalidService("price cannot be negative")


def require_bookable(service: Optional[Service]) -> Service:
    if service is None:
        raise InvalidService("Service not found")
    if not service.active:
        raise InvalidService("Service is not available")
    return service
