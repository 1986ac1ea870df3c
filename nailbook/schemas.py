# nailbook/schemas.py

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime, date as Date
from typing import Dict, List, Optional

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$|^24:00$"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    admin = "admin"
    client = "client"


class AppointmentStatus(str, Enum):
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class UserPublic(BaseModel):
    id: int
    email: str
    role: UserRole
    display_name: str = ""
    phone: Optional[str] = None


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    display_name: str = ""
    phone: Optional[str] = None


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    phone: Optional[str] = None


# --- schedule ---

class IntervalSchema(BaseModel):
    start: str = Field(pattern=HHMM)
    end: str = Field(pattern=HHMM)


class DayScheduleSchema(BaseModel):
    enabled: bool
    intervals: List[IntervalSchema] = []


class WeeklyScheduleSchema(BaseModel):
    days: Dict[str, DayScheduleSchema]


class BlockedDateCreate(BaseModel):
    date: Date
    reason: Optional[str] = None


class BlockedDatePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: Date
    reason: Optional[str] = None


class AvailableDatesResponse(BaseModel):
    dates: List[Date]


class AvailabilityResponse(BaseModel):
    date: Date
    service_id: int
    duration_minutes: int
    available_starts: List[str]


# --- services ---

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    duration_minutes: int
    price: float
    active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    price: Optional[float] = None
    active: Optional[bool] = None


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    duration_minutes: int
    price: float
    active: bool


# --- appointments ---

class AppointmentCreate(BaseModel):
    service_id: int
    date: Date
    start_time: str = Field(pattern=HHMM)
    promo_code: Optional[str] = None


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    client_name: str
    client_email: str
    service_id: int
    service_name: str
    date: Date
    start_time: str
    end_time: str
    status: AppointmentStatus
    price: Optional[float] = None
    discount_code: Optional[str] = None
    discount_percent: Optional[int] = None
    created_at: datetime


class ClientAppointment(AppointmentPublic):
    can_cancel: bool = False


# --- promo codes ---

class PromoCreate(BaseModel):
    code: str = Field(min_length=1)
    discount_percent: int = Field(ge=1, le=100)
    usage_limit: int = Field(ge=1)
    active: bool = True


class PromoUpdate(BaseModel):
    discount_percent: Optional[int] = Field(default=None, ge=1, le=100)
    usage_limit: Optional[int] = Field(default=None, ge=1)
    active: Optional[bool] = None


class PromoPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    discount_percent: int
    active: bool
    usage_limit: int
    usage_count: int


class PromoCheck(BaseModel):
    code: str
    service_id: Optional[int] = None


class PromoQuote(BaseModel):
    code: str
    discount_percent: int
    original_price: Optional[float] = None
    discounted_price: Optional[int] = None


# --- settings ---

class PolicySettings(BaseModel):
    cancellation_hours: int = Field(ge=0)


class ContactSettings(BaseModel):
    whatsapp: str = ""


# --- reviews / waitlist ---

class ReviewCreate(BaseModel):
    appointment_id: int
    rating: int = Field(ge=1, le=5)
    comment: str = ""


class ReviewPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    appointment_id: int
    client_name: str
    rating: int
    comment: str
    created_at: datetime


class WaitlistCreate(BaseModel):
    date: Date
    service_id: Optional[int] = None


class WaitlistPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    client_name: str
    client_email: str
    date: Date
    service_id: Optional[int] = None
    service_name: Optional[str] = None
    created_at: datetime


# --- stats ---

class ServiceCount(BaseModel):
    name: str
    count: int


class StatsResponse(BaseModel):
    appointments_this_week: int
    appointments_this_month: int
    revenue_this_month: float
    top_services: List[ServiceCount]
