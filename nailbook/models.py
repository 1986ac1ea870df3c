# nailbook/models.py

from typing import Optional
from datetime import datetime, date as Date

from sqlalchemy import UniqueConstraint
from sqlalchemy.types import JSON, DateTime
from sqlmodel import SQLModel, Field, Column


# timestamps are naive local time, stored without an offset
class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str  # admin or client
    display_name: str = ""
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime))


class Setting(SQLModel, table=True):
    # singleton documents: weekly_schedule, policies, contact
    key: str = Field(primary_key=True)
    value: dict = Field(sa_column=Column(JSON))


class BlockedDate(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    date: Date = Field(index=True)
    reason: Optional[str] = None


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str = ""
    duration_minutes: int
    price: float
    active: bool = True


class Appointment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    client_id: int = Field(index=True, foreign_key="user.id")
    client_name: str = ""
    client_email: str = ""
    client_phone: Optional[str] = None

    service_id: int
    service_name: str
    date: Date = Field(index=True)
    start_time: str  # "HH:MM"
    end_time: str
    status: str = "confirmed"

    price: Optional[float] = None
    discount_code: Optional[str] = None
    discount_percent: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime))


class PromoCode(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(index=True, unique=True)  # stored upper-case
    discount_percent: int
    active: bool = True
    usage_limit: int
    usage_count: int = 0


class Review(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("appointment_id", name="uq_review_appointment"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    appointment_id: int = Field(foreign_key="appointment.id")
    client_id: int = Field(index=True)
    client_name: str = ""
    rating: int
    comment: str = ""
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime))


class WaitlistEntry(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(index=True)
    client_name: str = ""
    client_email: str = ""
    date: Date = Field(index=True)
    service_id: Optional[int] = None
    service_name: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime))
