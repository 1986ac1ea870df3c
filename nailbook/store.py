# nailbook/store.py

import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .core import (
    CANCELLED,
    Booking,
    PersistenceFailure,
    WeeklySchedule,
    default_schedule,
)
from .models import (
    Appointment,
    BlockedDate,
    PromoCode,
    Review,
    Service,
    Setting,
    User,
    WaitlistEntry,
)

logger = logging.getLogger(__name__)

SCHEDULE_KEY = "weekly_schedule"
POLICIES_KEY = "policies"
CONTACT_KEY = "contact"
BOOKING_LOCK_KEY = "booking_lock"


class SqlStore:
    """Persistence for the booking core on top of one SQLModel session.

    Every storage failure surfaces as PersistenceFailure; nothing is retried here.
    """

    def __init__(self, session: Session):
        self.session = session
        self._pending = []

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Storage failure while trying to %s", action)
            self.session.rollback()
            raise PersistenceFailure(f"Could not {action}") from exc

    def commit(self) -> None:
        with self._guard("commit"):
            self.session.commit()
            for obj in self._pending:
                self.session.refresh(obj)
        self._pending = []

    def rollback(self) -> None:
        self._pending = []
        self.session.rollback()

    def lock_bookings(self) -> None:
        """Hold the write lock until the next commit or rollback.

        Taken before the conflict re-check so no other booking can land
        between that read and the insert.
        """
        with self._guard("lock bookings"):
            conn = self.session.connection()
            if conn.dialect.name == "sqlite":
                # pysqlite defers BEGIN to the first write; take the lock now
                if not conn.connection.dbapi_connection.in_transaction:
                    conn.exec_driver_sql("BEGIN IMMEDIATE")
                return
            if self.session.get(Setting, BOOKING_LOCK_KEY) is None:
                self.session.add(Setting(key=BOOKING_LOCK_KEY, value={}))
                self.session.commit()
            stmt = select(Setting).where(Setting.key == BOOKING_LOCK_KEY).with_for_update()
            self.session.exec(stmt).one()

    def _save(self, obj, action: str):
        with self._guard(action):
            self.session.add(obj)
            self.session.commit()
            self.session.refresh(obj)
        return obj

    def _delete(self, model, obj_id, action: str) -> bool:
        with self._guard(action):
            obj = self.session.get(model, obj_id)
            if obj is None:
                return False
            self.session.delete(obj)
            self.session.commit()
        return True

    # --- settings documents ---
    def _load_document(self, key: str) -> Optional[dict]:
        with self._guard(f"load {key}"):
            row = self.session.get(Setting, key)
        return None if row is None else row.value

    def _save_document(self, key: str, value: dict) -> None:
        with self._guard(f"save {key}"):
            row = self.session.get(Setting, key)
            if row is None:
                self.session.add(Setting(key=key, value=value))
            else:
                row.value = value
                self.session.add(row)
            self.session.commit()

    def load_schedule(self) -> WeeklySchedule:
        doc = self._load_document(SCHEDULE_KEY)
        if doc is None:
            return default_schedule()
        return WeeklySchedule.from_document(doc)

    def save_schedule(self, schedule: WeeklySchedule) -> None:
        self._save_document(SCHEDULE_KEY, schedule.to_document())

    def cancellation_hours(self) -> int:
        doc = self._load_document(POLICIES_KEY) or {}
        return int(doc.get("cancellation_hours") or 0)

    def save_cancellation_hours(self, hours: int) -> None:
        self._save_document(POLICIES_KEY, {"cancellation_hours": hours})

    def contact_whatsapp(self) -> str:
        doc = self._load_document(CONTACT_KEY) or {}
        return doc.get("whatsapp") or ""

    def save_contact_whatsapp(self, whatsapp: str) -> None:
        self._save_document(CONTACT_KEY, {"whatsapp": whatsapp})

    # --- blocked dates ---
    def list_blocked_dates(self) -> List[BlockedDate]:
        with self._guard("load blocked dates"):
            return list(self.session.exec(select(BlockedDate).order_by(BlockedDate.date)).all())

    def blocked_dates(self) -> set:
        return {b.date for b in self.list_blocked_dates()}

    def add_blocked_date(self, day: date, reason: Optional[str] = None) -> BlockedDate:
        return self._save(BlockedDate(date=day, reason=reason), "add blocked date")

    def remove_blocked_date(self, blocked_id: int) -> bool:
        return self._delete(BlockedDate, blocked_id, "remove blocked date")

    # --- services ---
    def list_services(self, active_only: bool = False) -> List[Service]:
        stmt = select(Service).order_by(Service.name)
        if active_only:
            stmt = stmt.where(Service.active == True)  # noqa: E712
        with self._guard("load services"):
            return list(self.session.exec(stmt).all())

    def get_service(self, service_id: int) -> Optional[Service]:
        with self._guard("load service"):
            return self.session.get(Service, service_id)

    def add_service(self, service: Service) -> Service:
        return self._save(service, "add service")

    def update_service(self, service: Service, changes: dict) -> Service:
        for key, value in changes.items():
            setattr(service, key, value)
        return self._save(service, "update service")

    def delete_service(self, service_id: int) -> bool:
        return self._delete(Service, service_id, "delete service")

    # --- appointments ---
    def appointments_for_date(self, day: date) -> List[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.date == day)
            .where(Appointment.status != CANCELLED)
            .order_by(Appointment.start_time)
        )
        with self._guard("load appointments"):
            return list(self.session.exec(stmt).all())

    def appointments_for_client(self, client_id: int) -> List[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.client_id == client_id)
            .order_by(Appointment.date.desc(), Appointment.start_time.desc())
        )
        with self._guard("load appointments"):
            return list(self.session.exec(stmt).all())

    def all_appointments(self, status: Optional[str] = None) -> List[Appointment]:
        stmt = select(Appointment).order_by(Appointment.date.desc(), Appointment.start_time)
        if status is not None:
            stmt = stmt.where(Appointment.status == status)
        with self._guard("load appointments"):
            return list(self.session.exec(stmt).all())

    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        with self._guard("load appointment"):
            return self.session.get(Appointment, appointment_id)

    def add_appointment(self, booking: Booking) -> Appointment:
        # not committed here; the allocator commits once every check has passed
        with self._guard("create appointment"):
            client = self.session.get(User, booking.client_id)
            record = Appointment(
                client_id=booking.client_id,
                client_name=client.display_name if client else "",
                client_email=client.email if client else "",
                client_phone=client.phone if client else None,
                service_id=booking.service_id,
                service_name=booking.service_name,
                date=booking.date,
                start_time=booking.start_time.hhmm,
                end_time=booking.end_time.hhmm,
                status=booking.status,
                price=booking.price,
                discount_code=booking.discount_code,
                discount_percent=booking.discount_percent,
                created_at=booking.created_at,
            )
            self.session.add(record)
            self.session.flush()
        self._pending.append(record)
        return record

    def update_appointment_status(self, appointment: Appointment, status: str) -> Appointment:
        appointment.status = status
        return self._save(appointment, "update appointment")

    # --- promo codes ---
    def list_promos(self) -> List[PromoCode]:
        with self._guard("load promo codes"):
            return list(self.session.exec(select(PromoCode).order_by(PromoCode.code)).all())

    def find_promo(self, code: str) -> Optional[PromoCode]:
        stmt = select(PromoCode).where(func.lower(PromoCode.code) == code.strip().lower())
        with self._guard("load promo code"):
            return self.session.exec(stmt).first()

    def get_promo(self, promo_id: int) -> Optional[PromoCode]:
        with self._guard("load promo code"):
            return self.session.get(PromoCode, promo_id)

    def add_promo(self, promo: PromoCode) -> PromoCode:
        return self._save(promo, "add promo code")

    def update_promo(self, promo: PromoCode, changes: dict) -> PromoCode:
        for key, value in changes.items():
            setattr(promo, key, value)
        return self._save(promo, "update promo code")

    def delete_promo(self, promo_id: int) -> bool:
        return self._delete(PromoCode, promo_id, "delete promo code")

    def redeem_promo(self, promo_id: int) -> bool:
        # conditional increment; losing a race to the last use returns False
        stmt = (
            update(PromoCode)
            .where(PromoCode.id == promo_id)
            .where(PromoCode.active == True)  # noqa: E712
            .where(PromoCode.usage_count < PromoCode.usage_limit)
            .values(usage_count=PromoCode.usage_count + 1)
            .execution_options(synchronize_session=False)
        )
        with self._guard("redeem promo code"):
            result = self.session.execute(stmt)
        redeemed = result.rowcount == 1
        if redeemed:
            logger.info("Redeemed promo code id=%s", promo_id)
        return redeemed

    # --- reviews ---
    def list_reviews(self) -> List[Review]:
        with self._guard("load reviews"):
            return list(self.session.exec(select(Review).order_by(Review.created_at.desc())).all())

    def review_for_appointment(self, appointment_id: int) -> Optional[Review]:
        stmt = select(Review).where(Review.appointment_id == appointment_id)
        with self._guard("load review"):
            return self.session.exec(stmt).first()

    def reviews_for_client(self, client_id: int) -> List[Review]:
        with self._guard("load reviews"):
            return list(self.session.exec(select(Review).where(Review.client_id == client_id)).all())

    def add_review(self, review: Review) -> Review:
        return self._save(review, "add review")

    # --- waitlist ---
    def waitlist_for_date(self, day: date) -> List[WaitlistEntry]:
        stmt = select(WaitlistEntry).where(WaitlistEntry.date == day).order_by(WaitlistEntry.created_at)
        with self._guard("load waitlist"):
            return list(self.session.exec(stmt).all())

    def waitlist_for_client(self, client_id: int) -> List[WaitlistEntry]:
        stmt = select(WaitlistEntry).where(WaitlistEntry.client_id == client_id).order_by(WaitlistEntry.date)
        with self._guard("load waitlist"):
            return list(self.session.exec(stmt).all())

    def get_waitlist_entry(self, entry_id: int) -> Optional[WaitlistEntry]:
        with self._guard("load waitlist entry"):
            return self.session.get(WaitlistEntry, entry_id)

    def add_waitlist_entry(self, entry: WaitlistEntry) -> WaitlistEntry:
        return self._save(entry, "join waitlist")

    def remove_waitlist_entry(self, entry_id: int) -> bool:
        return self._delete(WaitlistEntry, entry_id, "leave waitlist")
