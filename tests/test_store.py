"""SqlStore against in-memory SQLite."""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine, select

from nailbook.core import (
    AllocationRequest,
    PersistenceFailure,
    SlotConflict,
    TimeOfDay,
    allocate,
    default_schedule,
    toggle_day,
)
from nailbook.models import Appointment, PromoCode, Service, User
from nailbook.store import SqlStore

from conftest import NEXT_MONDAY, NOW


@pytest.fixture
def store(session):
    return SqlStore(session)


@pytest.fixture
def setup(store, session):
    user = User(email="ana@example.com", password_hash="x", role="client", display_name="Ana", phone="555")
    session.add(user)
    session.commit()
    session.refresh(user)
    service = store.add_service(Service(name="Manicure", duration_minutes=60, price=1000))
    return user, service


def test_missing_schedule_falls_back_to_default(store):
    assert store.load_schedule() == default_schedule()


def test_schedule_saved_as_a_whole(store):
    schedule = toggle_day(default_schedule(), "saturday")
    store.save_schedule(schedule)
    assert store.load_schedule() == schedule

    store.save_schedule(default_schedule())
    assert store.load_schedule() == default_schedule()


def test_settings_documents_default_to_empty(store):
    assert store.cancellation_hours() == 0
    assert store.contact_whatsapp() == ""
    store.save_cancellation_hours(24)
    store.save_contact_whatsapp("+5491100000000")
    assert store.cancellation_hours() == 24
    assert store.contact_whatsapp() == "+5491100000000"


def test_blocked_dates(store):
    first = store.add_blocked_date(date(2026, 3, 9), "Holiday")
    store.add_blocked_date(date(2026, 3, 2))
    assert [b.date for b in store.list_blocked_dates()] == [date(2026, 3, 2), date(2026, 3, 9)]
    assert store.remove_blocked_date(first.id)
    assert not store.remove_blocked_date(first.id)
    assert store.blocked_dates() == {date(2026, 3, 2)}


def test_allocation_persists_denormalized_fields(store, setup):
    user, service = setup
    record = allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("08:00")), NOW)

    assert record.id is not None
    assert record.client_name == "Ana"
    assert record.client_email == "ana@example.com"
    assert record.client_phone == "555"
    assert record.start_time == "08:00"
    assert record.end_time == "09:00"
    assert record.service_name == "Manicure"
    assert record.price == 1000
    assert [a.id for a in store.appointments_for_date(NEXT_MONDAY)] == [record.id]


def test_cancelled_excluded_from_date_listing(store, setup):
    user, service = setup
    record = allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("08:00")), NOW)
    store.update_appointment_status(record, "cancelled")
    assert store.appointments_for_date(NEXT_MONDAY) == []
    assert [a.status for a in store.appointments_for_client(user.id)] == ["cancelled"]


def test_conflicting_allocation_writes_nothing(store, setup, session):
    user, service = setup
    allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("09:00")), NOW)
    with pytest.raises(SlotConflict):
        allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("09:30")), NOW)
    assert len(session.exec(select(Appointment)).all()) == 1


def test_promo_lookup_ignores_case(store):
    store.add_promo(PromoCode(code="VERANO25", discount_percent=25, usage_limit=2))
    assert store.find_promo("verano25").code == "VERANO25"
    assert store.find_promo("otro") is None


def test_redeem_stops_at_the_limit(store, session):
    promo = store.add_promo(PromoCode(code="VERANO25", discount_percent=25, usage_limit=2, usage_count=1))
    assert store.redeem_promo(promo.id)
    store.commit()
    assert not store.redeem_promo(promo.id)
    store.commit()
    session.expire_all()
    assert store.get_promo(promo.id).usage_count == 2


def test_redeem_skips_inactive(store):
    promo = store.add_promo(PromoCode(code="OFF", discount_percent=10, usage_limit=5, active=False))
    assert not store.redeem_promo(promo.id)


def test_storage_errors_become_persistence_failures(store, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(store.session, "exec", boom)
    with pytest.raises(PersistenceFailure):
        store.list_services()


@pytest.fixture
def file_engine(tmp_path):
    # two connections need a real file; in-memory databases are per connection
    engine = create_engine(
        f"sqlite:///{tmp_path / 'salon.db'}",
        connect_args={"check_same_thread": False, "timeout": 0.1},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_concurrent_bookings_cannot_both_take_a_slot(file_engine):
    with Session(file_engine) as seed:
        ana = User(email="ana@example.com", password_hash="x", role="client")
        bea = User(email="bea@example.com", password_hash="x", role="client")
        service = Service(name="Manicure", duration_minutes=60, price=1000)
        seed.add_all([ana, bea, service])
        seed.commit()
        ana_id, bea_id, service_id = ana.id, bea.id, service.id

    nine = TimeOfDay.parse("09:00")
    with Session(file_engine) as first, Session(file_engine) as second:
        store_a, store_b = SqlStore(first), SqlStore(second)

        # A is between its re-check and its insert
        store_a.lock_bookings()
        assert store_a.appointments_for_date(NEXT_MONDAY) == []

        with pytest.raises(PersistenceFailure):
            allocate(store_b, AllocationRequest(bea_id, service_id, NEXT_MONDAY, nine), NOW)

        allocate(store_a, AllocationRequest(ana_id, service_id, NEXT_MONDAY, nine), NOW)

        with pytest.raises(SlotConflict):
            allocate(store_b, AllocationRequest(bea_id, service_id, NEXT_MONDAY, nine), NOW)

    with Session(file_engine) as check:
        booked = check.exec(select(Appointment).where(Appointment.status == "confirmed")).all()
        assert [a.client_id for a in booked] == [ana_id]


def test_lock_is_reentrant_within_a_booking(store, setup):
    user, service = setup
    store.lock_bookings()
    record = allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("08:00")), NOW)
    assert record.id is not None


def test_timestamps_are_stored_naive(store, setup):
    user, service = setup
    record = allocate(store, AllocationRequest(user.id, service.id, NEXT_MONDAY, TimeOfDay.parse("08:00")), NOW)
    store.session.expire_all()
    assert store.get_appointment(record.id).created_at == NOW
    assert store.get_appointment(record.id).created_at.tzinfo is None
    assert user.created_at.tzinfo is None
