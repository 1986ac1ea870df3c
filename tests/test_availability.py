"""Bookable date selection."""

from datetime import date, timedelta

from nailbook.core import available_dates, default_schedule, is_date_open, toggle_day

from conftest import NEXT_MONDAY, NOW, monday_only

TODAY = NOW.date()  # Wednesday


def test_today_is_never_offered():
    schedule = default_schedule()
    dates = available_dates(schedule, set(), TODAY)
    assert TODAY not in dates
    assert dates[0] == TODAY + timedelta(days=1)


def test_only_enabled_weekdays_in_order():
    dates = available_dates(default_schedule(), set(), TODAY, target=10)
    assert len(dates) == 10
    assert all(d.weekday() < 5 for d in dates)
    assert dates == sorted(dates)


def test_blocked_monday_is_excluded():
    schedule = monday_only(("08:00", "12:00"))
    dates = available_dates(schedule, {NEXT_MONDAY}, TODAY)
    assert NEXT_MONDAY not in dates
    assert dates[0] == NEXT_MONDAY + timedelta(days=7)
    assert not is_date_open(schedule, {NEXT_MONDAY}, NEXT_MONDAY)


def test_horizon_cuts_the_list_short():
    schedule = monday_only(("08:00", "12:00"))
    dates = available_dates(schedule, set(), TODAY, horizon_days=60, target=30)
    # only Mondays inside the next 60 days
    assert len(dates) == 8
    assert dates[-1] <= TODAY + timedelta(days=60)


def test_horizon_end_is_inclusive():
    schedule = monday_only(("08:00", "12:00"))
    dates = available_dates(schedule, set(), TODAY, horizon_days=5)
    assert dates == [NEXT_MONDAY]


def test_target_stops_early():
    dates = available_dates(default_schedule(), set(), TODAY, target=3)
    assert dates == [date(2026, 3, 5), date(2026, 3, 6), date(2026, 3, 9)]


def test_same_inputs_same_answer():
    schedule = toggle_day(default_schedule(), "saturday")
    blocked = {date(2026, 3, 20), date(2026, 4, 1)}
    assert available_dates(schedule, blocked, TODAY) == available_dates(schedule, blocked, TODAY)


def test_everything_closed():
    schedule = default_schedule()
    for name in ("monday", "tuesday", "wednesday", "thursday", "friday"):
        schedule = toggle_day(schedule, name)
    assert available_dates(schedule, set(), TODAY) == []
