# nailbook/stats.py

from collections import Counter
from datetime import date, timedelta
from typing import Iterable

from .core import COMPLETED

TOP_SERVICES = 3


def summarize(appointments: Iterable, today: date) -> dict:
    """Admin dashboard numbers.

    Week is the last 7 days ending today, month is the calendar month of today.
    Revenue only counts completed appointments, using the price stored at booking.
    """
    appointments = list(appointments)
    week_start = today - timedelta(days=6)

    this_week = [a for a in appointments if week_start <= a.date <= today]
    this_month = [
        a for a in appointments if (a.date.year, a.date.month) == (today.year, today.month)
    ]
    revenue = sum(a.price or 0 for a in this_month if a.status == COMPLETED)

    counts = Counter(a.service_name or "Unknown service" for a in appointments)
    top = [{"name": name, "count": count} for name, count in counts.most_common(TOP_SERVICES)]

    return {
        "appointments_this_week": len(this_week),
        "appointments_this_month": len(this_month),
        "revenue_this_month": revenue,
        "top_services": top,
    }
