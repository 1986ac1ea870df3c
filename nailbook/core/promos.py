# nailbook/core/promos.py

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional


def normalize_code(code: str) -> str:
    return code.strip().upper()


def is_usable(promo) -> bool:
    return bool(promo.active) and promo.usage_count < promo.usage_limit


def validate(code: str, promos: Iterable):
    """Return the usable promo matching `code` (case-insensitive), or None."""
    wanted = code.strip().lower()
    if not wanted:
        return None
    for promo in promos:
        if promo.code.lower() == wanted and is_usable(promo):
            return promo
    return None


def check_promo_terms(discount_percent: int, usage_limit: int, usage_count: int = 0) -> Optional[str]:
    if not (1 <= discount_percent <= 100):
        return "discount_percent must be between 1 and 100"
    if usage_limit < 1:
        return "usage_limit must be at least 1"
    if usage_count < 0 or usage_count > usage_limit:
        return "usage_count must be between 0 and usage_limit"
    return None


def discounted_price(price, discount_percent: int) -> int:
    # round half up, not banker's rounding
    raw = Decimal(str(price)) * (100 - discount_percent) / 100
    return int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
