import math
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from shared.db.models import CateringService
from shared.utils.data_utils import ZERO, to_money
from shared.utils.timezone_utils import ensure_utc

SECONDS_PER_DAY = 24 * 60 * 60


def compute_event_prices(
    base_price: Optional[Decimal], discount_amount: Optional[Decimal]
) -> Tuple[Decimal, Decimal]:
    """
    Return ``(total_price, final_price)`` for an event.

    The final price never goes below zero however large the discount.
    """
    total = to_money(base_price)
    final = max(ZERO, total - to_money(discount_amount))
    return total, to_money(final)


def catering_unit_price(service: CateringService) -> Decimal:
    if service.price_per_person is not None:
        return to_money(service.price_per_person)
    return to_money(service.base_price)


def rental_days_between(start: datetime, end: datetime) -> int:
    """Whole days billed for a rental; a partial day counts as a full one."""
    delta = ensure_utc(end) - ensure_utc(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
