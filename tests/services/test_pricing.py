from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from event_service.services.pricing import (
    catering_unit_price,
    compute_event_prices,
    rental_days_between,
)
from shared.db.models import CateringService

START = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "base, discount, expected_final",
    [
        (Decimal("1000"), Decimal("0"), Decimal("1000.00")),
        (Decimal("1000"), Decimal("250.50"), Decimal("749.50")),
        (Decimal("1000"), Decimal("1500"), Decimal("0.00")),
        (None, None, Decimal("0.00")),
    ],
)
def test_compute_event_prices(base, discount, expected_final):
    total, final = compute_event_prices(base, discount)

    assert total == (base or Decimal("0"))
    assert final == expected_final
    assert final >= 0


@pytest.mark.parametrize(
    "duration, expected_days",
    [
        (timedelta(days=1), 1),
        (timedelta(days=3), 3),
        (timedelta(days=2, hours=1), 3),
        (timedelta(hours=5), 1),
    ],
)
def test_rental_days_round_partial_days_up(duration, expected_days):
    assert rental_days_between(START, START + duration) == expected_days


def test_rental_days_accept_naive_datetimes():
    naive_start = START.replace(tzinfo=None)

    assert rental_days_between(naive_start, START + timedelta(days=2)) == 2


def test_catering_unit_price_prefers_per_person_price():
    service = CateringService(
        name="Buffet",
        base_price=Decimal("500"),
        price_per_person=Decimal("25"),
    )

    assert catering_unit_price(service) == Decimal("25.00")


def test_catering_unit_price_falls_back_to_base_price():
    service = CateringService(name="Cake", base_price=Decimal("500"))

    assert catering_unit_price(service) == Decimal("500.00")
