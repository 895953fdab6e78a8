from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hospital_billing import (
    Admission,
    BillingInputError,
    calculate_admission_room_billing,
    calculate_billing,
    calculate_room_billing,
)
from hospital_billing.charge_models.duration import billed_days
from helpers import NOW, service, usage

START = datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "hours, expected",
    [(0, 1), (1, 1), (23, 1), (24, 1), (24.001, 2), (25, 2), (48, 2), (49, 3), (72, 3), (73, 4)],
)
def test_billed_days_is_ceiling_with_floor_of_one(hours, expected):
    assert billed_days(START, START + timedelta(hours=hours)) == Decimal(expected)


def test_billed_days_end_before_start_bills_one_day():
    assert billed_days(START, START - timedelta(hours=5)) == Decimal("1")


def test_billed_days_ignores_dst_shift():
    # Europe/London springs forward on 2025-03-30: local midnight to midnight is 23h.
    start = datetime(2025, 3, 30, 0, 0, tzinfo=timezone.utc)
    end = datetime.fromisoformat("2025-03-31T00:00:00+01:00")
    assert billed_days(start, end) == Decimal("1")


def test_per_24_hours_bills_started_days():
    svc = service("per_24_hours", price="2000", name="General Ward")
    result = calculate_billing(
        usage(svc, start="2025-01-01T10:00:00Z", end="2025-01-02T11:00:00Z"), now=NOW
    )

    assert result.billing_quantity == Decimal("2")
    assert result.total_amount == Decimal("4000")
    assert result.breakdown[0].description == "General Ward (2 days)"
    assert result.billing_details == "Daily rate: ₹2000 × 2 days = ₹4000"


def test_per_24_hours_without_start_bills_one_day():
    svc = service("per_24_hours", price="1800", name="ICU Bed")
    result = calculate_billing(usage(svc, end="2025-01-05T10:00:00Z"), now=NOW)

    assert result.billing_quantity == Decimal("1")
    assert result.total_amount == Decimal("1800")
    assert result.breakdown[0].description == "ICU Bed (1 day)"


def test_per_24_hours_open_span_uses_injected_now():
    svc = service("per_24_hours", price="1000")
    # 2025-01-08T12:00Z -> NOW (2025-01-10T12:00Z) is exactly 48h
    result = calculate_billing(usage(svc, start="2025-01-08T12:00:00Z"), now=NOW)
    assert result.billing_quantity == Decimal("2")

    later = calculate_billing(usage(svc, start="2025-01-08T12:00:00Z"), now=NOW + timedelta(minutes=1))
    assert later.billing_quantity == Decimal("3")


def test_naive_timestamps_are_read_as_utc():
    svc = service("per_24_hours", price="1000")
    naive = calculate_billing(usage(svc, start="2025-01-01T10:00:00", end="2025-01-02T11:00:00"), now=NOW)
    aware = calculate_billing(usage(svc, start="2025-01-01T10:00:00Z", end="2025-01-02T11:00:00Z"), now=NOW)
    assert naive == aware


def test_offset_timestamps_are_normalized():
    svc = service("per_24_hours", price="1000")
    # 23h apart once both are in UTC
    result = calculate_billing(
        usage(svc, start="2025-01-01T15:30:00+05:30", end="2025-01-02T09:00:00Z"), now=NOW
    )
    assert result.billing_quantity == Decimal("1")


def test_unparseable_timestamp_is_rejected():
    svc = service("per_24_hours")
    with pytest.raises(BillingInputError, match="Invalid ISO-8601 timestamp"):
        calculate_billing(usage(svc, start="yesterday"), now=NOW)


def test_room_billing_under_a_day():
    result = calculate_room_billing(2000, "2025-01-01T10:00:00Z", "2025-01-02T09:00:00Z")

    assert result.billing_quantity == Decimal("1")
    assert result.total_amount == Decimal("2000")
    assert result.breakdown[0].description == "Room charges (1 day)"


def test_room_billing_25_hours_is_two_days():
    result = calculate_room_billing(2000, "2025-01-01T10:00:00Z", "2025-01-02T11:00:00Z")

    assert result.billing_quantity == Decimal("2")
    assert result.total_amount == Decimal("4000")
    assert result.breakdown[0].description == "Room charges (2 days)"
    assert result.billing_details == "Daily rate: ₹2000 × 2 days = ₹4000"


def test_room_billing_open_admission_runs_to_now():
    result = calculate_room_billing("1500", "2025-01-07T12:00:00Z", now=NOW)
    assert result.billing_quantity == Decimal("3")
    assert result.total_amount == Decimal("4500")


def test_room_billing_from_admission_record():
    admission = Admission.from_dict(
        {"admissionId": "ADM-001", "admissionDate": "2025-01-01T10:00:00Z", "dailyCost": 2000}
    )
    result = calculate_admission_room_billing(admission, now=NOW)

    # 9 days 2 hours -> 10 started days
    assert result.billing_quantity == Decimal("10")
    assert result.total_amount == Decimal("20000")


def test_room_billing_requires_admission_date():
    with pytest.raises(BillingInputError, match="admission_date is required"):
        calculate_room_billing(1000, None)


def test_room_billing_rejects_negative_rate():
    with pytest.raises(BillingInputError, match="daily_rate must not be negative"):
        calculate_room_billing(-5, "2025-01-01T10:00:00Z", "2025-01-02T09:00:00Z")


@pytest.mark.parametrize(
    "start, end",
    [
        ("2025-01-01T10:00:00Z", "2025-01-02T09:00:00Z"),
        ("2025-01-01T10:00:00Z", "2025-01-02T10:00:00Z"),
        ("2025-01-01T10:00:00Z", "2025-01-02T11:00:00Z"),
        ("2025-01-01T10:00:00Z", "2025-01-15T10:00:01Z"),
        ("2025-03-29T22:00:00+00:00", "2025-03-31T08:00:00+01:00"),
        ("2025-01-03T10:00:00Z", "2025-01-01T10:00:00Z"),
        ("2025-01-08T00:00:00Z", None),
    ],
)
@pytest.mark.parametrize("rate", ["0", "750", "2499.99"])
def test_room_billing_matches_per_24_hours_service(start, end, rate):
    via_service = calculate_billing(
        usage(service("per_24_hours", price=rate), start=start, end=end), now=NOW
    )
    via_admission = calculate_room_billing(rate, start, end, now=NOW)

    assert via_admission.total_amount == via_service.total_amount
    assert via_admission.billing_quantity == via_service.billing_quantity
