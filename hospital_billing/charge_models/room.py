"""Room charges computed straight from an admission record.

Uses the same ``billed_days`` as the per-24-hours model so that a ward modeled
as a service and a ward billed from the admission never disagree.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..utils.numbers import ZERO
from ..utils.timeutil import Timestamp, parse_timestamp, utc_now
from .duration import billed_days, day_rate_result
from .types import Admission, CalculationResult, InputIssue
from .usage import UsageReader

_LOGGER = logging.getLogger(__name__)


def calculate_room_billing(
    daily_rate: Any,
    admission_date: Timestamp,
    discharge_date: Optional[Timestamp] = None,
    *,
    now: Optional[datetime] = None,
) -> CalculationResult:
    """Bill ``daily_rate`` for every started 24 hours since admission.

    An open admission (no discharge date) is billed up to ``now``.
    Raises BillingInputError for a negative rate or unparseable dates.
    """
    reader = UsageReader()
    rate = reader.amount("daily_rate", daily_rate, default=ZERO)
    start = reader.timestamp("admission_date", admission_date)
    end = reader.timestamp("discharge_date", discharge_date)
    if start is None and not reader.issues:
        reader.issues.append(
            InputIssue(key="admission_date", issue="invalid", message="admission_date is required for room billing")
        )
    reader.finish()

    if end is None:
        end = parse_timestamp(now) if now is not None else utc_now()
        _LOGGER.debug("Open admission billed up to %s", end.isoformat())
    return day_rate_result(rate, billed_days(start, end), "Room charges")


def calculate_admission_room_billing(admission: Admission, *, now: Optional[datetime] = None) -> CalculationResult:
    return calculate_room_billing(
        admission.daily_cost,
        admission.admission_date,
        admission.discharge_date,
        now=now,
    )


__all__ = ["calculate_room_billing", "calculate_admission_room_billing"]
