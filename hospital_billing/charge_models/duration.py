"""Per-24-hours billing (wards, rooms, ICU beds)."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from ..utils.numbers import ONE, format_number, plural
from .base import BaseChargeModel, money, single_line_result
from .types import PER_24_HOURS, BreakdownLine, CalculationInput, CalculationResult, Service
from .usage import DurationUsage, UsageReader

_DAY = timedelta(days=1)
_TICK = timedelta(microseconds=1)


def billed_days(start: datetime, end: datetime) -> Decimal:
    """``max(1, ceil((end - start) / 24h))`` on aware instants.

    Any started 24-hour period is billed in full: 23h -> 1, 24h -> 1, 25h -> 2.
    End before start still bills the minimum single day.
    """
    elapsed = (end - start) // _TICK
    per_day = _DAY // _TICK
    days = -(-elapsed // per_day)
    return Decimal(max(1, days))


def day_rate_result(rate: Decimal, days: Decimal, description: str) -> CalculationResult:
    unit = plural("day", days)
    line = BreakdownLine.of(rate, days, f"{description} ({format_number(days)} {unit})")
    return single_line_result(
        line, f"Daily rate: {money(rate)} × {format_number(days)} {unit} = {money(line.subtotal)}"
    )


class Per24HoursChargeModel(BaseChargeModel):
    billing_type = PER_24_HOURS

    def parse_usage(self, calc_input: CalculationInput) -> DurationUsage:
        reader = UsageReader()
        start = reader.timestamp("start", calc_input.start)
        end = reader.timestamp("end", calc_input.end)
        reader.finish()
        return DurationUsage(start=start, end=end)

    def calculate(self, service: Service, usage: DurationUsage, *, now: datetime) -> CalculationResult:
        if usage.start is None:
            # Incomplete input bills a single day.
            return day_rate_result(service.price, ONE, service.name)
        return day_rate_result(service.price, billed_days(usage.start, usage.end or now), service.name)
