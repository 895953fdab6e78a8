"""Quantity x unit price models: per instance, per hour, per calendar date."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ..utils.numbers import ONE, format_number, plural
from ..utils.timeutil import local_date, resolve_timezone
from .base import BaseChargeModel, money, single_line_result
from .types import PER_DATE, PER_HOUR, PER_INSTANCE, BreakdownLine, CalculationInput, CalculationResult, Service
from .usage import CalendarUsage, UnitUsage, UsageReader


class PerInstanceChargeModel(BaseChargeModel):
    """Diagnostics, procedures, consultations: price x count."""

    billing_type = PER_INSTANCE

    def parse_usage(self, calc_input: CalculationInput) -> UnitUsage:
        reader = UsageReader()
        qty = reader.amount("quantity", calc_input.quantity, default=ONE)
        reader.finish()
        return UnitUsage(quantity=qty)

    def calculate(self, service: Service, usage: UnitUsage, *, now: datetime) -> CalculationResult:
        qty = usage.quantity
        line = BreakdownLine.of(
            service.price, qty, f"{service.name} ({format_number(qty)} {plural('instance', qty)})"
        )
        return single_line_result(
            line,
            f"Per instance billing: {money(service.price)} × {format_number(qty)} = {money(line.subtotal)}",
        )


class PerHourChargeModel(BaseChargeModel):
    """Oxygen, monitors and similar: price x hours."""

    billing_type = PER_HOUR

    def parse_usage(self, calc_input: CalculationInput) -> UnitUsage:
        reader = UsageReader()
        params = calc_input.custom_parameters or {}
        if params.get("hours") not in (None, ""):
            hours = reader.amount("hours", params.get("hours"), default=ONE)
        else:
            hours = reader.amount("quantity", calc_input.quantity, default=ONE)
        reader.finish()
        return UnitUsage(quantity=hours)

    def calculate(self, service: Service, usage: UnitUsage, *, now: datetime) -> CalculationResult:
        hours = usage.quantity
        unit = plural("hour", hours)
        line = BreakdownLine.of(service.price, hours, f"{service.name} ({format_number(hours)} {unit})")
        return single_line_result(
            line,
            f"Hourly rate: {money(service.price)} × {format_number(hours)} {unit} = {money(line.subtotal)}",
        )


def calendar_days(start: datetime, end: datetime, timezone: str) -> Decimal:
    """Inclusive count of local calendar dates touched by [start, end], at least 1."""
    tz = resolve_timezone(timezone)
    days = (local_date(end, tz) - local_date(start, tz)).days + 1
    return Decimal(max(1, days))


class PerDateChargeModel(BaseChargeModel):
    """Per calendar date.

    With a start timestamp the billed quantity is the number of calendar dates
    the stay touches in the input's timezone (a 23:00 -> 01:00 stay is 2 dates).
    Without one it is the supplied quantity.
    """

    billing_type = PER_DATE

    def parse_usage(self, calc_input: CalculationInput) -> CalendarUsage:
        reader = UsageReader()
        qty = reader.amount("quantity", calc_input.quantity, default=ONE)
        start = reader.timestamp("start", calc_input.start)
        end = reader.timestamp("end", calc_input.end)
        tz = reader.timezone("timezone", calc_input.timezone)
        reader.finish()
        return CalendarUsage(quantity=qty, start=start, end=end, timezone=tz)

    def calculate(self, service: Service, usage: CalendarUsage, *, now: datetime) -> CalculationResult:
        suffix = ""
        if usage.start is not None:
            qty = calendar_days(usage.start, usage.end or now, usage.timezone)
            suffix = f" ({usage.timezone} time)"
        else:
            qty = usage.quantity

        line = BreakdownLine.of(
            service.price, qty, f"{service.name} ({format_number(qty)} calendar {plural('day', qty)})"
        )
        return single_line_result(
            line,
            f"Per calendar date: {money(service.price)} × {format_number(qty)} {plural('day', qty)}"
            f" = {money(line.subtotal)}{suffix}",
        )
