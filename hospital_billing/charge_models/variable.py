from __future__ import annotations

from datetime import datetime

from ..utils.numbers import ONE, ZERO
from .base import BaseChargeModel, money, single_line_result
from .types import VARIABLE, BreakdownLine, CalculationInput, CalculationResult, Service
from .usage import UsageReader, VariableUsage


class VariableChargeModel(BaseChargeModel):
    """Price decided at the point of use (negotiated or ad-hoc charges)."""

    billing_type = VARIABLE

    def parse_usage(self, calc_input: CalculationInput) -> VariableUsage:
        reader = UsageReader()
        price = reader.amount("price", (calc_input.custom_parameters or {}).get("price"), default=None)
        reader.finish()
        return VariableUsage(price=price)

    def calculate(self, service: Service, usage: VariableUsage, *, now: datetime) -> CalculationResult:
        # First non-zero wins: override, then list price, then nothing.
        price = usage.price or service.price or ZERO
        line = BreakdownLine.of(price, ONE, f"{service.name} (Variable pricing)")
        return single_line_result(line, f"Variable price: {money(price)}")
