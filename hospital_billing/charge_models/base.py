from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Protocol

from ..config import CURRENCY_SYMBOL
from ..utils.numbers import format_number
from .types import BillingInputError, BreakdownLine, CalculationInput, CalculationResult, InputIssue, Service
from .usage import Usage


class ChargeModel(Protocol):
    """A pricing policy for one billing-model tag."""

    billing_type: str

    def parse_usage(self, calc_input: CalculationInput) -> Usage: ...

    def validate(self, calc_input: CalculationInput) -> List[InputIssue]: ...

    def calculate(self, service: Service, usage: Usage, *, now: datetime) -> CalculationResult: ...


class BaseChargeModel:
    """Default helpers shared by the concrete charge models."""

    billing_type: str = "other"

    def parse_usage(self, calc_input: CalculationInput) -> Usage:
        raise NotImplementedError

    def validate(self, calc_input: CalculationInput) -> List[InputIssue]:
        try:
            self.parse_usage(calc_input)
        except BillingInputError as ex:
            return ex.issues
        return []

    def calculate(self, service: Service, usage: Usage, *, now: datetime) -> CalculationResult:
        raise NotImplementedError


def money(value: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{format_number(value)}"


def single_line_result(line: BreakdownLine, details: str) -> CalculationResult:
    return CalculationResult(
        total_amount=line.subtotal,
        billing_quantity=line.quantity,
        breakdown=(line,),
        billing_details=details,
    )
