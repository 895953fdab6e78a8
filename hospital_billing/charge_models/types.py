from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..config import DEFAULT_TIMEZONE
from ..utils.numbers import ONE, ZERO, as_decimal, format_number

# Canonical billing-model tags as stored on service records.
PER_INSTANCE = "per_instance"
PER_24_HOURS = "per_24_hours"
PER_HOUR = "per_hour"
COMPOSITE = "composite"
VARIABLE = "variable"
PER_DATE = "per_date"

BILLING_TYPES = (PER_INSTANCE, PER_24_HOURS, PER_HOUR, COMPOSITE, VARIABLE, PER_DATE)


@dataclass(frozen=True)
class InputIssue:
    key: str
    issue: str  # "invalid" | "negative"
    message: str


class BillingInputError(ValueError):
    """Raised when usage facts cannot be billed (negative amounts, bad timestamps...)."""

    def __init__(self, issues: List[InputIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(i.message for i in self.issues) or "Invalid billing input")


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in record and record[k] is not None:
            return record[k]
    return None


@dataclass(frozen=True)
class Service:
    """A chargeable service as supplied by the caller's catalog (read-only here)."""

    id: str
    name: str
    price: Decimal = ZERO
    billing_type: Optional[str] = PER_INSTANCE
    billing_parameters: Optional[str] = None  # serialized JSON, composite only

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", as_decimal(self.price))

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Service":
        price = _pick(record, "price", "unit_price", "unitPrice")
        return cls(
            id=str(_pick(record, "id") or ""),
            name=str(_pick(record, "name") or ""),
            price=as_decimal(price) if price is not None else ZERO,
            billing_type=_pick(record, "billing_type", "billingType"),
            billing_parameters=_pick(record, "billing_parameters", "billingParameters"),
        )


@dataclass(frozen=True)
class Admission:
    """Admission episode record; only the fields room billing needs."""

    admission_id: str
    admission_date: Union[str, datetime]
    discharge_date: Optional[Union[str, datetime]] = None
    daily_cost: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "daily_cost", as_decimal(self.daily_cost))

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Admission":
        cost = _pick(record, "daily_cost", "dailyCost")
        return cls(
            admission_id=str(_pick(record, "admission_id", "admissionId", "id") or ""),
            admission_date=_pick(record, "admission_date", "admissionDate"),
            discharge_date=_pick(record, "discharge_date", "dischargeDate"),
            daily_cost=as_decimal(cost) if cost is not None else ZERO,
        )


@dataclass(frozen=True)
class CalculationInput:
    service: Service
    quantity: Any = ONE
    start: Optional[Union[str, datetime]] = None
    end: Optional[Union[str, datetime]] = None
    custom_parameters: Mapping[str, Any] = field(default_factory=dict)
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "CalculationInput":
        """Build from the caller's plain request body (snake_case or camelCase)."""
        service = record.get("service") or {}
        quantity = _pick(record, "quantity")
        return cls(
            service=service if isinstance(service, Service) else Service.from_dict(service),
            quantity=ONE if quantity is None else quantity,
            start=_pick(record, "start", "startDateTime", "start_date_time"),
            end=_pick(record, "end", "endDateTime", "end_date_time"),
            custom_parameters=dict(_pick(record, "custom_parameters", "customParameters") or {}),
            timezone=str(_pick(record, "timezone") or DEFAULT_TIMEZONE),
        )


@dataclass(frozen=True)
class BreakdownLine:
    unit_price: Decimal
    quantity: Decimal
    subtotal: Decimal
    description: str

    @classmethod
    def of(cls, unit_price: Decimal, quantity: Decimal, description: str) -> "BreakdownLine":
        return cls(unit_price=unit_price, quantity=quantity, subtotal=unit_price * quantity, description=description)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unitPrice": format_number(self.unit_price),
            "quantity": format_number(self.quantity),
            "subtotal": format_number(self.subtotal),
            "description": self.description,
        }


@dataclass(frozen=True)
class CalculationResult:
    total_amount: Decimal
    billing_quantity: Decimal
    breakdown: Tuple[BreakdownLine, ...]
    billing_details: str

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for the caller's bill / service-usage record."""
        return {
            "totalAmount": format_number(self.total_amount),
            "billingQuantity": format_number(self.billing_quantity),
            "breakdown": [line.to_dict() for line in self.breakdown],
            "billingDetails": self.billing_details,
        }
