"""Typed usage records, one per billing model.

CalculationInput carries an open ``custom_parameters`` mapping because that is
what callers have at hand. Each charge model turns it into exactly one of the
records below in ``parse_usage``; nothing past that boundary reads the raw map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..config import DEFAULT_TIMEZONE
from ..utils.numbers import ZERO, as_decimal
from ..utils.timeutil import parse_timestamp, resolve_timezone
from .types import BillingInputError, InputIssue

# Per-component lookups may be keyed by list position or by component label.
ComponentValues = Union[Sequence[Any], Mapping[Any, Any]]


@dataclass(frozen=True)
class UnitUsage:
    quantity: Decimal


@dataclass(frozen=True)
class DurationUsage:
    start: Optional[datetime]
    end: Optional[datetime]


@dataclass(frozen=True)
class CalendarUsage:
    quantity: Decimal
    start: Optional[datetime]
    end: Optional[datetime]
    timezone: str


@dataclass(frozen=True)
class CompositeUsage:
    distance: Decimal = ZERO
    quantities: ComponentValues = field(default_factory=dict)
    selections: ComponentValues = field(default_factory=dict)
    overrides: ComponentValues = field(default_factory=dict)


@dataclass(frozen=True)
class VariableUsage:
    price: Optional[Decimal] = None


Usage = Union[UnitUsage, DurationUsage, CalendarUsage, CompositeUsage, VariableUsage]


class UsageReader:
    """Collects every problem in one pass, then raises them together."""

    def __init__(self) -> None:
        self.issues: List[InputIssue] = []

    def amount(self, key: str, value: Any, *, default: Optional[Decimal]) -> Optional[Decimal]:
        if value is None or value == "":
            return default
        try:
            d = as_decimal(value)
        except ValueError as ex:
            self.issues.append(InputIssue(key=key, issue="invalid", message=f"{key}: {ex}"))
            return default
        if d < 0:
            self.issues.append(InputIssue(key=key, issue="negative", message=f"{key} must not be negative (got {value!r})"))
            return default
        return d

    def timestamp(self, key: str, value: Any) -> Optional[datetime]:
        if value is None or value == "":
            return None
        try:
            return parse_timestamp(value)
        except ValueError as ex:
            self.issues.append(InputIssue(key=key, issue="invalid", message=f"{key}: {ex}"))
            return None

    def timezone(self, key: str, value: Optional[str]) -> str:
        if not value:
            return DEFAULT_TIMEZONE
        try:
            resolve_timezone(value)
        except ValueError as ex:
            self.issues.append(InputIssue(key=key, issue="invalid", message=f"{key}: {ex}"))
        return value

    def mapping(self, key: str, value: Any) -> ComponentValues:
        if value is None:
            return {}
        if isinstance(value, (Mapping, list, tuple)):
            return value
        self.issues.append(InputIssue(key=key, issue="invalid", message=f"{key} must be a list or an object"))
        return {}

    def finish(self) -> None:
        if self.issues:
            raise BillingInputError(self.issues)


__all__ = [
    "UnitUsage",
    "DurationUsage",
    "CalendarUsage",
    "CompositeUsage",
    "VariableUsage",
    "Usage",
    "UsageReader",
    "ComponentValues",
]
