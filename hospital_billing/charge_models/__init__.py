from .base import BaseChargeModel, ChargeModel
from .composite import CompositeChargeModel
from .declarative import AliasDefinition, load_definitions
from .duration import Per24HoursChargeModel, billed_days
from .per_unit import PerDateChargeModel, PerHourChargeModel, PerInstanceChargeModel
from .registry import ChargeModelRegistry, build_default_registry
from .room import calculate_admission_room_billing, calculate_room_billing
from .types import (
    BILLING_TYPES,
    Admission,
    BillingInputError,
    BreakdownLine,
    CalculationInput,
    CalculationResult,
    InputIssue,
    Service,
)
from .variable import VariableChargeModel

__all__ = [
    "BaseChargeModel",
    "ChargeModel",
    "ChargeModelRegistry",
    "build_default_registry",
    "AliasDefinition",
    "load_definitions",
    "PerInstanceChargeModel",
    "PerHourChargeModel",
    "PerDateChargeModel",
    "Per24HoursChargeModel",
    "CompositeChargeModel",
    "VariableChargeModel",
    "billed_days",
    "calculate_room_billing",
    "calculate_admission_room_billing",
    "BILLING_TYPES",
    "Admission",
    "BillingInputError",
    "BreakdownLine",
    "CalculationInput",
    "CalculationResult",
    "InputIssue",
    "Service",
]
