"""Hospital billing rule engine: prices service usage and admission room stays."""

from .charge_models.types import (
    Admission,
    BillingInputError,
    BreakdownLine,
    CalculationInput,
    CalculationResult,
    InputIssue,
    Service,
)
from .engine import (
    calculate_admission_room_billing,
    calculate_billing,
    calculate_room_billing,
    validate_input,
)

__all__ = [
    "calculate_billing",
    "calculate_room_billing",
    "calculate_admission_room_billing",
    "validate_input",
    "Admission",
    "BillingInputError",
    "BreakdownLine",
    "CalculationInput",
    "CalculationResult",
    "InputIssue",
    "Service",
]
