"""Entry points of the billing rule engine.

``calculate_billing`` picks a charge model from the service's billing-model tag
and lets it price the usage. ``calculate_room_billing`` prices an admission's
stay directly. Both are pure apart from the optional ``now`` default.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from .charge_models.base import ChargeModel
from .charge_models.declarative import normalize_tag
from .charge_models.registry import ChargeModelRegistry, build_default_registry
from .charge_models.room import calculate_admission_room_billing, calculate_room_billing
from .charge_models.types import CalculationInput, CalculationResult, InputIssue
from .utils.timeutil import parse_timestamp, utc_now

_LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def default_registry() -> ChargeModelRegistry:
    return build_default_registry()


def _model_for(calc_input: CalculationInput, registry: Optional[ChargeModelRegistry], *, warn: bool) -> ChargeModel:
    reg = registry or default_registry()
    tag = calc_input.service.billing_type
    model = reg.get(tag)
    if model is not None:
        if warn and normalize_tag(tag) != model.billing_type:
            _LOGGER.info(
                "Billing type %r on service %r resolved to %s through the alias table",
                tag,
                calc_input.service.id,
                model.billing_type,
            )
        return model
    # Never fail billing on a bad catalog entry, but make it visible.
    if warn:
        _LOGGER.warning(
            "Unknown billing type %r on service %r (%s); falling back to %s",
            tag,
            calc_input.service.id,
            calc_input.service.name,
            reg.fallback,
        )
    return reg.fallback_model()


def calculate_billing(
    calc_input: CalculationInput,
    *,
    now: Optional[datetime] = None,
    registry: Optional[ChargeModelRegistry] = None,
) -> CalculationResult:
    """Price one usage of a service.

    ``now`` closes open-ended time spans (no end timestamp). Pass it explicitly
    for reproducible results; otherwise the current UTC time is read once.

    Raises BillingInputError when the usage facts themselves are unusable
    (negative quantities, unparseable timestamps). Unknown billing types and
    corrupt service parameters never raise.
    """
    model = _model_for(calc_input, registry, warn=True)
    usage = model.parse_usage(calc_input)
    instant = parse_timestamp(now) if now is not None else utc_now()
    result = model.calculate(calc_input.service, usage, now=instant)
    _LOGGER.debug(
        "Billed service %r via %s: %s x %s = %s",
        calc_input.service.id,
        model.billing_type,
        calc_input.service.price,
        result.billing_quantity,
        result.total_amount,
    )
    return result


def validate_input(calc_input: CalculationInput, *, registry: Optional[ChargeModelRegistry] = None) -> List[InputIssue]:
    """Problems ``calculate_billing`` would raise for, without raising."""
    return _model_for(calc_input, registry, warn=False).validate(calc_input)


__all__ = [
    "calculate_billing",
    "calculate_room_billing",
    "calculate_admission_room_billing",
    "validate_input",
    "default_registry",
]
