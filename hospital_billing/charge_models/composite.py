"""Composite billing: fixed base charge plus measured variable charges.

The service's ``billing_parameters`` is a JSON object. Two shapes are accepted:

- legacy: ``{"fixedCharge": 1500, "perKmRate": 25}`` -> a required
  "Base Charge" and a required "Distance" (km) component;
- explicit: ``{"components": [{"label": ..., "pricingType": "fixed"|"variable",
  "amount": ..., "unit": ..., "required": ..., "defaultSelected": ...}, ...]}``.

A corrupt payload never fails billing; it is logged and read as ``{}``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from ..utils.numbers import ONE, ZERO, as_decimal, format_number
from .base import BaseChargeModel, money
from .types import COMPOSITE, BreakdownLine, CalculationInput, CalculationResult, Service
from .usage import ComponentValues, CompositeUsage, UsageReader

_LOGGER = logging.getLogger(__name__)

FIXED = "fixed"
VARIABLE = "variable"


@dataclass(frozen=True)
class Component:
    label: str
    pricing_type: str
    amount: Decimal
    unit: Optional[str] = None
    required: bool = True
    default_selected: bool = True


def parse_billing_parameters(raw: Any, *, service_id: str = "") -> Dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        data = json.loads(raw, parse_float=Decimal)
    except (TypeError, ValueError) as ex:
        _LOGGER.warning("Ignoring malformed billing parameters for service %r: %s", service_id, ex)
        return {}
    if not isinstance(data, dict):
        _LOGGER.warning("Ignoring billing parameters for service %r: expected a JSON object", service_id)
        return {}
    return data


def _config_amount(value: Any) -> Decimal:
    # Configuration values are read leniently: anything unusable is 0.
    if value is None or value == "":
        return ZERO
    try:
        d = as_decimal(value)
    except ValueError:
        _LOGGER.warning("Ignoring non-numeric component amount %r", value)
        return ZERO
    if d < 0:
        _LOGGER.warning("Ignoring negative component amount %r", value)
        return ZERO
    return d


def _first_present(obj: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if obj.get(k) is not None:
            return obj[k]
    return None


def build_components(service: Service, params: Mapping[str, Any]) -> List[Component]:
    declared = params.get("components")
    if isinstance(declared, list):
        out: List[Component] = []
        for i, c in enumerate(declared):
            if not isinstance(c, Mapping):
                _LOGGER.warning("Skipping component %d of service %r: not an object", i, service.id)
                continue
            required = c.get("required") is True
            default_selected = c.get("defaultSelected")
            out.append(
                Component(
                    label=str(c.get("label") or ""),
                    pricing_type=str(c.get("pricingType") or c.get("type") or FIXED).strip().lower(),
                    amount=_config_amount(_first_present(c, "amount", "rate")),
                    unit=c.get("unit") or None,
                    required=required,
                    default_selected=required if default_selected is None else bool(default_selected),
                )
            )
        return out

    fixed = _first_present(params, "fixedCharge")
    return [
        Component(
            label="Base Charge",
            pricing_type=FIXED,
            amount=_config_amount(fixed if fixed is not None else service.price),
        ),
        Component(
            label="Distance",
            pricing_type=VARIABLE,
            amount=_config_amount(_first_present(params, "perKmRate")),
            unit="km",
        ),
    ]


def lookup(values: ComponentValues, index: int, label: str) -> Any:
    """Find a per-component value by list position, index key, or label."""
    if isinstance(values, (list, tuple)):
        return values[index] if index < len(values) else None
    if not isinstance(values, Mapping):
        return None
    for key in (index, str(index)):
        if values.get(key) is not None:
            return values[key]
    if label and values.get(label) is not None:
        return values[label]
    return None


class CompositeChargeModel(BaseChargeModel):
    """Ambulance-style pricing: base fee + rate x measured quantity."""

    billing_type = COMPOSITE

    def parse_usage(self, calc_input: CalculationInput) -> CompositeUsage:
        params = calc_input.custom_parameters or {}
        reader = UsageReader()
        distance = reader.amount("distance", params.get("distance"), default=ZERO)
        quantities = self._amounts(reader, "quantities", params.get("quantities"))
        overrides = self._amounts(
            reader,
            "componentOverrides",
            _first_present(params, "componentOverrides", "overrideAmounts"),
        )
        selections = reader.mapping(
            "selectedComponents",
            _first_present(params, "selectedComponents", "componentSelections"),
        )
        reader.finish()
        return CompositeUsage(distance=distance, quantities=quantities, selections=selections, overrides=overrides)

    @staticmethod
    def _amounts(reader: UsageReader, key: str, raw: Any) -> ComponentValues:
        values = reader.mapping(key, raw)
        if isinstance(values, Mapping):
            return {k: reader.amount(f"{key}[{k}]", v, default=None) for k, v in values.items()}
        return [reader.amount(f"{key}[{i}]", v, default=None) for i, v in enumerate(values)]

    def calculate(self, service: Service, usage: CompositeUsage, *, now: datetime) -> CalculationResult:
        params = parse_billing_parameters(service.billing_parameters, service_id=service.id)
        components = build_components(service, params)

        breakdown: List[BreakdownLine] = []
        distance_used = False
        for i, c in enumerate(components):
            selected = lookup(usage.selections, i, c.label)
            if not (c.required or (bool(selected) if selected is not None else c.default_selected)):
                continue

            amount = c.amount
            if amount == ZERO:
                amount = lookup(usage.overrides, i, c.label) or ZERO

            if c.pricing_type == VARIABLE:
                qty = lookup(usage.quantities, i, c.label) or ZERO
                if qty == ZERO and not distance_used:
                    qty = usage.distance
                    distance_used = True
                if qty == ZERO:
                    continue
                label = c.label or "Variable"
                desc = f"{label} ({format_number(qty)} {c.unit})" if c.unit else f"{label} ({format_number(qty)})"
                breakdown.append(BreakdownLine.of(amount, qty, desc))
            elif c.pricing_type == FIXED:
                breakdown.append(BreakdownLine.of(amount, ONE, f"{service.name} - {c.label or 'Fixed'}"))
            else:
                _LOGGER.warning("Skipping component %r of service %r: unknown pricing type %r", c.label, service.id, c.pricing_type)

        total = sum((line.subtotal for line in breakdown), ZERO)
        details = " + ".join(f"{line.description}: {money(line.subtotal)}" for line in breakdown)
        return CalculationResult(
            total_amount=total,
            billing_quantity=ONE,
            breakdown=tuple(breakdown),
            billing_details=f"{details} = {money(total)}" if details else money(total),
        )
