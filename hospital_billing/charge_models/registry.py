from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .base import ChargeModel
from .composite import CompositeChargeModel
from .declarative import load_definitions, normalize_tag
from .duration import Per24HoursChargeModel
from .per_unit import PerDateChargeModel, PerHourChargeModel, PerInstanceChargeModel
from .types import PER_INSTANCE
from .variable import VariableChargeModel


@dataclass
class ChargeModelRegistry:
    """Lookup table for charge models by canonical billing-model tag."""

    models: Dict[str, ChargeModel] = field(default_factory=dict)  # canonical tag -> model
    aliases: Dict[str, str] = field(default_factory=dict)  # normalized spelling -> canonical tag
    fallback: str = PER_INSTANCE

    def register(self, billing_type: str, model: ChargeModel) -> None:
        self.models[billing_type] = model

    def register_alias(self, alias: str, billing_type: str) -> None:
        self.aliases[normalize_tag(alias)] = billing_type

    def resolve(self, tag: Any) -> Optional[str]:
        """Canonical tag for ``tag``, or None if nothing matches."""
        if tag is None or str(tag).strip() == "":
            return None
        key = normalize_tag(tag)
        if key in self.models:
            return key
        canonical = self.aliases.get(key)
        if canonical in self.models:
            return canonical
        return None

    def get(self, tag: Any) -> Optional[ChargeModel]:
        canonical = self.resolve(tag)
        if canonical is None:
            return None
        return self.models[canonical]

    def fallback_model(self) -> ChargeModel:
        return self.models[self.fallback]


def build_default_registry(definitions_dir: Path | None = None) -> ChargeModelRegistry:
    """Registry with every built-in billing model plus the declarative aliases."""

    reg = ChargeModelRegistry()
    for model in (
        PerInstanceChargeModel(),
        Per24HoursChargeModel(),
        PerHourChargeModel(),
        CompositeChargeModel(),
        VariableChargeModel(),
        PerDateChargeModel(),
    ):
        reg.register(model.billing_type, model)

    for d in load_definitions(definitions_dir):
        for canonical, spellings in d.aliases.items():
            for s in spellings:
                reg.register_alias(s, canonical)
    return reg
