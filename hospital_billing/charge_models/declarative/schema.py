"""Declarative alias-table schema.

Lets a deployment teach the dispatcher new spellings of billing-model tags
without touching Python.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class AliasDefinition:
    id: str
    aliases: Dict[str, List[str]] = field(default_factory=dict)  # canonical tag -> spellings
    description: str = ""
    source_file: str = ""
