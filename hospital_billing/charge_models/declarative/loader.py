"""Definition loader for billing-model tag aliases.

Loads YAML/JSON definitions from hospital_billing/charge_models/definitions
(or HOSPITAL_BILLING_DEFINITIONS_DIR).

The loader is intentionally conservative:
- it validates required fields
- it only accepts canonical tags the engine has a charge model for

If a definition is invalid, it raises ValueError with a readable message,
so CI/test runs fail fast.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ...config import DEFINITIONS_DIR
from ..types import BILLING_TYPES
from .schema import AliasDefinition


def normalize_tag(tag: Any) -> str:
    return "_".join(str(tag).strip().lower().replace("-", " ").split())


def _as_list(x: Any) -> List[Any]:
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _require(obj: Dict[str, Any], key: str, *, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _load_one(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(raw) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping in {path}")
        return data
    if path.suffix.lower() == ".json":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Top-level JSON must be an object in {path}")
        return data
    raise ValueError(f"Unsupported definition file type: {path}")


def _parse_aliases(obj: Any, *, ctx: str) -> Dict[str, List[str]]:
    if not isinstance(obj, dict):
        raise ValueError(f"aliases must be a mapping of billing type -> spellings in {ctx}")
    out: Dict[str, List[str]] = {}
    for canonical, spellings in obj.items():
        key = normalize_tag(canonical)
        if key not in BILLING_TYPES:
            raise ValueError(f"Unknown billing type '{canonical}' in {ctx}.aliases")
        names = [normalize_tag(s) for s in _as_list(spellings) if str(s).strip()]
        out.setdefault(key, []).extend(names)
    return out


def default_definitions_dir() -> Path:
    if DEFINITIONS_DIR:
        return Path(DEFINITIONS_DIR)
    return Path(__file__).resolve().parents[1] / "definitions"


def load_definitions(definitions_dir: Path | None = None) -> List[AliasDefinition]:
    base = definitions_dir or default_definitions_dir()
    if not base.exists():
        return []
    paths = sorted([p for p in base.iterdir() if p.is_file() and p.suffix.lower() in (".yaml", ".yml", ".json")])
    out: List[AliasDefinition] = []
    for p in paths:
        data = _load_one(p)
        ctx = f"definition({p.name})"
        def_id = str(_require(data, "id", ctx=ctx)).strip()
        aliases = _parse_aliases(_require(data, "aliases", ctx=ctx), ctx=ctx)
        out.append(
            AliasDefinition(
                id=def_id,
                aliases=aliases,
                description=str(data.get("description") or ""),
                source_file=p.name,
            )
        )
    return out
