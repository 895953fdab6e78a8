from .loader import load_definitions, normalize_tag
from .schema import AliasDefinition

__all__ = ["load_definitions", "normalize_tag", "AliasDefinition"]
