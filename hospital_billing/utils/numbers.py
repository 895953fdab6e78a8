from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
ONE = Decimal("1")


def as_decimal(value: Any) -> Decimal:
    """Coerce a caller-supplied number into a finite Decimal.

    Floats go through ``str`` so that 0.1 stays 0.1 instead of its binary
    expansion. Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got boolean {value!r}")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(str(value))
    elif isinstance(value, str):
        try:
            d = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Expected a number, got {value!r}") from None
    else:
        raise ValueError(f"Expected a number, got {type(value).__name__}")
    if not d.is_finite():
        raise ValueError(f"Expected a finite number, got {value!r}")
    return d


def format_number(value: Decimal) -> str:
    # 1500 -> "1500", 2.50 -> "2.5", 1E+28 -> "1000...0", never scientific notation
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def plural(word: str, count: Decimal) -> str:
    return word if count == ONE else f"{word}s"


__all__ = ["ZERO", "ONE", "as_decimal", "format_number", "plural"]
