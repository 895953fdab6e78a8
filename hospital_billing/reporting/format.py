from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Sequence, Tuple

from ..config import CURRENCY_SYMBOL
from ..charge_models.types import CalculationResult
from ..utils.numbers import ZERO, format_number


def _md_escape(v: Any) -> str:
    s = "" if v is None else str(v)
    # Escape pipes so Markdown tables don't break
    return s.replace("|", "\\|").replace("\n", " ").strip()


def _format_currency(value: Decimal, currency: str) -> str:
    return f"{currency}{value:,.2f}"


def render_breakdown_table(result: CalculationResult, currency: str = CURRENCY_SYMBOL) -> str:
    rows = [
        "| Item | Unit Price | Qty | Subtotal |",
        "|---|---:|---:|---:|",
    ]
    for line in result.breakdown:
        rows.append(
            "| {desc} | {price} | {qty} | {sub} |".format(
                desc=_md_escape(line.description),
                price=_format_currency(line.unit_price, currency),
                qty=format_number(line.quantity),
                sub=_format_currency(line.subtotal, currency),
            )
        )
    rows.append(f"| **Total** | | | **{_format_currency(result.total_amount, currency)}** |")
    return "\n".join(rows)


def render_result(result: CalculationResult, title: str = "") -> str:
    """Title, breakdown table and the summary line.

    Rendered in ``CURRENCY_SYMBOL``, the symbol ``billing_details`` is written in.
    """
    sections: List[str] = []
    if title:
        sections.append(f"### {_md_escape(title)}")
    sections.append(render_breakdown_table(result))
    sections.append("")
    sections.append(f"_{_md_escape(result.billing_details)}_")
    return "\n".join(sections)


def render_bill(items: Sequence[Tuple[str, CalculationResult]], currency: str = CURRENCY_SYMBOL) -> str:
    """One summary row per charged item plus a grand total.

    Per-item detail is left to ``render_result``; this is the bill overview.
    """
    if not items:
        return ""
    rows = [
        "| Item | Billed Qty | Amount |",
        "|---|---:|---:|",
    ]
    grand_total = ZERO
    for label, result in items:
        grand_total += result.total_amount
        rows.append(
            "| {label} | {qty} | {amount} |".format(
                label=_md_escape(label),
                qty=format_number(result.billing_quantity),
                amount=_format_currency(result.total_amount, currency),
            )
        )
    rows.append(f"| **Grand total** | | **{_format_currency(grand_total, currency)}** |")
    return "\n".join(rows)
