"""Line-item ledger and financial rollup shared by every priced document.

All amounts are ``Decimal`` and rounded half-up to two places before they are
stored. The rollup order is fixed: discount, then additional charges, then
tax on the discounted amount.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

MONEY_QUANT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_money(value) -> Decimal:
    return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def coerce_decimal(value: Any) -> Decimal:
    """Parse user input as a Decimal; invalid or missing input becomes zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip() or "0")
        except (InvalidOperation, TypeError, ValueError):
            return Decimal("0")
    if not parsed.is_finite():
        return Decimal("0")
    return parsed


def optional_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return coerce_decimal(value)


def build_line_items(
    raw_items: Iterable[Mapping[str, Any]],
    *,
    priced: bool = False,
    quantity_fields: tuple[str, ...] = ("quantity",),
) -> list[dict[str, Any]]:
    """Number items from 1 and normalize quantities, prices and subtotals.

    Serial numbers supplied by the client are discarded.
    """
    lines = []
    for index, raw in enumerate(raw_items, start=1):
        line = dict(raw)
        line["serial_number"] = index
        for field in quantity_fields:
            line[field] = to_money(coerce_decimal(line.get(field)))
        if priced:
            unit_price = to_money(coerce_decimal(line.get("unit_price")))
            line["unit_price"] = unit_price
            line["sub_total"] = to_money(line["quantity"] * unit_price)
        else:
            line.pop("unit_price", None)
            line.pop("sub_total", None)
        lines.append(line)
    return lines


@dataclass(frozen=True)
class Rollup:
    sum_of_sub_total: Decimal
    discount_amount: Decimal
    amount_after_discount: Decimal
    tax_amount: Decimal
    total_amount: Decimal


def compute_rollup(
    sub_totals: Iterable[Any],
    discount_percentage: Any = None,
    additional_charges: Any = None,
    tax_percentage: Any = None,
) -> Rollup:
    sum_of_sub_total = to_money(sum((coerce_decimal(value) for value in sub_totals), Decimal("0")))

    discount_amount = ZERO
    if discount_percentage is not None:
        discount_amount = to_money(sum_of_sub_total * coerce_decimal(discount_percentage) / HUNDRED)
    amount_after_discount = to_money(sum_of_sub_total - discount_amount)

    charges = to_money(coerce_decimal(additional_charges)) if additional_charges is not None else ZERO

    tax_amount = ZERO
    if tax_percentage is not None:
        tax_amount = to_money(amount_after_discount * coerce_decimal(tax_percentage) / HUNDRED)

    return Rollup(
        sum_of_sub_total=sum_of_sub_total,
        discount_amount=discount_amount,
        amount_after_discount=amount_after_discount,
        tax_amount=tax_amount,
        total_amount=to_money(amount_after_discount + charges + tax_amount),
    )


def apply_rollup(document, sub_totals: Iterable[Any]) -> Rollup:
    rollup = compute_rollup(
        sub_totals,
        discount_percentage=document.discount_percentage,
        additional_charges=document.additional_charges,
        tax_percentage=document.tax_percentage,
    )
    document.sum_of_sub_total = rollup.sum_of_sub_total
    document.discount_amount = rollup.discount_amount
    document.tax_amount = rollup.tax_amount
    document.total_amount = rollup.total_amount
    return rollup
