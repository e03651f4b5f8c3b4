"""Ratio helpers with one zero-denominator policy: return 0."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

CENT = Decimal("0.01")


def percent(numerator: Number, denominator: Number) -> int:
    """Whole-number percentage, half rounded up."""
    if not denominator:
        return 0
    value = Decimal(str(numerator)) * 100 / Decimal(str(denominator))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def money(value: Number) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def money_average(total: Decimal, count: int) -> Decimal:
    if count <= 0:
        return money(0)
    return money(total / count)
