from __future__ import annotations

from decimal import Decimal
from typing import Union

from .stats import money


def format_currency(amount: Union[int, float, Decimal]) -> str:
    """en-US dollar formatting, two decimals: ``$1,234.50`` / ``-$3.00``."""
    value = money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
