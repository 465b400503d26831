"""Currency arithmetic helpers

All amounts are Decimal with two fractional digits, rounded half-up.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity: int, unit_price: Number) -> Decimal:
    return to_money(Decimal(quantity) * to_money(unit_price))


def tax_for(subtotal: Number, tax_rate: Number) -> Decimal:
    """Tax amount for a subtotal at a percentage rate (e.g. 20 for 20%)"""
    return to_money(to_money(subtotal) * Decimal(str(tax_rate)) / Decimal(100))
