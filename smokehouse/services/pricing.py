"""
Pricing Rule

Shared by the cart engine and the order materializer:

    subtotal = sum(price * quantity)      rounded to cents
    tax      = subtotal * tax_rate        rounded to cents (half-up)
    total    = subtotal + tax

Arithmetic is done in Decimal so totals are exact in cents; the results are
handed back as floats for the JSON payloads.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

from smokehouse.core.config import get_settings

CENT = Decimal("0.01")


class PricedLine(Protocol):
    price: float
    quantity: int


@dataclass(frozen=True)
class Totals:
    subtotal: float
    tax: float
    total: float

    @classmethod
    def zero(cls) -> "Totals":
        return cls(subtotal=0.0, tax=0.0, total=0.0)


def to_money(value) -> Decimal:
    """Round a number to cents, half-up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_totals(lines: Iterable[PricedLine], tax_rate=None) -> Totals:
    """
    Compute subtotal, tax and total for priced lines.

    Args:
        lines: Objects with ``price`` and ``quantity``
        tax_rate: Override for the configured rate (defaults to settings)

    Returns:
        Totals: Rounded amounts; an empty iterable yields all zeros
    """
    if tax_rate is None:
        tax_rate = get_settings().tax_rate

    subtotal = to_money(
        sum((Decimal(str(line.price)) * line.quantity for line in lines), Decimal("0"))
    )
    tax = to_money(subtotal * Decimal(str(tax_rate)))
    total = subtotal + tax

    return Totals(subtotal=float(subtotal), tax=float(tax), total=float(total))
