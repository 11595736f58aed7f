from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def format_amount(value: Decimal | int | float | str) -> str:
    """Format a currency value with exactly two decimals, rounding half up.

    100 -> "100.00", 100.5 -> "100.50", 100.999 -> "101.00", 0.125 -> "0.13".
    """
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    return f"{d.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"


def format_money(value: Decimal | int | float | str, currency: str) -> str:
    """Format as "LKR 1000.00"."""
    return f"{currency} {format_amount(value)}"
