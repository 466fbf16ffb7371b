"""
Payout Calculator.

Driver compensation is a tiered commission on trip revenue:
30% of the first 2250, 70% of everything above it.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

TIER_THRESHOLD = Decimal("2250")
BASE_RATE = Decimal("0.30")
UPPER_RATE = Decimal("0.70")
CENTS = Decimal("0.01")

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert request/DB values to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_payout(revenue: Amount) -> Decimal:
    """
    Apply the tiered formula to a trip revenue.

        payout = min(revenue, 2250) * 0.30 + max(revenue - 2250, 0) * 0.70

    Args:
        revenue: Trip revenue, must be >= 0

    Returns:
        Payout rounded half-up to cents

    Raises:
        ValueError: If revenue is negative or not a number
    """
    amount = to_decimal(revenue)
    if not amount.is_finite():
        raise ValueError("Revenue must be a finite number")
    if amount < 0:
        raise ValueError("Revenue cannot be negative")

    base_part = min(amount, TIER_THRESHOLD) * BASE_RATE
    upper_part = max(amount - TIER_THRESHOLD, Decimal("0")) * UPPER_RATE
    return (base_part + upper_part).quantize(CENTS, rounding=ROUND_HALF_UP)


def describe_formula(revenue: Amount) -> str:
    """Formula string shown next to a payout preview."""
    return f"min({revenue}, 2250) × 0.30 + max({revenue} - 2250, 0) × 0.70"
