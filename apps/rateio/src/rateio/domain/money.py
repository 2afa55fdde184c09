"""Money helpers for integer minor-unit amounts."""

from decimal import Decimal
from fractions import Fraction
from math import floor

MINOR_UNITS_PER_MAJOR = 100


def round_half_up(value: Fraction | int) -> int:
    """Round an exact rational to the nearest integer, ties toward +infinity."""

    return floor(Fraction(value) + Fraction(1, 2))


def format_money(amount: int) -> str:
    """Render minor units as a string with exactly two decimal places."""

    value = Decimal(amount) / Decimal(MINOR_UNITS_PER_MAJOR)
    return f"{value:.2f}"
