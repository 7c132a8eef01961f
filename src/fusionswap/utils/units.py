"""Token amount conversions."""

from decimal import Decimal, InvalidOperation
from typing import Union


def parse_units(amount: Union[str, int, float, Decimal], decimals: int) -> int:
    """Convert a human amount ("5", "0.25") to base units.

    Raises:
        ValueError: amount is not a positive number or has too many decimals
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount}")
    if value <= 0:
        raise ValueError(f"Amount must be positive, got {amount}")

    scaled = value * (Decimal(10) ** decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount} has more than {decimals} decimals")
    return int(scaled)


def format_units(amount: Union[str, int], decimals: int, places: int = 2) -> str:
    """Format base units as a fixed-point string."""
    value = Decimal(int(amount)) / (Decimal(10) ** decimals)
    return f"{value:.{places}f}"
