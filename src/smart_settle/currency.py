"""Conversion between decimal currency amounts and integer minor units."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .exceptions import InvalidAmountError

MINOR_UNITS_PER_UNIT = 100  # paise per rupee, cents per dollar

_CENT = Decimal("0.01")


def to_minor_units(amount: Decimal | int | float | str) -> int:
    """
    Convert a currency amount to integer minor units.
    Uses ROUND_HALF_UP (half away from zero), matching the reconciler.

    Args:
        amount: Amount in the currency's base unit

    Returns:
        Amount in minor units (integer)

    Raises:
        InvalidAmountError: If the amount is missing, non-numeric, non-finite
            or too large to represent in minor units
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError(amount)

    try:
        if isinstance(amount, float):
            # str() gives the shortest repr, so 0.1 becomes Decimal("0.1")
            value = Decimal(str(amount))
        else:
            value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(amount) from e

    if not value.is_finite():
        raise InvalidAmountError(amount)

    try:
        minor = value * MINOR_UNITS_PER_UNIT
        return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        # quantize fails once the result needs more digits than the context allows
        raise InvalidAmountError(
            amount, f"Currency amount out of range: {amount!r}"
        ) from e


def from_minor_units(minor: int) -> Decimal:
    """Convert integer minor units back to a two-place Decimal."""
    return (Decimal(minor) / MINOR_UNITS_PER_UNIT).quantize(_CENT)


def format_amount(amount: Decimal, currency: str = "INR") -> str:
    """
    Format an amount in accounting style.

    Negative amounts use parentheses: (INR 85.02)
    Positive amounts are plain:        INR 85.02
    """
    if amount < 0:
        return f"({currency} {abs(amount):,.2f})"
    return f"{currency} {amount:,.2f}"
