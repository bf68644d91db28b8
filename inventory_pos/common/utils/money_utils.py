"""Utility functions for monetary amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """
    Converts value to a Decimal rounded half-up to cents, the precision of the
    DECIMAL(12, 2) columns. Raises ValueError for non-numeric input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            raise ValueError(f"Not a monetary amount: {value!r}")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e


def is_whole_number(value) -> bool:
    """True for int values; bool is rejected even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool)
