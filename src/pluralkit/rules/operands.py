"""Numeric operands for plural rule evaluation.

Plural rules need two facts about a count: whether it is mathematically an
integer (2.0 is, 2.5 is not) and its truncated absolute integer value.
Floats are converted through their shortest repr so 1.1 stays 1.1 instead
of its binary expansion.

Python 3.13+. Zero external dependencies.
"""

from decimal import Decimal
from typing import TypeAlias

__all__ = ["Count", "plural_operands", "to_decimal"]

Count: TypeAlias = int | float | Decimal
"""Numeric count accepted by plural selectors."""


def to_decimal(count: Count) -> Decimal:
    """Convert a count to Decimal without binary float noise.

    Args:
        count: int, float or Decimal

    Returns:
        Exact Decimal representation

    Example:
        >>> to_decimal(1.5)
        Decimal('1.5')
        >>> to_decimal(3)
        Decimal('3')
    """
    if isinstance(count, Decimal):
        return count
    if isinstance(count, float):
        return Decimal(repr(count))
    return Decimal(count)


def plural_operands(count: Decimal) -> tuple[bool, int] | None:
    """Split a count into (is_integer, truncated absolute integer value).

    Args:
        count: Decimal count

    Returns:
        Tuple of integer flag and |trunc(count)|, or None for NaN/Infinity

    Example:
        >>> plural_operands(Decimal("2.0"))
        (True, 2)
        >>> plural_operands(Decimal("-21.5"))
        (False, 21)
    """
    if not count.is_finite():
        return None
    return count == count.to_integral_value(), abs(int(count))
