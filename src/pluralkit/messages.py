"""Tagged message inputs for TranslationEngine.translate().

Callers state what they pass instead of the engine sniffing types:

- Key: a dictionary key to translate
- NumericLiteral: a number to format for the active locale

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TypeAlias

__all__ = ["Key", "Message", "NumericLiteral"]


@dataclass(frozen=True, slots=True)
class Key:
    """Message key looked up in the dictionary."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    """Number rendered with locale decimal conventions.

    Attributes:
        value: The number
        decimals: Exact number of fraction digits (default 0)

    Raises:
        ValueError: If decimals is negative
    """

    value: int | float | Decimal
    decimals: int = 0

    def __post_init__(self) -> None:
        if self.decimals < 0:
            msg = "decimals must be zero or positive"
            raise ValueError(msg)


Message: TypeAlias = Key | NumericLiteral | str | None
"""Accepted message argument; plain str is shorthand for Key."""
