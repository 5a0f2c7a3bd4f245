"""Enumerations for pluralkit type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PluralCategory(StrEnum):
    """CLDR plural category.

    StrEnum provides automatic string conversion: str(PluralCategory.FEW) == "few"

    Members are declared in canonical CLDR order. That order is significant:
    ICU patterns are emitted category by category in exactly this sequence.
    """

    ZERO = "zero"
    """Zero items (Arabic 0, Latvian 0)"""

    ONE = "one"
    """Singular form (English 1, Russian 21)"""

    TWO = "two"
    """Dual form (Slovenian 2, Arabic 2)"""

    FEW = "few"
    """Paucal form (Czech 2-4, Polish 22-24)"""

    MANY = "many"
    """Large counts or fractions (Russian 5, Czech 1.5)"""

    OTHER = "other"
    """Universal fallback, required in every complete form table"""


class FormatKind(StrEnum):
    """Template syntax a translation entry is rendered with.

    StrEnum provides automatic string conversion: str(FormatKind.ICU) == "icu"
    """

    SPRINTF = "sprintf"
    """Plain or legacy numeric-key entry, printf-style placeholders"""

    ICU = "icu"
    """CLDR category-keyed entry rendered as an ICU plural pattern"""


# Canonical emission order for ICU patterns and availability lists.
CATEGORY_ORDER: tuple[PluralCategory, ...] = tuple(PluralCategory)

# Raw category names accepted as CLDR form-table keys.
CATEGORY_NAMES: frozenset[str] = frozenset(c.value for c in PluralCategory)


__all__ = [
    "CATEGORY_NAMES",
    "CATEGORY_ORDER",
    "FormatKind",
    "PluralCategory",
]
