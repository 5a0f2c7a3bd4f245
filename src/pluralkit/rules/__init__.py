"""Plural selection strategies.

Two contracts are injected into the engine:

- PluralRules maps (locale, count) onto a CLDR category and reports which
  categories a locale can produce.
- LegacyRules maps (locale, integer count) onto a legacy numeric form index.

Shipped implementations:

- CldrPluralRules: hand-coded rule families (default)
- BabelPluralRules: full CLDR data through Babel
- LegacyPluralRules: the four legacy families

Python 3.13+.
"""

from typing import Protocol, runtime_checkable

from pluralkit.enums import PluralCategory

from .babel_rules import BabelPluralRules
from .cldr import CldrPluralRules, available_categories, legacy_index, select_plural_category
from .legacy import LegacyPluralRules, select_legacy_form
from .operands import Count, to_decimal

__all__ = [
    "BabelPluralRules",
    "CldrPluralRules",
    "Count",
    "LegacyPluralRules",
    "LegacyRules",
    "PluralRules",
    "available_categories",
    "legacy_index",
    "select_legacy_form",
    "select_plural_category",
    "to_decimal",
]


@runtime_checkable
class PluralRules(Protocol):
    """CLDR plural category selection strategy."""

    def category(self, locale: str, count: Count) -> PluralCategory:
        """Select the category for count in locale. Must be pure."""
        ...

    def available_categories(self, locale: str) -> tuple[PluralCategory, ...]:
        """Categories the locale can produce, canonical order, ending with OTHER."""
        ...


@runtime_checkable
class LegacyRules(Protocol):
    """Legacy numeric-key form selection strategy."""

    def form_index(self, locale: str, count: int) -> int:
        """Select the legacy form index for count in locale. Must be pure."""
        ...
