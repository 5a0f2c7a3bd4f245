"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data.
Use it instead of the default hand-coded table when translations target
languages outside the built-in rule families, or when full CLDR fidelity
(exponent and visible-fraction operands) matters.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/latest/supplemental/language_plural_rules.html
"""

import logging

from babel.core import UnknownLocaleError

from pluralkit.enums import CATEGORY_ORDER, PluralCategory
from pluralkit.locale_utils import get_babel_locale
from pluralkit.rules.operands import Count, plural_operands, to_decimal

__all__ = ["BabelPluralRules"]

logger = logging.getLogger(__name__)

_ONE_OTHER: tuple[PluralCategory, ...] = (PluralCategory.ONE, PluralCategory.OTHER)


class BabelPluralRules:
    """Plural strategy that evaluates Babel's CLDR plural rules.

    Example:
        >>> rules = BabelPluralRules()
        >>> rules.category("cy", 3)
        <PluralCategory.FEW: 'few'>

    Architecture:
        Uses Babel's Locale.plural_form which provides CLDR-compliant plural
        rules for all supported locales. If locale parsing fails, falls back
        to the simple one/other rule.

    Performance:
        Uses cached locale parsing via get_babel_locale() to avoid
        repeated Locale.parse() overhead in hot paths.
    """

    __slots__ = ()

    def category(self, locale: str, count: Count) -> PluralCategory:
        """Select CLDR plural category for count using Babel's CLDR data.

        Args:
            locale: Locale code (e.g., "lv_LV", "en_US", "ar-SA")
            count: Number to categorize

        Returns:
            PluralCategory member
        """
        value = to_decimal(count)
        operands = plural_operands(value)
        if operands is None:
            return PluralCategory.OTHER
        try:
            locale_obj = get_babel_locale(locale)
        except (UnknownLocaleError, ValueError):
            logger.debug("Unknown locale '%s' for plural rules, using one/other", locale)
            is_integer, int_value = operands
            return PluralCategory.ONE if is_integer and int_value == 1 else PluralCategory.OTHER

        try:
            return PluralCategory(locale_obj.plural_form(abs(value)))
        except ValueError:
            return PluralCategory.OTHER

    def available_categories(self, locale: str) -> tuple[PluralCategory, ...]:
        """Categories Babel's rule for locale can produce, in canonical order.

        Args:
            locale: Locale code

        Returns:
            Ordered categories, always ending with OTHER
        """
        try:
            tags = get_babel_locale(locale).plural_form.tags
        except (UnknownLocaleError, ValueError):
            return _ONE_OTHER
        return tuple(c for c in CATEGORY_ORDER if c in tags or c is PluralCategory.OTHER)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "BabelPluralRules()"
