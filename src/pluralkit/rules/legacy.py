"""Legacy numeric-key plural form selection.

Before CLDR categories, translation files keyed plural variants by
representative integers: 0 (none), 1 (singular), 2 (paucal), 3 (Slovenian
3-4) and 5 (plural). This module maps (locale, count) onto those indices.
The returned index is only a lookup key into LegacyForms; when it is
absent the form table's maximum key is used instead.

Python 3.13+. Zero external dependencies.
"""

from pluralkit.locale_utils import primary_language

__all__ = ["LegacyPluralRules", "select_legacy_form"]

# Ends-in-one/ends-in-two-to-four languages, teens always plural.
_TENS_REPEATING: frozenset[str] = frozenset({"ru", "uk", "be", "sr", "hr", "bs", "cnr"})

# 0, 1, 2-4, everything else.
_SIMPLE: frozenset[str] = frozenset({"pl", "cs", "sk", "bg", "mk", "ro", "hu"})

# Slovenian: separate form for 3 and 4.
_DUAL: frozenset[str] = frozenset({"sl"})

# Singular/plural only.
_WESTERN: frozenset[str] = frozenset({"nl", "es", "sv", "pt", "da", "no", "nb", "nn"})


def _tens_repeating(count: int) -> int:
    if count == 0:
        return 0
    mod10 = count % 10
    if 11 <= count % 100 <= 19:
        return 5
    if mod10 == 1:
        return 1
    if 2 <= mod10 <= 4:
        return 2
    return 5


def _simple(count: int) -> int:
    match count:
        case 0 | 1:
            return count
        case 2 | 3 | 4:
            return 2
        case _:
            return 5


def _dual(count: int) -> int:
    match count:
        case 0 | 1 | 2:
            return count
        case 3 | 4:
            return 3
        case _:
            return 5


def _western(count: int) -> int:
    return count if count in (0, 1) else 2


def select_legacy_form(locale: str, count: int) -> int:
    """Select the legacy form index for count in locale.

    Args:
        locale: Locale code; only the primary language subtag is used
        count: Integer count

    Returns:
        Form index. Unrecognized languages get the count itself back.

    Examples:
        >>> select_legacy_form("ru_RU", 21)
        1
        >>> select_legacy_form("ru_RU", 12)
        5
        >>> select_legacy_form("cs_CZ", 3)
        2
        >>> select_legacy_form("ja_JP", 7)
        7
    """
    language = primary_language(locale)
    # Families classify by magnitude; the identity default keeps the sign.
    magnitude = abs(count)
    if language in _TENS_REPEATING:
        return _tens_repeating(magnitude)
    if language in _SIMPLE:
        return _simple(magnitude)
    if language in _DUAL:
        return _dual(magnitude)
    if language in _WESTERN:
        return _western(magnitude)
    return count


class LegacyPluralRules:
    """Default legacy strategy backed by the four hand-coded families.

    Example:
        >>> LegacyPluralRules().form_index("sl_SI", 4)
        3
    """

    __slots__ = ()

    def form_index(self, locale: str, count: int) -> int:
        """Select the legacy form index for count in locale."""
        return select_legacy_form(locale, count)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "LegacyPluralRules()"
