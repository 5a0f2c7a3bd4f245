"""CLDR plural category selection from hand-coded rule families.

Maps (locale, count) to one of the six CLDR categories. Only the primary
language subtag matters; languages are grouped into families that share a
rule. Non-integral counts are first-class: Czech, Slovak and Lithuanian
select "many" and Romanian selects "few" for fractions, independently of
the integer rule of the same magnitude.

The table is representative, not exhaustive. For complete CLDR data inject
BabelPluralRules instead.

Python 3.13+. Zero external dependencies.

Reference: https://www.unicode.org/cldr/charts/latest/supplemental/language_plural_rules.html
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from pluralkit.constants import PLURAL_CACHE_SIZE
from pluralkit.enums import CATEGORY_ORDER, PluralCategory
from pluralkit.locale_utils import primary_language
from pluralkit.rules.operands import Count, plural_operands, to_decimal

__all__ = [
    "CldrPluralRules",
    "available_categories",
    "legacy_index",
    "select_plural_category",
]

logger = logging.getLogger(__name__)

ZERO = PluralCategory.ZERO
ONE = PluralCategory.ONE
TWO = PluralCategory.TWO
FEW = PluralCategory.FEW
MANY = PluralCategory.MANY
OTHER = PluralCategory.OTHER


def _in(value: int, low: int, high: int) -> bool:
    return low <= value <= high


def _czech(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return MANY
    if i == 1:
        return ONE
    if _in(i, 2, 4):
        return FEW
    return OTHER


def _one_other(is_integer: bool, i: int) -> PluralCategory:
    return ONE if is_integer and i == 1 else OTHER


def _french(is_integer: bool, i: int) -> PluralCategory:
    return ONE if is_integer and i in (0, 1) else OTHER


def _polish(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i == 1:
        return ONE
    if _in(i % 10, 2, 4) and not _in(i % 100, 12, 14):
        return FEW
    return MANY


def _east_slavic(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i % 10 == 1 and i % 100 != 11:
        return ONE
    if _in(i % 10, 2, 4) and not _in(i % 100, 12, 14):
        return FEW
    return MANY


def _south_slavic(is_integer: bool, i: int) -> PluralCategory:
    # Same digit tests as East Slavic, but no "many" category.
    if not is_integer:
        return OTHER
    if i % 10 == 1 and i % 100 != 11:
        return ONE
    if _in(i % 10, 2, 4) and not _in(i % 100, 12, 14):
        return FEW
    return OTHER


def _slovenian(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    mod100 = i % 100
    if mod100 == 1:
        return ONE
    if mod100 == 2:
        return TWO
    if mod100 in (3, 4):
        return FEW
    return OTHER


def _lithuanian(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return MANY
    teen = _in(i % 100, 11, 19)
    if i % 10 == 1 and not teen:
        return ONE
    if _in(i % 10, 2, 9) and not teen:
        return FEW
    return OTHER


def _latvian(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i == 0:
        return ZERO
    if i % 10 == 1 and i % 100 != 11:
        return ONE
    return OTHER


def _irish(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i == 1:
        return ONE
    if i == 2:
        return TWO
    if _in(i, 3, 6):
        return FEW
    if _in(i, 7, 10):
        return MANY
    return OTHER


def _romanian(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return FEW
    if i == 1:
        return ONE
    if i == 0 or _in(i % 100, 1, 19):
        return FEW
    return OTHER


def _maltese(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i == 1:
        return ONE
    if i == 0 or _in(i % 100, 2, 10):
        return FEW
    if _in(i % 100, 11, 19):
        return MANY
    return OTHER


def _arabic(is_integer: bool, i: int) -> PluralCategory:
    if not is_integer:
        return OTHER
    if i == 0:
        return ZERO
    if i == 1:
        return ONE
    if i == 2:
        return TWO
    if _in(i % 100, 3, 10):
        return FEW
    if _in(i % 100, 11, 99):
        return MANY
    return OTHER


def _no_plural(is_integer: bool, i: int) -> PluralCategory:  # noqa: ARG001
    return OTHER


@dataclass(frozen=True, slots=True)
class _RuleFamily:
    """A plural rule shared by a group of languages."""

    name: str
    languages: frozenset[str]
    categories: tuple[PluralCategory, ...]
    select: Callable[[bool, int], PluralCategory]


_FAMILIES: tuple[_RuleFamily, ...] = (
    _RuleFamily("czech", frozenset({"cs", "sk"}), (ONE, FEW, MANY, OTHER), _czech),
    _RuleFamily(
        "one-other",
        frozenset({
            "en", "de", "nl", "sv", "da", "no", "nb", "nn", "fo", "es", "pt",
            "it", "bg", "el", "fi", "et", "hu", "tr", "he",
        }),
        (ONE, OTHER),
        _one_other,
    ),
    _RuleFamily("french", frozenset({"fr"}), (ONE, OTHER), _french),
    _RuleFamily("polish", frozenset({"pl"}), (ONE, FEW, MANY, OTHER), _polish),
    _RuleFamily("east-slavic", frozenset({"ru", "uk", "be"}), (ONE, FEW, MANY, OTHER), _east_slavic),
    _RuleFamily("south-slavic", frozenset({"sr", "hr", "bs"}), (ONE, FEW, OTHER), _south_slavic),
    _RuleFamily("slovenian", frozenset({"sl"}), (ONE, TWO, FEW, OTHER), _slovenian),
    _RuleFamily("lithuanian", frozenset({"lt"}), (ONE, FEW, MANY, OTHER), _lithuanian),
    _RuleFamily("latvian", frozenset({"lv"}), (ZERO, ONE, OTHER), _latvian),
    _RuleFamily("irish", frozenset({"ga"}), (ONE, TWO, FEW, MANY, OTHER), _irish),
    _RuleFamily("romanian", frozenset({"ro"}), (ONE, FEW, OTHER), _romanian),
    _RuleFamily("maltese", frozenset({"mt"}), (ONE, FEW, MANY, OTHER), _maltese),
    _RuleFamily("arabic", frozenset({"ar"}), (ZERO, ONE, TWO, FEW, MANY, OTHER), _arabic),
    _RuleFamily(
        "no-plural",
        frozenset({
            "ja", "ko", "zh", "th", "lo", "vi", "id", "ms", "ka", "az", "kk",
            "ky", "uz", "tk", "mn", "my",
        }),
        (OTHER,),
        _no_plural,
    ),
)

_DEFAULT_FAMILY = _RuleFamily("default", frozenset(), (ONE, OTHER), _one_other)

_FAMILY_BY_LANGUAGE: dict[str, _RuleFamily] = {
    language: family for family in _FAMILIES for language in family.languages
}

_LEGACY_INDEX: dict[PluralCategory, int] = {
    ZERO: 0,
    ONE: 1,
    TWO: 2,
    FEW: 3,
    MANY: 5,
    OTHER: 5,
}


def _family_for(locale: str) -> _RuleFamily:
    return _FAMILY_BY_LANGUAGE.get(primary_language(locale), _DEFAULT_FAMILY)


def _validated(value: object) -> PluralCategory:
    """Collapse anything outside the closed category set to OTHER."""
    try:
        return PluralCategory(value)
    except ValueError:
        logger.debug("Rule table produced unknown plural category %r; using 'other'", value)
        return OTHER


@functools.lru_cache(maxsize=PLURAL_CACHE_SIZE)
def _category_for(language: str, count: Decimal) -> PluralCategory:
    operands = plural_operands(count)
    if operands is None:
        return OTHER
    family = _FAMILY_BY_LANGUAGE.get(language, _DEFAULT_FAMILY)
    return _validated(family.select(*operands))


def select_plural_category(n: Count, locale: str) -> PluralCategory:
    """Select CLDR plural category for a number.

    Args:
        n: Number to categorize (int, float or Decimal)
        locale: Locale code (e.g., "cs_CZ", "en-US", "ar")

    Returns:
        One of the six PluralCategory members

    Examples:
        >>> select_plural_category(3, "cs_CZ")
        <PluralCategory.FEW: 'few'>
        >>> select_plural_category(1.5, "cs_CZ")
        <PluralCategory.MANY: 'many'>
        >>> select_plural_category(21, "ru_RU")
        <PluralCategory.ONE: 'one'>
        >>> select_plural_category(0, "lv_LV")
        <PluralCategory.ZERO: 'zero'>

    Performance:
        Results are memoized per (language, count). Inputs are pure, so the
        cache can never serve a stale category.
    """
    return _category_for(primary_language(locale), to_decimal(n))


def available_categories(locale: str) -> tuple[PluralCategory, ...]:
    """Get the categories a locale's rule family can ever produce.

    Useful for validating and trimming CLDR form tables on import.

    Args:
        locale: Locale code

    Returns:
        Categories in canonical CLDR order, always ending with OTHER

    Example:
        >>> available_categories("cs_CZ")
        (<PluralCategory.ONE: 'one'>, <PluralCategory.FEW: 'few'>, \
<PluralCategory.MANY: 'many'>, <PluralCategory.OTHER: 'other'>)
    """
    return _family_for(locale).categories


def legacy_index(category: PluralCategory) -> int:
    """Map a CLDR category onto the legacy numeric form index.

    Backward-compatibility bridge for numeric-key consumers. Lossy by
    construction: "many" and "other" share index 5.

    Args:
        category: CLDR category

    Returns:
        Legacy index (0, 1, 2, 3 or 5)
    """
    return _LEGACY_INDEX[category]


class CldrPluralRules:
    """Default plural strategy backed by the hand-coded rule families.

    Stateless; one instance can be shared by any number of engines and
    threads.

    Example:
        >>> rules = CldrPluralRules()
        >>> rules.category("pl_PL", 22)
        <PluralCategory.FEW: 'few'>
    """

    __slots__ = ()

    def category(self, locale: str, count: Count) -> PluralCategory:
        """Select the category for count in locale."""
        return select_plural_category(count, locale)

    def available_categories(self, locale: str) -> tuple[PluralCategory, ...]:
        """Categories the locale can produce, in canonical order."""
        return available_categories(locale)

    @staticmethod
    def clear_cache() -> None:
        """Drop memoized selections (tests and memory pressure)."""
        _category_for.cache_clear()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "CldrPluralRules()"


# Sanity: every family lists its categories in canonical order, ending with OTHER.
assert all(  # noqa: S101
    f.categories[-1] is OTHER and list(f.categories) == sorted(f.categories, key=CATEGORY_ORDER.index)
    for f in (*_FAMILIES, _DEFAULT_FAMILY)
)
