"""Dictionary entry classification and ICU pattern synthesis.

Decides whether a raw plural table is CLDR category-keyed or legacy
numeric-keyed, decodes raw entries into templates, and builds the
canonical ICU plural pattern for CLDR tables.

Canonical pattern shape::

    {count, plural, one {# file} few {# files} other {# files}}

Categories appear in fixed order zero, one, two, few, many, other; only
present ones are emitted and ``other`` is always emitted. Building is
deterministic: the same forms always yield byte-identical patterns.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from pluralkit.constants import COUNT_ARGUMENT, ICU_NUMBER_TOKEN
from pluralkit.diagnostics import InvalidPatternError, TemplateError
from pluralkit.enums import CATEGORY_NAMES, CATEGORY_ORDER, FormatKind, PluralCategory
from pluralkit.formatting.icu import has_plural_argument, parse_icu_pattern
from pluralkit.rules import CldrPluralRules, PluralRules
from pluralkit.templates import (
    CldrForms,
    FormatMetadata,
    LegacyForms,
    LiteralTemplate,
    RawForms,
    RawValue,
    Template,
    expand_legacy_keys,
)

__all__ = [
    "Detection",
    "FormatDetector",
    "build_icu_pattern",
    "convert_legacy_to_cldr",
    "sprintf_to_icu",
    "trim_forms",
]

logger = logging.getLogger(__name__)

_COUNT_PLACEHOLDER = "{" + COUNT_ARGUMENT + "}"
_SIMPLE_VERBS: tuple[str, ...] = ("%s", "%d", "%u", "%f")
_POSITIONAL_VERB = re.compile(r"%(\d+)\$[sduif]")

# Preference order for synthesizing a missing "other" branch.
_OTHER_DONORS: tuple[PluralCategory, ...] = (
    PluralCategory.MANY,
    PluralCategory.FEW,
    PluralCategory.ONE,
)

_DEFAULT_RULES = CldrPluralRules()


def sprintf_to_icu(text: str) -> str:
    """Convert printf placeholders in a form to ICU placeholders.

    ``%s %d %u %f`` become ``{count}``; ``%1$s`` becomes ``{count}`` and
    ``%N$s`` becomes ``{N-1}``.

    Example:
        >>> sprintf_to_icu("%1$s files in %2$s")
        '{count} files in {1}'
    """
    for verb in _SIMPLE_VERBS:
        text = text.replace(verb, _COUNT_PLACEHOLDER)

    def positional(match: re.Match[str]) -> str:
        position = int(match.group(1)) - 1
        return _COUNT_PLACEHOLDER if position == 0 else "{" + str(position) + "}"

    return _POSITIONAL_VERB.sub(positional, text)


def _branch_text(text: str) -> str:
    return sprintf_to_icu(text).replace(_COUNT_PLACEHOLDER, ICU_NUMBER_TOKEN)


def build_icu_pattern(forms: Mapping[PluralCategory, str] | Mapping[str, str]) -> str:
    """Build the canonical ICU plural pattern for a CLDR form table.

    Args:
        forms: Category (or category name) to form text; other keys ignored

    Returns:
        ICU plural pattern

    Example:
        >>> build_icu_pattern({"one": "{count} file", "few": "%d files"})
        '{count, plural, one {# file} few {# files} other {# files}}'
    """
    parts = [
        f"{category} {{{_branch_text(forms[category])}}}"
        for category in CATEGORY_ORDER
        if category in forms
    ]
    if PluralCategory.OTHER not in forms:
        donor = next((forms[c] for c in _OTHER_DONORS if c in forms), ICU_NUMBER_TOKEN)
        parts.append(f"other {{{_branch_text(donor)}}}")
    return "{" + COUNT_ARGUMENT + ", plural, " + " ".join(parts) + "}"


def convert_legacy_to_cldr(
    legacy_forms: RawForms,
    locale: str,
    rules: PluralRules | None = None,
) -> dict[PluralCategory, str]:
    """Map a legacy numeric-key table onto CLDR categories for a locale.

    Ranges are expanded, each number is classified with the locale's plural
    rules, and the lowest number wins for each category. ``other`` comes
    from the maximum key when no number classifies as other.

    Args:
        legacy_forms: Raw legacy table ({"0": ..., "1": ..., "2-4": ..., "5": ...})
        locale: Target locale
        rules: Plural strategy (default CldrPluralRules)

    Returns:
        Category-keyed forms in canonical order

    Raises:
        TemplateError: If the table has no integer or range keys

    Example:
        >>> convert_legacy_to_cldr({"1": "soubor", "2-4": "soubory", "5": "souborů"}, "cs")
        {<PluralCategory.ONE: 'one'>: 'soubor', <PluralCategory.FEW: 'few'>: 'soubory', \
<PluralCategory.OTHER: 'other'>: 'souborů'}
    """
    rules = rules or _DEFAULT_RULES
    expanded, _ = expand_legacy_keys(legacy_forms)
    if not expanded:
        msg = "Legacy form table has no integer or range keys"
        raise TemplateError(msg)

    available = set(rules.available_categories(locale))
    found: dict[PluralCategory, str] = {}
    for number in sorted(expanded):
        category = rules.category(locale, number)
        if category in available and category not in found:
            found[category] = expanded[number]
    if PluralCategory.OTHER not in found:
        found[PluralCategory.OTHER] = expanded[max(expanded)]
    return {c: found[c] for c in CATEGORY_ORDER if c in found}


def trim_forms(
    forms: Mapping[PluralCategory, str],
    locale: str,
    rules: PluralRules | None = None,
) -> dict[PluralCategory, str]:
    """Drop categories the locale can never select, keeping ``other``.

    Example:
        >>> trim_forms({PluralCategory.ONE: "a", PluralCategory.FEW: "b",
        ...             PluralCategory.OTHER: "c"}, "en")
        {<PluralCategory.ONE: 'one'>: 'a', <PluralCategory.OTHER: 'other'>: 'c'}
    """
    available = set((rules or _DEFAULT_RULES).available_categories(locale))
    available.add(PluralCategory.OTHER)
    return {c: forms[c] for c in CATEGORY_ORDER if c in forms and c in available}


@dataclass(frozen=True, slots=True)
class Detection:
    """Classification of a raw plural table.

    Attributes:
        is_cldr: True if keyed by CLDR category names
        pattern: Canonical ICU pattern for CLDR tables, None for legacy
    """

    is_cldr: bool
    pattern: str | None = None


class FormatDetector:
    """Classifies dictionary entries and derives their render metadata.

    Stateless and thread-safe.

    Example:
        >>> detector = FormatDetector()
        >>> detector.detect({"one": "# file", "other": "# files"}).is_cldr
        True
        >>> detector.detect({"0": "none", "2-4": "few"}).is_cldr
        False
    """

    __slots__ = ()

    @staticmethod
    def is_cldr(raw_forms: RawForms) -> bool:
        """True if any key is a CLDR category name."""
        return any(isinstance(key, str) and key in CATEGORY_NAMES for key in raw_forms)

    def detect(self, raw_forms: RawForms) -> Detection:
        """Classify a raw plural table and build its pattern when CLDR."""
        if not self.is_cldr(raw_forms):
            return Detection(is_cldr=False)
        cldr = {k: v for k, v in raw_forms.items() if isinstance(k, str) and k in CATEGORY_NAMES}
        return Detection(is_cldr=True, pattern=build_icu_pattern(cldr))

    def to_template(self, raw: RawValue) -> Template:
        """Decode a raw dictionary entry.

        Plain strings become LiteralTemplate unless they are themselves ICU
        plural patterns, which become CldrForms carrying the source pattern.

        Args:
            raw: Entry as returned by a Dictionary

        Returns:
            Decoded template

        Raises:
            TemplateError: Empty form table or unsupported value type
        """
        match raw:
            case str():
                if has_plural_argument(raw):
                    try:
                        return CldrForms(parse_icu_pattern(raw), pattern=raw)
                    except InvalidPatternError as e:
                        logger.debug("Treating unparseable ICU text as literal: %s", e)
                return LiteralTemplate(raw)
            case Mapping():
                if self.is_cldr(raw):
                    return CldrForms.from_raw(raw)
                return LegacyForms.from_raw(raw)
            case _:
                msg = f"Unsupported translation value type: {type(raw).__name__}"
                raise TemplateError(msg)

    def metadata(self, template: Template) -> FormatMetadata:
        """Compute render metadata for a decoded template."""
        match template:
            case CldrForms(forms=forms, pattern=pattern):
                return FormatMetadata(
                    kind=FormatKind.ICU,
                    pattern=pattern or build_icu_pattern(forms),
                    categories=template.categories,
                )
            case _:
                return FormatMetadata(kind=FormatKind.SPRINTF)
