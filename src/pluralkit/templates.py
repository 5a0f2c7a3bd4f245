"""Immutable translation templates.

A dictionary entry is decoded into exactly one of three template variants:

- LiteralTemplate: a plain string, no pluralization
- LegacyForms: integer-keyed plural forms ("0", "1", "2-4", "5")
- CldrForms: CLDR category-keyed plural forms (one, few, many, other, ...)

Templates never change after construction. FormatMetadata describes how a
template is rendered and is computed once per template by the catalog.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from pluralkit.constants import COUNT_ARGUMENT, LEGACY_COUNT_PLACEHOLDER
from pluralkit.diagnostics import ErrorTemplate, TemplateError
from pluralkit.enums import CATEGORY_NAMES, CATEGORY_ORDER, FormatKind, PluralCategory
from pluralkit.rules.cldr import legacy_index

__all__ = [
    "CldrForms",
    "FormatMetadata",
    "LegacyForms",
    "LiteralTemplate",
    "RawForms",
    "RawValue",
    "Template",
    "expand_legacy_keys",
]

logger = logging.getLogger(__name__)

RawForms: TypeAlias = Mapping[str | int, str]
"""Undecoded plural form table as stored in a dictionary."""

RawValue: TypeAlias = str | RawForms
"""Undecoded dictionary entry."""

_RANGE_KEY = re.compile(r"^(\d+)-(\d+)$")
_INTEGER_KEY = re.compile(r"^\d+$")

# Preference order for synthesizing a missing OTHER form.
_OTHER_DONORS: tuple[PluralCategory, ...] = (
    PluralCategory.MANY,
    PluralCategory.FEW,
    PluralCategory.ONE,
)
_COUNT_PLACEHOLDER = "{" + COUNT_ARGUMENT + "}"
_OTHER_DEFAULT = _COUNT_PLACEHOLDER


def expand_legacy_keys(raw: RawForms) -> tuple[dict[int, str], dict[str, str]]:
    """Expand range keys of a legacy form table.

    "2-4" becomes keys 2, 3 and 4 sharing one text. Later entries overwrite
    earlier ones, so an explicit key listed after a range wins. Keys that
    are neither integers nor ranges are returned separately, untouched.

    Args:
        raw: Legacy form table from the dictionary

    Returns:
        Tuple of (integer-keyed forms, literal keys that were not expanded)

    Example:
        >>> expand_legacy_keys({"0": "none", "2-4": "few", "x": "?"})
        ({0: 'none', 2: 'few', 3: 'few', 4: 'few'}, {'x': '?'})
    """
    forms: dict[int, str] = {}
    literal: dict[str, str] = {}
    for key, text in raw.items():
        if isinstance(key, int) and not isinstance(key, bool):
            forms[key] = text
            continue
        key_text = str(key)
        if _INTEGER_KEY.match(key_text):
            forms[int(key_text)] = text
        elif match := _RANGE_KEY.match(key_text):
            for number in range(int(match.group(1)), int(match.group(2)) + 1):
                forms[number] = text
        else:
            logger.debug("Legacy form key %r is not an integer or range; kept literally", key)
            literal[key_text] = text
    return forms, literal


@dataclass(frozen=True, slots=True)
class LiteralTemplate:
    """Plain translation text."""

    text: str


@dataclass(frozen=True, slots=True)
class LegacyForms:
    """Plural forms keyed by legacy numeric form index.

    Lookup picks the exact index, else the form at the maximum key.

    Attributes:
        forms: Integer-keyed forms, ranges already expanded
        literal_keys: Keys that were neither integers nor ranges; never selected

    Raises:
        TemplateError: If forms is empty
    """

    forms: Mapping[int, str]
    literal_keys: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.forms:
            raise TemplateError(ErrorTemplate.empty_form_table("legacy"))
        object.__setattr__(self, "forms", MappingProxyType(dict(self.forms)))
        object.__setattr__(self, "literal_keys", MappingProxyType(dict(self.literal_keys)))

    @classmethod
    def from_raw(cls, raw: RawForms) -> LegacyForms:
        """Build from a raw table, expanding "N-M" range keys."""
        forms, literal = expand_legacy_keys(raw)
        return cls(forms, literal)

    @property
    def max_key(self) -> int:
        """Highest form index present."""
        return max(self.forms)

    def get(self, index: int) -> str:
        """Form at index, or the form at max_key when index is absent."""
        text = self.forms.get(index)
        return self.forms[self.max_key] if text is None else text


@dataclass(frozen=True, slots=True)
class CldrForms:
    """Plural forms keyed by CLDR category.

    OTHER is always present: when the source table lacks it, it is
    synthesized from many, few or one (first present), else "{count}".

    Attributes:
        forms: Category-keyed forms in canonical category order
        pattern: Source ICU message when the entry was written as a pattern
            string (may carry text around the plural block)

    Raises:
        TemplateError: If forms is empty
    """

    forms: Mapping[PluralCategory, str]
    pattern: str | None = None

    def __post_init__(self) -> None:
        if not self.forms:
            raise TemplateError(ErrorTemplate.empty_form_table("cldr"))
        forms = dict(self.forms)
        if PluralCategory.OTHER not in forms:
            forms[PluralCategory.OTHER] = next(
                (forms[c] for c in _OTHER_DONORS if c in forms), _OTHER_DEFAULT
            )
        ordered = {c: forms[c] for c in CATEGORY_ORDER if c in forms}
        object.__setattr__(self, "forms", MappingProxyType(ordered))

    @classmethod
    def from_raw(cls, raw: RawForms, pattern: str | None = None) -> CldrForms:
        """Build from a raw table, keeping only CLDR category keys."""
        forms: dict[PluralCategory, str] = {}
        for key, text in raw.items():
            if isinstance(key, str) and key in CATEGORY_NAMES:
                forms[PluralCategory(key)] = text
            else:
                logger.debug("Ignoring non-category key %r in CLDR form table", key)
        return cls(forms, pattern)

    @property
    def categories(self) -> tuple[PluralCategory, ...]:
        """Categories present, canonical order."""
        return tuple(self.forms)

    def to_legacy(self) -> LegacyForms:
        """Bridge onto legacy numeric keys (zero=0, one=1, two=2, few=3, many/other=5).

        Lossy: many and other share index 5 and other wins. ``{count}``
        becomes the legacy ``%count%`` placeholder.
        """
        return LegacyForms({
            legacy_index(c): text.replace(_COUNT_PLACEHOLDER, LEGACY_COUNT_PLACEHOLDER)
            for c, text in self.forms.items()
        })


Template: TypeAlias = LiteralTemplate | LegacyForms | CldrForms
"""Decoded dictionary entry."""


@dataclass(frozen=True, slots=True)
class FormatMetadata:
    """How a template is rendered.

    Attributes:
        kind: SPRINTF for literal and legacy templates, ICU for CLDR forms
        pattern: ICU pattern for CLDR forms, None otherwise
        categories: Categories present in CLDR forms, None otherwise
    """

    kind: FormatKind
    pattern: str | None = None
    categories: tuple[PluralCategory, ...] | None = None

    @property
    def is_icu(self) -> bool:
        """True when the template renders through ICU plural evaluation."""
        return self.kind is FormatKind.ICU
