"""Template rendering: plural selection, ICU evaluation, printf interpolation.

Rendering pipeline per call:

1. LiteralTemplate: the text itself.
2. LegacyForms: legacy form index for (locale, count), exact key else the
   maximum key. ``%count%`` renders as the count.
3. CldrForms: the ICU pattern is evaluated with the category re-derived
   from (locale, count) at format time. ``#`` and ``{count}`` insert the
   locale-formatted count. With CLDR disabled, form tables are bridged onto
   legacy keys and read at the legacy slot of the count's category; tables
   decoded from an ICU string still render as ICU.
4. printf pass over literal and legacy output: parameters are consumed left
   to right, the count first when it was supplied.

A plural template rendered without a count is ambiguous. The renderer logs
a warning (or raises AmbiguousPluralError in strict mode), renders the
highest legacy form or the ``other`` branch, and leaves ``%s`` where the
count would go so the printf pass can fill it from the remaining
parameters.

Python 3.13+.
"""

import functools
import logging
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal, InvalidOperation

from pluralkit.constants import FALLBACK_MISSING_COUNT, LEGACY_COUNT_PLACEHOLDER
from pluralkit.diagnostics import (
    AmbiguousPluralError,
    ErrorTemplate,
    FormattingError,
    InvalidPatternError,
)
from pluralkit.enums import PluralCategory
from pluralkit.formatting.detector import FormatDetector
from pluralkit.formatting.icu import PluralMessage, naive_substitute, parse_icu_message
from pluralkit.formatting.sprintf import apply_sprintf
from pluralkit.rules import (
    CldrPluralRules,
    LegacyPluralRules,
    LegacyRules,
    PluralRules,
    legacy_index,
    to_decimal,
)
from pluralkit.runtime.locale_context import LocaleContext
from pluralkit.templates import CldrForms, FormatMetadata, LegacyForms, LiteralTemplate, Template

__all__ = ["MessageRenderer", "as_count"]

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1024)
def _parse(pattern: str) -> PluralMessage:
    return parse_icu_message(pattern)


def as_count(value: object) -> Decimal | None:
    """Interpret a parameter as a numeric count.

    Args:
        value: First positional parameter

    Returns:
        Finite Decimal, or None if value is not numeric

    Example:
        >>> as_count("2.5")
        Decimal('2.5')
        >>> as_count("many") is None
        True
    """
    match value:
        case bool() | None:
            return None
        case int() | float() | Decimal():
            number = to_decimal(value)
        case str():
            try:
                number = Decimal(value.strip())
            except InvalidOperation:
                return None
        case _:
            return None
    return number if number.is_finite() else None


class MessageRenderer:
    """Renders decoded templates for a locale, count and parameters.

    Stateless apart from injected strategies; safe to share across threads.

    Example:
        >>> renderer = MessageRenderer()
        >>> forms = CldrForms({PluralCategory.ONE: "{count} soubor",
        ...                    PluralCategory.FEW: "{count} soubory",
        ...                    PluralCategory.OTHER: "{count} souborů"})
        >>> renderer.render(forms, "cs_CZ", 3, (3,))
        '3 soubory'
    """

    __slots__ = ("_cldr_enabled", "_detector", "_legacy_rules", "_plural_rules", "_strict")

    def __init__(
        self,
        *,
        plural_rules: PluralRules | None = None,
        legacy_rules: LegacyRules | None = None,
        strict: bool = False,
        cldr_enabled: bool = True,
        detector: FormatDetector | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            plural_rules: CLDR category strategy (default CldrPluralRules)
            legacy_rules: Legacy form index strategy (default LegacyPluralRules)
            strict: Raise AmbiguousPluralError instead of logging a warning
            cldr_enabled: When False, CLDR tables render through legacy keys
            detector: Metadata source for templates rendered without metadata
        """
        self._plural_rules: PluralRules = plural_rules or CldrPluralRules()
        self._legacy_rules: LegacyRules = legacy_rules or LegacyPluralRules()
        self._strict = strict
        self._cldr_enabled = cldr_enabled
        self._detector = detector or FormatDetector()

    @property
    def strict(self) -> bool:
        """Whether ambiguous plurals raise."""
        return self._strict

    @property
    def cldr_enabled(self) -> bool:
        """Whether CLDR tables render through ICU evaluation."""
        return self._cldr_enabled

    @property
    def plural_rules(self) -> PluralRules:
        """Injected CLDR category strategy."""
        return self._plural_rules

    @property
    def legacy_rules(self) -> LegacyRules:
        """Injected legacy form index strategy."""
        return self._legacy_rules

    def render(
        self,
        template: Template,
        locale: str,
        count: object,
        params: Sequence[object] = (),
        named: Mapping[str, object] | None = None,
        *,
        key: str = "",
        metadata: FormatMetadata | None = None,
    ) -> str:
        """Render a template.

        Args:
            template: Decoded template
            locale: Active locale
            count: Count for plural selection; None when not supplied
            params: All positional parameters, count included at index 0
                when it was supplied
            named: Named parameters for ICU ``{name}`` placeholders
            key: Message key, used in diagnostics
            metadata: Precomputed metadata (computed on demand if None)

        Returns:
            Rendered string

        Raises:
            AmbiguousPluralError: Strict mode and a plural template without count
        """
        match template:
            case LiteralTemplate(text=text):
                return self._interpolate(text, count, params)
            case LegacyForms():
                text = self._select_legacy(template, locale, count, key)
                return self._interpolate(text, count, params)
            case CldrForms(pattern=str() as pattern) if not self._cldr_enabled:
                # Source text around the plural block and =N selectors have no legacy form
                return self._render_icu(pattern, locale, count, params, named or {}, key)
            case CldrForms() if not self._cldr_enabled:
                text = self._select_legacy(
                    template.to_legacy(), locale, count, key, self._bridged_index
                )
                return self._interpolate(text, count, params)
            case CldrForms():
                metadata = metadata or self._detector.metadata(template)
                pattern = metadata.pattern or ""
                return self._render_icu(pattern, locale, count, params, named or {}, key)
        msg = f"Unsupported template type: {type(template).__name__}"
        raise TypeError(msg)

    def format_count(self, locale: str, count: Decimal) -> str:
        """Locale-format a count for ``#`` and ``{count}``."""
        try:
            return LocaleContext.create(locale).format_number(count)
        except FormattingError as e:
            logger.warning("%s", e)
            return e.fallback_value

    def _ambiguous(self, key: str, locale: str) -> None:
        diagnostic = ErrorTemplate.ambiguous_plural(key, locale)
        logger.warning("translator: %s", diagnostic.message)
        if self._strict:
            raise AmbiguousPluralError(diagnostic)

    def _legacy_index(self, locale: str, number: Decimal) -> int:
        return self._legacy_rules.form_index(locale, int(number))

    def _bridged_index(self, locale: str, number: Decimal) -> int:
        """Legacy slot of the CLDR category, for tables bridged by to_legacy()."""
        return legacy_index(self._plural_rules.category(locale, number))

    def _select_legacy(
        self,
        forms: LegacyForms,
        locale: str,
        count: object,
        key: str,
        index_of: Callable[[str, Decimal], int] | None = None,
    ) -> str:
        if count is None:
            self._ambiguous(key, locale)
            text = forms.get(forms.max_key)
            return text.replace(LEGACY_COUNT_PLACEHOLDER, FALLBACK_MISSING_COUNT)

        number = as_count(count)
        if number is None:
            text = forms.get(forms.max_key)
        else:
            text = forms.get((index_of or self._legacy_index)(locale, number))
        return text.replace(LEGACY_COUNT_PLACEHOLDER, str(count))

    def _render_icu(
        self,
        pattern: str,
        locale: str,
        count: object,
        params: Sequence[object],
        named: Mapping[str, object],
        key: str,
    ) -> str:
        number = as_count(count)
        if count is None:
            self._ambiguous(key, locale)
            category = PluralCategory.OTHER
            count_text = FALLBACK_MISSING_COUNT
        elif number is None:
            category = PluralCategory.OTHER
            count_text = str(count)
        else:
            category = self._plural_rules.category(locale, number)
            count_text = self.format_count(locale, number)

        try:
            message = _parse(pattern)
        except InvalidPatternError as e:
            logger.warning("Invalid ICU pattern for '%s', using plain substitution: %s", key, e)
            plain = FALLBACK_MISSING_COUNT if count is None else str(count)
            return naive_substitute(pattern, plain)

        text = message.format(category, number, count_text, params, named)
        if count is None:
            # Fill the open count slot from the remaining parameters
            return self._interpolate(text, None, params)
        return text

    @staticmethod
    def _interpolate(text: str, count: object, params: Sequence[object]) -> str:
        # A missing count is not a printf argument
        args = params if count is not None else params[1:]
        if not args:
            return text
        return apply_sprintf(text, args)
