"""Engine configuration.

Provides a single frozen dataclass that encapsulates the engine's locale,
error-handling and plural-strategy settings, so callers can build, share
and compare configurations independently of engine instances.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from pluralkit.constants import DEFAULT_FALLBACK_LOCALE, DEFAULT_LOCALE
from pluralkit.locale_utils import get_system_locale
from pluralkit.rules import LegacyRules, PluralRules

__all__ = ["EngineConfig"]


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable configuration for TranslationEngine.

    All fields have sensible defaults; ``EngineConfig()`` is usable as is.

    Attributes:
        locale: Active locale (default: "en_US")
        fallback_locale: Locale whose translations fill gaps in the active
            one (default: "en_US"); None disables fallback
        strict: Raise AmbiguousPluralError when a plural entry is rendered
            without a count, instead of logging a warning (default: False)
        cldr_enabled: Render CLDR category tables through ICU evaluation.
            When False they are bridged onto legacy numeric keys
            (default: True)
        plural_rules: CLDR category strategy; None selects CldrPluralRules
        legacy_rules: Legacy form index strategy; None selects LegacyPluralRules

    Example:
        >>> from pluralkit.rules import BabelPluralRules
        >>> config = EngineConfig(locale="cy_GB", plural_rules=BabelPluralRules())
        >>> config.strict
        False
    """

    locale: str = DEFAULT_LOCALE
    fallback_locale: str | None = DEFAULT_FALLBACK_LOCALE
    strict: bool = False
    cldr_enabled: bool = True
    plural_rules: PluralRules | None = None
    legacy_rules: LegacyRules | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If locale is empty, or fallback_locale is an empty string
            TypeError: If a strategy does not implement its protocol
        """
        if not self.locale or not self.locale.strip():
            msg = "locale must be a non-empty locale code"
            raise ValueError(msg)
        if self.fallback_locale is not None and not self.fallback_locale.strip():
            msg = "fallback_locale must be a non-empty locale code or None"
            raise ValueError(msg)
        if self.plural_rules is not None and not isinstance(self.plural_rules, PluralRules):
            msg = f"plural_rules must implement PluralRules, got {type(self.plural_rules).__name__}"
            raise TypeError(msg)
        if self.legacy_rules is not None and not isinstance(self.legacy_rules, LegacyRules):
            msg = f"legacy_rules must implement LegacyRules, got {type(self.legacy_rules).__name__}"
            raise TypeError(msg)

    @classmethod
    def for_system_locale(cls, **overrides: object) -> EngineConfig:
        """Build a configuration for the operating system's locale.

        Args:
            **overrides: Any other EngineConfig field

        Returns:
            EngineConfig with locale detected from LC_ALL, LC_MESSAGES or LANG
        """
        return cls(locale=get_system_locale(), **overrides)  # type: ignore[arg-type]
