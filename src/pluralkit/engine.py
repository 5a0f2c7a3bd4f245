"""TranslationEngine - main public API for translating messages.

Resolves a message key to a translated, pluralized and interpolated string
for the active locale, or formats a numeric literal with locale decimal
conventions.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal

from pluralkit.config import EngineConfig
from pluralkit.diagnostics import FormattingError
from pluralkit.dictionary import Dictionary, DictionaryFactory
from pluralkit.messages import Key, Message, NumericLiteral
from pluralkit.rules import LegacyRules, PluralRules
from pluralkit.runtime import LocaleContext, MessageRenderer, TemplateCatalog
from pluralkit.templates import LiteralTemplate

__all__ = ["TranslationEngine"]

logger = logging.getLogger(__name__)


class TranslationEngine:
    """Locale-aware message translation with CLDR pluralization.

    The count is the first positional parameter. Plural entries pick their
    form from it; printf placeholders consume it first, followed by the
    remaining parameters. Named parameters fill ICU ``{name}`` placeholders.

    Dictionaries are created lazily through the factory and replaced when
    the locale or fallback locale changes.

    Example:
        >>> from pluralkit.dictionary import MappingDictionaryFactory
        >>> factory = MappingDictionaryFactory({
        ...     "cs": {"rooms": {"one": "{count} pokoj", "few": "{count} pokoje",
        ...                      "many": "{count, number} pokoje", "other": "{count} pokojů"}},
        ... })
        >>> engine = TranslationEngine(factory, EngineConfig(locale="cs_CZ"))
        >>> engine.translate("rooms", 3)
        '3 pokoje'
        >>> engine.translate("rooms", 1.5)
        '1,5 pokoje'
        >>> engine.translate(NumericLiteral(3.14159, 2))
        '3,14'

    Thread Safety:
        translate() may be called concurrently. Locale setters swap the
        dictionary and catalog atomically under an internal lock.
    """

    __slots__ = (
        "_catalog",
        "_config",
        "_dictionary",
        "_factory",
        "_fallback_locale",
        "_locale",
        "_lock",
        "_renderer",
    )

    def __init__(
        self,
        dictionary_factory: DictionaryFactory,
        /,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            dictionary_factory: Builds the Dictionary for each locale pair
            config: Engine configuration (default EngineConfig())
        """
        config = config or EngineConfig()
        self._factory = dictionary_factory
        self._config = config
        self._locale = config.locale
        self._fallback_locale = config.fallback_locale
        self._renderer = MessageRenderer(
            plural_rules=config.plural_rules,
            legacy_rules=config.legacy_rules,
            strict=config.strict,
            cldr_enabled=config.cldr_enabled,
        )
        self._dictionary: Dictionary | None = None
        self._catalog: TemplateCatalog | None = None
        self._lock = threading.RLock()

        logger.info(
            "TranslationEngine initialized for locale: %s (fallback=%s, strict=%s, cldr=%s)",
            self._locale,
            self._fallback_locale,
            config.strict,
            "enabled" if config.cldr_enabled else "disabled",
        )

    @classmethod
    def for_system_locale(
        cls, dictionary_factory: DictionaryFactory, /, **overrides: object
    ) -> TranslationEngine:
        """Create an engine for the operating system's locale.

        Args:
            dictionary_factory: Builds the Dictionary for each locale pair
            **overrides: Any other EngineConfig field

        Returns:
            TranslationEngine
        """
        return cls(dictionary_factory, EngineConfig.for_system_locale(**overrides))

    @property
    def locale(self) -> str:
        """Active locale (read-only; use set_locale to change)."""
        return self._locale

    @property
    def fallback_locale(self) -> str | None:
        """Fallback locale (read-only; use set_fallback_locale to change)."""
        return self._fallback_locale

    @property
    def config(self) -> EngineConfig:
        """Configuration the engine was created with."""
        return self._config

    @property
    def strict(self) -> bool:
        """Whether a plural entry without count raises AmbiguousPluralError."""
        return self._renderer.strict

    @property
    def cldr_enabled(self) -> bool:
        """Whether CLDR tables render through ICU evaluation."""
        return self._renderer.cldr_enabled

    @property
    def plural_rules(self) -> PluralRules:
        """CLDR category strategy in use."""
        return self._renderer.plural_rules

    @property
    def legacy_rules(self) -> LegacyRules:
        """Legacy form index strategy in use."""
        return self._renderer.legacy_rules

    @property
    def dictionary(self) -> Dictionary:
        """Dictionary for the active locale pair, created on first access."""
        return self._current_catalog().dictionary

    def set_locale(self, locale: str) -> None:
        """Switch the active locale.

        Drops the cached dictionary and templates (flushing the dictionary
        first), since translations differ per locale.

        Args:
            locale: New locale code

        Raises:
            ValueError: If locale is empty
        """
        if not locale or not locale.strip():
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        with self._lock:
            if locale != self._locale:
                logger.debug("Switching locale: %s -> %s", self._locale, locale)
                self._locale = locale
                self._invalidate()

    def set_fallback_locale(self, fallback_locale: str | None) -> None:
        """Switch the fallback locale; None disables fallback.

        Raises:
            ValueError: If fallback_locale is an empty string
        """
        if fallback_locale is not None and not fallback_locale.strip():
            msg = "Fallback locale code cannot be empty"
            raise ValueError(msg)
        with self._lock:
            if fallback_locale != self._fallback_locale:
                logger.debug(
                    "Switching fallback locale: %s -> %s", self._fallback_locale, fallback_locale
                )
                self._fallback_locale = fallback_locale
                self._invalidate()

    def translate(self, message: Message, *parameters: object, **named: object) -> str:
        """Translate a message.

        Args:
            message: Key (or plain str key), NumericLiteral, or None
            *parameters: Count first, then printf / ``{N}`` arguments
            **named: Arguments for ICU ``{name}`` placeholders

        Returns:
            Translated string. Unknown keys come back as the key itself
            (with printf parameters applied); a translation that renders
            empty also yields the key.

        Raises:
            AmbiguousPluralError: Strict mode and a plural entry without count
            TypeError: If message is not a supported type

        Example:
            >>> engine.translate("files", 5)  # doctest: +SKIP
            '5 souborů'
        """
        match message:
            case None:
                return ""
            case NumericLiteral(value=value, decimals=decimals):
                return self.format_number(value, decimals)
            case str():
                key = message
            case Key(text=key):
                pass
            case _:
                msg = f"Message must be Key, NumericLiteral or str, not {type(message).__name__}"
                raise TypeError(msg)

        if not key:
            return ""

        count = parameters[0] if parameters else None
        locale = self._locale
        entry = self._current_catalog().get(key)

        if entry is None:
            logger.debug("Message '%s' not found, passing key through", key)
            return self._renderer.render(LiteralTemplate(key), locale, count, parameters)

        result = self._renderer.render(
            entry.template,
            locale,
            count,
            parameters,
            named,
            key=key,
            metadata=entry.metadata,
        )
        # An empty stored translation is a data mistake; show the key instead
        return result or key

    def has(self, key: str) -> bool:
        """True if the active dictionary has a usable translation for key."""
        return self._current_catalog().get(key) is not None

    def format_number(self, value: int | float | Decimal, decimals: int = 0) -> str:
        """Format a number for the active locale with fixed fraction digits.

        Args:
            value: Number to format
            decimals: Exact fraction digits (default 0)

        Returns:
            Formatted number; str(value) if Babel cannot format it

        Example:
            >>> engine.format_number(1234.567, 2)  # doctest: +SKIP
            '1 234,57'
        """
        try:
            return LocaleContext.create(self._locale).format_number(value, decimals)
        except FormattingError as e:
            logger.warning("%s", e)
            return e.fallback_value

    def flush(self) -> None:
        """Flush the current dictionary, if one was created. Idempotent."""
        with self._lock:
            if self._dictionary is not None:
                self._dictionary.flush()

    def close(self) -> None:
        """Flush and release the current dictionary. Safe to call repeatedly."""
        with self._lock:
            self._invalidate()

    def __enter__(self) -> TranslationEngine:
        """Enter context manager; the dictionary is flushed on exit.

        Example:
            >>> with TranslationEngine(factory) as engine:  # doctest: +SKIP
            ...     engine.translate("hello")
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager. Does not suppress exceptions."""
        self.close()
        logger.debug("TranslationEngine context exited for locale: %s", self._locale)

    def _current_catalog(self) -> TemplateCatalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._lock:
            if self._catalog is None:
                self._dictionary = self._factory.create(self._locale, self._fallback_locale)
                self._catalog = TemplateCatalog(self._dictionary)
                logger.debug("Created dictionary for locale: %s", self._locale)
            return self._catalog

    def _invalidate(self) -> None:
        if self._dictionary is not None:
            self._dictionary.flush()
        self._dictionary = None
        self._catalog = None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"TranslationEngine(locale={self._locale!r}, "
            f"fallback_locale={self._fallback_locale!r}, strict={self.strict})"
        )

