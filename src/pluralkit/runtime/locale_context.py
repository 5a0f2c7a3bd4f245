"""Locale context for thread-safe, engine-scoped number formatting.

This module provides locale-aware number formatting without global state
mutation. Uses Babel for CLDR-compliant decimal and grouping symbols, so
Czech renders 1.5 as "1,5" and 1234.5 as "1 234,5".

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import InvalidOperation
from threading import RLock
from typing import ClassVar

from babel import Locale, UnknownLocaleError
from babel import numbers as babel_numbers

from pluralkit.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from pluralkit.diagnostics import ErrorTemplate, FormattingError
from pluralkit.locale_utils import normalize_locale
from pluralkit.rules.operands import Count, to_decimal

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

# Fraction digits shown for counts when no fixed precision is requested.
_DEFAULT_MAX_FRACTION_DIGITS = 3


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for number formatting.

    Use LocaleContext.create() factory to construct instances with proper validation.
    Direct construction via __init__ is not recommended (bypasses validation).

    Cache Management:
        LocaleContext uses an internal LRU cache for instance reuse:
        - LocaleContext.clear_cache(): Clear all cached instances
        - LocaleContext.cache_size(): Get current cache size
        - LocaleContext.cache_info(): Get detailed cache statistics

    Examples:
        >>> ctx = LocaleContext.create('cs-CZ')
        >>> ctx.format_number(1.5)
        '1,5'

        >>> ctx.format_number(3.14159, decimals=2)
        '3,14'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.locale_code  # Original code preserved
        'invalid-locale'
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Multiple threads can
        share the same instance without synchronization. Cache operations
        are protected by RLock.
    """

    # OrderedDict provides LRU semantics with O(1) operations
    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache.

        Use this method to free memory or reset state in tests.
        Thread-safe via RLock.
        """
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[str, ...]]:
        """Get detailed cache statistics.

        Returns:
            Dictionary with cache statistics:
            - size: Current number of cached instances
            - max_size: Maximum cache size
            - locales: Tuple of cached locale codes (LRU order)

        Example:
            >>> LocaleContext.clear_cache()
            >>> LocaleContext.create('cs-CZ')
            >>> LocaleContext.cache_info()
            {'size': 1, 'max_size': 128, 'locales': ('cs_CZ',)}
        """
        with cls._cache_lock:
            return {
                "size": len(cls._cache),
                "max_size": MAX_LOCALE_CACHE_SIZE,
                "locales": tuple(cls._cache.keys()),
            }

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to
        en_US. This method always succeeds; use create_or_raise() if you
        need strict validation.

        Thread Safety:
            Uses OrderedDict with RLock for thread-safe LRU caching.
            Concurrent calls with same locale_code return the same instance.

        Args:
            locale_code: Locale identifier (e.g., 'cs-CZ', 'cs_CZ', 'pl')

        Returns:
            LocaleContext instance. For unknown/invalid locales, uses en_US
            while preserving the original locale_code for debugging.
        """
        # "cs-CZ" and "cs_CZ" share one cache entry
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE)
            babel_locale = Locale.parse(DEFAULT_LOCALE)
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
            )
            babel_locale = Locale.parse(DEFAULT_LOCALE)
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        # Double-check: another thread may have published while we parsed
        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]

            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)

            cls._cache[cache_key] = ctx
            return ctx

    @classmethod
    def create_or_raise(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext or raise on validation failure.

        Args:
            locale_code: Locale identifier

        Returns:
            LocaleContext instance with valid locale

        Raises:
            ValueError: If locale code is invalid or unknown
        """
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError:
            diagnostic = ErrorTemplate.unknown_locale(locale_code)
            raise ValueError(diagnostic.message) from None
        except ValueError as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None
        return cls(locale_code=locale_code, _babel_locale=babel_locale)

    @property
    def babel_locale(self) -> Locale:
        """Get pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def format_number(
        self,
        value: Count,
        decimals: int | None = None,
        *,
        use_grouping: bool = True,
    ) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format (int, float, or Decimal)
            decimals: Exact number of fraction digits. None shows up to
                three fraction digits and drops trailing zeros.
            use_grouping: Use thousands separator (default: True)

        Returns:
            Formatted number string according to locale rules

        Raises:
            FormattingError: If Babel cannot format the value; carries
                str(value) as fallback_value

        Examples:
            >>> LocaleContext.create('cs_CZ').format_number(2.5)
            '2,5'
            >>> LocaleContext.create('en_US').format_number(1234.567, 2)
            '1,234.57'
            >>> LocaleContext.create('en_US').format_number(7)
            '7'
        """
        try:
            number = to_decimal(value)
            integer_part = "#,##0" if use_grouping else "0"
            if decimals is None:
                format_pattern = f"{integer_part}.{'#' * _DEFAULT_MAX_FRACTION_DIGITS}"
            elif decimals <= 0:
                number = round(number)
                format_pattern = integer_part
            else:
                format_pattern = f"{integer_part}.{'0' * decimals}"

            return str(
                babel_numbers.format_decimal(
                    number,
                    format=format_pattern,
                    locale=self.babel_locale,
                )
            )

        except (ValueError, TypeError, OverflowError, InvalidOperation, AttributeError, KeyError) as e:
            # Caller substitutes the fallback and keeps rendering
            raise FormattingError(
                ErrorTemplate.number_format_failed(value, self.locale_code, str(e)),
                fallback_value=str(value),
            ) from e

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"LocaleContext(locale_code={self.locale_code!r}, is_fallback={self.is_fallback})"

