"""Shared constants for pluralkit.

This module provides centralized configuration constants used across the
rules, formatting and runtime packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale defaults: Locale codes used when nothing else is configured
- Cache limits: Memory bounds for caching subsystems
- Template syntax: Tokens shared by the detector, parser and renderer
- Fallback strings: Output used when a value cannot be rendered

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    "DEFAULT_FALLBACK_LOCALE",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "PLURAL_CACHE_SIZE",
    # Template syntax
    "COUNT_ARGUMENT",
    "ICU_NUMBER_TOKEN",
    "LEGACY_COUNT_PLACEHOLDER",
    "RESERVED_PLACEHOLDERS",
    # Fallback strings
    "FALLBACK_MISSING_COUNT",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used by TranslationEngine and EngineConfig when none is given.
DEFAULT_LOCALE: str = "en_US"

# Locale whose dictionary entries fill gaps in the primary dictionary.
DEFAULT_FALLBACK_LOCALE: str = "en_US"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum memoized (language, count) pairs in the CLDR selector.
# Counts in UI strings cluster around small integers, so 4096 entries
# keep the hit rate high without unbounded growth.
PLURAL_CACHE_SIZE: int = 4096

# ============================================================================
# TEMPLATE SYNTAX
# ============================================================================

# Name of the plural argument in ICU patterns: {count, plural, ...}
COUNT_ARGUMENT: str = "count"

# ICU implicit-number token inside a plural branch.
ICU_NUMBER_TOKEN: str = "#"

# Named count placeholder understood inside legacy numeric-key forms.
LEGACY_COUNT_PLACEHOLDER: str = "%count%"

# Framework-reserved placeholders that printf substitution must not consume.
RESERVED_PLACEHOLDERS: tuple[str, ...] = ("%label", "%name", "%value")

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Printf slot left in place of the count when a plural table is rendered
# without one, so a later positional pass can still fill it.
FALLBACK_MISSING_COUNT: str = "%s"
