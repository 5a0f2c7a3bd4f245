"""pluralkit - locale-aware message translation with CLDR pluralization.

Resolves message keys to translated strings with correct plural forms for
both legacy numeric-key tables and CLDR category tables, interpolates
printf and ICU placeholders, and formats numbers with locale decimal
conventions.

Public API:
    TranslationEngine - Translate keys and numeric literals for a locale
    EngineConfig - Immutable engine configuration
    Key, NumericLiteral - Tagged message inputs
    MappingDictionary, MappingDictionaryFactory - In-memory dictionaries
    PluralCategory - CLDR plural category enum

Exceptions:
    TranslatorError - Base exception class
    AmbiguousPluralError - Plural entry rendered without count (strict mode)
    InvalidPatternError - Unparseable ICU plural pattern
    TemplateError - Unusable translation entry
    FormattingError - Locale number formatting failure

Submodules:
    pluralkit.rules - Plural selection strategies (CLDR, Babel, legacy)
    pluralkit.formatting - printf substitution, ICU patterns, format detection
    pluralkit.runtime - Template catalog, renderer, LocaleContext
    pluralkit.dictionary - Dictionary contracts and in-memory implementation
    pluralkit.diagnostics - Error types and structured diagnostics
"""

# Essential Public API - Minimal exports for clean namespace
from .config import EngineConfig
from .diagnostics import (
    AmbiguousPluralError,
    FormattingError,
    InvalidPatternError,
    TemplateError,
    TranslatorError,
)
from .dictionary import MappingDictionary, MappingDictionaryFactory
from .engine import TranslationEngine
from .enums import PluralCategory
from .messages import Key, NumericLiteral

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("pluralkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AmbiguousPluralError",
    "EngineConfig",
    "FormattingError",
    "InvalidPatternError",
    "Key",
    "MappingDictionary",
    "MappingDictionaryFactory",
    "NumericLiteral",
    "PluralCategory",
    "TemplateError",
    "TranslationEngine",
    "TranslatorError",
    "__version__",
]
