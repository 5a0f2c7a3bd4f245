"""Template syntaxes: printf substitution, ICU plural patterns, format detection.

Python 3.13+.
"""

from .detector import (
    Detection,
    FormatDetector,
    build_icu_pattern,
    convert_legacy_to_cldr,
    sprintf_to_icu,
    trim_forms,
)
from .icu import PluralMessage, naive_substitute, parse_icu_message, parse_icu_pattern
from .sprintf import SprintfError, apply_sprintf, vsprintf

__all__ = [
    "Detection",
    "FormatDetector",
    "PluralMessage",
    "SprintfError",
    "apply_sprintf",
    "build_icu_pattern",
    "convert_legacy_to_cldr",
    "naive_substitute",
    "parse_icu_message",
    "parse_icu_pattern",
    "sprintf_to_icu",
    "trim_forms",
    "vsprintf",
]
