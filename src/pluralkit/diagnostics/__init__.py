"""Diagnostic system for translator errors.

Provides structured error diagnostics with codes, hints and severities.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    AmbiguousPluralError,
    FormattingError,
    InvalidPatternError,
    TemplateError,
    TranslatorError,
)
from .templates import ErrorTemplate

__all__ = [
    "AmbiguousPluralError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FormattingError",
    "InvalidPatternError",
    "TemplateError",
    "TranslatorError",
]
