"""Translator exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TranslatorError(Exception):
    """Base exception for all pluralkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslatorError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class AmbiguousPluralError(TranslatorError):
    """Plural form table selected without a count.

    Only raised in strict mode. In normal mode the condition is logged and
    the highest-numbered form (or the ``other`` category) is used.
    """


class InvalidPatternError(TranslatorError):
    """ICU plural pattern could not be parsed.

    Never escapes the renderer: the caller receives a naive substitution
    of the count into the raw pattern.

    Attributes:
        pattern: The pattern text that failed to parse
        position: Character offset where parsing stopped
    """

    def __init__(self, message: str | Diagnostic, *, pattern: str = "", position: int = 0) -> None:
        """Initialize InvalidPatternError.

        Args:
            message: Error message string OR Diagnostic object
            pattern: The pattern text that failed to parse
            position: Character offset where parsing stopped
        """
        super().__init__(message)
        self.pattern = pattern
        self.position = position


class TemplateError(TranslatorError):
    """Translation entry cannot form a usable template.

    Raised at construction time for structural data defects such as a
    plural form table without any forms.
    """


class FormattingError(TranslatorError):
    """Raised when locale-aware number formatting fails.

    The error carries a fallback_value that should be used in the output
    when the formatting fails, so rendering can continue with usable content.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
