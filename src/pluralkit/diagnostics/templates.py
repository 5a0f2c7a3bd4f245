"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def ambiguous_plural(key: str, locale_code: str) -> Diagnostic:
        """Plural form table rendered without a count.

        Args:
            key: The translation key whose entry has plural forms
            locale_code: Active locale

        Returns:
            Diagnostic for AMBIGUOUS_PLURAL
        """
        msg = f"Multiple plural forms are available (message: {key}), but the count is None."
        return Diagnostic(
            code=DiagnosticCode.AMBIGUOUS_PLURAL,
            message=msg,
            hint="Pass the count as the first parameter after the message key",
            key=key,
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def invalid_pattern(pattern: str, reason: str, position: int) -> Diagnostic:
        """ICU plural pattern could not be parsed.

        Args:
            pattern: The offending pattern
            reason: What the parser expected
            position: Character offset of the failure

        Returns:
            Diagnostic for INVALID_PATTERN
        """
        msg = f"Invalid ICU plural pattern at offset {position}: {reason} in {pattern!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PATTERN,
            message=msg,
            hint="Use the form '{count, plural, one {...} other {...}}'",
        )

    @staticmethod
    def empty_form_table(kind: str) -> Diagnostic:
        """Plural form table constructed without forms.

        Args:
            kind: Template kind name ("legacy" or "cldr")

        Returns:
            Diagnostic for EMPTY_FORM_TABLE
        """
        msg = f"A {kind} plural form table needs at least one form"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_FORM_TABLE,
            message=msg,
            hint="Remove the entry or give it a plain string value",
        )

    @staticmethod
    def number_format_failed(value: object, locale_code: str, reason: str) -> Diagnostic:
        """Locale number formatting failed.

        Args:
            value: The value being formatted
            locale_code: Locale used for formatting
            reason: Underlying error text

        Returns:
            Diagnostic for NUMBER_FORMAT_FAILED
        """
        msg = f"Number formatting failed for '{value}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.NUMBER_FORMAT_FAILED,
            message=msg,
            locale_code=locale_code,
        )

    @staticmethod
    def unknown_locale(locale_code: str) -> Diagnostic:
        """Locale identifier not recognized by Babel.

        Args:
            locale_code: The unrecognized locale

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"Unknown locale identifier '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Use a CLDR locale such as 'cs_CZ' or 'en-US'",
            locale_code=locale_code,
        )
