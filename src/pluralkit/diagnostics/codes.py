"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        2000-2999: Plural selection conditions
        3000-3999: Template and pattern errors
        4000-4999: Locale formatting errors
    """

    # Plural selection (2000-2999)
    AMBIGUOUS_PLURAL = 2001

    # Templates (3000-3999)
    INVALID_PATTERN = 3001
    EMPTY_FORM_TABLE = 3002

    # Formatting (4000-4999)
    NUMBER_FORMAT_FAILED = 4001
    LOCALE_UNKNOWN = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        key: Translation key the diagnostic refers to (if any)
        locale_code: Locale active when the condition was detected (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    key: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            warning[AMBIGUOUS_PLURAL]: Multiple plural forms are available ...
              --> key: messages_count, locale: cs_CZ
              = help: Pass the count as the first parameter

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        location = [
            f"{label}: {value}"
            for label, value in (("key", self.key), ("locale", self.locale_code))
            if value
        ]
        if location:
            lines.append(f"  --> {', '.join(location)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
