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
        1000-1999: Option errors (filter configuration)
        2000-2999: Locale service errors (formatter construction)
        3000-3999: Conversion errors (parse and format)
    """

    # Option errors (1000-1999)
    INVALID_OPTION = 1001
    INVALID_OPTION_VALUE = 1002

    # Locale service errors (2000-2999)
    UNKNOWN_LOCALE = 2001
    UNKNOWN_TIMEZONE = 2002
    UNSUPPORTED_CALENDAR = 2003
    FORMATTER_CONSTRUCTION_FAILED = 2004

    # Conversion errors (3000-3999)
    PARSE_DATETIME_FAILED = 3001
    FORMAT_DATETIME_FAILED = 3002
    INVALID_PATTERN = 3003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        locale_code: Locale in effect when the error occurred
        pattern: CLDR pattern in effect when the error occurred
        input_value: Input text that triggered the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    locale_code: str | None = None
    pattern: str | None = None
    input_value: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[PARSE_DATETIME_FAILED]: Failed to parse '31/31/25' for locale 'en_US'
              = locale: en_US
              = pattern: M/d/yy
              = help: Check that the input matches the configured date style

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
