"""Exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object. The
filter surfaces a single kind to callers, InvalidInputError; FormatterError
stays inside the locale service layer and is re-raised as InvalidInputError
with the original attached as ``__cause__``.

Python 3.13+. Zero external dependencies.
"""

from i18nfilter.enums import FormatterStatus

from .codes import Diagnostic


class FilterError(Exception):
    """Base exception for all i18nfilter errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FilterError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidInputError(FilterError, ValueError):
    """Value could not be converted by the filter.

    Raised when strict parsing rejects the input, when the formatter reports
    a failure after formatting, or when the formatter could not be built.

    Attributes:
        input_value: The text passed to filter()
        locale_code: The effective locale of the failed call
        pattern: The formatter pattern in effect, if known
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        input_value: str = "",
        locale_code: str = "",
        pattern: str | None = None,
    ) -> None:
        super().__init__(message)
        self.input_value = input_value
        self.locale_code = locale_code
        self.pattern = pattern


class InvalidOptionError(FilterError, ValueError):
    """Unknown option key or unusable option value."""


class FormatterError(FilterError):
    """Locale service failure while building or configuring a DateFormatter.

    Attributes:
        status: FormatterStatus describing the failure
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        status: FormatterStatus = FormatterStatus.ILLEGAL_ARGUMENT,
    ) -> None:
        super().__init__(message)
        self.status = status
