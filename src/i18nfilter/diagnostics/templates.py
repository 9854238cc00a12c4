"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def invalid_option(name: str) -> Diagnostic:
        """Option key has no matching setter.

        Args:
            name: The option key as given by the caller

        Returns:
            Diagnostic for INVALID_OPTION
        """
        msg = f"The option '{name}' does not have a matching set_{name} setter method"
        return Diagnostic(
            code=DiagnosticCode.INVALID_OPTION,
            message=msg,
            hint=(
                "Valid options: locale, timezone, calendar, date_type, "
                "time_type, pattern"
            ),
        )

    @staticmethod
    def invalid_options_container(received: object) -> Diagnostic:
        """Options argument is not a mapping."""
        msg = f"Options must be a mapping or FilterOptions, got {type(received).__name__}"
        return Diagnostic(code=DiagnosticCode.INVALID_OPTION, message=msg)

    @staticmethod
    def invalid_option_value(name: str, value: object) -> Diagnostic:
        """Option value cannot be used.

        Args:
            name: Option name ("style", "calendar", "pattern")
            value: The rejected value

        Returns:
            Diagnostic for INVALID_OPTION_VALUE
        """
        msg = f"Invalid {name} value: {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_OPTION_VALUE,
            message=msg,
            hint="Use the enum member, its integer value or its name",
        )

    @staticmethod
    def unknown_locale(locale_code: str, reason: str) -> Diagnostic:
        """Locale identifier not known to CLDR.

        Args:
            locale_code: The locale that failed to load
            reason: Underlying locale service message

        Returns:
            Diagnostic for UNKNOWN_LOCALE
        """
        msg = f"Unknown locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            hint="Use a BCP 47 or POSIX locale identifier such as 'en-US' or 'de_DE'",
            locale_code=locale_code,
        )

    @staticmethod
    def unknown_timezone(timezone_id: str, fallback: str) -> Diagnostic:
        """Timezone identifier not found; fallback applied."""
        msg = f"Unknown timezone '{timezone_id}', using '{fallback}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_TIMEZONE,
            message=msg,
            hint="Use an IANA timezone name such as 'Europe/Berlin'",
            severity="warning",
        )

    @staticmethod
    def unsupported_calendar(calendar: object) -> Diagnostic:
        """Calendar other than Gregorian requested."""
        msg = f"Unsupported calendar: {calendar!r}"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_CALENDAR,
            message=msg,
            hint="Only CalendarKind.GREGORIAN is supported",
        )

    @staticmethod
    def formatter_construction_failed(locale_code: str, reason: str) -> Diagnostic:
        """Formatter could not be built for the effective options.

        Args:
            locale_code: The effective locale
            reason: Message of the underlying FormatterError

        Returns:
            Diagnostic for FORMATTER_CONSTRUCTION_FAILED
        """
        msg = f"Cannot create date formatter for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_CONSTRUCTION_FAILED,
            message=msg,
            locale_code=locale_code,
        )

    @staticmethod
    def parse_datetime_failed(
        value: str,
        locale_code: str,
        pattern: str,
        reason: str,
    ) -> Diagnostic:
        """Strict parsing rejected the input.

        Args:
            value: The input string that failed to parse
            locale_code: The locale used for parsing
            pattern: The CLDR pattern the input had to match
            reason: The reason parsing failed

        Returns:
            Diagnostic for PARSE_DATETIME_FAILED
        """
        msg = f"Failed to parse '{value}' for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_DATETIME_FAILED,
            message=msg,
            hint="Check that the input matches the configured date and time style",
            locale_code=locale_code,
            pattern=pattern,
            input_value=value,
        )

    @staticmethod
    def format_datetime_failed(locale_code: str, pattern: str, reason: str) -> Diagnostic:
        """Formatter reported a failure after formatting."""
        msg = f"Failed to format date for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMAT_DATETIME_FAILED,
            message=msg,
            locale_code=locale_code,
            pattern=pattern,
        )

    @staticmethod
    def invalid_pattern(pattern: str, reason: str) -> Diagnostic:
        """CLDR pattern cannot be used for formatting or parsing.

        Args:
            pattern: The rejected pattern
            reason: Why it was rejected

        Returns:
            Diagnostic for INVALID_PATTERN
        """
        msg = f"Invalid date pattern '{pattern}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PATTERN,
            message=msg,
            hint="Quote literal letters with single quotes, e.g. \"h 'o''clock' a\"",
            pattern=pattern,
        )
