"""Enumerations for i18nfilter type-safe constants.

DateStyle and CalendarKind use IntEnum so that their values match the
integer constants other date formatting APIs expose (FULL=0 ... SHORT=3,
GREGORIAN=1). Members compare equal to those integers.

Python 3.13+.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "CalendarKind",
    "DateStyle",
    "FormatterStatus",
]


class DateStyle(IntEnum):
    """Date or time style selecting a CLDR pattern.

    NONE omits that half of the combined pattern.
    """

    NONE = -1
    FULL = 0
    LONG = 1
    MEDIUM = 2
    SHORT = 3

    @property
    def cldr_name(self) -> str | None:
        """CLDR format length ("full", "long", ...), None for NONE."""
        if self is DateStyle.NONE:
            return None
        return self.name.lower()

    @classmethod
    def coerce(cls, value: DateStyle | int | str | None) -> DateStyle | None:
        """Convert a member, integer value or case-insensitive name to a DateStyle.

        Args:
            value: DateStyle, its integer value, its name ("short"), or None

        Returns:
            Matching DateStyle, or None when value is None

        Raises:
            InvalidOptionError: If value does not name a style
        """
        if value is None or isinstance(value, cls):
            return value
        # bool is an int subclass; True/False are not styles
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        from i18nfilter.diagnostics import ErrorTemplate, InvalidOptionError  # noqa: PLC0415

        raise InvalidOptionError(ErrorTemplate.invalid_option_value("style", value))


class CalendarKind(IntEnum):
    """Calendar system used to interpret dates.

    Only GREGORIAN is supported by the formatter. TRADITIONAL is falsy, so
    fallback getters that use ``or`` read it back as GREGORIAN.
    """

    TRADITIONAL = 0
    GREGORIAN = 1

    @classmethod
    def coerce(cls, value: CalendarKind | int | str | None) -> CalendarKind | None:
        """Convert a member, integer value or name to a CalendarKind.

        Raises:
            InvalidOptionError: If value does not name a calendar
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        from i18nfilter.diagnostics import ErrorTemplate, InvalidOptionError  # noqa: PLC0415

        raise InvalidOptionError(ErrorTemplate.invalid_option_value("calendar", value))


class FormatterStatus(IntEnum):
    """Outcome of the last DateFormatter operation.

    Negative values are warnings, positive values are failures, zero is
    success. Use ``i18nfilter.is_failure()`` rather than comparing to OK.
    """

    USING_DEFAULT_WARNING = -127
    OK = 0
    ILLEGAL_ARGUMENT = 1
    PARSE_ERROR = 9
    INVALID_FORMAT = 10
    UNSUPPORTED = 16
    PATTERN_SYNTAX = 27
