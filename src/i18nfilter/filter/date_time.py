"""DateTimeFilter: re-render date/time text from one locale format to another.

The filter parses its input with a strict DateFormatter built from the
configured locale, timezone and date style, then renders the parsed instant
with the same formatter, switched to the custom pattern when one is set.

Formatter cache:
    Formatters are cached per filter instance under the fingerprint of the
    effective options (see ``compute_fingerprint``). A cached formatter is
    never rebuilt, and there is no eviction.

Filter contract:
    - The effective time style is read through ``get_date_type()``;
      ``set_time_type()`` is stored but does not reach the formatter.
    - A cache hit returns the input unchanged; parse and format run only
      when a formatter is built.
    - Building a formatter records its resolved timezone and calendar on
      the filter (resolve-and-record). The fingerprint of that build used
      the requested values, so the next call can compute a new fingerprint.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from threading import RLock
from typing import Any, Self

from i18nfilter.defaults import DefaultProvider, process_defaults
from i18nfilter.diagnostics import ErrorTemplate, FormatterError, InvalidInputError
from i18nfilter.enums import CalendarKind, DateStyle
from i18nfilter.intl import DateFormatter, is_failure

from .base import AbstractFilter
from .options import FilterOptions, compute_fingerprint

__all__ = ["DateTimeFilter"]

logger = logging.getLogger(__name__)


class DateTimeFilter(AbstractFilter):
    """Parse text in one locale-aware date format and render it in another.

    Examples:
        >>> f = DateTimeFilter({"locale": "en_US", "timezone": "UTC",
        ...                     "date_type": DateStyle.SHORT,
        ...                     "pattern": "yyyy-MM-dd HH:mm"})
        >>> f.filter("1/28/25, 2:30 PM")
        '2025-01-28 14:30'
        >>> f.filter(12345)  # non-text passes through
        12345

    Thread Safety:
        Cache population is serialized by an RLock. Setters are not
        synchronized; configure the filter before sharing it.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | FilterOptions | None = None,
        *,
        defaults: DefaultProvider | None = None,
    ) -> None:
        """Create a filter.

        Args:
            options: Initial options as a mapping or FilterOptions
            defaults: Provider of the fallback locale and timezone
                (default: process-wide defaults)

        Raises:
            InvalidOptionError: If an option key or value is invalid
        """
        self._locale: str | None = None
        self._timezone: str | None = None
        self._calendar: CalendarKind | None = None
        self._date_type: DateStyle | None = None
        self._time_type: DateStyle | None = None
        self._pattern: str | None = None
        self._defaults: DefaultProvider = defaults if defaults is not None else process_defaults
        self._formatters: dict[str, DateFormatter] = {}
        self._lock = RLock()
        if options:
            self.set_options(options)

    @classmethod
    def from_options(
        cls, options: FilterOptions, *, defaults: DefaultProvider | None = None
    ) -> DateTimeFilter:
        """Create a filter from an immutable options snapshot."""
        return cls(options, defaults=defaults)

    @property
    def options(self) -> FilterOptions:
        """Snapshot of the raw option fields (no default fallback applied)."""
        return FilterOptions(
            locale=self._locale or None,
            timezone=self._timezone or None,
            calendar=self._calendar,
            date_type=self._date_type,
            time_type=self._time_type,
            pattern=self._pattern or None,
        )

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def set_locale(self, locale: object) -> Self:
        """Set the locale used instead of the default."""
        self._locale = None if locale is None else str(locale)
        return self

    def get_locale(self) -> str:
        """Configured locale, or the default locale when unset or empty."""
        return self._locale or self._defaults.locale()

    def set_timezone(self, timezone: object) -> Self:
        """Set the timezone used instead of the default."""
        self._timezone = None if timezone is None else str(timezone)
        return self

    def get_timezone(self) -> str:
        """Configured timezone, or the default timezone when unset or empty."""
        return self._timezone or self._defaults.timezone()

    def set_calendar(self, calendar: CalendarKind | int | str | None) -> Self:
        self._calendar = CalendarKind.coerce(calendar)
        return self

    def get_calendar(self) -> CalendarKind:
        """Configured calendar, GREGORIAN when unset (or TRADITIONAL, which is falsy)."""
        return self._calendar or CalendarKind.GREGORIAN

    def set_date_type(self, date_type: DateStyle | int | str | None) -> Self:
        self._date_type = DateStyle.coerce(date_type)
        return self

    def get_date_type(self) -> DateStyle | None:
        return self._date_type

    def set_time_type(self, time_type: DateStyle | int | str | None) -> Self:
        self._time_type = DateStyle.coerce(time_type)
        return self

    def get_time_type(self) -> DateStyle | None:
        return self._time_type

    def set_pattern(self, pattern: str | None) -> Self:
        """Set the CLDR pattern used to render the output."""
        self._pattern = pattern
        return self

    def get_pattern(self) -> str | None:
        return self._pattern

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def fingerprint(self) -> str:
        """Fingerprint of the current effective options, as filter() computes it."""
        return compute_fingerprint(
            self.get_date_type(),
            self.get_date_type(),
            self.get_locale(),
            self.get_timezone(),
            self.get_calendar(),
            self.get_pattern(),
        )

    def cache_size(self) -> int:
        with self._lock:
            return len(self._formatters)

    def cache_info(self) -> dict[str, int | tuple[str, ...]]:
        """Cache statistics: size and cached fingerprints in insertion order."""
        with self._lock:
            return {
                "size": len(self._formatters),
                "fingerprints": tuple(self._formatters),
            }

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def filter(self, value: Any) -> Any:
        """Re-render date/time text.

        Args:
            value: Text in the locale's date style; other types pass through

        Returns:
            Re-rendered text on a cache miss, the input unchanged on a cache
            hit or for non-text input

        Raises:
            InvalidInputError: If the text does not strictly match the
                locale's format, the formatter cannot be built, or formatting
                fails
        """
        if not isinstance(value, str):
            return value

        date_type = self.get_date_type()
        # Time style is read through the date-style accessor
        time_type = self.get_date_type()
        locale = self.get_locale()
        timezone = self.get_timezone()
        calendar = self.get_calendar()
        pattern = self.get_pattern()

        fingerprint = compute_fingerprint(
            date_type, time_type, locale, timezone, calendar, pattern
        )

        with self._lock:
            if fingerprint in self._formatters:
                logger.debug("Formatter cache hit for %s, input returned unchanged", fingerprint)
                return value

            logger.debug(
                "Building formatter %s (locale=%s, timezone=%s, date_type=%s)",
                fingerprint,
                locale,
                timezone,
                date_type,
            )
            formatter = self._build_formatter(value, locale, date_type, time_type, timezone)
            result = self._convert(formatter, value, locale, pattern)
            self._formatters[fingerprint] = formatter
            return result

    def _build_formatter(
        self,
        value: str,
        locale: str,
        date_type: DateStyle | None,
        time_type: DateStyle | None,
        timezone: str,
    ) -> DateFormatter:
        """Create a strict formatter and record its resolved timezone and calendar."""
        try:
            formatter = DateFormatter(
                locale, date_type, time_type, timezone, CalendarKind.GREGORIAN
            )
        except FormatterError as e:
            reason = e.diagnostic.message if e.diagnostic is not None else str(e)
            raise InvalidInputError(
                ErrorTemplate.formatter_construction_failed(locale, reason),
                input_value=value,
                locale_code=locale,
            ) from e
        formatter.set_lenient(False)

        resolved_timezone = formatter.get_timezone_id()
        if resolved_timezone != timezone:
            logger.debug("Timezone '%s' resolved to '%s'", timezone, resolved_timezone)
        self.set_timezone(resolved_timezone)
        self.set_calendar(formatter.get_calendar())
        return formatter

    @staticmethod
    def _convert(formatter: DateFormatter, value: str, locale: str, pattern: str | None) -> str:
        """Parse value strictly, apply the output pattern, and format."""
        instant = formatter.parse(value)
        if instant is None:
            raise InvalidInputError(
                ErrorTemplate.parse_datetime_failed(
                    value, locale, formatter.get_pattern(), formatter.error_message
                ),
                input_value=value,
                locale_code=locale,
                pattern=formatter.get_pattern(),
            )

        if pattern and not formatter.set_pattern(pattern):
            raise InvalidInputError(
                ErrorTemplate.invalid_pattern(pattern, formatter.error_message),
                input_value=value,
                locale_code=locale,
                pattern=pattern,
            )

        result = formatter.format(instant)
        if result is None or is_failure(formatter.error_code):
            raise InvalidInputError(
                ErrorTemplate.format_datetime_failed(
                    locale, formatter.get_pattern(), formatter.error_message
                ),
                input_value=value,
                locale_code=locale,
                pattern=formatter.get_pattern(),
            )
        return result
