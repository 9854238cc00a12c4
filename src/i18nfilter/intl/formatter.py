"""Locale-aware date formatter with strict parsing.

DateFormatter is the locale service the filter delegates to. It resolves a
locale, a timezone and a CLDR pattern once at construction, then parses text
into instants and renders instants back to text.

Architecture:
    - Locale data, names and rendering: Babel (CLDR)
    - Timezones: zoneinfo via locale_utils.get_zone
    - Parsing: CompiledPattern from intl.matcher (strict or lenient)

Error model:
    Construction failures the caller cannot recover from (unknown locale,
    unsupported calendar) raise FormatterError. Failures of individual
    operations do not raise: parse() and format() return None and record
    ``error_code`` / ``error_message``, which the caller checks with
    ``is_failure()``. Every operation resets the code first.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time
from typing import TYPE_CHECKING

from babel import UnknownLocaleError
from babel.dates import PATTERN_CHARS, parse_pattern

from i18nfilter.constants import DEFAULT_TIMEZONE
from i18nfilter.defaults import get_default_timezone
from i18nfilter.diagnostics import ErrorTemplate, FormatterError
from i18nfilter.enums import CalendarKind, DateStyle, FormatterStatus
from i18nfilter.locale_utils import get_babel_locale, get_zone

from .matcher import ParseFailure, UnsupportedFieldError, compile_pattern
from .patterns import UnterminatedQuoteError, resolve_pattern, tokenize_pattern

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from babel import Locale

__all__ = ["DateFormatter", "is_failure"]

logger = logging.getLogger(__name__)

# Styles tried, in order, when a lenient parse of the formatter's own pattern fails
_LENIENT_STYLES: tuple[DateStyle, ...] = (
    DateStyle.SHORT,
    DateStyle.MEDIUM,
    DateStyle.LONG,
    DateStyle.FULL,
)


def is_failure(code: FormatterStatus | int) -> bool:
    """True if code reports a failure (warnings are not failures).

    Example:
        >>> is_failure(FormatterStatus.PARSE_ERROR)
        True
        >>> is_failure(FormatterStatus.USING_DEFAULT_WARNING)
        False
    """
    return int(code) > FormatterStatus.OK


class DateFormatter:
    """Parse and format dates for one locale, timezone, calendar and pattern.

    Examples:
        >>> fmt = DateFormatter("en_US", DateStyle.SHORT, DateStyle.NONE, "UTC")
        >>> fmt.get_pattern()
        'M/d/yy'
        >>> instant = fmt.parse("1/28/25")
        >>> fmt.set_pattern("yyyy-MM-dd")
        True
        >>> fmt.format(instant)
        '2025-01-28'

        >>> fmt.parse("28/1/25") is None  # strict: month 28 out of range
        True
        >>> fmt.error_code
        <FormatterStatus.PARSE_ERROR: 9>

    Thread Safety:
        Not thread-safe: error state and pattern are per-instance mutable.
        Share compiled patterns, not formatters.
    """

    def __init__(
        self,
        locale: str,
        date_type: DateStyle | int | str | None = None,
        time_type: DateStyle | int | str | None = None,
        timezone: str | None = None,
        calendar: CalendarKind | int | None = CalendarKind.GREGORIAN,
        pattern: str | None = None,
    ) -> None:
        """Create a formatter.

        Args:
            locale: BCP 47 or POSIX locale identifier
            date_type: Date style (None means FULL)
            time_type: Time style (None means FULL)
            timezone: IANA timezone name (None means the process default)
            calendar: Calendar kind; only GREGORIAN is supported
            pattern: CLDR pattern overriding the styles

        Raises:
            FormatterError: If the locale is unknown, the calendar unsupported,
                a style invalid, or the pattern unusable
        """
        self._error_code = FormatterStatus.OK
        self._error_message = ""
        self._lenient = True

        try:
            date_style = DateStyle.coerce(date_type)
            time_style = DateStyle.coerce(time_type)
            calendar_kind = CalendarKind.coerce(calendar)
        except ValueError as e:
            raise FormatterError(str(e), status=FormatterStatus.ILLEGAL_ARGUMENT) from e
        self._date_type = DateStyle.FULL if date_style is None else date_style
        self._time_type = DateStyle.FULL if time_style is None else time_style

        self._locale_code = str(locale)
        try:
            self._locale: Locale = get_babel_locale(self._locale_code)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            diagnostic = ErrorTemplate.unknown_locale(self._locale_code, str(e))
            raise FormatterError(diagnostic, status=FormatterStatus.ILLEGAL_ARGUMENT) from e

        if calendar_kind is not None and calendar_kind is not CalendarKind.GREGORIAN:
            raise FormatterError(
                ErrorTemplate.unsupported_calendar(calendar),
                status=FormatterStatus.UNSUPPORTED,
            )
        self._calendar = CalendarKind.GREGORIAN

        self._zone, self.is_fallback_timezone = self._resolve_zone(timezone)

        if pattern is None:
            try:
                pattern = resolve_pattern(self._locale, self._date_type, self._time_type)
            except (KeyError, AttributeError) as e:
                diagnostic = ErrorTemplate.invalid_pattern("", f"no CLDR pattern: {e}")
                raise FormatterError(diagnostic, status=FormatterStatus.ILLEGAL_ARGUMENT) from e
        self._pattern = ""
        if not self.set_pattern(pattern):
            raise FormatterError(
                ErrorTemplate.invalid_pattern(pattern, self._error_message),
                status=FormatterStatus.PATTERN_SYNTAX,
            )
        if self.is_fallback_timezone:
            self._error_code = FormatterStatus.USING_DEFAULT_WARNING

    @staticmethod
    def _resolve_zone(timezone: str | None) -> tuple[ZoneInfo, bool]:
        """Look up the zone; unknown names fall back to UTC with a warning."""
        requested = timezone if timezone else get_default_timezone()
        try:
            return get_zone(str(requested)), False
        except (KeyError, ValueError, OSError):
            diagnostic = ErrorTemplate.unknown_timezone(str(requested), DEFAULT_TIMEZONE)
            logger.warning("%s", diagnostic.message)
            return get_zone(DEFAULT_TIMEZONE), True

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def error_code(self) -> FormatterStatus:
        """Outcome of the last operation."""
        return self._error_code

    @property
    def error_message(self) -> str:
        """Message of the last operation ("" on success)."""
        return self._error_message

    def _reset_error(self) -> None:
        self._error_code = FormatterStatus.OK
        self._error_message = ""

    def _fail(self, code: FormatterStatus, message: str) -> None:
        self._error_code = code
        self._error_message = message

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_locale(self) -> str:
        """Locale identifier the formatter was resolved to (POSIX form)."""
        return str(self._locale)

    def get_timezone(self) -> ZoneInfo:
        return self._zone

    def get_timezone_id(self) -> str:
        """IANA name of the resolved timezone."""
        return self._zone.key

    def get_calendar(self) -> CalendarKind:
        return self._calendar

    def get_date_type(self) -> DateStyle:
        return self._date_type

    def get_time_type(self) -> DateStyle:
        return self._time_type

    def is_lenient(self) -> bool:
        return self._lenient

    def set_lenient(self, lenient: bool) -> None:
        """Enable or disable lenient parsing (formatters start lenient)."""
        self._lenient = bool(lenient)

    def get_pattern(self) -> str:
        return self._pattern

    def set_pattern(self, pattern: str) -> bool:
        """Replace the pattern used by format() and parse().

        Args:
            pattern: CLDR pattern

        Returns:
            True on success; False (with error_code set) if the pattern is
            empty or malformed. The previous pattern stays in effect on failure.
        """
        self._reset_error()
        if not isinstance(pattern, str) or not pattern:
            self._fail(FormatterStatus.ILLEGAL_ARGUMENT, "Pattern must be a non-empty string")
            return False
        try:
            tokens = tokenize_pattern(pattern)
            parse_pattern(pattern)
        except (UnterminatedQuoteError, ValueError, TypeError) as e:
            self._fail(FormatterStatus.PATTERN_SYNTAX, str(e))
            return False
        unknown = [t.text for t in tokens if t.kind == "field" and t.letter not in PATTERN_CHARS]
        if unknown:
            # Babel renders unknown letters as literal text
            self._fail(
                FormatterStatus.PATTERN_SYNTAX,
                f"Unknown pattern field(s): {', '.join(unknown)}",
            )
            return False
        self._pattern = pattern
        return True

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def parse(self, text: str, *, now: datetime | None = None) -> datetime | None:
        """Parse text into an aware datetime in the formatter timezone.

        Args:
            text: Text to parse
            now: Reference instant for two-digit years (default: current time)

        Returns:
            Aware datetime, or None on failure (see error_code/error_message)
        """
        self._reset_error()
        if not isinstance(text, str):
            self._fail(
                FormatterStatus.ILLEGAL_ARGUMENT,
                f"Expected string, got {type(text).__name__}",
            )
            return None

        try:
            compiled = compile_pattern(self._pattern, self._locale, self._zone, self._lenient)
        except (UnsupportedFieldError, UnterminatedQuoteError) as e:
            self._fail(FormatterStatus.UNSUPPORTED, str(e))
            return None

        try:
            return compiled.match(text, now=now)
        except ParseFailure as e:
            if not self._lenient:
                self._fail(FormatterStatus.PARSE_ERROR, str(e))
                return None
            first_error = e

        result = self._parse_alternatives(text, now)
        if result is None:
            self._fail(FormatterStatus.PARSE_ERROR, str(first_error))
        return result

    def _parse_alternatives(self, text: str, now: datetime | None) -> datetime | None:
        """Lenient fallback: the locale's other styles, then ISO 8601."""
        candidates: list[str] = []
        for date_style in _LENIENT_STYLES:
            for time_style in (*_LENIENT_STYLES, DateStyle.NONE):
                try:
                    candidate = resolve_pattern(self._locale, date_style, time_style)
                except (KeyError, AttributeError):
                    continue
                if candidate != self._pattern and candidate not in candidates:
                    candidates.append(candidate)

        for candidate in candidates:
            try:
                compiled = compile_pattern(candidate, self._locale, self._zone, True)
                return compiled.match(text, now=now)
            except (ParseFailure, UnsupportedFieldError, UnterminatedQuoteError):
                continue

        try:
            parsed = datetime.fromisoformat(text.strip())
        except ValueError:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=self._zone)
        return parsed.astimezone(self._zone)

    def format(self, value: datetime | date | int | float) -> str | None:
        """Render an instant with the current pattern.

        Args:
            value: Aware datetime, naive datetime (read in the formatter
                timezone), date (midnight in the formatter timezone), or
                POSIX timestamp in seconds

        Returns:
            Formatted text, or None on failure (see error_code/error_message)
        """
        self._reset_error()
        instant = self._to_instant(value)
        if instant is None:
            return None

        try:
            return str(parse_pattern(self._pattern).apply(instant, self._locale))
        except (KeyError, ValueError, TypeError, AttributeError, LookupError) as e:
            diagnostic = ErrorTemplate.format_datetime_failed(
                self.get_locale(), self._pattern, str(e)
            )
            self._fail(FormatterStatus.INVALID_FORMAT, diagnostic.message)
            return None

    def _to_instant(self, value: object) -> datetime | None:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=self._zone)
            return value.astimezone(self._zone)
        if isinstance(value, date):
            return datetime.combine(value, time(), tzinfo=self._zone)
        if isinstance(value, int | float) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value, UTC).astimezone(self._zone)
            except (OverflowError, OSError, ValueError) as e:
                self._fail(FormatterStatus.ILLEGAL_ARGUMENT, str(e))
                return None
        self._fail(
            FormatterStatus.ILLEGAL_ARGUMENT,
            f"Cannot format value of type {type(value).__name__}",
        )
        return None

    def __repr__(self) -> str:
        return (
            f"DateFormatter(locale={self.get_locale()!r}, pattern={self._pattern!r}, "
            f"timezone={self._zone.key!r}, lenient={self._lenient})"
        )
