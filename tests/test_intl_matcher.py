"""Tests for compiled CLDR pattern matching.

Python 3.13+.
"""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest
from babel import Locale
from hypothesis import given
from hypothesis import strategies as st

from i18nfilter.intl.matcher import (
    ParseFailure,
    UnsupportedFieldError,
    compile_pattern,
    resolve_two_digit_year,
)

EN = Locale.parse("en_US")
UTC_ZONE = ZoneInfo("UTC")
REFERENCE = datetime(2026, 1, 1, tzinfo=UTC)


def _match(pattern: str, text: str, *, lenient: bool = False, locale: Locale = EN) -> datetime:
    return compile_pattern(pattern, locale, UTC_ZONE, lenient).match(text, now=REFERENCE)


class TestTwoDigitYear:
    """Two-digit year window."""

    def test_recent_year(self) -> None:
        """Years within the past 80 years resolve to the past."""
        assert resolve_two_digit_year(25, datetime(2026, 1, 1)) == 2025

    def test_near_future_year(self) -> None:
        """Years within the next 20 years resolve to the future."""
        assert resolve_two_digit_year(45, datetime(2026, 1, 1)) == 2045

    def test_window_start(self) -> None:
        """The window begins exactly 80 years back."""
        assert resolve_two_digit_year(46, datetime(2026, 1, 1)) == 1946

    @given(
        two_digit=st.integers(min_value=0, max_value=99),
        year=st.integers(min_value=1200, max_value=9000),
    )
    def test_result_inside_window(self, two_digit: int, year: int) -> None:
        """The resolved year keeps its last two digits and lies in the window."""
        resolved = resolve_two_digit_year(two_digit, datetime(year, 6, 1))
        assert resolved % 100 == two_digit
        assert year - 80 <= resolved < year + 20


class TestStrictMatching:
    """Whole-text matching with range checks."""

    def test_numeric_fields(self) -> None:
        """Plain numeric pattern."""
        assert _match("yyyy-MM-dd HH:mm:ss", "2025-01-28 14:30:05") == datetime(
            2025, 1, 28, 14, 30, 5, tzinfo=UTC
        )

    def test_abutting_numeric_fields(self) -> None:
        """Adjacent numeric fields take fixed widths."""
        assert _match("yyyyMMdd", "20250128") == datetime(2025, 1, 28, tzinfo=UTC)

    def test_missing_fields_default_to_epoch(self) -> None:
        """Fields absent from the pattern default to 1970-01-01 00:00."""
        assert _match("HH:mm", "14:30") == datetime(1970, 1, 1, 14, 30, tzinfo=UTC)

    def test_twelve_hour_clock(self) -> None:
        """12 AM is midnight, 12 PM is noon."""
        assert _match("h a", "12 AM").hour == 0
        assert _match("h a", "12 PM").hour == 12
        assert _match("h a", "1 PM").hour == 13

    def test_hour_k_24_is_midnight(self) -> None:
        """The 1-24 clock maps 24 to hour 0."""
        assert _match("k:mm", "24:00").hour == 0

    def test_fraction_of_second(self) -> None:
        """S fields are fractions, not counts."""
        assert _match("HH:mm:ss.SSS", "10:00:00.250").microsecond == 250000

    def test_day_of_year(self) -> None:
        """D resolves against the year, honoring leap years."""
        assert _match("yyyy-DDD", "2024-060") == datetime(2024, 2, 29, tzinfo=UTC)
        with pytest.raises(ParseFailure):
            _match("yyyy-DDD", "2025-366")

    def test_era(self) -> None:
        """Era names are matched; BC years outside 1-9999 are rejected."""
        assert _match("y G", "2025 AD").year == 2025
        with pytest.raises(ParseFailure):
            _match("y G", "44 BC")

    @pytest.mark.parametrize(
        "text",
        [
            "2025-13-01 10:00",
            "2025-02-30 10:00",
            "2025-01-01 24:00",
            "2025-01-01 10:60",
            "2025-01-01 10:00 ",
            "2025-01-01T10:00",
        ],
    )
    def test_rejects(self, text: str) -> None:
        """Out-of-range fields, impossible dates and extra text fail."""
        with pytest.raises(ParseFailure):
            _match("yyyy-MM-dd HH:mm", text)

    def test_literals_are_escaped(self) -> None:
        """Regex metacharacters in literals match only themselves."""
        assert _match("yyyy.MM.dd", "2025.01.28").day == 28
        with pytest.raises(ParseFailure):
            _match("yyyy.MM.dd", "2025x01x28")

    def test_quoted_letters_are_literal(self) -> None:
        """Quoted pattern letters must appear verbatim."""
        assert _match("yyyy-MM-dd'T'HH:mm", "2025-01-28T10:00").hour == 10

    def test_whitespace_variants_are_equivalent(self) -> None:
        """Space, NBSP and narrow NBSP all match a pattern space."""
        for text in ("2:30 PM", "2:30\u00a0PM", "2:30\u202fPM"):
            assert _match("h:mm a", text).hour == 14

    def test_conflicting_fields(self) -> None:
        """The same field captured twice must agree."""
        assert _match("yyyy-MM-dd (d)", "2025-01-28 (28)").day == 28
        with pytest.raises(ParseFailure):
            _match("yyyy-MM-dd (d)", "2025-01-28 (27)")

    def test_localized_gmt_offset(self) -> None:
        """GMT offsets shift the instant into the compiled zone."""
        result = _match("HH:mm O", "14:30 GMT+2")
        assert (result.hour, result.minute) == (12, 30)

    def test_iso_offset_z(self) -> None:
        """X accepts Z for UTC."""
        assert _match("yyyy-MM-dd HH:mmXXX", "2025-01-28 14:30Z").hour == 14

    def test_unknown_name(self) -> None:
        """Names outside the locale's tables fail."""
        with pytest.raises(ParseFailure):
            _match("MMM d, y", "Foo 28, 2025")


class TestLenientMatching:
    """Lenient matching is forgiving about layout, never about values."""

    def test_flexible_whitespace(self) -> None:
        """Whitespace runs and missing whitespace are accepted."""
        assert _match("h:mm a", "2:30PM", lenient=True).hour == 14
        assert _match("h:mm a", "2:30    pm", lenient=True).hour == 14

    def test_any_name_width(self) -> None:
        """Wide names match an abbreviated field."""
        assert _match("MMM d, y", "January 28, 2025", lenient=True).month == 1

    def test_four_digit_year_in_two_digit_field(self) -> None:
        """yy accepts a full year."""
        assert _match("M/d/yy", "1/28/1999", lenient=True).year == 1999

    def test_ranges_still_enforced(self) -> None:
        """Lenient mode does not roll over out-of-range values."""
        with pytest.raises(ParseFailure):
            _match("M/d/yy", "13/28/25", lenient=True)

    def test_weekday_mismatch_tolerated(self) -> None:
        """Only strict mode checks the weekday."""
        assert _match("EEE, yyyy-MM-dd", "Mon, 2025-01-28", lenient=True).day == 28


class TestCompilation:
    """Compilation and caching."""

    def test_compiled_patterns_are_cached(self) -> None:
        """Identical arguments return the same compiled object."""
        first = compile_pattern("yyyy-MM-dd", EN, UTC_ZONE)
        assert compile_pattern("yyyy-MM-dd", EN, UTC_ZONE) is first
        assert compile_pattern("yyyy-MM-dd", EN, UTC_ZONE, True) is not first

    def test_unsupported_field(self) -> None:
        """Week-of-year fields cannot be parsed."""
        with pytest.raises(UnsupportedFieldError):
            compile_pattern("yyyy 'W'ww", EN, UTC_ZONE)

    def test_zone_name_field(self) -> None:
        """Zone names accept the zone's own rendering and its IANA key."""
        berlin = ZoneInfo("Europe/Berlin")
        compiled = compile_pattern("yyyy-MM-dd HH:mm VV", EN, berlin)
        result = compiled.match("2025-01-28 14:30 Europe/Berlin")
        assert result.tzinfo == berlin
        assert result.hour == 14
