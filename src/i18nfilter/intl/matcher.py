"""Compile CLDR date patterns into locale-aware text matchers.

A CompiledPattern turns text back into an aware datetime. Every pattern
field becomes a named regex group; names (months, weekdays, day periods,
eras, timezone names) come from Babel for the formatter's locale, so
"28. Januar 2025" parses under de_DE and "28 janvier 2025" under fr_FR.

Strict mode (the default for formatters):
    - The whole text must match; whitespace in the pattern matches exactly
      one whitespace character (including NBSP and narrow NBSP)
    - Numeric fields must be in range (month 1-12, hour 0-23, ...)
    - A weekday in the text must agree with the date
    - The date must exist (no February 30)

Lenient mode:
    - Case-insensitive, any run of whitespace (or none) where the pattern
      has whitespace, trailing text ignored
    - Names accepted in every width and context
    - Two-digit year fields also accept four digits

Supported fields:
    Era: G | Year: y, u, Y | Month: M, L | Day: d, D
    Weekday: E, e, c | Period: a | Hour: H, h, k, K | Minute: m
    Second: s, S | Zone: z, Z, O, v, V, x, X

Other CLDR fields (quarters, week numbers, flexible day periods) raise
UnsupportedFieldError at compile time.

Python 3.13+. Uses Babel CLDR data.
"""

from __future__ import annotations

import calendar
import functools
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from babel.dates import (
    get_day_names,
    get_era_names,
    get_month_names,
    get_period_names,
    parse_pattern,
)

from i18nfilter.constants import EPOCH_YEAR, TWO_DIGIT_YEAR_PAST_SPAN

from .patterns import PatternToken, tokenize_pattern

if TYPE_CHECKING:
    from collections.abc import Iterable
    from zoneinfo import ZoneInfo

    from babel import Locale

__all__ = [
    "CompiledPattern",
    "ParseFailure",
    "UnsupportedFieldError",
    "compile_pattern",
    "resolve_two_digit_year",
]


class ParseFailure(ValueError):
    """Text does not match the compiled pattern."""


class UnsupportedFieldError(ValueError):
    """Pattern contains a field that cannot be parsed."""


# ==============================================================================
# FIELD CLASSIFICATION
# ==============================================================================

_YEAR_LETTERS = frozenset("yuY")
_NUMERIC_LETTERS = frozenset("yuYMLdDHhkKmsSec")
_ZONE_LETTERS = frozenset("zZOvVxX")

# Default digit width of a count-1 numeric field when it abuts another one
_ABUTTING_WIDTH: dict[str, int] = {"y": 4, "u": 4, "Y": 4, "D": 3}

# CLDR name widths by field count
_MONTH_WIDTHS: dict[int, tuple[str, ...]] = {
    3: ("abbreviated", "wide"),
    4: ("wide", "abbreviated"),
    5: ("narrow",),
}
_DAY_WIDTHS: dict[int, tuple[str, ...]] = {
    1: ("abbreviated", "wide"),
    2: ("abbreviated", "wide"),
    3: ("abbreviated", "wide"),
    4: ("wide", "abbreviated"),
    5: ("narrow",),
    6: ("short", "abbreviated"),
}
_ERA_WIDTHS: dict[int, tuple[str, ...]] = {
    1: ("abbreviated",),
    2: ("abbreviated",),
    3: ("abbreviated",),
    4: ("wide", "abbreviated"),
    5: ("narrow",),
}
_ALL_WIDTHS: tuple[str, ...] = ("wide", "abbreviated", "short", "narrow")

_OFFSET_RE = re.compile(r"([+-])(\d{1,2})(?::?(\d{2}))?(?::?(\d{2}))?")


@dataclass(frozen=True, slots=True)
class _FieldSpec:
    """Compiled field: regex group name plus how to interpret the capture."""

    group: str
    letter: str
    count: int
    names: dict[str, int] | None = None
    zone_names: frozenset[str] | None = None


# ==============================================================================
# NAME TABLES
# ==============================================================================


def _names_to_values(tables: list[dict[object, str]]) -> dict[str, int | str]:
    """Merge Babel name tables into a lowercased name -> value map.

    Earlier tables win on collisions (narrow names like "J" are ambiguous).
    """
    result: dict[str, int | str] = {}
    for table in tables:
        for value, name in table.items():
            key = str(name).lower()
            if key and key not in result:
                result[key] = value  # type: ignore[assignment]
    return result


def _month_names(locale: Locale, letter: str, count: int, lenient: bool) -> dict[str, int]:
    contexts = ("format", "stand-alone") if lenient else (
        ("stand-alone", "format") if letter == "L" else ("format", "stand-alone")
    )
    widths = _ALL_WIDTHS if lenient else _MONTH_WIDTHS[count]
    tables = [
        dict(get_month_names(width, context, locale))
        for context in contexts
        for width in widths
        if width != "short"
    ]
    return _names_to_values(tables)  # type: ignore[return-value]


def _day_names(locale: Locale, letter: str, count: int, lenient: bool) -> dict[str, int]:
    contexts = ("format", "stand-alone") if lenient else (
        ("stand-alone", "format") if letter == "c" else ("format", "stand-alone")
    )
    widths = _ALL_WIDTHS if lenient else _DAY_WIDTHS[min(count, 6)]
    tables = [
        dict(get_day_names(width, context, locale)) for context in contexts for width in widths
    ]
    return _names_to_values(tables)  # type: ignore[return-value]


def _period_names(locale: Locale, lenient: bool) -> dict[str, int]:
    widths = _ALL_WIDTHS if lenient else ("abbreviated", "wide", "narrow")
    tables: list[dict[object, str]] = []
    for width in widths:
        if width == "short":
            continue
        names = get_period_names(width, "format", locale)
        table = {value: names[key] for value, key in ((0, "am"), (1, "pm")) if key in names}
        tables.append(table)
    return _names_to_values(tables)  # type: ignore[return-value]


def _era_names(locale: Locale, count: int, lenient: bool) -> dict[str, int]:
    widths = _ALL_WIDTHS if lenient else _ERA_WIDTHS[min(count, 5)]
    tables = [dict(get_era_names(width, locale)) for width in widths if width != "short"]
    return _names_to_values(tables)  # type: ignore[return-value]


def _zone_display_names(token: PatternToken, locale: Locale, zone: ZoneInfo) -> frozenset[str]:
    """Names Babel renders for a zone token, in winter and in summer."""
    names = {zone.key}
    year = datetime.now(UTC).year
    for month in (1, 7):
        reference = datetime(year, month, 15, 12, tzinfo=zone)
        try:
            names.add(parse_pattern(token.text).apply(reference, locale))
        except (KeyError, ValueError, AttributeError, LookupError):
            continue
    return frozenset(name for name in names if name)


def _alternation(token: PatternToken, names: Iterable[str]) -> str:
    ordered = sorted({str(n) for n in names if n}, key=len, reverse=True)
    if not ordered:
        msg = f"Locale has no names for field '{token.text}'"
        raise UnsupportedFieldError(msg)
    return "(?i:" + "|".join(re.escape(n) for n in ordered) + ")"


def _is_numeric(token: PatternToken) -> bool:
    if token.kind != "field" or token.letter not in _NUMERIC_LETTERS:
        return False
    # MMM, LLL, eee, ccc are names
    return not (token.letter in "MLec" and token.count >= 3)


# ==============================================================================
# REGEX CONSTRUCTION
# ==============================================================================


def _numeric_regex(token: PatternToken, abutting: bool, lenient: bool) -> str:
    letter, count = token.letter, token.count
    if abutting:
        width = count if count >= 2 else _ABUTTING_WIDTH.get(letter, 2)
        return rf"\d{{{width}}}"
    if letter in _YEAR_LETTERS:
        if count == 2:
            return r"\d{2,4}" if lenient else r"\d{2}"
        return r"\d{1,4}"
    if letter == "D":
        return r"\d{1,3}"
    if letter == "S":
        return r"\d{1,9}"
    if letter in "ec":
        return r"\d"
    return r"\d{1,2}"


def _zone_regex(token: PatternToken, gmt_prefix: str, gmt_suffix: str) -> str | None:
    """Regex for offset-style zone tokens, None for name-style tokens."""
    letter, count = token.letter, token.count
    localized_gmt = (
        "(?:"
        + re.escape(gmt_prefix)
        + r"(?:[+-]\d{1,2}(?::?\d{2})?)?"
        + re.escape(gmt_suffix)
        + "|GMT|UTC)"
    )
    if letter == "Z":
        if count <= 3:
            return r"[+-]\d{4}"
        if count == 4:
            return localized_gmt
        return r"(?:Z|[+-]\d{2}:\d{2})"
    if letter == "O":
        return localized_gmt
    if letter in "xX":
        utc = "Z|" if letter == "X" else ""
        body = {
            1: r"[+-]\d{2}(?:\d{2})?",
            2: r"[+-]\d{4}",
            3: r"[+-]\d{2}:\d{2}",
            4: r"[+-]\d{4}(?:\d{2})?",
        }.get(count, r"[+-]\d{2}:\d{2}(?::\d{2})?")
        return f"(?:{utc}{body})"
    return None


def _literal_regex(text: str, lenient: bool) -> str:
    parts: list[str] = []
    for char in text:
        if char.isspace():
            if lenient:
                if not parts or parts[-1] != r"\s*":
                    parts.append(r"\s*")
            else:
                parts.append(r"\s")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A CLDR pattern compiled for one locale, zone and leniency.

    Use ``compile_pattern()``; instances are cached and shared.
    """

    pattern: str
    regex: re.Pattern[str]
    fields: tuple[_FieldSpec, ...]
    zone: ZoneInfo
    lenient: bool
    gmt_affixes: tuple[str, str] = field(default=("GMT", ""))

    def match(self, text: str, *, now: datetime | None = None) -> datetime:
        """Parse text into an aware datetime in the compiled zone.

        Args:
            text: Text to parse
            now: Reference instant for two-digit years (default: current time)

        Returns:
            Aware datetime converted to the compiled zone

        Raises:
            ParseFailure: If text does not match or fields are out of range
        """
        if self.lenient:
            found = self.regex.match(text.strip())
        else:
            found = self.regex.fullmatch(text)
        if found is None:
            msg = f"Text does not match pattern '{self.pattern}'"
            raise ParseFailure(msg)

        values: dict[str, object] = {}
        for spec in self.fields:
            captured = found.group(spec.group)
            for key, value in _interpret(spec, captured, self.gmt_affixes):
                if key in values and values[key] != value:
                    msg = f"Conflicting values for {key}: {values[key]!r} and {value!r}"
                    raise ParseFailure(msg)
                values[key] = value

        return _assemble(values, self.zone, strict=not self.lenient, now=now)


def _interpret(
    spec: _FieldSpec, captured: str, gmt_affixes: tuple[str, str]
) -> list[tuple[str, object]]:
    """Map one captured field to (key, value) pairs."""
    letter, count = spec.letter, spec.count

    if spec.names is not None:
        value = spec.names.get(captured.lower())
        if value is None:
            msg = f"Unknown name {captured!r}"
            raise ParseFailure(msg)
        if letter in "ML":
            return [("month", value)]
        if letter in "Eec":
            return [("weekday", value)]
        if letter == "a":
            return [("period", value)]
        return [("era", value)]

    if spec.zone_names is not None:
        return [("offset", None)]

    if letter in _ZONE_LETTERS:
        return [("offset", _parse_offset(captured, gmt_affixes))]

    number = int(captured)
    if letter in _YEAR_LETTERS:
        two_digit = len(captured) == 2 and count <= 2
        return [("year2" if two_digit else "year", number)]
    if letter in "ML":
        return [("month", number)]
    if letter == "d":
        return [("day", number)]
    if letter == "D":
        return [("day_of_year", number)]
    if letter in "ec":
        return [("local_weekday", number)]
    if letter == "S":
        micro = int((captured + "000000")[:6])
        return [("microsecond", micro)]
    return [({"H": "hour23", "h": "hour12", "k": "hour24", "K": "hour11",
              "m": "minute", "s": "second"}[letter], number)]


def _parse_offset(captured: str, gmt_affixes: tuple[str, str]) -> timedelta:
    text = captured.strip()
    if text.upper() == "Z":
        return timedelta(0)
    prefix, suffix = gmt_affixes
    if prefix and text.startswith(prefix):
        text = text[len(prefix) :]
    if suffix and text.endswith(suffix):
        text = text[: -len(suffix)]
    found = _OFFSET_RE.search(text)
    if found is None:
        return timedelta(0)
    sign = -1 if found.group(1) == "-" else 1
    hours = int(found.group(2))
    minutes = int(found.group(3) or 0)
    seconds = int(found.group(4) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        msg = f"Offset out of range: {captured}"
        raise ParseFailure(msg)
    return sign * timedelta(hours=hours, minutes=minutes, seconds=seconds)


def resolve_two_digit_year(two_digit: int, now: datetime) -> int:
    """Place a two-digit year into the window [now - 80y, now + 20y).

    Example (now in 2026):
        >>> resolve_two_digit_year(25, datetime(2026, 1, 1))
        2025
        >>> resolve_two_digit_year(46, datetime(2026, 1, 1))
        1946
    """
    start = now.year - TWO_DIGIT_YEAR_PAST_SPAN
    year = (start // 100) * 100 + two_digit
    if year < start:
        year += 100
    return year


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        msg = f"{name} {value} out of range {low}-{high}"
        raise ParseFailure(msg)


def _assemble(
    values: dict[str, object], zone: ZoneInfo, *, strict: bool, now: datetime | None
) -> datetime:
    """Build the aware datetime from interpreted field values."""
    if "year2" in values:
        reference = now if now is not None else datetime.now(zone)
        year = resolve_two_digit_year(int(values["year2"]), reference)  # type: ignore[call-overload]
        if "year" in values and values["year"] != year:
            msg = "Conflicting year fields"
            raise ParseFailure(msg)
    else:
        year = int(values.get("year", EPOCH_YEAR))  # type: ignore[call-overload]
    if values.get("era") == 0:
        year = 1 - year
    if not 1 <= year <= 9999:
        msg = f"Year {year} out of supported range"
        raise ParseFailure(msg)

    period = values.get("period")
    if "hour23" in values:
        hour = int(values["hour23"])  # type: ignore[call-overload]
        _check_range("Hour", hour, 0, 23)
    elif "hour24" in values:
        hour = int(values["hour24"])  # type: ignore[call-overload]
        _check_range("Hour", hour, 1, 24)
        hour %= 24
    elif "hour12" in values:
        hour = int(values["hour12"])  # type: ignore[call-overload]
        _check_range("Hour", hour, 1, 12)
        hour = hour % 12 + (12 if period == 1 else 0)
    elif "hour11" in values:
        hour = int(values["hour11"])  # type: ignore[call-overload]
        _check_range("Hour", hour, 0, 11)
        hour += 12 if period == 1 else 0
    else:
        hour = 0

    minute = int(values.get("minute", 0))  # type: ignore[call-overload]
    second = int(values.get("second", 0))  # type: ignore[call-overload]
    _check_range("Minute", minute, 0, 59)
    _check_range("Second", second, 0, 59)
    microsecond = int(values.get("microsecond", 0))  # type: ignore[call-overload]

    has_date_fields = "month" in values or "day" in values
    if not has_date_fields and "day_of_year" in values:
        day_of_year = int(values["day_of_year"])  # type: ignore[call-overload]
        days_in_year = 366 if calendar.isleap(year) else 365
        _check_range("Day of year", day_of_year, 1, days_in_year)
        base = datetime(year, 1, 1) + timedelta(days=day_of_year - 1)
        month, day = base.month, base.day
    else:
        month = int(values.get("month", 1))  # type: ignore[call-overload]
        day = int(values.get("day", 1))  # type: ignore[call-overload]
        _check_range("Month", month, 1, 12)
        _check_range("Day", day, 1, 31)

    try:
        naive = datetime(year, month, day, hour, minute, second, microsecond)
    except ValueError as e:
        raise ParseFailure(str(e)) from e

    if strict and has_date_fields and "weekday" in values and naive.weekday() != values["weekday"]:
        msg = f"Weekday does not match date {naive.date().isoformat()}"
        raise ParseFailure(msg)

    offset = values.get("offset")
    if isinstance(offset, timedelta):
        return naive.replace(tzinfo=timezone(offset)).astimezone(zone)
    aware = naive.replace(tzinfo=zone)
    if strict and aware.astimezone(UTC).astimezone(zone).replace(tzinfo=None) != naive:
        msg = f"Local time {naive.isoformat(sep=' ')} does not exist in {zone.key}"
        raise ParseFailure(msg)
    return aware


# ==============================================================================
# COMPILER
# ==============================================================================


@functools.lru_cache(maxsize=256)
def compile_pattern(
    pattern: str, locale: Locale, zone: ZoneInfo, lenient: bool = False
) -> CompiledPattern:
    """Compile a CLDR pattern for parsing.

    Results are cached per (pattern, locale, zone, lenient).

    Args:
        pattern: CLDR date pattern
        locale: Babel Locale supplying names
        zone: Zone for text without an explicit offset
        lenient: Compile the lenient variant

    Returns:
        CompiledPattern

    Raises:
        UnsupportedFieldError: If the pattern has an unparseable field
        UnterminatedQuoteError: If a quoted section is not closed
    """
    tokens = tokenize_pattern(pattern)
    gmt_format = str(locale.zone_formats.get("gmt", "GMT%s"))
    gmt_prefix, _, gmt_suffix = gmt_format.partition("%s")

    parts: list[str] = []
    specs: list[_FieldSpec] = []

    for index, token in enumerate(tokens):
        if token.kind == "literal":
            parts.append(_literal_regex(token.text, lenient))
            continue

        group = f"f{index}"
        letter, count = token.letter, token.count
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        if letter in "ML" and count >= 3:
            names = _month_names(locale, letter, min(count, 5), lenient)
            spec = _FieldSpec(group, letter, count, names=names)
            regex = _alternation(token, names)
        elif letter == "E" or (letter in "ec" and count >= 3):
            names = _day_names(locale, letter, count, lenient)
            spec = _FieldSpec(group, letter, count, names=names)
            regex = _alternation(token, names)
        elif letter == "a":
            names = _period_names(locale, lenient)
            spec = _FieldSpec(group, letter, count, names=names)
            regex = _alternation(token, names)
        elif letter == "G":
            names = _era_names(locale, count, lenient)
            spec = _FieldSpec(group, letter, count, names=names)
            regex = _alternation(token, names)
        elif letter in _ZONE_LETTERS:
            zone_regex = _zone_regex(token, gmt_prefix, gmt_suffix)
            if zone_regex is None:
                zone_names = _zone_display_names(token, locale, zone)
                spec = _FieldSpec(group, letter, count, zone_names=zone_names)
                regex = _alternation(token, zone_names)
            else:
                spec = _FieldSpec(group, letter, count)
                regex = zone_regex
        elif letter in _NUMERIC_LETTERS:
            abutting = following is not None and _is_numeric(following)
            spec = _FieldSpec(group, letter, count)
            regex = _numeric_regex(token, abutting, lenient)
        else:
            msg = f"Field '{token.text}' cannot be parsed"
            raise UnsupportedFieldError(msg)

        specs.append(spec)
        parts.append(f"(?P<{group}>{regex})")

    flags = re.IGNORECASE if lenient else 0
    return CompiledPattern(
        pattern=pattern,
        regex=re.compile("".join(parts), flags),
        fields=tuple(specs),
        zone=zone,
        lenient=lenient,
        gmt_affixes=(gmt_prefix, gmt_suffix),
    )
