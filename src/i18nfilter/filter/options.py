"""Filter options and formatter cache fingerprints.

FilterOptions is an immutable snapshot of the six DateTimeFilter options.
compute_fingerprint() derives the formatter cache key from an option tuple.

Python 3.13+.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from i18nfilter.constants import FINGERPRINT_SEPARATOR
from i18nfilter.diagnostics import ErrorTemplate, InvalidOptionError
from i18nfilter.enums import CalendarKind, DateStyle

__all__ = ["OPTION_NAMES", "FilterOptions", "compute_fingerprint", "option_name"]

OPTION_NAMES: tuple[str, ...] = (
    "locale",
    "timezone",
    "calendar",
    "date_type",
    "time_type",
    "pattern",
)


def _fingerprint_part(value: object) -> str:
    # None renders empty; enums render as their integer value
    if value is None:
        return ""
    if isinstance(value, DateStyle | CalendarKind):
        return str(int(value))
    return str(value)


def compute_fingerprint(
    date_type: DateStyle | None,
    time_type: DateStyle | None,
    locale: str | None,
    timezone: str | None,
    calendar: CalendarKind | None,
    pattern: str | None,
) -> str:
    """Deterministic cache key for an effective option tuple.

    MD5 hex digest of the six values joined by NUL. Not a security boundary.

    Example:
        >>> a = compute_fingerprint(DateStyle.SHORT, DateStyle.SHORT, "en_US", "UTC",
        ...                         CalendarKind.GREGORIAN, None)
        >>> a == compute_fingerprint(3, 3, "en_US", "UTC", 1, None)
        True
    """
    joined = FINGERPRINT_SEPARATOR.join(
        _fingerprint_part(part)
        for part in (date_type, time_type, locale, timezone, calendar, pattern)
    )
    return hashlib.md5(joined.encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Immutable DateTimeFilter configuration.

    All fields are optional. Styles and calendar are coerced to their enums
    at construction, so ``FilterOptions(date_type="short")`` stores
    ``DateStyle.SHORT``.

    Example:
        >>> options = FilterOptions(locale="de_DE", date_type="medium")
        >>> options.replace(pattern="yyyy-MM-dd").pattern
        'yyyy-MM-dd'
        >>> FilterOptions.from_mapping({"dateType": 3}).date_type
        <DateStyle.SHORT: 3>
    """

    locale: str | None = None
    timezone: str | None = None
    calendar: CalendarKind | None = None
    date_type: DateStyle | None = None
    time_type: DateStyle | None = None
    pattern: str | None = None

    def __post_init__(self) -> None:
        """Coerce enum fields and validate the pattern.

        Raises:
            InvalidOptionError: If a style or calendar is unknown, or the
                pattern is not a non-empty string
        """
        object.__setattr__(self, "date_type", DateStyle.coerce(self.date_type))
        object.__setattr__(self, "time_type", DateStyle.coerce(self.time_type))
        object.__setattr__(self, "calendar", CalendarKind.coerce(self.calendar))
        if self.pattern is not None and (not isinstance(self.pattern, str) or not self.pattern):
            raise InvalidOptionError(ErrorTemplate.invalid_option_value("pattern", self.pattern))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> FilterOptions:
        """Build options from a mapping; camelCase keys are accepted.

        Raises:
            InvalidOptionError: If a key is not an option name
        """
        values: dict[str, Any] = {}
        for key, value in options.items():
            name = option_name(key)
            if name not in OPTION_NAMES:
                raise InvalidOptionError(ErrorTemplate.invalid_option(str(key)))
            values[name] = value
        return cls(**values)

    def replace(self, **changes: Any) -> FilterOptions:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def option_name(key: object) -> str:
    """Convert an option key to its snake_case name ("dateType" -> "date_type")."""
    text = str(key)
    chars: list[str] = []
    for char in text:
        if char.isupper():
            if chars:
                chars.append("_")
            chars.append(char.lower())
        else:
            chars.append(char)
    return "".join(chars)
