"""Locale and timezone utilities.

Centralizes locale format normalization and the detection of the process
environment's locale and timezone. Babel and zoneinfo lookups are cached so
that repeated formatter construction does not re-read CLDR or tzdata files.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from i18nfilter.constants import DEFAULT_LOCALE, DEFAULT_TIMEZONE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_system_locale",
    "get_system_timezone",
    "get_zone",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Encoding and modifier suffixes (".UTF-8", "@euro") are dropped.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "de_DE.UTF-8")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "de_DE")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("de_DE.UTF-8")
        'de_DE'
    """
    code = locale_code.strip().split(".")[0].split("@")[0]
    return code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=128)
def get_zone(timezone_id: str) -> ZoneInfo:
    """Get a ZoneInfo for an IANA timezone name.

    Raises:
        ZoneInfoNotFoundError: If no such zone exists
        ValueError: If the name is malformed (absolute path, empty)
    """
    return ZoneInfo(timezone_id)


def clear_locale_cache() -> None:
    """Clear the cached Babel locales and timezone objects."""
    get_babel_locale.cache_clear()
    get_zone.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable
    4. LANG environment variable

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", "C.UTF-8", ""):
            return normalize_locale(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_LOCALE


def get_system_timezone() -> str:
    """Detect the process timezone from the TZ environment variable.

    TZ values with a leading ":" (glibc convention) are accepted. Unknown or
    unset values yield "UTC".

    Returns:
        IANA timezone name
    """
    value = os.environ.get("TZ", "").lstrip(":")
    if value:
        try:
            return get_zone(value).key
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass
    return DEFAULT_TIMEZONE
