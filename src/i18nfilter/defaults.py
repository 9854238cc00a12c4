"""Process-wide default locale and timezone.

Filters without an explicit locale or timezone read these defaults at call
time, not at construction time. Changing a default therefore changes the
behavior of every filter for option tuples it has not cached yet.

Filters read defaults through the DefaultProvider protocol. ProcessDefaults
is the provider used when none is injected; StaticDefaults pins fixed values
for a single filter (useful in tests and multi-tenant services).

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Protocol, runtime_checkable

from i18nfilter.locale_utils import get_system_locale, get_system_timezone

__all__ = [
    "DefaultProvider",
    "ProcessDefaults",
    "StaticDefaults",
    "get_default_locale",
    "get_default_timezone",
    "process_defaults",
    "reset_defaults",
    "set_default_locale",
    "set_default_timezone",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class DefaultProvider(Protocol):
    """Source of the fallback locale and timezone for a filter."""

    def locale(self) -> str:
        """Return the default locale code."""
        ...

    def timezone(self) -> str:
        """Return the default IANA timezone name."""
        ...


@dataclass(frozen=True, slots=True)
class StaticDefaults:
    """Fixed defaults, independent of process state.

    Example:
        >>> from i18nfilter import DateTimeFilter
        >>> f = DateTimeFilter(defaults=StaticDefaults("de_DE", "Europe/Berlin"))
        >>> f.get_locale()
        'de_DE'
    """

    locale_code: str
    timezone_id: str

    def locale(self) -> str:
        return self.locale_code

    def timezone(self) -> str:
        return self.timezone_id


class ProcessDefaults:
    """Thread-safe registry of the process-wide defaults.

    Values are detected lazily from the environment on first read
    (LC_ALL/LC_MESSAGES/LANG for the locale, TZ for the timezone) and can be
    overridden with the setters. ``reset()`` drops overrides so the next read
    detects again.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._locale: str | None = None
        self._timezone: str | None = None

    def locale(self) -> str:
        with self._lock:
            if self._locale is None:
                self._locale = get_system_locale()
                logger.debug("Detected process default locale '%s'", self._locale)
            return self._locale

    def timezone(self) -> str:
        with self._lock:
            if self._timezone is None:
                self._timezone = get_system_timezone()
                logger.debug("Detected process default timezone '%s'", self._timezone)
            return self._timezone

    def set_locale(self, locale_code: str) -> None:
        with self._lock:
            self._locale = str(locale_code)

    def set_timezone(self, timezone_id: str) -> None:
        with self._lock:
            self._timezone = str(timezone_id)

    def reset(self) -> None:
        with self._lock:
            self._locale = None
            self._timezone = None


process_defaults = ProcessDefaults()


def get_default_locale() -> str:
    """Return the process-wide default locale."""
    return process_defaults.locale()


def set_default_locale(locale_code: str) -> None:
    """Override the process-wide default locale."""
    process_defaults.set_locale(locale_code)


def get_default_timezone() -> str:
    """Return the process-wide default timezone."""
    return process_defaults.timezone()


def set_default_timezone(timezone_id: str) -> None:
    """Override the process-wide default timezone.

    The name is not validated here; formatters resolve unknown names to UTC.
    """
    process_defaults.set_timezone(timezone_id)


def reset_defaults() -> None:
    """Forget overrides; the next read detects defaults from the environment."""
    process_defaults.reset()
