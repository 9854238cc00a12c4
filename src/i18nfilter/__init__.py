"""i18nfilter - Locale-aware date/time re-formatting filter.

Parses date/time text written in a locale's CLDR style and renders the parsed
instant again, optionally with a custom CLDR pattern. Formatters are cached
per filter under a fingerprint of the effective options.

Public API:
    DateTimeFilter - Date/time re-formatting filter
    FilterOptions - Immutable filter configuration
    DateFormatter - Locale service: strict parse and format for one locale
    DateStyle - CLDR date/time styles (NONE, FULL, LONG, MEDIUM, SHORT)
    CalendarKind - Calendar kinds (TRADITIONAL, GREGORIAN)
    FormatterStatus - Formatter outcome codes

Exceptions:
    FilterError - Base exception class
    InvalidInputError - Input could not be converted
    InvalidOptionError - Unknown option key or unusable option value
    FormatterError - Locale service failure

Submodules:
    i18nfilter.intl - Pattern resolution, matching and formatting
    i18nfilter.diagnostics - Error codes, templates and formatting
    i18nfilter.defaults - Process-wide default locale and timezone
"""

from .defaults import (
    get_default_locale,
    get_default_timezone,
    reset_defaults,
    set_default_locale,
    set_default_timezone,
)
from .diagnostics import (
    FilterError,
    FormatterError,
    InvalidInputError,
    InvalidOptionError,
)
from .enums import CalendarKind, DateStyle, FormatterStatus
from .filter import DateTimeFilter, FilterOptions
from .intl import DateFormatter, is_failure

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("i18nfilter")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CalendarKind",
    "DateFormatter",
    "DateStyle",
    "DateTimeFilter",
    "FilterError",
    "FilterOptions",
    "FormatterError",
    "FormatterStatus",
    "InvalidInputError",
    "InvalidOptionError",
    "__version__",
    "get_default_locale",
    "get_default_timezone",
    "is_failure",
    "reset_defaults",
    "set_default_locale",
    "set_default_timezone",
]
