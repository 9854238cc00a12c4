"""Shared constants for i18nfilter.

Centralized configuration values used by the filter, the formatter and the
process-default registry. Placing them here avoids circular imports between
the ``filter`` and ``intl`` packages.

Constants are grouped by domain:
- Cache keys: Fingerprint construction
- Defaults: Process-wide fallbacks for locale and timezone
- Patterns: CLDR pattern fallbacks and two-digit year window

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Cache keys
    "FINGERPRINT_SEPARATOR",
    # Defaults
    "DEFAULT_LOCALE",
    "DEFAULT_TIMEZONE",
    # Patterns
    "FALLBACK_PATTERN",
    "TWO_DIGIT_YEAR_PAST_SPAN",
    "EPOCH_YEAR",
]

# ============================================================================
# CACHE KEYS
# ============================================================================

# Joins the six option values before hashing. NUL cannot appear in a locale
# identifier, an IANA timezone name or a CLDR pattern.
FINGERPRINT_SEPARATOR: str = "\0"

# ============================================================================
# DEFAULTS
# ============================================================================

# Used when neither the OS nor the environment name a locale.
DEFAULT_LOCALE: str = "en_US"

# Used when TZ is unset or names an unknown zone, and as the resolved zone
# for formatters asked for an unknown timezone.
DEFAULT_TIMEZONE: str = "UTC"

# ============================================================================
# PATTERNS
# ============================================================================

# Pattern used when both date and time styles are NONE.
FALLBACK_PATTERN: str = "yyyyMMdd hh:mm a"

# Two-digit years resolve into [now - 80 years, now + 20 years).
TWO_DIGIT_YEAR_PAST_SPAN: int = 80

# Fields absent from a parse pattern default to 1970-01-01 00:00:00.
EPOCH_YEAR: int = 1970
