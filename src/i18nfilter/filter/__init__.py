"""Value filters.

Public API:
    AbstractFilter - Callable value filter with setter-based options
    DateTimeFilter - Re-render date/time text from one locale format to another
    FilterOptions - Immutable DateTimeFilter configuration
    compute_fingerprint - Formatter cache key for an option tuple

Python 3.13+.
"""

from .base import AbstractFilter
from .date_time import DateTimeFilter
from .options import OPTION_NAMES, FilterOptions, compute_fingerprint, option_name

__all__ = [
    "OPTION_NAMES",
    "AbstractFilter",
    "DateTimeFilter",
    "FilterOptions",
    "compute_fingerprint",
    "option_name",
]
