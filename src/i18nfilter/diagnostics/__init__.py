"""Diagnostic system for i18nfilter errors.

Provides structured error diagnostics with codes, hints and the exception
hierarchy raised by the filter and the formatter.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    FilterError,
    FormatterError,
    InvalidInputError,
    InvalidOptionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FilterError",
    "FormatterError",
    "InvalidInputError",
    "InvalidOptionError",
    "OutputFormat",
]
