"""Locale service layer: CLDR patterns, strict parsing and formatting.

Public API:
    DateFormatter - Parse/format dates for one locale, zone and pattern
    is_failure - Check a FormatterStatus for failure
    compile_pattern - Compile a CLDR pattern into a text matcher
    resolve_pattern - CLDR pattern for a date/time style pair
    tokenize_pattern - Split a CLDR pattern into field and literal tokens

Python 3.13+. Uses Babel CLDR data.
"""

from .formatter import DateFormatter, is_failure
from .matcher import CompiledPattern, ParseFailure, compile_pattern
from .patterns import PatternToken, resolve_pattern, tokenize_pattern

__all__ = [
    "CompiledPattern",
    "DateFormatter",
    "ParseFailure",
    "PatternToken",
    "compile_pattern",
    "is_failure",
    "resolve_pattern",
    "tokenize_pattern",
]
