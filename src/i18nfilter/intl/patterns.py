"""CLDR date pattern tokenizing and style resolution.

Turns (locale, date style, time style) into the CLDR pattern a formatter
renders and parses with, and splits patterns into field and literal tokens.

Style resolution:
    - Date half: ``locale.date_formats[<style>]``
    - Time half: ``locale.time_formats[<style>]``
    - Both halves: joined through ``locale.datetime_formats[<date style>]``
      where CLDR uses {1} for the date and {0} for the time
      (en: "{1}, {0}", en full: "{1} 'at' {0}")
    - Both NONE: FALLBACK_PATTERN

Quote escaping (CLDR):
    - Single quotes delimit literal text: 'at' -> "at"
    - Two single quotes produce a literal quote: '' -> "'"
    - Example: "h 'o''clock' a" -> "2 o'clock PM"

Python 3.13+. Uses Babel CLDR data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from i18nfilter.constants import FALLBACK_PATTERN
from i18nfilter.enums import DateStyle

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "PatternToken",
    "UnterminatedQuoteError",
    "combine_patterns",
    "resolve_pattern",
    "tokenize_pattern",
]

# Glue used when a locale lacks a dateTimeFormat for the requested style
_DATETIME_GLUE_FALLBACK: str = "{1} {0}"


class UnterminatedQuoteError(ValueError):
    """Quoted literal section is missing its closing quote."""


@dataclass(frozen=True, slots=True)
class PatternToken:
    """Single token of a CLDR date pattern.

    Attributes:
        kind: "field" for pattern letters, "literal" for everything else
        text: Field letters ("yyyy") or literal text (", ", "at")
    """

    kind: Literal["field", "literal"]
    text: str

    @property
    def letter(self) -> str:
        """Pattern letter of a field token ("y" for "yyyy")."""
        return self.text[0]

    @property
    def count(self) -> int:
        """Repeat count of a field token (4 for "yyyy")."""
        return len(self.text)


def tokenize_pattern(pattern: str) -> list[PatternToken]:
    """Tokenize a CLDR pattern into field and literal tokens.

    Quoted text is always literal, even when it consists of pattern letters,
    so "h 'a' a" yields [h, " ", "a"(literal), " ", a(field)]. Adjacent
    literals are merged.

    Examples:
        "d.MM.yyyy" -> [d, ".", MM, ".", yyyy]
        "h 'o''clock' a" -> [h, " o'clock ", a]

    Args:
        pattern: CLDR date pattern

    Returns:
        List of PatternToken

    Raises:
        UnterminatedQuoteError: If a quoted section is not closed
    """
    tokens: list[PatternToken] = []
    i = 0
    n = len(pattern)

    def add_literal(text: str) -> None:
        if tokens and tokens[-1].kind == "literal":
            tokens[-1] = PatternToken("literal", tokens[-1].text + text)
        else:
            tokens.append(PatternToken("literal", text))

    while i < n:
        char = pattern[i]

        if char == "'":
            # '' outside a quoted section -> literal single quote
            if i + 1 < n and pattern[i + 1] == "'":
                add_literal("'")
                i += 2
                continue

            i += 1
            literal_chars: list[str] = []
            closed = False
            while i < n:
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        literal_chars.append("'")
                        i += 2
                    else:
                        i += 1
                        closed = True
                        break
                else:
                    literal_chars.append(pattern[i])
                    i += 1
            if not closed:
                msg = f"Unterminated quote in pattern {pattern!r}"
                raise UnterminatedQuoteError(msg)
            if literal_chars:
                add_literal("".join(literal_chars))
            continue

        if ("a" <= char <= "z") or ("A" <= char <= "Z"):
            j = i + 1
            while j < n and pattern[j] == char:
                j += 1
            tokens.append(PatternToken("field", pattern[i:j]))
            i = j
            continue

        add_literal(char)
        i += 1

    return tokens


def combine_patterns(glue: str, date_pattern: str, time_pattern: str) -> str:
    """Join date and time patterns through a CLDR dateTimeFormat glue.

    Args:
        glue: dateTimeFormat such as "{1}, {0}"
        date_pattern: Pattern substituted for {1}
        time_pattern: Pattern substituted for {0}

    Returns:
        Combined CLDR pattern
    """
    # Single pass so that braces inside the substituted patterns survive
    parts: list[str] = []
    i = 0
    while i < len(glue):
        if glue.startswith("{1}", i):
            parts.append(date_pattern)
            i += 3
        elif glue.startswith("{0}", i):
            parts.append(time_pattern)
            i += 3
        else:
            parts.append(glue[i])
            i += 1
    return "".join(parts)


def _style_pattern(formats: object, style: DateStyle) -> str:
    pattern = formats[style.cldr_name]  # type: ignore[index]
    return str(getattr(pattern, "pattern", pattern))


def resolve_pattern(locale: Locale, date_style: DateStyle, time_style: DateStyle) -> str:
    """Return the CLDR pattern for a date/time style pair.

    Args:
        locale: Babel Locale supplying CLDR formats
        date_style: Style of the date half (NONE omits it)
        time_style: Style of the time half (NONE omits it)

    Returns:
        CLDR pattern, e.g. "M/d/yy, h:mm a" for en_US SHORT/SHORT

    Raises:
        KeyError: If the locale has no pattern for a requested style
    """
    if date_style is DateStyle.NONE and time_style is DateStyle.NONE:
        return FALLBACK_PATTERN
    if time_style is DateStyle.NONE:
        return _style_pattern(locale.date_formats, date_style)
    if date_style is DateStyle.NONE:
        return _style_pattern(locale.time_formats, time_style)

    date_pattern = _style_pattern(locale.date_formats, date_style)
    time_pattern = _style_pattern(locale.time_formats, time_style)
    glue = locale.datetime_formats.get(date_style.cldr_name) or _DATETIME_GLUE_FALLBACK
    return combine_patterns(str(glue), date_pattern, time_pattern)
