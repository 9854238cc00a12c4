"""Tests for diagnostics: codes, templates, formatting and exceptions.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest

from i18nfilter import FilterError, FormatterError, FormatterStatus, InvalidInputError
from i18nfilter.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    InvalidOptionError,
    OutputFormat,
)


class TestDiagnosticCode:
    """Code numbering by category."""

    def test_codes_are_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.INVALID_OPTION, 1000, 1999),
            (DiagnosticCode.UNKNOWN_TIMEZONE, 2000, 2999),
            (DiagnosticCode.PARSE_DATETIME_FAILED, 3000, 3999),
        ],
    )
    def test_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        """Codes fall in their category's range."""
        assert low <= code.value <= high


class TestErrorTemplate:
    """Templates produce complete diagnostics."""

    def test_parse_datetime_failed(self) -> None:
        """Parse failures carry input, locale and pattern."""
        diagnostic = ErrorTemplate.parse_datetime_failed("31/31/25", "en_US", "M/d/yy", "bad")
        assert diagnostic.code is DiagnosticCode.PARSE_DATETIME_FAILED
        assert diagnostic.input_value == "31/31/25"
        assert diagnostic.locale_code == "en_US"
        assert diagnostic.pattern == "M/d/yy"
        assert "31/31/25" in diagnostic.message
        assert diagnostic.hint

    def test_unknown_timezone_is_warning(self) -> None:
        """Timezone fallback is not an error."""
        diagnostic = ErrorTemplate.unknown_timezone("Mars/Olympus", "UTC")
        assert diagnostic.severity == "warning"
        assert "Mars/Olympus" in diagnostic.message
        assert "UTC" in diagnostic.message

    def test_invalid_option_names_setter(self) -> None:
        """The message names the missing setter."""
        diagnostic = ErrorTemplate.invalid_option("colour")
        assert "set_colour" in diagnostic.message

    def test_str_is_message(self) -> None:
        """str() of a diagnostic is its message."""
        diagnostic = ErrorTemplate.unsupported_calendar(0)
        assert str(diagnostic) == diagnostic.message


class TestDiagnosticFormatter:
    """Output styles."""

    @pytest.fixture
    def diagnostic(self) -> Diagnostic:
        return ErrorTemplate.parse_datetime_failed("x" * 150, "en_US", "M/d/yy", "no match")

    def test_rust_style(self, diagnostic: Diagnostic) -> None:
        """Default output is compiler style with context lines."""
        lines = diagnostic.format_error().splitlines()
        assert lines[0].startswith("error[PARSE_DATETIME_FAILED]: ")
        assert "  = locale: en_US" in lines
        assert "  = pattern: M/d/yy" in lines
        assert lines[-1].startswith("  = help: ")

    def test_simple_style(self, diagnostic: Diagnostic) -> None:
        """Simple output is one line."""
        text = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)
        assert text.startswith("PARSE_DATETIME_FAILED: ")
        assert "\n" not in text

    def test_json_style(self, diagnostic: Diagnostic) -> None:
        """JSON output is machine-readable."""
        data = json.loads(DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic))
        assert data["code"] == "PARSE_DATETIME_FAILED"
        assert data["code_value"] == 3001
        assert data["locale_code"] == "en_US"
        assert data["input_value"] == "x" * 150

    def test_sanitize_truncates(self, diagnostic: Diagnostic) -> None:
        """Sanitizing bounds user-controlled text."""
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.JSON, sanitize=True, max_content_length=20
        )
        data = json.loads(formatter.format(diagnostic))
        assert data["input_value"] == "x" * 20 + "..."

    def test_format_all(self) -> None:
        """Multiple diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        text = formatter.format_all(
            [ErrorTemplate.unsupported_calendar(0), ErrorTemplate.invalid_option("x")]
        )
        assert text.count("\n\n") == 1

    def test_warning_severity_prefix(self) -> None:
        """Warnings render with a warning prefix."""
        text = ErrorTemplate.unknown_timezone("Nope", "UTC").format_error()
        assert text.startswith("warning[UNKNOWN_TIMEZONE]")


class TestExceptions:
    """Exception hierarchy."""

    def test_plain_message(self) -> None:
        """Errors accept a plain message without a diagnostic."""
        error = FilterError("boom")
        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """Errors built from a diagnostic render it."""
        diagnostic = ErrorTemplate.invalid_option("colour")
        error = InvalidOptionError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error).startswith("error[INVALID_OPTION]")

    def test_input_error_is_value_error(self) -> None:
        """InvalidInputError can be caught as ValueError."""
        error = InvalidInputError("bad", input_value="x", locale_code="en_US", pattern="y")
        assert isinstance(error, ValueError)
        assert isinstance(error, FilterError)
        assert (error.input_value, error.locale_code, error.pattern) == ("x", "en_US", "y")

    def test_formatter_error_status(self) -> None:
        """FormatterError carries a status, ILLEGAL_ARGUMENT by default."""
        assert FormatterError("x").status is FormatterStatus.ILLEGAL_ARGUMENT
        error = FormatterError("x", status=FormatterStatus.UNSUPPORTED)
        assert error.status is FormatterStatus.UNSUPPORTED
        assert not isinstance(error, ValueError)
