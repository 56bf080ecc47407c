"""Tests for diagnostics: codes, spans, templates, formatting and reader errors."""

from __future__ import annotations

import json

import pytest

from scanreader import Reader, ScanError, ScanSyntaxError
from scanreader.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    SourceSpan,
)

# ============================================================================
# DATA STRUCTURES
# ============================================================================


class TestSourceSpan:
    """Test SourceSpan validation."""

    def test_valid_span(self) -> None:
        span = SourceSpan(start=3, end=4, line=1, column=4)

        assert (span.start, span.end, span.line, span.column) == (3, 4, 1, 4)

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"start": -1, "end": 0, "line": 1, "column": 1}, "start must be >= 0"),
            ({"start": 2, "end": 1, "line": 1, "column": 1}, "must be >= start"),
            ({"start": 0, "end": 0, "line": 0, "column": 1}, "line must be >= 1"),
            ({"start": 0, "end": 0, "line": 1, "column": 0}, "column must be >= 1"),
        ],
    )
    def test_invalid_span(self, kwargs: dict[str, int], message: str) -> None:
        with pytest.raises(ValueError, match=message):
            SourceSpan(**kwargs)


class TestScanError:
    """Test the exception base class."""

    def test_plain_message(self) -> None:
        error = ScanError("boom")

        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.checkpoint_underflow("pop_state")

        error = ScanError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error).startswith("error[CHECKPOINT_UNDERFLOW]: pop_state()")


# ============================================================================
# FORMATTER
# ============================================================================


def _located() -> Diagnostic:
    span = SourceSpan(start=6, end=7, line=2, column=3)
    return ErrorTemplate.unexpected_input("'x'", span, expected=(";", "}"))


class TestDiagnosticFormatter:
    """Test the three output formats."""

    def test_rust_format(self) -> None:
        text = DiagnosticFormatter().format(_located())

        assert text.splitlines() == [
            "error[UNEXPECTED_INPUT]: Unexpected 'x' at position 6",
            "  --> line 2, column 3",
            "  = expected: ';', '}'",
        ]

    def test_rust_format_with_hint(self) -> None:
        text = DiagnosticFormatter().format(ErrorTemplate.checkpoint_depth_exceeded(8))

        assert "  = help: Reduce nesting" in text

    def test_rust_format_color(self) -> None:
        text = DiagnosticFormatter(color=True).format(_located())

        assert text.startswith("\033[1;31merror\033[0m[UNEXPECTED_INPUT]")

    def test_warning_severity(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNEXPECTED_INPUT, message="odd", severity="warning"
        )

        assert DiagnosticFormatter().format(diagnostic) == "warning[UNEXPECTED_INPUT]: odd"

    def test_simple_format(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(_located()) == (
            "2:3: UNEXPECTED_INPUT: Unexpected 'x' at position 6 (expected: ';', '}')"
        )

    def test_simple_format_without_span(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(ErrorTemplate.checkpoint_underflow("restore_state")) == (
            "CHECKPOINT_UNDERFLOW: restore_state() called with an empty checkpoint stack"
        )

    def test_json_format(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(_located()))

        assert data["code"] == "UNEXPECTED_INPUT"
        assert data["code_value"] == DiagnosticCode.UNEXPECTED_INPUT.value
        assert (data["line"], data["column"], data["start"], data["end"]) == (2, 3, 6, 7)
        assert data["expected"] == [";", "}"]

    def test_sanitize_truncates(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        diagnostic = Diagnostic(code=DiagnosticCode.UNEXPECTED_INPUT, message="x" * 50)

        assert formatter.format(diagnostic) == "UNEXPECTED_INPUT: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostics = [
            ErrorTemplate.checkpoint_underflow("pop_state"),
            ErrorTemplate.checkpoint_underflow("restore_state"),
        ]

        assert formatter.format_all(diagnostics).count("\n\n") == 1

    def test_format_with_source(self) -> None:
        source = "a = 1\nb = ?"
        reader = Reader(source, 10)
        error = reader.syntax_error("Expected a number", expected=("0-9",))
        assert error.diagnostic is not None

        text = DiagnosticFormatter(context_lines=0).format_with_source(
            error.diagnostic, source
        )

        assert text.endswith("   2 | b = ?\n     |     ^")

    def test_format_with_source_without_span(self) -> None:
        diagnostic = ErrorTemplate.checkpoint_underflow("pop_state")
        formatter = DiagnosticFormatter()

        assert formatter.format_with_source(diagnostic, "abc") == formatter.format(diagnostic)


# ============================================================================
# READER-REPORTED ERRORS
# ============================================================================


class TestReaderErrors:
    """Test Reader.syntax_error() and Reader.expect()."""

    def test_syntax_error_is_built_not_raised(self) -> None:
        reader = Reader("let = 1", 4)

        error = reader.syntax_error("Expected identifier", expected=("identifier",))

        assert isinstance(error, ScanSyntaxError)
        assert error.diagnostic is not None
        assert error.diagnostic.span == SourceSpan(start=4, end=5, line=1, column=5)
        assert error.diagnostic.expected == ("identifier",)
        assert "Expected identifier" in str(error)

    def test_syntax_error_at_explicit_offset(self) -> None:
        reader = Reader("ab\ncd", 5)

        error = reader.syntax_error("Bad token", offset=3)

        assert error.diagnostic is not None
        assert error.diagnostic.span == SourceSpan(start=3, end=4, line=2, column=1)

    def test_syntax_error_offset_past_end_is_clamped(self) -> None:
        reader = Reader("ab")

        error = reader.syntax_error("Truncated", offset=5)

        assert error.diagnostic is not None
        assert error.diagnostic.span == SourceSpan(start=2, end=2, line=1, column=3)

    def test_syntax_error_at_eof_locates_end(self) -> None:
        reader = Reader("ab\ncd", 5)

        error = reader.syntax_error("Unterminated block")

        assert error.diagnostic is not None
        assert error.diagnostic.span == SourceSpan(start=5, end=5, line=2, column=3)

    def test_expect_success(self) -> None:
        reader = Reader("();")

        reader.expect("(")
        reader.expect(")")

        assert reader.index() == 2

    def test_expect_mismatch(self) -> None:
        reader = Reader("(x")
        reader.expect("(")

        with pytest.raises(ScanSyntaxError, match="Unexpected 'x' at position 1") as exc:
            reader.expect(")")

        assert exc.value.diagnostic is not None
        assert exc.value.diagnostic.code == DiagnosticCode.UNEXPECTED_INPUT
        assert exc.value.diagnostic.expected == (")",)
        assert reader.index() == 1

    def test_expect_at_eof(self) -> None:
        reader = Reader("(")
        reader.expect("(")

        with pytest.raises(ScanSyntaxError, match="Unexpected end of input") as exc:
            reader.expect(")")

        assert exc.value.diagnostic is not None
        assert exc.value.diagnostic.code == DiagnosticCode.UNEXPECTED_EOF

    def test_expect_bytes(self) -> None:
        reader = Reader(b"\x01\x02")

        with pytest.raises(ScanSyntaxError, match=r"Unexpected '\\x01' at position 0"):
            reader.expect(b"\x02")
