"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from scanreader.constants import DEFAULT_CONTEXT_LINES

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing
        context_lines: Lines of source shown around the error by format_with_source()

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.checkpoint_underflow("pop_state")))
        CHECKPOINT_UNDERFLOW: pop_state() called with an empty checkpoint stack
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100
    context_lines: int = DEFAULT_CONTEXT_LINES

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics, separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_with_source(self, diagnostic: Diagnostic, source: str | bytes) -> str:
        """Format a diagnostic followed by the source lines around its span.

        Diagnostics without a span are formatted as by format().

        Args:
            diagnostic: Diagnostic to format
            source: The buffer the diagnostic's span refers to

        Returns:
            Formatted diagnostic with a caret under the error column
        """
        formatted = self.format(diagnostic)
        if diagnostic.span is None or self.output_format == OutputFormat.JSON:
            return formatted

        from scanreader.syntax.position import get_error_context  # noqa: PLC0415 - circular

        context = get_error_context(
            source, diagnostic.span.start, context_lines=self.context_lines
        )
        return f"{formatted}\n\n{context}"

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[UNEXPECTED_INPUT]: Unexpected 'x' at position 4
              --> line 1, column 5
              = expected: ';', '}'
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._maybe_sanitize(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.span:
            parts.append(f"  --> line {diagnostic.span.line}, column {diagnostic.span.column}")

        if diagnostic.expected:
            parts.append(f"  = expected: {self._format_expected(diagnostic.expected)}")

        if diagnostic.hint:
            hint = self._maybe_sanitize(diagnostic.hint)
            parts.append(f"  = help: {hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            UNEXPECTED_EOF: Unexpected end of input at position 7
            2:3: UNEXPECTED_INPUT: Unexpected 'x' at position 6
        """
        message = self._maybe_sanitize(diagnostic.message)
        line = f"{diagnostic.code.name}: {message}"
        if diagnostic.span:
            line = f"{diagnostic.span.line}:{diagnostic.span.column}: {line}"
        if diagnostic.expected:
            line += f" (expected: {self._format_expected(diagnostic.expected)})"
        return line

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "UNEXPECTED_EOF", "code_value": 1001, "message": "...", ...}
        """
        data: dict[str, str | int | list[str]] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.expected:
            data["expected"] = list(diagnostic.expected)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    @staticmethod
    def _format_expected(expected: tuple[str, ...]) -> str:
        return ", ".join(f"'{e}'" for e in expected)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled."""
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
