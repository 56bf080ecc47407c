"""Position utilities for scanned buffers.

Converts code-unit offsets to 1-indexed line/column positions for error
reporting. Works on both str and bytes buffers; the line feed is the only
line delimiter.

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported
"""

from typing import NamedTuple

from scanreader.constants import DEFAULT_CONTEXT_LINES, DEFAULT_ERROR_MARKER, LINE_FEED

__all__ = [
    "Location",
    "compute_location",
    "format_location",
    "get_error_context",
    "get_line_content",
    "line_column",
]


class Location(NamedTuple):
    """1-indexed line/column pair.

    Compares equal to a plain (line, column) tuple.
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def _line_feed(source: str | bytes) -> str | bytes:
    return LINE_FEED if isinstance(source, str) else LINE_FEED.encode("ascii")


def _check_offset(offset: int) -> None:
    if offset < 0:
        msg = f"Position must be >= 0, got {offset}"
        raise ValueError(msg)


def compute_location(source: str | bytes, offset: int) -> Location:
    """Get the 1-indexed line and column of offset.

    Counts line feeds strictly before offset. The column restarts at 1
    immediately after each line feed.

    Offsets at or past the end of the buffer yield Location(1, 1); this is
    not a range check and callers must not rely on it to validate offsets.
    Use line_column() when the end-of-input position itself is wanted.

    Args:
        source: Scanned buffer
        offset: Code-unit offset

    Returns:
        Location of offset

    Raises:
        ValueError: If offset is negative

    Example:
        >>> compute_location("foo\\nbar", 4)
        Location(line=2, column=1)
        >>> compute_location("foo\\nbar", 7)
        Location(line=1, column=1)
    """
    _check_offset(offset)
    if offset >= len(source):
        return Location(1, 1)
    return line_column(source, offset)


def line_column(source: str | bytes, offset: int) -> Location:
    """Get the 1-indexed line and column of offset, clamped to the buffer end.

    Unlike compute_location(), the end-of-input offset maps to the position
    just after the last unit, which is what error messages at EOF need.

    Args:
        source: Scanned buffer
        offset: Code-unit offset

    Returns:
        Location of offset

    Raises:
        ValueError: If offset is negative

    Example:
        >>> line_column("foo\\nbar", 7)
        Location(line=2, column=4)
    """
    _check_offset(offset)
    offset = min(offset, len(source))
    lf = _line_feed(source)

    # O(1) memory: count in range instead of creating substring
    line = source.count(lf, 0, offset) + 1  # type: ignore[arg-type]
    last_lf = source.rfind(lf, 0, offset)  # type: ignore[arg-type]
    column = offset - last_lf if last_lf >= 0 else offset + 1
    return Location(line, column)


def format_location(source: str | bytes, offset: int) -> str:
    """Format the position of offset as "line:column".

    Example:
        >>> format_location("hello\\nworld", 8)
        '2:3'
    """
    return str(line_column(source, offset))


def _text_lines(source: str | bytes) -> list[str]:
    # latin-1 maps each byte to one character, so columns stay aligned
    text = source if isinstance(source, str) else source.decode("latin-1")
    return text.split(LINE_FEED)


def get_line_content(source: str | bytes, line_number: int) -> str:
    """Extract the content of a 1-indexed line, without its line feed.

    Byte buffers are shown one character per byte.

    Raises:
        ValueError: If line_number is out of range

    Example:
        >>> get_line_content("hello\\nworld\\ntest", 2)
        'world'
    """
    lines = _text_lines(source)
    if not 1 <= line_number <= len(lines):
        msg = f"Line {line_number} out of range (source has {len(lines)} lines)"
        raise ValueError(msg)
    return lines[line_number - 1]


def get_error_context(
    source: str | bytes,
    offset: int,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    marker: str = DEFAULT_ERROR_MARKER,
) -> str:
    """Get formatted error context showing offset in source.

    Creates a multi-line string showing the error line with surrounding
    context lines, line numbers, and a marker under the error column.

    Args:
        source: Scanned buffer
        offset: Code-unit offset of the error
        context_lines: Number of lines to show before/after the error line
        marker: Character to use for the error marker

    Returns:
        Formatted error context string

    Example:
        >>> print(get_error_context("a = 1\\nb = ?\\nc = 3", 10, context_lines=1))
           1 | a = 1
           2 | b = ?
             |     ^
           3 | c = 3
    """
    line, column = line_column(source, offset)
    lines = _text_lines(source)

    start_line = max(1, line - context_lines)
    end_line = min(len(lines), line + context_lines)

    context = []
    for i in range(start_line, end_line + 1):
        context.append(f"{i:4} | {lines[i - 1]}")
        if i == line:
            context.append(" " * 4 + " | " + " " * (column - 1) + marker)
    return "\n".join(context)
