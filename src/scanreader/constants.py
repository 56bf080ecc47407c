"""Shared constants for scanreader.

Single source of truth for defaults used by the reader, the pattern
back-ends and the diagnostics layer.

Constants are grouped by domain:
- Code units: sentinel and delimiter units
- Checkpoint limits: speculative parsing depth
- Diagnostics: error context rendering

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Code units
    "NUL",
    "LINE_FEED",
    "BLANK_INLINE",
    # Checkpoint limits
    "DEFAULT_MAX_CHECKPOINT_DEPTH",
    # Diagnostics
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_ERROR_MARKER",
]

# ============================================================================
# CODE UNITS
# ============================================================================
#
# Text buffers use these strings directly. Byte buffers use the same values
# encoded as ASCII (see Reader.__init__), so b"\0", b"\n" and b" \t".

# Returned by peek()/read() at end of input.
NUL: str = "\0"

# The only line delimiter recognised by location diagnostics.
# CRLF input works because the LF is still present; CR-only input does not.
LINE_FEED: str = "\n"

# Inline blank units skipped by consume_whitespace().
# Newlines are deliberately excluded: grammars treat them as significant.
BLANK_INLINE: str = " \t"

# ============================================================================
# CHECKPOINT LIMITS
# ============================================================================

# None means unbounded. Readers accept max_checkpoint_depth to cap nesting
# of speculative attempts.
DEFAULT_MAX_CHECKPOINT_DEPTH: int | None = None

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Lines shown before and after the error line in rendered context.
DEFAULT_CONTEXT_LINES: int = 2

DEFAULT_ERROR_MARKER: str = "^"
