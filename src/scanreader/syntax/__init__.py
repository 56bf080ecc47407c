"""Scanning cursor package.

Provides the Reader cursor, anchored pattern back-ends, the scoped
checkpoint guard and line/column helpers.

Python 3.13+.
"""

from .checkpoint import Checkpoint
from .patterns import AnchoredPattern, CharSetPattern, LiteralPattern, RegexPattern, as_pattern
from .position import (
    Location,
    compute_location,
    format_location,
    get_error_context,
    get_line_content,
    line_column,
)
from .reader import Reader

__all__ = [
    "AnchoredPattern",
    "CharSetPattern",
    "Checkpoint",
    "LiteralPattern",
    "Location",
    "Reader",
    "RegexPattern",
    "as_pattern",
    "compute_location",
    "format_location",
    "get_error_context",
    "get_line_content",
    "line_column",
]
