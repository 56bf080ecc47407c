"""scanreader - scanning cursor for hand-written lexers and parsers.

A Reader is a cursor over an in-memory str or bytes buffer offering
lookahead, conditional consumption, literal and anchored pattern matching,
speculative backtracking through checkpoints, and line/column diagnostics.

Public API:
    Reader - Scanning cursor
    Checkpoint - Scoped checkpoint guard returned by Reader.checkpoint()
    Location - 1-indexed (line, column) pair
    AnchoredPattern - Capability interface for pattern back-ends
    LiteralPattern, CharSetPattern, RegexPattern - Pattern back-ends

Exceptions:
    ScanError - Base exception class
    ScanSyntaxError - Consumer-reported syntax errors
    CheckpointError - Checkpoint stack misuse
    CheckpointDepthError - Checkpoint nesting limit exceeded

Submodules:
    scanreader.syntax.position - Offset to line/column helpers
    scanreader.diagnostics - Diagnostic codes, templates and formatting
"""

from .diagnostics import CheckpointDepthError, CheckpointError, ScanError, ScanSyntaxError
from .syntax import (
    AnchoredPattern,
    CharSetPattern,
    Checkpoint,
    LiteralPattern,
    Location,
    Reader,
    RegexPattern,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("scanreader")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AnchoredPattern",
    "CharSetPattern",
    "Checkpoint",
    "CheckpointDepthError",
    "CheckpointError",
    "LiteralPattern",
    "Location",
    "Reader",
    "RegexPattern",
    "ScanError",
    "ScanSyntaxError",
    "__version__",
]
