"""scanreader exception hierarchy with structured diagnostics.

Matching primitives never raise on "no match"; these exceptions cover
programmer errors (checkpoint misuse) and consumer-reported syntax errors.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CheckpointDepthError",
    "CheckpointError",
    "ScanError",
    "ScanSyntaxError",
]


class ScanError(Exception):
    """Base exception for all scanreader errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ScanError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ScanSyntaxError(ScanError):
    """Input did not match what the consumer required.

    Raised by Reader.expect() and built by Reader.syntax_error(). The
    diagnostic span locates the offending offset.
    """


class CheckpointError(ScanError):
    """Checkpoint stack used out of contract.

    Popping or restoring an empty stack, or closing a checkpoint guard that
    is not the most recent one, is a programmer error. It is never a
    recoverable "no match" condition.
    """


class CheckpointDepthError(CheckpointError):
    """Checkpoint stack grew past the reader's max_checkpoint_depth."""
