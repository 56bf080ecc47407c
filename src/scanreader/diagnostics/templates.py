"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def unexpected_eof(span: SourceSpan, expected: tuple[str, ...] = ()) -> Diagnostic:
        """Consumer required more input but the reader is at end of input.

        Args:
            span: Location of the end of input
            expected: What the consumer expected to find

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected end of input at position {span.start}",
            span=span,
            expected=expected,
        )

    @staticmethod
    def unexpected_input(
        found: str, span: SourceSpan, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """Consumer required something other than the input at the cursor.

        Args:
            found: Printable form of the offending code unit
            span: Location of the offending code unit
            expected: What the consumer expected to find

        Returns:
            Diagnostic for UNEXPECTED_INPUT
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_INPUT,
            message=f"Unexpected {found} at position {span.start}",
            span=span,
            expected=expected,
        )

    @staticmethod
    def syntax_error(
        message: str, span: SourceSpan, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """Consumer-worded syntax error at a known location.

        Args:
            message: Error description supplied by the consumer
            span: Location of the error
            expected: What the consumer expected to find

        Returns:
            Diagnostic for UNEXPECTED_INPUT
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_INPUT,
            message=message,
            span=span,
            expected=expected,
        )

    @staticmethod
    def invalid_offset(offset: int, length: int) -> Diagnostic:
        """Reader constructed at an offset outside the buffer.

        Args:
            offset: Requested starting offset
            length: Buffer length

        Returns:
            Diagnostic for INVALID_OFFSET
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message=f"Offset {offset} outside buffer of length {length}",
            hint="Starting offsets must satisfy 0 <= offset <= len(source)",
        )

    @staticmethod
    def pattern_length_invalid(pattern: object, length: int, remaining: int) -> Diagnostic:
        """Pattern back-end reported a match length outside the remaining input.

        Args:
            pattern: The offending pattern object
            length: Length the pattern reported
            remaining: Units left between the cursor and end of input

        Returns:
            Diagnostic for PATTERN_LENGTH_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_LENGTH_INVALID,
            message=(
                f"Pattern {pattern!r} reported match length {length} "
                f"with {remaining} unit(s) remaining"
            ),
            hint="match_at() must return None or a length in 0..remaining",
        )

    @staticmethod
    def checkpoint_underflow(operation: str) -> Diagnostic:
        """pop_state()/restore_state() called with no checkpoint saved.

        Args:
            operation: Name of the operation that was called

        Returns:
            Diagnostic for CHECKPOINT_UNDERFLOW
        """
        return Diagnostic(
            code=DiagnosticCode.CHECKPOINT_UNDERFLOW,
            message=f"{operation}() called with an empty checkpoint stack",
            hint="Every pop_state()/restore_state() needs a matching push_state()",
        )

    @staticmethod
    def checkpoint_order(depth: int, current_depth: int) -> Diagnostic:
        """Checkpoint guard closed while it is not the innermost checkpoint.

        Args:
            depth: Stack depth at which the guard was created
            current_depth: Current checkpoint stack depth

        Returns:
            Diagnostic for CHECKPOINT_ORDER
        """
        return Diagnostic(
            code=DiagnosticCode.CHECKPOINT_ORDER,
            message=(
                f"Checkpoint at depth {depth} closed out of order "
                f"(stack depth is {current_depth})"
            ),
            hint="Checkpoints nest strictly: close the innermost one first, and only once",
        )

    @staticmethod
    def checkpoint_depth_exceeded(max_depth: int) -> Diagnostic:
        """Checkpoint stack would grow past the configured limit.

        Args:
            max_depth: Configured maximum depth

        Returns:
            Diagnostic for CHECKPOINT_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.CHECKPOINT_DEPTH_EXCEEDED,
            message=f"Maximum checkpoint depth ({max_depth}) exceeded",
            hint="Reduce nesting of speculative attempts or raise max_checkpoint_depth",
        )
