"""Mutable scanning cursor for hand-written lexers and parsers.

A Reader walks a borrowed, immutable buffer (str or bytes) one decision at a
time: look ahead, consume conditionally, match literals and anchored
patterns, and back out of speculative attempts through a checkpoint stack.

Design:
    - The buffer is referenced, never copied or mutated
    - Code units are length-1 slices of the buffer: 1-char str or 1-byte bytes
    - "No match" is None (or False for literals) with the cursor unchanged;
      it is ordinary control flow and never raises
    - Every successful match advances by exactly the matched length
    - Checkpoint misuse is a programmer error and raises CheckpointError
    - Line:column computed on demand (O(n), only for diagnostics)

Not thread-safe: one Reader per input per parsing task.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Container
from typing import overload

from scanreader.constants import BLANK_INLINE, DEFAULT_MAX_CHECKPOINT_DEPTH, NUL
from scanreader.diagnostics import (
    CheckpointDepthError,
    CheckpointError,
    ErrorTemplate,
    ScanSyntaxError,
    SourceSpan,
)

from .checkpoint import Checkpoint
from .patterns import AnchoredPattern, as_pattern
from .position import Location, compute_location, line_column

__all__ = ["Reader"]

logger = logging.getLogger(__name__)


class Reader[T: (str, bytes)]:
    """Cursor over an in-memory str or bytes buffer.

    Example:
        >>> reader = Reader("foobar")
        >>> reader.match("foo")
        True
        >>> reader.index()
        3
        >>> reader.match("baz")
        False
        >>> reader.match_any()
        'bar'
        >>> reader.eof()
        True
    """

    __slots__ = (
        "_blank",
        "_nul",
        "_pos",
        "_pushes",
        "_source",
        "_states",
        "max_checkpoint_depth",
    )

    def __init__(
        self,
        source: T,
        pos: int = 0,
        *,
        max_checkpoint_depth: int | None = DEFAULT_MAX_CHECKPOINT_DEPTH,
    ) -> None:
        """Create a reader over source.

        Args:
            source: Buffer to scan; must stay unchanged while the reader is used
            pos: Starting offset, 0 <= pos <= len(source)
            max_checkpoint_depth: Limit on nested checkpoints (None: unbounded)

        Raises:
            TypeError: If source is not str or bytes
            ValueError: If pos or max_checkpoint_depth is out of range
        """
        if isinstance(source, str):
            self._nul: T = NUL  # type: ignore[assignment]
            self._blank: T = BLANK_INLINE  # type: ignore[assignment]
        elif isinstance(source, bytes):
            self._nul = NUL.encode("ascii")  # type: ignore[assignment]
            self._blank = BLANK_INLINE.encode("ascii")  # type: ignore[assignment]
        else:
            msg = f"Reader source must be str or bytes, got {type(source).__name__}"
            raise TypeError(msg)

        if not 0 <= pos <= len(source):
            raise ValueError(ErrorTemplate.invalid_offset(pos, len(source)).message)
        if max_checkpoint_depth is not None:
            if max_checkpoint_depth < 0:
                msg = f"max_checkpoint_depth must be >= 0, got {max_checkpoint_depth}"
                raise ValueError(msg)
            logger.debug("Reader created with max_checkpoint_depth=%d", max_checkpoint_depth)

        self._source: T = source
        self._pos = pos
        # (offset, push serial) pairs; the serial tells apart checkpoints at equal depth
        self._states: list[tuple[int, int]] = []
        self._pushes = 0
        self.max_checkpoint_depth = max_checkpoint_depth

    def __len__(self) -> int:
        return len(self._source)

    def __repr__(self) -> str:
        return (
            f"Reader(pos={self._pos}, length={len(self._source)}, "
            f"checkpoints={len(self._states)})"
        )

    @property
    def source(self) -> T:
        """The scanned buffer (read-only view, same object the reader was given)."""
        return self._source

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def eof(self) -> bool:
        """True when the cursor is at the end of input."""
        return self._pos == len(self._source)

    def index(self) -> int:
        """Current offset, in code units."""
        return self._pos

    def remaining(self) -> int:
        """Number of code units between the cursor and the end of input."""
        return len(self._source) - self._pos

    def peek(self, ahead: int = 0) -> T:
        """Return the unit ahead units past the cursor without advancing.

        Returns the NUL sentinel when that position is at or past the end.

        Raises:
            ValueError: If ahead is negative
        """
        if ahead < 0:
            msg = f"Lookahead must be >= 0, got {ahead}"
            raise ValueError(msg)
        target = self._pos + ahead
        if target >= len(self._source):
            return self._nul
        return self._source[target : target + 1]  # type: ignore[return-value]

    def read(self) -> T:
        """Return the current unit and advance past it.

        At end of input returns the NUL sentinel and stays put.
        """
        if self._pos == len(self._source):
            return self._nul
        unit = self._source[self._pos : self._pos + 1]
        self._pos += 1
        return unit  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def consume(self, units: Container[T] | T) -> int:
        """Advance past consecutive units that are members of units.

        Args:
            units: Allowed units, e.g. " \\t\\n" or {"a", "b"}

        Returns:
            Number of units consumed (0 leaves the cursor unchanged)
        """
        return self.consume_while(units.__contains__)

    def consume_whitespace(self) -> int:
        """Advance past spaces and tabs. Newlines are never consumed."""
        return self.consume(self._blank)

    def consume_while(self, predicate: Callable[[T], bool]) -> int:
        """Advance while predicate(unit) is true.

        Returns:
            Number of units consumed (0 leaves the cursor unchanged)
        """
        source = self._source
        end = len(source)
        start = pos = self._pos
        while pos < end and predicate(source[pos : pos + 1]):  # type: ignore[arg-type]
            pos += 1
        self._pos = pos
        return pos - start

    def match_while(self, predicate: Callable[[T], bool]) -> T | None:
        """Consume while predicate(unit) is true and return the consumed text.

        Returns:
            The consumed run, or None when no unit satisfied predicate
            (never an empty string)
        """
        start = self._pos
        if not self.consume_while(predicate):
            return None
        return self._source[start : self._pos]  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Literal and pattern matching
    # ------------------------------------------------------------------

    @overload
    def match(self, expected: T) -> bool: ...

    @overload
    def match(
        self, expected: AnchoredPattern | re.Pattern[str] | re.Pattern[bytes]
    ) -> T | None: ...

    def match(
        self, expected: T | AnchoredPattern | re.Pattern[str] | re.Pattern[bytes]
    ) -> bool | T | None:
        """Match a literal or an anchored pattern at the cursor.

        A str/bytes argument is a literal (one unit or a sequence): on a full
        match the cursor advances past it and True is returned, otherwise
        False with the cursor unchanged.

        Any other argument is a pattern (AnchoredPattern or compiled
        re.Pattern) evaluated at the cursor only, never further on. On a
        match the cursor advances by the match length and the matched text
        is returned (possibly empty); otherwise None.

        Raises:
            TypeError: If a literal's type differs from the buffer's, or
                expected is not a supported pattern
            ValueError: If a pattern reports a length past the end of input
        """
        if isinstance(expected, (str, bytes)):
            if not self._source.startswith(expected, self._pos):  # type: ignore[arg-type]
                return False
            self._pos += len(expected)
            return True

        pattern = as_pattern(expected)
        length = pattern.match_at(self._source, self._pos)
        if length is None:
            return None
        if not 0 <= length <= self.remaining():
            raise ValueError(
                ErrorTemplate.pattern_length_invalid(pattern, length, self.remaining()).message
            )
        start = self._pos
        self._pos += length
        return self._source[start : self._pos]  # type: ignore[return-value]

    def match_any(self) -> T | None:
        """Consume and return the rest of the input, or None at end of input."""
        if self._pos == len(self._source):
            return None
        start = self._pos
        self._pos = len(self._source)
        return self._source[start:]  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    @property
    def checkpoint_depth(self) -> int:
        """Number of saved checkpoints."""
        return len(self._states)

    @property
    def checkpoint_id(self) -> int | None:
        """Serial number of the innermost checkpoint, None when the stack is empty.

        Every push_state() gets a new serial, so a checkpoint that was closed
        and replaced at the same depth is not mistaken for its successor.
        """
        return self._states[-1][1] if self._states else None

    def push_state(self) -> None:
        """Save the current offset on the checkpoint stack.

        Raises:
            CheckpointDepthError: If max_checkpoint_depth would be exceeded
        """
        limit = self.max_checkpoint_depth
        if limit is not None and len(self._states) >= limit:
            raise CheckpointDepthError(ErrorTemplate.checkpoint_depth_exceeded(limit))
        self._pushes += 1
        self._states.append((self._pos, self._pushes))

    def pop_state(self) -> None:
        """Discard the most recent checkpoint without moving the cursor.

        Raises:
            CheckpointError: If no checkpoint is saved
        """
        if not self._states:
            raise CheckpointError(ErrorTemplate.checkpoint_underflow("pop_state"))
        self._states.pop()

    def restore_state(self) -> None:
        """Move the cursor back to the most recent checkpoint and discard it.

        Raises:
            CheckpointError: If no checkpoint is saved
        """
        if not self._states:
            raise CheckpointError(ErrorTemplate.checkpoint_underflow("restore_state"))
        self._pos, _ = self._states.pop()

    def checkpoint(self) -> Checkpoint[T]:
        """Push a checkpoint and return a guard that closes it.

        The guard rolls back on leaving a with-block unless commit() was
        called. See Checkpoint.
        """
        return Checkpoint(self)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def location(self, offset: int | None = None) -> Location:
        """Line and column (1-indexed) of offset, default the cursor.

        Offsets at or past the end of input yield Location(1, 1).
        """
        return compute_location(self._source, self._pos if offset is None else offset)

    def span(self, start: int, end: int | None = None) -> SourceSpan:
        """SourceSpan from start to end (default: the cursor).

        Line and column are those of start; the end-of-input offset is
        located just after the last unit.
        """
        end = self._pos if end is None else end
        line, column = line_column(self._source, start)
        return SourceSpan(start=start, end=end, line=line, column=column)

    def syntax_error(
        self,
        message: str,
        *,
        expected: tuple[str, ...] = (),
        offset: int | None = None,
    ) -> ScanSyntaxError:
        """Build (not raise) a ScanSyntaxError located at offset (default: the cursor).

        Example:
            >>> if not reader.match(";"):
            ...     raise reader.syntax_error("Missing semicolon", expected=(";",))
        """
        start = self._pos if offset is None else min(offset, len(self._source))
        span = self.span(start, min(start + 1, len(self._source)))
        return ScanSyntaxError(ErrorTemplate.syntax_error(message, span, expected))

    def expect(self, literal: T) -> None:
        """Match literal or raise ScanSyntaxError.

        The raising counterpart of match(literal) for consumers that treat a
        mismatch as fatal. The cursor is unchanged when the error is raised.

        Raises:
            ScanSyntaxError: UNEXPECTED_EOF at end of input, UNEXPECTED_INPUT otherwise
        """
        if self.match(literal):
            return
        expected = (_display(literal),)
        span = self.span(self._pos, min(self._pos + 1, len(self._source)))
        if self.eof():
            raise ScanSyntaxError(ErrorTemplate.unexpected_eof(span, expected))
        found = repr(_display(self.peek()))
        raise ScanSyntaxError(ErrorTemplate.unexpected_input(found, span, expected))


def _display(text: str | bytes) -> str:
    # latin-1 keeps one character per byte for byte buffers
    return text if isinstance(text, str) else text.decode("latin-1")
