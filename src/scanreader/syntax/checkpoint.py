"""Scoped checkpoint guard for speculative parsing.

Wraps the reader's push_state/pop_state/restore_state protocol in a context
manager, so a speculative attempt is rolled back on every exit path
(fall-through, early return, exception) unless it was committed.

Usage:
    with reader.checkpoint() as attempt:
        if reader.match("<") and (name := reader.match(IDENT)) and reader.match(">"):
            attempt.commit()
            return name
    return None  # cursor is back where the attempt started

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scanreader.diagnostics import CheckpointError, ErrorTemplate

if TYPE_CHECKING:
    from .reader import Reader

__all__ = ["Checkpoint"]

logger = logging.getLogger(__name__)


class Checkpoint[T: (str, bytes)]:
    """Checkpoint on a reader's stack, closed exactly once.

    Creating the guard pushes a checkpoint. commit() discards it, keeping the
    cursor where it is; rollback() restores the cursor to the saved offset.
    Leaving a with-block while still open rolls back.

    Closing a guard that is not the innermost open checkpoint, or closing it
    twice, raises CheckpointError. Ownership is checked by the serial of the
    pushed checkpoint, not only its depth: if the checkpoint was already
    consumed through pop_state()/restore_state() and another pushed in its
    place, closing the guard raises instead of closing the newcomer.

    When an exception leaves the with-block while an inner push_state() is
    still unbalanced, the CheckpointError raised by the automatic rollback is
    chained to that exception (its __cause__) and the guard stays open.

    Attributes:
        offset: Cursor offset saved when the guard was created
        depth: Stack depth that includes this checkpoint
    """

    __slots__ = ("_closed", "_id", "_reader", "depth", "offset")

    def __init__(self, reader: Reader[T]) -> None:
        reader.push_state()
        self._reader = reader
        self._closed = False
        self.offset = reader.index()
        self.depth = reader.checkpoint_depth
        self._id = reader.checkpoint_id

    def __enter__(self) -> Checkpoint[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if self._closed:
            return
        if exc_type is not None:
            logger.debug(
                "Rolling back checkpoint at offset %d after %s",
                self.offset,
                exc_type.__name__,
            )
        try:
            self.rollback()
        except CheckpointError as error:
            if exc_val is None:
                raise
            raise error from exc_val

    @property
    def active(self) -> bool:
        """True until commit() or rollback() has been called."""
        return not self._closed

    def commit(self) -> None:
        """Keep the cursor where it is and discard the checkpoint."""
        self._close()
        self._reader.pop_state()

    def rollback(self) -> None:
        """Return the cursor to the saved offset and discard the checkpoint."""
        self._close()
        self._reader.restore_state()

    def _close(self) -> None:
        current = self._reader.checkpoint_depth
        if self._closed or self._reader.checkpoint_id != self._id:
            raise CheckpointError(ErrorTemplate.checkpoint_order(self.depth, current))
        self._closed = True

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"Checkpoint(offset={self.offset}, depth={self.depth}, {state})"
