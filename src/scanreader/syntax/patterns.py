"""Anchored pattern back-ends for Reader.match().

A pattern answers one question: does it match starting exactly at
offset N of buffer B, and if so, how many code units long is the match?
It never searches forward. An engine that can only search the remaining
text would silently skip invalid input.

Back-ends:
    LiteralPattern - fixed sequence of units
    CharSetPattern - bounded run of units drawn from a set
    RegexPattern   - compiled re.Pattern evaluated with Pattern.match(source, pos)

Patterns are immutable and may be shared between readers and threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = [
    "AnchoredPattern",
    "CharSetPattern",
    "LiteralPattern",
    "RegexPattern",
    "as_pattern",
]


@runtime_checkable
class AnchoredPattern(Protocol):
    """Capability interface for anchored matching.

    Implementations must return None when there is no match at offset, or
    the match length (0 <= length <= len(source) - offset) when there is.
    A zero length is a successful empty match, not a failure.
    """

    def match_at(self, source: str | bytes, offset: int) -> int | None:
        """Return the length of the match starting exactly at offset, or None."""
        ...


@dataclass(frozen=True, slots=True)
class LiteralPattern:
    """Matches a fixed sequence of code units.

    Example:
        >>> LiteralPattern("->").match_at("a->b", 1)
        2
        >>> LiteralPattern("->").match_at("a->b", 0) is None
        True
    """

    text: str | bytes

    def match_at(self, source: str | bytes, offset: int) -> int | None:
        # startswith() is bounds-checked and never matches a partial prefix
        if source.startswith(self.text, offset):  # type: ignore[arg-type]
            return len(self.text)
        return None


@dataclass(frozen=True, slots=True)
class CharSetPattern:
    """Matches a run of units that are members of a set.

    The run is greedy up to max_count units and must be at least
    min_count units long. With min_count=0 an empty run is a successful
    empty match.

    Attributes:
        units: Allowed units, as a str/bytes of units or a collection of units
        min_count: Minimum run length (default: 1)
        max_count: Maximum run length (None: unbounded)

    Example:
        >>> CharSetPattern("0123456789").match_at("ab123c", 2)
        3
        >>> CharSetPattern("01", min_count=2).match_at("0a", 0) is None
        True
    """

    units: Collection[str] | Collection[bytes] | str | bytes
    min_count: int = 1
    max_count: int | None = None

    def __post_init__(self) -> None:
        if self.min_count < 0:
            msg = f"min_count must be >= 0, got {self.min_count}"
            raise ValueError(msg)
        if self.max_count is not None and self.max_count < self.min_count:
            msg = f"max_count ({self.max_count}) must be >= min_count ({self.min_count})"
            raise ValueError(msg)

    def match_at(self, source: str | bytes, offset: int) -> int | None:
        end = len(source)
        if self.max_count is not None:
            end = min(end, offset + self.max_count)

        pos = offset
        while pos < end and source[pos : pos + 1] in self.units:
            pos += 1

        length = pos - offset
        return length if length >= self.min_count else None


@dataclass(frozen=True, slots=True)
class RegexPattern:
    """Matches a compiled regular expression anchored at the offset.

    Uses re.Pattern.match(source, offset), which only reports matches
    starting exactly at offset. Note that '^' still refers to the start of
    the buffer (or of a line with re.MULTILINE), not to the offset, so
    patterns should not begin with '^'; anchoring is implicit.

    Engine errors (re.error, str/bytes mismatches) propagate unchanged.

    Example:
        >>> ident = RegexPattern.compile(r"[_a-zA-Z][_a-zA-Z0-9]*")
        >>> ident.match_at("xx abc", 3)
        3
        >>> ident.match_at("  abc", 0) is None
        True
    """

    regex: re.Pattern[str] | re.Pattern[bytes]

    @classmethod
    def compile(cls, source: str | bytes, flags: int = 0) -> RegexPattern:
        """Compile a regular expression into an anchored pattern."""
        return cls(re.compile(source, flags))

    def match_at(self, source: str | bytes, offset: int) -> int | None:
        m = self.regex.match(source, offset)  # type: ignore[arg-type]
        if m is None:
            return None
        return m.end() - offset


def as_pattern(obj: AnchoredPattern | re.Pattern[str] | re.Pattern[bytes]) -> AnchoredPattern:
    """Coerce a supported pattern object into an AnchoredPattern.

    Args:
        obj: An AnchoredPattern implementation or a compiled re.Pattern

    Returns:
        obj itself, or a RegexPattern wrapping it

    Raises:
        TypeError: If obj is neither
    """
    if isinstance(obj, re.Pattern):
        return RegexPattern(obj)
    if isinstance(obj, AnchoredPattern):
        return obj
    msg = f"Expected an AnchoredPattern or re.Pattern, got {type(obj).__name__}"
    raise TypeError(msg)
