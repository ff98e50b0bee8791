"""
Sequence interfaces shared by numbers and digit caches.

A Sequence yields Digit(position, value) pairs in ascending position and
may be infinite. A FiniteSequence can also be walked backwards. Positions
may have holes: a Sequence could be 375...695, where positions 3 to 5 are
unknown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple

# Sentinel for a digit that is unknown or out of range.
UNKNOWN = -1


class Digit(NamedTuple):
    """A digit and its zero based position in a mantissa."""

    position: int
    value: int


class Sequence(ABC):
    """A possibly infinite sequence of digits."""

    # True when with_start/with_end are cheap slices over memoized digits,
    # so fetching selected positions can jump straight to each range.
    random_access = False

    @abstractmethod
    def items(self) -> Iterator[Digit]:
        """Digits from lowest to highest position."""

    @abstractmethod
    def with_start(self, start: int) -> "Sequence":
        """This sequence without the positions before start."""

    @abstractmethod
    def with_end(self, end: int) -> "FiniteSequence":
        """This sequence without the positions at or after end."""

    def __iter__(self) -> Iterator[Digit]:
        return self.items()


class FiniteSequence(Sequence):
    """A Sequence with a known end, so it can be walked backwards."""

    @abstractmethod
    def reverse_items(self) -> Iterator[Digit]:
        """Digits from highest to lowest position."""

    @abstractmethod
    def with_start(self, start: int) -> "FiniteSequence":
        """This sequence without the positions before start."""
