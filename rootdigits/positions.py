"""
Sets of zero based digit positions.

Positions select which digits of a possibly infinite sequence to fetch.
They are stored as sorted, disjoint, non-touching half-open ranges so the
largest wanted position is known up front and nothing past it is computed.
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Tuple


class PositionRange(NamedTuple):
    """Positions from start inclusive to end exclusive."""

    start: int
    end: int


class PositionsBuilder:
    """
    Builds Positions from ranges and single positions added in any order.

    Adding in ascending order of start merges against the last range only.
    Anything added out of order is sorted and merged once, in build().
    """

    def __init__(self) -> None:
        self._ranges: List[PositionRange] = []
        self._unsorted = False

    def add(self, posit: int) -> "PositionsBuilder":
        """Add a single position. Negative positions are ignored."""
        return self.add_range(posit, posit + 1)

    def add_range(self, start: int, end: int) -> "PositionsBuilder":
        """
        Add positions start inclusive to end exclusive.

        Negative positions within the range are ignored; end <= start is a
        no-op. Returns self for chaining.
        """
        start = max(start, 0)
        if end <= start:
            return self
        new_range = PositionRange(start, end)
        if not self._ranges:
            self._ranges.append(new_range)
        elif start < self._ranges[-1].start:
            self._ranges.append(new_range)
            self._unsorted = True
        else:
            _append_not_before(new_range, self._ranges)
        return self

    def build(self) -> "Positions":
        """Return the Positions added so far and reset this builder."""
        ranges = self._ranges
        if self._unsorted:
            ranges.sort(key=lambda r: r.start)
            merged = [ranges[0]]
            for prange in ranges[1:]:
                _append_not_before(prange, merged)
            ranges = merged
        self._ranges = []
        self._unsorted = False
        return Positions._from_sorted(ranges)


class Positions:
    """
    An immutable set of zero based positions.

    Iterating yields the PositionRange instances in ascending order.
    """

    __slots__ = ("_ranges",)

    def __init__(self) -> None:
        self._ranges: Tuple[PositionRange, ...] = ()

    @classmethod
    def _from_sorted(cls, ranges) -> "Positions":
        result = cls()
        result._ranges = tuple(ranges)
        return result

    def ranges(self) -> Iterator[PositionRange]:
        return iter(self._ranges)

    def __iter__(self) -> Iterator[PositionRange]:
        return self.ranges()

    def __len__(self) -> int:
        return len(self._ranges)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Positions):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self) -> int:
        return hash(self._ranges)

    def __repr__(self) -> str:
        inner = ", ".join(f"[{r.start}, {r.end})" for r in self._ranges)
        return f"Positions({inner})"

    def end(self) -> int:
        """Largest position in this set plus one, or 0 if empty."""
        if not self._ranges:
            return 0
        return self._ranges[-1].end

    def filter(self) -> "PositionsFilter":
        return PositionsFilter(self._ranges)


class PositionsFilter:
    """
    Membership test for positions that only ever increase.

    Each instance scans the ranges once, so calls to includes() must pass
    non-decreasing positions.
    """

    def __init__(self, ranges: Tuple[PositionRange, ...]):
        self._ranges = ranges
        self._index = 0
        self._limit = 0

    def includes(self, posit: int) -> bool:
        while self._index < len(self._ranges) and self._ranges[self._index].start <= posit:
            self._limit = self._ranges[self._index].end
            self._index += 1
        return posit < self._limit


def up_to(end: int) -> Positions:
    """Positions 0 up to but not including end."""
    return PositionsBuilder().add_range(0, end).build()


def between(start: int, end: int) -> Positions:
    """Positions start up to but not including end."""
    return PositionsBuilder().add_range(start, end).build()


def _append_not_before(item: PositionRange, ranges: List[PositionRange]) -> None:
    # item.start >= ranges[-1].start
    last = ranges[-1]
    if item.start <= last.end:
        if item.end > last.end:
            ranges[-1] = PositionRange(last.start, item.end)
    else:
        ranges.append(item)
