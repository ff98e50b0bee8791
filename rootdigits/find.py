"""
Searching sequences for digit patterns.

Every search is lazy: it computes only as many digits as it needs to find
the matches asked for. On an infinite sequence find_first, find_first_n
and iterating matches() run forever if there are not enough matches.
"""

from __future__ import annotations

from itertools import islice
from typing import Iterator, List, Sequence as ListLike

from rootdigits.kmp import kmp, zero_pattern
from rootdigits.sequence import FiniteSequence, Sequence


def matches(seq: Sequence, pattern: ListLike[int]) -> Iterator[int]:
    """
    Yield every zero based position in seq where pattern is found.

    pattern is copied, so changing it afterwards does not affect the search.
    """
    pattern = list(pattern)
    if not pattern:
        return zero_pattern(seq.items())
    return kmp(seq.items(), pattern)


def backward_matches(seq: FiniteSequence, pattern: ListLike[int]) -> Iterator[int]:
    """
    Yield every zero based position in seq where pattern is found, last first.

    Raises TypeError if seq is not a FiniteSequence.
    """
    if not isinstance(seq, FiniteSequence):
        raise TypeError("rootdigits: backward search needs a FiniteSequence")
    pattern = list(pattern)
    if not pattern:
        return zero_pattern(seq.reverse_items())
    return kmp(seq.reverse_items(), pattern[::-1], reverse=True)


def find_first(seq: Sequence, pattern: ListLike[int]) -> int:
    """First match of pattern in seq, or -1 if a finite seq has none."""
    return next(matches(seq, pattern), -1)


def find_first_n(seq: Sequence, pattern: ListLike[int], n: int) -> List[int]:
    """The first n matches; fewer if seq is finite and runs out."""
    if n <= 0:
        return []
    return list(islice(matches(seq, pattern), n))


def find_all(seq: FiniteSequence, pattern: ListLike[int]) -> List[int]:
    """Every match of pattern in seq in ascending order."""
    if not isinstance(seq, FiniteSequence):
        raise TypeError("rootdigits: find_all needs a FiniteSequence")
    return list(matches(seq, pattern))


def find_last(seq: FiniteSequence, pattern: ListLike[int]) -> int:
    """Last match of pattern in seq, or -1 if there is none."""
    return next(backward_matches(seq, pattern), -1)


def find_last_n(seq: FiniteSequence, pattern: ListLike[int], n: int) -> List[int]:
    """The last n matches, last first."""
    if n <= 0:
        return []
    return list(islice(backward_matches(seq, pattern), n))
