"""
Knuth-Morris-Pratt matching over digit streams.

The automaton is fed one digit at a time, so it works on sequences that
are still being computed and on sequences that never end.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence as ListLike

from rootdigits.sequence import Digit


def failure_table(pattern: ListLike[int]) -> List[int]:
    """
    KMP failure table for a non-empty pattern.

    table[i] is the pattern index to fall back to on a mismatch at i.
    table[len(pattern)] is where to resume after a full match, which is
    what lets overlapping matches be found.
    """
    table = [0] * (len(pattern) + 1)
    table[0] = -1
    posit = -1
    for i in range(1, len(pattern)):
        posit += 1
        table[i] = posit
        while posit != -1 and pattern[i] != pattern[posit]:
            posit = table[posit]
    table[len(pattern)] = posit + 1
    return table


class KmpKernel:
    """Matching state for one pattern. visit() returns True on a full match."""

    def __init__(self, pattern: ListLike[int]):
        self.pattern = list(pattern)
        self.table = failure_table(self.pattern)
        self.pattern_index = 0

    def reset(self) -> None:
        self.pattern_index = 0

    def visit(self, digit: int) -> bool:
        if digit == self.pattern[self.pattern_index]:
            self.pattern_index += 1
            if self.pattern_index == len(self.pattern):
                self.pattern_index = self.table[self.pattern_index]
                return True
            return False
        while self.pattern_index != -1 and self.pattern[self.pattern_index] != digit:
            self.pattern_index = self.table[self.pattern_index]
        self.pattern_index += 1
        return False


def kmp(digits: Iterator[Digit], pattern: ListLike[int], reverse: bool = False) -> Iterator[int]:
    """
    Yield the starting position of every match of pattern in digits.

    digits run in ascending position, or descending when reverse is True,
    in which case pattern must already be reversed. A hole in the
    positions restarts matching, since unknown digits match nothing.
    """
    kernel = KmpKernel(pattern)
    step = -1 if reverse else 1
    expected = None
    for digit in digits:
        if expected is not None and digit.position != expected:
            kernel.reset()
        expected = digit.position + step
        if kernel.visit(digit.value):
            if reverse:
                yield digit.position
            else:
                yield digit.position + 1 - len(pattern)


def zero_pattern(digits: Iterator[Digit]) -> Iterator[int]:
    """The empty pattern matches at every position."""
    for digit in digits:
        yield digit.position
