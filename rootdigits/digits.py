"""
Digits found at selected positions of a Sequence.

get_digits materializes only the positions asked for and never reads a
sequence past Positions.end(), so it is safe on infinite roots. The
result answers lookups in O(log N) and can be searched and serialized
like any other finite sequence.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Dict, Iterable, Iterator, List, Tuple

from rootdigits.positions import Positions
from rootdigits.sequence import UNKNOWN, Digit, FiniteSequence, Sequence


class Digits(FiniteSequence):
    """
    An immutable, possibly sparse, set of digits keyed by position.

    Positions between stored digits are unknown, not zero. The empty
    instance has no digits.
    """

    __slots__ = ("_digits", "_positions")

    def __init__(self, digits: Iterable[Digit] = ()):
        builder = DigitsBuilder()
        for digit in digits:
            builder.add_digit(digit.position, digit.value)
        self._digits, self._positions = builder._take()

    @classmethod
    def _trusted(cls, digits: Tuple[Digit, ...], positions: Tuple[int, ...]) -> "Digits":
        result = cls.__new__(cls)
        result._digits = digits
        result._positions = positions
        return result

    def at(self, posit: int) -> int:
        """The digit at posit, or UNKNOWN if it is not stored here."""
        index = bisect_left(self._positions, posit)
        if index == len(self._positions) or self._positions[index] != posit:
            return UNKNOWN
        return self._digits[index].value

    def items(self) -> Iterator[Digit]:
        return iter(self._digits)

    def reverse_items(self) -> Iterator[Digit]:
        return reversed(self._digits)

    def with_start(self, start: int) -> "Digits":
        """The digits at positions >= start; shares storage with this one."""
        index = bisect_left(self._positions, start)
        return Digits._trusted(self._digits[index:], self._positions[index:])

    def with_end(self, end: int) -> "Digits":
        """The digits at positions < end; shares storage with this one."""
        index = bisect_left(self._positions, end)
        return Digits._trusted(self._digits[:index], self._positions[:index])

    def positions(self) -> Tuple[int, ...]:
        return self._positions

    def min(self) -> int:
        """Smallest stored position, or -1 if empty."""
        return self._positions[0] if self._positions else -1

    def max(self) -> int:
        """Largest stored position, or -1 if empty."""
        return self._positions[-1] if self._positions else -1

    def as_dict(self) -> Dict[int, int]:
        return {d.position: d.value for d in self._digits}

    def __len__(self) -> int:
        return len(self._digits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Digits):
            return NotImplemented
        return self._digits == other._digits

    def __hash__(self) -> int:
        return hash(self._digits)

    def __repr__(self) -> str:
        return f"Digits({list(self._digits)!r})"


class DigitsBuilder:
    """Collects digits in strictly increasing position order."""

    def __init__(self) -> None:
        self._digits: List[Digit] = []

    def add_digit(self, posit: int, value: int) -> "DigitsBuilder":
        """
        Append a digit.

        Raises ValueError if posit is negative, value is not between 0 and 9
        or posit does not exceed the last position added.
        """
        if posit < 0:
            raise ValueError(f"rootdigits: position must be non-negative but was {posit}")
        if not 0 <= value <= 9:
            raise ValueError(f"rootdigits: digit must be between 0 and 9 but was {value}")
        if self._digits and self._digits[-1].position >= posit:
            raise ValueError(
                f"rootdigits: positions must be ever increasing, "
                f"was {self._digits[-1].position} now {posit}"
            )
        self._digits.append(Digit(posit, value))
        return self

    def build(self) -> Digits:
        """Return the digits added so far and reset this builder."""
        return Digits._trusted(*self._take())

    def _take(self) -> Tuple[Tuple[Digit, ...], Tuple[int, ...]]:
        digits = tuple(self._digits)
        self._digits = []
        return digits, tuple(d.position for d in digits)


def iterate_with_positions(seq: Sequence, positions: Positions) -> Iterator[Digit]:
    """
    Stream the digits of seq that fall within positions.

    Stops pulling from seq at positions.end().
    """
    selected = positions.filter()
    for digit in seq.with_end(positions.end()).items():
        if selected.includes(digit.position):
            yield digit


def get_digits(seq: Sequence, positions: Positions) -> Digits:
    """Fetch the digits of seq found at the zero based positions given."""
    builder = DigitsBuilder()
    if seq.random_access:
        # Jump straight to each range instead of walking all of seq.
        for prange in positions.ranges():
            for digit in seq.with_start(prange.start).with_end(prange.end).items():
                builder.add_digit(digit.position, digit.value)
    else:
        for digit in iterate_with_positions(seq, positions):
            builder.add_digit(digit.position, digit.value)
    return builder.build()


def all_digits(seq: FiniteSequence) -> Digits:
    """Every digit of a finite sequence. Runs forever on an infinite one."""
    builder = DigitsBuilder()
    for digit in seq.items():
        builder.add_digit(digit.position, digit.value)
    return builder.build()
