"""
Lazily evaluated non-negative real numbers.

A non-zero Number is 0.d1d2d3... * 10**exponent with d1 != 0. Digits are
computed on demand by a Memoizer, so they are computed once and shared by
every view and every thread. square_root and cube_root return Numbers
with no digits computed yet; reuse an instance to reuse its digits.
"""

from __future__ import annotations

import operator
import sys
from fractions import Fraction
from itertools import takewhile
from typing import Iterable, Iterator, List, Sequence as ListLike

from rootdigits.memoizer import DEFAULT_CHUNK_SIZE, Memoizer, with_limit
from rootdigits.roots import RootKind, fraction_digits, nroot, repeating_digits
from rootdigits.sequence import UNKNOWN, Digit, FiniteSequence, Sequence


def _digit_items(mantissa, start: int) -> Iterator[Digit]:
    if mantissa is None:
        return iter(())
    return (Digit(posit, value) for posit, value in enumerate(mantissa.iter_from(start), start))


def _reverse_items(mantissa, start: int) -> Iterator[Digit]:
    if mantissa is None:
        return
    digits = mantissa.first_n(sys.maxsize)
    for posit in range(len(digits) - 1, start - 1, -1):
        yield Digit(posit, digits[posit])


class Number(Sequence):
    """
    A reference to a non-negative real number with possibly infinite digits.

    Safe to share between threads. A Number with no mantissa is zero: it
    has exponent 0 and at() always returns UNKNOWN.
    """

    random_access = True

    def __init__(self, mantissa, exponent: int):
        self._mantissa = mantissa
        self._exponent = exponent if mantissa is not None else 0

    @property
    def exponent(self) -> int:
        return self._exponent

    def is_zero(self) -> bool:
        return self._mantissa is None

    def at(self, posit: int) -> int:
        """
        The mantissa digit at a zero based position.

        Returns UNKNOWN if posit is negative or this Number has posit or
        fewer digits. To fetch many positions, get_digits is faster.
        """
        if self._mantissa is None:
            return UNKNOWN
        return self._mantissa.at(posit)

    def first_n(self, n: int) -> List[int]:
        if self._mantissa is None:
            return []
        return self._mantissa.first_n(n)

    def items(self) -> Iterator[Digit]:
        return _digit_items(self._mantissa, 0)

    def iter_from(self, posit: int) -> Iterator[Digit]:
        """Digits from posit onward. Raises ValueError if posit is negative."""
        if posit < 0:
            raise ValueError("rootdigits: position must be non-negative")
        return _digit_items(self._mantissa, posit)

    def with_significant(self, limit: int) -> "FiniteNumber":
        """
        This Number truncated to at most limit significant digits.

        Truncation always rounds toward zero. The result shares computed
        digits with this Number. Raises ValueError if limit is negative.
        """
        if limit < 0:
            raise ValueError("rootdigits: limit must be non-negative")
        return FiniteNumber(with_limit(self._mantissa, limit), self._exponent)

    def with_start(self, start: int) -> Sequence:
        if start <= 0:
            return self
        return _MantissaView(self._mantissa, start)

    def with_end(self, end: int) -> "FiniteNumber":
        return FiniteNumber(with_limit(self._mantissa, end), self._exponent)

    def __repr__(self) -> str:
        if self._mantissa is None:
            return f"{type(self).__name__}(0)"
        digits = self._mantissa.first_n(17)
        shown = "".join(map(str, digits[:16]))
        if len(digits) > 16:
            shown += "..."
        return f"{type(self).__name__}(0.{shown}e{self._exponent})"


class FiniteNumber(Number, FiniteSequence):
    """A Number known to have finitely many digits."""

    def digits(self) -> List[int]:
        """Every mantissa digit."""
        return self.first_n(sys.maxsize)

    def reverse_items(self) -> Iterator[Digit]:
        return _reverse_items(self._mantissa, 0)

    def with_start(self, start: int) -> FiniteSequence:
        if start <= 0:
            return self
        return _FiniteMantissaView(self._mantissa, start)


ZERO = FiniteNumber(None, 0)


class _MantissaView(Sequence):
    # The digits of a mantissa from start onward.

    random_access = True

    def __init__(self, mantissa, start: int):
        self._mantissa = mantissa
        self._start = start

    def items(self) -> Iterator[Digit]:
        return _digit_items(self._mantissa, self._start)

    def with_start(self, start: int):
        if start <= self._start:
            return self
        return type(self)(self._mantissa, start)

    def with_end(self, end: int) -> FiniteSequence:
        return _FiniteMantissaView(with_limit(self._mantissa, end), self._start)


class _FiniteMantissaView(_MantissaView, FiniteSequence):

    def reverse_items(self) -> Iterator[Digit]:
        return _reverse_items(self._mantissa, self._start)


# =========================
# Factories
# =========================


def _as_fraction(radicand, denominator) -> Fraction:
    if denominator <= 0:
        raise ValueError("rootdigits: denominator must be positive")
    value = Fraction(radicand) / Fraction(denominator)
    if value < 0:
        raise ValueError("rootdigits: radicand must be non-negative")
    return value


def _nroot_number(value: Fraction, kind: RootKind, chunk_size: int) -> Number:
    if value == 0:
        return ZERO
    digits, exp = nroot(value.numerator, value.denominator, kind)
    return Number(Memoizer(digits, chunk_size), exp)


def square_root(radicand, denominator=1, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Number:
    """
    Square root of radicand / denominator.

    radicand may be an int, a Fraction, a gmpy2 number or a string such as
    "3/7" or "0.026". Raises ValueError if the quotient is negative or
    denominator is not positive.
    """
    return _nroot_number(_as_fraction(radicand, denominator), RootKind.SQUARE, chunk_size)


def cube_root(radicand, denominator=1, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Number:
    """Cube root of radicand / denominator. See square_root."""
    return _nroot_number(_as_fraction(radicand, denominator), RootKind.CUBE, chunk_size)


def from_fraction(value, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Number:
    """value itself as a Number, digits repeating forever if need be."""
    value = _as_fraction(value, 1)
    if value == 0:
        return ZERO
    digits, exp = fraction_digits(value.numerator, value.denominator)
    return Number(Memoizer(digits, chunk_size), exp)


def from_digits(fixed: ListLike[int], repeating: ListLike[int] = (), exponent: int = 0) -> Number:
    """
    A Number with mantissa 0.<fixed><repeating><repeating>...

    Raises ValueError if any digit is outside 0-9 or the first mantissa
    digit would be 0. With no repeating digits the result is a FiniteNumber.
    """
    fixed, repeating = list(fixed), list(repeating)
    if not fixed and not repeating:
        return ZERO
    if not all(0 <= d <= 9 for d in fixed + repeating):
        raise ValueError("rootdigits: digits must be between 0 and 9")
    if (fixed or repeating)[0] == 0:
        raise ValueError("rootdigits: leading zeros not allowed in digits")
    memoizer = Memoizer(repeating_digits(fixed, repeating))
    if not repeating:
        return FiniteNumber(memoizer, exponent)
    return Number(memoizer, exponent)


def _is_digit(value) -> bool:
    # Any integer type counts, gmpy2.mpz included.
    try:
        value = operator.index(value)
    except TypeError:
        return False
    return 0 <= value <= 9


def new_number(digits: Iterable[int], exponent: int = 0, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Number:
    """
    Wrap any digit iterable as a Number.

    The first value outside 0-9 ends the mantissa. If the first digit is 0
    or there are no digits, the result is ZERO.
    """
    valid = map(int, takewhile(_is_digit, digits))
    memoizer = Memoizer(valid, chunk_size)
    if memoizer.at(0) in (0, UNKNOWN):
        return ZERO
    return Number(memoizer, exponent)
