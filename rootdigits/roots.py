"""
Digit-by-digit nth root extraction.

- gmpy2.mpz for every big-integer step, no floating point anywhere.
- Digits come out one at a time, so precision is never chosen up front.
- The digits are exact truncations: a prefix of k digits is never above the
  true root.

Square and cube roots share one engine. A root manager supplies the group
base and says how the trial increment evolves after each subtraction and
after each finished digit.
"""

from __future__ import annotations

import enum
from typing import Iterator, Optional, Tuple

from gmpy2 import mpz


# =========================
# Root managers
# =========================


class SquareRootManager:
    """
    Increment recurrence for square roots.

    Trial increments are the odd numbers 1, 3, 5, ... scaled as each digit
    is fixed: subtracting the first n of them removes n**2.
    """

    def base(self) -> mpz:
        return mpz(100)

    def next_increment(self, incr: mpz) -> mpz:
        return incr + 2

    def finalize_digit(self, incr: mpz) -> mpz:
        return (incr - 1) * 10 + 1


class CubeRootManager:
    """
    Increment recurrence for cube roots.

    Cubes need a second-order difference, kept in incr2 between calls, so
    every generator needs its own CubeRootManager.
    """

    def __init__(self) -> None:
        self.incr2 = mpz(6)

    def base(self) -> mpz:
        return mpz(1000)

    def next_increment(self, incr: mpz) -> mpz:
        incr = incr + self.incr2
        self.incr2 += 6
        return incr

    def finalize_digit(self, incr: mpz) -> mpz:
        incr = incr * 100 - self.incr2 * 45 + 171
        self.incr2 = self.incr2 * 10 - 54
        return incr


class RootKind(enum.Enum):
    """Which root to extract."""

    SQUARE = 2
    CUBE = 3

    def new_manager(self):
        if self is RootKind.SQUARE:
            return SquareRootManager()
        return CubeRootManager()


# =========================
# Generators
# =========================


def check_radicand(numerator: int, denominator: int) -> None:
    """Raise ValueError unless numerator >= 0 and denominator > 0."""
    if denominator <= 0:
        raise ValueError("rootdigits: denominator must be positive")
    if numerator < 0:
        raise ValueError("rootdigits: numerator must be non-negative")


def normalize(numerator: mpz, denominator: mpz, base: mpz) -> Tuple[mpz, mpz, int]:
    """
    Scale numerator/denominator by powers of base into [1/base, 1).

    Returns (numerator, denominator, exponent) where exponent counts the
    base-groups moved. numerator must be positive.
    """
    exp = 0
    while numerator < denominator:
        exp -= 1
        numerator *= base
    if exp < 0:
        exp += 1
        numerator //= base
    while numerator >= denominator:
        exp += 1
        denominator *= base
    return numerator, denominator, exp


class RootDigitGenerator:
    """
    Iterator over the mantissa digits of an nth root.

    numerator/denominator must already be normalized into [1/base, 1).
    The iterator is single pass and not safe to advance from two threads;
    wrap it in a Memoizer to share it.
    """

    def __init__(self, numerator: mpz, denominator: mpz, kind: RootKind) -> None:
        self._manager = kind.new_manager()
        self._base = self._manager.base()
        self._incr = mpz(1)
        self._remainder = mpz(0)
        self._groups = self._radicand_groups(mpz(numerator), mpz(denominator))

    def _radicand_groups(self, num: mpz, denom: mpz) -> Iterator[mpz]:
        while num:
            group, num = divmod(num * self._base, denom)
            yield group

    def __iter__(self) -> "RootDigitGenerator":
        return self

    def __next__(self) -> int:
        group: Optional[mpz] = next(self._groups, None)
        if group is None and not self._remainder:
            raise StopIteration
        remainder = self._remainder * self._base
        if group is not None:
            remainder += group
        incr = self._incr
        digit = 0
        while remainder >= incr:
            remainder -= incr
            digit += 1
            incr = self._manager.next_increment(incr)
        self._incr = self._manager.finalize_digit(incr)
        self._remainder = remainder
        return digit


def nroot(numerator: int, denominator: int, kind: RootKind) -> Tuple[RootDigitGenerator, int]:
    """
    Start extracting the kind-th root of numerator / denominator.

    Returns (digits, exponent) where the root equals 0.d1d2d3... * 10**exponent.
    Raises ValueError on a negative numerator or a non-positive denominator,
    and for a zero numerator, which has no mantissa digits to generate.
    """
    check_radicand(numerator, denominator)
    if numerator == 0:
        raise ValueError("rootdigits: zero has no mantissa digits")
    base = kind.new_manager().base()
    num, denom, exp = normalize(mpz(numerator), mpz(denominator), base)
    return RootDigitGenerator(num, denom, kind), exp


def fraction_digits(numerator: int, denominator: int) -> Tuple[Iterator[int], int]:
    """
    Decimal mantissa digits of a positive rational.

    Returns (digits, exponent) like nroot. The digits end when the decimal
    expansion terminates and repeat forever otherwise.
    """
    check_radicand(numerator, denominator)
    if numerator == 0:
        raise ValueError("rootdigits: zero has no mantissa digits")
    num, denom, exp = normalize(mpz(numerator), mpz(denominator), mpz(10))

    def digits() -> Iterator[int]:
        n = num
        while n:
            digit, n = divmod(n * 10, denom)
            yield int(digit)

    return digits(), exp


def repeating_digits(fixed, repeating) -> Iterator[int]:
    """Yield the fixed digits, then the repeating digits forever."""
    yield from fixed
    if not repeating:
        return
    while True:
        yield from repeating
