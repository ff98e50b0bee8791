"""
Exceptions raised by rootdigits.

Precondition violations are plain ValueError / TypeError raised at call
time. The classes here cover the two failures callers are expected to
handle: malformed serialized digits and a failing custom digit source.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Raised when serialized Digits cannot be decoded."""


class DigitSourceError(RuntimeError):
    """Raised to readers of a memoized sequence whose digit source failed."""
