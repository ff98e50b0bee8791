"""
Shared fixtures
"""

import pytest

from rootdigits.number import from_digits


class CountingSource:
    """Digit source 1, 2, ..., 9, 0, 1, ... that records how many digits were pulled"""

    def __init__(self):
        self.pulled = 0

    def __iter__(self):
        while True:
            self.pulled += 1
            yield self.pulled % 10


@pytest.fixture
def fake_number():
    """0.12345678901234567890..."""
    return from_digits([], [1, 2, 3, 4, 5, 6, 7, 8, 9, 0])


@pytest.fixture
def counting_source():
    return CountingSource()
