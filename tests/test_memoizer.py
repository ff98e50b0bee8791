"""
Memoizer unit tests
"""

import threading

import gmpy2
import pytest

from rootdigits.errors import DigitSourceError
from rootdigits.memoizer import LimitedMantissa, Memoizer, with_limit
from rootdigits.number import square_root
from rootdigits.sequence import UNKNOWN


def failing_source():
    yield 1
    yield 2
    raise RuntimeError("boom")


class TestMemoizer:
    """Memoizer behaviour on a single thread"""

    def test_at(self):
        memoizer = Memoizer([1, 2, 3])
        assert [memoizer.at(i) for i in range(3)] == [1, 2, 3]
        assert memoizer.at(3) == UNKNOWN
        assert memoizer.at(-1) == UNKNOWN

    def test_at_is_idempotent(self):
        memoizer = Memoizer([4, 5, 6])
        assert memoizer.at(1) == 5
        assert memoizer.at(1) == 5

    def test_first_n(self):
        memoizer = Memoizer([1, 2, 3])
        assert memoizer.first_n(2) == [1, 2]
        assert memoizer.first_n(5) == [1, 2, 3]
        assert memoizer.first_n(0) == []
        assert memoizer.first_n(-1) == []

    def test_iter_from(self):
        memoizer = Memoizer(range(1, 10))
        assert list(memoizer.iter_from(0)) == list(range(1, 10))
        assert list(memoizer.iter_from(7)) == [8, 9]
        assert list(memoizer.iter_from(9)) == []
        assert list(memoizer.iter_from(50)) == []

    def test_iter_from_spans_chunks(self):
        memoizer = Memoizer([i % 10 for i in range(95)], chunk_size=10)
        assert list(memoizer.iter_from(3)) == [i % 10 for i in range(3, 95)]

    def test_iter_from_negative(self):
        with pytest.raises(ValueError):
            Memoizer([1]).iter_from(-1)

    def test_empty_source(self):
        memoizer = Memoizer([])
        assert memoizer.at(0) == UNKNOWN
        assert memoizer.first_n(3) == []

    def test_bad_chunk_size(self):
        with pytest.raises(ValueError):
            Memoizer([1], chunk_size=0)

    def test_grows_by_chunks(self, counting_source):
        """Only the chunks covering requested indexes are computed"""
        memoizer = Memoizer(counting_source, chunk_size=10)
        assert counting_source.pulled == 0
        assert memoizer.at(5) == 6
        assert counting_source.pulled == 10
        assert memoizer.at(9) == 0
        assert counting_source.pulled == 10
        assert memoizer.at(25) == 6
        assert counting_source.pulled == 30

    def test_iterator_pulls_lazily(self, counting_source):
        memoizer = Memoizer(counting_source, chunk_size=10)
        iterator = memoizer.iter_from(0)
        assert [next(iterator) for _ in range(12)] == [1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 1, 2]
        assert counting_source.pulled == 20

    def test_failing_source(self):
        memoizer = Memoizer(failing_source())
        assert memoizer.at(0) == 1
        assert memoizer.first_n(2) == [1, 2]
        with pytest.raises(DigitSourceError):
            memoizer.at(2)
        with pytest.raises(DigitSourceError):
            list(memoizer.iter_from(0))


class TestConcurrentReads:
    """Many readers, one background worker"""

    def test_forward_and_backward_threads(self):
        """Two threads walk sqrt(7) in opposite directions"""
        count = 10000
        root = gmpy2.isqrt(gmpy2.mpz(7) * gmpy2.mpz(10) ** (2 * (count - 1)))
        reference = [int(ch) for ch in root.digits()]
        number = square_root(7)
        forward = []
        backward = [None] * count

        def walk_forward():
            for digit in number.items():
                if digit.position == count:
                    break
                forward.append(digit.value)

        def walk_backward():
            for i in range(count - 1, -1, -1):
                backward[i] = number.at(i)

        threads = [threading.Thread(target=walk_forward), threading.Thread(target=walk_backward)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert forward == reference
        assert backward == reference

    def test_many_readers_agree(self):
        number = square_root(5)
        expected = number.first_n(3000)
        results = [None] * 8

        def read(slot):
            results[slot] = [number.at(i) for i in range(2999, -1, -7)]

        threads = [threading.Thread(target=read, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        sampled = [expected[i] for i in range(2999, -1, -7)]
        assert all(result == sampled for result in results)


class TestLimitedMantissa:
    """Truncated views"""

    def test_limits_access(self):
        view = LimitedMantissa(Memoizer(range(1, 10)), 4)
        assert view.at(3) == 4
        assert view.at(4) == UNKNOWN
        assert view.first_n(10) == [1, 2, 3, 4]
        assert list(view.iter_from(2)) == [3, 4]
        assert list(view.iter_from(7)) == []

    def test_with_limit(self):
        memoizer = Memoizer(range(1, 10))
        assert with_limit(memoizer, 0) is None
        assert with_limit(None, 5) is None
        view = with_limit(memoizer, 5)
        assert view.delegate is memoizer
        assert with_limit(view, 7) is view
        narrower = with_limit(view, 3)
        assert narrower.delegate is memoizer
        assert narrower.limit == 3
