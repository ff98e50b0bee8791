"""
Thread-safe memoization of a single-pass digit iterator.

A Memoizer owns its iterator outright: one background thread advances it
in chunks and appends to an append-only buffer. Readers only ever touch
the committed prefix of that buffer, so any number of threads can read
while digits are still being computed.
"""

from __future__ import annotations

import logging
import sys
import threading
from itertools import islice
from typing import Iterable, Iterator, List, Optional

from rootdigits.errors import DigitSourceError
from rootdigits.sequence import UNKNOWN

logger = logging.getLogger("rootdigits")

DEFAULT_CHUNK_SIZE = 100


class Memoizer:
    """
    Append-only digit buffer filled on demand by a background thread.

    Reads past the committed length raise a "requested length" watermark to
    the next chunk boundary and block until the worker catches up or the
    source runs dry.
    """

    def __init__(self, digits: Iterable[int], chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("rootdigits: chunk_size must be positive")
        self._source = iter(digits)
        self._chunk_size = chunk_size
        self._max_chunks = sys.maxsize // chunk_size
        self._lock = threading.Lock()
        self._must_grow = threading.Condition(self._lock)
        self._update_available = threading.Condition(self._lock)
        self._data = bytearray()
        self._max_length = 0
        self._done = False
        self._error: Optional[BaseException] = None
        self._worker: Optional[threading.Thread] = None

    def at(self, index: int) -> int:
        """Digit at index, or UNKNOWN if index is negative or past the end."""
        if index < 0:
            return UNKNOWN
        with self._lock:
            self._wait(index)
            if len(self._data) <= index:
                return UNKNOWN
            return self._data[index]

    def first_n(self, n: int) -> List[int]:
        """Up to the first n digits. Fewer only if the source is finite."""
        if n <= 0:
            return []
        with self._lock:
            self._wait(n - 1)
            return list(self._data[:n])

    def iter_from(self, index: int) -> Iterator[int]:
        """
        Iterate over the digits starting at index.

        Raises ValueError if index is negative. The returned iterator holds
        no lock between digits, so it may be abandoned at any time.
        """
        if index < 0:
            raise ValueError("rootdigits: index must be non-negative")
        return self._iterate(index)

    def _iterate(self, index: int) -> Iterator[int]:
        while True:
            with self._lock:
                self._wait(index)
                end = min(len(self._data), index + self._chunk_size)
                chunk = bytes(self._data[index:end])
            if not chunk:
                return
            yield from chunk
            index += len(chunk)

    # Everything below runs with self._lock held unless noted.

    def _wait(self, index: int) -> None:
        if self._worker is None:
            self._start_worker()
        if not self._done and self._max_length <= index:
            chunk_count = min(index // self._chunk_size + 1, self._max_chunks)
            self._max_length = self._chunk_size * chunk_count
            self._must_grow.notify()
        while not self._done and len(self._data) <= index:
            self._update_available.wait()
        if self._error is not None and len(self._data) <= index:
            raise DigitSourceError(
                f"rootdigits: digit source failed: {self._error}"
            ) from self._error

    def _start_worker(self) -> None:
        self._worker = threading.Thread(
            target=self._run, name="rootdigits-memoizer", daemon=True
        )
        self._worker.start()

    # Worker thread only; takes the lock itself.

    def _wait_to_grow(self) -> None:
        with self._lock:
            while len(self._data) >= self._max_length:
                self._must_grow.wait()

    def _publish(self, chunk: bytearray, done: bool, error: Optional[BaseException] = None) -> None:
        with self._lock:
            self._data.extend(chunk)
            self._done = done
            self._error = error
            self._update_available.notify_all()

    def _run(self) -> None:
        for _ in range(self._max_chunks):
            self._wait_to_grow()
            chunk = bytearray()
            try:
                for digit in islice(self._source, self._chunk_size):
                    chunk.append(digit)
            except Exception as e:
                logger.error(f"Digit source failed after {len(self._data) + len(chunk)} digits: {e}")
                self._publish(chunk, True, e)
                return
            if len(chunk) < self._chunk_size:
                self._publish(chunk, True)
                logger.debug(f"Digit source exhausted at {len(self._data)} digits")
                return
            self._publish(chunk, False)
            logger.debug(f"Memoized {len(self._data)} digits")
        self._publish(bytearray(), True)


class LimitedMantissa:
    """
    A view of a Memoizer that stops after limit digits.

    Views share the memoizer they wrap, so truncating a number never
    recomputes digits.
    """

    def __init__(self, delegate: Memoizer, limit: int):
        self.delegate = delegate
        self.limit = limit

    def at(self, index: int) -> int:
        if index >= self.limit:
            return UNKNOWN
        return self.delegate.at(index)

    def first_n(self, n: int) -> List[int]:
        return self.delegate.first_n(min(n, self.limit))

    def iter_from(self, index: int) -> Iterator[int]:
        if index < 0:
            raise ValueError("rootdigits: index must be non-negative")
        index = min(index, self.limit)
        return islice(self.delegate.iter_from(index), self.limit - index)


def with_limit(spec, limit: int):
    """
    Truncate a Memoizer or LimitedMantissa to at most limit digits.

    Returns None, meaning no digits, when limit <= 0 or spec is None.
    """
    if limit <= 0 or spec is None:
        return None
    if isinstance(spec, LimitedMantissa):
        if limit >= spec.limit:
            return spec
        return LimitedMantissa(spec.delegate, limit)
    return LimitedMantissa(spec, limit)
