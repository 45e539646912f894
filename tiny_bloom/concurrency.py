"""
Read-write lock for sharing a filter between threads.

Filters do no locking of their own. Callers that use one filter from several
threads wrap each call in this lock: test() under read(), and add(),
remove() and reset() under write().

Usage:
    lock = ReadWriteLock()
    bloom = BloomFilter(expected_items=1000)

    with lock.read():
        seen = bloom.test(b"key")   # Multiple threads here concurrently

    with lock.write():
        bloom.add(b"key")           # Exclusive access
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """
    Read-write lock with writer preference.

    Once a writer is waiting, new readers block until the writer finishes,
    so a steady stream of tests cannot starve adds.
    """

    def __init__(self) -> None:
        self._readers: int = 0
        self._writers_waiting: int = 0
        self._writer_active: bool = False
        self._cond = threading.Condition(threading.Lock())

    @contextmanager
    def read(self) -> Iterator[None]:
        """Acquire the shared side. Blocks while a writer is active or waiting."""
        with self._cond:
            while self._writer_active or self._writers_waiting > 0:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Acquire the exclusive side. Blocks while readers or a writer are active."""
        with self._cond:
            self._writers_waiting += 1
            while self._writer_active or self._readers > 0:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._cond:
                self._writer_active = False
                self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the read side."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer_active
