"""
Unit tests for the caller-side read-write lock.
"""

import threading
import time
import unittest

from tiny_bloom import new_counting, new_standard
from tiny_bloom.concurrency import ReadWriteLock


class TestReadWriteLock(unittest.TestCase):
    """Test cases for ReadWriteLock."""

    def test_readers_share(self):
        """Test that several readers hold the lock at once."""
        lock = ReadWriteLock()
        entered = threading.Event()
        release = threading.Event()

        def reader():
            with lock.read():
                entered.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=reader)
        thread.start()
        self.assertTrue(entered.wait(timeout=5))

        # A second reader does not block behind the first
        with lock.read():
            self.assertEqual(lock.readers, 2)

        release.set()
        thread.join(timeout=5)
        self.assertEqual(lock.readers, 0)

    def test_writer_waits_for_readers(self):
        """Test that a writer blocks until the active reader leaves."""
        lock = ReadWriteLock()
        wrote = threading.Event()

        def writer():
            with lock.write():
                wrote.set()

        with lock.read():
            thread = threading.Thread(target=writer)
            thread.start()
            time.sleep(0.05)
            self.assertFalse(wrote.is_set(), "Writer entered while a reader was active")

        thread.join(timeout=5)
        self.assertTrue(wrote.is_set())
        self.assertFalse(lock.writer_active)

    def test_reader_waits_for_writer(self):
        """Test that a reader blocks while the writer holds the lock."""
        lock = ReadWriteLock()
        read = threading.Event()

        def reader():
            with lock.read():
                read.set()

        with lock.write():
            self.assertTrue(lock.writer_active)
            thread = threading.Thread(target=reader)
            thread.start()
            time.sleep(0.05)
            self.assertFalse(read.is_set(), "Reader entered while the writer was active")

        thread.join(timeout=5)
        self.assertTrue(read.is_set())

    def test_guarding_a_shared_filter(self):
        """Test concurrent adds and tests on one filter under the lock."""
        bloom = new_standard(10000, 0.01)
        lock = ReadWriteLock()
        n_threads = 4
        per_thread = 500
        missing = []

        def worker(worker_id):
            for i in range(per_thread):
                item = f"{worker_id}-{i}".encode()
                with lock.write():
                    bloom.add(item)
                with lock.read():
                    if not bloom.test(item):
                        missing.append(item)

        threads = [threading.Thread(target=worker, args=(w,)) for w in range(n_threads)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(missing, [])
        self.assertEqual(bloom.items_added, n_threads * per_thread)

    def test_guarding_a_counting_filter(self):
        """Test interleaved add/remove from several writers."""
        cbf = new_counting(1000, 0.01)
        lock = ReadWriteLock()

        def worker(worker_id):
            item = f"worker-{worker_id}".encode()
            for _ in range(50):
                with lock.write():
                    cbf.add(item)
                with lock.write():
                    cbf.remove(item)

        threads = [threading.Thread(target=worker, args=(w,)) for w in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        # Every add was matched by a remove
        self.assertTrue(cbf.is_empty())


if __name__ == "__main__":
    unittest.main()
