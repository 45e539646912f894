"""
Counting Bloom Filter implementation for tiny-bloom.

This module provides a Counting Bloom Filter that supports deletion. Instead
of a small integer counter per position, counts are stored vertically: the
filter keeps a stack of equally sized bit arrays ("layers"), and the count at
a position is the number of layers that have that bit set.

References:
    - Fan, L., Cao, P., Almeida, J., & Broder, A. Z. (2000).
      Summary cache: a scalable wide-area web cache sharing protocol.
      IEEE/ACM Transactions on Networking, 8(3), 281-293.
"""

from tiny_bloom.core.base import LayeredSummary
from tiny_bloom.core.hash import BytesLike


class CountingBloomFilter(LayeredSummary):
    """
    Counting Bloom Filter for set membership testing with deletion support.

    Each add() raises the layer count of every probe position by one: the bit
    is set in the lowest layer where it is still clear, and a new layer is
    appended when every existing layer already has it. Each remove() lowers
    the count by one, clearing the bit in the highest layer where it is set.
    test() only looks at the bottom layer, which holds a bit for every
    position with a count of at least one.

    Counts are shared by every item that maps to a position, so the count
    seen through any one item is an upper bound on how many times that item
    is present (see count()). This is inherent to the layered layout and is
    kept as is.

    Removing data that was never added, or removing it more often than it was
    added, is not detected. It silently lowers counts that belong to other
    items and can make later tests of those items return False.

    Example:
        cbf = CountingBloomFilter(expected_items=1000, false_positive_rate=0.01)
        cbf.add(b"apple")
        cbf.add(b"apple")
        cbf.remove(b"apple")
        cbf.test(b"apple")  # True, one occurrence left
        cbf.remove(b"apple")
        cbf.test(b"apple")  # False

    Not thread-safe; see tiny_bloom.core.base.
    """

    def add(self, data: BytesLike) -> None:
        """
        Add data to the Counting Bloom filter.

        Args:
            data: The bytes to add (str is encoded as UTF-8).
        """
        positions = self._indices(data)
        self._record_add()

        for position in positions:
            for layer in self._layers:
                if not layer.test(position):
                    layer.set(position)
                    break
            else:
                self._append_layer().set(position)

    def remove(self, data: BytesLike) -> None:
        """
        Remove one occurrence of data from the filter.

        The exact data must have been added before, or future results for
        other items become unreliable.

        Args:
            data: The bytes to remove.
        """
        for position in self._indices(data):
            for layer in reversed(self._layers):
                if layer.test(position):
                    layer.clear(position)
                    break

    def test(self, data: BytesLike) -> bool:
        """
        Test if data might be in the set.

        Args:
            data: The bytes to test.

        Returns:
            True if the data might be in the set, False if definitely not in
            the set (provided remove() was only called for added data).
        """
        bottom = self._layers[0]
        for position in self._indices(data):
            if not bottom.test(position):
                return False
        return True

    def __contains__(self, data: BytesLike) -> bool:
        return self.test(data)

    def count(self, data: BytesLike) -> int:
        """
        Get the smallest layer count across the probe positions of data.

        This is an upper bound on how many times data is currently present,
        since colliding items share positions. Zero means definitely absent.
        """
        return min(
            sum(1 for layer in self._layers if layer.test(position))
            for position in self._indices(data)
        )
