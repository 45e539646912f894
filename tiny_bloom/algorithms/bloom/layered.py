"""
Layered Bloom Filter implementation for tiny-bloom.

A layered filter answers "how many times has this data been added?" without
per-item counters. It keeps a stack of equally sized bit arrays and pushes an
item one layer deeper on every add: layer d holds the full probe signature of
every item that was added at least d times.
"""

from typing import Tuple

from tiny_bloom.core.base import LayeredSummary
from tiny_bloom.core.hash import BytesLike


class LayeredBloomFilter(LayeredSummary):
    """
    Layered Bloom Filter that tracks how often each item was added.

    Depths are 1-based: the first add() of some data returns 1, the second 2,
    and so on. test() reports the deepest layer that contains all of the
    data's probe bits. Each layer has the same false positive risk as a
    standard Bloom filter, so an unrelated item can appear at some depth when
    its probe positions happen to be covered there.

    The number of layers is unbounded; adding the same data m times creates
    m layers.

    Example:
        lbf = LayeredBloomFilter(expected_items=1000, false_positive_rate=0.01)
        lbf.add(b"apple")  # 1
        lbf.add(b"apple")  # 2
        lbf.test(b"apple")  # (2, True)
        lbf.test(b"pear")  # (0, False)

    Not thread-safe; see tiny_bloom.core.base.
    """

    def add(self, data: BytesLike) -> int:
        """
        Add data to the filter one layer deeper than before.

        Layers are visited bottom-up. In each layer, the first probe bit that
        is still clear marks the layer where the data lands; from there on
        every remaining probe bit of that layer is set as well. Layers where
        all probe bits are already set are skipped. When every layer is
        skipped, a new layer is appended with all probe bits set.

        Args:
            data: The bytes to add (str is encoded as UTF-8).

        Returns:
            The 1-based number of the layer the data was added to.
        """
        positions = self._indices(data)
        self._record_add()

        for depth, layer in enumerate(self._layers, start=1):
            advancing = False
            for position in positions:
                if advancing:
                    layer.set(position)
                elif not layer.test(position):
                    layer.set(position)
                    advancing = True
            if advancing:
                return depth

        layer = self._append_layer()
        for position in positions:
            layer.set(position)
        return len(self._layers)

    def test(self, data: BytesLike) -> Tuple[int, bool]:
        """
        Find the deepest layer holding data.

        Args:
            data: The bytes to test.

        Returns:
            A tuple (depth, found). depth is the 1-based number of the deepest
            layer where every probe bit is set, and found is True. If no layer
            has all of them, returns (0, False).
        """
        positions = self._indices(data)

        for depth in range(len(self._layers), 0, -1):
            layer = self._layers[depth - 1]
            if all(layer.test(position) for position in positions):
                return depth, True

        return 0, False

    def __contains__(self, data: BytesLike) -> bool:
        return self.test(data)[1]
