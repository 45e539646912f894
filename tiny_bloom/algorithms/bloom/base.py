"""
Bloom Filter implementation for tiny-bloom.

This module provides the standard Bloom Filter, a space-efficient
probabilistic data structure used for testing set membership with tunable
false positive rates and no false negatives.

References:
    - Bloom, B. H. (1970). Space/time trade-offs in hash coding with allowable errors.
      Communications of the ACM, 13(7), 422-426.
"""

import math
from typing import Any, Dict, Optional, Sequence

from tiny_bloom.config import (
    DEFAULT_ADDRESS_BITS,
    DEFAULT_EXPECTED_ITEMS,
    DEFAULT_FALSE_POSITIVE_RATE,
)
from tiny_bloom.core.base import FilterSummary
from tiny_bloom.core.bitarray import BitArrayBackend
from tiny_bloom.core.hash import BytesLike
from tiny_bloom.core.params import FilterParameters


class BloomFilter(FilterSummary):
    """
    Bloom Filter for efficient set membership testing.

    A Bloom filter is a space-efficient probabilistic data structure used to test
    whether an element is a member of a set. False positives are possible, but
    false negatives are not – in other words, a test returns either "possibly in set"
    or "definitely not in set".

    Items cannot be removed; use CountingBloomFilter for that. Adding far more
    items than expected_items drives the false positive rate arbitrarily high.

    Example:
        # Create a filter with 1% false positive rate for 1000 items
        bloom = BloomFilter(expected_items=1000, false_positive_rate=0.01)

        # Add some items
        bloom.add(b"apple")
        bloom.add(b"banana")

        # Check for membership
        contains_apple = bloom.test(b"apple")  # Returns True
        contains_orange = bloom.test(b"orange")  # Returns False

    Not thread-safe; see tiny_bloom.core.base.
    """

    def __init__(
        self,
        expected_items: int = DEFAULT_EXPECTED_ITEMS,
        false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
        address_bits: int = DEFAULT_ADDRESS_BITS,
        params: Optional[FilterParameters] = None,
    ):
        """
        Initialize a new Bloom filter.

        Args:
            expected_items: Expected number of unique items to be added to the filter.
            false_positive_rate: Target false positive rate (between 0 and 1).
            address_bits: Index width of the bit array backend (32 or 64).
            params: Explicit filter parameters, overriding the three above.

        Raises:
            InvalidParameter: If expected_items is less than 1 or
                              false_positive_rate is not between 0 and 1.
            CapacityOverflow: If the bit array would exceed the addressable size.
        """
        super().__init__(
            expected_items=expected_items,
            false_positive_rate=false_positive_rate,
            address_bits=address_bits,
            params=params,
        )
        self._bits = self._new_bit_array()

    def add(self, data: BytesLike) -> None:
        """
        Add data to the Bloom filter.

        Sets the bit at every probe position. Adding the same data again
        changes nothing.

        Args:
            data: The bytes to add (str is encoded as UTF-8).
        """
        positions = self._indices(data)
        self._record_add()

        for position in positions:
            self._bits.set(position)

    def test(self, data: BytesLike) -> bool:
        """
        Test if data might be in the set.

        Args:
            data: The bytes to test.

        Returns:
            True if the data might be in the set, False if definitely not in the set.
        """
        for position in self._indices(data):
            if not self._bits.test(position):
                return False

        # All bits are set, data might be in the set
        return True

    def __contains__(self, data: BytesLike) -> bool:
        return self.test(data)

    def reset(self) -> None:
        """
        Reset the filter to its initial empty state.

        This method clears all bits but keeps the same parameters (size, hash count).
        """
        self._bits.reset()
        self._reset_counts()

    def _bit_arrays(self) -> Sequence[BitArrayBackend]:
        return [self._bits]

    def estimate_cardinality(self) -> int:
        """
        Estimate the number of unique items in the filter.

        This is an approximation based on the fill ratio of the bit array.
        The estimate becomes less accurate as the filter becomes more saturated.

        Returns:
            Estimated number of unique items.
        """
        set_bits = self._bits.count()
        n = self._params.n

        if set_bits == 0:
            return 0
        if set_bits >= n:
            # Saturated; the formula diverges
            return self._items_added

        # n_est = -m * ln(1 - X/m) / k
        estimate = -n * math.log(1.0 - set_bits / n) / self._params.k

        # Cannot have more unique items than add() calls
        return min(max(0, int(round(estimate))), self._items_added)

    def get_stats(self) -> Dict[str, Any]:
        """Add the cardinality estimate to the base statistics."""
        stats = super().get_stats()
        stats["estimated_unique_items"] = self.estimate_cardinality()
        if self._items_added > 0:
            stats["bits_per_item"] = self._params.n / self._items_added
        return stats
