"""
tiny-bloom - Layered Bloom Filters over byte strings

tiny-bloom provides approximate membership testing with a standard Bloom
filter, a counting filter that supports removal, and a layered filter that
tracks how many times an item was added. All three share one 64-bit FNV-1a
double hashing scheme, so identical parameters give identical bit positions.

Filters are not thread-safe; see tiny_bloom.concurrency for a lock callers
can hold around each call.
"""

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from tiny_bloom.algorithms.bloom import (
    BloomFilter,
    CountingBloomFilter,
    LayeredBloomFilter,
)
from tiny_bloom.config import DEFAULT_ADDRESS_BITS
from tiny_bloom.core.errors import BloomError, CapacityOverflow, InvalidParameter
from tiny_bloom.core.params import FilterParameters, estimate, indices


def new_standard(
    expected_items: int,
    false_positive_rate: float,
    address_bits: int = DEFAULT_ADDRESS_BITS,
) -> BloomFilter:
    """
    Create a standard Bloom filter sized for expected_items at false_positive_rate.

    Raises:
        InvalidParameter: If the arguments are out of range.
        CapacityOverflow: If the bit array would exceed the addressable size.
    """
    return BloomFilter(
        expected_items=expected_items,
        false_positive_rate=false_positive_rate,
        address_bits=address_bits,
    )


def new_counting(
    expected_items: int,
    false_positive_rate: float,
    address_bits: int = DEFAULT_ADDRESS_BITS,
) -> CountingBloomFilter:
    """Create a counting Bloom filter, which supports remove()."""
    return CountingBloomFilter(
        expected_items=expected_items,
        false_positive_rate=false_positive_rate,
        address_bits=address_bits,
    )


def new_layered(
    expected_items: int,
    false_positive_rate: float,
    address_bits: int = DEFAULT_ADDRESS_BITS,
) -> LayeredBloomFilter:
    """
    Create a layered Bloom filter.

    Layered filters keep track of how many times data was added, e.g. to check
    whether something was seen ten times or fewer.
    """
    return LayeredBloomFilter(
        expected_items=expected_items,
        false_positive_rate=false_positive_rate,
        address_bits=address_bits,
    )


__all__ = [
    # Factories
    "new_standard",
    "new_counting",
    "new_layered",
    # Filters
    "BloomFilter",
    "CountingBloomFilter",
    "LayeredBloomFilter",
    # Parameters
    "FilterParameters",
    "estimate",
    "indices",
    # Errors
    "BloomError",
    "InvalidParameter",
    "CapacityOverflow",
]
