"""
Core functionality for tiny-bloom.
"""

from tiny_bloom.core.base import FilterSummary, LayeredSummary
from tiny_bloom.core.bitarray import BitArray, BitArrayBackend, max_addressable_size
from tiny_bloom.core.errors import BloomError, CapacityOverflow, InvalidParameter
from tiny_bloom.core.hash import fnv1a_64, fnv1a_64_digest
from tiny_bloom.core.params import FilterParameters, estimate, indices

__all__ = [
    # Base classes
    "FilterSummary",
    "LayeredSummary",
    # Parameters and probe positions
    "FilterParameters",
    "estimate",
    "indices",
    # Storage
    "BitArray",
    "BitArrayBackend",
    "max_addressable_size",
    # Errors
    "BloomError",
    "InvalidParameter",
    "CapacityOverflow",
    # Utility functions
    "fnv1a_64",
    "fnv1a_64_digest",
]
