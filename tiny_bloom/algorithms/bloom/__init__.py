"""
Bloom Filter implementations for tiny-bloom.

This module provides Bloom Filter implementations for efficient set membership testing
with bounded memory usage.

This includes:
- BloomFilter: Standard Bloom filter for membership testing
- CountingBloomFilter: Bloom filter variant that supports item deletion
- LayeredBloomFilter: Bloom filter variant that tracks how often an item was added
"""

from tiny_bloom.algorithms.bloom.base import BloomFilter
from tiny_bloom.algorithms.bloom.counting import CountingBloomFilter
from tiny_bloom.algorithms.bloom.layered import LayeredBloomFilter

__all__ = [
    "BloomFilter",
    "CountingBloomFilter",
    "LayeredBloomFilter",
]
