"""
Algorithm implementations for tiny-bloom.
"""

from tiny_bloom.algorithms.bloom import (
    BloomFilter,
    CountingBloomFilter,
    LayeredBloomFilter,
)

__all__ = [
    "BloomFilter",
    "CountingBloomFilter",
    "LayeredBloomFilter",
]
