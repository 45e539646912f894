"""
Hashing functions for tiny-bloom.

This module provides the hash used to derive probe positions. It requires no
external dependencies and is chosen for speed and distribution quality, not
cryptographic security.
"""

from typing import Union

# FNV-1a 64-bit constants
FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
MASK_64 = 0xFFFFFFFFFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview, str]


def to_bytes(data: BytesLike) -> bytes:
    """
    Normalize the accepted input types to bytes.

    Strings are encoded as UTF-8. Anything else that is not bytes-like is
    rejected, so two callers can never disagree on how an object was turned
    into bytes.

    Raises:
        TypeError: If data is not bytes, bytearray, memoryview or str.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(
        f"Filter data must be bytes-like or str, got {type(data).__name__}"
    )


def fnv1a_64(data: BytesLike) -> int:
    """
    Pure Python implementation of FNV-1a hash (64-bit variant).

    Each call starts from the offset basis, so the result depends only on the
    input bytes and their order.

    Args:
        data: The bytes to hash (str is encoded as UTF-8)

    Returns:
        64-bit hash value
    """
    h = FNV64_OFFSET_BASIS

    for byte in to_bytes(data):
        h ^= byte
        h = (h * FNV64_PRIME) & MASK_64

    return h


def fnv1a_64_digest(data: BytesLike) -> bytes:
    """Return the FNV-1a 64-bit hash of data as 8 big-endian bytes."""
    return fnv1a_64(data).to_bytes(8, "big")
