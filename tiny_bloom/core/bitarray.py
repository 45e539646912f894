"""
Fixed-size bit array used as the storage backend of every filter.

The filters only rely on the small contract described by BitArrayBackend, so
any object with the same methods can stand in for BitArray.
"""

import array
from typing import Dict, Protocol

from tiny_bloom.config import SUPPORTED_ADDRESS_BITS
from tiny_bloom.core.errors import CapacityOverflow, InvalidParameter

# Largest bit array size addressable for each supported index width
ADDRESS_LIMITS: Dict[int, int] = {
    bits: (1 << bits) - 1 for bits in SUPPORTED_ADDRESS_BITS
}


def max_addressable_size(address_bits: int) -> int:
    """
    Get the largest bit array size an index of the given width can address.

    Raises:
        InvalidParameter: If address_bits is not a supported width.
    """
    try:
        return ADDRESS_LIMITS[address_bits]
    except KeyError:
        raise InvalidParameter(
            f"Address width must be one of {sorted(ADDRESS_LIMITS)}, got {address_bits}"
        ) from None


class BitArrayBackend(Protocol):
    """Protocol defining the operations a filter needs from its bit storage."""

    def set(self, position: int) -> None:
        ...

    def test(self, position: int) -> bool:
        ...

    def clear(self, position: int) -> None:
        ...

    def reset(self) -> None:
        ...

    def count(self) -> int:
        ...

    def __len__(self) -> int:
        ...


class BitArray:
    """
    Pre-allocated array of bits, all initially zero.

    Bits are packed eight to a byte in an array.array of unsigned chars. The
    size is fixed at construction; positions are not bounds-checked because
    the index generator only ever produces positions below the size.
    """

    __slots__ = ("_size", "_bytes")

    def __init__(self, size: int):
        """
        Allocate a zeroed bit array.

        Args:
            size: Number of bits.

        Raises:
            InvalidParameter: If size is not positive.
            CapacityOverflow: If size exceeds the 64-bit address range.
        """
        if size < 1:
            raise InvalidParameter(f"Bit array size must be positive, got {size}")
        limit = max(ADDRESS_LIMITS.values())
        if size > limit:
            raise CapacityOverflow(size, limit)

        self._size = size
        # 'B' typecode gives unsigned char (8 bits), size rounded up to bytes
        self._bytes = array.array("B", bytes((size + 7) // 8))

    def set(self, position: int) -> None:
        """Set the bit at position to 1."""
        self._bytes[position >> 3] |= 1 << (position & 7)

    def test(self, position: int) -> bool:
        """Return True if the bit at position is 1."""
        return bool(self._bytes[position >> 3] & (1 << (position & 7)))

    def clear(self, position: int) -> None:
        """Set the bit at position to 0."""
        self._bytes[position >> 3] &= ~(1 << (position & 7)) & 0xFF

    def reset(self) -> None:
        """Zero every bit, keeping the size."""
        self._bytes = array.array("B", bytes(len(self._bytes)))

    def count(self) -> int:
        """Count the bits that are set."""
        return sum(bin(byte).count("1") for byte in self._bytes if byte)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"BitArray(size={self._size}, set_bits={self.count()})"
