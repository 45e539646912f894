"""
Filter sizing and probe index generation.

All three filter kinds share the same parameters and the same way of turning
data into bit positions, so both live here as plain values and functions.

Positions are derived with the double hashing technique: one 64-bit FNV-1a
digest is split into two 32-bit halves a and b, and probe i is
(a + b*i) mod n. This needs a single hash evaluation per item instead of k.

References:
    - Kirsch, A., & Mitzenmacher, M. (2006). Less hashing, same performance:
      Building a better Bloom filter. ESA 2006, LNCS 4168, 456-467.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from tiny_bloom.config import DEFAULT_ADDRESS_BITS
from tiny_bloom.core.bitarray import max_addressable_size
from tiny_bloom.core.errors import CapacityOverflow, InvalidParameter
from tiny_bloom.core.hash import BytesLike, fnv1a_64, to_bytes

LN2 = math.log(2)


def estimate(
    expected_items: int,
    false_positive_rate: float,
    address_bits: int = DEFAULT_ADDRESS_BITS,
) -> Tuple[int, int]:
    """
    Calculate the optimal bit array size and probe count.

    Uses the standard formulas that minimize the false positive rate for a
    given capacity:

        n = ceil(-expected_items * ln(p) / (ln 2)^2)
        k = ceil(ln 2 * n / expected_items)

    Args:
        expected_items: Expected number of unique items to be added.
        false_positive_rate: Target false positive rate, strictly between 0 and 1.
        address_bits: Index width of the bit array backend (32 or 64).

    Returns:
        A tuple (n, k) of bit array size and probe count.

    Raises:
        InvalidParameter: If expected_items is not a positive integer, or
                          false_positive_rate is not a number in (0, 1).
        CapacityOverflow: If n exceeds what the backend can address.
    """
    if (
        isinstance(expected_items, bool)
        or not isinstance(expected_items, int)
        or expected_items < 1
    ):
        raise InvalidParameter(
            f"Expected number of items must be a positive integer, got {expected_items!r}"
        )
    if (
        isinstance(false_positive_rate, bool)
        or not isinstance(false_positive_rate, (int, float))
        or not (0 < false_positive_rate < 1)
    ):
        raise InvalidParameter(
            f"False positive rate must be between 0 and 1, got {false_positive_rate!r}"
        )

    limit = max_addressable_size(address_bits)

    try:
        n = math.ceil(-expected_items * math.log(false_positive_rate) / (LN2**2))
    except OverflowError:
        # Too large for a float; any such size is far beyond every limit
        n = expected_items * math.ceil(-math.log(false_positive_rate) / (LN2**2))
    if n > limit:
        raise CapacityOverflow(n, limit)

    k = math.ceil(LN2 * n / expected_items)
    return n, max(1, k)


def _default_hasher() -> Callable[[bytes], int]:
    return fnv1a_64


@dataclass(frozen=True)
class FilterParameters:
    """
    Immutable sizing and hashing configuration shared by all filter kinds.

    Attributes:
        n: Number of bits in each bit array.
        k: Number of probes (bit positions) per item.
        address_bits: Unsigned width of the index arithmetic (32 or 64).
        hasher: 64-bit hash function of the item bytes. Defaults to FNV-1a.
    """

    n: int
    k: int
    address_bits: int = DEFAULT_ADDRESS_BITS
    hasher: Callable[[bytes], int] = field(
        default_factory=_default_hasher, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 1:
            raise InvalidParameter(f"Bit array size must be a positive integer, got {self.n!r}")
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 1:
            raise InvalidParameter(f"Probe count must be at least 1, got {self.k!r}")

        limit = max_addressable_size(self.address_bits)
        if self.n > limit:
            raise CapacityOverflow(self.n, limit)

    @classmethod
    def direct(
        cls, n: int, k: int, address_bits: int = DEFAULT_ADDRESS_BITS
    ) -> "FilterParameters":
        """Build parameters from an explicit bit size and probe count."""
        return cls(n=n, k=k, address_bits=address_bits)

    @classmethod
    def estimated(
        cls,
        expected_items: int,
        false_positive_rate: float,
        address_bits: int = DEFAULT_ADDRESS_BITS,
    ) -> "FilterParameters":
        """Build parameters sized for an item count and false positive rate."""
        n, k = estimate(expected_items, false_positive_rate, address_bits)
        return cls(n=n, k=k, address_bits=address_bits)

    @property
    def address_mask(self) -> int:
        return (1 << self.address_bits) - 1


def indices(data: BytesLike, params: FilterParameters) -> List[int]:
    """
    Generate the k bit positions for data.

    The 64-bit digest is split into a (most significant 32 bits) and b (next
    32 bits). Position i is (a + b*i) computed in address_bits-wide unsigned
    arithmetic, then reduced mod n. The same data and parameters always give
    the same positions in the same order.

    Args:
        data: The item bytes (str is encoded as UTF-8).
        params: Filter parameters.

    Returns:
        List of k positions, each in [0, n).
    """
    digest = params.hasher(to_bytes(data))
    a = (digest >> 32) & 0xFFFFFFFF
    b = digest & 0xFFFFFFFF

    mask = params.address_mask
    n = params.n
    return [((a + b * i) & mask) % n for i in range(params.k)]
