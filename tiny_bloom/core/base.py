"""
Base classes for tiny-bloom filters.

This module defines the abstract base classes that every filter builds on.
Sizing and hashing live in an immutable FilterParameters value held by each
filter; the base classes only add the shared bookkeeping (item counts,
statistics and log records) and, for the multi-layer filters, layer storage.

None of these classes lock. A filter must not be mutated from one thread
while another thread reads or mutates it. Callers that share a filter across
threads hold a single-writer/multiple-reader lock around each call, for
example tiny_bloom.concurrency.ReadWriteLock: the read side around test(), the
write side around add(), remove() and reset().
"""

import abc
import logging
import math
import sys
from typing import Any, Dict, List, Optional, Sequence, Type

from tiny_bloom.config import (
    DEFAULT_ADDRESS_BITS,
    DEFAULT_EXPECTED_ITEMS,
    DEFAULT_FALSE_POSITIVE_RATE,
    OVERLOAD_WARNING_RATIO,
)
from tiny_bloom.core.bitarray import BitArray, BitArrayBackend
from tiny_bloom.core.hash import BytesLike
from tiny_bloom.core.params import FilterParameters, indices

log = logging.getLogger(__name__)


class FilterSummary(abc.ABC):
    """
    Abstract base class for all filters.

    Subclasses own their bit arrays and implement add/test/reset on top of
    the probe positions returned by _indices().
    """

    # Backend used to allocate bit arrays; any BitArrayBackend works
    bit_array_class: Type[BitArrayBackend] = BitArray

    def __init__(
        self,
        expected_items: int = DEFAULT_EXPECTED_ITEMS,
        false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
        address_bits: int = DEFAULT_ADDRESS_BITS,
        params: Optional[FilterParameters] = None,
    ):
        """
        Initialize the shared filter state.

        Args:
            expected_items: Expected number of unique items to be added.
            false_positive_rate: Target false positive rate (between 0 and 1).
            address_bits: Index width of the bit array backend (32 or 64).
            params: Explicit parameters. When given, the three sizing
                    arguments above are ignored.

        Raises:
            InvalidParameter: If the sizing arguments are invalid.
            CapacityOverflow: If the required bit array cannot be addressed.
        """
        if params is None:
            params = FilterParameters.estimated(
                expected_items, false_positive_rate, address_bits
            )
            self._expected_items: Optional[int] = expected_items
            self._false_positive_rate: Optional[float] = false_positive_rate
        else:
            self._expected_items = None
            self._false_positive_rate = None

        self._params = params
        self._items_added = 0
        self._overload_reported = False

        log.debug(
            "Created %s with n=%d, k=%d, address_bits=%d",
            self.__class__.__name__,
            params.n,
            params.k,
            params.address_bits,
        )

    @classmethod
    def from_parameters(cls, params: FilterParameters) -> "FilterSummary":
        """Create a filter from explicit parameters, bypassing the estimator."""
        return cls(params=params)

    @property
    def params(self) -> FilterParameters:
        return self._params

    @property
    def bit_size(self) -> int:
        return self._params.n

    @property
    def hash_count(self) -> int:
        return self._params.k

    @property
    def items_added(self) -> int:
        """Number of add() calls since construction or the last reset()."""
        return self._items_added

    def _indices(self, data: BytesLike) -> List[int]:
        return indices(data, self._params)

    def _new_bit_array(self) -> BitArrayBackend:
        return self.bit_array_class(self._params.n)

    def _record_add(self) -> None:
        """
        Count an add() call and log once when the filter is overloaded.

        Called after the data has been hashed, so rejected input is not counted.
        """
        self._items_added += 1

        if (
            not self._overload_reported
            and self._expected_items is not None
            and self._items_added > self._expected_items * OVERLOAD_WARNING_RATIO
        ):
            self._overload_reported = True
            log.warning(
                "%s has received %d items but was sized for %d; "
                "false positive rate will exceed %s",
                self.__class__.__name__,
                self._items_added,
                self._expected_items,
                self._false_positive_rate,
            )

    def _reset_counts(self) -> None:
        self._items_added = 0
        self._overload_reported = False

    @abc.abstractmethod
    def add(self, data: BytesLike) -> Any:
        """Add data to the filter."""

    @abc.abstractmethod
    def test(self, data: BytesLike) -> Any:
        """Check data against the filter."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Return the filter to its empty state, keeping its parameters."""

    @abc.abstractmethod
    def _bit_arrays(self) -> Sequence[BitArrayBackend]:
        """All bit arrays owned by this filter, bottom layer first."""

    def is_empty(self) -> bool:
        """Check whether no bit is set in any bit array."""
        return all(bits.count() == 0 for bits in self._bit_arrays())

    def estimate_size(self) -> int:
        """
        Estimate the memory used by this filter in bytes.

        Counts the object itself plus the packed bit storage of every array.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        size += sum((len(bits) + 7) // 8 for bits in self._bit_arrays())
        return size

    def false_positive_probability(self) -> float:
        """
        Estimate the current false positive probability from the fill ratio.

        Uses FPP ~ (fraction of bits set)^k on the bottom bit array, which is
        the array membership tests consult first.
        """
        bottom = self._bit_arrays()[0]
        fill_ratio = bottom.count() / self._params.n
        return max(0.0, min(fill_ratio**self._params.k, 1.0))

    def error_bounds(self) -> Dict[str, Any]:
        """
        Calculate the theoretical error bounds for this filter.

        Formula: (1 - e^(-k*items/n))^k, where items is the number of add()
        calls so far.
        """
        bounds: Dict[str, Any] = {}
        n = self._params.n
        k = self._params.k
        items = self._items_added

        if items > 0:
            fill_ratio = 1 - math.exp(-(k * items) / n)
            bounds["current_theoretical_fpp"] = min(fill_ratio**k, 1.0)
            bounds["theoretical_fill_ratio"] = fill_ratio

            if fill_ratio < 0.5:
                bounds["error_margin"] = "low"
            elif fill_ratio < 0.8:
                bounds["error_margin"] = "moderate"
            else:
                bounds["error_margin"] = "high"

        if self._false_positive_rate is not None:
            bounds["target_fpp"] = self._false_positive_rate

        return bounds

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the filter.

        Returns:
            A dictionary with sizing parameters, fill information for the
            bottom bit array, memory usage and error bounds.
        """
        bottom = self._bit_arrays()[0]
        set_bits = bottom.count()
        fill_ratio = set_bits / self._params.n

        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "bit_size": self._params.n,
            "hash_count": self._params.k,
            "address_bits": self._params.address_bits,
            "items_added": self._items_added,
            "set_bits": set_bits,
            "fill_ratio": fill_ratio,
            "current_fpp": max(0.0, min(fill_ratio**self._params.k, 1.0)),
            "memory_bytes": self.estimate_size(),
        }

        if self._expected_items is not None:
            stats["expected_items"] = self._expected_items
            stats["load_factor"] = self._items_added / self._expected_items

        stats.update(self.error_bounds())
        return stats

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n={self._params.n}, k={self._params.k}, "
            f"address_bits={self._params.address_bits})"
        )


class LayeredSummary(FilterSummary, abc.ABC):
    """
    Abstract base class for filters built from a growing stack of bit arrays.

    Every layer has the same size n. The stack starts with one empty layer;
    layers are appended as needed and never removed (except by reset()). No
    upper bound is placed on the number of layers: repeatedly adding the
    same data keeps growing the stack, so callers size and monitor it.
    """

    def __init__(
        self,
        expected_items: int = DEFAULT_EXPECTED_ITEMS,
        false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
        address_bits: int = DEFAULT_ADDRESS_BITS,
        params: Optional[FilterParameters] = None,
    ):
        super().__init__(
            expected_items=expected_items,
            false_positive_rate=false_positive_rate,
            address_bits=address_bits,
            params=params,
        )
        self._layers: List[BitArrayBackend] = [self._new_bit_array()]

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    def _append_layer(self) -> BitArrayBackend:
        layer = self._new_bit_array()
        self._layers.append(layer)
        log.debug(
            "%s grew to %d layers of %d bits",
            self.__class__.__name__,
            len(self._layers),
            self._params.n,
        )
        return layer

    def _bit_arrays(self) -> Sequence[BitArrayBackend]:
        return self._layers

    def reset(self) -> None:
        """Drop back to a single empty layer, keeping n and k."""
        self._layers = [self._new_bit_array()]
        self._reset_counts()

    def get_stats(self) -> Dict[str, Any]:
        """Add layer information to the base statistics."""
        stats = super().get_stats()
        stats["layer_count"] = len(self._layers)
        stats["layer_set_bits"] = [layer.count() for layer in self._layers]
        return stats
