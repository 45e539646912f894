"""
Exceptions raised by tiny-bloom.

Every failure in this library happens at construction time. Once a filter has
been built, add/test/remove never raise for well-typed input.
"""

from typing import Optional


class BloomError(Exception):
    """Base class for all tiny-bloom errors."""


class InvalidParameter(BloomError, ValueError):
    """
    Raised when a filter is requested with unusable parameters.

    Examples are a non-positive expected item count, a false positive rate
    outside the open interval (0, 1), a probe count below one, or an
    unsupported address width.
    """


class CapacityOverflow(BloomError, OverflowError):
    """
    Raised when a bit array larger than the backend can address is required.

    The requested size is never truncated or wrapped to fit. Callers recover
    by asking for fewer expected items or a higher false positive rate.

    Attributes:
        requested: The number of bits that was asked for.
        limit: The largest bit array size the backend can address.
    """

    def __init__(self, requested: int, limit: int, message: Optional[str] = None):
        self.requested = requested
        self.limit = limit
        if message is None:
            message = (
                f"Bit array of {requested} bits exceeds the addressable "
                f"maximum of {limit} bits"
            )
        super().__init__(message)
