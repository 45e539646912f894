"""
Default configuration for tiny-bloom filters.
"""

# Filter sizing
DEFAULT_EXPECTED_ITEMS = 10000
DEFAULT_FALSE_POSITIVE_RATE = 0.01  # 1%

# Bit array addressing
DEFAULT_ADDRESS_BITS = 32
SUPPORTED_ADDRESS_BITS = (32, 64)

# Load factor above which a filter logs that its target rate no longer holds
OVERLOAD_WARNING_RATIO = 1.0
