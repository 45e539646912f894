"""
Basic Bloom Filter Demo for tiny-bloom.

This example demonstrates how to use the standard Bloom Filter
for space-efficient set membership testing. It highlights its probabilistic
nature (false positives) and its guarantee of no false negatives.
"""

import logging

from tiny_bloom import CapacityOverflow, new_standard


def demonstrate_basic_usage():
    """Demonstrate Bloom Filter initialization, adding, and checking."""
    print("\n=== Basic Bloom Filter Demo ===")

    # Expecting ~10,000 items with a 1% (0.01) false positive rate
    bf = new_standard(10000, 0.01)

    print("Bloom Filter parameters:")
    print(f"  Calculated filter size (bits): {bf.bit_size:,} bits")
    print(f"  Calculated number of probes: {bf.hash_count}")
    print(f"  Estimated memory usage: {bf.estimate_size():,} bytes")

    print("\nAdding items to the filter...")
    items_to_add = [b"apple", b"banana", b"cherry", b"date", b"fig", b"grape"]
    for item in items_to_add:
        bf.add(item)
        print(f"  Added {item!r}")

    print("\nChecking membership:")
    print("  (Note: 'False' means DEFINITELY NOT present)")
    print("  (Note: 'True' means POSSIBLY present - could be a false positive)")
    for item in items_to_add + [b"orange", b"pear", b"plum"]:
        print(f"  {item!r} in filter? {bf.test(item)}")

    bf.reset()
    print(f"\nAfter reset, b'apple' in filter? {bf.test(b'apple')}")


def demonstrate_fpp_and_fill_ratio():
    """Show how the false positive rate grows as the filter fills up."""
    print("\n=== False Positive Rate vs. Load ===")
    n = 2000
    bf = new_standard(n, 0.01)

    added = 0
    for load in (0.25, 0.5, 1.0, 2.0):
        target = int(n * load)
        while added < target:
            bf.add(f"item-{added}".encode())
            added += 1

        probes = 5000
        false_positives = sum(
            1 for i in range(probes) if bf.test(f"probe-{i}".encode())
        )
        stats = bf.get_stats()
        print(
            f"  load {load:>4.0%}: fill ratio {stats['fill_ratio']:.3f}, "
            f"estimated FPP {stats['current_fpp']:.4f}, "
            f"observed FPP {false_positives / probes:.4f}"
        )


def demonstrate_capacity_guard():
    """Show that oversized filters are refused rather than truncated."""
    print("\n=== Capacity Guard ===")
    try:
        new_standard(2_000_000_000, 0.01)
    except CapacityOverflow as exc:
        print(f"  Refused: {exc}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demonstrate_basic_usage()
    demonstrate_fpp_and_fill_ratio()
    demonstrate_capacity_guard()
