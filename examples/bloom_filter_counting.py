"""
Counting and Layered Bloom Filter Demo for tiny-bloom.

This example demonstrates removal with the Counting Bloom Filter and
occurrence tracking with the Layered Bloom Filter.
"""

import logging

from tiny_bloom import new_counting, new_layered


def demonstrate_counting_bloom_filter():
    """Demonstrate Counting Bloom Filter with deletion capability."""
    print("\n=== Counting Bloom Filter Demo ===")
    cbf = new_counting(1000, 0.01)

    words = [b"apple", b"banana", b"cherry", b"date"]
    for word in words:
        cbf.add(word)
    cbf.add(b"apple")  # apple twice

    print("Checking membership:")
    for word in words + [b"kiwi"]:
        print(f"  {word!r} in filter: {cbf.test(word)}")

    print("\nRemoving b'apple' once, then b'banana'...")
    cbf.remove(b"apple")
    cbf.remove(b"banana")
    print(f"  b'apple' in filter: {cbf.test(b'apple')}  (one occurrence left)")
    print(f"  b'banana' in filter: {cbf.test(b'banana')}")

    cbf.remove(b"apple")
    print(f"  b'apple' after second removal: {cbf.test(b'apple')}")
    print(f"  Layers allocated: {cbf.layer_count}")


def demonstrate_layered_bloom_filter():
    """Demonstrate counting repeated sightings with a Layered Bloom Filter."""
    print("\n=== Layered Bloom Filter Demo ===")
    lbf = new_layered(1000, 0.01)

    events = [b"login:alice", b"login:bob", b"login:alice", b"login:alice"]
    for event in events:
        depth = lbf.add(event)
        print(f"  {event!r} seen {depth} time(s)")

    print("\nQuerying depths:")
    for event in (b"login:alice", b"login:bob", b"login:carol"):
        depth, found = lbf.test(event)
        print(f"  {event!r}: depth={depth}, found={found}")

    # e.g. throttle anything seen three times or more
    threshold = 3
    depth, _ = lbf.test(b"login:alice")
    print(f"\n  alice over threshold ({threshold})? {depth >= threshold}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    demonstrate_counting_bloom_filter()
    demonstrate_layered_bloom_filter()
