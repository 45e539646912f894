"""
Unit tests for Counting Bloom Filter implementation.
"""

import unittest

from tiny_bloom import new_counting
from tiny_bloom.algorithms.bloom.counting import CountingBloomFilter
from tiny_bloom.core.errors import CapacityOverflow, InvalidParameter
from tiny_bloom.core.params import FilterParameters

FOO = b"foo"
BAR = b"bar"


def single_position_params(k=3):
    """Parameters whose probes all land on bit 5 (a = 5, b = 0)."""
    return FilterParameters(n=100, k=k, hasher=lambda data: 5 << 32)


class TestCountingBloomFilter(unittest.TestCase):
    """Test cases for Counting Bloom Filter."""

    def test_init(self):
        """Test initialization with valid and invalid parameters."""
        cbf = CountingBloomFilter(expected_items=1000, false_positive_rate=0.01)
        self.assertEqual(cbf.bit_size, 9586)
        self.assertEqual(cbf.hash_count, 7)
        self.assertEqual(cbf.layer_count, 1)
        self.assertTrue(cbf.is_empty())

        with self.assertRaises(InvalidParameter):
            CountingBloomFilter(expected_items=0)
        with self.assertRaises(InvalidParameter):
            CountingBloomFilter(false_positive_rate=1.0)
        with self.assertRaises(CapacityOverflow):
            new_counting(2_000_000_000, 0.01)

    def test_add_remove_round_trip(self):
        """Test that each remove undoes exactly one add."""
        cbf = new_counting(3000, 0.01)
        cbf.add(FOO)
        cbf.add(FOO)
        cbf.remove(FOO)
        self.assertTrue(cbf.test(FOO), "foo not in bloom filter")

        cbf.remove(FOO)
        self.assertFalse(cbf.test(FOO), "foo still in bloom filter")

    def test_layers_grow_with_repeated_adds(self):
        """Test that a new layer is appended when all existing ones are taken."""
        cbf = new_counting(3000, 0.01)

        for expected_layers in (1, 2, 3, 4):
            cbf.add(FOO)
            self.assertEqual(cbf.layer_count, expected_layers)
            self.assertEqual(cbf.count(FOO), expected_layers)

        # Every layer holds one bit per probe of foo
        stats = cbf.get_stats()
        self.assertEqual(stats["layer_count"], 4)
        self.assertEqual(stats["layer_set_bits"], [7, 7, 7, 7])

    def test_remove_clears_from_the_top(self):
        """Test that remove clears the highest layer first and keeps layers."""
        cbf = new_counting(3000, 0.01)
        for _ in range(3):
            cbf.add(FOO)

        cbf.remove(FOO)
        self.assertEqual(cbf.get_stats()["layer_set_bits"], [7, 7, 0])
        self.assertEqual(cbf.layer_count, 3)  # Layers are never dropped
        self.assertTrue(cbf.test(FOO))

        cbf.remove(FOO)
        cbf.remove(FOO)
        self.assertEqual(cbf.get_stats()["layer_set_bits"], [0, 0, 0])
        self.assertFalse(cbf.test(FOO))
        self.assertTrue(cbf.is_empty())

        # Adding again reuses the existing layers
        cbf.add(FOO)
        self.assertEqual(cbf.get_stats()["layer_set_bits"], [7, 0, 0])

    def test_remove_keeps_other_items(self):
        """Test that removing one item leaves unrelated items present."""
        cbf = CountingBloomFilter(expected_items=1000, false_positive_rate=0.01)
        items = [f"item-{i}".encode() for i in range(500)]
        for item in items:
            cbf.add(item)

        for item in items[:250]:
            cbf.remove(item)

        # No false negatives for items still present
        for item in items[250:]:
            self.assertTrue(cbf.test(item), f"{item!r} lost after unrelated removals")

        # Removed items are gone unless a colliding item keeps all their bits
        still_reported = sum(1 for item in items[:250] if cbf.test(item))
        self.assertLess(still_reported, 25)

    def test_repeated_positions_within_one_item(self):
        """Test an item whose probes collide with each other."""
        cbf = CountingBloomFilter.from_parameters(single_position_params(k=3))

        # Each of the three probes hits bit 5, stacking three layers
        cbf.add(FOO)
        self.assertEqual(cbf.layer_count, 3)
        self.assertTrue(cbf.test(FOO))

        cbf.remove(FOO)
        self.assertFalse(cbf.test(FOO))
        self.assertTrue(cbf.is_empty())

    def test_shared_positions_undercount(self):
        """Test that items sharing positions share their counts."""
        # Every item maps to the same bit, so the filter cannot tell them apart
        cbf = CountingBloomFilter.from_parameters(single_position_params(k=1))
        cbf.add(FOO)
        cbf.add(BAR)

        self.assertEqual(cbf.count(FOO), 2)
        cbf.remove(BAR)
        self.assertTrue(cbf.test(FOO))
        cbf.remove(BAR)  # Misuse: bar was only added once
        self.assertFalse(cbf.test(FOO))  # foo is now a false negative

    def test_rejected_add_is_not_counted(self):
        """Test that data rejected with TypeError changes nothing."""
        cbf = new_counting(3000, 0.01)
        with self.assertRaises(TypeError):
            cbf.add(None)

        self.assertEqual(cbf.items_added, 0)
        self.assertEqual(cbf.layer_count, 1)
        self.assertTrue(cbf.is_empty())

    def test_remove_never_added_is_silent(self):
        """Test that removing absent data does not raise."""
        cbf = new_counting(3000, 0.01)
        cbf.remove(FOO)
        self.assertFalse(cbf.test(FOO))
        self.assertEqual(cbf.layer_count, 1)

    def test_no_false_negatives(self):
        """Test that every added item tests positive."""
        cbf = CountingBloomFilter(expected_items=1000, false_positive_rate=0.01)
        items = [f"item-{i}".encode() for i in range(1000)]
        for item in items:
            cbf.add(item)
            self.assertTrue(cbf.test(item))

        for item in items:
            self.assertTrue(cbf.test(item))

    def test_reset(self):
        """Test that reset returns to one empty layer."""
        cbf = new_counting(3000, 0.01)
        for _ in range(5):
            cbf.add(FOO)
        self.assertEqual(cbf.layer_count, 5)

        cbf.reset()
        self.assertEqual(cbf.layer_count, 1)
        self.assertEqual(cbf.items_added, 0)
        self.assertFalse(cbf.test(FOO))
        self.assertEqual(cbf.count(FOO), 0)

    def test_layer_growth_is_logged(self):
        """Test that appending a layer emits a debug record."""
        cbf = new_counting(3000, 0.01)
        cbf.add(FOO)

        with self.assertLogs("tiny_bloom.core.base", level="DEBUG") as cm:
            cbf.add(FOO)

        self.assertEqual(len(cm.records), 1)
        self.assertIn("grew to 2 layers", cm.output[0])


if __name__ == "__main__":
    unittest.main()
