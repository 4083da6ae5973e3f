"""
Unit tests for hashing functions.
"""

import unittest
from collections import Counter

from sbf_search.core.hash import murmurhash3_32


class TestHashFunctions(unittest.TestCase):
    """Test cases for hash functions in sbf_search.core.hash."""

    def test_known_values(self):
        """Test MurmurHash3 against reference values for every tail length."""
        self.assertEqual(murmurhash3_32(b"1", 0), 2484513939)
        self.assertEqual(murmurhash3_32(b"12", 0), 4191350549)
        self.assertEqual(murmurhash3_32(b"123", 0), 2662625771)
        self.assertEqual(murmurhash3_32(b"1234", 0), 1914461635)

    def test_long_input(self):
        """Test a key spanning many 4-byte blocks plus a tail."""
        text = (
            "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Etiam at "
            "consequat massa. Cras eleifend pellentesque ex, at dignissim libero "
            "maximus ut. Sed eget nulla felis"
        )
        self.assertEqual(murmurhash3_32(text.encode("utf-8"), 0), 1004899618)

    def test_empty_input_is_zero_for_every_seed(self):
        """Test that hashing no bytes returns 0 regardless of the seed."""
        for seed in [0, 1, 2, 42, 0xFFFFFFFF]:
            self.assertEqual(murmurhash3_32(b"", seed), 0)
            self.assertEqual(murmurhash3_32("", seed), 0)

    def test_str_hashed_as_utf8(self):
        """Test that strings and their UTF-8 bytes hash the same."""
        for text in ["hello world", "python", "naïve", "日本語", "a" * 100]:
            for seed in [0, 7]:
                self.assertEqual(
                    murmurhash3_32(text, seed), murmurhash3_32(text.encode("utf-8"), seed)
                )

    def test_reproducibility(self):
        """Test that MurmurHash3 produces consistent results for the same input."""
        for input_value in ["hello world", "python", "a" * 100, b"\x00\x01\x02"]:
            self.assertEqual(murmurhash3_32(input_value), murmurhash3_32(input_value))

    def test_range(self):
        """Test that results are unsigned 32-bit integers."""
        for i in range(200):
            value = murmurhash3_32(f"key-{i}", seed=i)
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 0xFFFFFFFF)

    def test_different_inputs(self):
        """Test that MurmurHash3 produces different hashes for different inputs."""
        inputs = ["hello", "Hello", "hello ", "world", "dlrow"]
        hashes = [murmurhash3_32(x) for x in inputs]
        self.assertEqual(len(set(hashes)), len(inputs))

    def test_seed(self):
        """Test that MurmurHash3 produces different outputs with different seeds."""
        hashes = {murmurhash3_32("test seed", seed=seed) for seed in range(10)}
        self.assertEqual(len(hashes), 10)

    def test_distribution(self):
        """Test that hash values spread evenly over a small number of buckets."""
        num_buckets = 10
        num_items = 10000
        buckets = Counter(
            murmurhash3_32(f"item-{i}") % num_buckets for i in range(num_items)
        )

        expected = num_items / num_buckets
        for bucket in range(num_buckets):
            # Allow 15% deviation from the expected count
            self.assertGreater(buckets[bucket], expected * 0.85)
            self.assertLess(buckets[bucket], expected * 1.15)


if __name__ == "__main__":
    unittest.main()
