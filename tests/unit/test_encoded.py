"""
Unit tests for querying filters from their encoded text.
"""

import random
import unittest

from sbf_search.algorithms.spectral import build
from sbf_search.core.errors import DecodeError, InvalidParameterError
from sbf_search.search.encoded import EncodedFilter


class TestEncodedFilter(unittest.TestCase):
    """Test cases for EncodedFilter."""

    def make_view(self, sbf):
        return EncodedFilter(sbf.to_base2p15(), sbf.size, sbf.width, sbf.n_hash_functions)

    def test_matches_in_memory_filter(self):
        """Test that every estimate equals the in-memory filter's."""
        rng = random.Random(9)
        for width in [1, 3, 4, 7, 16, 31]:
            upper = (1 << width) - 1
            frequencies = {f"word{i}": rng.randint(1, upper) for i in range(60)}
            sbf = build(frequencies, false_positive_rate=0.1, width=width)
            view = self.make_view(sbf)

            for key in list(frequencies) + [f"missing{i}" for i in range(20)]:
                self.assertEqual(view.get_frequency(key), sbf.get_frequency(key))
            for i, value in enumerate(sbf.counters):
                self.assertEqual(view.get_counter(i), value)

    def test_hand_written(self):
        """Test a small filter through its encoded form."""
        view = self.make_view(build({"a": 1, "b": 2, "c": 10}, width=4))
        self.assertEqual(view.get_frequency("a"), 1)
        self.assertEqual(view.get_frequency("b"), 2)
        self.assertEqual(view.get_frequency("c"), 10)
        self.assertEqual(view.query("z"), 0)
        self.assertIn("c", view)

    def test_length_mismatch(self):
        """Test that text of the wrong length is rejected."""
        sbf = build({"a": 1, "b": 2}, width=4)
        text = sbf.to_base2p15()
        with self.assertRaises(DecodeError):
            EncodedFilter(text, sbf.size + 1, sbf.width, sbf.n_hash_functions)
        with self.assertRaises(DecodeError):
            EncodedFilter(text[:-1], sbf.size, sbf.width, sbf.n_hash_functions)
        with self.assertRaises(DecodeError):
            EncodedFilter("", sbf.size, sbf.width, sbf.n_hash_functions)

    def test_invalid_parameters(self):
        sbf = build({"a": 1}, width=4)
        text = sbf.to_base2p15()
        with self.assertRaises(InvalidParameterError):
            EncodedFilter(text, sbf.size, sbf.width, 0)
        with self.assertRaises(InvalidParameterError):
            EncodedFilter(text, sbf.size, 0, sbf.n_hash_functions)
        with self.assertRaises(InvalidParameterError):
            EncodedFilter(text, str(sbf.size), sbf.width, sbf.n_hash_functions)
        with self.assertRaises(InvalidParameterError):
            EncodedFilter(text, sbf.size, sbf.width, 1.0)
        with self.assertRaises(InvalidParameterError):
            EncodedFilter(text.encode("utf-8"), sbf.size, sbf.width, sbf.n_hash_functions)
        with self.assertRaises(TypeError):
            EncodedFilter(text, sbf.size, "4", sbf.n_hash_functions)

    def test_dict_round_trip(self):
        sbf = build({"x": 3, "y": 5}, width=4)
        view = self.make_view(sbf)
        data = view.to_dict()
        self.assertEqual(data["type"], "EncodedFilter")
        self.assertEqual(data["sbf_base2p15"], sbf.to_base2p15())

        restored = EncodedFilter.from_dict(data)
        self.assertEqual(restored.get_frequency("y"), sbf.get_frequency("y"))

        with self.assertRaises(InvalidParameterError):
            EncodedFilter.from_dict({"size": 1})


if __name__ == "__main__":
    unittest.main()
