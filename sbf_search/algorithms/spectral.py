"""
Spectral Bloom Filter implementation for sbf-search.

This module provides the Spectral Bloom Filter (SBF), a counting
generalization of the Bloom filter that estimates the frequency of keys in a
multiset. The filter is sized with the classic optimal Bloom filter formulas
and filled with a conservative update rule, which gives the following
guarantees:

1. No undershoot: for every inserted key the estimate is at least its true
   frequency (capped at the largest value a counter can hold).
2. No false negatives: every inserted key with a positive frequency has a
   positive estimate.
3. Overestimates are possible when keys share slots through hash collisions.

Each counter is ``width`` bits wide, so the filter can be exported as a bit
string of ``size * width`` bits and encoded with the base2p15 codec for
embedding in a static page.

References:
    - Cohen, S., & Matias, Y. (2003). Spectral Bloom filters.
      Proceedings of the 2003 ACM SIGMOD International Conference on
      Management of Data, 241-252.
"""

import array
import math
import sys
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from sbf_search.codec import base2p15
from sbf_search.core.base import FrequencyFilter
from sbf_search.core.errors import EmptyInputError, InvalidParameterError
from sbf_search.core.hash import murmurhash3_32

MIN_WIDTH = 1
MAX_WIDTH = 31


def validate_rate(false_positive_rate: float) -> None:
    """Raise InvalidParameterError unless the rate lies in (0, 1]."""
    if isinstance(false_positive_rate, bool) or not isinstance(
        false_positive_rate, (int, float)
    ):
        raise InvalidParameterError(
            f"False positive rate must be a number, got {type(false_positive_rate)}"
        )
    if not (0 < false_positive_rate <= 1):
        raise InvalidParameterError(
            f"False positive rate must be in (0, 1], got {false_positive_rate}"
        )


def validate_width(width: int) -> None:
    """Raise TypeError or InvalidParameterError unless width is an int in [1, 31]."""
    if isinstance(width, bool) or not isinstance(width, int):
        raise TypeError(f"Width must be an integer, got {type(width)}")
    if not (MIN_WIDTH <= width <= MAX_WIDTH):
        raise InvalidParameterError(
            f"Width must be between {MIN_WIDTH} and {MAX_WIDTH}, got {width}"
        )


def validate_frequencies(frequencies: Mapping[str, int]) -> None:
    """Raise InvalidParameterError unless keys are str and frequencies are ints >= 0."""
    for key, frequency in frequencies.items():
        if not isinstance(key, str):
            raise InvalidParameterError(f"Keys must be strings, got {key!r}")
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise InvalidParameterError(
                f"Frequency of {key!r} must be an integer, got {frequency!r}"
            )
        if frequency < 0:
            raise InvalidParameterError(
                f"Frequency of {key!r} must be non-negative, got {frequency}"
            )


def optimal_size(n_keys: int, false_positive_rate: float) -> Tuple[int, int]:
    """
    Compute the slot count and hash function count for a filter.

    Uses the optimal Bloom filter formulas:
        m = ceil(-n * ln(p) / ln(2)^2)
        k = ceil((m / n) * ln(2))

    Both values are at least 1, so a rate of exactly 1 still gives a filter
    with a single slot and a single hash function.

    Args:
        n_keys: Number of distinct keys.
        false_positive_rate: Target false positive rate in (0, 1].

    Returns:
        Tuple of (size, n_hash_functions).

    Raises:
        EmptyInputError: If n_keys is zero.
        InvalidParameterError: If the rate is outside (0, 1].
    """
    validate_rate(false_positive_rate)
    if n_keys < 1:
        raise EmptyInputError("Cannot size a filter for zero distinct keys")

    m = -(n_keys * math.log(false_positive_rate)) / (math.log(2) ** 2)
    size = max(1, math.ceil(m))
    k = (size / n_keys) * math.log(2)
    return size, max(1, math.ceil(k))


def hash_indices(key: str, n_hash_functions: int, size: int) -> List[int]:
    """
    Derive the candidate slots of a key.

    All indices come from the same MurmurHash3 primitive, reseeded with the
    hash function number.

    Args:
        key: The key to hash.
        n_hash_functions: Number of indices to derive.
        size: Number of slots in the filter.

    Returns:
        List of slot indices, one per hash function.
    """
    key_bytes = key.encode("utf-8")
    return [murmurhash3_32(key_bytes, seed=i) % size for i in range(n_hash_functions)]


class SpectralBloomFilter(FrequencyFilter):
    """
    Spectral Bloom Filter for approximate frequency estimation.

    Instances are immutable. Use :func:`build` (or
    :meth:`SpectralBloomFilter.from_frequencies`) to create a filter from a
    frequency map, :meth:`from_tokens` to count a token stream directly, or
    the ``from_*`` deserializers to restore an exported filter.

    Example:
        sbf = build({"a": 1, "b": 2, "c": 10}, false_positive_rate=0.01, width=4)
        sbf.get_frequency("c")  # 10
        sbf.get_frequency("z")  # 0, unless "z" collides with inserted keys
        text = sbf.to_base2p15()  # compact text for embedding in a page
    """

    def __init__(
        self,
        counters: Iterable[int],
        n_hash_functions: int,
        width: int,
        n_keys: Optional[int] = None,
    ):
        """
        Create a filter from existing counter values.

        Args:
            counters: Counter values in slot order.
            n_hash_functions: Number of hash functions used to derive slots.
            width: Bits per counter, between 1 and 31.
            n_keys: Number of distinct keys the filter was built from, if known.

        Raises:
            TypeError: If width is not an integer.
            InvalidParameterError: If any parameter or counter is out of range.
        """
        validate_width(width)
        if isinstance(n_hash_functions, bool) or not isinstance(n_hash_functions, int):
            raise InvalidParameterError("Number of hash functions must be an integer")
        if n_hash_functions < 1:
            raise InvalidParameterError("Number of hash functions must be at least 1")

        max_value = (1 << width) - 1
        values = array.array("L")
        for value in counters:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(f"Counter values must be integers, got {value!r}")
            if not (0 <= value <= max_value):
                raise InvalidParameterError(
                    f"Counter value {value} out of range for width {width}"
                )
            values.append(value)

        if len(values) < 1:
            raise InvalidParameterError("A filter needs at least one counter")

        self._counters = values
        self._n_hash_functions = n_hash_functions
        self._width = width
        self._max_value = max_value
        self._n_keys = n_keys

    @classmethod
    def _wrap(
        cls,
        counters: array.array,
        n_hash_functions: int,
        width: int,
        n_keys: Optional[int],
    ) -> "SpectralBloomFilter":
        # Takes ownership of an already validated buffer without copying it.
        sbf = cls.__new__(cls)
        sbf._counters = counters
        sbf._n_hash_functions = n_hash_functions
        sbf._width = width
        sbf._max_value = (1 << width) - 1
        sbf._n_keys = n_keys
        return sbf

    # --- Construction ---

    @classmethod
    def from_frequencies(
        cls,
        frequencies: Mapping[str, int],
        false_positive_rate: float = 0.01,
        width: int = 4,
    ) -> "SpectralBloomFilter":
        """
        Build a filter from a finished frequency map.

        Each key is inserted once with its full frequency (batched additive
        conservative update): the new value is the minimum of the key's
        candidate slots plus its frequency, saturated at 2^width - 1, and it
        is written to every candidate slot currently at or below it. Keys are
        inserted in sorted order so the counters are reproducible.

        Args:
            frequencies: Mapping from key to non-negative integer frequency.
            false_positive_rate: Target false positive rate in (0, 1].
            width: Bits per counter, between 1 and 31. Frequencies above
                2^width - 1 saturate at that value.

        Returns:
            A new SpectralBloomFilter.

        Raises:
            TypeError: If width is not an integer.
            InvalidParameterError: If the rate, width or a frequency is invalid.
            EmptyInputError: If the frequency map has no keys.
        """
        validate_rate(false_positive_rate)
        validate_width(width)
        validate_frequencies(frequencies)

        size, n_hash_functions = optimal_size(len(frequencies), false_positive_rate)
        upper_bound = (1 << width) - 1
        counters = array.array("L", [0]) * size

        for key in sorted(frequencies):
            indices = hash_indices(key, n_hash_functions, size)
            minimum_value = min(counters[i] for i in indices)
            new_value = min(minimum_value + frequencies[key], upper_bound)
            for i in indices:
                if counters[i] <= new_value:
                    counters[i] = new_value

        return cls._wrap(counters, n_hash_functions, width, len(frequencies))

    @classmethod
    def from_tokens(
        cls,
        tokens: Iterable[str],
        false_positive_rate: float = 0.01,
        width: int = 4,
    ) -> "SpectralBloomFilter":
        """
        Build a filter by counting a token stream one occurrence at a time.

        The filter is sized for the number of distinct tokens. For every
        occurrence, the candidate slots holding the current minimum are
        incremented by one (minimum increase), stopping at 2^width - 1.

        Args:
            tokens: Tokens, possibly repeated.
            false_positive_rate: Target false positive rate in (0, 1].
            width: Bits per counter, between 1 and 31.

        Returns:
            A new SpectralBloomFilter.

        Raises:
            TypeError: If width is not an integer.
            InvalidParameterError: If the rate or width is invalid.
            EmptyInputError: If there are no tokens.
        """
        validate_rate(false_positive_rate)
        validate_width(width)
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise InvalidParameterError(f"Tokens must be strings, got {token!r}")

        n_keys = len(set(tokens))
        size, n_hash_functions = optimal_size(n_keys, false_positive_rate)
        upper_bound = (1 << width) - 1
        counters = array.array("L", [0]) * size

        for token in tokens:
            indices = hash_indices(token, n_hash_functions, size)
            minimum_value = min(counters[i] for i in indices)
            if minimum_value >= upper_bound:
                continue
            for i in indices:
                if counters[i] == minimum_value:
                    counters[i] = minimum_value + 1

        return cls._wrap(counters, n_hash_functions, width, n_keys)

    # --- Queries ---

    def get_frequency(self, key: str) -> int:
        """
        Estimate the frequency of a key.

        Returns the minimum counter over the key's candidate slots. A key
        that was never inserted usually gets 0, but may get a positive
        estimate when all its slots are shared with inserted keys.

        Args:
            key: The key to look up.

        Returns:
            The estimated frequency, never below the true (saturated) frequency.
        """
        indices = hash_indices(key, self._n_hash_functions, len(self._counters))
        return min(self._counters[i] for i in indices)

    @property
    def size(self) -> int:
        """Number of counters (slots) in the filter."""
        return len(self._counters)

    @property
    def width(self) -> int:
        """Bits per counter."""
        return self._width

    @property
    def n_hash_functions(self) -> int:
        """Number of hash functions used per key."""
        return self._n_hash_functions

    @property
    def max_value(self) -> int:
        """Largest value a counter can hold (2^width - 1)."""
        return self._max_value

    @property
    def n_keys(self) -> Optional[int]:
        """Number of distinct keys the filter was built from, if known."""
        return self._n_keys

    @property
    def counters(self) -> Tuple[int, ...]:
        """A read-only copy of the counter values in slot order."""
        return tuple(self._counters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpectralBloomFilter):
            return NotImplemented
        return (
            self._width == other._width
            and self._n_hash_functions == other._n_hash_functions
            and self._counters == other._counters
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(size={self.size}, width={self._width}, "
            f"n_hash_functions={self._n_hash_functions})"
        )

    # --- Export ---

    def as_bit_string(self) -> str:
        """
        Render the counters as a bit string.

        Each counter becomes a width-bit, zero-padded, most significant bit
        first binary string; the strings are concatenated in slot order.
        """
        return "".join(format(value, f"0{self._width}b") for value in self._counters)

    @classmethod
    def from_bit_string(
        cls, bit_string: str, n_hash_functions: int, width: int
    ) -> "SpectralBloomFilter":
        """
        Restore a filter from the output of as_bit_string.

        Raises:
            InvalidParameterError: If the bit string is empty, contains
                characters other than '0' and '1', or its length is not a
                multiple of width.
        """
        validate_width(width)
        if not bit_string or len(bit_string) % width != 0:
            raise InvalidParameterError(
                f"Bit string length {len(bit_string)} is not a positive multiple of width {width}"
            )
        if not set(bit_string) <= {"0", "1"}:
            raise InvalidParameterError("Bit string may only contain '0' and '1'")

        counters = [
            int(bit_string[i : i + width], 2) for i in range(0, len(bit_string), width)
        ]
        return cls(counters, n_hash_functions, width)

    def to_base2p15(self) -> str:
        """Encode the counters as base2p15 text for embedding in a page."""
        return base2p15.encode(self.as_bit_string())

    @classmethod
    def from_base2p15(
        cls, text: str, n_hash_functions: int, width: int
    ) -> "SpectralBloomFilter":
        """
        Restore a filter from base2p15 text produced by to_base2p15.

        Raises:
            DecodeError: If the text is not valid base2p15.
            InvalidParameterError: If the decoded bits do not split into counters.
        """
        return cls.from_bit_string(base2p15.decode(text), n_hash_functions, width)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the filter to a dictionary for serialization.

        Returns:
            A dictionary with n_hash_functions, width, size and counters.
        """
        data = self._base_dict()
        data.update(
            {
                "n_hash_functions": self._n_hash_functions,
                "width": self._width,
                "size": self.size,
                "counters": list(self._counters),
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpectralBloomFilter":
        """
        Create a filter from a dictionary representation.

        Raises:
            InvalidParameterError: If required fields are missing, the type
                tag names another class, or size disagrees with the counters.
        """
        data_type = data.get("type", cls.__name__)
        if data_type != cls.__name__:
            raise InvalidParameterError(f"Cannot load {data_type} as {cls.__name__}")
        try:
            counters: Sequence[int] = data["counters"]
            n_hash_functions = data["n_hash_functions"]
            width = data["width"]
        except KeyError as e:
            raise InvalidParameterError(f"Missing field in filter data: {e}") from e

        if "size" in data and data["size"] != len(counters):
            raise InvalidParameterError(
                f"Size {data['size']} does not match {len(counters)} counters"
            )
        return cls(counters, n_hash_functions, width)

    # --- Statistics ---

    def estimate_size(self) -> int:
        """Estimate the in-memory size of the filter in bytes."""
        return super().estimate_size() + sys.getsizeof(self._counters)

    def error_bounds(self) -> Dict[str, float]:
        """
        Calculate the theoretical and observed error characteristics.

        Returns:
            A dictionary with:
            - fill_ratio: proportion of non-zero counters
            - observed_false_positive_rate: fill_ratio ** n_hash_functions, the
              chance that an absent key lands on k non-zero slots
            - expected_false_positive_rate: (1 - e^(-k*n/m))^k, when the number
              of keys is known
        """
        size = len(self._counters)
        non_zero = sum(1 for value in self._counters if value > 0)
        fill_ratio = non_zero / size
        bounds = {
            "fill_ratio": fill_ratio,
            "observed_false_positive_rate": fill_ratio**self._n_hash_functions,
        }
        if self._n_keys:
            k = self._n_hash_functions
            bounds["expected_false_positive_rate"] = (
                1 - math.exp(-k * self._n_keys / size)
            ) ** k
        return bounds

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the filter.

        Returns:
            A dictionary with the filter parameters, counter statistics and
            the length of the exported forms.
        """
        stats = super().get_stats()
        bit_length = self.size * self._width
        stats.update(
            {
                "size": self.size,
                "width": self._width,
                "n_hash_functions": self._n_hash_functions,
                "n_keys": self._n_keys,
                "max_counter": max(self._counters),
                "zero_counters": sum(1 for value in self._counters if value == 0),
                "saturated_counters": sum(
                    1 for value in self._counters if value == self._max_value
                ),
                "bit_length": bit_length,
                "encoded_length": base2p15.encoded_length(bit_length),
            }
        )
        return stats


def build(
    frequencies: Mapping[str, int],
    false_positive_rate: float = 0.01,
    width: int = 4,
) -> SpectralBloomFilter:
    """
    Build a Spectral Bloom Filter from a frequency map.

    Shortcut for :meth:`SpectralBloomFilter.from_frequencies`.
    """
    return SpectralBloomFilter.from_frequencies(frequencies, false_positive_rate, width)
