"""
Query a Spectral Bloom Filter directly from its base2p15 text.

This mirrors what the search page does in the browser: counters are read one
at a time from the encoded text instead of decoding the whole filter first.
"""

from typing import Any, Dict, Mapping

from sbf_search.algorithms.spectral import hash_indices, validate_width
from sbf_search.codec import base2p15
from sbf_search.core.base import FrequencyFilter
from sbf_search.core.errors import DecodeError, InvalidParameterError


class EncodedFilter(FrequencyFilter):
    """
    Read-only view over an encoded Spectral Bloom Filter.

    Example:
        sbf = build({"apple": 3}, width=4)
        view = EncodedFilter(sbf.to_base2p15(), sbf.size, sbf.width, sbf.n_hash_functions)
        view.get_frequency("apple")  # same as sbf.get_frequency("apple")
    """

    def __init__(self, text: str, size: int, width: int, n_hash_functions: int):
        """
        Args:
            text: base2p15 encoding of the filter's bit string.
            size: Number of counters.
            width: Bits per counter.
            n_hash_functions: Number of hash functions.

        Raises:
            TypeError: If width is not an integer.
            InvalidParameterError: If size or n_hash_functions is not an
                integer of at least 1, or text is not a string.
            DecodeError: If the text does not hold exactly size * width bits.
        """
        validate_width(width)
        if not isinstance(text, str):
            raise InvalidParameterError(f"Encoded filter must be a string, got {type(text)}")
        for name, value in (("Size", size), ("Number of hash functions", n_hash_functions)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
        if size < 1 or n_hash_functions < 1:
            raise InvalidParameterError("Size and number of hash functions must be at least 1")

        n_bits = base2p15.decoded_length(text)
        if n_bits != size * width:
            raise DecodeError(
                f"Encoded filter holds {n_bits} bits, expected {size} x {width} = {size * width}"
            )

        self._text = text
        self._size = size
        self._width = width
        self._n_hash_functions = n_hash_functions

    def get_counter(self, index: int) -> int:
        """Value of the counter at slot index."""
        return base2p15.read_counter(self._text, index, self._width)

    def get_frequency(self, key: str) -> int:
        """Minimum counter over the key's slots, read from the encoded text."""
        indices = hash_indices(key, self._n_hash_functions, self._size)
        return min(self.get_counter(i) for i in indices)

    @property
    def size(self) -> int:
        return self._size

    @property
    def width(self) -> int:
        return self._width

    @property
    def n_hash_functions(self) -> int:
        return self._n_hash_functions

    @property
    def text(self) -> str:
        return self._text

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data.update(
            {
                "sbf_base2p15": self._text,
                "size": self._size,
                "width": self._width,
                "n_hash_functions": self._n_hash_functions,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncodedFilter":
        try:
            return cls(
                data["sbf_base2p15"],
                data["size"],
                data["width"],
                data["n_hash_functions"],
            )
        except KeyError as e:
            raise InvalidParameterError(f"Missing field in encoded filter data: {e}") from e

    def estimate_size(self) -> int:
        return super().estimate_size() + len(self._text.encode("utf-8"))
