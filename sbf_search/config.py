"""
Configuration for building search indexes.
"""

from dataclasses import dataclass

from sbf_search.algorithms.spectral import validate_rate, validate_width
from sbf_search.core.errors import InvalidParameterError

MULTIPLIER = 2


@dataclass(frozen=True)
class IndexConfig:
    """
    Parameters shared by every filter in a search index.

    Attributes:
        false_positive_rate: Target false positive rate in (0, 1]. Lower
            rates give larger filters.
        width: Bits per counter, between 1 and 31. Estimates saturate at
            2^width - 1.
        quantize: Replace raw counts by their rank across documents before
            building filters.
        multiplier: Gap between consecutive ranks when quantizing.
    """

    false_positive_rate: float = 0.01
    width: int = 4
    quantize: bool = True
    multiplier: int = MULTIPLIER

    def __post_init__(self) -> None:
        validate_rate(self.false_positive_rate)
        validate_width(self.width)
        if self.multiplier < 1:
            raise InvalidParameterError("Multiplier must be at least 1")
