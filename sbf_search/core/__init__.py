"""
Core functionality for sbf-search.
"""

from sbf_search.core.base import FrequencyFilter
from sbf_search.core.errors import (
    DecodeError,
    EmptyInputError,
    InvalidParameterError,
    SBFError,
)
from sbf_search.core.hash import murmurhash3_32

__all__ = [
    # Base classes
    "FrequencyFilter",
    # Errors
    "SBFError",
    "InvalidParameterError",
    "EmptyInputError",
    "DecodeError",
    # Utility functions
    "murmurhash3_32",
]
