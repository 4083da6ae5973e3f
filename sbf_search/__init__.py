"""
sbf-search - Static Site Search with Spectral Bloom Filters

sbf-search builds a compact approximate term-frequency filter per document
and encodes it as text, so that a static page can run full-text search in the
browser without a server.
"""

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from sbf_search.algorithms.spectral import SpectralBloomFilter, build
from sbf_search.codec.base2p15 import decode, encode
from sbf_search.config import IndexConfig
from sbf_search.core.base import FrequencyFilter
from sbf_search.core.errors import (
    DecodeError,
    EmptyInputError,
    InvalidParameterError,
    SBFError,
)
from sbf_search.core.hash import murmurhash3_32

__all__ = [
    # Core base classes
    "FrequencyFilter",
    # Errors
    "SBFError",
    "InvalidParameterError",
    "EmptyInputError",
    "DecodeError",
    # Algorithm implementations
    "SpectralBloomFilter",
    "build",
    "murmurhash3_32",
    # Codec
    "encode",
    "decode",
    # Configuration
    "IndexConfig",
]
