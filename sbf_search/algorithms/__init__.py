"""
Algorithm implementations for sbf-search.
"""

from sbf_search.algorithms.spectral import SpectralBloomFilter, build, optimal_size

__all__ = [
    "SpectralBloomFilter",
    "build",
    "optimal_size",
]
