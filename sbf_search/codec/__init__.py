"""
Text codecs for embedding filters in static pages.
"""

from sbf_search.codec.base2p15 import decode, decode_range, encode, read_counter

__all__ = [
    "encode",
    "decode",
    "decode_range",
    "read_counter",
]
