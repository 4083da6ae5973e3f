"""
Search index building and querying on top of Spectral Bloom Filters.
"""

from sbf_search.search.encoded import EncodedFilter
from sbf_search.search.index import (
    SearchItem,
    build_search_index,
    dumps_index,
    loads_index,
    search,
)
from sbf_search.search.page import render_page
from sbf_search.search.quantize import rank_quantize
from sbf_search.search.tokenizer import term_frequency, tokenize

__all__ = [
    "EncodedFilter",
    "SearchItem",
    "build_search_index",
    "search",
    "dumps_index",
    "loads_index",
    "render_page",
    "rank_quantize",
    "tokenize",
    "term_frequency",
]
