"""
Spectral Bloom Filter Demo for sbf-search.

This example builds a spectral Bloom filter from word counts, shows how the
counter width caps the estimates, and queries a filter straight from its
base2p15 text the way the search page does.
"""

from collections import Counter

from sbf_search import build
from sbf_search.search import EncodedFilter, build_search_index, search, term_frequency

TEXT = """
Spectral Bloom filters store a small counter in every slot. Each word is
hashed to several slots and its count is the smallest of those counters.
Counters only ever overestimate, so a word that was added is never missed.
"""


def demonstrate_frequency_estimates():
    """Estimate word counts from a filter."""
    print("\n=== Spectral Bloom Filter Demo ===")

    counts = term_frequency(TEXT)
    sbf = build(counts, false_positive_rate=0.01, width=4)

    print(f"Filter parameters:")
    print(f"  Distinct words: {len(counts)}")
    print(f"  Counters: {sbf.size} x {sbf.width} bits (max value: {sbf.max_value})")
    print(f"  Hash functions: {sbf.n_hash_functions}")

    print("\nEstimated counts:")
    for word, count in Counter(counts).most_common(5):
        print(f"  '{word}': actual {count}, estimated {sbf.query(word)}")

    for word in ["kiwi", "lemon"]:
        print(f"  '{word}' (never added): estimated {sbf.query(word)}")

    print("\nFilter statistics:")
    for key, value in sbf.get_stats().items():
        print(f"  {key}: {value}")


def demonstrate_saturation():
    """Show how narrow counters clamp large counts."""
    print("\n=== Counter Saturation ===")
    for width in [1, 2, 4, 8]:
        sbf = build({"common": 200, "rare": 1}, width=width)
        print(
            f"  width={width}: common -> {sbf.query('common')}, rare -> {sbf.query('rare')}"
        )


def demonstrate_encoded_queries():
    """Query a filter from its text encoding."""
    print("\n=== Querying Encoded Filters ===")
    sbf = build({"apple": 3, "banana": 7, "cherry": 12}, width=4)
    text = sbf.to_base2p15()
    print(f"  {sbf.size * sbf.width} bits encoded as {len(text)} characters")

    view = EncodedFilter(text, sbf.size, sbf.width, sbf.n_hash_functions)
    for word in ["apple", "banana", "cherry", "durian"]:
        print(f"  '{word}': {view.get_frequency(word)}")


def demonstrate_search():
    """Rank a few documents for a query."""
    print("\n=== Searching Documents ===")
    documents = [
        {"title": "Filters", "url": "/filters", "body": TEXT},
        {"title": "Bread", "url": "/bread", "body": "Bread needs flour, water and salt."},
        {"title": "Counters", "url": "/counters", "body": "Counters count. Counting counters."},
    ]
    items = build_search_index(documents)
    for query in ["counters", "flour water", "hashed slots"]:
        print(f"  Query '{query}':")
        for result in search(items, query):
            print(f"    {result['score']:>3}  {result['title']} ({result['url']})")


if __name__ == "__main__":
    demonstrate_frequency_estimates()
    demonstrate_saturation()
    demonstrate_encoded_queries()
    demonstrate_search()
