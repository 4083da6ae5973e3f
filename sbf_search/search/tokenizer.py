"""
Naive tokenizer that turns document text into a term frequency map.
"""

import functools
from collections import Counter
from importlib import resources
from typing import Dict, FrozenSet, Iterable, List, Optional


@functools.lru_cache(maxsize=1)
def default_stopwords() -> FrozenSet[str]:
    """Load the stopword list shipped with the package."""
    text = (resources.files("sbf_search") / "assets" / "stopwords.txt").read_text(
        encoding="utf-8"
    )
    return frozenset(text.split())


def tokenize(text: str, stopwords: Optional[Iterable[str]] = None) -> List[str]:
    """
    Split text into lowercase words.

    Non-alphabetic characters act as separators, and stopwords are dropped.

    Args:
        text: The text to split.
        stopwords: Words to drop. Defaults to the packaged English list.

    Returns:
        The words in order of appearance, with repeats.
    """
    stop = default_stopwords() if stopwords is None else frozenset(stopwords)
    cleaned = "".join(char if char.isalpha() else " " for char in text)
    return [word for word in (w.lower() for w in cleaned.split()) if word not in stop]


def term_frequency(
    text: str, stopwords: Optional[Iterable[str]] = None
) -> Dict[str, int]:
    """Count the words of text, as returned by tokenize."""
    return dict(Counter(tokenize(text, stopwords)))
