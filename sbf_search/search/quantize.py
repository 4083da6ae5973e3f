"""
Frequency-rank quantization across a document set.

Ranking only needs to know, for each word, which documents use it more
often than others. Replacing raw counts by their rank among the distinct
counts the word has across all documents keeps that order while keeping the
numbers small, so narrower counters can be used without saturating.
"""

import bisect
from typing import Dict, List, Mapping, Sequence

from sbf_search.config import MULTIPLIER
from sbf_search.core.errors import InvalidParameterError


def rank_quantize(
    term_frequencies: Sequence[Mapping[str, int]], multiplier: int = MULTIPLIER
) -> List[Dict[str, int]]:
    """
    Replace each frequency with its rank among the word's distinct frequencies.

    A frequency with rank r (0 for the smallest count the word has in any
    document) becomes ``r * multiplier + 1``, so every present word keeps a
    positive value.

    Args:
        term_frequencies: One term frequency map per document.
        multiplier: Gap between consecutive ranks.

    Returns:
        New term frequency maps, in the same order as the input.

    Raises:
        InvalidParameterError: If multiplier is less than 1.
    """
    if multiplier < 1:
        raise InvalidParameterError("Multiplier must be at least 1")

    distinct: Dict[str, set] = {}
    for frequencies in term_frequencies:
        for word, frequency in frequencies.items():
            distinct.setdefault(word, set()).add(frequency)
    ranks = {word: sorted(values) for word, values in distinct.items()}

    return [
        {
            word: bisect.bisect_left(ranks[word], frequency) * multiplier + 1
            for word, frequency in frequencies.items()
        }
        for frequencies in term_frequencies
    ]
