"""
Search index construction and ranked search.

A search index is a list of search items, one per document. Each item holds
the document's URL and title plus its Spectral Bloom Filter encoded as
base2p15 text, together with the parameters needed to query it.
"""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sbf_search.algorithms.spectral import build, validate_frequencies
from sbf_search.config import IndexConfig
from sbf_search.core.errors import InvalidParameterError
from sbf_search.search.encoded import EncodedFilter
from sbf_search.search.quantize import rank_quantize
from sbf_search.search.tokenizer import term_frequency, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchItem:
    """One document in a search index."""

    url: str
    title: str
    sbf_base2p15: str
    width: int
    size: int
    n_hash_functions: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchItem":
        """
        Create a search item from its dictionary form.

        Raises:
            InvalidParameterError: If a field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise InvalidParameterError(f"Search item must be an object, got {data!r}")
        try:
            item = cls(
                url=data["url"],
                title=data.get("title", ""),
                sbf_base2p15=data["sbf_base2p15"],
                width=data["width"],
                size=data["size"],
                n_hash_functions=data["n_hash_functions"],
            )
        except KeyError as e:
            raise InvalidParameterError(f"Missing field in search item: {e}") from e

        if not isinstance(item.sbf_base2p15, str):
            raise InvalidParameterError("Field 'sbf_base2p15' must be a string")
        for name in ("width", "size", "n_hash_functions"):
            value = getattr(item, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(f"Field {name!r} must be an integer, got {value!r}")
        return item

    def filter(self) -> EncodedFilter:
        """Queryable view of this item's encoded filter."""
        return EncodedFilter(self.sbf_base2p15, self.size, self.width, self.n_hash_functions)


def document_term_frequency(document: Mapping[str, Any]) -> Dict[str, int]:
    """
    Get the term frequency map of a document.

    Documents either carry a ready-made ``term_frequency`` mapping or a
    ``body`` text that is tokenized.

    Raises:
        InvalidParameterError: If the document has neither field, or either
            field has the wrong type.
    """
    if "term_frequency" in document:
        frequencies = document["term_frequency"]
        if not isinstance(frequencies, Mapping):
            raise InvalidParameterError(
                f"Document {_document_url(document)!r}: 'term_frequency' must be an object"
            )
        validate_frequencies(frequencies)
        return dict(frequencies)
    if "body" in document:
        if not isinstance(document["body"], str):
            raise InvalidParameterError(
                f"Document {_document_url(document)!r}: 'body' must be a string"
            )
        return term_frequency(document["body"])
    raise InvalidParameterError(
        f"Document {_document_url(document)!r} has neither 'term_frequency' nor 'body'"
    )


def _document_url(document: Mapping[str, Any]) -> str:
    return document.get("url", document.get("document_link", ""))


def build_search_index(
    documents: Sequence[Mapping[str, Any]], config: Optional[IndexConfig] = None
) -> List[SearchItem]:
    """
    Build a search index from documents.

    Each document is a mapping with ``url`` (or ``document_link``), an
    optional ``title``, and either ``body`` or ``term_frequency``. Documents
    without any terms are skipped with a warning.

    Args:
        documents: The documents to index.
        config: Filter parameters. Defaults to IndexConfig().

    Returns:
        One SearchItem per indexed document, in input order.

    Raises:
        InvalidParameterError: If a document is not a mapping or its
            frequencies are not non-negative integers.
    """
    config = config or IndexConfig()
    for document in documents:
        if not isinstance(document, Mapping):
            raise InvalidParameterError(f"Documents must be objects, got {document!r}")
    frequencies = [document_term_frequency(document) for document in documents]
    if config.quantize:
        frequencies = rank_quantize(frequencies, config.multiplier)

    items = []
    for document, terms in zip(documents, frequencies):
        url = _document_url(document)
        if not terms:
            logger.warning(f"Skipping document with no terms: {url!r}")
            continue

        sbf = build(terms, config.false_positive_rate, config.width)
        items.append(
            SearchItem(
                url=url,
                title=document.get("title", ""),
                sbf_base2p15=sbf.to_base2p15(),
                width=sbf.width,
                size=sbf.size,
                n_hash_functions=sbf.n_hash_functions,
            )
        )
        logger.debug(
            f"Indexed {url!r}: {len(terms)} terms, size={sbf.size}, "
            f"n_hash_functions={sbf.n_hash_functions}"
        )

    logger.info(f"Built search index with {len(items)} of {len(documents)} documents")
    return items


def search(
    items: Iterable[SearchItem], query: str, stopwords: Optional[Iterable[str]] = None
) -> List[Dict[str, Any]]:
    """
    Rank documents for a query.

    The query is tokenized like document bodies. A document's score is the
    sum of the frequency estimates of the query words; documents scoring 0
    are dropped and the rest are sorted by descending score, keeping index
    order for ties.

    Returns:
        A list of {"title", "url", "score"} dictionaries.
    """
    words = tokenize(query, stopwords)
    if not words:
        return []

    results = []
    for item in items:
        view = item.filter()
        score = sum(view.get_frequency(word) for word in words)
        if score > 0:
            results.append({"title": item.title, "url": item.url, "score": score})

    results.sort(key=lambda result: result["score"], reverse=True)
    return results


def dumps_index(items: Iterable[SearchItem]) -> str:
    """Serialize a search index to JSON, keeping base2p15 characters unescaped."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def loads_index(text: str) -> List[SearchItem]:
    """
    Load a search index serialized with dumps_index.

    Raises:
        InvalidParameterError: If the JSON is not a list of search items.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise InvalidParameterError("A search index must be a JSON list")
    return [SearchItem.from_dict(entry) for entry in data]
