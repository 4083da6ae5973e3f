"""
Render a static search page with an embedded search index.
"""

import json
from importlib import resources
from typing import Iterable, Optional

from sbf_search.core.errors import InvalidParameterError
from sbf_search.search.index import SearchItem, dumps_index
from sbf_search.search.tokenizer import default_stopwords

INDEX_PLACEHOLDER = "UNIQUE_SEARCH_INDEX_PLACEHOLDER"
STOPWORDS_PLACEHOLDER = "UNIQUE_STOPWORDS_PLACEHOLDER"


def default_template() -> str:
    """The HTML template shipped with the package."""
    return (resources.files("sbf_search") / "assets" / "search_template.html").read_text(
        encoding="utf-8"
    )


def _script_safe(text: str) -> str:
    # A literal "</" would let the JSON close the surrounding <script> element.
    return text.replace("</", "<\\/")


def render_page(items: Iterable[SearchItem], template: Optional[str] = None) -> str:
    """
    Substitute a search index into an HTML template.

    The index replaces UNIQUE_SEARCH_INDEX_PLACEHOLDER and the stopword list
    replaces UNIQUE_STOPWORDS_PLACEHOLDER, both as JavaScript literals.

    Args:
        items: The search index.
        template: Template text. Defaults to the packaged template.

    Returns:
        The rendered page.

    Raises:
        InvalidParameterError: If the template has no index placeholder.
    """
    template = default_template() if template is None else template
    if INDEX_PLACEHOLDER not in template:
        raise InvalidParameterError(f"Template does not contain {INDEX_PLACEHOLDER}")

    stopwords = json.dumps(sorted(default_stopwords()))
    page = template.replace(STOPWORDS_PLACEHOLDER, stopwords)
    return page.replace(INDEX_PLACEHOLDER, _script_safe(dumps_index(items)))
