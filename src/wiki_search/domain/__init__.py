"""Domain layer - pure value objects with no infrastructure dependencies.

- Document / PageMetadata: the immutable wiki corpus
- SearchHit / SearchPage: what a query returns
"""

from wiki_search.domain.model import Document, PageMetadata
from wiki_search.domain.search import SearchHit, SearchPage


__all__ = [
    "Document",
    "PageMetadata",
    "SearchHit",
    "SearchPage",
]
