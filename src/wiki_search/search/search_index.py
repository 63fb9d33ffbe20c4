"""Search index - the single entry point for wiki search.

Hides the analyzer, inverted index, BM25 engine and snippet builder behind
one ``search()`` method. The index is built eagerly in ``__init__`` and never
mutated afterwards, so one instance can serve concurrent callers without
locking.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
import logging
from pathlib import Path

from wiki_search.domain.model import Document
from wiki_search.domain.search import SearchHit, SearchPage
from wiki_search.search.analyzers import Analyzer, get_analyzer
from wiki_search.search.bm25_engine import BM25SearchEngine
from wiki_search.search.indexer import CorpusIndex, build_index
from wiki_search.search.snippet import HighlightMode, build_snippet
from wiki_search.utils.corpus_loader import load_documents


logger = logging.getLogger(__name__)


def _ensure_unique_slugs(documents: Sequence[Document]) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for document in documents:
        if document.slug in seen:
            duplicates.add(document.slug)
        seen.add(document.slug)
    if duplicates:
        msg = f"Duplicate document slugs: {sorted(duplicates)}"
        raise ValueError(msg)


class SearchIndex:
    """In-memory BM25 search over a fixed wiki corpus."""

    def __init__(
        self,
        documents: Sequence[Document],
        *,
        analyzer: Analyzer | None = None,
        engine: BM25SearchEngine | None = None,
        highlight_mode: HighlightMode = "sequential",
    ) -> None:
        _ensure_unique_slugs(documents)
        self._analyzer = analyzer or get_analyzer(None)
        self._engine = engine or BM25SearchEngine()
        self.highlight_mode = highlight_mode
        self.corpus: CorpusIndex = build_index(documents, self._analyzer)
        self._by_slug = {document.slug: document for document in self.corpus.documents}

    @classmethod
    def from_directory(cls, docs_dir: Path | str, **kwargs) -> SearchIndex:
        """Load markdown pages from ``docs_dir`` and index them."""

        return cls(load_documents(docs_dir), **kwargs)

    @property
    def document_count(self) -> int:
        return self.corpus.doc_count

    @property
    def vocabulary_size(self) -> int:
        return self.corpus.vocabulary_size

    def tokenize_query(self, query: str) -> list[str]:
        """Return query terms in analyzer order, duplicates preserved."""

        return [token.text for token in self._analyzer(query)]

    def get_document(self, slug: str) -> Document | None:
        return self._by_slug.get(slug)

    def search(self, query: str, page: int = 1, page_size: int = 20) -> SearchPage:
        """Rank documents for ``query`` and return one page of highlighted hits.

        Simple interface hiding all complexity:
        - Query tokenization (ASCII words + character bigrams)
        - BM25 scoring over the inverted index
        - Pagination of the ranked list
        - Snippet extraction and highlighting for the returned page only

        Args:
            query: Raw user query; empty or separator-only queries match nothing.
            page: 1-based page number; pages past the end are empty.
            page_size: Results per page (callers supply a positive value).

        Returns:
            SearchPage with the requested slice and the total number of matches.
        """

        terms = self.tokenize_query(query)
        if not terms:
            return SearchPage.empty(page, page_size)

        ranked = self._engine.score(self.corpus, terms)
        start = (page - 1) * page_size
        hits = []
        for entry in ranked[start : start + page_size]:
            document = self.corpus.documents[entry.doc]
            hits.append(
                SearchHit(
                    slug=document.slug,
                    title=document.title,
                    score=entry.score,
                    snippet=build_snippet(document.content, terms, mode=self.highlight_mode),
                )
            )

        logger.debug("Query %r: %d terms, %d matches, page %d", query, len(terms), len(ranked), page)
        return SearchPage(results=hits, total=len(ranked), page=page, page_size=page_size)


@lru_cache(maxsize=None)
def get_search_index(docs_dir: str, highlight_mode: HighlightMode = "sequential") -> SearchIndex:
    """Return the process-wide index for ``docs_dir``, building it on first use."""

    return SearchIndex.from_directory(docs_dir, highlight_mode=highlight_mode)
