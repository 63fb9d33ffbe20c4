"""Inverted index construction for the wiki corpus.

The index is built once, eagerly, over a fixed ordered list of documents.
A document's position in that list is its internal id, so postings for every
term are naturally in ascending document order. Nothing here is mutated after
``build_index`` returns; all mappings are exposed read-only.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import time
from types import MappingProxyType

from wiki_search.domain.model import Document
from wiki_search.search.analyzers import Analyzer, get_analyzer
from wiki_search.search.models import Posting
from wiki_search.search.stats import average_length


logger = logging.getLogger(__name__)

_NO_POSTINGS: tuple[Posting, ...] = ()


@dataclass(frozen=True)
class CorpusIndex:
    """Immutable snapshot of the inverted index and corpus statistics."""

    documents: tuple[Document, ...]
    postings: Mapping[str, tuple[Posting, ...]]
    doc_freq: Mapping[str, int]
    doc_lengths: tuple[int, ...]
    avg_doc_length: float

    @property
    def doc_count(self) -> int:
        return len(self.documents)

    @property
    def vocabulary_size(self) -> int:
        return len(self.postings)

    def get_postings(self, term: str) -> tuple[Posting, ...]:
        return self.postings.get(term, _NO_POSTINGS)

    def get_doc_freq(self, term: str) -> int:
        return self.doc_freq.get(term, 0)


def build_index(documents: Sequence[Document], analyzer: Analyzer | None = None) -> CorpusIndex:
    """Tokenize every document in order and aggregate postings plus statistics.

    Args:
        documents: Ordered corpus; position ``i`` becomes document id ``i``.
        analyzer: Analyzer applied to ``title + ' ' + content`` (default: mixed-script).

    Returns:
        CorpusIndex whose term frequencies, document frequencies and lengths
        are derived from exactly one tokenization per document.
    """

    start = time.perf_counter()
    active_analyzer = analyzer or get_analyzer(None)

    postings: dict[str, list[Posting]] = {}
    doc_freq: dict[str, int] = {}
    doc_lengths: list[int] = []

    for doc_id, document in enumerate(documents):
        terms = [token.text for token in active_analyzer(document.indexed_text)]
        doc_lengths.append(len(terms))
        # Aggregate per document first so each term gets a single posting here
        for term, tf in Counter(terms).items():
            postings.setdefault(term, []).append(Posting(doc=doc_id, tf=tf))
            doc_freq[term] = doc_freq.get(term, 0) + 1

    index = CorpusIndex(
        documents=tuple(documents),
        postings=MappingProxyType({term: tuple(entries) for term, entries in postings.items()}),
        doc_freq=MappingProxyType(doc_freq),
        doc_lengths=tuple(doc_lengths),
        avg_doc_length=average_length(doc_lengths),
    )

    logger.info(
        "Built search index: %d documents, %d terms, avgdl=%.2f in %.3fs",
        index.doc_count,
        index.vocabulary_size,
        index.avg_doc_length,
        time.perf_counter() - start,
    )
    return index
