"""BM25 ranking over a prebuilt corpus index."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from wiki_search.search.indexer import CorpusIndex
from wiki_search.search.stats import DEFAULT_B, DEFAULT_K1, bm25, calculate_idf


@dataclass(frozen=True)
class RankedDocument:
    """Represents a scored document produced by the BM25 engine."""

    doc: int
    score: float


class BM25SearchEngine:
    """Compute Okapi BM25 scores for query terms against a corpus index."""

    def __init__(self, *, k1: float = DEFAULT_K1, b: float = DEFAULT_B) -> None:
        self.k1 = k1
        self.b = b

    def idf(self, index: CorpusIndex, term: str) -> float:
        return calculate_idf(index.get_doc_freq(term), index.doc_count)

    def term_score(self, index: CorpusIndex, term: str, doc: int) -> float:
        """Return the BM25 contribution of ``term`` to document ``doc`` (0.0 if absent)."""

        for posting in index.get_postings(term):
            if posting.doc == doc:
                weight = bm25(posting.tf, index.doc_lengths[doc], index.avg_doc_length, k1=self.k1, b=self.b)
                return weight * self.idf(index, term)
        return 0.0

    def score(self, index: CorpusIndex, terms: Sequence[str]) -> list[RankedDocument]:
        """Return every document matching at least one term, best first.

        Terms are scored in query order and repeated terms count once per
        repetition. Terms missing from the index contribute nothing. The sort
        is stable, so equal scores keep the order documents were first seen.
        """

        doc_scores: dict[int, float] = defaultdict(float)
        for term in terms:
            postings = index.get_postings(term)
            if not postings:
                continue
            idf = self.idf(index, term)
            for posting in postings:
                weight = bm25(
                    posting.tf,
                    index.doc_lengths[posting.doc],
                    index.avg_doc_length,
                    k1=self.k1,
                    b=self.b,
                )
                doc_scores[posting.doc] += weight * idf

        return sorted(
            (RankedDocument(doc=doc, score=score) for doc, score in doc_scores.items()),
            key=lambda entry: entry.score,
            reverse=True,
        )
