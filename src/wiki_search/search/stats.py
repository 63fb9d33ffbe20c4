"""Statistical helpers for Okapi BM25 scoring.

The functions here stay independent of the index structure so they can be
unit tested in isolation. Constants and floors are fixed so rankings are
reproducible bit for bit on the reference corpus.
"""

from __future__ import annotations

from collections.abc import Sequence
import math


DEFAULT_K1 = 1.2
DEFAULT_B = 0.75


def average_length(lengths: Sequence[int]) -> float:
    """Return the mean document length, 0.0 for an empty corpus."""

    return sum(lengths) / max(1, len(lengths))


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ``ln(1 + (N - df + 0.5) / (df + 0.5))``.

    Unseen terms pass ``doc_freq=0``.
    """

    return math.log(1 + (total_docs - doc_freq + 0.5) / (doc_freq + 0.5))


def bm25(
    tf: int,
    doc_length: int,
    avg_doc_length: float,
    *,
    k1: float = DEFAULT_K1,
    b: float = DEFAULT_B,
) -> float:
    """Compute the BM25 term saturation without IDF.

    ``avg_doc_length`` is floored at 1 so an empty corpus cannot divide by
    zero; the denominator is floored at 1e-9 for the same reason.
    """

    denominator = tf + k1 * (1 - b + b * doc_length / max(1, avg_doc_length))
    return tf * (k1 + 1) / max(1e-9, denominator)
