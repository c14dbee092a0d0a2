"""Statistical helpers for classic TF-IDF scoring.

The functions here stay independent of the index so they can be unit tested
on plain numbers. Degenerate inputs follow IEEE-754 arithmetic rather than
raising: a document with no terms has an undefined (NaN) term frequency and
an empty corpus has an IDF of negative infinity.
"""

from __future__ import annotations

import math


def term_frequency(count: int, total_terms: int) -> float:
    """Return ``count / total_terms`` with IEEE-754 division semantics."""

    if total_terms == 0:
        if count == 0:
            return math.nan
        return math.copysign(math.inf, count)
    return count / total_terms


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ``ln(total_docs / (doc_freq + 1))``.

    The value is negative once a term appears in at least half the corpus,
    which is expected for this smoothing.
    """

    ratio = total_docs / (doc_freq + 1)
    if ratio == 0:
        return -math.inf
    return math.log(ratio)


def tf_idf(count: int, total_terms: int, doc_freq: int, total_docs: int) -> float:
    """Compute the TF-IDF weight of a term in one document."""

    return term_frequency(count, total_terms) * calculate_idf(doc_freq, total_docs)
