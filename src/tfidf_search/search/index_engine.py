"""In-memory document store, inverted index, and TF-IDF ranking.

``IndexEngine`` is append-only: documents receive dense IDs in insertion
order, and every distinct term of a document gets exactly one posting that
references the stored ``Document``. Queries score each query term occurrence
against the posting list of that term and rank by the accumulated score.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping, Sequence
import logging
import threading
from types import MappingProxyType

from tfidf_search.config import Settings
from tfidf_search.observability.context import operation_span
from tfidf_search.observability.metrics import (
    DOCUMENTS_INDEXED,
    INDEX_TERMS,
    SEARCH_COUNT,
    SEARCH_LATENCY,
    track_latency,
)
from tfidf_search.search import stats
from tfidf_search.search.analyzers import Analyzer, get_analyzer
from tfidf_search.search.models import Document, Posting, RankedDocument


logger = logging.getLogger(__name__)


class IndexEngine:
    """Own the document store and inverted index for one corpus.

    All public operations take the same re-entrant lock, so writers are
    serialized against each other and against readers.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        analyzer: Analyzer | str | None = None,
        dedupe_query_terms: bool = False,
        metrics_enabled: bool = True,
    ) -> None:
        self.name = name
        self.analyzer = analyzer if callable(analyzer) else get_analyzer(analyzer)
        self.dedupe_query_terms = dedupe_query_terms
        self.metrics_enabled = metrics_enabled
        self._documents: list[Document] = []
        self._index: dict[str, list[Posting]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings, *, name: str = "default") -> IndexEngine:
        return cls(
            name=name,
            analyzer=settings.analyzer,
            dedupe_query_terms=settings.dedupe_query_terms,
            metrics_enabled=settings.metrics_enabled,
        )

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, term: object) -> bool:
        return term in self._index

    @property
    def documents(self) -> Sequence[Document]:
        """Snapshot of stored documents in ID order."""
        with self._lock:
            return tuple(self._documents)

    @property
    def vocabulary(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._index)

    def terms(self, text: str) -> list[str]:
        """Analyze ``text`` with this engine's analyzer."""
        return [token.text for token in self.analyzer(text)]

    def add_document(self, content: str) -> None:
        """Store ``content`` as the next document and index its distinct terms."""

        terms = self.terms(content)
        with self._lock:
            doc = Document.from_terms(len(self._documents), content, terms)
            self._documents.append(doc)

            posting = Posting(doc)
            # distinct terms in first-occurrence order
            for term in dict.fromkeys(terms):
                self._index.setdefault(term, []).append(posting)
            vocabulary_size = len(self._index)

        logger.debug(
            "Indexed document %d (%d terms, %d distinct)",
            doc.doc_id,
            doc.total_terms,
            len(doc.term_frequency),
            extra={"index": self.name},
        )
        if self.metrics_enabled:
            DOCUMENTS_INDEXED.labels(index=self.name).inc()
            INDEX_TERMS.labels(index=self.name).set(vocabulary_size)

    def get_document(self, doc_id: int) -> Document:
        """Return the stored document with ``doc_id``; raise KeyError if unknown."""
        with self._lock:
            if 0 <= doc_id < len(self._documents):
                return self._documents[doc_id]
        raise KeyError(doc_id)

    def postings(self, term: str) -> tuple[Posting, ...]:
        """Return the posting list for ``term`` in insertion order."""
        with self._lock:
            return tuple(self._index.get(term, ()))

    def document_frequency(self, term: str) -> int:
        with self._lock:
            return len(self._index.get(term, ()))

    def tf_idf(self, term: str, doc: Document) -> float:
        """Score ``term`` in ``doc`` against the current corpus."""
        with self._lock:
            return stats.tf_idf(
                doc.term_count(term),
                doc.total_terms,
                len(self._index.get(term, ())),
                len(self._documents),
            )

    def score(self, query: str) -> Mapping[int, float]:
        """Return accumulated scores keyed by document ID for documents matching ``query``.

        Each query term occurrence contributes once unless
        ``dedupe_query_terms`` is set. Terms absent from the index are ignored.
        """

        query_terms = self.terms(query)
        if self.dedupe_query_terms:
            query_terms = list(dict.fromkeys(query_terms))

        doc_scores: dict[int, float] = defaultdict(float)
        with self._lock:
            total_docs = len(self._documents)
            for term in query_terms:
                postings = self._index.get(term)
                if not postings:
                    continue
                doc_freq = len(postings)
                for posting in postings:
                    doc = posting.document
                    doc_scores[doc.doc_id] += stats.tf_idf(doc.term_count(term), doc.total_terms, doc_freq, total_docs)
        return MappingProxyType(dict(doc_scores))

    def rank(self, query: str, limit: int | None = None) -> list[RankedDocument]:
        """Return matching documents with scores, best first.

        Equal scores are ordered by ascending document ID.
        """

        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        with operation_span("search", index=self.name), self._lock:
            if self.metrics_enabled:
                with track_latency(SEARCH_LATENCY, index=self.name):
                    ranked = self._rank_locked(query)
            else:
                ranked = self._rank_locked(query)

        if limit is not None:
            ranked = ranked[:limit]

        logger.debug("Query %r matched %d documents", query, len(ranked), extra={"index": self.name})
        if self.metrics_enabled:
            SEARCH_COUNT.labels(index=self.name, outcome="hit" if ranked else "miss").inc()
        return ranked

    def _rank_locked(self, query: str) -> list[RankedDocument]:
        scores = self.score(query)
        ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [RankedDocument(document=self._documents[doc_id], score=score) for doc_id, score in ordered]

    def search(self, query: str) -> list[Document]:
        """Return documents matching ``query``, most relevant first."""
        return [ranked.document for ranked in self.rank(query)]

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)
