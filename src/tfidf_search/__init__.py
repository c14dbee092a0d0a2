"""In-memory full-text search with TF-IDF ranking."""

from tfidf_search.search.analyzers import tokenize
from tfidf_search.search.index_engine import IndexEngine
from tfidf_search.search.models import Document, Posting, RankedDocument


__all__ = ["Document", "IndexEngine", "Posting", "RankedDocument", "tokenize"]
