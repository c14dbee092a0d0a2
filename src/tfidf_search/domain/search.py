"""Domain models for search results.

Value objects are immutable (frozen=True) and carry no engine references, so
they can be serialized and handed to callers safely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field


if TYPE_CHECKING:
    from tfidf_search.search.models import RankedDocument


class SearchHit(BaseModel):
    """Value object for a single ranked document."""

    model_config = ConfigDict(frozen=True)

    doc_id: int = Field(ge=0)
    content: str
    score: float

    @classmethod
    def from_ranked(cls, ranked: RankedDocument) -> SearchHit:
        return cls(doc_id=ranked.doc_id, content=ranked.document.content, score=ranked.score)


class SearchResponse(BaseModel):
    """Ranked results for one query."""

    model_config = ConfigDict(frozen=True)

    query: str
    results: list[SearchHit] = Field(default_factory=list)
    total_count: int = 0

    @classmethod
    def from_ranked(cls, query: str, ranked: list[RankedDocument]) -> SearchResponse:
        hits = [SearchHit.from_ranked(item) for item in ranked]
        return cls(query=query, results=hits, total_count=len(hits))
