"""Search data models."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Document:
    """An indexed document and its term frequency table.

    ``term_frequency`` maps each normalized term to its raw occurrence count
    in ``content``. Documents are immutable once built.
    """

    doc_id: int
    content: str
    term_frequency: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.term_frequency, MappingProxyType):
            object.__setattr__(self, "term_frequency", MappingProxyType(dict(self.term_frequency)))

    @classmethod
    def from_terms(cls, doc_id: int, content: str, terms: Iterable[str]) -> Document:
        """Build a document, counting occurrences of ``terms``."""
        return cls(doc_id=doc_id, content=content, term_frequency=Counter(terms))

    def term_count(self, term: str) -> int:
        return self.term_frequency.get(term, 0)

    @property
    def total_terms(self) -> int:
        return sum(self.term_frequency.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "doc_id": self.doc_id,
            "content": self.content,
            "term_frequency": dict(self.term_frequency),
        }


@dataclass(frozen=True)
class Posting:
    """A posting references one document that contains the term."""

    document: Document

    @property
    def doc_id(self) -> int:
        return self.document.doc_id


@dataclass(frozen=True)
class RankedDocument:
    """Represents a scored document produced by the index engine."""

    document: Document
    score: float

    @property
    def doc_id(self) -> int:
        return self.document.doc_id
