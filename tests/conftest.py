"""Shared test fixtures and configuration."""

import os

import pytest

from tfidf_search.search.index_engine import IndexEngine


# Complete test environment that overrides every config value
TEST_ENV = {
    "TFIDF_SEARCH_LOG_LEVEL": "info",
    "TFIDF_SEARCH_LOG_JSON": "false",
    "TFIDF_SEARCH_ANALYZER": "simple",
    "TFIDF_SEARCH_DEDUPE_QUERY_TERMS": "false",
    "TFIDF_SEARCH_METRICS_ENABLED": "true",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop stray TFIDF_SEARCH_* variables and set test defaults."""
    for key in list(os.environ):
        if key.upper().startswith("TFIDF_SEARCH_"):
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


SAMPLE_DOCUMENTS = (
    "The brown fox jumped over the brown dog",
    "The lazy brown dog sat in the corner",
    "The red fox bit the lazy dog",
)


@pytest.fixture
def sample_engine():
    """Engine populated with the three-document sample corpus (IDs 0, 1, 2)."""
    engine = IndexEngine(name="test-sample", metrics_enabled=False)
    for content in SAMPLE_DOCUMENTS:
        engine.add_document(content)
    return engine
