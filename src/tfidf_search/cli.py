"""Command line driver for the in-memory TF-IDF engine.

Usage:
    # Index the built-in sample corpus and run the sample queries
    python -m tfidf_search

    # Index your own documents
    python -m tfidf_search --documents-file corpus.txt --query "lazy dog" --json
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys
import textwrap
from typing import TextIO

import orjson

from tfidf_search.config import Settings
from tfidf_search.domain.search import SearchResponse
from tfidf_search.observability.logging import configure_logging
from tfidf_search.search.index_engine import IndexEngine


logger = logging.getLogger(__name__)

SAMPLE_DOCUMENTS: tuple[str, ...] = (
    "The brown fox jumped over the brown dog",
    "The lazy brown dog sat in the corner",
    "The red fox bit the lazy dog",
)

SAMPLE_QUERIES: tuple[str, ...] = ("brown", "fox", "lazy dog")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfidf-search",
        description="Index short text documents in memory and rank them against queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              python -m tfidf_search
              python -m tfidf_search --document "red fox" --document "lazy dog" --query fox
              python -m tfidf_search --documents-file corpus.txt --query "lazy dog" --limit 5 --json
            """
        ).strip(),
    )
    parser.add_argument(
        "--document",
        dest="documents",
        action="append",
        metavar="TEXT",
        help="Document text to index (repeatable; default: built-in sample corpus)",
    )
    parser.add_argument(
        "--documents-file",
        type=Path,
        help="File with one document per line, indexed after any --document values",
    )
    parser.add_argument(
        "--query",
        dest="queries",
        action="append",
        metavar="TEXT",
        help="Query to run (repeatable; default: built-in sample queries)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum results per query (default: TFIDF_SEARCH_DEFAULT_LIMIT or unlimited)",
    )
    parser.add_argument("--json", action="store_true", help="Emit one JSON SearchResponse per query")
    parser.add_argument(
        "--dedupe-query-terms",
        action="store_true",
        default=None,
        help="Score repeated query terms once",
    )
    return parser


def _collect_documents(args: argparse.Namespace, parser: argparse.ArgumentParser) -> list[str]:
    documents = list(args.documents or [])
    if args.documents_file is not None:
        try:
            documents.extend(args.documents_file.read_text(encoding="utf-8").splitlines())
        except OSError as exc:
            parser.error(f"cannot read {args.documents_file}: {exc}")
    if args.documents is None and args.documents_file is None:
        documents = list(SAMPLE_DOCUMENTS)
    return documents


def _print_text(response: SearchResponse, out: TextIO, *, first: bool) -> None:
    if not first:
        out.write("\n")
    out.write(f"Search results for '{response.query}':\n")
    for hit in response.results:
        out.write(f"Document {hit.doc_id}: {hit.content}\n")


def run(argv: Sequence[str] | None = None, *, settings: Settings | None = None, out: TextIO | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 1:
        parser.error("--limit must be at least 1")

    settings = settings or Settings()
    out = out or sys.stdout
    configure_logging(settings.log_level, json_output=settings.log_json)

    engine = IndexEngine.from_settings(settings, name="cli")
    if args.dedupe_query_terms:
        engine.dedupe_query_terms = True

    documents = _collect_documents(args, parser)
    for content in documents:
        engine.add_document(content)
    logger.info("Indexed %d documents (%d distinct terms)", len(engine), len(engine.vocabulary))

    limit = args.limit if args.limit is not None else settings.default_limit
    queries = args.queries if args.queries is not None else list(SAMPLE_QUERIES)
    for position, query in enumerate(queries):
        response = SearchResponse.from_ranked(query, engine.rank(query, limit=limit))
        if args.json:
            out.write(orjson.dumps(response.model_dump()).decode("utf-8") + "\n")
        else:
            _print_text(response, out, first=position == 0)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
