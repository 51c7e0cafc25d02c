"""
Command-line front end for the in-memory search engine.

Loads a folder of documents, builds the index once, then answers queries
either one-shot (--query) or in an interactive loop.

Usage (from repo root):
    python -m minisearch.search_cli data/ --mode ranked --top 10
    python -m minisearch.search_cli data/ --mode boolean --query "ancient egypt"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from .corpus import load_documents
from .engine import SearchEngine
from .search import BooleanResponse, QueryStatus, RankedResponse
from .tokenizer import Normalizer, get_stemmer

DEFAULT_TOP_K = 10

_STATUS_MESSAGES = {
    QueryStatus.INDEX_EMPTY: "Index is empty. Nothing to search.",
    QueryStatus.NO_VALID_TERMS: "No valid terms in query.",
    QueryStatus.NOT_RANKABLE: "Query terms not found in index or carry no weight. Cannot rank.",
    QueryStatus.NO_MATCH: "No documents matched the query.",
}


def print_ranked(response: RankedResponse, top_k: int = DEFAULT_TOP_K) -> None:
    if not response.ok:
        print(_STATUS_MESSAGES.get(response.status, "No results."))
        return
    print(f"Top {min(top_k, len(response))} of {len(response)} results:")
    for rank, result in enumerate(response.results[:top_k], start=1):
        print(f"{rank:2d}. score={result.score:.4f}  {result.identifier}")


def print_boolean(response: BooleanResponse) -> None:
    if response.status is QueryStatus.MISSING_TERM:
        print(f"Term '{response.missing_term}' not found in index. No results possible.")
        return
    if not response.ok:
        print(_STATUS_MESSAGES.get(response.status, "No results."))
        return
    print(f"{len(response)} documents contain all terms:")
    for identifier in response.identifiers:
        print(f"  - {identifier}")


def run_query(engine: SearchEngine, query: str, mode: str, top_k: int) -> None:
    if mode == "boolean":
        print_boolean(engine.boolean_and_search(query))
    else:
        print_ranked(engine.ranked_search(query), top_k=top_k)


def run_search_loop(engine: SearchEngine, mode: str, top_k: int = DEFAULT_TOP_K) -> None:
    """Interactive loop. Empty line, 'exit', EOF or Ctrl+C ends it."""
    print(f"Enter queries ({mode} mode). Empty line or 'exit' to quit.")
    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query or raw_query.lower() == "exit":
            break
        run_query(engine, raw_query, mode, top_k)


def build_engine(data_dir: Path, stemmer: str = "none") -> SearchEngine:
    corpus = load_documents(data_dir)
    engine = SearchEngine(Normalizer(stemmer=get_stemmer(stemmer)))
    engine.build(corpus.texts, titles=corpus.titles)
    return engine


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-memory TF-IDF / boolean search.")
    parser.add_argument("data_dir", type=Path, help="Folder of .html/.json/.txt documents.")
    parser.add_argument(
        "--mode",
        choices=("ranked", "boolean"),
        default="ranked",
        help="Ranked cosine retrieval or boolean AND matching.",
    )
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_K, help="Number of ranked results to show.")
    parser.add_argument(
        "--stemmer",
        choices=("none", "porter"),
        default="none",
        help="Stemming applied to both documents and queries.",
    )
    parser.add_argument("--query", help="Run a single query and exit.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.top < 1:
        parser.error(f"--top must be at least 1, got {args.top}")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = build_engine(args.data_dir, stemmer=args.stemmer)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    print(f"Indexed {engine.document_count()} documents, {engine.vocabulary_size()} terms.")

    if args.query is not None:
        run_query(engine, args.query, args.mode, args.top)
    else:
        run_search_loop(engine, args.mode, top_k=args.top)
    return 0


if __name__ == "__main__":
    sys.exit(main())
