"""
Build the in-memory inverted index for a document folder and print analytics.

Usage:
    python build_index.py data/ [--stemmer porter] [--limit 50]

Output:
  - Analytics table (indexed documents, unique terms, skipped inputs)
  - Dictionary sample: term, document frequency, corpus term frequency, postings
"""

import argparse
import logging
import sys
from pathlib import Path

from minisearch.corpus import load_documents
from minisearch.index_builder import build_index
from minisearch.tokenizer import Normalizer, get_stemmer


def print_dictionary(index, limit: int) -> None:
    total = index.vocabulary_size()
    print(f"--- Dictionary sample ({total} total terms) ---")
    for term, df, tf, postings in index.dictionary_sample(limit):
        print(f"Term: '{term:<15}' DF: {df:<4d} CorpusTF: {tf:<5d} Postings: {postings}")
    if total > limit:
        print(f"... (limiting printout to first {limit} terms alphabetically)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the inverted index and print analytics")
    parser.add_argument("data_dir", type=Path, help="Folder of .html/.json/.txt documents")
    parser.add_argument(
        "--stemmer",
        choices=("none", "porter"),
        default="none",
        help="Stemming strategy (default: none)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=50,
        help="Number of dictionary terms to print (default: 50)",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.data_dir.exists():
        print(f"No data folder found at {args.data_dir}.")
        sys.exit(1)

    corpus = load_documents(args.data_dir)
    index = build_index(
        corpus.texts,
        normalizer=Normalizer(stemmer=get_stemmer(args.stemmer)),
        titles=corpus.titles,
    )
    if not index.is_ready:
        print("No indexable documents found in the data folder.")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {index.document_count()} |")
    print(f"| Number of unique terms      | {index.vocabulary_size()} |")
    print(f"| Skipped (blank) documents   | {len(index.skipped)} |")
    print(f"| Unreadable files            | {len(corpus.failed)} |")
    print()
    print_dictionary(index, args.limit)
    print()


if __name__ == "__main__":
    main()
