"""
Query processing and the two retrieval models over an InvertedIndex.

- Boolean AND: every query term must be in the dictionary; the answer is the
  intersection of their posting lists, doc ids ascending.
- Ranked: TF-IDF query vector vs. precomputed document magnitudes, scored by
  cosine similarity, best first (ties broken by ascending doc id).

Query text always goes through index.normalizer, the same Normalizer the
index was built with. Neither model mutates the index.
"""

from __future__ import annotations

import enum
import logging
import math
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator

from .index_builder import InvertedIndex
from .posting import DictionaryEntry
from .tokenizer import Normalizer
from .weighting import cosine_similarity, idf, tf_idf, tf_weight

logger = logging.getLogger(__name__)


class QueryStatus(enum.Enum):
    OK = "ok"
    INDEX_EMPTY = "index_empty"
    NO_VALID_TERMS = "no_valid_terms"
    MISSING_TERM = "missing_term"
    NOT_RANKABLE = "not_rankable"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class SearchResult:
    doc_id: int
    score: float
    identifier: str

    def __str__(self) -> str:
        return f"Score: {self.score:.6f} - {self.identifier} (ID: {self.doc_id})"


class _Response(ABC):
    """List-like view over a query's results, plus the outcome status."""

    status: QueryStatus

    @abstractmethod
    def _items(self) -> list:
        raise NotImplementedError()

    def __iter__(self) -> Iterator:
        return iter(self._items())

    def __len__(self) -> int:
        return len(self._items())

    def __getitem__(self, item):
        return self._items()[item]

    def __bool__(self) -> bool:
        return bool(self._items())

    @property
    def ok(self) -> bool:
        return self.status is QueryStatus.OK


@dataclass
class RankedResponse(_Response):
    status: QueryStatus
    results: list[SearchResult] = field(default_factory=list)

    def _items(self) -> list:
        return self.results


@dataclass
class BooleanResponse(_Response):
    status: QueryStatus
    doc_ids: list[int] = field(default_factory=list)
    identifiers: list[str] = field(default_factory=list)
    missing_term: str | None = None

    def _items(self) -> list:
        return self.doc_ids


def process_query(query: str | None, normalizer: Normalizer) -> list[str]:
    """Normalize the query exactly as documents were; duplicates are kept."""
    return normalizer.normalize(query)


def intersect_sorted(doc_id_lists: list[list[int]]) -> list[int]:
    """
    Intersect ascending doc id lists (AND query).
    Starts from the shortest list and stops as soon as the running result is empty.
    """
    if not doc_id_lists:
        return []
    doc_id_lists = sorted(doc_id_lists, key=len)
    result = doc_id_lists[0]
    for other in doc_id_lists[1:]:
        i = j = 0
        merged: list[int] = []
        while i < len(result) and j < len(other):
            d1 = result[i]
            d2 = other[j]
            if d1 == d2:
                merged.append(d1)
                i += 1
                j += 1
            elif d1 < d2:
                i += 1
            else:
                j += 1
        result = merged
        if not result:
            break
    return list(result)


def boolean_and_search(index: InvertedIndex, query: str | None) -> BooleanResponse:
    if not index.is_ready:
        logger.warning("Index is empty; cannot run boolean query %r", query)
        return BooleanResponse(QueryStatus.INDEX_EMPTY)

    terms = process_query(query, index.normalizer)
    if not terms:
        return BooleanResponse(QueryStatus.NO_VALID_TERMS)

    entries: list[DictionaryEntry] = []
    for term in dict.fromkeys(terms):
        entry = index.get_entry(term)
        if entry is None or entry.doc_freq == 0:
            logger.debug("Term %r not found in index; no results possible", term)
            return BooleanResponse(QueryStatus.MISSING_TERM, missing_term=term)
        entries.append(entry)

    matches = intersect_sorted([entry.doc_ids() for entry in entries])
    if not matches:
        return BooleanResponse(QueryStatus.NO_MATCH)
    return BooleanResponse(
        QueryStatus.OK,
        doc_ids=matches,
        identifiers=[index.identifier(doc_id) for doc_id in matches],
    )


def ranked_search(index: InvertedIndex, query: str | None) -> RankedResponse:
    n_docs = index.n_docs
    if n_docs == 0:
        logger.warning("Index is empty; cannot run ranked query %r", query)
        return RankedResponse(QueryStatus.INDEX_EMPTY)

    terms = process_query(query, index.normalizer)
    if not terms:
        return RankedResponse(QueryStatus.NO_VALID_TERMS)

    # Query vector: keep only terms that are indexed and informative.
    query_vector: list[tuple[float, DictionaryEntry]] = []
    query_magnitude_sq = 0.0
    for term, query_tf in Counter(terms).items():
        entry = index.get_entry(term)
        term_idf = idf(n_docs, entry.doc_freq) if entry is not None else 0.0
        weight = tf_weight(query_tf) * term_idf
        if weight > 0.0:
            query_vector.append((weight, entry))
            query_magnitude_sq += weight * weight

    query_magnitude = math.sqrt(query_magnitude_sq)
    if query_magnitude == 0.0:
        logger.debug("Query %r has no indexed, informative terms", query)
        return RankedResponse(QueryStatus.NOT_RANKABLE)

    dot_products: dict[int, float] = {}
    for query_weight, entry in query_vector:
        for posting in entry:
            doc_weight = tf_idf(posting.tf, n_docs, entry.doc_freq)
            dot_products[posting.doc_id] = dot_products.get(posting.doc_id, 0.0) + query_weight * doc_weight

    results: list[SearchResult] = []
    for doc_id, dot in dot_products.items():
        if dot == 0.0:
            continue
        doc_magnitude = index.document_magnitude(doc_id)
        if doc_magnitude == 0.0:
            continue
        score = cosine_similarity(dot, query_magnitude, doc_magnitude)
        if score > 0.0:
            results.append(SearchResult(doc_id, score, index.identifier(doc_id)))

    if not results:
        return RankedResponse(QueryStatus.NO_MATCH)
    results.sort(key=lambda r: (-r.score, r.doc_id))
    return RankedResponse(QueryStatus.OK, results)
