"""
SearchEngine: owns the current InvertedIndex and swaps in rebuilt ones.

An index is never modified once queries can see it. Adding documents
rebuilds a complete new index from the retained source texts (N, document
frequencies and magnitudes all depend on each other) and then publishes it
with a single reference assignment. Readers take no lock.
"""

import logging
import threading
from typing import Mapping

from .index_builder import InvertedIndex, build_index
from .search import BooleanResponse, RankedResponse, boolean_and_search, ranked_search
from .tokenizer import Normalizer

logger = logging.getLogger(__name__)


class SearchEngine:
    def __init__(self, normalizer: Normalizer | None = None) -> None:
        self.normalizer = normalizer or Normalizer()
        self._index = InvertedIndex.empty(self.normalizer)
        self._sources: dict[str, str | None] = {}
        self._titles: dict[str, str] = {}
        self._write_lock = threading.Lock()

    @property
    def index(self) -> InvertedIndex:
        return self._index

    def build(
        self,
        documents: Mapping[str, str | None] | None,
        titles: Mapping[str, str] | None = None,
    ) -> InvertedIndex:
        """Replace the whole corpus and publish a freshly built index."""
        with self._write_lock:
            sources = dict(documents or {})
            merged_titles = dict(titles or {})
            return self._publish(sources, merged_titles)

    def add_documents(
        self,
        documents: Mapping[str, str | None],
        titles: Mapping[str, str] | None = None,
    ) -> InvertedIndex:
        """
        Add (or replace, by identifier) documents, then rebuild and publish.
        Known identifiers keep their position in the build order; new ones
        are appended, so previously indexed documents keep their doc ids
        unless a replacement changes which documents get skipped.
        """
        with self._write_lock:
            sources = dict(self._sources)
            sources.update(documents)
            merged_titles = dict(self._titles)
            merged_titles.update(titles or {})
            return self._publish(sources, merged_titles)

    def _publish(self, sources: dict[str, str | None], titles: dict[str, str]) -> InvertedIndex:
        index = build_index(sources, normalizer=self.normalizer, titles=titles)
        self._sources = sources
        self._titles = titles
        self._index = index
        logger.info(
            "Published index with %d documents and %d terms",
            index.document_count(), index.vocabulary_size(),
        )
        return index

    def ranked_search(self, query: str | None) -> RankedResponse:
        return ranked_search(self._index, query)

    def boolean_and_search(self, query: str | None) -> BooleanResponse:
        return boolean_and_search(self._index, query)

    def document_count(self) -> int:
        return self._index.document_count()

    def vocabulary_size(self) -> int:
        return self._index.vocabulary_size()

    def document_vector(self, doc_id: int) -> dict[str, float]:
        return self._index.document_vector(doc_id)

    def document_magnitude(self, doc_id: int) -> float:
        return self._index.document_magnitude(doc_id)
