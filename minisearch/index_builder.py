"""
Index builder: constructs the in-memory inverted index from a document map.

One synchronous bulk pass assigns integer doc ids, fills the dictionary and
the document registry, then a second pass over the dictionary precomputes
every document's TF-IDF vector magnitude. The resulting InvertedIndex is
treated as read-only; to change the corpus, build a new one.
"""

import logging
import math
from collections import Counter
from typing import Iterator, Mapping

from .posting import DictionaryEntry, Document
from .tokenizer import Normalizer
from .weighting import idf, tf_idf

logger = logging.getLogger(__name__)


class InvertedIndex:
    """
    Inverted index: term -> DictionaryEntry, plus the document registry and
    cached document magnitudes. Built by build_index(); do not mutate.
    """

    def __init__(
        self,
        normalizer: Normalizer,
        dictionary: dict[str, DictionaryEntry],
        documents: dict[int, Document],
        magnitudes: dict[int, float],
        skipped: list[str] | None = None,
    ) -> None:
        self.normalizer = normalizer
        self._dictionary = dictionary
        self._documents = documents
        self._magnitudes = magnitudes
        self._doc_id_by_identifier = {d.identifier: d.doc_id for d in documents.values()}
        self.skipped: tuple[str, ...] = tuple(skipped or ())

    @classmethod
    def empty(cls, normalizer: Normalizer | None = None) -> "InvertedIndex":
        return cls(normalizer or Normalizer(), {}, {}, {})

    # -- corpus statistics -------------------------------------------------

    @property
    def n_docs(self) -> int:
        return len(self._documents)

    @property
    def is_ready(self) -> bool:
        """False for an index with no documents (queries cannot succeed)."""
        return bool(self._documents)

    def document_count(self) -> int:
        return len(self._documents)

    def vocabulary_size(self) -> int:
        return len(self._dictionary)

    # -- dictionary --------------------------------------------------------

    def get_entry(self, term: str) -> DictionaryEntry | None:
        return self._dictionary.get(term)

    def terms(self) -> Iterator[str]:
        return iter(self._dictionary)

    def __contains__(self, term: str) -> bool:
        return term in self._dictionary

    def __len__(self) -> int:
        return len(self._dictionary)

    # -- document registry -------------------------------------------------

    def document(self, doc_id: int) -> Document:
        try:
            return self._documents[doc_id]
        except KeyError:
            raise KeyError(f"Unknown document id: {doc_id}") from None

    def documents(self) -> Iterator[Document]:
        return iter(self._documents.values())

    def identifier(self, doc_id: int) -> str:
        doc = self._documents.get(doc_id)
        return doc.identifier if doc is not None else f"<doc {doc_id}>"

    def doc_id_for(self, identifier: str) -> int | None:
        return self._doc_id_by_identifier.get(identifier)

    # -- diagnostics -------------------------------------------------------

    def document_magnitude(self, doc_id: int) -> float:
        return self._magnitudes.get(doc_id, 0.0)

    def document_vector(self, doc_id: int) -> dict[str, float]:
        """Non-zero TF-IDF components of one document, keyed by term."""
        if doc_id not in self._documents:
            return {}
        n_docs = self.n_docs
        vector: dict[str, float] = {}
        for term, entry in self._dictionary.items():
            term_idf = idf(n_docs, entry.doc_freq)
            if term_idf == 0.0:
                continue
            for posting in entry:
                if posting.doc_id == doc_id:
                    vector[term] = tf_idf(posting.tf, n_docs, entry.doc_freq)
                    break
                if posting.doc_id > doc_id:
                    break
        return vector

    def dictionary_sample(self, limit: int = 50) -> list[tuple[str, int, int, int]]:
        """Alphabetically first `limit` rows of (term, df, aggregate tf, postings)."""
        rows = []
        for term in sorted(self._dictionary)[:limit]:
            entry = self._dictionary[term]
            rows.append((term, entry.doc_freq, entry.term_freq, len(entry)))
        return rows

    def __repr__(self) -> str:
        return (
            f"InvertedIndex(documents={self.document_count()}, "
            f"terms={self.vocabulary_size()}, normalizer={self.normalizer!r})"
        )


def _compute_magnitudes(dictionary: dict[str, DictionaryEntry], n_docs: int) -> dict[int, float]:
    """
    Second pass: sqrt of the summed squared TF-IDF weights per document.
    Terms with idf 0 contribute nothing; zero magnitudes are not stored.
    """
    sum_of_squares: dict[int, float] = {}
    for entry in dictionary.values():
        term_idf = idf(n_docs, entry.doc_freq)
        if term_idf == 0.0:
            continue
        for posting in entry:
            weight = tf_idf(posting.tf, n_docs, entry.doc_freq)
            sum_of_squares[posting.doc_id] = sum_of_squares.get(posting.doc_id, 0.0) + weight * weight
    return {doc_id: math.sqrt(total) for doc_id, total in sum_of_squares.items() if total > 0.0}


def build_index(
    documents: Mapping[str, str | None] | None,
    *,
    normalizer: Normalizer | None = None,
    titles: Mapping[str, str] | None = None,
    sort_by_identifier: bool = False,
) -> InvertedIndex:
    """
    Build an InvertedIndex from a mapping of source identifier -> raw text.
    - Doc ids are 0, 1, 2, ... in the mapping's iteration order
      (sorted by identifier when sort_by_identifier is set).
    - Blank (None, empty or whitespace-only) documents are skipped with a
      warning and do not count towards N. A document whose text reduces to
      no terms is still registered, with token_count 0 and no postings.
    - The index keeps `normalizer` so queries are processed identically.
    """
    normalizer = normalizer or Normalizer()
    if not documents:
        logger.warning("No documents provided; built an empty index")
        return InvertedIndex.empty(normalizer)

    titles = titles or {}
    identifiers = sorted(documents) if sort_by_identifier else list(documents)

    dictionary: dict[str, DictionaryEntry] = {}
    registry: dict[int, Document] = {}
    skipped: list[str] = []
    next_doc_id = 0

    for identifier in identifiers:
        content = documents[identifier]
        if content is None or not content.strip():
            logger.warning("Skipping document with empty content: %s", identifier)
            skipped.append(identifier)
            continue

        terms = normalizer.normalize(content)
        if not terms:
            logger.debug("Document has no indexable terms: %s", identifier)

        doc_id = next_doc_id
        next_doc_id += 1
        registry[doc_id] = Document(
            doc_id=doc_id,
            identifier=identifier,
            title=titles.get(identifier, ""),
            token_count=len(terms),
        )

        for term, freq in Counter(terms).items():
            entry = dictionary.get(term)
            if entry is None:
                entry = dictionary[term] = DictionaryEntry()
            entry.add_posting(doc_id, freq)

    logger.info(
        "Initial index build complete: %d documents, %d terms, %d skipped",
        len(registry), len(dictionary), len(skipped),
    )

    magnitudes = _compute_magnitudes(dictionary, len(registry))
    logger.debug("Calculated non-zero magnitudes for %d documents", len(magnitudes))

    return InvertedIndex(normalizer, dictionary, registry, magnitudes, skipped)
