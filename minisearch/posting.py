"""
Posting list and document registry data structures.

A posting records one term's occurrence in one document: the integer doc_id
assigned at build time and the in-document term frequency.
A DictionaryEntry owns every posting of a single term, together with the
term's document frequency and aggregate (corpus-wide) term frequency.
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Posting:
    """
    Represents a term's occurrence in a document.
    - doc_id: integer surrogate key of the document (>= 0)
    - tf: in-document term frequency (>= 1)
    """

    doc_id: int
    tf: int

    def __post_init__(self) -> None:
        if self.doc_id < 0:
            raise ValueError(f"doc_id must be non-negative, got {self.doc_id}")
        if self.tf < 1:
            raise ValueError(f"tf must be >= 1, got {self.tf} (doc_id={self.doc_id})")

    def __repr__(self) -> str:
        return f"Posting(doc_id={self.doc_id!r}, tf={self.tf})"


class DictionaryEntry:
    """
    Per-term statistics plus the term's posting list.

    Postings are appended in strictly increasing doc_id order, which keeps
    doc ids unique and the list sorted for merge-style intersection.
    Invariants: doc_freq == len(postings), term_freq == sum of posting tf.
    """

    __slots__ = ("doc_freq", "term_freq", "_postings")

    def __init__(self) -> None:
        self.doc_freq = 0
        self.term_freq = 0
        self._postings: list[Posting] = []

    def add_posting(self, doc_id: int, tf: int) -> Posting:
        """Append a posting for doc_id and update df / aggregate tf."""
        if self._postings and self._postings[-1].doc_id >= doc_id:
            raise ValueError(
                f"Posting for doc_id={doc_id} arrived after doc_id="
                f"{self._postings[-1].doc_id}; each document must be indexed exactly once"
            )
        posting = Posting(doc_id=doc_id, tf=tf)
        self._postings.append(posting)
        self.doc_freq += 1
        self.term_freq += tf
        return posting

    @property
    def postings(self) -> list[Posting]:
        return self._postings

    def doc_ids(self) -> list[int]:
        return [p.doc_id for p in self._postings]

    def __iter__(self) -> Iterator[Posting]:
        return iter(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def __repr__(self) -> str:
        return (
            f"DictionaryEntry(doc_freq={self.doc_freq}, term_freq={self.term_freq}, "
            f"postings={len(self._postings)})"
        )


@dataclass(frozen=True)
class Document:
    """
    Registry record of one indexed document.
    - doc_id: sequential id assigned at build time (0-based)
    - identifier: external source identifier, e.g. the URL
    - title: display title ("" when unknown)
    - token_count: number of terms that survived normalization
    """

    doc_id: int
    identifier: str
    title: str = ""
    token_count: int = 0

    def __post_init__(self) -> None:
        if self.doc_id < 0:
            raise ValueError(f"doc_id must be non-negative, got {self.doc_id}")
        if not self.identifier or not self.identifier.strip():
            raise ValueError(f"Document identifier cannot be empty (doc_id={self.doc_id})")
        if self.token_count < 0:
            raise ValueError(
                f"token_count must be non-negative, got {self.token_count} (doc_id={self.doc_id})"
            )
        if self.title is None:
            object.__setattr__(self, "title", "")
