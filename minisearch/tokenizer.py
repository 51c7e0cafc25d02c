"""
Text normalization shared by indexing and querying.

Both sides of the engine must turn text into terms the same way, otherwise the
query vocabulary drifts away from the index vocabulary and recall is silently
lost. The InvertedIndex keeps the Normalizer it was built with for that reason.

Pipeline: lowercase, split on non-word runs, drop numbers, short tokens and
stop words, then stem (identity by default, Porter via nltk on request).
"""

import re
from abc import ABC, abstractmethod
from typing import Iterable

from nltk.stem import PorterStemmer as _NltkPorterStemmer

# Closed list of articles, prepositions and conjunctions.
STOP_WORDS = frozenset(
    {"the", "to", "be", "for", "from", "in", "a", "into", "by", "or", "and", "that"}
)

MIN_TOKEN_LENGTH = 2

_SPLIT_RE = re.compile(r"\W+")
_DIGITS_RE = re.compile(r"\d+")


class Stemmer(ABC):
    """Strategy applied to every surviving token. May return "" to drop it."""

    name = "abstract"

    @abstractmethod
    def stem(self, token: str) -> str:
        raise NotImplementedError()


class IdentityStemmer(Stemmer):
    name = "none"

    def stem(self, token: str) -> str:
        return token


class PorterStemmer(Stemmer):
    """Porter stemming backed by nltk."""

    name = "porter"

    def __init__(self) -> None:
        self._stemmer = _NltkPorterStemmer()

    def stem(self, token: str) -> str:
        return self._stemmer.stem(token)


_STEMMERS = {
    "none": IdentityStemmer,
    "identity": IdentityStemmer,
    "porter": PorterStemmer,
}


def get_stemmer(name: str) -> Stemmer:
    """Return a stemmer instance by name ("none", "identity" or "porter")."""
    try:
        factory = _STEMMERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown stemmer {name!r}; expected one of {sorted(_STEMMERS)}"
        ) from None
    return factory()


class Normalizer:
    """
    Turns raw text into an ordered list of terms.

    The result is a fresh list on every call, so callers may iterate it as
    often as they like. Duplicates are kept: in-document and in-query term
    frequencies are counted from them.
    """

    def __init__(
        self,
        stop_words: Iterable[str] | None = None,
        min_length: int = MIN_TOKEN_LENGTH,
        stemmer: Stemmer | None = None,
    ) -> None:
        if min_length < 1:
            raise ValueError(f"min_length must be >= 1, got {min_length}")
        self.stop_words = frozenset(STOP_WORDS if stop_words is None else stop_words)
        self.min_length = min_length
        self.stemmer = stemmer if stemmer is not None else IdentityStemmer()

    def __repr__(self) -> str:
        return (
            f"Normalizer(min_length={self.min_length}, "
            f"stop_words={len(self.stop_words)}, stemmer={self.stemmer.name!r})"
        )

    def normalize(self, text: str | None) -> list[str]:
        if not text or not text.strip():
            return []
        terms: list[str] = []
        for token in _SPLIT_RE.split(text.lower()):
            if not token:
                continue
            if _DIGITS_RE.fullmatch(token):
                continue
            if len(token) < self.min_length:
                continue
            if token in self.stop_words:
                continue
            stemmed = self.stemmer.stem(token)
            if stemmed:
                terms.append(stemmed)
        return terms

    __call__ = normalize


_DEFAULT = Normalizer()


def normalize(text: str | None) -> list[str]:
    """Normalize with the default configuration (identity stemmer)."""
    return _DEFAULT.normalize(text)
