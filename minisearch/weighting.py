"""
TF-IDF weighting and cosine helpers.

tf weight:  1 + log10(tf)      (0 when tf <= 0)
idf:        log10(N / df)      (0 when N <= 0, df <= 0 or df > N)
A term present in every document has idf 0 and carries no weight.
"""

import math
from typing import Mapping


def tf_weight(tf: int) -> float:
    if tf <= 0:
        return 0.0
    return 1.0 + math.log10(tf)


def idf(n_docs: int, df: int) -> float:
    if n_docs <= 0 or df <= 0 or df > n_docs:
        return 0.0
    return math.log10(n_docs / df)


def tf_idf(tf: int, n_docs: int, df: int) -> float:
    return tf_weight(tf) * idf(n_docs, df)


def cosine_similarity(dot: float, magnitude_a: float, magnitude_b: float) -> float:
    """
    Cosine from a precomputed dot product and the two vector norms.

    Zero norms give 0.0 instead of dividing. NaN/Infinity collapse to 0.0 and
    floating point overshoot is clamped into [0, 1].
    """
    if magnitude_a == 0.0 or magnitude_b == 0.0:
        return 0.0
    similarity = dot / (magnitude_a * magnitude_b)
    if not math.isfinite(similarity):
        return 0.0
    return min(1.0, max(0.0, similarity))


def magnitude(vector: Mapping[str, float] | None) -> float:
    """Euclidean norm of a term -> weight vector."""
    if not vector:
        return 0.0
    return math.sqrt(sum(w * w for w in vector.values()))


def dot_product(
    vector_a: Mapping[str, float] | None,
    vector_b: Mapping[str, float] | None,
) -> float:
    """Sum of weight products over the terms both vectors share."""
    if not vector_a or not vector_b:
        return 0.0
    if len(vector_b) < len(vector_a):
        vector_a, vector_b = vector_b, vector_a
    total = 0.0
    for term, weight in vector_a.items():
        other = vector_b.get(term)
        if other is not None:
            total += weight * other
    return total
