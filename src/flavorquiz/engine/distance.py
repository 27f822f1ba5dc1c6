"""Edit distance and normalized string similarity."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def distance(a: str, b: str) -> int:
    """Levenshtein distance with unit costs for insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity ratio in [0, 1]; 1.0 means identical (including two empty strings).

    Normalized by the longer string: ``1 - distance / max(len(a), len(b))``.
    """
    return Levenshtein.normalized_similarity(a, b)
