"""Normalized edit-distance similarity between a requested name and a catalog name."""

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)


def score(requested: str, candidate_name: str) -> float:
    """
    Return ``1 - distance / max(len(a), len(b))`` in [0.0, 1.0].

    Case-sensitive, no normalization. Two empty strings score 1.0.
    """
    longest = max(len(requested), len(candidate_name))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(requested, candidate_name) / longest
