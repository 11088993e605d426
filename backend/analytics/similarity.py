"""String and structural similarity primitives.

- Levenshtein edit distance (unit costs)
- Normalized name similarity
- Jaccard index over action types
"""

from typing import Iterable

from rapidfuzz.distance import Levenshtein

from analytics.models import FlowAction


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insertion, deletion and substitution costs."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1].

    1 - levenshtein(a, b) / max(len(a), len(b)); two empty strings are
    identical.
    """
    return Levenshtein.normalized_similarity(a, b)


def action_set_similarity(
    actions1: Iterable[FlowAction],
    actions2: Iterable[FlowAction],
) -> float:
    """
    Jaccard index over the sets of action types.

    Order and repetition are ignored. Two empty lists are identical;
    exactly one empty list shares nothing.
    """
    types1 = {action.type for action in actions1}
    types2 = {action.type for action in actions2}
    if not types1 and not types2:
        return 1.0
    if not types1 or not types2:
        return 0.0
    return len(types1 & types2) / len(types1 | types2)
