"""Relevance scoring.

Scores are field-weighted with a logarithmic occurrence boost, so repeated
hits in a low-weight field do not outrank one hit in a high-weight field.
"""

import math
from types import MappingProxyType
from typing import TYPE_CHECKING

from specindex.search._models import SearchField

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from specindex.search._models import SearchMatch

__all__ = [
    "FIELD_WEIGHTS",
    "MAX_SCORE",
    "occurrence_boost",
    "score_match",
    "score_spec",
]

MAX_SCORE = 100.0

FIELD_WEIGHTS: Mapping[SearchField, float] = MappingProxyType({
    SearchField.TITLE: 50.0,
    SearchField.NAME: 35.0,
    SearchField.TAGS: 35.0,
    SearchField.DESCRIPTION: 25.0,
    SearchField.CONTENT: 5.0,
})


def occurrence_boost(count: int) -> float:
    """Sub-linear boost for repeated occurrences: 1 + ln(count).

    Examples:
        >>> occurrence_boost(1)
        1.0
        >>> occurrence_boost(0)
        0.0
    """
    if count <= 0:
        return 0.0
    return 1.0 + math.log(count)


def _clamp(score: float) -> float:
    return round(min(MAX_SCORE, max(0.0, score)), 2)


def score_match(field: SearchField, term_counts: Mapping[str, int]) -> float:
    """Score one match.

    Args:
        field: The field the match was found in.
        term_counts: For each distinct term present in the match, the number
            of times it occurs in the whole field.

    Returns:
        The match score, clamped to 0-100 and rounded to 2 decimals.
    """
    weight = FIELD_WEIGHTS[field]
    return _clamp(sum(weight * occurrence_boost(n) for n in term_counts.values()))


def score_spec(matches: Iterable[SearchMatch]) -> float:
    """Aggregate match scores for a spec.

    Takes the best match score of each field and sums them, so matches spread
    over several fields outrank matches confined to one field.
    """
    best: dict[SearchField, float] = {}
    for match in matches:
        best[match.field] = max(best.get(match.field, 0.0), match.score)
    return _clamp(sum(best.values()))
