"""Deterministic ordering and truncation of search results."""

from dataclasses import replace
from typing import TYPE_CHECKING

from specindex.search._matcher import clip_to_context
from specindex.search._models import FIELD_ORDER

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from specindex.search._models import SearchMatch, SearchResult

__all__ = [
    "match_sort_key",
    "rank_results",
    "result_sort_key",
    "truncate_match_context",
    "truncate_matches",
]


def result_sort_key(result: SearchResult) -> tuple[float, int, str, str]:
    """Score descending, match count descending, path then id ascending."""
    return (-result.score, -result.total_matches, result.spec.path, result.spec.id)


def match_sort_key(match: SearchMatch) -> tuple[float, int, int, int]:
    return (
        -match.score,
        FIELD_ORDER.index(match.field),
        match.line_number or 0,
        match.offset,
    )


def truncate_match_context(match: SearchMatch, context_length: int) -> SearchMatch:
    """Clip a match's text to `context_length` characters around its first highlight."""
    text, highlights = clip_to_context(match.text, match.highlights, context_length)
    if text == match.text and highlights == match.highlights:
        return match
    return replace(match, text=text, highlights=highlights)


def truncate_matches(
    matches: Sequence[SearchMatch],
    max_matches: int,
    context_length: int,
) -> tuple[SearchMatch, ...]:
    """Keep the `max_matches` best matches, highest score first.

    Ties are broken by field order, then line number, then the position of
    the match within its field.
    """
    ordered = sorted(matches, key=match_sort_key)
    return tuple(
        truncate_match_context(match, context_length)
        for match in ordered[: max(max_matches, 0)]
    )


def rank_results(
    results: Iterable[SearchResult],
    *,
    max_matches_per_spec: int,
    context_length: int,
) -> tuple[SearchResult, ...]:
    """Sort results into their final, total order and truncate their matches.

    Args:
        results: Unordered results.
        max_matches_per_spec: Maximum matches kept per result.
        context_length: Characters of context kept each side of a match.

    Returns:
        Ranked results. `total_matches` keeps the count before truncation.
    """
    ranked = sorted(results, key=result_sort_key)
    return tuple(
        replace(
            result,
            matches=truncate_matches(
                result.matches, max_matches_per_spec, context_length
            ),
        )
        for result in ranked
    )
