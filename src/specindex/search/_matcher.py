"""Field matching for spec search.

The matcher locates literal, case-insensitive term occurrences in each
searchable field of a spec, groups nearby occurrences into regions and turns
every region into a scored `SearchMatch` with a bounded snippet. It also
evaluates structured filters and the all-terms eligibility rule.
"""

import re
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from specindex.search._models import (
    ComparisonOperator,
    FieldFilter,
    FilterField,
    Highlight,
    SearchField,
    SearchMatch,
)
from specindex.search._scoring import score_match

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from datetime import date, datetime

    from specindex._models import SpecRecord

__all__ = [
    "ELLIPSIS",
    "FieldText",
    "Occurrence",
    "clip_to_context",
    "find_occurrences",
    "first_failing_filter",
    "iter_field_texts",
    "match_spec",
    "matches_filter",
    "merge_ranges",
    "spec_contains_all_terms",
    "spec_contains_any_term",
]

ELLIPSIS = "..."


@dataclass(frozen=True, slots=True)
class FieldText:
    """One searchable unit of text: a whole field, one tag, or one content line."""

    field: SearchField
    text: str
    line_number: int | None = None


@dataclass(frozen=True, slots=True)
class Occurrence:
    """A single term occurrence within a `FieldText`."""

    term: str
    start: int
    end: int


# -----------------------------------------------------------------------------
# Field Texts
# -----------------------------------------------------------------------------


def iter_field_texts(spec: SpecRecord) -> Iterator[FieldText]:
    """Yield the searchable texts of a spec in field order.

    Tags yield one text per tag and content yields one text per line with a
    1-based line number. Empty texts are skipped.
    """
    for field in SearchField:
        match field:
            case SearchField.TITLE:
                if spec.title:
                    yield FieldText(field, spec.title)
            case SearchField.NAME:
                if spec.name:
                    yield FieldText(field, spec.name)
            case SearchField.TAGS:
                for tag in spec.tags:
                    if tag:
                        yield FieldText(field, tag)
            case SearchField.DESCRIPTION:
                if spec.description:
                    yield FieldText(field, spec.description)
            case SearchField.CONTENT:
                for line_number, line in enumerate(spec.content.splitlines(), 1):
                    if line:
                        yield FieldText(field, line, line_number)


# -----------------------------------------------------------------------------
# Occurrences
# -----------------------------------------------------------------------------


@lru_cache(maxsize=256)
def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(re.escape(term))


def _fold(text: str) -> tuple[str, list[int]]:
    """Case-fold text, mapping each folded character to its source offset.

    Folding can expand a character ("ß" folds to "ss"), so the map is needed
    to report offsets into the original text.
    """
    pieces: list[str] = []
    origins: list[int] = []
    for index, char in enumerate(text):
        folded = char.casefold()
        pieces.append(folded)
        origins.extend([index] * len(folded))
    return "".join(pieces), origins


def find_occurrences(text: str, term: str) -> list[Highlight]:
    """Return the (start, end) offsets of every non-overlapping occurrence.

    Text and term are compared case-folded, the same folding the query parser
    applies to terms. Offsets refer to the original text and always cover
    whole characters.
    """
    needle = term.casefold()
    if not needle:
        return []

    folded, origins = _fold(text)
    spans: list[Highlight] = []
    for m in _term_pattern(needle).finditer(folded):
        start = origins[m.start()]
        end = origins[m.end() - 1] + 1
        # Two folded matches inside one expanded character collapse to one
        if spans and start < spans[-1][1]:
            continue
        spans.append((start, end))
    return spans


def merge_ranges(ranges: Iterable[Highlight]) -> list[Highlight]:
    """Sort ranges and merge the ones that overlap or touch."""
    merged: list[Highlight] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def _field_occurrences(unit: FieldText, terms: Sequence[str]) -> list[Occurrence]:
    occurrences = [
        Occurrence(term, start, end)
        for term in terms
        for start, end in find_occurrences(unit.text, term)
    ]
    occurrences.sort(key=lambda o: (o.start, o.end))
    return occurrences


def _group_regions(
    occurrences: Sequence[Occurrence], context_length: int
) -> list[list[Occurrence]]:
    """Group sorted occurrences into regions.

    An occurrence joins the current region while it ends within
    `context_length` characters of the end of the region's first occurrence.
    """
    regions: list[list[Occurrence]] = []
    anchor_end = 0
    for occurrence in occurrences:
        if regions and occurrence.end <= anchor_end + context_length:
            regions[-1].append(occurrence)
        else:
            regions.append([occurrence])
            anchor_end = occurrence.end
    return regions


# -----------------------------------------------------------------------------
# Snippets
# -----------------------------------------------------------------------------


def clip_to_context(
    text: str,
    highlights: Sequence[Highlight],
    context_length: int,
) -> tuple[str, tuple[Highlight, ...]]:
    """Clip text to `context_length` characters each side of the first highlight.

    Truncated sides are marked with "...". Highlights are re-based onto the
    clipped text; ranges falling outside the window are dropped and ranges
    crossing it are cut. Existing leading or trailing "..." markers are kept
    out of the window, so clipping an already clipped snippet is a no-op.

    Args:
        text: Text to clip.
        highlights: Ascending, non-overlapping ranges into text.
        context_length: Characters kept before and after the first highlight.

    Returns:
        Tuple of (clipped text, re-based highlights).
    """
    if not highlights:
        return text, ()

    first_start, first_end = highlights[0]
    body_start = 0
    body_end = len(text)
    marker = len(ELLIPSIS)
    if text.startswith(ELLIPSIS) and first_start >= marker:
        body_start = marker
    if (
        text.endswith(ELLIPSIS)
        and highlights[-1][1] <= len(text) - marker
        and len(text) - marker >= body_start
    ):
        body_end = len(text) - marker

    start = max(body_start, first_start - context_length)
    end = max(start, min(body_end, first_end + context_length))

    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    offset = start - len(prefix)

    clipped = tuple(
        (max(h_start, start) - offset, min(h_end, end) - offset)
        for h_start, h_end in highlights
        if h_start < end and h_end > start
    )
    return f"{prefix}{text[start:end]}{suffix}", clipped


# -----------------------------------------------------------------------------
# Eligibility
# -----------------------------------------------------------------------------


def _spec_term_presence(spec: SpecRecord, terms: Sequence[str]) -> set[str]:
    remaining = set(terms)
    found: set[str] = set()
    for unit in iter_field_texts(spec):
        for term in tuple(remaining):
            if find_occurrences(unit.text, term):
                found.add(term)
                remaining.discard(term)
        if not remaining:
            break
    return found


def spec_contains_all_terms(spec: SpecRecord, terms: Sequence[str]) -> bool:
    """Whether every term occurs in at least one field of the spec."""
    return len(_spec_term_presence(spec, terms)) == len(set(terms))


def spec_contains_any_term(spec: SpecRecord, terms: Sequence[str]) -> bool:
    """Whether any of the terms occurs in some field of the spec."""
    return bool(terms) and bool(_spec_term_presence(spec, terms))


def _equals(actual: str | None, expected: str) -> bool:
    return actual is not None and actual.casefold() == expected.casefold()


def _compare_date(actual: datetime | None, field_filter: FieldFilter) -> bool:
    if actual is None or field_filter.start is None:
        return False

    day: date = actual.date()
    start = field_filter.start
    match field_filter.operator:
        case ComparisonOperator.EQ:
            return day == start
        case ComparisonOperator.GT:
            return day > start
        case ComparisonOperator.LT:
            return day < start
        case ComparisonOperator.GE:
            return day >= start
        case ComparisonOperator.LE:
            return day <= start
        case ComparisonOperator.RANGE:
            return field_filter.end is not None and start <= day <= field_filter.end


def _filter_holds(spec: SpecRecord, field_filter: FieldFilter) -> bool:
    match field_filter.field:
        case FilterField.STATUS:
            return _equals(spec.status, field_filter.value)
        case FilterField.PRIORITY:
            return _equals(spec.priority, field_filter.value)
        case FilterField.TAG:
            return any(_equals(tag, field_filter.value) for tag in spec.tags)
        case FilterField.ASSIGNEE:
            return _equals(spec.assignee, field_filter.value)
        case FilterField.CREATED:
            return _compare_date(spec.created, field_filter)
        case FilterField.UPDATED:
            return _compare_date(spec.updated, field_filter)


def matches_filter(spec: SpecRecord, field_filter: FieldFilter) -> bool:
    """Evaluate one filter against a spec, honoring negation."""
    return _filter_holds(spec, field_filter) != field_filter.negated


def first_failing_filter(
    spec: SpecRecord, filters: Iterable[FieldFilter]
) -> FieldFilter | None:
    """Return the first filter the spec fails, or None when all hold."""
    for field_filter in filters:
        if not matches_filter(spec, field_filter):
            return field_filter
    return None


# -----------------------------------------------------------------------------
# Matching
# -----------------------------------------------------------------------------


def match_spec(
    spec: SpecRecord,
    terms: Sequence[str],
    context_length: int,
) -> tuple[SearchMatch, ...]:
    """Find and score every matched region of a spec.

    Matches are returned in field order, then line order, then position.
    Eligibility is not checked here; see `spec_contains_all_terms`.

    Args:
        spec: The spec to scan.
        terms: Case-folded query terms.
        context_length: Characters of context each side of a region's first
            highlight.

    Returns:
        Scored matches for the spec.
    """
    if not terms:
        return ()

    located: list[tuple[FieldText, list[Occurrence]]] = []
    field_counts: dict[SearchField, Counter[str]] = {}
    for unit in iter_field_texts(spec):
        occurrences = _field_occurrences(unit, terms)
        if not occurrences:
            continue
        located.append((unit, occurrences))
        counts = field_counts.setdefault(unit.field, Counter())
        counts.update(o.term for o in occurrences)

    matches: list[SearchMatch] = []
    for unit, occurrences in located:
        counts = field_counts[unit.field]
        for region in _group_regions(occurrences, context_length):
            highlights = merge_ranges((o.start, o.end) for o in region)
            text, snippet_highlights = clip_to_context(
                unit.text, highlights, context_length
            )
            region_terms = {o.term for o in region}
            matches.append(
                SearchMatch(
                    field=unit.field,
                    text=text,
                    line_number=unit.line_number,
                    score=score_match(
                        unit.field, {term: counts[term] for term in region_terms}
                    ),
                    highlights=snippet_highlights,
                    occurrences=len(region),
                    offset=highlights[0][0],
                )
            )
    return tuple(matches)
