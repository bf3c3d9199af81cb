"""Data models for spec search.

This module defines the enums and frozen dataclasses shared by the query
parser, field matcher, scorer and ranker.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from specindex._models import ARCHIVED_STATUS

if TYPE_CHECKING:
    from specindex._models import SpecSummary

type Highlight = tuple[int, int]

# =============================================================================
# Field Enums
# =============================================================================


class SearchField(StrEnum):
    """Spec fields scanned for free-text terms.

    Declaration order is the field order used when breaking ties between
    matches of equal score.
    """

    TITLE = "title"
    NAME = "name"
    TAGS = "tags"
    DESCRIPTION = "description"
    CONTENT = "content"


FIELD_ORDER: tuple[SearchField, ...] = tuple(SearchField)


class FilterField(StrEnum):
    """Metadata fields accepted in `field:value` filters."""

    STATUS = "status"
    PRIORITY = "priority"
    TAG = "tag"
    ASSIGNEE = "assignee"
    CREATED = "created"
    UPDATED = "updated"

    @property
    def is_date(self) -> bool:
        return self in (FilterField.CREATED, FilterField.UPDATED)


class ComparisonOperator(StrEnum):
    """Comparison applied by a filter. Ordering operators apply to dates only."""

    EQ = "="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    RANGE = ".."


# =============================================================================
# Query Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class FieldFilter:
    """A structured `field:value` predicate.

    Attributes:
        field: The filtered metadata field.
        operator: Comparison operator (always EQ for non-date fields).
        value: Filter value as written, without the operator prefix.
        start: Parsed date operand (range start for RANGE filters).
        end: Parsed range end, only set for RANGE filters.
        negated: True when the filter was preceded by NOT.
    """

    field: FilterField
    operator: ComparisonOperator
    value: str
    start: date | None = None
    end: date | None = None
    negated: bool = False


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """Structured form of a raw query string.

    Attributes:
        original_query: The query exactly as received.
        terms: Case-folded free-text terms, in query order, without duplicates.
        display_terms: The same terms with their original casing.
        filters: Structured field filters.
        excluded_terms: Case-folded terms that must not occur in a result.
    """

    original_query: str
    terms: tuple[str, ...] = ()
    display_terms: tuple[str, ...] = ()
    filters: tuple[FieldFilter, ...] = ()
    excluded_terms: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.terms or self.filters or self.excluded_terms)

    @property
    def is_filter_only(self) -> bool:
        return not self.terms and not self.is_empty

    @property
    def requests_archived(self) -> bool:
        """Whether the query explicitly asks for archived specs."""
        return any(
            f.field is FilterField.STATUS
            and not f.negated
            and f.value.casefold() == ARCHIVED_STATUS
            for f in self.filters
        )


# =============================================================================
# Result Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """One matched region within a spec field.

    Attributes:
        field: The field the region was found in.
        text: Snippet text, with "..." marking truncation.
        line_number: 1-based line number (content matches only).
        score: Match score in the range 0-100.
        highlights: Ascending, non-overlapping (start, end) offsets into text.
        occurrences: Number of term occurrences inside the region.
        offset: Start of the region's first occurrence in the unclipped field
            text. Used to order matches; not serialized.
    """

    field: SearchField
    text: str
    line_number: int | None
    score: float
    highlights: tuple[Highlight, ...] = ()
    occurrences: int = 0
    offset: int = 0

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        data: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
            "field": self.field.value,
            "text": self.text,
        }
        if self.line_number is not None:
            data["lineNumber"] = self.line_number
        data["score"] = self.score
        data["highlights"] = [[start, end] for start, end in self.highlights]
        data["occurrences"] = self.occurrences
        return data


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A spec that satisfied the query, with its aggregate score."""

    spec: SpecSummary
    score: float
    total_matches: int
    matches: tuple[SearchMatch, ...] = ()

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "spec": self.spec.to_dict(),
            "score": self.score,
            "totalMatches": self.total_matches,
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True, slots=True)
class SearchMetadata:
    """Bookkeeping for a search call.

    Attributes:
        total_results: Number of results returned.
        search_time: Elapsed wall time in milliseconds.
        query: The original query string.
        specs_searched: Number of specs in the searched collection.
    """

    total_results: int
    search_time: float
    query: str
    specs_searched: int

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "totalResults": self.total_results,
            "searchTime": self.search_time,
            "query": self.query,
            "specsSearched": self.specs_searched,
        }


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Ranked results plus metadata."""

    results: tuple[SearchResult, ...]
    metadata: SearchMetadata
    parsed_query: ParsedQuery | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "results": [r.to_dict() for r in self.results],
            "metadata": self.metadata.to_dict(),
        }
