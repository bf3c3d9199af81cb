"""Full-text search over spec collections.

Queries are parsed into terms and filters, matched field by field, scored with
static field weights and ranked into a deterministic order.

Example:
    >>> from specindex import SpecRecord
    >>> from specindex.search import SearchEngine
    >>> engine = SearchEngine()
    >>> response = engine.search("oauth", [SpecRecord(id="1", path="a", title="OAuth")])
    >>> response.results[0].matches[0].field
    <SearchField.TITLE: 'title'>
"""

from specindex.search._engine import SearchEngine, search_specs
from specindex.search._matcher import (
    clip_to_context,
    find_occurrences,
    match_spec,
    matches_filter,
    merge_ranges,
    spec_contains_all_terms,
)
from specindex.search._models import (
    FIELD_ORDER,
    ComparisonOperator,
    FieldFilter,
    FilterField,
    Highlight,
    ParsedQuery,
    SearchField,
    SearchMatch,
    SearchMetadata,
    SearchResponse,
    SearchResult,
)
from specindex.search._parser import get_search_syntax_help, parse_query, tokenize
from specindex.search._ranking import rank_results, result_sort_key
from specindex.search._scoring import (
    FIELD_WEIGHTS,
    occurrence_boost,
    score_match,
    score_spec,
)

__all__ = [
    "FIELD_ORDER",
    "FIELD_WEIGHTS",
    "ComparisonOperator",
    "FieldFilter",
    "FilterField",
    "Highlight",
    "ParsedQuery",
    "SearchEngine",
    "SearchField",
    "SearchMatch",
    "SearchMetadata",
    "SearchResponse",
    "SearchResult",
    "clip_to_context",
    "find_occurrences",
    "get_search_syntax_help",
    "match_spec",
    "matches_filter",
    "merge_ranges",
    "occurrence_boost",
    "parse_query",
    "rank_results",
    "result_sort_key",
    "score_match",
    "score_spec",
    "search_specs",
    "spec_contains_all_terms",
    "tokenize",
]
