"""Searchable, cross-referenced index of spec documents.

specindex works on an already-parsed, immutable collection of `SpecRecord`
values supplied by the caller. It offers two capabilities:

- relevance search with field-weighted scoring, filters and highlighted
  snippets (`specindex.search`)
- a dependency graph with reverse and symmetric edges, impact radius and
  cycle queries (`specindex.graph`)

Example:
    >>> from specindex import SpecRecord, build_dependency_graph, search_specs
    >>> specs = [
    ...     SpecRecord(id="1", path="001-login", title="OAuth login"),
    ...     SpecRecord(id="2", path="002-session", depends_on=("1",)),
    ... ]
    >>> [r.spec.id for r in search_specs("oauth", specs).results]
    ['1']
    >>> graph = build_dependency_graph(specs)
    >>> [s.id for s in graph.get_complete_graph("1").required_by]
    ['2']
"""

from specindex._models import ARCHIVED_STATUS, SpecRecord, SpecSummary
from specindex.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    SpecError,
    SpecIndexError,
    SpecNotFoundError,
)
from specindex.graph import (
    CompleteDependencyGraph,
    DependencyGraph,
    DependencyNode,
    ImpactRadius,
    ReferenceIssue,
    build_dependency_graph,
    check_references,
    extract_spec_references,
    find_unlinked_references,
)
from specindex.search import (
    ParsedQuery,
    SearchEngine,
    SearchField,
    SearchMatch,
    SearchMetadata,
    SearchResponse,
    SearchResult,
    parse_query,
    search_specs,
)

SearchableSpec = SpecRecord

__all__ = [
    "ARCHIVED_STATUS",
    "CompleteDependencyGraph",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "DependencyGraph",
    "DependencyNode",
    "ImpactRadius",
    "ParsedQuery",
    "ReferenceIssue",
    "SearchEngine",
    "SearchField",
    "SearchMatch",
    "SearchMetadata",
    "SearchResponse",
    "SearchResult",
    "SearchableSpec",
    "SpecError",
    "SpecIndexError",
    "SpecNotFoundError",
    "SpecRecord",
    "SpecSummary",
    "build_dependency_graph",
    "check_references",
    "extract_spec_references",
    "find_unlinked_references",
    "parse_query",
    "search_specs",
]
