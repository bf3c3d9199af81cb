"""Dependency graph over spec collections.

The graph derives `required_by` edges from declared `depends_on` references,
makes `related` symmetric, and answers neighbor and impact radius queries.

Example:
    >>> from specindex import SpecRecord
    >>> from specindex.graph import DependencyGraph
    >>> graph = DependencyGraph([
    ...     SpecRecord(id="1", path="001-auth"),
    ...     SpecRecord(id="2", path="002-session", depends_on=("1",)),
    ... ])
    >>> [s.id for s in graph.impact_radius("1").affected]
    ['2']
"""

from specindex.graph._builder import (
    DependencyGraph,
    ReferenceResolver,
    build_dependency_graph,
)
from specindex.graph._models import (
    CompleteDependencyGraph,
    DependencyNode,
    ImpactRadius,
    IssueSeverity,
    ReferenceIssue,
    RelationshipField,
)
from specindex.graph._references import (
    SPEC_REFERENCE_PATTERN,
    extract_spec_references,
    find_unlinked_references,
)
from specindex.graph._validation import check_references

__all__ = [
    "SPEC_REFERENCE_PATTERN",
    "CompleteDependencyGraph",
    "DependencyGraph",
    "DependencyNode",
    "ImpactRadius",
    "IssueSeverity",
    "ReferenceIssue",
    "ReferenceResolver",
    "RelationshipField",
    "build_dependency_graph",
    "check_references",
    "extract_spec_references",
    "find_unlinked_references",
]
