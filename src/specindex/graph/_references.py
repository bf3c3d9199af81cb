"""Best-effort extraction of spec references from prose.

Body text often mentions other specs ("depends on 042-auth"). These helpers
find such mentions so they can be suggested as declared relationships. The
results are heuristic and never feed the dependency graph.
"""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specindex._models import SpecRecord
    from specindex.graph._builder import DependencyGraph

__all__ = [
    "SPEC_REFERENCE_PATTERN",
    "extract_spec_references",
    "find_unlinked_references",
]

SPEC_REFERENCE_PATTERN = re.compile(
    r"(?:specs?[:\s]+|depends on[:\s]+)([0-9]{3,}[-\w]+)",
    re.IGNORECASE,
)


def extract_spec_references(text: str) -> tuple[str, ...]:
    """Return spec references mentioned in text, unique and in order.

    Examples:
        >>> extract_spec_references("See spec 042-auth. Depends on: 017-db")
        ('042-auth', '017-db')
    """
    seen: dict[str, None] = {}
    for match in SPEC_REFERENCE_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return tuple(seen)


def find_unlinked_references(
    spec: SpecRecord, graph: DependencyGraph
) -> tuple[str, ...]:
    """List specs mentioned in a spec's body but not declared as relationships.

    Mentions that resolve to no spec, or to the spec itself, are ignored.

    Args:
        spec: The spec whose content is scanned.
        graph: Graph used to resolve mentions and look up declared edges.

    Returns:
        Ids of the mentioned specs, in order of first mention.
    """
    declared: frozenset[str] = frozenset()
    if spec.id in graph:
        node = graph.node(spec.id)
        declared = node.depends_on | node.related

    unlinked: dict[str, None] = {}
    for reference in extract_spec_references(spec.content):
        target = graph.resolve(reference)
        if target is None or target == spec.id or target in declared:
            continue
        unlinked.setdefault(target, None)
    return tuple(unlinked)
