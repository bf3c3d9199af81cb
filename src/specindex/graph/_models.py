"""Data models for the spec dependency graph.

All models are frozen dataclasses with slots. Node sets are frozensets of
spec ids; projections hold resolved `SpecSummary` values in collection order.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from specindex._models import SpecSummary

type IssueSeverity = Literal["error", "warning"]


class RelationshipField(StrEnum):
    """Frontmatter fields that declare relationships between specs."""

    DEPENDS_ON = "depends_on"
    RELATED = "related"


# =============================================================================
# Graph Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class DependencyNode:
    """Resolved relationships of one spec.

    Attributes:
        depends_on: Specs this spec depends on (declared, upstream).
        required_by: Specs that depend on this spec (derived, downstream).
        related: Related specs (symmetric).
    """

    depends_on: frozenset[str] = frozenset()
    required_by: frozenset[str] = frozenset()
    related: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class CompleteDependencyGraph:
    """A spec together with all of its direct neighbors."""

    current: SpecSummary
    depends_on: tuple[SpecSummary, ...] = ()
    required_by: tuple[SpecSummary, ...] = ()
    related: tuple[SpecSummary, ...] = ()

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "current": self.current.to_dict(),
            "dependsOn": [s.to_dict() for s in self.depends_on],
            "requiredBy": [s.to_dict() for s in self.required_by],
            "related": [s.to_dict() for s in self.related],
        }


@dataclass(frozen=True, slots=True)
class ImpactRadius:
    """Specs transitively affected by a change, grouped by hop distance.

    Attributes:
        current: The changed spec.
        max_depth: Hop limit the traversal ran with (None: unbounded).
        layers: Layer 0 is `(current,)`; layer n holds the specs first
            reached after n hops over `required_by` edges.
    """

    current: SpecSummary
    max_depth: int | None
    layers: tuple[tuple[SpecSummary, ...], ...]

    @property
    def affected(self) -> tuple[SpecSummary, ...]:
        """All affected specs, excluding the changed spec, nearest first."""
        return tuple(spec for layer in self.layers[1:] for spec in layer)

    @property
    def depth(self) -> int:
        """Number of hops actually reached."""
        return len(self.layers) - 1

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "current": self.current.to_dict(),
            "maxDepth": self.max_depth,
            "layers": [[s.to_dict() for s in layer] for layer in self.layers],
        }


# =============================================================================
# Validation Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ReferenceIssue:
    """A relationship reference that could not be used.

    Attributes:
        spec_id: The spec declaring the reference.
        field: The frontmatter field holding the reference.
        reference: The reference as declared.
        message: Human-readable description.
        severity: Whether this is an error or warning.
    """

    spec_id: str
    field: RelationshipField
    reference: str
    message: str
    severity: IssueSeverity = "warning"
