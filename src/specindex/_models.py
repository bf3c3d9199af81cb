"""Core spec models shared by search and graph.

A `SpecRecord` is the immutable snapshot of one parsed spec handed to the
index by whatever loads specs from storage. `SpecSummary` is the resolved view
returned in search results and graph projections.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = ["ARCHIVED_STATUS", "SpecRecord", "SpecSummary"]

ARCHIVED_STATUS = "archived"


@dataclass(frozen=True, slots=True)
class SpecSummary:
    """Resolved summary of a specification.

    Attributes:
        id: Unique specification identifier.
        path: Spec path relative to the specs directory.
        name: Spec name (for example "042-oauth2-implementation").
        title: Human-readable title.
        status: Lifecycle status.
        priority: Priority, if set.
        tags: Freeform tags.
        description: Short description, if set.
    """

    id: str
    path: str
    name: str = ""
    title: str = ""
    status: str = ""
    priority: str | None = None
    tags: tuple[str, ...] = ()
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "id": self.id,
            "path": self.path,
            "name": self.name,
            "title": self.title,
            "status": self.status,
            "priority": self.priority,
            "tags": list(self.tags),
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class SpecRecord:
    """Immutable snapshot of a parsed specification.

    The index never mutates records. Relationship fields hold references as
    declared in frontmatter; they may point at specs that do not exist.

    Attributes:
        id: Unique specification identifier.
        path: Spec path relative to the specs directory.
        name: Spec name; defaults to the path when empty.
        title: Human-readable title.
        description: Short free-text description.
        tags: Freeform tags. Order carries no meaning.
        status: Lifecycle status (for example "planned", "in-progress").
        priority: Priority (for example "high").
        assignee: Assignee name.
        created: Creation timestamp.
        updated: Last modification timestamp.
        depends_on: Declared upstream dependencies.
        related: Declared related specs.
        content: Full body text.
    """

    # Required
    id: str
    path: str
    # Optional
    name: str = ""
    title: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()
    status: str = ""
    priority: str | None = None
    assignee: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    depends_on: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    content: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.path

    @property
    def is_archived(self) -> bool:
        return self.status.casefold() == ARCHIVED_STATUS

    def summary(self) -> SpecSummary:
        """Return the resolved summary view of this spec."""
        return SpecSummary(
            id=self.id,
            path=self.path,
            name=self.display_name,
            title=self.title,
            status=self.status,
            priority=self.priority,
            tags=self.tags,
            description=self.description or None,
        )
