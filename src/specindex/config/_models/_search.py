"""Search and graph configuration models.

This module provides Pydantic models for the settings consumed by the search
engine and the dependency graph queries.
"""

from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field


class SearchConfiguration(BaseModel):
    """Search engine settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    max_matches_per_spec: int = Field(
        default=5,
        ge=1,
        description="Maximum number of matches kept for each result.",
    )
    context_length: int = Field(
        default=80,
        ge=0,
        description="Characters of context shown on each side of a match.",
    )
    include_archived: bool = Field(
        default=False,
        description="Include specs with status 'archived' in results.",
    )


class GraphConfiguration(BaseModel):
    """Dependency graph query settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    impact_max_depth: int | None = Field(
        default=3,
        ge=0,
        description="Default hop limit for impact radius queries (None: unbounded).",
    )
    reference_severity: Literal["error", "warning"] = Field(
        default="warning",
        description="Severity reported for dangling relationship references.",
    )
