# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownVariableType=false
"""Checking merged configuration against the Pydantic section models."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from specindex.config._models._logging import LoggingConfig
from specindex.config._models._search import GraphConfiguration, SearchConfiguration
from specindex.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pydantic_core import ErrorDetails


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One invalid configuration value.

    Attributes:
        key: Dotted key, e.g. "search.context_length".
        message: Pydantic's description of the problem.
        expected: Accepted values or bound, when Pydantic reports one.
        actual: The rejected value.
        source: Where the value came from, e.g. a file path.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None = None


class ConfigSchema(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    search: SearchConfiguration = SearchConfiguration()
    graph: GraphConfiguration = GraphConfiguration()


class ConfigSchemaStrict(ConfigSchema):
    """Rejects unknown sections and keys."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


def _expected(error: ErrorDetails) -> str | None:
    ctx = error.get("ctx") or {}
    if "expected" in ctx:
        return str(ctx["expected"])
    if "ge" in ctx:
        return f">= {ctx['ge']}"
    return None


def validate_config(
    config: dict[str, Any],
    *,
    strict: bool = False,
    source: str | None = None,
) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: Merged configuration.
        strict: Report unknown keys instead of ignoring them.
        source: Attached to every reported issue.

    Returns:
        The issues found; empty when the configuration is valid.
    """
    schema_class = ConfigSchemaStrict if strict else ConfigSchema

    try:
        _ = schema_class.model_validate(config)
    except ValidationError as e:
        return [
            ValidationIssue(
                key=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                expected=_expected(error),
                actual=error.get("input"),
                source=source,
            )
            for error in e.errors()
        ]
    return []


def raise_if_validation_errors(
    issues: Sequence[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first issue, if there is one.

    Raises:
        ConfigValidationError: If `issues` is not empty.
    """
    if not issues:
        return
    issue = issues[0]
    msg = f"Invalid configuration value for '{issue.key}'"
    raise ConfigValidationError(
        msg,
        key=issue.key,
        value=issue.actual,
        expected=issue.expected or issue.message,
        source=source or issue.source,
    )
