"""Relationship reference checks.

Graph construction silently drops references it cannot resolve. This module
is the separate checking pass that reports them, for callers that want to
surface broken links as validation output.
"""

from typing import TYPE_CHECKING

from specindex.graph._builder import ReferenceResolver
from specindex.graph._models import IssueSeverity, ReferenceIssue, RelationshipField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from specindex._models import SpecRecord

__all__ = ["check_references"]


def _declared(spec: SpecRecord) -> Iterable[tuple[RelationshipField, str]]:
    for reference in spec.depends_on:
        yield RelationshipField.DEPENDS_ON, reference
    for reference in spec.related:
        yield RelationshipField.RELATED, reference


def check_references(
    specs: Iterable[SpecRecord],
    *,
    severity: IssueSeverity = "warning",
) -> tuple[ReferenceIssue, ...]:
    """Report dangling and self references declared by a spec collection.

    References resolve the same way as in DependencyGraph: by id, then path,
    then name. Specs with a duplicate id are checked too.

    Args:
        specs: The whole spec collection.
        severity: Severity assigned to every reported issue.

    Returns:
        Issues in collection order, then declaration order.
    """
    collection = tuple(specs)
    resolver = ReferenceResolver(collection)
    issues: list[ReferenceIssue] = []

    for spec in collection:
        for field, reference in _declared(spec):
            target = resolver.resolve(reference)
            if target is None:
                message = (
                    f"Reference '{reference}' in {field.value} does not match any spec"
                )
            elif target == spec.id:
                message = f"Spec '{spec.id}' references itself in {field.value}"
            else:
                continue
            issues.append(
                ReferenceIssue(
                    spec_id=spec.id,
                    field=field,
                    reference=reference,
                    message=message,
                    severity=severity,
                )
            )

    return tuple(issues)
