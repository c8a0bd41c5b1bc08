"""
Reusable semantic validation primitives.

Store-backed building blocks shared by every semantic check, plus the
aggregation of independent validation outcomes.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from ....config.constants import IssueCodes
from ..entities.issue import ValidationContext, ValidationIssue
from ..entities.protocols import ValidationStore
from ..entities.result import ValidationResult


@dataclass(frozen=True)
class EntityReference:
    """A referenced entity to check: its type, id and the payload field naming it."""

    type: str
    id: str
    field: str


class SemanticPrimitives:
    """Uniqueness, ownership and reference checks over a ValidationStore.

    Every primitive returns issues instead of raising; store failures
    propagate to the runtime, which reports them as one issue.
    """

    def __init__(self, store: ValidationStore):
        self.store = store

    async def validate_uniqueness(
        self,
        field: str,
        value: Any,
        context: ValidationContext,
        exclude_id: Optional[str] = None,
        entity_type: Optional[str] = None,
    ) -> Optional[ValidationIssue]:
        """Fail with DUPLICATE_VALUE if another record in the tenant has ``value``.

        Args:
            field: Field name to check
            value: Candidate value
            context: Context carrying the tenant id (and entity type)
            exclude_id: Record to ignore, used by update flows
            entity_type: Overrides ``context.entity_type``
        """
        kind = entity_type or context.entity_type
        if not kind:
            raise ValueError("validate_uniqueness requires an entity type")

        duplicate = await self.store.exists_with_value(
            kind,
            field,
            value,
            context.tenant_id,
            exclude_id=str(exclude_id) if exclude_id is not None else None,
        )
        if not duplicate:
            return None
        return ValidationIssue.error(
            field,
            f"{field} already exists in this tenant",
            IssueCodes.DUPLICATE_VALUE,
            context=context,
            field_value=value,
            exclude_id=str(exclude_id) if exclude_id is not None else None,
        )

    async def validate_tenant_ownership(
        self,
        entity_type: str,
        entity_id: Any,
        tenant_id: Any,
        context: ValidationContext,
    ) -> Optional[ValidationIssue]:
        """Fail with INVALID_TENANT_OWNERSHIP if the entity is not owned by ``tenant_id``."""
        owned = await self.store.belongs_to_tenant(entity_type, str(entity_id), str(tenant_id))
        if owned:
            return None
        return ValidationIssue.error(
            "tenant_id",
            f"{entity_type} does not belong to the specified tenant",
            IssueCodes.INVALID_TENANT_OWNERSHIP,
            context=context,
            entity_type=entity_type,
            entity_id=str(entity_id),
            tenant_id=str(tenant_id),
        )

    async def validate_entity_references(
        self,
        references: Iterable[EntityReference],
        context: ValidationContext,
    ) -> List[ValidationIssue]:
        """Check every reference and collect one INVALID_ENTITY_REFERENCE per missing entity."""
        issues: List[ValidationIssue] = []
        for reference in references:
            exists = await self.store.entity_exists(reference.type, str(reference.id), context.tenant_id)
            if not exists:
                issues.append(ValidationIssue.error(
                    reference.field,
                    f"Referenced {reference.type} does not exist",
                    IssueCodes.INVALID_ENTITY_REFERENCE,
                    context=context,
                    entity_type=reference.type,
                    entity_id=str(reference.id),
                ))
        return issues


def combine_async_results(results: Sequence[ValidationResult]) -> ValidationResult:
    """Aggregate independent outcomes.

    Success iff every result succeeded. On failure the errors of all failed
    results are returned, never just the first; on success the data is the
    list of constituent data and warnings are merged. Duration is the sum.
    """
    total_duration = sum(result.duration_ms or 0.0 for result in results)
    failures = [result for result in results if not result.success]

    if failures:
        errors = [issue for failure in failures for issue in failure.errors]
        return ValidationResult.fail(errors, duration_ms=total_duration)

    return ValidationResult.ok(
        [result.data for result in results],
        warnings=[issue for result in results for issue in result.warnings],
        duration_ms=total_duration,
    )
