"""
Role semantic checks.

One check per role operation: creation, update, assignment, hierarchy
change and deletion. Each runs every applicable rule against the store
and collects all issues before returning, so a caller sees the complete
picture in one round trip. Store queries use the context tenant id; the
runtime has already rejected payloads naming another tenant.
"""

import logging
from datetime import timedelta
from typing import Optional

from ....config.constants import EntityTypes, IssueCodes, RoleType
from ....config.settings import AccessSettings, get_settings
from ..entities.issue import ValidationContext, utc_now
from ..entities.result import IssueCollector, ValidationResult
from ..services.primitives import EntityReference, SemanticPrimitives
from .schemas import (
    RoleAssignmentPayload,
    RoleCreatePayload,
    RoleDeletionPayload,
    RoleHierarchyPayload,
    RoleUpdatePayload,
)

logger = logging.getLogger(__name__)


class RoleCheck:
    """Shared wiring for role checks."""

    entity_kind = EntityTypes.ROLE

    def __init__(self, settings: Optional[AccessSettings] = None):
        self.settings = settings or get_settings()


class RoleCreationCheck(RoleCheck):
    """Uniqueness, role-type rules and references for a new role."""

    schema = RoleCreatePayload

    async def check(
        self,
        data: RoleCreatePayload,
        context: ValidationContext,
        primitives: SemanticPrimitives,
    ) -> ValidationResult:
        issues = IssueCollector(context)

        issues.add(await primitives.validate_uniqueness("code", data.code, context, entity_type=EntityTypes.ROLE))
        issues.add(await primitives.validate_uniqueness("name", data.name, context, entity_type=EntityTypes.ROLE))

        if data.role_type is RoleType.SYSTEM:
            if data.is_default and data.tenant_id != self.settings.system_tenant_id:
                issues.error(
                    "is_default",
                    "Only system roles in system tenant can be default",
                    IssueCodes.INVALID_SYSTEM_ROLE_DEFAULT,
                )
            if data.parent_role_id is not None:
                issues.error(
                    "parent_role_id",
                    "System roles cannot have parent roles",
                    IssueCodes.SYSTEM_ROLE_NO_PARENT,
                )

        if data.role_type is RoleType.INHERITED:
            if data.parent_role_id is None:
                issues.error(
                    "parent_role_id",
                    "Inherited roles must have a parent role",
                    IssueCodes.INHERITED_ROLE_REQUIRES_PARENT,
                )
            if data.permissions:
                issues.warning(
                    "permissions",
                    "Inherited roles should inherit permissions from parent",
                    IssueCodes.INHERITED_ROLE_PERMISSIONS_WARNING,
                )

        if data.parent_role_id is not None:
            ownership = await primitives.validate_tenant_ownership(
                EntityTypes.ROLE, data.parent_role_id, context.tenant_id, context
            )
            issues.add(ownership.with_field("parent_role_id") if ownership else None)

        if data.permissions:
            issues.extend(await primitives.validate_entity_references(
                [EntityReference(EntityTypes.PERMISSION, str(p), "permissions") for p in data.permissions],
                context,
            ))

        if data.priority < self.settings.low_priority_threshold:
            issues.warning(
                "priority",
                "Low priority roles may have limited access to system functions",
                IssueCodes.LOW_PRIORITY_WARNING,
                priority=data.priority,
            )

        if "ADMIN" in data.code and data.role_type is not RoleType.SYSTEM:
            issues.warning(
                "code",
                "Admin roles should typically be SYSTEM type for security",
                IssueCodes.ADMIN_ROLE_TYPE_WARNING,
            )

        return issues.to_result(data)


class RoleUpdateCheck(RoleCheck):
    """Ownership of the role and uniqueness of changed code/name."""

    schema = RoleUpdatePayload

    async def check(
        self,
        data: RoleUpdatePayload,
        context: ValidationContext,
        primitives: SemanticPrimitives,
    ) -> ValidationResult:
        role_id = str(data.id)
        issues = IssueCollector(context)

        issues.add(await primitives.validate_tenant_ownership(EntityTypes.ROLE, role_id, context.tenant_id, context))

        if data.code is not None:
            issues.add(await primitives.validate_uniqueness(
                "code", data.code, context, exclude_id=role_id, entity_type=EntityTypes.ROLE
            ))
        if data.name is not None:
            issues.add(await primitives.validate_uniqueness(
                "name", data.name, context, exclude_id=role_id, entity_type=EntityTypes.ROLE
            ))

        if data.code is not None and "SYSTEM" in data.code:
            issues.warning(
                "code",
                "Modifying system roles may affect application security",
                IssueCodes.SYSTEM_ROLE_MODIFICATION_WARNING,
            )

        return issues.to_result(data)


class RoleAssignmentCheck(RoleCheck):
    """Ownership of role, assignee and assigner; expiry window; self-assignment."""

    entity_kind = EntityTypes.ROLE_ASSIGNMENT
    schema = RoleAssignmentPayload

    async def check(
        self,
        data: RoleAssignmentPayload,
        context: ValidationContext,
        primitives: SemanticPrimitives,
    ) -> ValidationResult:
        issues = IssueCollector(context)

        references = (
            EntityReference(EntityTypes.ROLE, str(data.role_id), "role_id"),
            EntityReference(EntityTypes.MEMBER, str(data.member_id), "member_id"),
            EntityReference(EntityTypes.MEMBER, str(data.assigned_by), "assigned_by"),
        )
        for reference in references:
            ownership = await primitives.validate_tenant_ownership(
                reference.type, reference.id, context.tenant_id, context
            )
            if ownership is not None:
                issues.add(ownership.with_field(reference.field))

        if data.expires_at is not None:
            now = utc_now()
            if data.expires_at <= now:
                issues.error(
                    "expires_at",
                    "Role assignment cannot expire in the past",
                    IssueCodes.PAST_EXPIRATION_DATE,
                    expires_at=data.expires_at.isoformat(),
                )
            elif data.expires_at - now > timedelta(days=self.settings.long_term_assignment_days):
                issues.warning(
                    "expires_at",
                    "Role assignment expires more than "
                    f"{self.settings.long_term_assignment_days // 365} years in the future",
                    IssueCodes.LONG_TERM_ASSIGNMENT_WARNING,
                    expires_at=data.expires_at.isoformat(),
                    years_from_now=round((data.expires_at - now).days / 365),
                )

        if data.member_id == data.assigned_by:
            issues.warning(
                "assigned_by",
                "Member is assigning role to themselves",
                IssueCodes.SELF_ASSIGNMENT_WARNING,
                requires_approval=True,
            )

        return issues.to_result(data)


class RoleHierarchyCheck(RoleCheck):
    """Self-parenting, ownership of both roles and cycles through the ancestor chain."""

    schema = RoleHierarchyPayload

    async def check(
        self,
        data: RoleHierarchyPayload,
        context: ValidationContext,
        primitives: SemanticPrimitives,
    ) -> ValidationResult:
        role_id, parent_id = str(data.role_id), str(data.parent_role_id)
        issues = IssueCollector(context)

        self_parenting = role_id == parent_id
        if self_parenting:
            issues.error(
                "parent_role_id",
                "Role cannot be its own parent",
                IssueCodes.CIRCULAR_ROLE_REFERENCE,
            )

        owned = True
        for entity_id, field_name in ((role_id, "role_id"), (parent_id, "parent_role_id")):
            ownership = await primitives.validate_tenant_ownership(
                EntityTypes.ROLE, entity_id, context.tenant_id, context
            )
            if ownership is not None:
                owned = False
                issues.add(ownership.with_field(field_name))

        if owned and not self_parenting:
            await self._check_ancestry(role_id, parent_id, context.tenant_id, primitives, issues)

        return issues.to_result(data)

    async def _check_ancestry(
        self,
        role_id: str,
        parent_id: str,
        tenant_id: str,
        primitives: SemanticPrimitives,
        issues: IssueCollector,
    ) -> None:
        """Walk up from the proposed parent; reaching ``role_id`` means a cycle."""
        store = primitives.store
        bound = await store.count_roles(tenant_id)
        chain = [parent_id]
        current: Optional[str] = parent_id

        while current is not None:
            if current == role_id:
                logger.info(f"Rejected cyclic hierarchy for role {role_id} in tenant {tenant_id}")
                issues.error(
                    "parent_role_id",
                    "Role hierarchy would contain a cycle",
                    IssueCodes.CIRCULAR_ROLE_REFERENCE,
                    chain=list(chain),
                )
                return
            if len(chain) > bound:
                issues.error(
                    "parent_role_id",
                    "Role hierarchy is deeper than the number of roles in the tenant",
                    IssueCodes.ROLE_HIERARCHY_TOO_DEEP,
                    bound=bound,
                )
                return
            current = await store.get_parent_role_id(current, tenant_id)
            if current is not None:
                chain.append(current)


class RoleDeletionCheck(RoleCheck):
    """Ownership, active assignments, dependent child roles and forced deletion."""

    schema = RoleDeletionPayload

    async def check(
        self,
        data: RoleDeletionPayload,
        context: ValidationContext,
        primitives: SemanticPrimitives,
    ) -> ValidationResult:
        role_id = str(data.role_id)
        store = primitives.store
        issues = IssueCollector(context)

        issues.add(await primitives.validate_tenant_ownership(EntityTypes.ROLE, role_id, context.tenant_id, context))

        active_assignments = await store.count_active_assignments(role_id, context.tenant_id)
        if active_assignments and not data.force:
            issues.error(
                "role_id",
                "Cannot delete role with active assignments. Use force=true to override.",
                IssueCodes.ROLE_HAS_ACTIVE_ASSIGNMENTS,
                suggestion="Remove assignments or use force deletion",
                active_assignments=active_assignments,
            )

        child_roles = await store.count_child_roles(role_id, context.tenant_id)
        if child_roles:
            issues.warning(
                "role_id",
                "Deleting role will affect child roles that inherit from it",
                IssueCodes.ROLE_HAS_CHILDREN_WARNING,
                impact="Child roles will lose inheritance",
                child_roles=child_roles,
            )

        if data.force:
            issues.warning(
                "force",
                "Force deletion may cause data inconsistencies",
                IssueCodes.FORCE_DELETION_WARNING,
                requires_audit=True,
            )

        return issues.to_result(data)
