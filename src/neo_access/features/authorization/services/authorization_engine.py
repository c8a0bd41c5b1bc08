"""
Authorization engine.

Pure decision functions over roles and permissions supplied by the caller:
permission and role membership checks, hierarchy comparisons, escalation
prevention and tenant-context checks. The engine never fetches anything
and never raises for a business-rule violation.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ....config.settings import AccessSettings, get_settings
from ..entities.decision import AuthorizationDecision
from ..entities.role_hierarchy import RoleHierarchy

logger = logging.getLogger(__name__)


class DecisionCodes:
    """Machine codes carried by denied decisions."""

    ROLE_ESCALATION = "ROLE_ESCALATION"
    MANAGER_ROLE_RESTRICTION = "MANAGER_ROLE_RESTRICTION"
    MISSING_TENANT_CONTEXT = "MISSING_TENANT_CONTEXT"
    CROSS_TENANT_OPERATION = "CROSS_TENANT_OPERATION"


def _held(values: Optional[Iterable[str]]) -> frozenset:
    return frozenset(values or ())


class AuthorizationEngine:
    """Answer authorization questions against a loaded role/permission catalog.

    Args:
        hierarchy: Role levels and the named admin/manager tiers
        role_permissions: Compiled role to permission-code matrix
        catalog_permissions: Every permission code in the catalog; the admin
            role resolves to this list
    """

    def __init__(
        self,
        hierarchy: Optional[RoleHierarchy] = None,
        role_permissions: Optional[Mapping[str, Sequence[str]]] = None,
        catalog_permissions: Optional[Sequence[str]] = None,
    ):
        self.hierarchy = hierarchy or RoleHierarchy()
        self._role_permissions: Dict[str, Tuple[str, ...]] = {
            role: tuple(codes) for role, codes in (role_permissions or {}).items()
        }
        self._catalog_permissions: Tuple[str, ...] = tuple(catalog_permissions or ())

    @classmethod
    def from_catalog(cls, catalog, settings: Optional[AccessSettings] = None) -> "AuthorizationEngine":
        """Build an engine from a CompiledCatalog."""
        settings = settings or get_settings()
        return cls(
            hierarchy=RoleHierarchy.from_settings(settings),
            role_permissions=catalog.role_matrix(settings.admin_role),
            catalog_permissions=catalog.permission_codes,
        )

    # Permission membership

    def has_permission(self, held: Optional[Iterable[str]], required: str) -> bool:
        held_set = _held(held)
        return bool(held_set) and required in held_set

    def has_any_permission(self, held: Optional[Iterable[str]], required: Iterable[str]) -> bool:
        held_set = _held(held)
        if not held_set:
            return False
        return any(permission in held_set for permission in required)

    def has_all_permissions(self, held: Optional[Iterable[str]], required: Iterable[str]) -> bool:
        held_set = _held(held)
        if not held_set:
            return False
        return all(permission in held_set for permission in required)

    # Role membership

    def has_role(self, held: Optional[Iterable[str]], required: str) -> bool:
        held_set = _held(held)
        return bool(held_set) and required in held_set

    def has_any_role(self, held: Optional[Iterable[str]], required: Iterable[str]) -> bool:
        held_set = _held(held)
        if not held_set:
            return False
        return any(role in held_set for role in required)

    def has_all_roles(self, held: Optional[Iterable[str]], required: Iterable[str]) -> bool:
        held_set = _held(held)
        if not held_set:
            return False
        return all(role in held_set for role in required)

    # Hierarchy helpers

    def hierarchy_level(self, role: str) -> int:
        return self.hierarchy.level(role)

    def highest_role(self, roles: Iterable[str]) -> Optional[str]:
        return self.hierarchy.highest_role(roles)

    def has_minimum_role(self, held: Optional[Iterable[str]], required: str) -> bool:
        """True when any held role is at least as privileged as ``required``."""
        return self.hierarchy.is_at_least(held or (), required)

    def permissions_for_roles(self, roles: Optional[Iterable[str]]) -> Tuple[str, ...]:
        """Union of the permissions granted by ``roles``, in catalog order.

        The admin role resolves to the full catalog.
        """
        seen: Dict[str, None] = {}
        for role in roles or ():
            if role == self.hierarchy.admin_role and self._catalog_permissions:
                codes: Sequence[str] = self._catalog_permissions
            else:
                codes = self._role_permissions.get(role, ())
            for code in codes:
                seen.setdefault(code, None)
        return tuple(seen)

    def can_assign_role(self, assigner_roles: Sequence[str], target_role: str) -> bool:
        return self.validate_role_escalation(assigner_roles, [target_role]).granted

    # Escalation prevention

    def validate_role_escalation(
        self,
        performer_roles: Sequence[str],
        target_roles: Sequence[str],
    ) -> AuthorizationDecision:
        """Check that the performer may grant ``target_roles``.

        Raises:
            ValueError: If either role list is empty
        """
        if not performer_roles:
            raise ValueError("performer_roles must contain at least one role")
        if not target_roles:
            raise ValueError("target_roles must contain at least one role")

        hierarchy = self.hierarchy
        performer_level = hierarchy.max_level(performer_roles)
        target_level = hierarchy.max_level(target_roles)

        if target_level > performer_level:
            decision = AuthorizationDecision.deny(
                "Cannot assign roles with higher privileges than your own",
                code=DecisionCodes.ROLE_ESCALATION,
                performer_level=performer_level,
                target_level=target_level,
            )
            logger.info(
                f"Role escalation denied: performer={list(performer_roles)} "
                f"level={performer_level}, targets={list(target_roles)} level={target_level}"
            )
            return decision

        if hierarchy.admin_role in performer_roles:
            return AuthorizationDecision.allow("Administrators may assign any role")

        if hierarchy.manager_role in performer_roles:
            forbidden = [role for role in target_roles if role in hierarchy.manager_forbidden_roles]
            if forbidden:
                logger.info(
                    f"Role escalation denied: manager performer={list(performer_roles)} "
                    f"cannot assign {forbidden}"
                )
                return AuthorizationDecision.deny(
                    "Project managers cannot assign admin or project manager roles",
                    code=DecisionCodes.MANAGER_ROLE_RESTRICTION,
                    forbidden_roles=forbidden,
                )

        return AuthorizationDecision.allow("Role assignment within privilege level")

    def validate_tenant_context(
        self,
        performer_tenant_id: Optional[str],
        target_tenant_id: Optional[str],
    ) -> AuthorizationDecision:
        """Reject missing tenant ids and any cross-tenant operation, whatever the roles."""
        if not performer_tenant_id or not target_tenant_id:
            return AuthorizationDecision.deny(
                "Both performer and target tenant IDs are required",
                code=DecisionCodes.MISSING_TENANT_CONTEXT,
            )
        if str(performer_tenant_id) != str(target_tenant_id):
            logger.info(
                f"Cross-tenant operation denied: {performer_tenant_id} -> {target_tenant_id}"
            )
            return AuthorizationDecision.deny(
                "Cannot perform RBAC operations across different tenants",
                code=DecisionCodes.CROSS_TENANT_OPERATION,
                performer_tenant_id=str(performer_tenant_id),
                target_tenant_id=str(target_tenant_id),
            )
        return AuthorizationDecision.allow("Same tenant")
