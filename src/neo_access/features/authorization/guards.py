"""
FastAPI enforcement gates.

Both gates read the authenticated Principal from ``request.state.principal``
(set by the host's authentication layer) and answer 401 when it is missing
or has no tenant, 403 when it is insufficient.

    require_project_write = PermissionGate("Project.update", role_permissions=ROLE_PERMISSIONS)

    @router.put("/projects/{project_id}")
    async def update_project(principal: Principal = Depends(require_project_write)):
        ...
"""

import logging
from typing import Mapping, Optional, Sequence

from fastapi import HTTPException, Request, status

from .entities.principal import Principal
from .entities.role_hierarchy import RoleHierarchy
from .services.authorization_engine import AuthorizationEngine

logger = logging.getLogger(__name__)


def get_principal(request: Request) -> Principal:
    """Return the authenticated principal or raise 401."""
    principal = getattr(request.state, "principal", None)
    if principal is None or not principal.roles:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No role assigned",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not principal.tenant_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No tenant context",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


class PermissionGate:
    """Dependency requiring one permission, held directly or through a role."""

    def __init__(
        self,
        permission: str,
        role_permissions: Optional[Mapping[str, Sequence[str]]] = None,
        engine: Optional[AuthorizationEngine] = None,
    ):
        self.permission = permission
        self.engine = engine or AuthorizationEngine(role_permissions=role_permissions)

    async def __call__(self, request: Request) -> Principal:
        principal = get_principal(request)
        held = set(principal.permissions)
        held.update(self.engine.permissions_for_roles(principal.roles))

        if not self.engine.has_permission(held, self.permission):
            logger.info(
                f"Permission denied: user={principal.user_id} tenant={principal.tenant_id} "
                f"required={self.permission}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Forbidden - Insufficient permissions",
                    "required": self.permission,
                    "roles": list(principal.roles),
                },
            )
        return principal


class RoleLevelGate:
    """Dependency requiring at least the hierarchy level of ``role``.

    One parameterized gate serves every role through the role to
    minimum-level table.
    """

    def __init__(self, role: str, role_levels: Optional[Mapping[str, int]] = None):
        self.role = role
        self.hierarchy = RoleHierarchy(levels=role_levels) if role_levels is not None else RoleHierarchy()

    async def __call__(self, request: Request) -> Principal:
        principal = get_principal(request)
        if not self.hierarchy.is_at_least(principal.roles, self.role):
            logger.info(
                f"Role level denied: user={principal.user_id} roles={list(principal.roles)} "
                f"required={self.role}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": f"Forbidden - {self.role} role required",
                    "required": self.role,
                    "roles": list(principal.roles),
                },
            )
        return principal
