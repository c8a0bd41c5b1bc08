"""Role validators: payload schemas plus the five role semantic checks."""

from .schemas import (
    RoleAssignmentPayload,
    RoleCreatePayload,
    RoleDeletionPayload,
    RoleHierarchyPayload,
    RoleUpdatePayload,
    normalize_role_code,
    normalize_tenant_id,
)
from .validators import (
    RoleAssignmentCheck,
    RoleCreationCheck,
    RoleDeletionCheck,
    RoleHierarchyCheck,
    RoleUpdateCheck,
)

__all__ = [
    "RoleAssignmentPayload",
    "RoleCreatePayload",
    "RoleDeletionPayload",
    "RoleHierarchyPayload",
    "RoleUpdatePayload",
    "normalize_role_code",
    "normalize_tenant_id",
    "RoleAssignmentCheck",
    "RoleCreationCheck",
    "RoleDeletionCheck",
    "RoleHierarchyCheck",
    "RoleUpdateCheck",
]
