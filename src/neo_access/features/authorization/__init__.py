"""Authorization feature: permission, role and escalation decisions."""

from .entities import AuthorizationDecision, Principal, RoleHierarchy
from .guards import PermissionGate, RoleLevelGate, get_principal
from .services import (
    AuthorizationEngine,
    DecisionCodes,
    FormatCheck,
    parse_permission,
    validate_permission_format,
    validate_role_code,
)

__all__ = [
    "AuthorizationDecision",
    "Principal",
    "RoleHierarchy",
    "PermissionGate",
    "RoleLevelGate",
    "get_principal",
    "AuthorizationEngine",
    "DecisionCodes",
    "FormatCheck",
    "parse_permission",
    "validate_permission_format",
    "validate_role_code",
]
