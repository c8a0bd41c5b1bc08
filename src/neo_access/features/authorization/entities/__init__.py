"""Authorization entities."""

from .decision import AuthorizationDecision
from .principal import Principal
from .role_hierarchy import RoleHierarchy

__all__ = ["AuthorizationDecision", "Principal", "RoleHierarchy"]
