"""
Tenant-scoped asynchronous validation.

Structural validation with pydantic, then store-backed semantic checks
run inside a tenant isolation scope.
"""

from .entities import (
    IssueCollector,
    SemanticCheck,
    TenantScope,
    TenantScopeProvider,
    ValidationContext,
    ValidationIssue,
    ValidationResult,
    ValidationStore,
    get_active_scope,
    require_active_scope,
)
from .repositories import (
    AsyncPGTenantScopeProvider,
    AsyncPGValidationStore,
    InMemoryTenantScopeProvider,
    InMemoryValidationStore,
)
from .roles import (
    RoleAssignmentCheck,
    RoleAssignmentPayload,
    RoleCreatePayload,
    RoleCreationCheck,
    RoleDeletionCheck,
    RoleDeletionPayload,
    RoleHierarchyCheck,
    RoleHierarchyPayload,
    RoleUpdateCheck,
    RoleUpdatePayload,
)
from .services import (
    AsyncValidationRuntime,
    EntityReference,
    SemanticPrimitives,
    combine_async_results,
)

__all__ = [
    "IssueCollector",
    "SemanticCheck",
    "TenantScope",
    "TenantScopeProvider",
    "ValidationContext",
    "ValidationIssue",
    "ValidationResult",
    "ValidationStore",
    "get_active_scope",
    "require_active_scope",
    "AsyncPGTenantScopeProvider",
    "AsyncPGValidationStore",
    "InMemoryTenantScopeProvider",
    "InMemoryValidationStore",
    "RoleAssignmentCheck",
    "RoleAssignmentPayload",
    "RoleCreatePayload",
    "RoleCreationCheck",
    "RoleDeletionCheck",
    "RoleDeletionPayload",
    "RoleHierarchyCheck",
    "RoleHierarchyPayload",
    "RoleUpdateCheck",
    "RoleUpdatePayload",
    "AsyncValidationRuntime",
    "EntityReference",
    "SemanticPrimitives",
    "combine_async_results",
]
