"""Validation value objects, scope and protocols."""

from .issue import ValidationContext, ValidationIssue, utc_now
from .protocols import SemanticCheck, TenantScopeProvider, ValidationStore
from .result import IssueCollector, ValidationResult
from .scope import (
    TenantScope,
    get_active_scope,
    publish_scope,
    require_active_scope,
    reset_scope,
)

__all__ = [
    "ValidationContext",
    "ValidationIssue",
    "utc_now",
    "SemanticCheck",
    "TenantScopeProvider",
    "ValidationStore",
    "IssueCollector",
    "ValidationResult",
    "TenantScope",
    "get_active_scope",
    "publish_scope",
    "require_active_scope",
    "reset_scope",
]
