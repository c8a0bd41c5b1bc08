"""Validation runtime and semantic primitives."""

from .async_validator import AsyncValidationRuntime, missing_tenant_issue, structural_issues
from .primitives import EntityReference, SemanticPrimitives, combine_async_results

__all__ = [
    "AsyncValidationRuntime",
    "missing_tenant_issue",
    "structural_issues",
    "EntityReference",
    "SemanticPrimitives",
    "combine_async_results",
]
