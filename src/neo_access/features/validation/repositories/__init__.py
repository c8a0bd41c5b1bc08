"""Store and tenant-scope implementations for the validation runtime."""

from .asyncpg_store import AsyncPGValidationStore, TableMapping
from .memory_store import InMemoryValidationStore
from .tenant_scope import AsyncPGTenantScopeProvider, InMemoryTenantScopeProvider

__all__ = [
    "AsyncPGValidationStore",
    "TableMapping",
    "InMemoryValidationStore",
    "AsyncPGTenantScopeProvider",
    "InMemoryTenantScopeProvider",
]
