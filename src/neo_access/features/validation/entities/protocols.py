"""Protocols for the validation runtime.

The runtime only depends on these seams: a store answering tenant-scoped
existence questions, a provider establishing tenant scopes and the
per-entity semantic checks.
"""

from abc import abstractmethod
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncContextManager,
    Optional,
    Protocol,
    Sequence,
    Type,
    runtime_checkable,
)

from pydantic import BaseModel

from .issue import ValidationContext
from .result import ValidationResult
from .scope import TenantScope

if TYPE_CHECKING:
    from ..services.primitives import SemanticPrimitives


@runtime_checkable
class ValidationStore(Protocol):
    """Store queries used by semantic checks. Every call is tenant-parameterized."""

    @abstractmethod
    async def exists_with_value(
        self,
        entity_type: str,
        field: str,
        value: Any,
        tenant_id: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        """Check whether another record of the tenant already has ``value`` for ``field``."""
        ...

    @abstractmethod
    async def belongs_to_tenant(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        """Check that the entity exists and is owned by the tenant."""
        ...

    @abstractmethod
    async def entity_exists(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        """Check that the entity exists and is visible to the tenant (global records included)."""
        ...

    @abstractmethod
    async def count_active_assignments(self, role_id: str, tenant_id: str) -> int:
        ...

    @abstractmethod
    async def count_child_roles(self, role_id: str, tenant_id: str) -> int:
        ...

    @abstractmethod
    async def get_parent_role_id(self, role_id: str, tenant_id: str) -> Optional[str]:
        ...

    @abstractmethod
    async def count_roles(self, tenant_id: str) -> int:
        ...


@runtime_checkable
class TenantScopeProvider(Protocol):
    """Establishes a tenant isolation scope for the duration of a block."""

    @abstractmethod
    def scope(
        self,
        tenant_id: str,
        actor_id: Optional[str] = None,
        roles: Sequence[str] = (),
        correlation_id: Optional[str] = None,
    ) -> AsyncContextManager[TenantScope]:
        """Enter a scope; it must be released on every exit path."""
        ...


@runtime_checkable
class SemanticCheck(Protocol):
    """Entity-specific validation: structural schema plus store-backed rules."""

    entity_kind: str
    schema: Type[BaseModel]

    @abstractmethod
    async def check(
        self,
        data: BaseModel,
        context: ValidationContext,
        primitives: "SemanticPrimitives",
    ) -> ValidationResult:
        """Run every applicable rule on structurally valid ``data`` and collect all issues."""
        ...
