"""Tenant isolation scope and the context variable publishing the active one.

A scope binds all store access during a validation call to one tenant,
actor and role set. Providers enter a scope, publish it here and reset it
on every exit path; stores read it to refuse access outside a scope.
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ....core.exceptions import TenantIsolationError


@dataclass(frozen=True)
class TenantScope:
    """An established tenant isolation scope."""

    tenant_id: str
    actor_id: Optional[str] = None
    roles: Tuple[str, ...] = ()
    correlation_id: Optional[str] = None
    connection: Any = None

    def claims(self) -> Dict[str, Any]:
        """Session claims as written to the database setting."""
        return {
            "tenant_id": self.tenant_id,
            "user_id": self.actor_id,
            "role": "authenticated",
            "roles": ",".join(self.roles),
            "correlation_id": self.correlation_id,
        }


_active_scope: ContextVar[Optional[TenantScope]] = ContextVar("neo_access_tenant_scope", default=None)


def get_active_scope() -> Optional[TenantScope]:
    return _active_scope.get()


def publish_scope(scope: TenantScope) -> Token:
    return _active_scope.set(scope)


def reset_scope(token: Token) -> None:
    _active_scope.reset(token)


def require_active_scope(tenant_id: Optional[str] = None) -> TenantScope:
    """Return the active scope, checking it belongs to ``tenant_id`` when given.

    Raises:
        TenantIsolationError: If no scope is active or it is for another tenant
    """
    scope = _active_scope.get()
    if scope is None:
        raise TenantIsolationError("Store accessed outside an active tenant scope")
    if tenant_id is not None and str(tenant_id) != scope.tenant_id:
        raise TenantIsolationError(
            "Store accessed for a tenant other than the active scope",
            details={"scope_tenant_id": scope.tenant_id, "requested_tenant_id": str(tenant_id)},
        )
    return scope
