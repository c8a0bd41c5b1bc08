"""
Tenant isolation scope providers.

The asyncpg provider acquires a pooled connection, opens a transaction and
writes the session claims with ``set_config(..., true)`` so they vanish
with the transaction. The active scope is published through a context
variable for the duration of the block and reset on every exit path.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

import asyncpg

from ....config.settings import AccessSettings, get_settings
from ..entities.scope import TenantScope, publish_scope, reset_scope

logger = logging.getLogger(__name__)


class AsyncPGTenantScopeProvider:
    """TenantScopeProvider over an asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool, settings: Optional[AccessSettings] = None):
        self._pool = pool
        self._claims_setting = (settings or get_settings()).rls_claims_setting

    @asynccontextmanager
    async def scope(
        self,
        tenant_id: str,
        actor_id: Optional[str] = None,
        roles: Sequence[str] = (),
        correlation_id: Optional[str] = None,
    ) -> AsyncIterator[TenantScope]:
        async with self._pool.acquire() as connection:
            async with connection.transaction():
                scope = TenantScope(
                    tenant_id=str(tenant_id),
                    actor_id=str(actor_id) if actor_id is not None else None,
                    roles=tuple(roles),
                    correlation_id=correlation_id,
                    connection=connection,
                )
                await connection.execute(
                    "SELECT set_config($1, $2, true)",
                    self._claims_setting,
                    json.dumps(scope.claims()),
                )
                token = publish_scope(scope)
                logger.debug(f"Tenant scope acquired: tenant={scope.tenant_id} actor={scope.actor_id}")
                try:
                    yield scope
                finally:
                    reset_scope(token)
                    logger.debug(f"Tenant scope released: tenant={scope.tenant_id}")


class InMemoryTenantScopeProvider:
    """TenantScopeProvider that records acquisitions and releases."""

    def __init__(self):
        self.acquired: List[TenantScope] = []
        self.released: List[TenantScope] = []

    @property
    def active_count(self) -> int:
        return len(self.acquired) - len(self.released)

    @asynccontextmanager
    async def scope(
        self,
        tenant_id: str,
        actor_id: Optional[str] = None,
        roles: Sequence[str] = (),
        correlation_id: Optional[str] = None,
    ) -> AsyncIterator[TenantScope]:
        scope = TenantScope(
            tenant_id=str(tenant_id),
            actor_id=str(actor_id) if actor_id is not None else None,
            roles=tuple(roles),
            correlation_id=correlation_id,
        )
        self.acquired.append(scope)
        token = publish_scope(scope)
        logger.debug(f"Tenant scope acquired: tenant={scope.tenant_id}")
        try:
            yield scope
        finally:
            reset_scope(token)
            self.released.append(scope)
            logger.debug(f"Tenant scope released: tenant={scope.tenant_id}")
