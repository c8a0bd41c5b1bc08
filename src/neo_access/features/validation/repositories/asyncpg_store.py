"""
ValidationStore implementation using AsyncPG.

Every query runs on the connection of the active tenant scope, so it sees
only what the session claims allow, and every query is additionally
filtered by tenant id. Table and column names come from a fixed map and
are never taken from caller input.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import asyncpg

from ....config.constants import EntityTypes
from ....core.exceptions import StoreError
from ..entities.scope import require_active_scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableMapping:
    """Where an entity type lives and which of its fields may be queried."""

    table: str
    tenant_column: Optional[str]
    columns: Dict[str, str]


TABLES: Dict[str, TableMapping] = {
    EntityTypes.ROLE: TableMapping(
        table='"Role"',
        tenant_column='"tenantId"',
        columns={"code": '"code"', "name": '"name"', "parent_role_id": '"parentRoleId"'},
    ),
    EntityTypes.PERMISSION: TableMapping(
        table='"Permission"',
        tenant_column=None,
        columns={"code": '"code"', "name": '"name"'},
    ),
    EntityTypes.MEMBER: TableMapping(
        table='"Member"',
        tenant_column='"tenantId"',
        columns={"email": '"email"'},
    ),
    EntityTypes.ROLE_ASSIGNMENT: TableMapping(
        table='"MemberRole"',
        tenant_column='"tenantId"',
        columns={"role_id": '"roleId"', "member_id": '"memberId"'},
    ),
}


def _mapping(entity_type: str) -> TableMapping:
    try:
        return TABLES[entity_type]
    except KeyError:
        raise StoreError(f"Unknown entity type: {entity_type}", details={"entity_type": entity_type})


def _column(mapping: TableMapping, field: str) -> str:
    try:
        return mapping.columns[field]
    except KeyError:
        raise StoreError(
            f"Field {field} cannot be queried on {mapping.table}",
            details={"table": mapping.table, "field": field},
        )


class AsyncPGValidationStore:
    """ValidationStore over the connection of the active tenant scope."""

    async def exists_with_value(
        self,
        entity_type: str,
        field: str,
        value: Any,
        tenant_id: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        mapping = _mapping(entity_type)
        column = _column(mapping, field)
        conditions = [f"{column} = $1"]
        args = [value]
        if mapping.tenant_column:
            args.append(str(tenant_id))
            conditions.append(f"{mapping.tenant_column} = ${len(args)}")
        if exclude_id is not None:
            args.append(str(exclude_id))
            conditions.append(f'"id" <> ${len(args)}')
        query = f"SELECT EXISTS (SELECT 1 FROM {mapping.table} WHERE {' AND '.join(conditions)})"
        return bool(await self._fetchval(tenant_id, query, *args))

    async def belongs_to_tenant(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        mapping = _mapping(entity_type)
        if mapping.tenant_column is None:
            return False
        query = f"""
            SELECT EXISTS (
                SELECT 1 FROM {mapping.table}
                WHERE "id" = $1 AND {mapping.tenant_column} = $2
            )
        """
        return bool(await self._fetchval(tenant_id, query, str(entity_id), str(tenant_id)))

    async def entity_exists(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        mapping = _mapping(entity_type)
        if mapping.tenant_column is None:
            query = f'SELECT EXISTS (SELECT 1 FROM {mapping.table} WHERE "id" = $1)'
            return bool(await self._fetchval(tenant_id, query, str(entity_id)))
        query = f"""
            SELECT EXISTS (
                SELECT 1 FROM {mapping.table}
                WHERE "id" = $1 AND ({mapping.tenant_column} = $2 OR {mapping.tenant_column} IS NULL)
            )
        """
        return bool(await self._fetchval(tenant_id, query, str(entity_id), str(tenant_id)))

    async def count_active_assignments(self, role_id: str, tenant_id: str) -> int:
        query = """
            SELECT COUNT(*) FROM "MemberRole"
            WHERE "roleId" = $1
                AND "tenantId" = $2
                AND "status" = 'ACTIVE'
                AND ("effectiveTo" IS NULL OR "effectiveTo" > NOW())
        """
        return int(await self._fetchval(tenant_id, query, str(role_id), str(tenant_id)) or 0)

    async def count_child_roles(self, role_id: str, tenant_id: str) -> int:
        query = 'SELECT COUNT(*) FROM "Role" WHERE "parentRoleId" = $1 AND "tenantId" = $2'
        return int(await self._fetchval(tenant_id, query, str(role_id), str(tenant_id)) or 0)

    async def get_parent_role_id(self, role_id: str, tenant_id: str) -> Optional[str]:
        query = 'SELECT "parentRoleId" FROM "Role" WHERE "id" = $1 AND "tenantId" = $2'
        parent = await self._fetchval(tenant_id, query, str(role_id), str(tenant_id))
        return str(parent) if parent is not None else None

    async def count_roles(self, tenant_id: str) -> int:
        query = 'SELECT COUNT(*) FROM "Role" WHERE "tenantId" = $1'
        return int(await self._fetchval(tenant_id, query, str(tenant_id)) or 0)

    async def _fetchval(self, tenant_id: str, query: str, *args: Any) -> Any:
        scope = require_active_scope(tenant_id)
        if scope.connection is None:
            raise StoreError("Active tenant scope has no database connection")
        try:
            return await scope.connection.fetchval(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Validation query failed for tenant {tenant_id}: {e}")
            raise StoreError(f"Validation query failed: {e}", details={"tenant_id": str(tenant_id)}) from e
