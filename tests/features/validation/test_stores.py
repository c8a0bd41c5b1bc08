"""Tests for validation stores and tenant scope providers."""

import json
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from neo_access.config.constants import EntityTypes
from neo_access.config.settings import AccessSettings
from neo_access.core.exceptions import StoreError, TenantIsolationError
from neo_access.features.validation import (
    AsyncPGTenantScopeProvider,
    AsyncPGValidationStore,
    InMemoryValidationStore,
    TenantScope,
    get_active_scope,
    require_active_scope,
)
from neo_access.features.validation.entities.scope import publish_scope, reset_scope


@pytest.fixture
def connection():
    """Fake asyncpg connection."""
    conn = MagicMock()
    conn.execute = AsyncMock()
    conn.fetchval = AsyncMock(return_value=True)
    return conn


@pytest.fixture
def active_scope(connection, tenant_a):
    """Publish a scope for tenant_a bound to the fake connection."""
    token = publish_scope(TenantScope(tenant_id=tenant_a, connection=connection))
    yield
    reset_scope(token)


class TestTenantScope:
    """Test cases for TenantScope and the active scope variable."""

    def test_claims(self):
        scope = TenantScope(
            tenant_id="t-1", actor_id="u-1", roles=("ADMIN", "WORKER"), correlation_id="c-1"
        )

        assert scope.claims() == {
            "tenant_id": "t-1",
            "user_id": "u-1",
            "role": "authenticated",
            "roles": "ADMIN,WORKER",
            "correlation_id": "c-1",
        }

    def test_require_without_scope(self):
        with pytest.raises(TenantIsolationError):
            require_active_scope()

    def test_require_for_other_tenant(self, tenant_a, tenant_b):
        token = publish_scope(TenantScope(tenant_id=tenant_a))
        try:
            with pytest.raises(TenantIsolationError) as exc_info:
                require_active_scope(tenant_b)
        finally:
            reset_scope(token)

        assert exc_info.value.details["requested_tenant_id"] == tenant_b
        assert get_active_scope() is None


class TestInMemoryValidationStore:
    """Test cases for InMemoryValidationStore."""

    @pytest.mark.asyncio
    async def test_uniqueness_is_tenant_scoped(self, tenant_a, tenant_b):
        store = InMemoryValidationStore()
        role_id = store.add_role(tenant_a, "WORKER")

        assert await store.exists_with_value(EntityTypes.ROLE, "code", "WORKER", tenant_a)
        assert not await store.exists_with_value(EntityTypes.ROLE, "code", "WORKER", tenant_b)
        assert not await store.exists_with_value(
            EntityTypes.ROLE, "code", "WORKER", tenant_a, exclude_id=role_id
        )

    @pytest.mark.asyncio
    async def test_global_records_exist_for_every_tenant(self, tenant_a):
        store = InMemoryValidationStore()
        permission_id = store.add_permission("Project.read")

        assert await store.entity_exists(EntityTypes.PERMISSION, permission_id, tenant_a)
        assert not await store.belongs_to_tenant(EntityTypes.PERMISSION, permission_id, tenant_a)

    @pytest.mark.asyncio
    async def test_enforced_scope_refuses_unscoped_access(self, tenant_a):
        store = InMemoryValidationStore(enforce_scope=True)

        with pytest.raises(TenantIsolationError):
            await store.count_roles(tenant_a)

    @pytest.mark.asyncio
    async def test_enforced_scope_allows_own_tenant(self, tenant_a, tenant_b):
        store = InMemoryValidationStore(enforce_scope=True)
        store.add_role(tenant_a, "WORKER")
        token = publish_scope(TenantScope(tenant_id=tenant_a))
        try:
            assert await store.count_roles(tenant_a) == 1
            with pytest.raises(TenantIsolationError):
                await store.count_roles(tenant_b)
        finally:
            reset_scope(token)

        assert store.calls == [("count_roles", tenant_a), ("count_roles", tenant_b)]


class TestAsyncPGValidationStore:
    """Test cases for AsyncPGValidationStore."""

    @pytest.mark.asyncio
    async def test_exists_with_value_query(self, connection, active_scope, tenant_a):
        store = AsyncPGValidationStore()

        assert await store.exists_with_value(EntityTypes.ROLE, "code", "WORKER", tenant_a, exclude_id="r-1")

        query, *args = connection.fetchval.call_args.args
        assert '"Role"' in query
        assert '"code" = $1' in query
        assert '"tenantId" = $2' in query
        assert '"id" <> $3' in query
        assert args == ["WORKER", tenant_a, "r-1"]

    @pytest.mark.asyncio
    async def test_global_entity_has_no_tenant_filter(self, connection, active_scope, tenant_a):
        store = AsyncPGValidationStore()

        await store.exists_with_value(EntityTypes.PERMISSION, "code", "Project.read", tenant_a)

        query, *args = connection.fetchval.call_args.args
        assert "tenantId" not in query
        assert args == ["Project.read"]

    @pytest.mark.asyncio
    async def test_global_entity_never_belongs_to_tenant(self, connection, active_scope, tenant_a):
        store = AsyncPGValidationStore()

        assert not await store.belongs_to_tenant(EntityTypes.PERMISSION, "p-1", tenant_a)
        connection.fetchval.assert_not_called()

    @pytest.mark.asyncio
    async def test_active_assignment_count(self, connection, active_scope, tenant_a):
        connection.fetchval.return_value = 4
        store = AsyncPGValidationStore()

        assert await store.count_active_assignments("r-1", tenant_a) == 4

        query = connection.fetchval.call_args.args[0]
        assert "\"status\" = 'ACTIVE'" in query
        assert '"effectiveTo" IS NULL' in query

    @pytest.mark.asyncio
    async def test_parent_role_id_is_stringified(self, connection, active_scope, tenant_a):
        parent = "3f2b8c1e-0000-4000-8000-000000000001"
        connection.fetchval.return_value = parent
        store = AsyncPGValidationStore()

        assert await store.get_parent_role_id("r-1", tenant_a) == parent

        connection.fetchval.return_value = None
        assert await store.get_parent_role_id("r-1", tenant_a) is None

    @pytest.mark.asyncio
    async def test_unknown_entity_type(self, active_scope, tenant_a):
        with pytest.raises(StoreError):
            await AsyncPGValidationStore().exists_with_value("Invoice", "code", "X", tenant_a)

    @pytest.mark.asyncio
    async def test_unknown_field(self, active_scope, tenant_a):
        with pytest.raises(StoreError) as exc_info:
            await AsyncPGValidationStore().exists_with_value(EntityTypes.ROLE, "drop_table", "X", tenant_a)

        assert exc_info.value.details["field"] == "drop_table"

    @pytest.mark.asyncio
    async def test_postgres_error_becomes_store_error(self, connection, active_scope, tenant_a):
        connection.fetchval.side_effect = asyncpg.exceptions.UndefinedTableError("relation does not exist")

        with pytest.raises(StoreError) as exc_info:
            await AsyncPGValidationStore().count_roles(tenant_a)

        assert isinstance(exc_info.value.__cause__, asyncpg.PostgresError)

    @pytest.mark.asyncio
    async def test_requires_scope(self, tenant_a):
        with pytest.raises(TenantIsolationError):
            await AsyncPGValidationStore().count_roles(tenant_a)

    @pytest.mark.asyncio
    async def test_scope_without_connection(self, tenant_a):
        token = publish_scope(TenantScope(tenant_id=tenant_a))
        try:
            with pytest.raises(StoreError):
                await AsyncPGValidationStore().count_roles(tenant_a)
        finally:
            reset_scope(token)


class TestAsyncPGTenantScopeProvider:
    """Test cases for AsyncPGTenantScopeProvider."""

    @pytest.fixture
    def pool(self, connection):
        pool = MagicMock()
        pool.acquire.return_value.__aenter__.return_value = connection
        return pool

    @pytest.mark.asyncio
    async def test_writes_claims_and_publishes_scope(self, pool, connection, tenant_a):
        provider = AsyncPGTenantScopeProvider(pool, settings=AccessSettings(rls_claims_setting="app.claims"))

        async with provider.scope(tenant_a, actor_id="u-1", roles=["WORKER"]) as scope:
            assert get_active_scope() is scope
            assert scope.connection is connection

        setting, claims = connection.execute.call_args.args[1:]
        assert setting == "app.claims"
        assert json.loads(claims)["tenant_id"] == tenant_a
        assert json.loads(claims)["roles"] == "WORKER"
        connection.transaction.assert_called_once()
        assert get_active_scope() is None

    @pytest.mark.asyncio
    async def test_scope_released_on_error(self, pool, tenant_a):
        provider = AsyncPGTenantScopeProvider(pool, settings=AccessSettings())

        with pytest.raises(RuntimeError):
            async with provider.scope(tenant_a):
                raise RuntimeError("boom")

        assert get_active_scope() is None
        pool.acquire.return_value.__aexit__.assert_awaited_once()
