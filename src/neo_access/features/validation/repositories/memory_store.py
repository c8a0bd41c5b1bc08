"""In-memory ValidationStore.

Keeps records per entity type with their owning tenant (None for global
records such as permissions). Used by tests and by hosts that validate
against a preloaded snapshot.
"""

import uuid
from typing import Any, Dict, List, Optional, Tuple

from ....config.constants import EntityTypes
from ..entities.scope import require_active_scope


class InMemoryValidationStore:
    """ValidationStore backed by dictionaries.

    Args:
        enforce_scope: Refuse every query made outside an active tenant
            scope for the queried tenant
    """

    def __init__(self, enforce_scope: bool = False):
        self.enforce_scope = enforce_scope
        self._records: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []

    # Seeding

    def add(self, entity_type: str, tenant_id: Optional[Any], entity_id: Optional[Any] = None, **fields: Any) -> str:
        """Store a record and return its id."""
        record_id = str(entity_id) if entity_id is not None else str(uuid.uuid4())
        record = {key: self._normalize(value) for key, value in fields.items()}
        record["id"] = record_id
        record["tenant_id"] = str(tenant_id) if tenant_id is not None else None
        self._records.setdefault(entity_type, {})[record_id] = record
        return record_id

    def add_role(self, tenant_id: Any, code: str, name: Optional[str] = None, role_id: Optional[Any] = None,
                 parent_role_id: Optional[Any] = None) -> str:
        return self.add(EntityTypes.ROLE, tenant_id, role_id, code=code, name=name or code.title(),
                        parent_role_id=parent_role_id)

    def add_member(self, tenant_id: Any, member_id: Optional[Any] = None) -> str:
        return self.add(EntityTypes.MEMBER, tenant_id, member_id)

    def add_permission(self, code: str, permission_id: Optional[Any] = None) -> str:
        return self.add(EntityTypes.PERMISSION, None, permission_id, code=code)

    def add_assignment(self, tenant_id: Any, role_id: Any, member_id: Any, active: bool = True) -> str:
        return self.add(EntityTypes.ROLE_ASSIGNMENT, tenant_id, role_id=role_id, member_id=member_id,
                        active=active)

    def set_parent(self, role_id: Any, parent_role_id: Optional[Any]) -> None:
        self._records[EntityTypes.ROLE][str(role_id)]["parent_role_id"] = self._normalize(parent_role_id)

    # ValidationStore

    async def exists_with_value(self, entity_type: str, field: str, value: Any, tenant_id: str,
                                exclude_id: Optional[str] = None) -> bool:
        self._enter("exists_with_value", tenant_id)
        wanted = self._normalize(value)
        return any(
            record.get(field) == wanted and record["id"] != exclude_id
            for record in self._tenant_records(entity_type, tenant_id)
        )

    async def belongs_to_tenant(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        self._enter("belongs_to_tenant", tenant_id)
        record = self._records.get(entity_type, {}).get(str(entity_id))
        return record is not None and record["tenant_id"] == str(tenant_id)

    async def entity_exists(self, entity_type: str, entity_id: str, tenant_id: str) -> bool:
        self._enter("entity_exists", tenant_id)
        record = self._records.get(entity_type, {}).get(str(entity_id))
        return record is not None and record["tenant_id"] in (None, str(tenant_id))

    async def count_active_assignments(self, role_id: str, tenant_id: str) -> int:
        self._enter("count_active_assignments", tenant_id)
        return sum(
            1 for record in self._tenant_records(EntityTypes.ROLE_ASSIGNMENT, tenant_id)
            if record.get("role_id") == str(role_id) and record.get("active")
        )

    async def count_child_roles(self, role_id: str, tenant_id: str) -> int:
        self._enter("count_child_roles", tenant_id)
        return sum(
            1 for record in self._tenant_records(EntityTypes.ROLE, tenant_id)
            if record.get("parent_role_id") == str(role_id)
        )

    async def get_parent_role_id(self, role_id: str, tenant_id: str) -> Optional[str]:
        self._enter("get_parent_role_id", tenant_id)
        record = self._records.get(EntityTypes.ROLE, {}).get(str(role_id))
        if record is None or record["tenant_id"] != str(tenant_id):
            return None
        return record.get("parent_role_id")

    async def count_roles(self, tenant_id: str) -> int:
        self._enter("count_roles", tenant_id)
        return len(self._tenant_records(EntityTypes.ROLE, tenant_id))

    # Helpers

    def _enter(self, operation: str, tenant_id: Optional[str]) -> None:
        self.calls.append((operation, str(tenant_id) if tenant_id is not None else None))
        if self.enforce_scope:
            require_active_scope(tenant_id)

    def _tenant_records(self, entity_type: str, tenant_id: str) -> List[Dict[str, Any]]:
        return [
            record for record in self._records.get(entity_type, {}).values()
            if record["tenant_id"] == str(tenant_id)
        ]

    @staticmethod
    def _normalize(value: Any) -> Any:
        return str(value) if isinstance(value, uuid.UUID) else value
