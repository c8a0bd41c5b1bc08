"""Generator for the parameterized, idempotent seed script.

Permissions are global and conflict on their code; roles and role-permission
links are per tenant. Every id is a bind parameter named from a SeedKey.
"""

from typing import List

from ..entities.catalog import CompiledCatalog
from ..entities.permission import PermissionKey, SeedKey
from ..services.naming import role_description, role_display_name
from .common import GENERATOR_NAME, SQL_RULE, sql_str

PERMISSION_INSERT = (
    'INSERT INTO "Permission" (\n'
    '  "id", "code", "name", "description", "category", "status", "version", "createdAt", "updatedAt"\n'
    ") VALUES (\n"
    "  {id}, {code}, {name}, {description}, {category},\n"
    "  'ACTIVE', 1, NOW(), NOW()\n"
    ') ON CONFLICT ("code") DO NOTHING;\n'
)

ROLE_INSERT = (
    'INSERT INTO "Role" (\n'
    '  "id", "tenantId", "code", "name", "description", "status", "version", "createdAt", "updatedAt"\n'
    ") VALUES (\n"
    "  {id}, {tenant}, {code}, {name}, {description},\n"
    "  'ACTIVE', 1, NOW(), NOW()\n"
    ') ON CONFLICT ("tenantId", "code") DO NOTHING;\n'
)

ROLE_PERMISSION_INSERT = (
    'INSERT INTO "RolePermission" (\n'
    '  "id", "tenantId", "roleId", "permissionId", "memberId", "status", "version", "createdAt", "updatedAt"\n'
    ") VALUES (\n"
    "  {id}, {tenant}, {role_id}, {permission_id}, NULL,\n"
    "  'ACTIVE', 1, NOW(), NOW()\n"
    ') ON CONFLICT ("tenantId", "roleId", "permissionId", "memberId") DO NOTHING;\n'
)


def _heading(title: str) -> str:
    return f"{SQL_RULE}\n-- {title}\n{SQL_RULE}\n"


def render_seed_sql(catalog: CompiledCatalog, source_name: str, admin_role: str) -> str:
    """Render the seed script; the admin role is linked to every catalog permission."""
    tenant = SeedKey.tenant().placeholder
    defined = {permission.code for permission in catalog.permissions}

    parts: List[str] = [
        f"{SQL_RULE}\n"
        f"-- RBAC seed data. Auto-generated by {GENERATOR_NAME} from {source_name}.\n"
        f"-- Bind parameters: {tenant} plus one id parameter per row.\n"
        f"{SQL_RULE}\n\n",
        _heading("INSERT PERMISSIONS (Global - No Tenant)"),
    ]

    for permission in catalog.permissions:
        parts.append(PERMISSION_INSERT.format(
            id=SeedKey.for_permission(permission.key).placeholder,
            code=sql_str(permission.code),
            name=sql_str(permission.name),
            description=sql_str(permission.description),
            category=sql_str(permission.domain),
        ))
        parts.append("\n")

    parts.append(_heading("INSERT ROLES (Per Tenant)"))
    for role in catalog.roles:
        parts.append(ROLE_INSERT.format(
            id=SeedKey.for_role(role).placeholder,
            tenant=tenant,
            code=sql_str(role),
            name=sql_str(role_display_name(role)),
            description=sql_str(role_description(role)),
        ))
        parts.append("\n")

    parts.append(_heading("INSERT ROLE PERMISSIONS (Per Tenant)"))
    matrix = catalog.role_matrix(admin_role)
    for role in catalog.roles:
        parts.append(f"-- {role} Role Permissions\n")
        role_key = SeedKey.for_role(role)
        for code in matrix[role]:
            # Orphaned codes have no permission row to link to
            if code not in defined:
                continue
            permission_key = PermissionKey.from_code(code)
            parts.append(ROLE_PERMISSION_INSERT.format(
                id=SeedKey.for_role_permission(role, permission_key).placeholder,
                tenant=tenant,
                role_id=role_key.placeholder,
                permission_id=SeedKey.for_permission(permission_key).placeholder,
            ))
        parts.append("\n")

    return "".join(parts)
