"""Generator for the enforcement-guard module.

Instead of one function per role, the module carries a role to minimum-level
table and two parameterized factories built on the FastAPI gates.
"""

from typing import List, Mapping

from ..entities.catalog import CompiledCatalog
from .common import module_docstring, module_name, py_str, section

GATES_IMPORT = "from neo_access.features.authorization.guards import PermissionGate, RoleLevelGate"


def render_guards_module(
    catalog: CompiledCatalog,
    source_name: str,
    role_levels: Mapping[str, int],
    roles_module: str = "roles.py",
) -> str:
    lines: List[str] = [
        module_docstring("RBAC enforcement guards", source_name),
        "from typing import Dict, Final",
        "",
        GATES_IMPORT,
        "",
        f"from .{module_name(roles_module)} import ROLE_PERMISSIONS",
        "",
        "",
        section("Minimum hierarchy level per role").rstrip("\n"),
        "ROLE_MINIMUM_LEVELS: Final[Dict[str, int]] = {",
    ]
    lines.extend(f"    {py_str(role)}: {int(role_levels.get(role, 0))}," for role in catalog.roles)
    lines.extend([
        "}",
        "",
        "",
        "def require_permission(permission: str) -> PermissionGate:",
        '    """Dependency that requires ``permission`` from the authenticated principal."""',
        "    return PermissionGate(permission, role_permissions=ROLE_PERMISSIONS)",
        "",
        "",
        "def require_role(role: str) -> RoleLevelGate:",
        '    """Dependency that requires at least the hierarchy level of ``role``."""',
        "    if role not in ROLE_MINIMUM_LEVELS:",
        '        raise KeyError(f"Unknown role: {role}")',
        "    return RoleLevelGate(role, role_levels=ROLE_MINIMUM_LEVELS)",
    ])
    return "\n".join(lines) + "\n"
