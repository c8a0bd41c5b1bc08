"""Generator for the role module (constants, matrix, descriptions, levels)."""

from typing import List, Mapping

from ..entities.catalog import CompiledCatalog
from ..services.naming import role_description, role_display_name
from .common import module_docstring, module_name, py_str, section


def render_roles_module(
    catalog: CompiledCatalog,
    source_name: str,
    admin_role: str,
    role_levels: Mapping[str, int],
    permissions_module: str = "permissions.py",
) -> str:
    """Render ROLES, ROLE_PERMISSIONS, ROLE_DESCRIPTIONS, ROLE_NAMES and ROLE_HIERARCHY.

    The admin role's entry references the whole permission catalog instead of
    an explicit list, so it follows every catalog change.
    """
    lines: List[str] = [
        module_docstring("RBAC roles", source_name),
        "from typing import Dict, Final, Tuple",
        "",
        f"from .{module_name(permissions_module)} import PERMISSIONS",
        "",
        "",
        "ROLES: Final[Dict[str, str]] = {",
    ]
    lines.extend(f"    {py_str(role)}: {py_str(role)}," for role in catalog.roles)
    lines.append("}")
    lines.append("")
    lines.append("")

    lines.append(section("Role Permissions Mapping").rstrip("\n"))
    lines.append("ROLE_PERMISSIONS: Final[Dict[str, Tuple[str, ...]]] = {")
    for role in catalog.roles:
        if role == admin_role:
            lines.append(f"    {py_str(role)}: tuple(PERMISSIONS.values()),")
            continue
        lines.append(f"    {py_str(role)}: (")
        lines.extend(f"        {py_str(code)}," for code in catalog.role_permissions.get(role, ()))
        lines.append("    ),")
    lines.append("}")
    lines.append("")
    lines.append("")

    lines.append(section("Role Descriptions").rstrip("\n"))
    lines.append("ROLE_DESCRIPTIONS: Final[Dict[str, str]] = {")
    lines.extend(f"    {py_str(role)}: {py_str(role_description(role))}," for role in catalog.roles)
    lines.append("}")
    lines.append("")
    lines.append("ROLE_NAMES: Final[Dict[str, str]] = {")
    lines.extend(f"    {py_str(role)}: {py_str(role_display_name(role))}," for role in catalog.roles)
    lines.append("}")
    lines.append("")
    lines.append("")

    lines.append(section("Role Hierarchy (higher = more privileged)").rstrip("\n"))
    lines.append("ROLE_HIERARCHY: Final[Dict[str, int]] = {")
    lines.extend(f"    {py_str(role)}: {int(role_levels.get(role, 0))}," for role in catalog.roles)
    lines.append("}")
    return "\n".join(lines) + "\n"
