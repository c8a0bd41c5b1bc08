"""Generator for the permission catalog module."""

from typing import Dict, List

from ..entities.catalog import CompiledCatalog
from ..services.naming import category_symbol
from .common import module_docstring, py_str, section


def render_permissions_module(catalog: CompiledCatalog, source_name: str) -> str:
    """Render PERMISSIONS, PERMISSION_CATEGORIES and PERMISSION_DETAILS.

    Permissions are grouped by domain in first-seen order.
    """
    grouped = catalog.permissions_by_domain()
    lines: List[str] = [
        module_docstring("RBAC permission catalog", source_name),
        "from typing import Dict, Final, Tuple",
        "",
        "",
        "PERMISSIONS: Final[Dict[str, str]] = {",
    ]
    for domain, permissions in grouped.items():
        lines.append(section(domain.upper(), indent="    ").rstrip("\n"))
        for permission in permissions:
            lines.append(f"    {py_str(permission.symbol)}: {py_str(permission.code)},")
    lines.append("}")
    lines.append("")
    lines.append("ALL_PERMISSIONS: Final[Tuple[str, ...]] = tuple(PERMISSIONS.values())")
    lines.append("")
    lines.append("")

    categories: Dict[str, List[str]] = {}
    for domain, permissions in grouped.items():
        categories.setdefault(category_symbol(domain), []).extend(p.code for p in permissions)

    lines.append(section("Permission Categories").rstrip("\n"))
    lines.append("PERMISSION_CATEGORIES: Final[Dict[str, Tuple[str, ...]]] = {")
    for symbol, codes in categories.items():
        lines.append(f"    {py_str(symbol)}: (")
        lines.extend(f"        {py_str(code)}," for code in codes)
        lines.append("    ),")
    lines.append("}")
    lines.append("")
    lines.append("")

    lines.append(section("Permission Details").rstrip("\n"))
    lines.append("PERMISSION_DETAILS: Final[Dict[str, Dict[str, str]]] = {")
    for permission in catalog.permissions:
        lines.append(f"    {py_str(permission.code)}: {{")
        for field_name, value in permission.to_dict().items():
            lines.append(f"        {py_str(field_name)}: {py_str(value)},")
        lines.append("    },")
    lines.append("}")
    return "\n".join(lines) + "\n"
