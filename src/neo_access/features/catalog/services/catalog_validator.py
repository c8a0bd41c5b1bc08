"""Validation pass over a compiled catalog.

Runs before any artifact is generated and can be invoked on its own. Fatal
findings make the report invalid; warnings and informational findings do not.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ....config.constants import ACTION_VOCABULARY, PERMISSION_CODE_PATTERN
from ..entities.catalog import (
    CatalogFinding,
    CatalogFindingCodes,
    CatalogValidationReport,
    CompiledCatalog,
    FindingSeverity,
)

logger = logging.getLogger(__name__)


def validate_catalog(
    catalog: CompiledCatalog,
    action_vocabulary: Optional[Iterable[str]] = None,
) -> CatalogValidationReport:
    """Check a compiled catalog and collect every finding.

    Args:
        catalog: Parser output
        action_vocabulary: Accepted actions, defaults to the platform vocabulary

    Returns:
        CatalogValidationReport, invalid when any ERROR finding exists
    """
    actions = frozenset(action_vocabulary) if action_vocabulary is not None else ACTION_VOCABULARY
    findings: List[CatalogFinding] = []

    if not catalog.roles:
        findings.append(CatalogFinding(
            FindingSeverity.ERROR, CatalogFindingCodes.NO_ROLES, "No roles found in schema"
        ))
    if not catalog.permissions:
        findings.append(CatalogFinding(
            FindingSeverity.ERROR, CatalogFindingCodes.NO_PERMISSIONS, "No permissions found in schema"
        ))

    for section in catalog.skipped_sections:
        findings.append(CatalogFinding(
            FindingSeverity.WARNING,
            CatalogFindingCodes.UNKNOWN_ROLE_SECTION,
            f"Skipped unknown role section '{section.heading}' at line {section.line_number}",
            role=section.heading,
        ))

    for role in catalog.roles:
        if not catalog.role_permissions.get(role):
            findings.append(CatalogFinding(
                FindingSeverity.WARNING,
                CatalogFindingCodes.ROLE_WITHOUT_PERMISSIONS,
                f"Role {role} has no permissions assigned",
                role=role,
            ))

    defined = set(catalog.permission_codes)
    referenced = catalog.referenced_codes()

    orphaned = tuple(code for code in referenced if code not in defined)
    if orphaned:
        findings.append(CatalogFinding(
            FindingSeverity.ERROR,
            CatalogFindingCodes.ORPHANED_PERMISSION,
            f"Orphaned permissions (used but not defined): {', '.join(orphaned)}",
            permissions=orphaned,
        ))

    unknown_actions = tuple(p.code for p in catalog.permissions if p.action not in actions)
    if unknown_actions:
        findings.append(CatalogFinding(
            FindingSeverity.ERROR,
            CatalogFindingCodes.UNKNOWN_ACTION,
            f"Permissions with actions outside the vocabulary: {', '.join(unknown_actions)}",
            permissions=unknown_actions,
        ))

    malformed = tuple(
        p.code for p in catalog.permissions if not PERMISSION_CODE_PATTERN.match(p.code)
    )
    if malformed:
        findings.append(CatalogFinding(
            FindingSeverity.ERROR,
            CatalogFindingCodes.INVALID_PERMISSION_CODE,
            f"Permission codes with an invalid format: {', '.join(malformed)}",
            permissions=malformed,
        ))

    symbols: Dict[str, List[str]] = {}
    for permission in catalog.permissions:
        symbols.setdefault(permission.symbol, []).append(permission.code)
    for symbol, codes in symbols.items():
        if len(codes) > 1:
            findings.append(CatalogFinding(
                FindingSeverity.ERROR,
                CatalogFindingCodes.DUPLICATE_PERMISSION_SYMBOL,
                f"Permissions {', '.join(codes)} share the constant name {symbol}",
                permissions=tuple(codes),
            ))

    referenced_set = set(referenced)
    unused = tuple(code for code in catalog.permission_codes if code not in referenced_set)
    if unused:
        findings.append(CatalogFinding(
            FindingSeverity.INFO,
            CatalogFindingCodes.UNUSED_PERMISSION,
            f"Unused permissions (defined but not assigned): {len(unused)} permissions",
            permissions=unused,
        ))

    report = CatalogValidationReport(
        role_count=len(catalog.roles),
        permission_count=len(catalog.permissions),
        findings=tuple(findings),
    )

    for finding in report.errors + report.warnings:
        logger.warning(f"RBAC schema {finding.severity.value.lower()}: {finding.message}")
    if report.is_valid:
        logger.info(
            f"RBAC schema validation passed: {report.role_count} roles, "
            f"{report.permission_count} permissions"
        )
    return report
