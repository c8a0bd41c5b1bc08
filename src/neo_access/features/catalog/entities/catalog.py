"""Compiled catalog and validation report entities.

The parser folds the schema text into a CompiledCatalog; nothing in it is
mutated afterwards. Role order is first-seen order, permission order is
first-seen order across the whole document.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ....core.exceptions import CatalogValidationError
from .permission import PermissionDefinition


@dataclass(frozen=True)
class SkippedSection:
    """A role heading that is not part of the role vocabulary."""

    line_number: int
    heading: str


@dataclass(frozen=True)
class CompiledCatalog:
    """Immutable result of parsing a role/permission schema."""

    roles: Tuple[str, ...]
    role_permissions: Mapping[str, Tuple[str, ...]]
    permissions: Tuple[PermissionDefinition, ...]
    skipped_sections: Tuple[SkippedSection, ...] = ()

    def __post_init__(self):
        # Freeze the mapping handed in by the parser
        object.__setattr__(
            self, "role_permissions", MappingProxyType(dict(self.role_permissions))
        )

    @property
    def permission_codes(self) -> Tuple[str, ...]:
        """All defined codes in catalog order."""
        return tuple(permission.code for permission in self.permissions)

    def get_permission(self, code: str) -> Optional[PermissionDefinition]:
        for permission in self.permissions:
            if permission.code == code:
                return permission
        return None

    def permissions_by_domain(self) -> Dict[str, List[PermissionDefinition]]:
        """Group definitions by domain, domains in first-seen order."""
        grouped: Dict[str, List[PermissionDefinition]] = {}
        for permission in self.permissions:
            grouped.setdefault(permission.domain or "general", []).append(permission)
        return grouped

    def referenced_codes(self) -> Tuple[str, ...]:
        """Codes referenced by any role, in first-seen order."""
        seen: Dict[str, None] = {}
        for role in self.roles:
            for code in self.role_permissions.get(role, ()):
                seen.setdefault(code, None)
        return tuple(seen)

    def role_matrix(self, admin_role: str) -> Dict[str, Tuple[str, ...]]:
        """Role to permission-code matrix.

        The admin role is always mapped to the full catalog, whatever its
        explicit list in the schema says.
        """
        matrix: Dict[str, Tuple[str, ...]] = {}
        for role in self.roles:
            if role == admin_role:
                matrix[role] = self.permission_codes
            else:
                matrix[role] = tuple(self.role_permissions.get(role, ()))
        return matrix


class FindingSeverity(str, Enum):
    """Severity of a catalog validation finding."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class CatalogFindingCodes:
    """Machine codes for catalog validation findings."""

    NO_ROLES = "NO_ROLES"
    NO_PERMISSIONS = "NO_PERMISSIONS"
    ROLE_WITHOUT_PERMISSIONS = "ROLE_WITHOUT_PERMISSIONS"
    ORPHANED_PERMISSION = "ORPHANED_PERMISSION"
    UNUSED_PERMISSION = "UNUSED_PERMISSION"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    INVALID_PERMISSION_CODE = "INVALID_PERMISSION_CODE"
    DUPLICATE_PERMISSION_SYMBOL = "DUPLICATE_PERMISSION_SYMBOL"
    UNKNOWN_ROLE_SECTION = "UNKNOWN_ROLE_SECTION"


@dataclass(frozen=True)
class CatalogFinding:
    """A single observation made by the catalog validation pass."""

    severity: FindingSeverity
    code: str
    message: str
    role: Optional[str] = None
    permissions: Tuple[str, ...] = ()

    @property
    def is_fatal(self) -> bool:
        return self.severity is FindingSeverity.ERROR


@dataclass(frozen=True)
class CatalogValidationReport:
    """Outcome of the catalog validation pass."""

    role_count: int
    permission_count: int
    findings: Tuple[CatalogFinding, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not any(finding.is_fatal for finding in self.findings)

    @property
    def errors(self) -> List[CatalogFinding]:
        return [f for f in self.findings if f.severity is FindingSeverity.ERROR]

    @property
    def warnings(self) -> List[CatalogFinding]:
        return [f for f in self.findings if f.severity is FindingSeverity.WARNING]

    @property
    def infos(self) -> List[CatalogFinding]:
        return [f for f in self.findings if f.severity is FindingSeverity.INFO]

    def by_code(self, code: str) -> List[CatalogFinding]:
        return [f for f in self.findings if f.code == code]

    def raise_for_errors(self) -> None:
        """Raise CatalogValidationError when any fatal finding is present."""
        if not self.is_valid:
            raise CatalogValidationError(
                f"Schema validation failed with {len(self.errors)} error(s)",
                report=self,
            )
