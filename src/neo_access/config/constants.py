"""Constants and enums for neo-access.

This module defines the vocabularies the catalog compiler, the authorization
engine and the role validators agree on: permission actions, role codes,
hierarchy levels and the machine codes carried by validation issues.
"""

import re
from enum import Enum
from typing import Dict, Final, FrozenSet, Tuple


class RoleType(str, Enum):
    """Role types - corresponds to the persisted role_type enum."""

    SYSTEM = "SYSTEM"
    CUSTOM = "CUSTOM"
    INHERITED = "INHERITED"


class ValidationSeverity(str, Enum):
    """Severity of a validation issue. ERROR blocks persistence, WARNING does not."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class PermissionActions:
    """Fixed action vocabulary for ``resource.action`` permission codes."""

    READ: Final[str] = "read"
    LIST: Final[str] = "list"
    CREATE: Final[str] = "create"
    UPDATE: Final[str] = "update"
    SOFT_DELETE: Final[str] = "soft_delete"
    HARD_DELETE: Final[str] = "hard_delete"
    RESTORE: Final[str] = "restore"
    ARCHIVE: Final[str] = "archive"
    ACTIVATE: Final[str] = "activate"
    DEACTIVATE: Final[str] = "deactivate"
    ASSIGN: Final[str] = "assign"
    UNASSIGN: Final[str] = "unassign"
    TRANSFER: Final[str] = "transfer"
    APPROVE: Final[str] = "approve"
    REJECT: Final[str] = "reject"
    SUBMIT: Final[str] = "submit"
    REVIEW: Final[str] = "review"
    SEND: Final[str] = "send"
    EXPORT: Final[str] = "export"
    PUBLISH: Final[str] = "publish"
    LOCK: Final[str] = "lock"
    UNLOCK: Final[str] = "unlock"
    DUPLICATE: Final[str] = "duplicate"
    SYNC: Final[str] = "sync"
    PROCESS: Final[str] = "process"
    IMPLEMENT: Final[str] = "implement"
    ASSESS: Final[str] = "assess"
    MITIGATE: Final[str] = "mitigate"
    RESOLVE: Final[str] = "resolve"
    INVESTIGATE: Final[str] = "investigate"
    EXECUTE: Final[str] = "execute"
    ALLOCATE: Final[str] = "allocate"
    DEALLOCATE: Final[str] = "deallocate"
    GRANT: Final[str] = "grant"
    REVOKE: Final[str] = "revoke"
    COMPLETE: Final[str] = "complete"

    @classmethod
    def all(cls) -> FrozenSet[str]:
        """Return every action in the vocabulary."""
        return frozenset(
            value for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        )


ACTION_VOCABULARY: Final[FrozenSet[str]] = PermissionActions.all()


class DefaultRoles:
    """Platform role codes known to the catalog schema."""

    ADMIN: Final[str] = "ADMIN"
    PROJECT_MANAGER: Final[str] = "PROJECT_MANAGER"
    WORKER: Final[str] = "WORKER"
    DRIVER: Final[str] = "DRIVER"
    VIEWER: Final[str] = "VIEWER"


ROLE_VOCABULARY: Final[Tuple[str, ...]] = (
    DefaultRoles.ADMIN,
    DefaultRoles.PROJECT_MANAGER,
    DefaultRoles.WORKER,
    DefaultRoles.DRIVER,
    DefaultRoles.VIEWER,
)

# higher = more privileged
DEFAULT_ROLE_LEVELS: Final[Dict[str, int]] = {
    DefaultRoles.ADMIN: 100,
    DefaultRoles.PROJECT_MANAGER: 75,
    DefaultRoles.WORKER: 50,
    DefaultRoles.VIEWER: 25,
    DefaultRoles.DRIVER: 25,
}

DEFAULT_ROLE_DESCRIPTIONS: Final[Dict[str, str]] = {
    DefaultRoles.ADMIN: "System administrator with complete access to all tenant data and operations",
    DefaultRoles.PROJECT_MANAGER: (
        "Project manager with ability to manage projects, estimates, team members, "
        "and approve operations within tenant scope"
    ),
    DefaultRoles.WORKER: (
        "Field worker with access to assigned projects, tasks, time tracking, "
        "and expense reporting within tenant scope"
    ),
    DefaultRoles.DRIVER: (
        "Driver with access to assigned delivery tasks, time tracking, "
        "and mobile operations within tenant scope"
    ),
    DefaultRoles.VIEWER: "Read-only access for reporting, training and demonstration purposes within tenant scope",
}

RESERVED_ROLE_CODES: Final[FrozenSet[str]] = frozenset(
    {"SYSTEM", "ROOT", "SUPER", "GOD", "NULL", "UNDEFINED"}
)

ROLE_CODE_PATTERN: Final[re.Pattern] = re.compile(r"^[A-Z][A-Z0-9_]*$")
PERMISSION_CODE_PATTERN: Final[re.Pattern] = re.compile(r"^[A-Za-z][A-Za-z0-9_]*\.[a-z_]+$")

ROLE_CODE_MIN_LENGTH: Final[int] = 2
ROLE_CODE_MAX_LENGTH: Final[int] = 50
RESOURCE_MAX_LENGTH: Final[int] = 50


class IssueCodes:
    """Stable machine codes carried by validation issues."""

    # Runtime
    MISSING_TENANT_ID: Final[str] = "MISSING_TENANT_ID"
    ASYNC_VALIDATION_ERROR: Final[str] = "ASYNC_VALIDATION_ERROR"
    VALIDATION_EXCEPTION: Final[str] = "VALIDATION_EXCEPTION"
    TENANT_MISMATCH: Final[str] = "TENANT_MISMATCH"

    # Semantic primitives
    DUPLICATE_VALUE: Final[str] = "DUPLICATE_VALUE"
    INVALID_TENANT_OWNERSHIP: Final[str] = "INVALID_TENANT_OWNERSHIP"
    INVALID_ENTITY_REFERENCE: Final[str] = "INVALID_ENTITY_REFERENCE"

    # Role creation
    INVALID_SYSTEM_ROLE_DEFAULT: Final[str] = "INVALID_SYSTEM_ROLE_DEFAULT"
    SYSTEM_ROLE_NO_PARENT: Final[str] = "SYSTEM_ROLE_NO_PARENT"
    INHERITED_ROLE_REQUIRES_PARENT: Final[str] = "INHERITED_ROLE_REQUIRES_PARENT"
    INHERITED_ROLE_PERMISSIONS_WARNING: Final[str] = "INHERITED_ROLE_PERMISSIONS_WARNING"
    LOW_PRIORITY_WARNING: Final[str] = "LOW_PRIORITY_WARNING"
    ADMIN_ROLE_TYPE_WARNING: Final[str] = "ADMIN_ROLE_TYPE_WARNING"

    # Role update
    SYSTEM_ROLE_MODIFICATION_WARNING: Final[str] = "SYSTEM_ROLE_MODIFICATION_WARNING"

    # Role assignment
    PAST_EXPIRATION_DATE: Final[str] = "PAST_EXPIRATION_DATE"
    LONG_TERM_ASSIGNMENT_WARNING: Final[str] = "LONG_TERM_ASSIGNMENT_WARNING"
    SELF_ASSIGNMENT_WARNING: Final[str] = "SELF_ASSIGNMENT_WARNING"

    # Role hierarchy
    CIRCULAR_ROLE_REFERENCE: Final[str] = "CIRCULAR_ROLE_REFERENCE"
    ROLE_HIERARCHY_TOO_DEEP: Final[str] = "ROLE_HIERARCHY_TOO_DEEP"

    # Role deletion
    ROLE_HAS_ACTIVE_ASSIGNMENTS: Final[str] = "ROLE_HAS_ACTIVE_ASSIGNMENTS"
    ROLE_HAS_CHILDREN_WARNING: Final[str] = "ROLE_HAS_CHILDREN_WARNING"
    FORCE_DELETION_WARNING: Final[str] = "FORCE_DELETION_WARNING"


class EntityTypes:
    """Entity type names used by semantic checks and store lookups."""

    ROLE: Final[str] = "Role"
    PERMISSION: Final[str] = "Permission"
    MEMBER: Final[str] = "Member"
    ROLE_ASSIGNMENT: Final[str] = "RoleAssignment"
