"""Human-readable names and descriptions for catalog entries."""

import re
from typing import Dict, Final

from ....config.constants import DEFAULT_ROLE_DESCRIPTIONS

ACTION_NAMES: Final[Dict[str, str]] = {
    "read": "View",
    "list": "List",
    "create": "Create",
    "update": "Update",
    "soft_delete": "Delete",
    "hard_delete": "Permanently Delete",
    "restore": "Restore",
    "activate": "Activate",
    "deactivate": "Deactivate",
    "assign": "Assign",
    "unassign": "Unassign",
    "transfer": "Transfer",
    "approve": "Approve",
    "reject": "Reject",
    "send": "Send",
    "export": "Export",
    "publish": "Publish",
    "archive": "Archive",
    "duplicate": "Duplicate",
    "lock": "Lock",
    "unlock": "Unlock",
    "submit": "Submit",
    "review": "Review",
    "sync": "Synchronize",
    "process": "Process",
    "implement": "Implement",
    "assess": "Assess",
    "mitigate": "Mitigate",
    "resolve": "Resolve",
    "investigate": "Investigate",
    "execute": "Execute",
    "allocate": "Allocate",
    "deallocate": "Deallocate",
    "grant": "Grant",
    "revoke": "Revoke",
    "complete": "Complete",
}

ACTION_DESCRIPTIONS: Final[Dict[str, str]] = {
    "read": "View and access",
    "list": "List",
    "create": "Create new",
    "update": "Modify existing",
    "soft_delete": "Delete (soft)",
    "hard_delete": "Permanently delete",
    "restore": "Restore deleted",
    "activate": "Activate",
    "deactivate": "Deactivate",
    "assign": "Assign",
    "unassign": "Remove assignment of",
    "transfer": "Transfer ownership of",
    "approve": "Approve",
    "reject": "Reject",
    "send": "Send",
    "export": "Export data for",
    "publish": "Publish",
    "archive": "Archive",
    "duplicate": "Duplicate",
    "lock": "Lock",
    "unlock": "Unlock",
    "submit": "Submit",
    "review": "Review",
    "sync": "Synchronize",
    "process": "Process",
    "implement": "Implement",
    "assess": "Assess",
    "mitigate": "Mitigate",
    "resolve": "Resolve",
    "investigate": "Investigate",
    "execute": "Execute",
    "allocate": "Allocate",
    "deallocate": "Deallocate",
    "grant": "Grant access to",
    "revoke": "Revoke access to",
    "complete": "Mark as complete",
}

_CAPITAL = re.compile(r"([A-Z])")
_NON_ALPHA = re.compile(r"[^A-Z]")


def resource_words(resource: str) -> str:
    """Split a camel-cased resource into words: ``WorkOrder`` -> ``Work Order``."""
    return _CAPITAL.sub(r" \1", resource).strip()


def permission_name(resource: str, action: str) -> str:
    """Display name such as ``Create Work Order``; unknown actions are title-cased."""
    action_name = ACTION_NAMES.get(action) or action[:1].upper() + action[1:]
    return f"{action_name} {resource_words(resource)}"


def permission_description(resource: str, action: str) -> str:
    action_description = ACTION_DESCRIPTIONS.get(action) or action
    return f"{action_description} {resource_words(resource).lower()} records within tenant scope"


def category_symbol(domain: str) -> str:
    """Constant-style key for a domain: ``project-management`` -> ``PROJECT_MANAGEMENT``."""
    return _NON_ALPHA.sub("_", domain.upper())


def role_display_name(role: str) -> str:
    """``PROJECT_MANAGER`` -> ``Project Manager``."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in role.split("_"))


def role_description(role: str) -> str:
    return DEFAULT_ROLE_DESCRIPTIONS.get(role) or f"Role for {role.lower()}"
