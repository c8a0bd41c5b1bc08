"""Format checks for role codes and permission codes."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ....config.constants import (
    ACTION_VOCABULARY,
    PERMISSION_CODE_PATTERN,
    RESERVED_ROLE_CODES,
    RESOURCE_MAX_LENGTH,
    ROLE_CODE_MAX_LENGTH,
    ROLE_CODE_MIN_LENGTH,
    ROLE_CODE_PATTERN,
)


@dataclass(frozen=True)
class FormatCheck:
    """Outcome of a format check; ``value`` holds the normalized input when valid."""

    is_valid: bool
    message: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def ok(cls, value: str) -> "FormatCheck":
        return cls(is_valid=True, value=value)

    @classmethod
    def invalid(cls, message: str) -> "FormatCheck":
        return cls(is_valid=False, message=message)


def validate_role_code(role_code: Optional[str]) -> FormatCheck:
    """Normalize (strip, upper-case) and check a role code."""
    if not role_code:
        return FormatCheck.invalid("Role code is required")

    code = role_code.strip().upper()
    if not ROLE_CODE_PATTERN.match(code):
        return FormatCheck.invalid(
            "Role code must start with a letter and contain only uppercase letters, numbers, and underscores"
        )
    if len(code) < ROLE_CODE_MIN_LENGTH:
        return FormatCheck.invalid(f"Role code must be at least {ROLE_CODE_MIN_LENGTH} characters long")
    if len(code) > ROLE_CODE_MAX_LENGTH:
        return FormatCheck.invalid(f"Role code is too long (max {ROLE_CODE_MAX_LENGTH} characters)")
    if code in RESERVED_ROLE_CODES:
        return FormatCheck.invalid("This role code is reserved and cannot be used")
    return FormatCheck.ok(code)


def parse_permission(code: str) -> Tuple[str, str]:
    """Split ``resource.action`` into its parts.

    Raises:
        ValueError: If the code is not exactly ``resource.action``
    """
    resource, separator, action = (code or "").strip().partition(".")
    if not separator or not resource or not action or "." in action:
        raise ValueError(f'Permission must follow "Model.action" format, got: {code!r}')
    return resource, action


def validate_permission_format(
    permission: Optional[str],
    action_vocabulary: Optional[Iterable[str]] = None,
) -> FormatCheck:
    """Check a ``resource.action`` code against the pattern and action vocabulary."""
    if not permission:
        return FormatCheck.invalid("Permission is required")

    code = permission.strip()
    if not PERMISSION_CODE_PATTERN.match(code):
        return FormatCheck.invalid('Permission must follow "Model.action" format (e.g., "Project.read")')

    resource, action = parse_permission(code)
    if len(resource) < 2:
        return FormatCheck.invalid("Model name must be at least 2 characters")
    if len(resource) > RESOURCE_MAX_LENGTH:
        return FormatCheck.invalid(f"Model name is too long (max {RESOURCE_MAX_LENGTH} characters)")

    actions = frozenset(action_vocabulary) if action_vocabulary is not None else ACTION_VOCABULARY
    if action not in actions:
        return FormatCheck.invalid(
            f'Invalid action "{action}". Must be one of: {", ".join(sorted(actions))}'
        )
    return FormatCheck.ok(code)
