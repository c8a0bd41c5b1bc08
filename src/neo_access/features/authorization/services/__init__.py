"""Authorization services."""

from .authorization_engine import AuthorizationEngine, DecisionCodes
from .format_validators import (
    FormatCheck,
    parse_permission,
    validate_permission_format,
    validate_role_code,
)

__all__ = [
    "AuthorizationEngine",
    "DecisionCodes",
    "FormatCheck",
    "parse_permission",
    "validate_permission_format",
    "validate_role_code",
]
