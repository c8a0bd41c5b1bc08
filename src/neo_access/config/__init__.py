"""Configuration module for neo-access.

Settings, vocabularies and logging configuration shared by every feature.
"""

from .constants import (
    ACTION_VOCABULARY,
    DEFAULT_ROLE_DESCRIPTIONS,
    DEFAULT_ROLE_LEVELS,
    PERMISSION_CODE_PATTERN,
    RESERVED_ROLE_CODES,
    ROLE_CODE_MAX_LENGTH,
    ROLE_CODE_MIN_LENGTH,
    ROLE_CODE_PATTERN,
    ROLE_VOCABULARY,
    DefaultRoles,
    EntityTypes,
    IssueCodes,
    PermissionActions,
    RoleType,
    ValidationSeverity,
)
from .logging_config import (
    LogFormat,
    LoggingConfig,
    LogVerbosity,
    get_logger,
    setup_logging,
)
from .settings import AccessSettings, get_settings

__all__ = [
    "ACTION_VOCABULARY",
    "DEFAULT_ROLE_DESCRIPTIONS",
    "DEFAULT_ROLE_LEVELS",
    "PERMISSION_CODE_PATTERN",
    "RESERVED_ROLE_CODES",
    "ROLE_CODE_MAX_LENGTH",
    "ROLE_CODE_MIN_LENGTH",
    "ROLE_CODE_PATTERN",
    "ROLE_VOCABULARY",
    "DefaultRoles",
    "EntityTypes",
    "IssueCodes",
    "PermissionActions",
    "RoleType",
    "ValidationSeverity",
    "LogFormat",
    "LoggingConfig",
    "LogVerbosity",
    "get_logger",
    "setup_logging",
    "AccessSettings",
    "get_settings",
]
