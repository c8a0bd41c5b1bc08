"""Neo-Access - access control and validation core for multi-tenant applications.

Compiles the declarative role/permission schema into enforcement artifacts,
answers authorization and escalation questions at request time and runs
tenant-scoped semantic validation of role operations.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    AccessSettings,
    EntityTypes,
    IssueCodes,
    PermissionActions,
    RoleType,
    ValidationSeverity,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoAccessError,

    # Common Exceptions
    ConfigurationError,
    SchemaError,
    CatalogValidationError,
    AuthorizationError,
    PermissionDeniedError,
    RoleEscalationError,
    TenantMismatchError,
    ValidationContextError,
    TenantIsolationError,
    StoreError,

    # Utility Functions
    get_http_status_code,
    create_error_response,
)

# Permission catalog compiler
from .features.catalog import (
    CatalogCompiler,
    CompiledCatalog,
    CatalogValidationReport,
    parse_schema,
    validate_catalog,
)

# Authorization
from .features.authorization import (
    AuthorizationDecision,
    AuthorizationEngine,
    Principal,
    RoleHierarchy,
    PermissionGate,
    RoleLevelGate,
)

# Validation runtime
from .features.validation import (
    AsyncValidationRuntime,
    ValidationContext,
    ValidationIssue,
    ValidationResult,
    combine_async_results,
)

__all__ = [
    "__version__",
    "AccessSettings",
    "EntityTypes",
    "IssueCodes",
    "PermissionActions",
    "RoleType",
    "ValidationSeverity",
    "get_settings",
    "NeoAccessError",
    "ConfigurationError",
    "SchemaError",
    "CatalogValidationError",
    "AuthorizationError",
    "PermissionDeniedError",
    "RoleEscalationError",
    "TenantMismatchError",
    "ValidationContextError",
    "TenantIsolationError",
    "StoreError",
    "get_http_status_code",
    "create_error_response",
    "CatalogCompiler",
    "CompiledCatalog",
    "CatalogValidationReport",
    "parse_schema",
    "validate_catalog",
    "AuthorizationDecision",
    "AuthorizationEngine",
    "Principal",
    "RoleHierarchy",
    "PermissionGate",
    "RoleLevelGate",
    "AsyncValidationRuntime",
    "ValidationContext",
    "ValidationIssue",
    "ValidationResult",
    "combine_async_results",
]
