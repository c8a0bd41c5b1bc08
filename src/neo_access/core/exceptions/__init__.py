"""Exception hierarchy for neo-access."""

from .base import NeoAccessError, create_error_response
from .domain import (
    AuthenticationRequiredError,
    AuthorizationError,
    CatalogValidationError,
    ConfigurationError,
    PermissionDeniedError,
    RoleEscalationError,
    SchemaError,
    SchemaNotFoundError,
    SchemaParseError,
    StoreError,
    TenantIsolationError,
    TenantMismatchError,
    ValidationContextError,
)
from .http_mapping import (
    HTTP_STATUS_MAP,
    HttpStatusMapper,
    get_http_status_code,
    get_mapper,
    set_status_overrides,
)

__all__ = [
    "NeoAccessError",
    "create_error_response",
    "AuthenticationRequiredError",
    "AuthorizationError",
    "CatalogValidationError",
    "ConfigurationError",
    "PermissionDeniedError",
    "RoleEscalationError",
    "SchemaError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "StoreError",
    "TenantIsolationError",
    "TenantMismatchError",
    "ValidationContextError",
    "HTTP_STATUS_MAP",
    "HttpStatusMapper",
    "get_http_status_code",
    "get_mapper",
    "set_status_overrides",
]
