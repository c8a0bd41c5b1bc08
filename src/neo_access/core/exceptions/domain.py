"""Domain-specific exceptions for neo-access.

Exceptions for the catalog compiler, the authorization engine and the
validation runtime. Expected business-rule outcomes are returned as values
by those components; these are raised for broken inputs, broken contracts
and callers that opt into exceptions.
"""

from typing import Any, Dict, Optional

from .base import NeoAccessError


# Configuration Errors
class ConfigurationError(NeoAccessError):
    """Raised when there's a configuration issue."""
    pass


# Catalog schema Errors
class SchemaError(NeoAccessError):
    """Base class for errors reading the declarative role/permission schema."""
    pass


class SchemaNotFoundError(SchemaError):
    """Raised when the schema file does not exist."""
    pass


class SchemaParseError(SchemaError):
    """Raised when the schema cannot be read as text."""
    pass


class CatalogValidationError(NeoAccessError):
    """Raised when the catalog validation pass reports fatal findings."""

    def __init__(self, message: str, report: Any = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if report is not None:
            details.setdefault("errors", [finding.message for finding in report.errors])
        super().__init__(message, details=details, **kwargs)
        self.report = report


# Authorization Errors
class AuthorizationError(NeoAccessError):
    """Base class for authorization failures."""
    pass


class AuthenticationRequiredError(AuthorizationError):
    """Raised when no authenticated principal is available."""
    pass


class PermissionDeniedError(AuthorizationError):
    """Raised when the caller lacks a required permission or role."""

    def __init__(
        self,
        message: str,
        required: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        details = dict(details or {})
        if required is not None:
            details.setdefault("required", required)
        super().__init__(message, details=details, **kwargs)


class RoleEscalationError(PermissionDeniedError):
    """Raised when a caller tries to grant roles above their own privilege."""
    pass


class TenantMismatchError(AuthorizationError):
    """Raised when an operation crosses tenant boundaries."""
    pass


# Validation runtime Errors
class ValidationContextError(NeoAccessError):
    """Raised when a validator is invoked without any validation context."""
    pass


class TenantIsolationError(NeoAccessError):
    """Raised when store access happens outside or across the active tenant scope."""
    pass


class StoreError(NeoAccessError):
    """Raised when the backing store fails to answer a validation query."""
    pass
