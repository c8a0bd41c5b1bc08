"""HTTP status code mapping for exceptions.

Static defaults plus an optional override table keyed by exception class name.
Overrides are matched against the exception class first and then its bases.
"""

from typing import Any, Dict, Mapping, Optional, Type

from .base import NeoAccessError
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


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 401 Unauthorized
    AuthenticationRequiredError: 401,

    # 403 Forbidden
    AuthorizationError: 403,
    PermissionDeniedError: 403,
    RoleEscalationError: 403,
    TenantMismatchError: 403,

    # 422 Unprocessable Entity
    CatalogValidationError: 422,
    SchemaParseError: 422,

    # 500 Internal Server Error
    ConfigurationError: 500,
    SchemaError: 500,
    SchemaNotFoundError: 500,
    ValidationContextError: 500,
    TenantIsolationError: 500,
    StoreError: 500,

    # Default for NeoAccessError
    NeoAccessError: 500,
}


class HttpStatusMapper:
    """Exception-to-status-code mapper with optional per-class overrides."""

    def __init__(self, overrides: Optional[Mapping[str, int]] = None):
        self._overrides = dict(overrides or {})
        self._cache: Dict[Type[Exception], int] = {}

    def get_status_code(self, exception: Exception) -> int:
        """Get HTTP status code for exception (cached per exception type)."""
        exception_type = type(exception)

        if exception_type in self._cache:
            return self._cache[exception_type]

        status_code = self._lookup(exception_type)
        self._cache[exception_type] = status_code
        return status_code

    def _lookup(self, exception_type: Type[Exception]) -> int:
        for klass in exception_type.__mro__:
            if klass is Exception:
                break
            if klass.__name__ in self._overrides:
                return int(self._overrides[klass.__name__])
            if klass in HTTP_STATUS_MAP:
                return HTTP_STATUS_MAP[klass]
        return 500

    def clear_cache(self) -> None:
        """Clear the status code cache."""
        self._cache.clear()

    def get_mapping_stats(self) -> Dict[str, Any]:
        return {
            "cached_mappings": len(self._cache),
            "default_mappings": len(HTTP_STATUS_MAP),
            "overrides": dict(self._overrides),
        }


# Global mapper instance
_global_mapper: Optional[HttpStatusMapper] = None


def get_mapper() -> HttpStatusMapper:
    """Get or create the global HTTP status mapper."""
    global _global_mapper
    if _global_mapper is None:
        _global_mapper = HttpStatusMapper()
    return _global_mapper


def set_status_overrides(overrides: Mapping[str, int]) -> None:
    """Replace the global mapper with one using the given overrides.

    Args:
        overrides: Mapping of exception class name to HTTP status code
    """
    global _global_mapper
    _global_mapper = HttpStatusMapper(overrides)


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception."""
    return get_mapper().get_status_code(exception)
