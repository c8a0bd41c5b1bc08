"""Validation context and issue value objects."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ....config.constants import ValidationSeverity


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidationContext:
    """Who is validating what, and for which tenant.

    ``tenant_id`` is required by every semantic check; its absence is itself
    reported as a validation failure rather than raised.
    """

    tenant_id: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    correlation_id: Optional[str] = None
    actor_id: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tenant_id": self.tenant_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": self.correlation_id,
            "actor_id": self.actor_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding with a stable machine code."""

    field: str
    message: str
    code: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    context: Optional[ValidationContext] = None
    suggestion: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def error(cls, field: str, message: str, code: str, context: Optional[ValidationContext] = None,
              suggestion: Optional[str] = None, **metadata: Any) -> "ValidationIssue":
        return cls(field=field, message=message, code=code, severity=ValidationSeverity.ERROR,
                   context=context, suggestion=suggestion, metadata=metadata)

    @classmethod
    def warning(cls, field: str, message: str, code: str, context: Optional[ValidationContext] = None,
                suggestion: Optional[str] = None, **metadata: Any) -> "ValidationIssue":
        return cls(field=field, message=message, code=code, severity=ValidationSeverity.WARNING,
                   context=context, suggestion=suggestion, metadata=metadata)

    @property
    def is_error(self) -> bool:
        return self.severity is ValidationSeverity.ERROR

    def with_field(self, field_name: str) -> "ValidationIssue":
        return replace(self, field=field_name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "field": self.field,
            "message": self.message,
            "code": self.code,
            "severity": self.severity.value,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        if self.context is not None:
            data["context"] = self.context.to_dict()
        return data
