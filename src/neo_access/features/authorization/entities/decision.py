"""
Authorization decision value object.

Business-rule outcomes of the authorization engine are returned as values;
callers that prefer exceptions use ``raise_for_denial``.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

from ....core.exceptions import AuthorizationError, PermissionDeniedError


@dataclass(frozen=True)
class AuthorizationDecision:
    """Immutable pass/fail outcome with a human-readable reason."""

    granted: bool
    reason: str = ""
    code: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def denied(self) -> bool:
        return not self.granted

    @classmethod
    def allow(cls, reason: str = "Access granted", **details: Any) -> "AuthorizationDecision":
        return cls(granted=True, reason=reason, details=details)

    @classmethod
    def deny(cls, reason: str, code: Optional[str] = None, **details: Any) -> "AuthorizationDecision":
        return cls(granted=False, reason=reason, code=code, details=details)

    def raise_for_denial(self, error_cls: Type[AuthorizationError] = PermissionDeniedError) -> None:
        """Raise ``error_cls`` when the decision is a denial."""
        if self.denied:
            raise error_cls(self.reason, error_code=self.code, details=dict(self.details))

    def __bool__(self) -> bool:
        return self.granted

    def __str__(self) -> str:
        status = "GRANTED" if self.granted else "DENIED"
        return f"{status}: {self.reason}" if self.reason else status
