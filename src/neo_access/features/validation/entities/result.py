"""Validation result and the issue collector used by semantic checks."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .issue import ValidationContext, ValidationIssue


@dataclass
class ValidationResult:
    """Outcome of a validation call.

    ``success`` is False iff at least one ERROR issue was raised. Warnings
    never block and are only carried on success.
    """

    success: bool
    data: Any = None
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    duration_ms: float = 0.0
    context: Optional[ValidationContext] = None

    @classmethod
    def ok(cls, data: Any = None, warnings: Optional[Iterable[ValidationIssue]] = None,
           duration_ms: float = 0.0, context: Optional[ValidationContext] = None) -> "ValidationResult":
        return cls(success=True, data=data, warnings=list(warnings or []),
                   duration_ms=duration_ms, context=context)

    @classmethod
    def fail(cls, errors: Iterable[ValidationIssue], duration_ms: float = 0.0,
             context: Optional[ValidationContext] = None) -> "ValidationResult":
        return cls(success=False, errors=list(errors), duration_ms=duration_ms, context=context)

    @property
    def issues(self) -> List[ValidationIssue]:
        return [*self.errors, *self.warnings]

    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def has_code(self, code: str) -> bool:
        return any(issue.code == code for issue in self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "duration_ms": self.duration_ms,
        }


class IssueCollector:
    """Accumulates every issue a semantic check raises, routed by severity."""

    def __init__(self, context: Optional[ValidationContext] = None):
        self.context = context
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def add(self, issue: Optional[ValidationIssue]) -> None:
        if issue is None:
            return
        if issue.is_error:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def extend(self, issues: Iterable[ValidationIssue]) -> None:
        for issue in issues:
            self.add(issue)

    def error(self, field_name: str, message: str, code: str, suggestion: Optional[str] = None,
              **metadata: Any) -> None:
        self.add(ValidationIssue.error(field_name, message, code, context=self.context,
                                       suggestion=suggestion, **metadata))

    def warning(self, field_name: str, message: str, code: str, suggestion: Optional[str] = None,
                **metadata: Any) -> None:
        self.add(ValidationIssue.warning(field_name, message, code, context=self.context,
                                         suggestion=suggestion, **metadata))

    def to_result(self, data: Any = None) -> ValidationResult:
        if self.errors:
            return ValidationResult.fail(self.errors, context=self.context)
        return ValidationResult.ok(data, warnings=self.warnings, context=self.context)
