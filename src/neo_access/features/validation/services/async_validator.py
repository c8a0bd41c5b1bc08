"""
Asynchronous validation runtime.

Two phases per call: a synchronous structural check of the raw payload
(pydantic), then the store-backed semantic check of the entity. The
structural phase never touches the store; a structural failure returns
before any semantic rule runs. The RLS variant runs both phases inside a
tenant isolation scope that is released on every exit path.
"""

import logging
import time
from dataclasses import replace
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from ....config.constants import IssueCodes
from ....core.exceptions import ConfigurationError, ValidationContextError
from ...authorization.entities.decision import AuthorizationDecision
from ...authorization.services.authorization_engine import AuthorizationEngine
from ..entities.issue import ValidationContext, ValidationIssue
from ..entities.protocols import SemanticCheck, TenantScopeProvider, ValidationStore
from ..entities.result import ValidationResult
from .primitives import SemanticPrimitives

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def structural_issues(error: ValidationError, context: ValidationContext) -> List[ValidationIssue]:
    """Map pydantic errors to ERROR issues: field = dotted location, code = error type."""
    issues = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        issues.append(ValidationIssue.error(
            location or "root",
            detail.get("msg", "Invalid value"),
            str(detail.get("type", "invalid")).upper(),
            context=context,
            error_type=detail.get("type"),
        ))
    return issues


def missing_tenant_issue(context: ValidationContext) -> ValidationIssue:
    return ValidationIssue.error(
        "tenant_id",
        "Tenant ID is required for semantic validation",
        IssueCodes.MISSING_TENANT_ID,
        context=context,
    )


def tenant_mismatch_issue(context: ValidationContext, decision: AuthorizationDecision) -> ValidationIssue:
    return ValidationIssue.error(
        "tenant_id",
        decision.reason,
        IssueCodes.TENANT_MISMATCH,
        context=context,
        **decision.details,
    )


class AsyncValidationRuntime:
    """Runs SemanticChecks with consistent timing, error shape and tenant isolation.

    Args:
        store: Store answering the semantic primitives' queries
        scope_provider: Provider of tenant isolation scopes, required for
            ``validate_async_with_rls``
        engine: Authorization engine deciding whether the payload tenant
            matches the context tenant
    """

    def __init__(
        self,
        store: ValidationStore,
        scope_provider: Optional[TenantScopeProvider] = None,
        engine: Optional[AuthorizationEngine] = None,
    ):
        self.store = store
        self.scope_provider = scope_provider
        self.engine = engine or AuthorizationEngine()
        self.primitives = SemanticPrimitives(store)

    def validate_structure(
        self,
        check: SemanticCheck,
        payload: Any,
        context: ValidationContext,
    ) -> Tuple[Optional[BaseModel], List[ValidationIssue]]:
        """Structural phase: parse ``payload`` with the check's schema.

        Returns:
            (model, []) on success, (None, issues) on failure
        """
        try:
            return check.schema.model_validate(payload), []
        except ValidationError as e:
            return None, structural_issues(e, context)
        except (TypeError, ValueError) as e:
            return None, [ValidationIssue.error(
                "root",
                f"Validation failed: {e}",
                IssueCodes.VALIDATION_EXCEPTION,
                context=context,
            )]

    async def validate_async(
        self,
        check: SemanticCheck,
        payload: Any,
        context: ValidationContext,
    ) -> ValidationResult:
        """Structural then semantic validation of ``payload``.

        A payload naming a tenant other than ``context.tenant_id`` fails with
        TENANT_MISMATCH before the store is touched.

        Raises:
            ValidationContextError: If ``context`` is None
        """
        if context is None:
            raise ValidationContextError(
                f"A ValidationContext is required to validate {check.entity_kind}"
            )
        start = time.perf_counter()
        if not context.entity_type:
            context = replace(context, entity_type=check.entity_kind)

        data, issues = self.validate_structure(check, payload, context)
        if data is None:
            return ValidationResult.fail(issues, duration_ms=_elapsed_ms(start), context=context)

        if not context.tenant_id:
            return ValidationResult.fail(
                [missing_tenant_issue(context)], duration_ms=_elapsed_ms(start), context=context
            )

        payload_tenant_id = getattr(data, "tenant_id", None)
        if payload_tenant_id is not None:
            decision = self.engine.validate_tenant_context(context.tenant_id, payload_tenant_id)
            if decision.denied:
                logger.warning(
                    f"{check.entity_kind} payload for tenant {payload_tenant_id} rejected "
                    f"in context of tenant {context.tenant_id}"
                )
                return ValidationResult.fail(
                    [tenant_mismatch_issue(context, decision)], duration_ms=_elapsed_ms(start), context=context
                )

        try:
            result = await check.check(data, context, self.primitives)
        except Exception as e:
            logger.error(
                f"Semantic validation of {check.entity_kind} failed for tenant {context.tenant_id}: {e}",
                exc_info=True,
            )
            result = ValidationResult.fail([ValidationIssue.error(
                "async_validation",
                f"Async validation failed: {e}",
                IssueCodes.ASYNC_VALIDATION_ERROR,
                context=context,
                exception_type=type(e).__name__,
            )])

        if not result.success:
            logger.warning(
                f"{check.entity_kind} validation failed for tenant {context.tenant_id}: "
                f"{[issue.code for issue in result.errors]}"
            )
        return replace(result, duration_ms=_elapsed_ms(start), context=context)

    async def validate_async_with_rls(
        self,
        check: SemanticCheck,
        payload: Any,
        context: ValidationContext,
        roles: Sequence[str] = (),
    ) -> ValidationResult:
        """Run ``validate_async`` inside a tenant isolation scope.

        Fails fast with MISSING_TENANT_ID, without entering a scope, when
        the context carries no tenant id.

        Raises:
            ValidationContextError: If ``context`` is None
            ConfigurationError: If the runtime has no scope provider
        """
        if context is None:
            raise ValidationContextError(
                f"A ValidationContext is required to validate {check.entity_kind}"
            )
        if not context.tenant_id:
            return ValidationResult.fail([missing_tenant_issue(context)], duration_ms=0.0, context=context)
        if self.scope_provider is None:
            raise ConfigurationError("validate_async_with_rls requires a tenant scope provider")

        start = time.perf_counter()
        try:
            async with self.scope_provider.scope(
                context.tenant_id,
                actor_id=context.actor_id,
                roles=tuple(roles),
                correlation_id=context.correlation_id,
            ):
                return await self.validate_async(check, payload, context)
        except Exception as e:
            logger.error(f"Tenant scope for {context.tenant_id} failed: {e}", exc_info=True)
            return ValidationResult.fail(
                [ValidationIssue.error(
                    "async_validation",
                    f"Async validation failed: {e}",
                    IssueCodes.ASYNC_VALIDATION_ERROR,
                    context=context,
                    exception_type=type(e).__name__,
                )],
                duration_ms=_elapsed_ms(start),
                context=context,
            )
