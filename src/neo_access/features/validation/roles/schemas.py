"""Structural schemas for role operations.

These models are the structural phase of every role validation: types,
lengths, ranges, code format and the tenant id shape. They never touch a
store.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ....config.constants import ROLE_CODE_MAX_LENGTH, ROLE_CODE_MIN_LENGTH, RoleType
from ....config.settings import get_settings
from ...authorization.services.format_validators import validate_role_code


def normalize_role_code(value: str) -> str:
    """Upper-case and check a role code with ``validate_role_code``."""
    check = validate_role_code(value)
    if not check.is_valid:
        raise ValueError(check.message)
    return check.value


def normalize_role_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("Role name cannot be empty or only whitespace")
    return name


def normalize_tenant_id(value: Any) -> str:
    """Accept a UUID or the configured system tenant id."""
    if isinstance(value, UUID):
        return str(value)
    text = str(value).strip()
    if text == get_settings().system_tenant_id:
        return text
    try:
        return str(uuid.UUID(text))
    except ValueError:
        raise ValueError("Invalid tenant ID format")


class RolePayload(BaseModel):
    """Shared configuration for role payloads."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=False)

    tenant_id: str = Field(..., description="Owning tenant (UUID, or the system tenant)")

    @field_validator("tenant_id", mode="before")
    @classmethod
    def validate_tenant_id(cls, v):
        return normalize_tenant_id(v)


class RoleCreatePayload(RolePayload):
    """Request to create a role."""

    code: str = Field(..., min_length=ROLE_CODE_MIN_LENGTH, max_length=ROLE_CODE_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    role_type: RoleType = Field(..., description="SYSTEM, CUSTOM or INHERITED")
    is_default: bool = False
    priority: int = Field(100, ge=0, le=999)
    parent_role_id: Optional[UUID] = None
    permissions: Optional[List[UUID]] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return normalize_role_code(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return normalize_role_name(v)


class RoleUpdatePayload(RolePayload):
    """Request to update a role. Only the fields present are re-validated."""

    id: UUID
    code: Optional[str] = Field(None, min_length=ROLE_CODE_MIN_LENGTH, max_length=ROLE_CODE_MAX_LENGTH)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_default: Optional[bool] = None
    priority: Optional[int] = Field(None, ge=0, le=999)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return normalize_role_code(v) if v is not None else v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return normalize_role_name(v) if v is not None else v


class RoleAssignmentPayload(RolePayload):
    """Request to assign a role to a member."""

    role_id: UUID
    member_id: UUID
    assigned_by: UUID
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v):
        # naive timestamps are taken as UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class RoleHierarchyPayload(RolePayload):
    """Request to set a role's parent."""

    role_id: UUID
    parent_role_id: UUID


class RoleDeletionPayload(RolePayload):
    """Request to delete a role."""

    role_id: UUID
    force: bool = False
