"""Permission value objects for the catalog feature.

A permission is identified by its ``resource.action`` code. Seed statement
parameters are identified by a structured SeedKey and only turned into a
parameter name when the seed script is serialized.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ....core.exceptions import SchemaError


@dataclass(frozen=True, order=True)
class PermissionKey:
    """Immutable ``(resource, action)`` identity of a permission."""

    resource: str
    action: str

    def __post_init__(self):
        if not self.resource or not self.action:
            raise SchemaError(
                f"Both resource and action must be non-empty, got: {self.resource}.{self.action}"
            )

    @classmethod
    def from_code(cls, code: str) -> "PermissionKey":
        """Build a key from a ``resource.action`` code.

        Only the first two dot-separated segments are used, so a malformed
        code such as ``a.b.c`` yields the key ``a.b``.
        """
        parts = code.split(".")
        if len(parts) < 2:
            raise SchemaError(f"Permission code must be in format 'resource.action', got: {code}")
        return cls(resource=parts[0], action=parts[1])

    @property
    def code(self) -> str:
        return f"{self.resource}.{self.action}"

    @property
    def symbol(self) -> str:
        """Constant name used in generated modules, e.g. ``PROJECT_CREATE``."""
        return f"{self.resource.upper()}_{self.action.upper()}"

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class PermissionDefinition:
    """Canonical catalog entry created by the first occurrence of a code."""

    key: PermissionKey
    name: str
    description: str
    domain: str = "general"

    @property
    def code(self) -> str:
        return self.key.code

    @property
    def resource(self) -> str:
        return self.key.resource

    @property
    def action(self) -> str:
        return self.key.action

    @property
    def symbol(self) -> str:
        return self.key.symbol

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "domain": self.domain,
        }

    def __str__(self) -> str:
        return f"Permission({self.code})"


class SeedKeyKind(str, Enum):
    """Kinds of parameters bound by the seed script."""

    TENANT = "tenant"
    PERMISSION = "permission"
    ROLE = "role"
    ROLE_PERMISSION = "role_permission"


@dataclass(frozen=True)
class SeedKey:
    """Structured identity of a seed statement parameter."""

    kind: SeedKeyKind
    role: Optional[str] = None
    permission: Optional[PermissionKey] = None

    def __post_init__(self):
        needs_role = self.kind in (SeedKeyKind.ROLE, SeedKeyKind.ROLE_PERMISSION)
        needs_permission = self.kind in (SeedKeyKind.PERMISSION, SeedKeyKind.ROLE_PERMISSION)
        if needs_role and not self.role:
            raise ValueError(f"Seed key of kind {self.kind.value} requires a role")
        if needs_permission and self.permission is None:
            raise ValueError(f"Seed key of kind {self.kind.value} requires a permission")

    @classmethod
    def tenant(cls) -> "SeedKey":
        return cls(SeedKeyKind.TENANT)

    @classmethod
    def for_permission(cls, permission: PermissionKey) -> "SeedKey":
        return cls(SeedKeyKind.PERMISSION, permission=permission)

    @classmethod
    def for_role(cls, role: str) -> "SeedKey":
        return cls(SeedKeyKind.ROLE, role=role)

    @classmethod
    def for_role_permission(cls, role: str, permission: PermissionKey) -> "SeedKey":
        return cls(SeedKeyKind.ROLE_PERMISSION, role=role, permission=permission)

    @property
    def param_name(self) -> str:
        """Bind parameter name for the seed script."""
        if self.kind is SeedKeyKind.TENANT:
            return "tenantId"
        if self.kind is SeedKeyKind.ROLE:
            return f"role_{self.role.lower()}_id"
        resource = self.permission.resource.lower()
        action = self.permission.action.lower()
        if self.kind is SeedKeyKind.PERMISSION:
            return f"permission_{resource}_{action}_id"
        return f"rp_{self.role.lower()}_{resource}_{action}"

    @property
    def placeholder(self) -> str:
        return f":{self.param_name}"
