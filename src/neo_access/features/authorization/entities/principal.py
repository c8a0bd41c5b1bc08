"""Authenticated principal supplied by the host application."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple


@dataclass(frozen=True)
class Principal:
    """Caller identity, tenant and held roles/permissions.

    Token decoding happens upstream; the host stores an instance on
    ``request.state.principal`` for the FastAPI gates to read.
    """

    user_id: Optional[str]
    tenant_id: Optional[str]
    roles: Tuple[str, ...] = ()
    permissions: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "roles", tuple(self.roles or ()))
        object.__setattr__(self, "permissions", frozenset(self.permissions or ()))

    @classmethod
    def of(
        cls,
        user_id: Optional[str],
        tenant_id: Optional[str],
        roles: Iterable[str] = (),
        permissions: Iterable[str] = (),
    ) -> "Principal":
        return cls(user_id=user_id, tenant_id=tenant_id, roles=tuple(roles), permissions=frozenset(permissions))

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id) and bool(self.tenant_id)
