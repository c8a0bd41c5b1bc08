"""Role hierarchy: numeric privilege levels plus the named top and manager tiers."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional

from ....config.constants import DEFAULT_ROLE_LEVELS, DefaultRoles
from ....config.settings import AccessSettings


@dataclass(frozen=True)
class RoleHierarchy:
    """Higher level = more privileged. Roles outside the table have level 0."""

    levels: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_ROLE_LEVELS))
    admin_role: str = DefaultRoles.ADMIN
    manager_role: str = DefaultRoles.PROJECT_MANAGER

    def __post_init__(self):
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))

    @classmethod
    def from_settings(cls, settings: AccessSettings) -> "RoleHierarchy":
        return cls(
            levels=settings.role_levels,
            admin_role=settings.admin_role,
            manager_role=settings.manager_role,
        )

    def level(self, role: str) -> int:
        return self.levels.get(role, 0)

    def max_level(self, roles: Iterable[str]) -> int:
        return max((self.level(role) for role in roles), default=0)

    def highest_role(self, roles: Iterable[str]) -> Optional[str]:
        """Most privileged role of ``roles``; ties keep the first one given."""
        best: Optional[str] = None
        for role in roles:
            if best is None or self.level(role) > self.level(best):
                best = role
        return best

    def is_at_least(self, held_roles: Iterable[str], required_role: str) -> bool:
        held = list(held_roles)
        if not held:
            return False
        return self.max_level(held) >= self.level(required_role)

    @property
    def manager_forbidden_roles(self) -> FrozenSet[str]:
        """Roles a manager-tier performer may never grant."""
        return frozenset({self.admin_role, self.manager_role})
