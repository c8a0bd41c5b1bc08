"""
Settings for neo-access.

Environment-driven configuration for the catalog compiler, the authorization
engine and the validation runtime. Every field can be overridden with a
``NEO_ACCESS_`` prefixed environment variable or a ``.env`` file.
"""
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_ROLE_LEVELS, DefaultRoles

CATALOG_PACKAGE_DIR = Path(__file__).resolve().parent.parent / "features" / "catalog"


class AccessSettings(BaseSettings):
    """Settings shared by the compiler, authorization engine and validators."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Catalog compiler input/output
    rbac_schema_path: Path = Field(default=CATALOG_PACKAGE_DIR / "rbac.schema.yml")
    output_dir: Path = Field(default=Path("generated"))
    permissions_module_name: str = Field(default="permissions.py")
    roles_module_name: str = Field(default="roles.py")
    guards_module_name: str = Field(default="guards.py")
    seed_file_name: str = Field(default="rbac_seed.sql")

    # Role hierarchy
    admin_role: str = Field(default=DefaultRoles.ADMIN)
    manager_role: str = Field(default=DefaultRoles.PROJECT_MANAGER)
    role_levels: Dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_ROLE_LEVELS))

    # Tenancy
    system_tenant_id: str = Field(default="system")
    rls_claims_setting: str = Field(default="request.jwt.claims")

    # Role validation thresholds
    long_term_assignment_days: int = Field(default=730, gt=0)
    low_priority_threshold: int = Field(default=10, ge=0)

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="simple")

    @field_validator("admin_role", "manager_role")
    @classmethod
    def _uppercase_role(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"simple", "detailed", "json"}:
            raise ValueError(f"Unsupported log format: {value}")
        return value

    def output_path(self, file_name: str, output_dir: Optional[Path] = None) -> Path:
        """Resolve an artifact file name against the configured output directory."""
        return (output_dir or self.output_dir) / file_name


@lru_cache()
def get_settings() -> AccessSettings:
    """Get cached settings instance."""
    return AccessSettings()
