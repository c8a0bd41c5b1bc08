"""Catalog entities."""

from .catalog import (
    CatalogFinding,
    CatalogFindingCodes,
    CatalogValidationReport,
    CompiledCatalog,
    FindingSeverity,
    SkippedSection,
)
from .permission import PermissionDefinition, PermissionKey, SeedKey, SeedKeyKind

__all__ = [
    "CatalogFinding",
    "CatalogFindingCodes",
    "CatalogValidationReport",
    "CompiledCatalog",
    "FindingSeverity",
    "SkippedSection",
    "PermissionDefinition",
    "PermissionKey",
    "SeedKey",
    "SeedKeyKind",
]
