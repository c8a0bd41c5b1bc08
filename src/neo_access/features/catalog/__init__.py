"""Permission catalog compiler feature.

Parses the declarative role/permission schema, validates it and generates
the permission, role, guard and seed artifacts consumed at runtime.
"""

from .entities import (
    CatalogFinding,
    CatalogFindingCodes,
    CatalogValidationReport,
    CompiledCatalog,
    FindingSeverity,
    PermissionDefinition,
    PermissionKey,
    SeedKey,
    SeedKeyKind,
    SkippedSection,
)
from .services import (
    CatalogCompiler,
    GenerationResult,
    load_schema,
    load_schema_text,
    parse_schema,
    validate_catalog,
)

__all__ = [
    "CatalogFinding",
    "CatalogFindingCodes",
    "CatalogValidationReport",
    "CompiledCatalog",
    "FindingSeverity",
    "PermissionDefinition",
    "PermissionKey",
    "SeedKey",
    "SeedKeyKind",
    "SkippedSection",
    "CatalogCompiler",
    "GenerationResult",
    "load_schema",
    "load_schema_text",
    "parse_schema",
    "validate_catalog",
]
