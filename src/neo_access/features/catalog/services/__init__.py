"""Catalog services: parsing, validation and compilation."""

from .catalog_compiler import CatalogCompiler, GenerationResult
from .catalog_validator import validate_catalog
from .schema_parser import load_schema, load_schema_text, parse_schema

__all__ = [
    "CatalogCompiler",
    "GenerationResult",
    "validate_catalog",
    "load_schema",
    "load_schema_text",
    "parse_schema",
]
