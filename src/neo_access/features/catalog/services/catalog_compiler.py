"""Permission catalog compiler.

Reads the declarative schema, validates it and turns it into the generated
permission, role, guard and seed artifacts. The compiler keeps no parse
state between calls; every call works on a fresh CompiledCatalog.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ....config.constants import ROLE_VOCABULARY
from ....config.settings import AccessSettings, get_settings
from ..entities.catalog import CatalogValidationReport, CompiledCatalog
from ..generators import (
    render_guards_module,
    render_permissions_module,
    render_roles_module,
    render_seed_sql,
)
from .catalog_validator import validate_catalog
from .schema_parser import load_schema

logger = logging.getLogger(__name__)

PACKAGE_INIT = '"""Generated RBAC artifacts."""\n'


@dataclass(frozen=True)
class GenerationResult:
    """Files written by a generate run."""

    catalog: CompiledCatalog
    report: CatalogValidationReport
    written: List[Path] = field(default_factory=list)


class CatalogCompiler:
    """Compile a role/permission schema into enforcement artifacts."""

    def __init__(self, settings: Optional[AccessSettings] = None):
        self._settings = settings or get_settings()

    @property
    def settings(self) -> AccessSettings:
        return self._settings

    def schema_path(self, schema_path: Optional[Union[str, Path]] = None) -> Path:
        return Path(schema_path or self._settings.rbac_schema_path)

    def load(self, schema_path: Optional[Union[str, Path]] = None) -> CompiledCatalog:
        """Parse the schema at ``schema_path`` (configured path by default)."""
        catalog, _ = load_schema(
            self.schema_path(schema_path),
            role_vocabulary=self._role_vocabulary(),
        )
        return catalog

    def validate(self, catalog: CompiledCatalog) -> CatalogValidationReport:
        return validate_catalog(catalog)

    def render(self, catalog: CompiledCatalog, source_name: str = "rbac.schema.yml") -> Dict[str, str]:
        """Render every artifact, keyed by output file name.

        Output only depends on the catalog and settings, so rendering the
        same schema twice yields byte-identical text.
        """
        settings = self._settings
        return {
            "__init__.py": PACKAGE_INIT,
            settings.permissions_module_name: render_permissions_module(catalog, source_name),
            settings.roles_module_name: render_roles_module(
                catalog,
                source_name,
                admin_role=settings.admin_role,
                role_levels=settings.role_levels,
                permissions_module=settings.permissions_module_name,
            ),
            settings.guards_module_name: render_guards_module(
                catalog,
                source_name,
                role_levels=settings.role_levels,
                roles_module=settings.roles_module_name,
            ),
            settings.seed_file_name: render_seed_sql(
                catalog, source_name, admin_role=settings.admin_role
            ),
        }

    def generate(
        self,
        schema_path: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> GenerationResult:
        """Validate the schema and write all artifacts.

        Raises:
            CatalogValidationError: If validation reports fatal findings;
                nothing is written in that case
        """
        path = self.schema_path(schema_path)
        catalog = self.load(path)
        return self.write(catalog, self.validate(catalog), source_name=path.name, output_dir=output_dir)

    def write(
        self,
        catalog: CompiledCatalog,
        report: CatalogValidationReport,
        source_name: str = "rbac.schema.yml",
        output_dir: Optional[Union[str, Path]] = None,
    ) -> GenerationResult:
        """Write the artifacts of an already validated catalog.

        Raises:
            CatalogValidationError: If ``report`` has fatal findings
        """
        report.raise_for_errors()

        target_dir = Path(output_dir) if output_dir else self._settings.output_dir
        target_dir.mkdir(parents=True, exist_ok=True)

        written: List[Path] = []
        for file_name, content in self.render(catalog, source_name=source_name).items():
            destination = target_dir / file_name
            destination.write_text(content, encoding="utf-8")
            written.append(destination)
            logger.info(f"Generated: {destination}")

        logger.info(
            f"RBAC files generated: {len(catalog.roles)} roles, "
            f"{len(catalog.permissions)} permissions, {len(written)} files"
        )
        return GenerationResult(catalog=catalog, report=report, written=written)

    def _role_vocabulary(self):
        # Configured roles extend the platform vocabulary
        return tuple(dict.fromkeys([*ROLE_VOCABULARY, *self._settings.role_levels]))
