"""Tests for artifact generation and the catalog compiler."""

import importlib
from uuid import uuid4

import pytest

from neo_access.core.exceptions import CatalogValidationError
from neo_access.features.authorization.guards import PermissionGate, RoleLevelGate
from neo_access.features.catalog import CatalogCompiler, parse_schema
from neo_access.features.catalog.generators import (
    render_permissions_module,
    render_roles_module,
    render_seed_sql,
)


def _import_generated(monkeypatch, tmp_path, compiler, schema_file):
    """Generate into a uniquely named package below tmp_path and import it."""
    package = f"rbac_generated_{uuid4().hex}"
    compiler.generate(schema_file, tmp_path / package)
    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()
    return (
        importlib.import_module(f"{package}.permissions"),
        importlib.import_module(f"{package}.roles"),
        importlib.import_module(f"{package}.guards"),
    )


class TestRenderers:
    """Test cases for the artifact renderers."""

    def test_rendering_is_deterministic(self, sample_schema_text, settings):
        """Test the same schema renders byte-identical artifacts."""
        compiler = CatalogCompiler(settings)

        first = compiler.render(parse_schema(sample_schema_text))
        second = compiler.render(parse_schema(sample_schema_text))

        assert first == second

    def test_permissions_module(self, sample_schema_text):
        """Test the permission catalog is keyed by symbol and grouped by domain."""
        source = render_permissions_module(parse_schema(sample_schema_text), "rbac.schema.yml")

        assert '"PROJECT_CREATE": "Project.create",' in source
        assert "# PROJECTS" in source
        assert "PERMISSION_CATEGORIES" in source
        assert '"ACCESS_CONTROL": (' in source
        assert "Do not edit by hand" in source

    def test_roles_module_admin_references_catalog(self, sample_schema_text):
        """Test the admin entry follows the catalog rather than an explicit list."""
        source = render_roles_module(
            parse_schema(sample_schema_text),
            "rbac.schema.yml",
            admin_role="ADMIN",
            role_levels={"ADMIN": 100, "WORKER": 50},
        )

        assert '"ADMIN": tuple(PERMISSIONS.values()),' in source
        assert '"PROJECT_MANAGER": "Project Manager",' in source
        assert '"WORKER": 50,' in source
        # roles without a configured level get 0
        assert '"VIEWER": 0,' in source

    def test_seed_sql(self, sample_schema_text):
        """Test seed statements are parameterized and idempotent."""
        catalog = parse_schema(sample_schema_text)
        sql = render_seed_sql(catalog, "rbac.schema.yml", admin_role="ADMIN")

        assert sql.count('INSERT INTO "Permission"') == 10
        assert sql.count('INSERT INTO "Role" ') == 4
        # admin is linked to the whole catalog: 10 + 5 + 3 + 2
        assert sql.count('INSERT INTO "RolePermission"') == 20
        assert 'ON CONFLICT ("code") DO NOTHING' in sql
        assert 'ON CONFLICT ("tenantId", "code") DO NOTHING' in sql
        assert ":tenantId" in sql
        assert ":permission_project_create_id" in sql
        assert ":rp_admin_project_create" in sql
        assert ":role_project_manager_id" in sql

    def test_seed_sql_escapes_literals(self):
        catalog = parse_schema("permissions:\n  WORKER:\n    crew's tasks:\n      - Task.read\n")
        sql = render_seed_sql(catalog, "rbac.schema.yml", admin_role="ADMIN")

        assert "'crew''s tasks'" in sql


class TestCatalogCompiler:
    """Test cases for CatalogCompiler.generate and write."""

    def test_generate_writes_all_artifacts(self, sample_schema_file, settings):
        """Test every artifact lands in the output directory."""
        result = CatalogCompiler(settings).generate(sample_schema_file)

        names = sorted(path.name for path in result.written)
        assert names == ["__init__.py", "guards.py", "permissions.py", "rbac_seed.sql", "roles.py"]
        assert all(path.parent == settings.output_dir for path in result.written)
        assert result.report.is_valid

    def test_generate_refuses_invalid_schema(self, tmp_path, settings):
        """Test nothing is written when validation fails."""
        schema = tmp_path / "bad.yml"
        schema.write_text("permissions:\n  WORKER:\n    tasks:\n      - Task.fly\n", encoding="utf-8")

        with pytest.raises(CatalogValidationError):
            CatalogCompiler(settings).generate(schema)

        assert not settings.output_dir.exists()

    def test_write_reuses_validated_catalog(self, tmp_path, sample_schema_file, settings):
        """Test write emits artifacts from a catalog and report validated earlier."""
        compiler = CatalogCompiler(settings)
        catalog = compiler.load(sample_schema_file)
        report = compiler.validate(catalog)

        result = compiler.write(catalog, report, source_name="tenant.schema.yml")

        assert result.report is report
        assert result.catalog is catalog
        assert "tenant.schema.yml" in (settings.output_dir / "rbac_seed.sql").read_text(encoding="utf-8")

    def test_write_refuses_fatal_report(self, tmp_path, settings):
        """Test write raises before touching the output directory."""
        schema = tmp_path / "bad.yml"
        schema.write_text("permissions:\n  WORKER:\n    tasks:\n      - Task.fly\n", encoding="utf-8")
        compiler = CatalogCompiler(settings)
        catalog = compiler.load(schema)

        with pytest.raises(CatalogValidationError):
            compiler.write(catalog, compiler.validate(catalog))

        assert not settings.output_dir.exists()

    def test_role_matrix_admin_superset(self, sample_schema_text):
        """Test the admin row equals the full catalog in the compiled matrix."""
        catalog = parse_schema(sample_schema_text)
        matrix = catalog.role_matrix("ADMIN")

        assert matrix["ADMIN"] == catalog.permission_codes
        assert "Project.create" in matrix["ADMIN"]
        assert matrix["WORKER"] == catalog.role_permissions["WORKER"]

    def test_generated_admin_follows_new_permissions(
        self, monkeypatch, tmp_path, sample_schema_text, settings
    ):
        """Test adding a permission grants it to admin without editing the admin list."""
        compiler = CatalogCompiler(settings)
        schema = tmp_path / "rbac.schema.yml"
        schema.write_text(sample_schema_text, encoding="utf-8")

        permissions, roles, _ = _import_generated(monkeypatch, tmp_path, compiler, schema)
        assert roles.ROLE_PERMISSIONS["ADMIN"] == tuple(permissions.PERMISSIONS.values())
        assert "Invoice.approve" not in roles.ROLE_PERMISSIONS["ADMIN"]

        extended = sample_schema_text + "    billing:\n      - Invoice.approve\n"
        schema.write_text(extended, encoding="utf-8")

        permissions, roles, _ = _import_generated(monkeypatch, tmp_path, compiler, schema)
        assert "Invoice.approve" in roles.ROLE_PERMISSIONS["ADMIN"]
        assert roles.ROLE_PERMISSIONS["ADMIN"] == tuple(permissions.PERMISSIONS.values())
        assert roles.ROLE_HIERARCHY["PROJECT_MANAGER"] == 75

    def test_generated_guards(self, monkeypatch, tmp_path, sample_schema_file, settings):
        """Test the generated guard factories build the shared gates."""
        _, _, guards = _import_generated(monkeypatch, tmp_path, CatalogCompiler(settings), sample_schema_file)

        gate = guards.require_role("WORKER")
        assert isinstance(gate, RoleLevelGate)
        assert gate.hierarchy.level("WORKER") == 50
        assert isinstance(guards.require_permission("Project.read"), PermissionGate)
        assert guards.ROLE_MINIMUM_LEVELS["ADMIN"] == 100

        with pytest.raises(KeyError):
            guards.require_role("ACCOUNTANT")
