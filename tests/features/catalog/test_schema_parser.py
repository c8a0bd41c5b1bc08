"""Tests for the RBAC schema parser."""

import pytest

from neo_access.core.exceptions import SchemaNotFoundError
from neo_access.features.catalog import PermissionKey, load_schema, parse_schema


class TestParseSchema:
    """Test cases for parse_schema."""

    def test_roles_in_first_seen_order(self, sample_schema_text):
        """Test roles keep the order of their headings."""
        catalog = parse_schema(sample_schema_text)

        assert catalog.roles == ("ADMIN", "PROJECT_MANAGER", "WORKER", "VIEWER")

    def test_first_occurrence_defines_permission(self, sample_schema_text):
        """Test repeated codes create a single catalog entry."""
        catalog = parse_schema(sample_schema_text)

        assert len(catalog.permissions) == 10
        assert catalog.permission_codes.count("Project.read") == 1
        # Project.read first appears under PROJECT_MANAGER/projects
        assert catalog.get_permission("Project.read").domain == "projects"
        assert catalog.get_permission("Task.complete").domain == "tasks"

    def test_role_permission_lists(self, sample_schema_text):
        """Test every code is recorded against the current role."""
        catalog = parse_schema(sample_schema_text)

        assert catalog.role_permissions["WORKER"] == ("Project.read", "Task.read", "Task.complete")
        assert catalog.role_permissions["ADMIN"] == ("Role.read", "Role.assign")

    def test_trailing_comments_ignored(self, sample_schema_text):
        """Test comments after an item do not leak into the code."""
        catalog = parse_schema(sample_schema_text)

        assert "Project.create" in catalog.permission_codes
        assert all("#" not in code for code in catalog.permission_codes)

    def test_generated_names_and_descriptions(self, sample_schema_text):
        """Test names come from the action tables."""
        catalog = parse_schema(sample_schema_text)
        permission = catalog.get_permission("Project.create")

        assert permission.name == "Create Project"
        assert permission.description == "Create new project records within tenant scope"
        assert permission.symbol == "PROJECT_CREATE"

    def test_unknown_action_name_falls_back_to_capitalized_action(self):
        """Test unknown actions get a generic name."""
        catalog = parse_schema("permissions:\n  WORKER:\n    misc:\n      - WorkOrder.juggle\n")

        assert catalog.get_permission("WorkOrder.juggle").name == "Juggle Work Order"

    def test_duplicates_within_a_role_are_collapsed(self):
        """Test a code listed twice under one role is recorded once."""
        text = (
            "permissions:\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read\n"
            "    again:\n"
            "      - Task.read\n"
        )
        catalog = parse_schema(text)

        assert catalog.role_permissions["WORKER"] == ("Task.read",)

    def test_unknown_role_heading_is_skipped(self):
        """Test headings outside the vocabulary are reported and ignored."""
        text = (
            "permissions:\n"
            "  ACCOUNTANT:\n"
            "    finance:\n"
            "      - Invoice.read\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read\n"
        )
        catalog = parse_schema(text)

        assert catalog.roles == ("WORKER",)
        assert "Invoice.read" not in catalog.permission_codes
        assert len(catalog.skipped_sections) == 1
        assert catalog.skipped_sections[0].heading == "ACCOUNTANT"
        assert catalog.skipped_sections[0].line_number == 2

    def test_custom_role_vocabulary(self):
        """Test the accepted role headings can be extended."""
        text = "permissions:\n  ACCOUNTANT:\n    finance:\n      - Invoice.read\n"
        catalog = parse_schema(text, role_vocabulary=["ACCOUNTANT"])

        assert catalog.roles == ("ACCOUNTANT",)

    def test_other_top_level_key_closes_section(self):
        """Test parsing stops at the next top-level key."""
        text = (
            "permissions:\n"
            "  ADMIN:\n"
            "    access:\n"
            "      - Role.read\n"
            "metadata:\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read\n"
        )
        catalog = parse_schema(text)

        assert catalog.roles == ("ADMIN",)
        assert catalog.permission_codes == ("Role.read",)

    def test_eight_space_items_and_default_domain(self):
        """Test deeper items are accepted and items before a domain fall into general."""
        text = (
            "permissions:\n"
            "  WORKER:\n"
            "      - Task.read\n"
            "    tasks:\n"
            "        - Task.complete\n"
        )
        catalog = parse_schema(text)

        assert catalog.get_permission("Task.read").domain == "general"
        assert catalog.get_permission("Task.complete").domain == "tasks"

    def test_catalog_is_immutable(self, sample_schema_text):
        """Test the compiled role mapping cannot be mutated."""
        catalog = parse_schema(sample_schema_text)

        with pytest.raises(TypeError):
            catalog.role_permissions["WORKER"] = ()

    def test_same_text_same_catalog(self, sample_schema_text):
        """Test parsing is a pure function of the text."""
        assert parse_schema(sample_schema_text) == parse_schema(sample_schema_text)


class TestLoadSchema:
    """Test cases for reading the schema from disk."""

    def test_load_schema(self, sample_schema_file):
        """Test loading returns the catalog and the resolved path."""
        catalog, path = load_schema(sample_schema_file)

        assert path == sample_schema_file.resolve()
        assert len(catalog.roles) == 4

    def test_missing_schema(self, tmp_path):
        """Test a missing file raises SchemaNotFoundError."""
        with pytest.raises(SchemaNotFoundError) as exc_info:
            load_schema(tmp_path / "missing.yml")

        assert "missing.yml" in exc_info.value.details["path"]


class TestPermissionKey:
    """Test cases for PermissionKey."""

    def test_from_code_uses_first_two_segments(self):
        key = PermissionKey.from_code("Project.create.extra")

        assert key == PermissionKey("Project", "create")
        assert key.symbol == "PROJECT_CREATE"
