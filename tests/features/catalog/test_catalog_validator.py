"""Tests for the catalog validation pass."""

import pytest

from neo_access.config.constants import ACTION_VOCABULARY, PERMISSION_CODE_PATTERN
from neo_access.core.exceptions import CatalogValidationError
from neo_access.features.catalog import (
    CatalogFindingCodes,
    FindingSeverity,
    parse_schema,
    validate_catalog,
)


def _validate(text):
    return validate_catalog(parse_schema(text))


class TestValidateCatalog:
    """Test cases for validate_catalog."""

    def test_sample_schema_is_valid(self, sample_schema_text):
        """Test the sample schema passes without errors or warnings."""
        report = _validate(sample_schema_text)

        assert report.is_valid
        assert report.errors == []
        assert report.warnings == []
        assert report.role_count == 4
        assert report.permission_count == 10

    def test_compiled_codes_follow_format_and_vocabulary(self, sample_schema_text):
        """Test every compiled code matches the code pattern and action vocabulary."""
        catalog = parse_schema(sample_schema_text)

        for permission in catalog.permissions:
            assert PERMISSION_CODE_PATTERN.match(permission.code)
            assert permission.action in ACTION_VOCABULARY

    def test_empty_schema_fails(self):
        """Test zero roles and zero permissions are fatal."""
        report = _validate("permissions:\n")

        assert not report.is_valid
        assert report.by_code(CatalogFindingCodes.NO_ROLES)
        assert report.by_code(CatalogFindingCodes.NO_PERMISSIONS)

    def test_role_without_permissions_is_a_warning(self):
        """Test an empty role does not block generation."""
        report = _validate(
            "permissions:\n"
            "  ADMIN:\n"
            "    access:\n"
            "      - Role.read\n"
            "  VIEWER:\n"
        )

        assert report.is_valid
        findings = report.by_code(CatalogFindingCodes.ROLE_WITHOUT_PERMISSIONS)
        assert [f.role for f in findings] == ["VIEWER"]
        assert findings[0].severity is FindingSeverity.WARNING

    def test_orphaned_permission_is_fatal(self):
        """Test a referenced code that defines nothing is reported as orphaned."""
        report = _validate(
            "permissions:\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read\n"
            "      - Project.\n"
        )

        assert not report.is_valid
        (finding,) = report.by_code(CatalogFindingCodes.ORPHANED_PERMISSION)
        assert finding.permissions == ("Project.",)

    def test_unused_permission_is_informational(self):
        """Test a defined code no role references is reported as unused."""
        report = _validate(
            "permissions:\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read.extra\n"
        )

        (unused,) = report.by_code(CatalogFindingCodes.UNUSED_PERMISSION)
        assert unused.severity is FindingSeverity.INFO
        assert report.infos == [unused]
        assert unused.permissions == ("Task.read",)
        # the three-segment reference itself is orphaned
        assert report.by_code(CatalogFindingCodes.ORPHANED_PERMISSION)

    def test_unknown_action_is_fatal(self):
        """Test actions outside the vocabulary block generation."""
        report = _validate("permissions:\n  WORKER:\n    tasks:\n      - Task.fly\n")

        assert not report.is_valid
        (finding,) = report.by_code(CatalogFindingCodes.UNKNOWN_ACTION)
        assert finding.permissions == ("Task.fly",)

    def test_invalid_code_format_is_fatal(self):
        """Test codes not matching the code pattern are rejected."""
        report = _validate("permissions:\n  WORKER:\n    tasks:\n      - 9Lives.read\n")

        assert not report.is_valid
        assert report.by_code(CatalogFindingCodes.INVALID_PERMISSION_CODE)

    def test_duplicate_symbol_is_fatal(self):
        """Test two codes that would share a generated constant are rejected."""
        report = _validate(
            "permissions:\n"
            "  WORKER:\n"
            "    orders:\n"
            "      - Work_Order.read\n"
            "      - WORK_ORDER.read\n"
        )

        (finding,) = report.by_code(CatalogFindingCodes.DUPLICATE_PERMISSION_SYMBOL)
        assert finding.permissions == ("Work_Order.read", "WORK_ORDER.read")

    def test_unknown_role_section_is_a_warning(self):
        """Test skipped headings are reported without failing."""
        report = _validate(
            "permissions:\n"
            "  GHOST:\n"
            "  WORKER:\n"
            "    tasks:\n"
            "      - Task.read\n"
        )

        assert report.is_valid
        (finding,) = report.by_code(CatalogFindingCodes.UNKNOWN_ROLE_SECTION)
        assert finding.role == "GHOST"

    def test_raise_for_errors(self):
        """Test fatal findings convert into CatalogValidationError."""
        report = _validate("permissions:\n")

        with pytest.raises(CatalogValidationError) as exc_info:
            report.raise_for_errors()

        assert exc_info.value.report is report
        assert "No roles found in schema" in exc_info.value.details["errors"]

    def test_raise_for_errors_passes_on_valid_report(self, sample_schema_text):
        _validate(sample_schema_text).raise_for_errors()
