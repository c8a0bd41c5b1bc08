"""Tests for role code and permission format checks."""

import pytest

from neo_access.config.constants import RESERVED_ROLE_CODES
from neo_access.features.authorization import (
    parse_permission,
    validate_permission_format,
    validate_role_code,
)


class TestValidateRoleCode:
    """Test cases for validate_role_code."""

    def test_normalizes(self):
        check = validate_role_code("  site_lead ")

        assert check.is_valid
        assert check.value == "SITE_LEAD"

    @pytest.mark.parametrize("code", ["", None, "1ROLE", "SITE-LEAD", "A", "A" * 51])
    def test_rejects_malformed(self, code):
        assert not validate_role_code(code).is_valid

    @pytest.mark.parametrize("code", sorted(RESERVED_ROLE_CODES))
    def test_rejects_reserved(self, code):
        check = validate_role_code(code.lower())

        assert not check.is_valid
        assert "reserved" in check.message


class TestPermissionFormat:
    """Test cases for parse_permission and validate_permission_format."""

    def test_parse_permission(self):
        assert parse_permission("Project.create") == ("Project", "create")

    @pytest.mark.parametrize("code", ["Project", "Project.", ".create", "Project.create.extra", ""])
    def test_parse_permission_rejects(self, code):
        with pytest.raises(ValueError):
            parse_permission(code)

    def test_valid_permission(self):
        check = validate_permission_format(" WorkOrder.soft_delete ")

        assert check.is_valid
        assert check.value == "WorkOrder.soft_delete"

    def test_unknown_action(self):
        check = validate_permission_format("Project.fly")

        assert not check.is_valid
        assert 'Invalid action "fly"' in check.message

    def test_custom_vocabulary(self):
        assert validate_permission_format("Project.fly", action_vocabulary=["fly"]).is_valid

    @pytest.mark.parametrize("code", ["project-x.read", "Project.Read", "P.read"])
    def test_rejects_bad_shapes(self, code):
        assert not validate_permission_format(code).is_valid
