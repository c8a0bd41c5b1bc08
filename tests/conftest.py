"""Pytest configuration and fixtures for neo-access tests."""

from uuid import uuid4

import pytest

from neo_access.config.settings import AccessSettings
from neo_access.features.validation import (
    AsyncValidationRuntime,
    InMemoryTenantScopeProvider,
    InMemoryValidationStore,
    ValidationContext,
)


SAMPLE_SCHEMA = """\
# Sample schema used across the catalog tests
version: 1

permissions:
  ADMIN:
    access_control:
      - Role.read
      - Role.assign
  PROJECT_MANAGER:
    projects:
      - Project.read
      - Project.create       # first occurrence defines it
      - Project.update
    tasks:
      - Task.read
      - Task.assign
  WORKER:
    projects:
      - Project.read
    tasks:
      - Task.read
      - Task.complete
  VIEWER:
    reporting:
      - Report.read
      - Report.export
"""


@pytest.fixture
def sample_schema_text():
    """Small valid RBAC schema."""
    return SAMPLE_SCHEMA


@pytest.fixture
def sample_schema_file(tmp_path, sample_schema_text):
    """Sample schema written to disk."""
    path = tmp_path / "rbac.schema.yml"
    path.write_text(sample_schema_text, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path):
    """Settings writing artifacts below the test's tmp_path."""
    return AccessSettings(output_dir=tmp_path / "generated")


@pytest.fixture
def tenant_a():
    return str(uuid4())


@pytest.fixture
def tenant_b():
    return str(uuid4())


@pytest.fixture
def memory_store():
    """Empty in-memory validation store."""
    return InMemoryValidationStore()


@pytest.fixture
def scope_provider():
    """Tenant scope provider that records acquisitions and releases."""
    return InMemoryTenantScopeProvider()


@pytest.fixture
def runtime(memory_store, scope_provider):
    """Validation runtime over the in-memory store."""
    return AsyncValidationRuntime(memory_store, scope_provider=scope_provider)


@pytest.fixture
def make_context():
    """Factory for validation contexts."""
    def _make(tenant_id=None, actor_id=None, **kwargs):
        return ValidationContext(
            tenant_id=tenant_id,
            actor_id=actor_id or str(uuid4()),
            correlation_id=kwargs.pop("correlation_id", "test-correlation"),
            **kwargs,
        )
    return _make
