"""Tests for the neo-access-rbac command line."""

import pytest
from click.testing import CliRunner

from neo_access.config.settings import get_settings
from neo_access.features.catalog import CatalogCompiler
from neo_access.features.catalog.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invalid_schema_file(tmp_path):
    path = tmp_path / "invalid.yml"
    path.write_text("permissions:\n  WORKER:\n    tasks:\n      - Task.fly\n", encoding="utf-8")
    return path


@pytest.fixture
def env_settings(monkeypatch, tmp_path, sample_schema_file):
    """Point the cached settings at the sample schema and a tmp output directory."""
    output_dir = tmp_path / "env-generated"
    monkeypatch.setenv("NEO_ACCESS_RBAC_SCHEMA_PATH", str(sample_schema_file))
    monkeypatch.setenv("NEO_ACCESS_OUTPUT_DIR", str(output_dir))
    get_settings.cache_clear()
    yield output_dir
    get_settings.cache_clear()


class TestValidateCommand:
    """Test cases for the validate command."""

    def test_valid_schema_exits_zero(self, runner, sample_schema_file):
        result = runner.invoke(cli, ["validate", "--schema", str(sample_schema_file)])

        assert result.exit_code == 0
        assert "Schema validation passed" in result.output

    def test_invalid_schema_exits_one(self, runner, invalid_schema_file):
        result = runner.invoke(cli, ["validate", "--schema", str(invalid_schema_file)])

        assert result.exit_code == 1
        assert "Task.fly" in result.output

    def test_missing_schema_exits_one(self, runner, tmp_path):
        result = runner.invoke(cli, ["validate", "--schema", str(tmp_path / "nope.yml")])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestGenerateCommand:
    """Test cases for the generate command."""

    def test_generate_writes_files(self, runner, tmp_path, sample_schema_file):
        output_dir = tmp_path / "out"
        result = runner.invoke(
            cli, ["generate", "--schema", str(sample_schema_file), "--output-dir", str(output_dir)]
        )

        assert result.exit_code == 0, result.output
        assert (output_dir / "permissions.py").is_file()
        assert (output_dir / "roles.py").is_file()
        assert (output_dir / "guards.py").is_file()
        assert (output_dir / "rbac_seed.sql").is_file()

    def test_generate_stops_on_validation_failure(self, runner, tmp_path, invalid_schema_file):
        output_dir = tmp_path / "out"
        result = runner.invoke(
            cli, ["generate", "--schema", str(invalid_schema_file), "--output-dir", str(output_dir)]
        )

        assert result.exit_code == 1
        assert not output_dir.exists()

    def test_generate_is_the_default_command(self, runner, env_settings):
        """Test invoking the group alone validates and generates from settings."""
        result = runner.invoke(cli, [])

        assert result.exit_code == 0, result.output
        assert (env_settings / "roles.py").is_file()

    def test_generate_validates_once(self, runner, tmp_path, sample_schema_file, mocker):
        """Test generate writes from the catalog it already validated."""
        validate_spy = mocker.spy(CatalogCompiler, "validate")
        load_spy = mocker.spy(CatalogCompiler, "load")

        result = runner.invoke(
            cli, ["generate", "--schema", str(sample_schema_file), "--output-dir", str(tmp_path / "out")]
        )

        assert result.exit_code == 0, result.output
        assert validate_spy.call_count == 1
        assert load_spy.call_count == 1


class TestReportOutput:
    """Test cases for the printed validation report."""

    def test_counts_by_severity(self, runner, tmp_path):
        schema = tmp_path / "unused.yml"
        schema.write_text(
            "permissions:\n  WORKER:\n    tasks:\n      - Task.read\n      - Task.write.extra\n",
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["validate", "--schema", str(schema)])

        assert "Info: 1" in result.output
