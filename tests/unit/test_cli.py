"""Tests for CLI commands."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from descriptor_transpiler.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def no_config(tmp_path: Path) -> Path:
    """Return a settings path that does not exist."""
    return tmp_path / "transpiler.toml"


class TestGenerate:
    """Tests for the generate command."""

    def test_generate(self, cli_runner, tmp_path, descriptor_file, no_config):
        """Test generating both artifacts."""
        output = tmp_path / "out"
        result = cli_runner.invoke(
            app,
            [
                "generate",
                "--config",
                str(no_config),
                "--descriptor",
                str(descriptor_file),
                "--output",
                str(output),
                "--terraform-file",
                str(output / "main.tf"),
            ],
        )

        assert result.exit_code == 0, result.output
        assert (output / "shop.k8s.yaml").exists()
        assert 'module "database-db-shop"' in (output / "main.tf").read_text()

    def test_generate_uses_overrides(self, cli_runner, tmp_path, descriptor_file, no_config):
        """Test tag and region flags reach the artifacts."""
        output = tmp_path / "out"
        result = cli_runner.invoke(
            app,
            [
                "generate",
                "-c",
                str(no_config),
                "-d",
                str(descriptor_file),
                "-o",
                str(output),
                "--terraform-file",
                str(output / "main.tf"),
                "--tag",
                "v9.9.9",
                "--region",
                "us-central1",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "shop:v9.9.9" in (output / "shop.k8s.yaml").read_text()
        assert '"us-central1"' in (output / "main.tf").read_text()

    def test_dry_run(self, cli_runner, tmp_path, descriptor_file, no_config):
        """Test dry run writes nothing."""
        output = tmp_path / "out"
        result = cli_runner.invoke(
            app,
            [
                "generate",
                "-c",
                str(no_config),
                "-d",
                str(descriptor_file),
                "-o",
                str(output),
                "--terraform-file",
                str(output / "main.tf"),
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert not output.exists()

    def test_settings_file(self, cli_runner, tmp_path, descriptor_file):
        """Test paths from transpiler.toml."""
        output = tmp_path / "from-config"
        config = tmp_path / "transpiler.toml"
        config.write_text(
            "[transpiler]\n"
            f'descriptor = "{descriptor_file.as_posix()}"\n'
            f'output_dir = "{output.as_posix()}"\n'
            f'terraform_file = "{(output / "main.tf").as_posix()}"\n'
        )

        result = cli_runner.invoke(app, ["generate", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert (output / "shop.k8s.yaml").exists()
        assert (output / "main.tf").exists()

    def test_invalid_descriptor_exits_nonzero(self, cli_runner, tmp_path, no_config):
        """Test validation errors fail the command."""
        descriptor = tmp_path / "app.yaml"
        descriptor.write_text("name: shop\nsize: huge\n")

        result = cli_runner.invoke(
            app, ["generate", "-c", str(no_config), "-d", str(descriptor), "-o", str(tmp_path)]
        )

        assert result.exit_code == 1
        assert "huge" in result.output

    def test_missing_descriptor_exits_nonzero(self, cli_runner, tmp_path, no_config):
        """Test a missing descriptor fails the command."""
        result = cli_runner.invoke(
            app, ["generate", "-c", str(no_config), "-d", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 1


class TestValidate:
    """Tests for the validate command."""

    def test_validate(self, cli_runner, descriptor_file, no_config):
        """Test a valid descriptor."""
        result = cli_runner.invoke(
            app, ["validate", "-c", str(no_config), "-d", str(descriptor_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Descriptor is valid" in result.output
        assert "postgres 16" in result.output

    def test_validate_invalid(self, cli_runner, tmp_path, no_config):
        """Test an invalid descriptor."""
        descriptor = tmp_path / "app.yaml"
        descriptor.write_text("name: [shop\n")

        result = cli_runner.invoke(app, ["validate", "-c", str(no_config), "-d", str(descriptor)])

        assert result.exit_code == 1

    @pytest.mark.parametrize(
        ("database", "message"),
        [
            ("    size: tiny\n", "invalid database size: tiny"),
            ("    version: 14\n", "invalid postgres version 14"),
        ],
    )
    def test_validate_unsupported_database(self, cli_runner, tmp_path, no_config, database, message):
        """Test a database request generate would refuse also fails validate."""
        descriptor = tmp_path / "app.yaml"
        descriptor.write_text(
            "name: shop\ndependencies:\n  database:\n    type: postgres\n" + database
        )

        result = cli_runner.invoke(app, ["validate", "-c", str(no_config), "-d", str(descriptor)])

        assert result.exit_code == 1
        assert message in result.output
        assert "Descriptor is valid" not in result.output

    def test_error_reported_once(self, cli_runner, tmp_path, no_config, caplog):
        """Test a failure is printed by the console and not logged as an error too."""
        descriptor = tmp_path / "app.yaml"
        descriptor.write_text("name: shop\nsize: enormous\n")

        with caplog.at_level(logging.DEBUG):
            result = cli_runner.invoke(
                app, ["validate", "-c", str(no_config), "-d", str(descriptor)]
            )

        assert result.exit_code == 1
        assert result.output.count("Error:") == 1
        assert not [record for record in caplog.records if record.levelno >= logging.ERROR]


class TestVersion:
    """Tests for the version option."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "descriptor-transpiler" in result.output
