"""
Terraform configuration builder.

A TerraformConfiguration holds the target region and, when requested,
the managed Postgres database to attach. It compiles to an HCL file with
zero or one ``module`` block.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..core.errors import RenderError, ValidationError
from ..core.sizes import SizeTier, resolve_database_class
from .hcl import HclFile

logger = logging.getLogger(__name__)

DATABASE_MODULE_SOURCE = "./modules/database"
ALLOWED_POSTGRES_VERSIONS = frozenset({15, 16, 17})


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Managed database settings.

    Attributes:
        name: Database name ("db-<app>")
        size: Machine class (e.g. "db-g1-small")
        version: Engine version tag (e.g. "POSTGRES_17")
    """

    name: str
    size: str
    version: str


@dataclass
class TerraformConfiguration:
    """Region plus an optional database."""

    region: str
    database: DatabaseConfig | None = None


TerraformOption = Callable[[TerraformConfiguration], None]


def with_database(name: str, size: SizeTier | str, version: int) -> TerraformOption:
    """
    Attach a Postgres database.

    Raises (when applied):
        ValidationError: If the size has no database machine class, or the
            version is not 15, 16, or 17
    """

    def apply(config: TerraformConfiguration) -> None:
        machine_class = resolve_database_class(size)

        if version not in ALLOWED_POSTGRES_VERSIONS:
            allowed = ", ".join(str(v) for v in sorted(ALLOWED_POSTGRES_VERSIONS))
            raise ValidationError(f"invalid postgres version {version}: must be one of {allowed}")

        config.database = DatabaseConfig(
            name=f"db-{name}",
            size=machine_class,
            version=f"POSTGRES_{version}",
        )
        logger.debug("Database %s: %s %s", config.database.name, machine_class, version)

    return apply


def new_terraform_configuration(region: str, *options: TerraformOption) -> TerraformConfiguration:
    """
    Create a TerraformConfiguration.

    Args:
        region: Cloud region for generated resources
        *options: Options applied left to right; the first failure propagates

    Raises:
        ValidationError: If the region is empty or an option fails
    """
    if not region:
        raise ValidationError("region cannot be empty")

    config = TerraformConfiguration(region=region)
    for option in options:
        option(config)
    return config


def build_hcl(config: TerraformConfiguration) -> HclFile:
    """Compile the configuration into an HCL document."""
    hcl_file = HclFile()
    if config.database is not None:
        _append_database_module(hcl_file, config.region, config.database)
    return hcl_file


def _append_database_module(hcl_file: HclFile, region: str, database: DatabaseConfig) -> None:
    module = hcl_file.append_block("module", [f"database-{database.name}"])
    module.set_attribute("source", DATABASE_MODULE_SOURCE)
    module.append_newline()
    module.set_attribute("name", database.name)
    module.set_attribute("region", region)
    module.set_attribute("size", database.size)
    module.set_attribute("db_version", database.version)


def write_terraform(config: TerraformConfiguration, path: Path) -> Path:
    """
    Write the compiled configuration to a file.

    The file is written even when there is no database, leaving it empty.

    Raises:
        RenderError: If the file cannot be written
    """
    content = build_hcl(config).to_bytes()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as e:
        raise RenderError(f"failed to write terraform file {path}: {e}") from e

    logger.info("Wrote terraform file %s", path)
    return path
