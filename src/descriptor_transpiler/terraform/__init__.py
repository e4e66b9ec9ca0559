"""
Terraform generation: database module configuration and HCL output.
"""

from .config import (
    ALLOWED_POSTGRES_VERSIONS,
    DATABASE_MODULE_SOURCE,
    DatabaseConfig,
    TerraformConfiguration,
    TerraformOption,
    build_hcl,
    new_terraform_configuration,
    with_database,
    write_terraform,
)
from .hcl import HclBlock, HclFile

__all__ = [
    "ALLOWED_POSTGRES_VERSIONS",
    "DATABASE_MODULE_SOURCE",
    "DatabaseConfig",
    "TerraformConfiguration",
    "TerraformOption",
    "new_terraform_configuration",
    "with_database",
    "build_hcl",
    "write_terraform",
    "HclBlock",
    "HclFile",
]
