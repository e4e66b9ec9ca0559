"""
Run settings for the transpiler.

Settings are loaded from the [transpiler] section of transpiler.toml.
Every field has a default, so the file is optional.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .chart.config import REGISTRY_PREFIX
from .core.errors import ParseError, ValidationError

SETTINGS_FILE = "transpiler.toml"
SETTINGS_SECTION = "transpiler"


class TranspilerSettings(BaseModel):
    """Input and output locations plus generation parameters."""

    descriptor: Path = Path("examples/app.yaml")
    output_dir: Path = Path("dist")
    terraform_file: Path = Path("dist/main.tf")
    image_tag: str = "v1.0.0"
    region: str = "europe-west2"
    registry: str = REGISTRY_PREFIX

    model_config = ConfigDict(extra="forbid")


def load_settings(toml_path: Path) -> TranspilerSettings:
    """
    Load settings from a TOML file.

    Args:
        toml_path: Path to transpiler.toml

    Returns:
        TranspilerSettings with values from the file or defaults

    Raises:
        ParseError: If the file is not valid TOML
        ValidationError: If a setting is unknown or has the wrong type
    """
    if not toml_path.exists():
        return TranspilerSettings()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"failed to parse {toml_path}: {e}") from e

    section = data.get(SETTINGS_SECTION, {})
    if not section:
        return TranspilerSettings()

    return _parse_settings(section, toml_path)


def _parse_settings(data: dict[str, Any], source: Path) -> TranspilerSettings:
    try:
        return TranspilerSettings.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"invalid settings in {source}: {problems}") from e
